import pytest

from scribe.application.utils.numbers import round_half_up, round_half_up_places


@pytest.mark.parametrize(
    "value, expected",
    [(12.5, 13), (2.5, 3), (2.4999, 2), (14.8, 15), (-2.5, -2), (0, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (2.125, 2.13),
        (1.375, 1.38),
        (2.5 - 0.2, 2.3),
        (2.0 - 0.15, 1.85),
        (2.675, 2.67),  # stored as 2.67499999...
        (1.3, 1.3),
    ],
)
def test_round_half_up_places(value, expected):
    assert round_half_up_places(value, 2) == expected


def test_round_half_up_places_other_precision():
    assert round_half_up_places(0.5, 0) == 1.0
    assert round_half_up_places(1.0625, 3) == 1.063
