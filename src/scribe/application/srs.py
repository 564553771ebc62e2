"""
Spaced-repetition scheduling for vocabulary reviews.

A simplified SM-2 variant:
1. Ease factor moves by a fixed step per rating, floored at 1.3
2. "again" resets the interval to one day
3. New or very young cards graduate through fixed steps
4. Mature cards grow by interval * ease * rating modifier

Every function is pure; "now" is always passed in by the caller.
"""

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import Any, TypeVar

from scribe.application.utils.numbers import round_half_up, round_half_up_places
from scribe.domain.constants import (
    EASE_ADJUSTMENTS,
    GRADUATION_STEPS,
    INTERVAL_MODIFIERS,
    MIN_EASE_FACTOR,
    MIN_INTERVAL,
)
from scribe.domain.models import Rating, SRSUpdate, VocabularyReviewState

T = TypeVar("T")

# (singular, plural) templates per unit, and the sub-day label
_INTERVAL_LABELS: dict[str, dict[str, Any]] = {
    "en": {
        "under_day": "< 1 day",
        "day": ("{n} day", "{n} days"),
        "week": ("{n} week", "{n} weeks"),
        "month": ("{n} month", "{n} months"),
        "year": ("{n} year", "{n} years"),
    },
    "ja": {
        "under_day": "< 1日",
        "day": ("{n}日", "{n}日"),
        "week": ("{n}週間", "{n}週間"),
        "month": ("{n}ヶ月", "{n}ヶ月"),
        "year": ("{n}年", "{n}年"),
    },
}

SUPPORTED_LANGS = tuple(_INTERVAL_LABELS)


def schedule(state: VocabularyReviewState, rating: Rating, now: datetime) -> SRSUpdate:
    """
    Compute the next review state for a rating given at `now`.

    Args:
        state: Current review state of the item.
        rating: The learner's self-assessment.
        now: Review time; the new due date is `now + interval` days.

    Returns:
        SRSUpdate replacing the item's mutable review fields.
    """
    rating = Rating(rating)
    new_ease = max(MIN_EASE_FACTOR, state.ease_factor + EASE_ADJUSTMENTS[rating.value])

    if rating is Rating.AGAIN:
        new_interval = MIN_INTERVAL
    elif state.review_count == 0 or state.interval <= 1:
        new_interval = GRADUATION_STEPS[rating.value]
    else:
        new_interval = round_half_up(
            state.interval * new_ease * INTERVAL_MODIFIERS[rating.value]
        )
        new_interval = max(MIN_INTERVAL, new_interval)

    return SRSUpdate(
        ease_factor=round_half_up_places(new_ease, 2),
        interval=new_interval,
        next_review_at=now + timedelta(days=new_interval),
        review_count=state.review_count + 1,
        last_reviewed_at=now,
    )


def preview_all_ratings(
    state: VocabularyReviewState, now: datetime, lang: str = "en"
) -> dict[Rating, str]:
    """
    Label the interval each rating would produce, without changing `state`.
    """
    return {
        rating: format_interval(schedule(state, rating, now).interval, lang=lang)
        for rating in Rating
    }


def is_due(state: VocabularyReviewState, now: datetime) -> bool:
    """True if the item was never reviewed or its due date has passed."""
    if state.next_review_at is None:
        return True
    return now >= state.next_review_at


def sort_by_priority(
    items: Iterable[T],
    key: Callable[[T], VocabularyReviewState] | None = None,
) -> list[T]:
    """
    Order items by review urgency.

    Never-reviewed items come first, oldest `created_at` first. Reviewed items
    follow by `next_review_at` ascending. The sort is stable.

    Args:
        items: Review states, or objects holding one.
        key: Extracts the review state from an item. Defaults to the item itself.
    """
    get_state = key or (lambda item: item)

    def priority(item: T) -> tuple[int, datetime]:
        state = get_state(item)
        if state.next_review_at is None:
            return (0, state.created_at)
        return (1, state.next_review_at)

    return sorted(items, key=priority)


def due_entries(
    items: Iterable[T],
    now: datetime,
    limit: int | None = None,
    key: Callable[[T], VocabularyReviewState] | None = None,
) -> list[T]:
    """
    Select the items due at `now`, most urgent first.

    Args:
        items: Review states, or objects holding one.
        now: Reference time for due-ness.
        limit: Cap on the number of items returned.
        key: Extracts the review state from an item. Defaults to the item itself.
    """
    get_state = key or (lambda item: item)
    due = [item for item in items if is_due(get_state(item), now)]
    ordered = sort_by_priority(due, key=key)
    if limit is not None:
        ordered = ordered[:limit]
    return ordered


def format_interval(days: float, lang: str = "en") -> str:
    """
    Render a day count as a coarse human-readable label.

    Display only; the bucketing is lossy (10 days -> "1 week").

    Raises:
        ValueError: If `lang` has no labels.
    """
    try:
        labels = _INTERVAL_LABELS[lang]
    except KeyError:
        raise ValueError(
            f"Unsupported interval language '{lang}'. Use one of: {', '.join(SUPPORTED_LANGS)}"
        ) from None

    if days < 1:
        return labels["under_day"]
    if days < 7:
        return _plural(labels["day"], days)
    if days < 30:
        return _plural(labels["week"], round_half_up(days / 7))
    if days < 365:
        return _plural(labels["month"], round_half_up(days / 30))
    return _plural(labels["year"], round_half_up(days / 365))


def _plural(forms: tuple[str, str], n: float) -> str:
    singular, plural = forms
    template = singular if n == 1 else plural
    return template.format(n=f"{n:g}")
