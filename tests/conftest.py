import json
from datetime import datetime, timedelta, timezone

import pytest

from scribe.domain.models import GradedWriting, Rank, VocabularyReviewState, WritingFeedback

NOW = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_writing():
    """Build a GradedWriting `days_ago` days before NOW; axes default to `overall`."""

    def _make(days_ago, overall, grammar=None, vocabulary=None, structure=None, content=None):
        overall = Rank(overall)
        return GradedWriting(
            created_at=NOW - timedelta(days=days_ago),
            feedback=WritingFeedback(
                overall_rank=overall,
                grammar_rank=Rank(grammar or overall),
                vocabulary_rank=Rank(vocabulary or overall),
                structure_rank=Rank(structure or overall),
                content_rank=Rank(content or overall),
            ),
        )

    return _make


@pytest.fixture
def new_state():
    return VocabularyReviewState.new(created_at=NOW - timedelta(days=3))


@pytest.fixture
def data_dir(tmp_path):
    """A data directory with a small vocabulary deck, writing history and stats."""
    d = tmp_path / "scribe"
    d.mkdir()
    vocabulary = [
        {
            "id": "v1",
            "term": "meticulous",
            "meaning": "showing great attention to detail",
            "created_at": "2026-10-01T08:00:00+00:00",
        },
        {
            "id": "v2",
            "term": "albeit",
            "meaning": "although",
            "ease_factor": 2.2,
            "interval": 6,
            "review_count": 3,
            "created_at": "2026-09-01T08:00:00+00:00",
            "last_reviewed_at": "2026-10-10T08:00:00+00:00",
            "next_review_at": "2026-10-16T08:00:00+00:00",
        },
        {
            "id": "v3",
            "term": "ubiquitous",
            "meaning": "found everywhere",
            "ease_factor": 2.5,
            "interval": 10,
            "review_count": 4,
            "created_at": "2026-08-01T08:00:00+00:00",
            "last_reviewed_at": "2026-10-15T08:00:00+00:00",
            "next_review_at": "2026-10-25T08:00:00+00:00",
        },
    ]
    writings = [
        {
            "id": "w1",
            "created_at": "2026-10-17T20:00:00+00:00",
            "feedback": {
                "overall_rank": "S",
                "grammar_rank": "S",
                "vocabulary_rank": "S",
                "structure_rank": "S",
                "content_rank": "S",
            },
        }
    ]
    (d / "vocabulary.json").write_text(json.dumps(vocabulary), encoding="utf-8")
    (d / "writings.json").write_text(json.dumps(writings), encoding="utf-8")
    (d / "stats.json").write_text(json.dumps({"current_streak": 4}), encoding="utf-8")
    return d
