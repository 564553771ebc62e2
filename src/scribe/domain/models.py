"""
Domain models for vocabulary scheduling and writing scores.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from .constants import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL


class Rating(str, Enum):
    """Learner's recall self-assessment for one review."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


class Rank(str, Enum):
    """Ordinal grade, S highest and D lowest."""

    S = "S"
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D = "D"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class SkillAxis(str, Enum):
    GRAMMAR = "grammar"
    VOCABULARY = "vocabulary"
    STRUCTURE = "structure"
    CONTENT = "content"


@dataclass(frozen=True)
class SRSUpdate:
    """
    Result of one scheduling step.

    Replaces every mutable field of a VocabularyReviewState.
    """

    ease_factor: float
    interval: int
    next_review_at: datetime
    review_count: int
    last_reviewed_at: datetime


@dataclass(frozen=True)
class VocabularyReviewState:
    """
    Review metadata of a vocabulary item.

    Attributes:
        created_at: When the item was saved; tiebreak for never-reviewed items.
        ease_factor: Interval growth multiplier (>= 1.3).
        interval: Current spacing in days (>= 1).
        review_count: Completed reviews.
        last_reviewed_at: Time of the most recent review.
        next_review_at: Due date. None means never reviewed, due immediately.
    """

    created_at: datetime
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = DEFAULT_INTERVAL
    review_count: int = 0
    last_reviewed_at: datetime | None = None
    next_review_at: datetime | None = None

    @classmethod
    def new(cls, created_at: datetime) -> "VocabularyReviewState":
        """State of a freshly saved term: defaults everywhere, due immediately."""
        return cls(created_at=created_at)

    def apply(self, update: SRSUpdate) -> "VocabularyReviewState":
        return replace(
            self,
            ease_factor=update.ease_factor,
            interval=update.interval,
            review_count=update.review_count,
            last_reviewed_at=update.last_reviewed_at,
            next_review_at=update.next_review_at,
        )


@dataclass(frozen=True)
class VocabularyEntry:
    """A saved term together with its review state."""

    id: str
    term: str
    review: VocabularyReviewState
    meaning: str = ""
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class WritingFeedback:
    overall_rank: Rank
    grammar_rank: Rank
    vocabulary_rank: Rank
    structure_rank: Rank
    content_rank: Rank

    def rank_for(self, axis: SkillAxis) -> Rank:
        return getattr(self, f"{axis.value}_rank")


@dataclass(frozen=True)
class GradedWriting:
    """A submitted writing with the ranks it was graded with. Never mutated."""

    created_at: datetime
    feedback: WritingFeedback
    id: str | None = None


@dataclass(frozen=True)
class WritingSkillScore:
    """
    Snapshot of a learner's writing skill, derived from their graded history.

    Recomputed on demand; the writings themselves are the source of truth.
    """

    overall_rank: Rank
    grammar_rank: Rank
    vocabulary_rank: Rank
    structure_rank: Rank
    content_rank: Rank
    total_writings: int
    current_streak: int
    trend: Trend
    computed_at: datetime
