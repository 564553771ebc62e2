# Domain Package
from .errors import EntryNotFoundError, ScribeError, StoreFormatError
from .models import (
    GradedWriting,
    Rank,
    Rating,
    SkillAxis,
    SRSUpdate,
    Trend,
    VocabularyEntry,
    VocabularyReviewState,
    WritingFeedback,
    WritingSkillScore,
)
from .ports import VocabularyRepository, WritingRepository

__all__ = [
    "Rating",
    "Rank",
    "Trend",
    "SkillAxis",
    "SRSUpdate",
    "VocabularyReviewState",
    "VocabularyEntry",
    "WritingFeedback",
    "GradedWriting",
    "WritingSkillScore",
    "VocabularyRepository",
    "WritingRepository",
    "ScribeError",
    "EntryNotFoundError",
    "StoreFormatError",
]
