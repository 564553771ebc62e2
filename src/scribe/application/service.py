"""
Study Service: application layer orchestrator.

Coordinates the vocabulary and writing repositories with the pure
scheduling and scoring cores.
"""

import logging
from datetime import datetime

from scribe.application import srs
from scribe.application.score import SkillScoreCalculator
from scribe.domain.constants import DEFAULT_HISTORY_LIMIT
from scribe.domain.errors import EntryNotFoundError
from scribe.domain.models import (
    Rating,
    VocabularyEntry,
    VocabularyReviewState,
    WritingSkillScore,
)
from scribe.domain.ports import VocabularyRepository, WritingRepository

logger = logging.getLogger(__name__)


def _review_state(entry: VocabularyEntry) -> VocabularyReviewState:
    return entry.review


class StudyService:
    """
    Application service for vocabulary reviews and writing skill snapshots.

    Depends on the repository ports, not on concrete adapters.
    """

    def __init__(
        self,
        vocabulary_repo: VocabularyRepository,
        writing_repo: WritingRepository,
        calculator: SkillScoreCalculator | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        lang: str = "en",
    ):
        """
        Args:
            vocabulary_repo: Source of vocabulary entries; receives review results.
            writing_repo: Source of graded writings and the current streak.
            calculator: Optional custom calculator; uses default if not provided.
            history_limit: Number of most recent writings to aggregate.
            lang: Language for interval labels.
        """
        self._vocab = vocabulary_repo
        self._writings = writing_repo
        self._calc = calculator or SkillScoreCalculator()
        self.history_limit = history_limit
        self.lang = lang

    async def get_due_queue(self, now: datetime, limit: int | None = None) -> list[VocabularyEntry]:
        """
        Entries due at `now`, most urgent first.
        """
        entries = await self._vocab.get_entries()
        queue = srs.due_entries(entries, now, limit=limit, key=_review_state)
        logger.debug(f"{len(queue)}/{len(entries)} entries due")
        return queue

    async def review(self, key: str, rating: Rating, now: datetime) -> VocabularyEntry:
        """
        Apply a rating to an entry and persist the new schedule.

        Raises:
            EntryNotFoundError: If no entry matches `key`.
        """
        entry = await self._require_entry(key)
        update = srs.schedule(entry.review, rating, now)
        saved = await self._vocab.save_review(entry.id, update)
        logger.info(
            f"Reviewed '{entry.term}' as {Rating(rating).value}: "
            f"interval {entry.review.interval}d -> {update.interval}d, "
            f"ease {entry.review.ease_factor} -> {update.ease_factor}"
        )
        return saved

    async def preview(self, key: str, now: datetime) -> tuple[VocabularyEntry, dict[Rating, str]]:
        """
        Interval label per rating for one entry, without saving anything.

        Raises:
            EntryNotFoundError: If no entry matches `key`.
        """
        entry = await self._require_entry(key)
        return entry, srs.preview_all_ratings(entry.review, now, lang=self.lang)

    async def get_skill_score(self, now: datetime) -> WritingSkillScore:
        """
        Aggregate the most recent `history_limit` writings with the stored streak.
        """
        writings = await self._writings.get_writings(limit=self.history_limit)
        streak = await self._writings.get_current_streak()
        return self._calc.aggregate(writings, streak, now)

    async def _require_entry(self, key: str) -> VocabularyEntry:
        entry = await self._vocab.get_entry(key)
        if entry is None:
            raise EntryNotFoundError(key)
        return entry
