"""
JSON file repositories: infrastructure adapters for local study data.

Implements VocabularyRepository and WritingRepository on top of plain JSON
files: a list of objects per collection and a small stats document.
"""

import json
import logging
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from scribe.domain.errors import EntryNotFoundError, StoreFormatError
from scribe.domain.models import (
    GradedWriting,
    Rank,
    SRSUpdate,
    VocabularyEntry,
    VocabularyReviewState,
    WritingFeedback,
)
from scribe.domain.ports import VocabularyRepository, WritingRepository

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        # Naive timestamps are stored as UTC
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        logger.warning(f"Store file not found, treating as empty: {path}")
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StoreFormatError(f"{path}: invalid JSON ({e})") from e


def _read_records(path: Path) -> list[dict[str, Any]]:
    data = _read_json(path, [])
    if not isinstance(data, list):
        raise StoreFormatError(f"{path}: expected a list of objects")
    return data


class JsonVocabularyRepository(VocabularyRepository):
    """
    Vocabulary entries stored as a JSON list.

    Each record carries the term fields plus its review state:
    ``ease_factor``, ``interval``, ``review_count``, ``created_at``,
    ``last_reviewed_at`` and ``next_review_at`` (ISO 8601).
    """

    def __init__(self, path: Path):
        self.path = path

    async def get_entries(self) -> list[VocabularyEntry]:
        return [self._to_entry(record) for record in _read_records(self.path)]

    async def get_entry(self, key: str) -> VocabularyEntry | None:
        entries = await self.get_entries()
        for entry in entries:
            if entry.id == key:
                return entry
        folded = key.casefold()
        for entry in entries:
            if entry.term.casefold() == folded:
                return entry
        return None

    async def save_review(self, entry_id: str, update: SRSUpdate) -> VocabularyEntry:
        records = _read_records(self.path)
        for record in records:
            if str(record.get("id")) != entry_id:
                continue
            record.update(
                ease_factor=update.ease_factor,
                interval=update.interval,
                review_count=update.review_count,
                last_reviewed_at=_format_timestamp(update.last_reviewed_at),
                next_review_at=_format_timestamp(update.next_review_at),
            )
            self._write(records)
            logger.debug(f"Saved review for {entry_id} -> {self.path}")
            return self._to_entry(record)
        raise EntryNotFoundError(entry_id)

    def _write(self, records: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

    def _to_entry(self, record: dict[str, Any]) -> VocabularyEntry:
        try:
            state = VocabularyReviewState.new(_parse_timestamp(record["created_at"]))
            state = replace(
                state,
                ease_factor=float(record.get("ease_factor") or state.ease_factor),
                interval=int(record.get("interval") or state.interval),
                review_count=int(record.get("review_count") or 0),
                last_reviewed_at=_parse_timestamp(record.get("last_reviewed_at")),
                next_review_at=_parse_timestamp(record.get("next_review_at")),
            )
            return VocabularyEntry(
                id=str(record["id"]),
                term=record["term"],
                meaning=record.get("meaning", ""),
                tags=tuple(record.get("tags", [])),
                review=state,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StoreFormatError(f"{self.path}: bad vocabulary record {record!r} ({e})") from e


class JsonWritingRepository(WritingRepository):
    """
    Graded writings stored as a JSON list, plus a stats document with the streak.
    """

    def __init__(self, path: Path, stats_path: Path | None = None):
        self.path = path
        self.stats_path = stats_path

    async def get_writings(self, limit: int | None = None) -> list[GradedWriting]:
        writings = [self._to_writing(record) for record in _read_records(self.path)]
        writings.sort(key=lambda w: w.created_at, reverse=True)
        if limit is not None:
            writings = writings[:limit]
        return writings

    async def get_current_streak(self) -> int:
        if self.stats_path is None:
            return 0
        stats = _read_json(self.stats_path, {})
        try:
            return int(stats.get("current_streak", 0))
        except (AttributeError, TypeError, ValueError) as e:
            raise StoreFormatError(f"{self.stats_path}: bad current_streak ({e})") from e

    def _to_writing(self, record: dict[str, Any]) -> GradedWriting:
        try:
            fb = record["feedback"]
            feedback = WritingFeedback(
                overall_rank=Rank(fb["overall_rank"]),
                grammar_rank=Rank(fb["grammar_rank"]),
                vocabulary_rank=Rank(fb["vocabulary_rank"]),
                structure_rank=Rank(fb["structure_rank"]),
                content_rank=Rank(fb["content_rank"]),
            )
            return GradedWriting(
                id=str(record["id"]) if record.get("id") is not None else None,
                created_at=_parse_timestamp(record["created_at"]),
                feedback=feedback,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StoreFormatError(f"{self.path}: bad writing record {record!r} ({e})") from e
