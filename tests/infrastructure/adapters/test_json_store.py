import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from scribe.application.srs import schedule
from scribe.domain.errors import EntryNotFoundError, StoreFormatError
from scribe.domain.models import Rank, Rating
from scribe.infrastructure.adapters.json_store import (
    JsonVocabularyRepository,
    JsonWritingRepository,
)


@pytest.fixture
def vocab_repo(data_dir):
    return JsonVocabularyRepository(data_dir / "vocabulary.json")


@pytest.fixture
def writing_repo(data_dir):
    return JsonWritingRepository(data_dir / "writings.json", stats_path=data_dir / "stats.json")


# --- Vocabulary ---


@pytest.mark.asyncio
async def test_get_entries_fills_defaults(vocab_repo):
    entries = await vocab_repo.get_entries()

    assert [e.id for e in entries] == ["v1", "v2", "v3"]
    fresh = entries[0].review
    assert fresh.ease_factor == 2.5
    assert fresh.interval == 1
    assert fresh.review_count == 0
    assert fresh.next_review_at is None
    assert fresh.created_at == datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)

    reviewed = entries[1].review
    assert reviewed.ease_factor == 2.2
    assert reviewed.interval == 6
    assert reviewed.next_review_at == datetime(2026, 10, 16, 8, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_naive_timestamps_are_utc(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps([{"id": 1, "term": "x", "created_at": "2026-01-02T03:04:05"}]))

    entries = await JsonVocabularyRepository(path).get_entries()

    assert entries[0].id == "1"
    assert entries[0].review.created_at.tzinfo == timezone.utc


@pytest.mark.asyncio
async def test_get_entry_by_id_or_term(vocab_repo):
    assert (await vocab_repo.get_entry("v2")).term == "albeit"
    assert (await vocab_repo.get_entry("Meticulous")).id == "v1"
    assert await vocab_repo.get_entry("missing") is None


@pytest.mark.asyncio
async def test_save_review_persists(vocab_repo, data_dir, now):
    entry = await vocab_repo.get_entry("v2")
    update = schedule(entry.review, Rating.GOOD, now)

    saved = await vocab_repo.save_review("v2", update)

    assert saved.review.interval == update.interval
    reloaded = await vocab_repo.get_entry("v2")
    assert reloaded.review.interval == update.interval
    assert reloaded.review.review_count == 4
    assert reloaded.review.last_reviewed_at == now
    assert reloaded.review.next_review_at == now + timedelta(days=update.interval)
    # Other fields untouched
    raw = json.loads((data_dir / "vocabulary.json").read_text(encoding="utf-8"))
    assert raw[1]["meaning"] == "although"
    assert raw[0].get("next_review_at") is None


@pytest.mark.asyncio
async def test_save_review_unknown_id(vocab_repo, now):
    entry = await vocab_repo.get_entry("v1")
    update = schedule(entry.review, Rating.GOOD, now)

    with pytest.raises(EntryNotFoundError):
        await vocab_repo.save_review("nope", update)


@pytest.mark.asyncio
async def test_missing_file_is_empty(tmp_path, caplog):
    repo = JsonVocabularyRepository(tmp_path / "absent.json")

    with caplog.at_level(logging.WARNING):
        assert await repo.get_entries() == []

    assert "not found" in caplog.text


@pytest.mark.asyncio
async def test_invalid_json_raises(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text("{not json")

    with pytest.raises(StoreFormatError, match="invalid JSON"):
        await JsonVocabularyRepository(path).get_entries()


@pytest.mark.asyncio
async def test_non_list_store_raises(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps({"id": "v1"}))

    with pytest.raises(StoreFormatError, match="expected a list"):
        await JsonVocabularyRepository(path).get_entries()


@pytest.mark.asyncio
async def test_record_without_term_raises(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps([{"id": "v1", "created_at": "2026-01-01T00:00:00+00:00"}]))

    with pytest.raises(StoreFormatError, match="bad vocabulary record"):
        await JsonVocabularyRepository(path).get_entries()


# --- Writings ---


def _writing(writing_id, created_at, rank):
    return {
        "id": writing_id,
        "created_at": created_at,
        "feedback": {
            key: rank
            for key in (
                "overall_rank",
                "grammar_rank",
                "vocabulary_rank",
                "structure_rank",
                "content_rank",
            )
        },
    }


@pytest.mark.asyncio
async def test_get_writings_newest_first_with_limit(tmp_path):
    path = tmp_path / "writings.json"
    path.write_text(
        json.dumps(
            [
                _writing("old", "2026-10-01T00:00:00+00:00", "C"),
                _writing("new", "2026-10-10T00:00:00+00:00", "A+"),
                _writing("mid", "2026-10-05T00:00:00+00:00", "B-"),
            ]
        )
    )
    repo = JsonWritingRepository(path)

    writings = await repo.get_writings()
    assert [w.id for w in writings] == ["new", "mid", "old"]
    assert writings[0].feedback.overall_rank is Rank.A_PLUS

    limited = await repo.get_writings(limit=2)
    assert [w.id for w in limited] == ["new", "mid"]


@pytest.mark.asyncio
async def test_unknown_rank_raises(tmp_path):
    path = tmp_path / "writings.json"
    path.write_text(json.dumps([_writing("w", "2026-10-01T00:00:00+00:00", "E")]))

    with pytest.raises(StoreFormatError, match="bad writing record"):
        await JsonWritingRepository(path).get_writings()


@pytest.mark.asyncio
async def test_current_streak(writing_repo, tmp_path):
    assert await writing_repo.get_current_streak() == 4

    no_stats = JsonWritingRepository(tmp_path / "w.json")
    assert await no_stats.get_current_streak() == 0

    missing_stats = JsonWritingRepository(tmp_path / "w.json", stats_path=tmp_path / "s.json")
    assert await missing_stats.get_current_streak() == 0
