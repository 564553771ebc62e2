"""
Service Factory
Centralizes wiring of repositories and the study service from configuration.
"""

from scribe.application.config import AppConfig
from scribe.application.service import StudyService
from scribe.domain.ports import VocabularyRepository, WritingRepository
from scribe.infrastructure.adapters.json_store import (
    JsonVocabularyRepository,
    JsonWritingRepository,
)


def get_vocabulary_repository(config: AppConfig) -> VocabularyRepository:
    return JsonVocabularyRepository(config.vocabulary_path)


def get_writing_repository(config: AppConfig) -> WritingRepository:
    return JsonWritingRepository(config.writings_path, stats_path=config.stats_path)


def get_study_service(config: AppConfig) -> StudyService:
    """
    Returns a StudyService backed by the repositories selected by config.
    """
    return StudyService(
        vocabulary_repo=get_vocabulary_repository(config),
        writing_repo=get_writing_repository(config),
        history_limit=config.history_limit,
        lang=config.lang,
    )
