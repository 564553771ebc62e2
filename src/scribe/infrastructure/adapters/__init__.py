# Infrastructure Adapters Package
from .json_store import JsonVocabularyRepository, JsonWritingRepository

__all__ = ["JsonVocabularyRepository", "JsonWritingRepository"]
