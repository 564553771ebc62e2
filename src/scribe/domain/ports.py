"""
Ports (interfaces) for vocabulary and writing storage.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import GradedWriting, SRSUpdate, VocabularyEntry


class VocabularyRepository(ABC):
    """
    Port for reading vocabulary entries and storing review results.

    Implementations:
        - JsonVocabularyRepository: Reads and rewrites a JSON file.
    """

    @abstractmethod
    async def get_entries(self) -> list[VocabularyEntry]:
        """Return every saved vocabulary entry, in storage order."""
        pass

    @abstractmethod
    async def get_entry(self, key: str) -> VocabularyEntry | None:
        """
        Look up one entry.

        Args:
            key: Entry id, or its term (case-insensitive).

        Returns:
            The matching entry, or None.
        """
        pass

    @abstractmethod
    async def save_review(self, entry_id: str, update: SRSUpdate) -> VocabularyEntry:
        """
        Persist a scheduling result onto the entry.

        Returns:
            The entry as stored after the update.
        """
        pass


class WritingRepository(ABC):
    """
    Port for reading graded writing history.
    """

    @abstractmethod
    async def get_writings(self, limit: int | None = None) -> list[GradedWriting]:
        """
        Fetch graded writings, newest first.

        Args:
            limit: Maximum number of writings to return. None returns all.
        """
        pass

    @abstractmethod
    async def get_current_streak(self) -> int:
        """Return the learner's current streak as recorded by the history layer."""
        pass
