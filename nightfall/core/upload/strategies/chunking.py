"""
Chunking strategies for content uploads.

Implements Strategy Pattern for different chunking algorithms.
"""
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def plan(self, total_size: int) -> Iterator[Tuple[int, int]]:
        """Lazily yield (offset, length) pairs."""
        pass

    def calculate_chunks(self, total_size: int) -> List[Tuple[int, int]]:
        """
        Calculate chunk boundaries.

        Args:
            total_size: Total content size in bytes

        Returns:
            List of (start, end) tuples
        """
        return [(offset, offset + length) for offset, length in self.plan(total_size)]


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking strategy.

    Every chunk is ``chunk_size`` bytes except the last, which holds the
    remainder. The plan is a pure function of its inputs, so iterating it
    again yields the same ranges.
    """

    DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def plan(self, total_size: int) -> Iterator[Tuple[int, int]]:
        """
        Yield fixed-size chunk ranges.

        Args:
            total_size: Total content size in bytes

        Yields:
            (offset, length) tuples; nothing for empty content
        """
        if total_size < 0:
            raise ValueError("Total size must not be negative")

        offset = 0
        while offset < total_size:
            length = min(self.chunk_size, total_size - offset)
            yield offset, length
            offset += length
