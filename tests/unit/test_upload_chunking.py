"""Tests for chunking strategies."""
import pytest
from nightfall.core.upload.strategies.chunking import FixedSizeChunkingStrategy


class TestFixedSizeChunkingStrategy:
    """Test suite for FixedSizeChunkingStrategy."""

    def test_default_chunk_size(self):
        """Test default 1MB chunk size."""
        strategy = FixedSizeChunkingStrategy()
        assert strategy.chunk_size == 1024 * 1024

    def test_custom_chunk_size(self):
        """Test custom chunk size."""
        strategy = FixedSizeChunkingStrategy(chunk_size=512 * 1024)
        assert strategy.chunk_size == 512 * 1024

    def test_invalid_chunk_size(self):
        """Test invalid chunk size raises error."""
        with pytest.raises(ValueError):
            FixedSizeChunkingStrategy(chunk_size=0)

        with pytest.raises(ValueError):
            FixedSizeChunkingStrategy(chunk_size=-1)

    def test_negative_total_size(self):
        """Test negative content size raises error."""
        strategy = FixedSizeChunkingStrategy(chunk_size=5)
        with pytest.raises(ValueError):
            list(strategy.plan(-1))

    def test_empty_content(self):
        """Test planning empty content yields nothing."""
        strategy = FixedSizeChunkingStrategy()
        assert list(strategy.plan(0)) == []
        assert strategy.calculate_chunks(0) == []

    def test_content_smaller_than_chunk(self):
        """Test content smaller than chunk size."""
        strategy = FixedSizeChunkingStrategy(chunk_size=1024)
        assert list(strategy.plan(500)) == [(0, 500)]

    def test_exact_multiple(self):
        """Test size exact multiple of chunk size."""
        strategy = FixedSizeChunkingStrategy(chunk_size=5)
        assert list(strategy.plan(15)) == [(0, 5), (5, 5), (10, 5)]

    def test_single_chunk_when_sizes_match(self):
        """Test chunk size equal to content size."""
        strategy = FixedSizeChunkingStrategy(chunk_size=15)
        assert list(strategy.plan(15)) == [(0, 15)]

    def test_not_exact_multiple(self):
        """Test last chunk holds the remainder."""
        strategy = FixedSizeChunkingStrategy(chunk_size=1000)
        chunks = strategy.calculate_chunks(2500)

        assert chunks == [(0, 1000), (1000, 2000), (2000, 2500)]

    def test_plan_is_lazy(self):
        """Test plan returns an iterator, not a list."""
        strategy = FixedSizeChunkingStrategy(chunk_size=1)
        plan = strategy.plan(10 ** 12)

        assert next(plan) == (0, 1)
        assert next(plan) == (1, 1)

    def test_plan_is_repeatable(self):
        """Test identical inputs yield identical plans."""
        strategy = FixedSizeChunkingStrategy(chunk_size=7)
        assert list(strategy.plan(100)) == list(strategy.plan(100))

    @pytest.mark.parametrize("total_size", [0, 1, 4, 5, 6, 99, 100, 101, 4096])
    @pytest.mark.parametrize("chunk_size", [1, 3, 5, 100, 4096])
    def test_chunks_tile_content(self, total_size, chunk_size):
        """Test ranges are contiguous and cover exactly [0, total)."""
        chunks = list(FixedSizeChunkingStrategy(chunk_size).plan(total_size))

        position = 0
        for i, (offset, length) in enumerate(chunks):
            assert offset == position
            assert 0 < length <= chunk_size
            if i < len(chunks) - 1:
                assert length == chunk_size
            position += length

        assert position == total_size
