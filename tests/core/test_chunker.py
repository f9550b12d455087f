"""
Test suite for sentence chunking.

Tests token estimation, sentence splitting, greedy packing, sentence
overlap sizing, and short-chunk filtering.

System role: Verification of the first ingestion stage
"""

import pytest

from notechat.core.indexing.chunker import TextChunker, estimate_tokens, split_into_sentences

S1 = "alpha beta gamma one"
S2 = "alpha beta gamma two"
S3 = "alpha beta gamma six"


class TestEstimateTokens:
    """Test suite for estimate_tokens()."""

    @pytest.mark.parametrize(
        "text,expected",
        [("", 0), ("a", 1), ("abcd", 1), ("abcde", 2), ("x" * 400, 100)],
    )
    def test_estimate_tokens_should_round_up_quarter_length(self, text: str, expected: int) -> None:
        """Test token estimate is ceil(len / 4)."""
        # Assert
        assert estimate_tokens(text) == expected


class TestSplitIntoSentences:
    """Test suite for split_into_sentences()."""

    def test_split_should_break_on_terminal_punctuation_runs(self) -> None:
        """Test runs of . ! ? act as one boundary and blanks are dropped."""
        # Act
        sentences = split_into_sentences("Hello!! World?? Really... ")

        # Assert
        assert sentences == ["Hello", "World", "Really"]

    def test_split_should_trim_whitespace(self) -> None:
        """Test sentences are stripped."""
        # Act
        sentences = split_into_sentences("  First one.   Second one!  ")

        # Assert
        assert sentences == ["First one", "Second one"]


class TestTextChunkerInit:
    """Test suite for TextChunker construction."""

    def test_init_should_reject_non_positive_max_tokens(self) -> None:
        """Test max_tokens must be positive."""
        # Act & Assert
        with pytest.raises(ValueError, match="max_tokens"):
            TextChunker(max_tokens=0)

    def test_init_should_reject_negative_overlap(self) -> None:
        """Test overlap cannot be negative."""
        # Act & Assert
        with pytest.raises(ValueError, match="overlap_tokens"):
            TextChunker(overlap_tokens=-1)


class TestTextChunkerChunk:
    """Test suite for TextChunker.chunk()."""

    def test_chunk_should_return_empty_list_for_blank_text(self) -> None:
        """Test empty input yields no chunks and no error."""
        # Arrange
        chunker = TextChunker()

        # Act & Assert
        assert chunker.chunk("") == []
        assert chunker.chunk("   \n  ") == []

    def test_chunk_should_drop_chunks_of_ten_chars_or_fewer(self) -> None:
        """Test tiny notes produce nothing."""
        # Arrange
        chunker = TextChunker()

        # Act
        chunks = chunker.chunk("Hi. Ok.")

        # Assert
        assert chunks == []

    def test_chunk_should_pack_short_text_into_one_chunk(self) -> None:
        """Test sentences are rejoined with '. ' and a final period."""
        # Arrange
        chunker = TextChunker()

        # Act
        chunks = chunker.chunk("The quick brown fox jumps. It was a sunny day!")

        # Assert
        assert chunks == ["The quick brown fox jumps. It was a sunny day."]

    def test_chunk_should_carry_one_overlap_sentence_by_default(self) -> None:
        """Test overlap_tokens=50 seeds the next chunk with the last sentence."""
        # Arrange
        chunker = TextChunker(max_tokens=10, overlap_tokens=50)

        # Act
        chunks = chunker.chunk(f"{S1}. {S2}. {S3}.")

        # Assert
        assert chunks == [f"{S1}. {S2}.", f"{S2}. {S3}."]

    def test_chunk_should_carry_no_sentences_when_overlap_is_zero(self) -> None:
        """Test overlap_tokens=0 disables overlap."""
        # Arrange
        chunker = TextChunker(max_tokens=10, overlap_tokens=0)

        # Act
        chunks = chunker.chunk(f"{S1}. {S2}. {S3}.")

        # Assert
        assert chunks == [f"{S1}. {S2}.", f"{S3}."]

    def test_chunk_should_size_overlap_in_fifty_token_steps(self) -> None:
        """Test overlap_tokens=100 carries two sentences."""
        # Arrange
        chunker = TextChunker(max_tokens=10, overlap_tokens=100)

        # Act
        chunks = chunker.chunk(f"{S1}. {S2}. {S3}.")

        # Assert
        assert chunks == [f"{S1}. {S2}.", f"{S1}. {S2}. {S3}."]

    def test_chunk_should_keep_an_oversized_sentence_whole(self) -> None:
        """Test a sentence above max_tokens becomes its own chunk."""
        # Arrange
        chunker = TextChunker(max_tokens=2, overlap_tokens=0)

        # Act
        chunks = chunker.chunk("This sentence is definitely long.")

        # Assert
        assert chunks == ["This sentence is definitely long."]

    def test_chunk_should_cover_every_sentence(self) -> None:
        """Test every input sentence appears in at least one chunk."""
        # Arrange
        chunker = TextChunker(max_tokens=30, overlap_tokens=50)
        sentences = [f"Sentence number {i} talks about topic {i * 7}" for i in range(25)]
        text = ". ".join(sentences) + "."

        # Act
        chunks = chunker.chunk(text)

        # Assert
        assert len(chunks) > 1
        for sentence in sentences:
            assert any(sentence in chunk for chunk in chunks)

    def test_chunk_should_respect_budget_for_multi_sentence_chunks(self) -> None:
        """Test chunks holding several sentences stay within max_tokens of sentence estimates."""
        # Arrange
        chunker = TextChunker(max_tokens=30, overlap_tokens=0)
        sentences = [f"Sentence number {i} talks about topic {i * 7}" for i in range(25)]

        # Act
        chunks = chunker.chunk(". ".join(sentences) + ".")

        # Assert
        for chunk in chunks:
            parts = split_into_sentences(chunk)
            assert sum(estimate_tokens(p) for p in parts) <= 30
