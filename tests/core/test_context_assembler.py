"""
Test suite for context assembly.

Tests the score cutoff, same-note diversity filter, token budget, title
enrichment, citation truncation and bound, and summary text.

System role: Verification of query-path context selection
"""

import uuid
from unittest.mock import MagicMock

import pytest

from notechat.configs import RetrievalSettings
from notechat.core.retrieval.context_assembler import (
    NO_CONTEXT_SUMMARY,
    ContextAssembler,
    apply_diversity,
    apply_min_score,
    apply_token_budget,
    build_summary,
    fallback_title,
    truncate,
    word_jaccard,
)
from notechat.models.retrieval import PassageSource, RetrievedPassage

SHARED_WORDS = [f"word{i}" for i in range(39)]


def _passage(text: str, note_id: uuid.UUID, score: float = 0.5, chunk_index: int = 0) -> RetrievedPassage:
    return RetrievedPassage(
        chunk_id=uuid.uuid4(),
        note_id=note_id,
        text=text,
        chunk_index=chunk_index,
        score=score,
        source=PassageSource.FUSED,
    )


class TestWordJaccard:
    """Test suite for word_jaccard()."""

    def test_word_jaccard_should_compare_lowercase_word_sets(self) -> None:
        """Test case-insensitive set overlap."""
        # Assert
        assert word_jaccard("The cat sat", "the CAT sat") == 1.0
        assert word_jaccard("a b", "c d") == 0.0
        assert word_jaccard("a b c", "b c d") == pytest.approx(2 / 4)

    def test_word_jaccard_should_return_zero_for_empty_texts(self) -> None:
        """Test no words means no similarity."""
        # Assert
        assert word_jaccard("", "") == 0.0


class TestApplyMinScore:
    """Test suite for apply_min_score()."""

    def test_apply_min_score_should_drop_passages_below_cutoff(self) -> None:
        """Test score < min_score is dropped and score == min_score is kept."""
        # Arrange
        note_id = uuid.uuid4()
        passages = [_passage("high", note_id, 0.03), _passage("edge", note_id, 0.02), _passage("low", note_id, 0.01)]

        # Act
        kept = apply_min_score(passages, 0.02)

        # Assert
        assert [p.text for p in kept] == ["high", "edge"]


class TestApplyDiversity:
    """Test suite for apply_diversity()."""

    def test_diversity_should_drop_near_duplicate_from_same_note(self) -> None:
        """Test 95% word overlap within one note keeps only the higher-ranked passage."""
        # Arrange
        note_id = uuid.uuid4()
        first = _passage(" ".join(SHARED_WORDS + ["alpha"]), note_id, 0.9)
        second = _passage(" ".join(SHARED_WORDS + ["omega"]), note_id, 0.8)
        assert word_jaccard(first.text, second.text) == pytest.approx(39 / 41)

        # Act
        kept = apply_diversity([first, second], threshold=0.8)

        # Assert
        assert kept == [first]

    def test_diversity_should_keep_near_duplicates_from_different_notes(self) -> None:
        """Test the filter only compares passages of the same note."""
        # Arrange
        first = _passage(" ".join(SHARED_WORDS + ["alpha"]), uuid.uuid4())
        second = _passage(" ".join(SHARED_WORDS + ["omega"]), uuid.uuid4())

        # Act
        kept = apply_diversity([first, second], threshold=0.8)

        # Assert
        assert kept == [first, second]

    def test_diversity_should_keep_distinct_passages_from_same_note(self) -> None:
        """Test dissimilar passages of one note both survive."""
        # Arrange
        note_id = uuid.uuid4()
        first = _passage("mitochondria produce energy for the cell", note_id)
        second = _passage("the french revolution began in 1789", note_id)

        # Act
        kept = apply_diversity([first, second], threshold=0.8)

        # Assert
        assert kept == [first, second]


class TestApplyTokenBudget:
    """Test suite for apply_token_budget()."""

    def test_token_budget_should_keep_all_when_total_equals_budget(self) -> None:
        """Test cumulative tokens exactly at the budget keeps every passage."""
        # Arrange
        note_id = uuid.uuid4()
        passages = [_passage("x" * 40, note_id) for _ in range(3)]  # 10 tokens each

        # Act
        kept = apply_token_budget(passages, 30)

        # Assert
        assert len(kept) == 3

    def test_token_budget_should_exclude_passage_one_token_over(self) -> None:
        """Test the passage that would cross the budget and everything after it is dropped."""
        # Arrange
        note_id = uuid.uuid4()
        passages = [_passage("x" * 40, note_id) for _ in range(2)] + [_passage("y" * 44, note_id), _passage("z", note_id)]

        # Act
        kept = apply_token_budget(passages, 30)

        # Assert
        assert [p.text for p in kept] == ["x" * 40, "x" * 40]


class TestHelpers:
    """Test suite for truncate(), fallback_title(), and build_summary()."""

    def test_truncate_should_append_ellipsis_only_when_cut(self) -> None:
        """Test texts at or under the limit are unchanged."""
        # Assert
        assert truncate("short", 200) == "short"
        assert truncate("a" * 200, 200) == "a" * 200
        assert truncate("a" * 201, 200) == "a" * 200 + "..."

    def test_fallback_title_should_name_note_by_id(self) -> None:
        """Test 'Note <id>' fallback."""
        # Arrange
        note_id = uuid.uuid4()

        # Assert
        assert fallback_title(note_id) == f"Note {note_id}"

    def test_build_summary_should_count_passages_notes_and_tokens(self) -> None:
        """Test summary wording with plural and singular forms."""
        # Arrange
        note_a, note_b = uuid.uuid4(), uuid.uuid4()
        passages = [_passage("x" * 40, note_a), _passage("y" * 40, note_a), _passage("z" * 20, note_b)]

        # Assert
        assert build_summary(passages) == "Found 3 relevant passages from 2 notes (~25 tokens)"
        assert build_summary(passages[:1]) == "Found 1 relevant passage from 1 note (~10 tokens)"
        assert build_summary([]) == NO_CONTEXT_SUMMARY


class TestContextAssembler:
    """Test suite for ContextAssembler.assemble()."""

    @pytest.mark.asyncio
    async def test_assemble_should_attach_note_titles(self, session_factory, make_note, owner_id) -> None:
        """Test titles come from the notes table with an id fallback for untitled notes."""
        # Arrange
        titled = await make_note(owner_id, "<p>Cell biology</p>", title="Biology")
        untitled = await make_note(owner_id, "<p>History</p>")
        assembler = ContextAssembler(session_factory, RetrievalSettings())
        passages = [
            _passage("mitochondria produce energy", titled.id, 0.03),
            _passage("the revolution began in 1789", untitled.id, 0.02),
        ]

        # Act
        context = await assembler.assemble(passages)

        # Assert
        assert [p.note_title for p in context.passages] == ["Biology", None]
        assert [c.title for c in context.citations] == ["Biology", f"Note {untitled.id}"]
        assert context.summary == "Found 2 relevant passages from 2 notes (~14 tokens)"
        assert context.total_tokens == 14

    @pytest.mark.asyncio
    async def test_assemble_should_bound_and_truncate_citations(self, session_factory, owner_id) -> None:
        """Test citations never exceed citation_limit and long text is cut to citation_chars."""
        # Arrange
        assembler = ContextAssembler(session_factory, RetrievalSettings(citation_limit=5, citation_chars=200))
        passages = [
            _passage(f"topic{i} " + "detail " * 60, uuid.uuid4(), score=0.1 - i * 0.001, chunk_index=i)
            for i in range(8)
        ]

        # Act
        context = await assembler.assemble(passages, max_context_tokens=10_000)

        # Assert
        assert len(context.passages) == 8
        assert len(context.citations) == 5
        for citation, passage in zip(context.citations, context.passages):
            assert citation.text.endswith("...")
            assert len(citation.text) <= 203
            assert citation.chunk_id == passage.chunk_id

    @pytest.mark.asyncio
    async def test_assemble_should_use_fallback_titles_when_lookup_fails(self) -> None:
        """Test a failing title lookup still produces citations."""
        # Arrange
        broken_factory = MagicMock(side_effect=RuntimeError("database offline"))
        assembler = ContextAssembler(broken_factory, RetrievalSettings())
        note_id = uuid.uuid4()

        # Act
        context = await assembler.assemble([_passage("photosynthesis converts light", note_id)])

        # Assert
        assert context.citations[0].title == f"Note {note_id}"

    @pytest.mark.asyncio
    async def test_assemble_should_report_no_context_for_empty_input(self, session_factory) -> None:
        """Test empty retrieval gives the no-context summary."""
        # Arrange
        assembler = ContextAssembler(session_factory, RetrievalSettings())

        # Act
        context = await assembler.assemble([])

        # Assert
        assert context.passages == []
        assert context.citations == []
        assert context.summary == NO_CONTEXT_SUMMARY
