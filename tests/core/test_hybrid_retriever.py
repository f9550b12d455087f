"""
Test suite for HybridRetriever.

Tests concurrent dense + sparse search over indexed chunks in SQLite,
owner scoping, result capping, and single-signal degradation.

System role: Verification of query-path retrieval
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from notechat.configs import RetrievalSettings
from notechat.core.exceptions import EmbeddingError
from notechat.core.retrieval.hybrid_retriever import HybridRetriever
from notechat.models.retrieval import PassageSource

PHOTOSYNTHESIS = "Photosynthesis converts light energy into chemical energy in plants."
REVOLUTION = "The French revolution began in 1789 with the storming of the Bastille."
MITOCHONDRIA = "Mitochondria are the powerhouse of the cell and produce ATP."


@pytest.fixture
async def indexed(make_note, index_chunks, owner_id):
    """One note with three embedded chunks."""
    note = await make_note(owner_id, "<p>study notes</p>", title="Study")
    rows = await index_chunks(note, [PHOTOSYNTHESIS, REVOLUTION, MITOCHONDRIA])
    return {row.text: row for row in rows}


@pytest.fixture
def retriever(session_factory, embedding_provider) -> HybridRetriever:
    """Retriever over the test database."""
    return HybridRetriever(session_factory, embedding_provider, RetrievalSettings())


class TestHybridRetrieverSignals:
    """Test suite for the individual search signals."""

    @pytest.mark.asyncio
    async def test_dense_search_should_rank_identical_text_first(self, retriever, indexed, owner_id) -> None:
        """Test an exact-text query has cosine 1.0 with its chunk."""
        # Act
        results = await retriever.dense_search(MITOCHONDRIA, owner_id)

        # Assert
        assert results[0].chunk_id == indexed[MITOCHONDRIA].id
        assert results[0].score == pytest.approx(1.0)
        assert results[0].source is PassageSource.DENSE
        assert all(r.score > 0.7 for r in results)

    @pytest.mark.asyncio
    async def test_sparse_search_should_return_only_term_matches(self, retriever, indexed, owner_id) -> None:
        """Test chunks without a query term are not returned."""
        # Act
        results = await retriever.sparse_search("Bastille storming", owner_id)

        # Assert
        assert [r.chunk_id for r in results] == [indexed[REVOLUTION].id]
        assert results[0].source is PassageSource.SPARSE


class TestHybridRetrieverSearch:
    """Test suite for HybridRetriever.search()."""

    @pytest.mark.asyncio
    async def test_search_should_rank_chunk_found_by_both_signals_first(self, retriever, indexed, owner_id) -> None:
        """Test fused ranking puts the dense+sparse match on top."""
        # Act
        results = await retriever.search(PHOTOSYNTHESIS, owner_id)

        # Assert
        assert results[0].chunk_id == indexed[PHOTOSYNTHESIS].id
        assert results[0].source is PassageSource.FUSED
        assert results[0].score == pytest.approx(2 / 61)

    @pytest.mark.asyncio
    async def test_search_should_scope_results_to_owner(
        self, retriever, indexed, make_note, index_chunks, other_owner_id, owner_id
    ) -> None:
        """Test another owner's identical chunk is never returned."""
        # Arrange
        foreign_note = await make_note(other_owner_id, "<p>copy</p>")
        foreign_rows = await index_chunks(foreign_note, [PHOTOSYNTHESIS])

        # Act
        results = await retriever.search(PHOTOSYNTHESIS, owner_id)

        # Assert
        returned = {r.chunk_id for r in results}
        assert foreign_rows[0].id not in returned
        assert all(r.note_id != foreign_note.id for r in results)

    @pytest.mark.asyncio
    async def test_search_should_cap_results(self, retriever, indexed, owner_id) -> None:
        """Test max_results truncates the fused list."""
        # Act
        results = await retriever.search(PHOTOSYNTHESIS, owner_id, max_results=1)

        # Assert
        assert len(results) == 1

    @pytest.mark.asyncio
    async def test_search_should_fall_back_to_sparse_when_embedding_fails(
        self, session_factory, indexed, owner_id
    ) -> None:
        """Test a dense failure yields lexical-only results."""
        # Arrange
        failing_provider = MagicMock()
        failing_provider.embed = AsyncMock(side_effect=EmbeddingError("embedding service down"))
        retriever = HybridRetriever(session_factory, failing_provider, RetrievalSettings())

        # Act
        results = await retriever.search("Bastille storming", owner_id)

        # Assert
        assert [r.chunk_id for r in results] == [indexed[REVOLUTION].id]
        assert results[0].score == pytest.approx(1 / 61)

    @pytest.mark.asyncio
    async def test_search_should_fall_back_to_dense_when_lexical_fails(self, retriever, indexed, owner_id) -> None:
        """Test a sparse failure yields dense-only results."""
        # Arrange
        with patch(
            "notechat.core.retrieval.hybrid_retriever.note_chunk_crud.search_fulltext",
            new_callable=AsyncMock,
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error")),
        ):
            # Act
            results = await retriever.search(MITOCHONDRIA, owner_id)

        # Assert
        assert results[0].chunk_id == indexed[MITOCHONDRIA].id

    @pytest.mark.asyncio
    async def test_search_should_return_empty_for_owner_without_chunks(self, retriever, other_owner_id) -> None:
        """Test no indexed notes means no passages."""
        # Act
        results = await retriever.search("anything at all", other_owner_id)

        # Assert
        assert results == []

    @pytest.mark.asyncio
    async def test_search_should_run_both_signals_concurrently(self, retriever, owner_id) -> None:
        """Test each signal can wait on the other, which only completes if both are in flight."""
        # Arrange
        dense_started = asyncio.Event()
        sparse_started = asyncio.Event()
        overlapped: list[str] = []

        async def dense(query, owner):
            dense_started.set()
            await asyncio.wait_for(sparse_started.wait(), timeout=1.0)
            overlapped.append("dense")
            return []

        async def sparse(query, owner):
            sparse_started.set()
            await asyncio.wait_for(dense_started.wait(), timeout=1.0)
            overlapped.append("sparse")
            return []

        # Act
        with patch.object(retriever, "dense_search", dense), patch.object(retriever, "sparse_search", sparse):
            results = await retriever.search("osmosis", owner_id)

        # Assert
        assert results == []
        assert sorted(overlapped) == ["dense", "sparse"]
