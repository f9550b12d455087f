"""
Context assembly.

Turns fused retrieval results into the context of one answer: score cutoff,
same-note diversity filtering, token budget, note titles, citations, and a
one-line summary. Steps run in that order.

Dependencies: sqlalchemy, notechat.boundary.db
System role: Query-path context selection
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import async_sessionmaker

from notechat.boundary.db.CRUD.note_crud import note_crud
from notechat.configs.retrieval import RetrievalSettings
from notechat.core.indexing.chunker import estimate_tokens
from notechat.models.citation import Citation
from notechat.models.retrieval import AssembledContext, RetrievedPassage

logger = logging.getLogger(__name__)

NO_CONTEXT_SUMMARY = "No relevant context found."


def fallback_title(note_id: UUID) -> str:
    return f"Note {note_id}"


def word_jaccard(text_a: str, text_b: str) -> float:
    """Jaccard similarity of the lowercase whitespace-separated word sets."""
    words_a = set(text_a.lower().split())
    words_b = set(text_b.lower().split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def apply_min_score(passages: list[RetrievedPassage], min_score: float) -> list[RetrievedPassage]:
    return [p for p in passages if p.score >= min_score]


def apply_diversity(passages: list[RetrievedPassage], threshold: float) -> list[RetrievedPassage]:
    """
    Drop near-duplicate passages from notes already represented.

    The top passage is always kept. A passage from an unseen note is kept.
    A passage from a seen note is kept only when its Jaccard similarity to
    every kept passage of that note is below threshold.
    """
    kept: list[RetrievedPassage] = []
    seen_notes: set[UUID] = set()

    for passage in passages:
        if passage.note_id not in seen_notes:
            kept.append(passage)
            seen_notes.add(passage.note_id)
            continue

        if all(
            word_jaccard(existing.text, passage.text) < threshold
            for existing in kept
            if existing.note_id == passage.note_id
        ):
            kept.append(passage)

    return kept


def apply_token_budget(passages: list[RetrievedPassage], max_tokens: int) -> list[RetrievedPassage]:
    """Keep passages in order until the first one that would exceed the budget."""
    kept: list[RetrievedPassage] = []
    total = 0
    for passage in passages:
        tokens = estimate_tokens(passage.text)
        if total + tokens > max_tokens:
            break
        kept.append(passage)
        total += tokens
    return kept


def truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars].strip() + "..."


def build_summary(passages: list[RetrievedPassage]) -> str:
    """'Found N relevant passages from M notes (~T tokens)' with singular forms."""
    if not passages:
        return NO_CONTEXT_SUMMARY

    note_count = len({p.note_id for p in passages})
    total_tokens = sum(estimate_tokens(p.text) for p in passages)
    return " ".join([
        f"Found {len(passages)} relevant passage{'' if len(passages) == 1 else 's'}",
        f"from {note_count} note{'' if note_count == 1 else 's'}",
        f"(~{total_tokens} tokens)",
    ])


class ContextAssembler:
    """Selects, labels, and summarizes the passages an answer is grounded on."""

    def __init__(self, session_factory: async_sessionmaker, settings: RetrievalSettings) -> None:
        self.session_factory = session_factory
        self.settings = settings

    async def assemble(
        self,
        passages: list[RetrievedPassage],
        max_context_tokens: int | None = None,
    ) -> AssembledContext:
        """
        Build the context for one answer.

        Args:
            passages: Fused passages, best first
            max_context_tokens: Budget override (settings.max_context_tokens when None)

        Returns:
            AssembledContext: Selected passages with titles, citations, and summary
        """
        budget = max_context_tokens if max_context_tokens is not None else self.settings.max_context_tokens

        selected = apply_min_score(passages, self.settings.min_score)
        selected = apply_diversity(selected, self.settings.diversity_threshold)
        selected = apply_token_budget(selected, budget)
        selected = await self._with_titles(selected)

        logger.info(
            f"{__name__}:assemble - candidates={len(passages)} selected={len(selected)} budget={budget}"
        )
        return AssembledContext(
            passages=selected,
            summary=build_summary(selected),
            citations=self.build_citations(selected),
            total_tokens=sum(estimate_tokens(p.text) for p in selected),
        )

    def build_citations(self, passages: list[RetrievedPassage]) -> list[Citation]:
        """Citations for the first citation_limit passages."""
        return [
            Citation(
                note_id=p.note_id,
                chunk_id=p.chunk_id,
                title=p.note_title or fallback_title(p.note_id),
                text=truncate(p.text, self.settings.citation_chars),
                chunk_index=p.chunk_index,
            )
            for p in passages[: self.settings.citation_limit]
        ]

    async def _with_titles(self, passages: list[RetrievedPassage]) -> list[RetrievedPassage]:
        """Attach note titles. Lookup failure leaves titles unset."""
        if not passages:
            return passages
        try:
            async with self.session_factory() as session:
                titles = await note_crud.get_titles(session, (p.note_id for p in passages))
        except Exception as e:
            logger.warning(
                f"{__name__}:assemble - title lookup failed, using fallback titles",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            return passages
        return [p.model_copy(update={"note_title": titles.get(p.note_id)}) for p in passages]
