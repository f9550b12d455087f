"""
Reciprocal rank fusion.

Combines the dense and sparse ranked lists into one ranking:
score(d) = sum over lists containing d of 1 / (k + rank + 1), rank 0-based.

Dependencies: None
System role: Hybrid retrieval score combination
"""

import math
from uuid import UUID

from notechat.models.retrieval import PassageSource, RetrievedPassage

DEFAULT_RRF_K = 60


def reciprocal_rank_fusion(
    dense: list[RetrievedPassage],
    sparse: list[RetrievedPassage],
    k: int = DEFAULT_RRF_K,
) -> list[RetrievedPassage]:
    """
    Fuse two ranked lists with RRF.

    Order is fused score descending; ties go to the passage ranked earlier
    in the dense list, then earlier in the sparse list. Deterministic for
    identical inputs.

    Args:
        dense: Dense results, best first
        sparse: Sparse results, best first
        k: Fusion constant

    Returns:
        list[RetrievedPassage]: Unique passages with source=FUSED and the fused score
    """
    scores: dict[UUID, float] = {}
    passages: dict[UUID, RetrievedPassage] = {}
    dense_rank: dict[UUID, int] = {}
    sparse_rank: dict[UUID, int] = {}

    for ranks, results in ((dense_rank, dense), (sparse_rank, sparse)):
        for rank, passage in enumerate(results):
            if passage.chunk_id in ranks:
                continue
            ranks[passage.chunk_id] = rank
            scores[passage.chunk_id] = scores.get(passage.chunk_id, 0.0) + 1.0 / (k + rank + 1)
            passages.setdefault(passage.chunk_id, passage)

    ordered = sorted(
        scores,
        key=lambda cid: (
            -scores[cid],
            dense_rank.get(cid, math.inf),
            sparse_rank.get(cid, math.inf),
        ),
    )
    return [
        passages[cid].model_copy(update={"score": scores[cid], "source": PassageSource.FUSED})
        for cid in ordered
    ]
