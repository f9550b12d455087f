"""
Hybrid retrieval and context assembly.
"""

from notechat.core.retrieval.context_assembler import ContextAssembler
from notechat.core.retrieval.fusion import reciprocal_rank_fusion
from notechat.core.retrieval.hybrid_retriever import HybridRetriever

__all__ = ["ContextAssembler", "HybridRetriever", "reciprocal_rank_fusion"]
