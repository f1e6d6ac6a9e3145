"""
Retrieval algorithms.

Exports:
  - reciprocal_rank_fusion, maximal_marginal_relevance, cosine_similarity
  - HydeExpander
"""

from landmark_rag.core.retrieval.fusion import (
    cosine_similarity,
    maximal_marginal_relevance,
    reciprocal_rank_fusion,
)
from landmark_rag.core.retrieval.hyde import HydeExpander

__all__ = [
    "HydeExpander",
    "cosine_similarity",
    "maximal_marginal_relevance",
    "reciprocal_rank_fusion",
]
