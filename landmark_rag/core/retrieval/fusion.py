"""
Rank fusion and diversification.

Pure functions over ranked SearchHit lists:
- reciprocal_rank_fusion merges several rankings of the same corpus
- maximal_marginal_relevance re-ranks one list trading relevance for diversity

Dependencies: numpy, landmark_rag.models.search
System role: Post-retrieval ranking
"""

from typing import Callable, Iterable, Sequence

import numpy as np

from landmark_rag.models.search import SearchHit


def reciprocal_rank_fusion(
    ranked_lists: Iterable[Iterable[SearchHit]],
    top_k: int,
    k: int = 60,
) -> list[SearchHit]:
    """
    Fuse ranked lists with Reciprocal Rank Fusion.

    Each list contributes 1 / (k + rank) for every id it contains, with
    1-based ranks. Contributions are summed per id. Only positions matter;
    the input scores are ignored.

    Args:
        ranked_lists: Best-first lists of hits
        top_k: Number of fused hits to return
        k: Rank damping constant

    Returns:
        list[SearchHit]: Hits carrying fused scores, descending. Ties keep
        first-seen order.

    Example:
        >>> fused = reciprocal_rank_fusion([[a, b], [b, c]], top_k=2)
    """
    if top_k <= 0:
        return []

    scores: dict[str, float] = {}
    for hits in ranked_lists:
        for rank, hit in enumerate(hits, start=1):
            scores[hit.id] = scores.get(hit.id, 0.0) + 1.0 / (k + rank)

    # sorted() is stable, dict preserves insertion order
    ordered = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [SearchHit(id=hit_id, score=score) for hit_id, score in ordered[:top_k]]


def maximal_marginal_relevance(
    candidates: Sequence[SearchHit],
    similarity: Callable[[str, str], float],
    lambda_mult: float = 0.7,
    top_k: int = 5,
) -> list[SearchHit]:
    """
    Greedy Maximal Marginal Relevance selection.

    Each step picks the candidate maximizing
    lambda_mult * score - (1 - lambda_mult) * max similarity to the picks so far.
    The first pick has no penalty.

    Args:
        candidates: Hits with query relevance scores (duplicates by id are dropped)
        similarity: Pairwise chunk similarity by id
        lambda_mult: 1.0 is pure relevance, 0.0 is pure diversity
        top_k: Number of hits to select

    Returns:
        list[SearchHit]: Selected hits in pick order with their original scores
    """
    if not candidates or top_k <= 0:
        return []

    seen: set[str] = set()
    unique = []
    for hit in candidates:
        if hit.id not in seen:
            seen.add(hit.id)
            unique.append(hit)
    remaining = sorted(unique, key=lambda hit: hit.score, reverse=True)

    selected: list[SearchHit] = []
    while len(selected) < top_k and remaining:
        best = remaining[0]
        best_mmr = float("-inf")
        for candidate in remaining:
            redundancy = max(
                (similarity(candidate.id, picked.id) for picked in selected),
                default=0.0,
            )
            mmr = lambda_mult * candidate.score - (1.0 - lambda_mult) * redundancy
            if mmr > best_mmr:
                best_mmr = mmr
                best = candidate

        selected.append(best)
        remaining = [hit for hit in remaining if hit.id != best.id]

    return selected


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors; 0.0 when either is all zeros."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    denominator = np.linalg.norm(va) * np.linalg.norm(vb)
    if denominator == 0:
        return 0.0
    return float(np.dot(va, vb) / denominator)
