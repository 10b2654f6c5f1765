"""Exact top-K similarity search over embedded candidates."""

from similarity_engine.retrieval import (
    UNBOUNDED,
    Embedding,
    FloatEmbedding,
    InvalidArgumentError,
    SimilarityQuery,
    SimilarityScore,
    find_closest,
    find_closest_with_score,
    similarity,
)

__all__ = [
    "UNBOUNDED",
    "Embedding",
    "FloatEmbedding",
    "InvalidArgumentError",
    "SimilarityQuery",
    "SimilarityScore",
    "find_closest",
    "find_closest_with_score",
    "similarity",
]
