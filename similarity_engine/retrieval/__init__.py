"""Top-K similarity selection and its embedding types."""

from similarity_engine.retrieval.embedding import Embedding, FloatEmbedding
from similarity_engine.retrieval.schemas import SimilarityQuery, SimilarityScore
from similarity_engine.retrieval.vector_search import (
    UNBOUNDED,
    InvalidArgumentError,
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
