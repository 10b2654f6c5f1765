"""Exact top-K selection over a single pass of (item, embedding) candidates."""
from __future__ import annotations

import heapq
import logging
import sys
from typing import Any, Iterable, TypeVar

from similarity_engine.retrieval.embedding import Embedding
from similarity_engine.retrieval.schemas import SimilarityScore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Pass as max_results when no cap is wanted
UNBOUNDED = sys.maxsize

# Floor used when min_similarity is omitted: nothing is filtered out
NO_FLOOR = -sys.float_info.max


class InvalidArgumentError(ValueError):
    """Raised for selector arguments that can never produce a result."""


def similarity(a: Embedding, b: Embedding) -> float:
    """Similarity of two embeddings of the same kind."""
    return a.similarity(b)


def find_closest_with_score(
    target: Embedding,
    candidates: Iterable[tuple[T, Embedding]],
    max_results: int,
    min_similarity: float | None = None,
) -> list[SimilarityScore[T]]:
    """Return the ``max_results`` candidates most similar to ``target``.

    Candidates are consumed exactly once, in order, and may be an unbounded
    generator. Each one is scored once; memory stays proportional to
    ``max_results``.

    Args:
        target: Embedding to search for.
        candidates: Iterable of (item, embedding) pairs.
        max_results: Upper bound on result count. Pass UNBOUNDED for no limit.
        min_similarity: Candidates scoring below this are never returned.

    Returns:
        Scores ordered from most to least similar. Equal similarities are
        ordered by position in ``candidates``, later first.

    Raises:
        InvalidArgumentError: If max_results is not positive. Nothing is
            consumed from ``candidates`` in that case.
    """
    if max_results <= 0:
        raise InvalidArgumentError(f"max_results must be greater than 0, got {max_results}")

    floor = NO_FLOOR if min_similarity is None else min_similarity

    # Min-heap of (similarity, index, item); the root is the current worst match.
    # Indices are unique, so items are never compared.
    top_k: list[tuple[float, int, Any]] = []
    source = iter(candidates)
    index = 0

    # Populate the working set with the first qualifying candidates
    for item, embedding in source:
        score = target.similarity(embedding)
        if score >= floor:
            heapq.heappush(top_k, (score, index, item))
        index += 1
        if len(top_k) >= max_results:
            break

    # Only candidates strictly better than the worst so far can get in.
    # The worst member already passed the floor, so the floor holds here too.
    if len(top_k) >= max_results:
        for item, embedding in source:
            score = target.similarity(embedding)
            if score > top_k[0][0]:
                heapq.heapreplace(top_k, (score, index, item))
            index += 1

    logger.debug(
        "Selected %d of %d candidates (max_results=%s, min_similarity=%s)",
        len(top_k),
        index,
        max_results,
        min_similarity,
    )

    return [
        SimilarityScore(similarity=score, item=item, index=idx)
        for score, idx, item in sorted(top_k, key=lambda entry: (entry[0], entry[1]), reverse=True)
    ]


def find_closest(
    target: Embedding,
    candidates: Iterable[tuple[T, Embedding]],
    max_results: int,
    min_similarity: float | None = None,
) -> list[T]:
    """Same selection as find_closest_with_score, returning only the items."""
    return [
        match.item
        for match in find_closest_with_score(target, candidates, max_results, min_similarity)
    ]
