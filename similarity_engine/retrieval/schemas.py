"""Result and query types shared by the selector and the embedder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from similarity_engine.config.settings import settings

T = TypeVar("T")


@dataclass(frozen=True)
class SimilarityScore(Generic[T]):
    """A matched item with its similarity to the target.

    ``index`` is the zero-based position of the candidate in its source and
    only serves to order equal similarities (later candidates rank higher).
    """

    similarity: float
    item: T
    index: int


class SimilarityQuery(BaseModel):
    """Search text plus the result limits applied to it."""

    search_text: str = Field(..., description="Text embedded to produce the search target")
    max_results: int = Field(default_factory=lambda: settings.search_max_results)
    min_similarity: Optional[float] = Field(default_factory=lambda: settings.search_min_similarity)
