"""Embedding capability and the float vector embedding used by LocalEmbedder."""
from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Embedding(Protocol):
    """Anything that can score itself against another embedding of its kind.

    Higher scores mean more similar. The selector relies on nothing else.
    """

    def similarity(self, other) -> float: ...


class FloatEmbedding:
    """Fixed-size float32 vector; similarity is the dot product.

    Vectors produced by LocalEmbedder are L2-normalised, so the dot product
    equals cosine similarity and lies in [-1, 1].
    """

    __slots__ = ("_values",)

    def __init__(self, values: np.ndarray):
        values = np.array(values, dtype=np.float32)
        if values.ndim != 1:
            raise ValueError(f"Embedding must be one-dimensional, got shape {values.shape}")
        values.setflags(write=False)
        self._values = values

    @classmethod
    def from_values(cls, values: Iterable[float], normalize: bool = False) -> "FloatEmbedding":
        arr = np.asarray(values if isinstance(values, np.ndarray) else list(values), dtype=np.float32)
        if normalize and arr.size:
            norm = float(np.linalg.norm(arr))
            if norm > 0:
                arr = arr / norm
        return cls(arr)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def dim(self) -> int:
        return int(self._values.shape[0])

    def __len__(self) -> int:
        return self.dim

    def similarity(self, other: "FloatEmbedding") -> float:
        if other.dim != self.dim:
            raise ValueError(
                f"Cannot compare embeddings of different dimensions ({self.dim} vs {other.dim})"
            )
        return float(np.dot(self._values, other._values))

    def tolist(self) -> list[float]:
        return self._values.tolist()

    def __eq__(self, other) -> bool:
        if not isinstance(other, FloatEmbedding):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __repr__(self) -> str:
        return f"FloatEmbedding(dim={self.dim})"
