"""Local sentence-transformers embedder and text-query search helpers."""
from __future__ import annotations

import logging
import threading
from itertools import islice
from typing import Any, Callable, Iterable, Iterator, TypeVar

import numpy as np
from sentence_transformers import SentenceTransformer

from similarity_engine.config.settings import settings
from similarity_engine.retrieval.embedding import FloatEmbedding
from similarity_engine.retrieval.schemas import SimilarityQuery, SimilarityScore
from similarity_engine.retrieval.vector_search import find_closest_with_score
from similarity_engine.utils.device_utils import detect_device
from similarity_engine.utils.disk_space import has_space_for_model, huggingface_cache_dir

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Conservative download size estimate for small local embedding models
DEFAULT_MODEL_SIZE_GB = 0.5

# Serialize model initialization to avoid meta-tensor race across threads
_model_init_lock = threading.Lock()


class LocalEmbedder:
    """Turns text into normalised FloatEmbedding values and searches by text."""

    def __init__(
        self,
        model_name: str | None = None,
        device: str | None = None,
        max_seq_length: int | None = None,
        batch_size: int | None = None,
        check_disk_space: bool | None = None,
        model: Any | None = None,
    ):
        """Initialize the embedder.

        Args:
            model_name: SentenceTransformer model name (settings.embedding_model)
            device: 'auto', 'cpu' or 'cuda' (settings.embedding_device)
            max_seq_length: Maximum sequence length
            batch_size: Texts per encode call in embed_many/embed_range
            check_disk_space: Check the model cache has room before loading
            model: Pre-built object with a SentenceTransformer-style ``encode``;
                skips model loading entirely

        Raises:
            OSError: If insufficient disk space for model download
        """
        self.model_name = model_name or settings.embedding_model
        self.batch_size = batch_size or settings.embedding_batch_size
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be greater than 0, got {self.batch_size}")

        if model is not None:
            self.model = model
            return

        device = detect_device(device or settings.embedding_device)
        max_seq_length = max_seq_length or settings.embedding_max_seq_length
        if check_disk_space is None:
            check_disk_space = settings.embedding_check_disk_space
        if check_disk_space:
            available, _, message = has_space_for_model(DEFAULT_MODEL_SIZE_GB, huggingface_cache_dir())
            logger.info(message)
            if not available:
                raise OSError(
                    f"[Errno 28] No space left on device. {message}\n"
                    f"Free up space or point HF_HOME at a larger drive."
                )

        try:
            self.model = self._load(self.model_name, device, max_seq_length)
        except NotImplementedError as e:
            # PyTorch meta tensor device move errors on some installs
            if "Cannot copy out of meta tensor" not in str(e):
                raise
            logger.warning("Encountered meta tensor move error; reloading %s on CPU", self.model_name)
            self.model = self._load(self.model_name, "cpu", max_seq_length)

    @staticmethod
    def _load(model_name: str, device: str, max_seq_length: int) -> SentenceTransformer:
        with _model_init_lock:
            logger.info("Loading embedder: %s on %s", model_name, device)
            model = SentenceTransformer(model_name, device=device)
            model.max_seq_length = max_seq_length
            logger.info("Embedder loaded. Dimension: %s", model.get_sentence_embedding_dimension())
            return model

    def get_embedding_dim(self) -> int:
        """Get embedding dimension."""
        return self.model.get_sentence_embedding_dimension()

    def _encode(self, texts: list[str]) -> np.ndarray:
        vectors = self.model.encode(
            texts,
            batch_size=self.batch_size,
            show_progress_bar=False,
            normalize_embeddings=True,
            convert_to_numpy=True,
        )
        return np.asarray(vectors, dtype=np.float32).reshape(len(texts), -1)

    def embed(self, text: str) -> FloatEmbedding:
        """Embed a single text."""
        return FloatEmbedding(self._encode([text])[0])

    def embed_many(self, texts: Iterable[str]) -> list[FloatEmbedding]:
        """Embed several texts in one batched call."""
        texts = list(texts)
        if not texts:
            return []
        return [FloatEmbedding(row) for row in self._encode(texts)]

    def embed_range(
        self,
        items: Iterable[T],
        key: Callable[[T], str] | None = None,
    ) -> Iterator[tuple[T, FloatEmbedding]]:
        """Lazily pair each item with the embedding of its text.

        Items are read and encoded ``batch_size`` at a time, so the result
        can be fed straight into the selector without materializing it.

        Args:
            items: Items to embed
            key: Maps an item to the text to embed (defaults to ``str``)
        """
        to_text = key or str
        source = iter(items)
        while True:
            batch = list(islice(source, self.batch_size))
            if not batch:
                return
            vectors = self._encode([to_text(item) for item in batch])
            for item, row in zip(batch, vectors):
                yield item, FloatEmbedding(row)

    def find_closest(
        self,
        query: SimilarityQuery,
        candidates: Iterable[tuple[T, FloatEmbedding]],
    ) -> list[T]:
        """Items most similar to the query text, best first."""
        return [match.item for match in self.find_closest_with_score(query, candidates)]

    def find_closest_with_score(
        self,
        query: SimilarityQuery,
        candidates: Iterable[tuple[T, FloatEmbedding]],
    ) -> list[SimilarityScore[T]]:
        """Items most similar to the query text with their scores, best first."""
        return self.find_closest_to_text_with_score(
            query.search_text, candidates, query.max_results, query.min_similarity
        )

    def find_closest_to_text(
        self,
        text: str,
        candidates: Iterable[tuple[T, FloatEmbedding]],
        max_results: int,
        min_similarity: float | None = None,
    ) -> list[T]:
        return [
            match.item
            for match in self.find_closest_to_text_with_score(text, candidates, max_results, min_similarity)
        ]

    def find_closest_to_text_with_score(
        self,
        text: str,
        candidates: Iterable[tuple[T, FloatEmbedding]],
        max_results: int,
        min_similarity: float | None = None,
    ) -> list[SimilarityScore[T]]:
        """Embed ``text`` and select the closest candidates to it.

        The query is embedded before any candidate is read.
        """
        return find_closest_with_score(self.embed(text), candidates, max_results, min_similarity)
