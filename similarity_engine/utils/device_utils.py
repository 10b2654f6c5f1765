"""Device selection for the local embedding model."""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def detect_device(preferred: str = "auto") -> str:
    """Resolve the device the embedding model should run on.

    Args:
        preferred: "auto" (CUDA if available, else CPU), "cuda" (same, but
            logged as a fallback when CUDA is missing) or "cpu".

    Returns:
        Device string: "cuda" or "cpu"
    """
    preferred = (preferred or "auto").lower()
    if preferred == "cpu":
        return "cpu"
    if preferred not in ("auto", "cuda"):
        raise ValueError(f"Unsupported device: {preferred!r}")

    try:
        import torch
    except ImportError:
        logger.warning("PyTorch not available. Using CPU for embeddings.")
        return "cpu"

    if torch.cuda.is_available():
        logger.info(
            "GPU detected: %s (device count: %d). Using CUDA for embeddings.",
            torch.cuda.get_device_name(0),
            torch.cuda.device_count(),
        )
        return "cuda"

    if preferred == "cuda":
        logger.warning("CUDA requested but not available. Falling back to CPU.")
    else:
        logger.info("CUDA not available. Using CPU for embeddings.")
    return "cpu"
