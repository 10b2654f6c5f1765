"""Free-space checks run before an embedding model is downloaded."""
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

# Headroom on top of the model size for temporary download files
SPACE_BUFFER = 1.2


def free_space_gb(path: Path | str) -> float:
    """Free space in GB at ``path`` (or its nearest existing parent), -1.0 if unknown."""
    try:
        target = Path(path).resolve()
        while not target.exists() and target != target.parent:
            target = target.parent
        return shutil.disk_usage(target).free / (1024**3)
    except OSError as e:
        logger.warning("Unable to determine free disk space for %s: %s", path, e)
        return -1.0


def huggingface_cache_dir() -> Path:
    """Directory where sentence-transformers stores downloaded models."""
    hf_home = os.getenv("HF_HOME")
    if hf_home:
        return Path(hf_home) / "hub"
    cache_home = os.getenv("XDG_CACHE_HOME")
    base = Path(cache_home) if cache_home else Path.home() / ".cache"
    return base / "huggingface" / "hub"


def has_space_for_model(
    required_gb: float,
    cache_dir: Path | str | None = None,
) -> tuple[bool, float, str]:
    """Check whether ``required_gb`` (plus buffer) fits into the model cache.

    Returns:
        Tuple of (is_available, free_gb, message). When free space cannot be
        determined the check passes with free_gb == -1.0.
    """
    free_gb = free_space_gb(cache_dir or huggingface_cache_dir())
    if free_gb < 0:
        return True, -1.0, "Unable to check disk space, proceeding"

    needed = required_gb * SPACE_BUFFER
    if free_gb >= needed:
        return True, free_gb, f"Sufficient disk space: {free_gb:.2f} GB available (requires {required_gb:.2f} GB)"
    return (
        False,
        free_gb,
        f"Insufficient disk space: {free_gb:.2f} GB available, "
        f"{needed:.2f} GB required including download buffer",
    )
