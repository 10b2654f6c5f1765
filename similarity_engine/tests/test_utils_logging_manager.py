from __future__ import annotations

import logging

import pytest

from similarity_engine.utils.logging_manager import resolve_level, setup_logging


def test_setup_logging_idempotent():
    root = logging.getLogger()
    root.handlers.clear()

    setup_logging()
    first_count = len(root.handlers)

    setup_logging()
    second_count = len(root.handlers)

    assert first_count == second_count == 1


def test_setup_logging_accepts_level_name():
    root = logging.getLogger()
    root.handlers.clear()

    setup_logging("debug")

    assert root.level == logging.DEBUG
    root.setLevel(logging.WARNING)


def test_resolve_level():
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level(" warning ") == logging.WARNING
    with pytest.raises(ValueError, match="Unknown log level"):
        resolve_level("chatty")


def test_selector_logs_summary_at_debug(caplog):
    from similarity_engine.retrieval.embedding import FloatEmbedding
    from similarity_engine.retrieval.vector_search import find_closest

    target = FloatEmbedding.from_values([1.0, 0.0])
    candidates = [("a", FloatEmbedding.from_values([1.0, 0.0])), ("b", FloatEmbedding.from_values([0.0, 1.0]))]

    with caplog.at_level(logging.DEBUG, logger="similarity_engine.retrieval.vector_search"):
        find_closest(target, candidates, max_results=1)

    assert "Selected 1 of 2 candidates" in caplog.text
