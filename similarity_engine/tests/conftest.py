from __future__ import annotations

from pathlib import Path
import sys

import pytest


# Ensure repo root is on sys.path for module imports during tests
_tests_dir = Path(__file__).resolve().parent
_project_root = _tests_dir.parent  # similarity_engine/
_repo_root = _project_root.parent  # repo root
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))


def pytest_configure(config):
    config.addinivalue_line("markers", "external: needs a downloaded embedding model")


class ScoreStub:
    """Embedding whose similarity to any target is a fixed value."""

    def __init__(self, value: float):
        self.value = value

    def similarity(self, other) -> float:
        return other.value


class TargetStub:
    """Target embedding that reads the candidate's fixed value and counts calls."""

    def __init__(self):
        self.calls = 0

    def similarity(self, other) -> float:
        self.calls += 1
        return other.value


@pytest.fixture
def target() -> TargetStub:
    return TargetStub()


@pytest.fixture
def make_candidates():
    def _make(pairs):
        return [(item, ScoreStub(value)) for item, value in pairs]

    return _make


@pytest.fixture
def score_stub():
    return ScoreStub
