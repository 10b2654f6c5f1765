from __future__ import annotations

from pathlib import Path

from similarity_engine.utils import disk_space
from similarity_engine.utils.disk_space import free_space_gb, has_space_for_model, huggingface_cache_dir


def test_free_space_for_missing_path_uses_parent(tmp_path):
    assert free_space_gb(tmp_path / "not" / "created" / "yet") > 0


def test_cache_dir_respects_hf_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HF_HOME", str(tmp_path))
    assert huggingface_cache_dir() == tmp_path / "hub"


def test_cache_dir_defaults_under_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv("HF_HOME", raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    assert huggingface_cache_dir() == Path(tmp_path) / "huggingface" / "hub"


def test_has_space_for_model(monkeypatch, tmp_path):
    monkeypatch.setattr(disk_space, "free_space_gb", lambda path: 10.0)
    assert has_space_for_model(1.0, tmp_path)[0] is True

    available, free_gb, message = has_space_for_model(9.0, tmp_path)
    assert available is False
    assert free_gb == 10.0
    assert "Insufficient" in message


def test_unknown_free_space_passes(monkeypatch, tmp_path):
    monkeypatch.setattr(disk_space, "free_space_gb", lambda path: -1.0)
    assert has_space_for_model(100.0, tmp_path) == (True, -1.0, "Unable to check disk space, proceeding")
