from __future__ import annotations

import io

import numpy as np
import pytest

from similarity_engine.retrieval.embedder import LocalEmbedder
from similarity_engine.retrieval.schemas import SimilarityQuery
from similarity_engine.scripts import search_lines as script

VECTORS = {
    "cats purr": [1.0, 0.0],
    "kittens purr softly": [0.8, 0.6],
    "trains are late": [0.0, 1.0],
    "cat": [1.0, 0.0],
}


class FakeModel:
    def encode(self, texts, **kwargs):
        return np.asarray([VECTORS.get(t, [0.0, 0.0]) for t in texts], dtype=np.float32)


@pytest.fixture
def embedder() -> LocalEmbedder:
    return LocalEmbedder(model=FakeModel(), batch_size=2)


def test_search_lines_ranks_lines(embedder):
    query = SimilarityQuery(search_text="cat", max_results=2)
    results = script.search_lines(embedder, query, ["trains are late", "kittens purr softly", "cats purr"])
    assert [m.item for m in results] == ["cats purr", "kittens purr softly"]


def test_main_reads_file(tmp_path, embedder, capsys):
    source = tmp_path / "lines.txt"
    source.write_text("cats purr\n\ntrains are late\nkittens purr softly\n", encoding="utf-8")

    code = script.main(["cat", "--file", str(source), "--top-k", "1"], embedder=embedder)

    out = capsys.readouterr().out
    assert code == 0
    assert "cats purr" in out
    assert "trains" not in out


def test_main_reads_stdin_with_floor(monkeypatch, embedder, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("trains are late\n"))

    code = script.main(["cat", "--min-similarity", "0.5"], embedder=embedder)

    assert code == 1
    assert "No matching lines." in capsys.readouterr().out


def test_main_rejects_non_positive_top_k(embedder):
    with pytest.raises(SystemExit):
        script.main(["cat", "--top-k", "0"], embedder=embedder)
