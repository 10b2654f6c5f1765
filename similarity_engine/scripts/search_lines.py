"""Find the lines of a text file most similar to a query.

Lines are embedded in batches while they are read, so files of any size are
searched with memory proportional to --top-k.

Usage:
    python -m similarity_engine.scripts.search_lines "query text" --file notes.txt --top-k 5
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from dotenv import load_dotenv

# Add project root to path if not already installed
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from similarity_engine.config.settings import settings
from similarity_engine.retrieval.embedder import LocalEmbedder
from similarity_engine.retrieval.schemas import SimilarityQuery, SimilarityScore
from similarity_engine.utils.logging_manager import setup_logging

logger = logging.getLogger(__name__)


def _non_empty_lines(stream: TextIO) -> Iterable[str]:
    for line in stream:
        line = line.strip()
        if line:
            yield line


def search_lines(
    embedder: LocalEmbedder,
    query: SimilarityQuery,
    lines: Iterable[str],
) -> list[SimilarityScore[str]]:
    """Rank ``lines`` against the query text."""
    return embedder.find_closest_with_score(query, embedder.embed_range(lines))


def main(argv: list[str] | None = None, embedder: LocalEmbedder | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find the lines of a file most similar to a query")
    parser.add_argument("query", help="Search text")
    parser.add_argument("--file", type=Path, default=None, help="Text file to search (default: stdin)")
    parser.add_argument("--top-k", type=int, default=None, help="Maximum number of results")
    parser.add_argument("--min-similarity", type=float, default=None, help="Drop results below this score")
    parser.add_argument("--log-level", default=None, help="Logging level (default: settings.log_level)")
    args = parser.parse_args(argv)

    load_dotenv()
    setup_logging(args.log_level or settings.log_level)

    query = SimilarityQuery(
        search_text=args.query,
        max_results=args.top_k if args.top_k is not None else settings.search_max_results,
        min_similarity=args.min_similarity if args.min_similarity is not None else settings.search_min_similarity,
    )
    if query.max_results <= 0:
        parser.error("--top-k must be greater than 0")

    embedder = embedder or LocalEmbedder()
    if args.file is None:
        results = search_lines(embedder, query, _non_empty_lines(sys.stdin))
    else:
        with args.file.open("r", encoding="utf-8") as f:
            results = search_lines(embedder, query, _non_empty_lines(f))

    if not results:
        print("No matching lines.")
        return 1

    for rank, match in enumerate(results, 1):
        print(f"{rank:>3}. {match.similarity:.4f}  {match.item}")
    logger.info("Returned %d result(s) for query %r", len(results), args.query)
    return 0


if __name__ == "__main__":
    sys.exit(main())
