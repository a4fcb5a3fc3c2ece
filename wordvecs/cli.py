"""CLI command for loading a model and printing nearest neighbors"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from wordvecs.config import config
from wordvecs.models.query import NeighborQuery
from wordvecs.services.binary_reader import ModelLoadError
from wordvecs.services.loader import LoggingLoadObserver, load_vocabulary
from wordvecs.services.search import SearchService
from wordvecs.services.telemetry import get_telemetry_service


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for CLI (stdout)"""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordvecs",
        description="Load a word2vec binary model and print the nearest neighbors of words",
    )
    parser.add_argument("path", nargs="?", default=None, help="word2vec binary model file")
    parser.add_argument("words", nargs="*", help="words to look up")
    parser.add_argument(
        "--limit", type=int, default=None, help="maximum number of entries to load"
    )
    parser.add_argument(
        "--count", type=int, default=None, help="number of neighbors to print per word"
    )
    parser.add_argument("--min-score", type=float, default=None, help="minimum similarity score")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the wordvecs CLI

    Returns:
        int: Exit code (0 for success, 1 for failure)
    """
    # Load .env file first (won't override existing env vars)
    if Path(".env").exists():
        load_dotenv()

    args = build_parser().parse_args(argv)
    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    path = args.path or config.vectors_path
    limit = config.load_limit if args.limit is None else args.limit
    count = config.neighbor_count if args.count is None else args.count
    telemetry = get_telemetry_service()

    try:
        queries = [
            NeighborQuery(token=word, limit=count, min_score=args.min_score)
            for word in args.words
        ]
    except ValidationError as e:
        logger.error(f"Invalid query: {e}")
        return 1

    observer = LoggingLoadObserver()
    try:
        logger.info(f"Loading {path} (limit {limit})")
        with telemetry.span("load_vocabulary", {"load.limit": limit}):
            vocabulary = load_vocabulary(path, limit, observer=observer)
        telemetry.log_load(str(path), summary=observer.summary)
    except ModelLoadError as e:
        telemetry.log_load(str(path), error=e)
        logger.error(f"Load failed: {e}")
        return 1
    except Exception as e:
        telemetry.log_load(str(path), error=e)
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1

    search_service = SearchService(vocabulary, telemetry=telemetry)
    for query in queries:
        output = search_service.query(query)
        marker = "" if output.query_info.in_vocabulary else " (not in vocabulary)"
        print(f"\n{query.token}{marker}")
        for neighbor in output.results:
            print(f"  {neighbor.rank:>3}. {neighbor.token:<30} {neighbor.score:.4f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
