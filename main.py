"""
Podcast transcript search.

Usage:
    uv run python main.py init-db                                  # Create tables + match function
    uv run python main.py ingest --csv data/transcripts.csv        # Embed and store transcript chunks
    uv run python main.py search --query "predictions I got wrong" # Run one search from the terminal
    uv run python main.py serve                                    # Start the HTTP API
"""

import argparse
import json
import sys
from pathlib import Path

from podsearch.config.settings import settings
from podsearch.logger import setup_logging, get_logger

setup_logging()
logger = get_logger("main")


def format_timestamp(seconds: float) -> str:
    """H:MM:SS, or M:SS under an hour."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def run_init_db() -> int:
    from podsearch.db.connection import check_connection, init_schema

    init_schema()
    if not check_connection():
        logger.error("Database unavailable")
        return 1
    return 0


def run_ingest(csv_path: Path) -> int:
    from podsearch.db.connection import check_connection, init_schema
    from podsearch.ingestion.pipeline import IngestionPipeline

    init_schema()
    if not check_connection():
        logger.error("Database unavailable")
        return 1

    count = IngestionPipeline().ingest_csv(csv_path)
    logger.info("ready", chunks=count)
    return 0


def run_search(query: str, save: bool) -> int:
    from podsearch.search.engine import SearchEngine

    response = SearchEngine.build().search(query)

    print(f"\n{'='*70}")
    print(f" Query: {query[:100]}")
    print(f" Searched for: {', '.join(response.generated_phrases)}")
    print(f" Showing {len(response.results)} of {response.total_found} matches")
    print(f"{'='*70}\n")

    for i, r in enumerate(response.results, 1):
        print(f"  [{i}] {r.similarity:.3f} ({r.match_count} phrase matches)")
        print(f"      {r.episode_title} @ {format_timestamp(r.start_timestamp)}")
        print(f"      Matched: {r.matched_phrase}")
        print(f"      Text: {r.content[:200]}...\n")

    if save:
        output_path = Path(settings.output_dir) / "search_results.json"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(response.model_dump(), f, indent=2)
        logger.info("search_saved", path=str(output_path))

    return 0


def run_serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("podsearch.api.app:app", host=host, port=port)
    return 0


# CLI
def main() -> None:
    parser = argparse.ArgumentParser(description="Podcast transcript search")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="create tables and the match_transcripts function")

    ingest = sub.add_parser("ingest", help="embed and store transcript chunks")
    ingest.add_argument("--csv", type=Path, default=Path(settings.data_dir) / "transcripts.csv")

    search = sub.add_parser("search", help="run one search and print ranked results")
    search.add_argument("--query", type=str, required=True)
    search.add_argument("--save", action="store_true", help="write results to the output dir")

    serve = sub.add_parser("serve", help="start the HTTP API")
    serve.add_argument("--host", type=str, default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)

    args = parser.parse_args()

    if args.command == "init-db":
        code = run_init_db()
    elif args.command == "ingest":
        code = run_ingest(args.csv)
    elif args.command == "search":
        code = run_search(args.query, args.save)
    else:
        code = run_serve(args.host, args.port)
    sys.exit(code)


if __name__ == "__main__":
    main()
