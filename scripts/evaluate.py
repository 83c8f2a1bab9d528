"""
Check search results against labelled queries.

data/eval_queries.json: [{"query": "...", "expected_ids": [42, 43]}, ...]
A query counts as a hit when any expected chunk id is in the returned results.

Usage: uv run python scripts/evaluate.py
"""

import json
from pathlib import Path

from podsearch.search.engine import SearchEngine
from podsearch.search.models import SearchResponse


def is_hit(response: SearchResponse, expected_ids: list[int]) -> bool:
    returned = {r.id for r in response.results}
    return any(i in returned for i in expected_ids)


def evaluate(path: Path = Path("data/eval_queries.json"), engine: SearchEngine | None = None) -> float:
    labelled = json.loads(path.read_text())
    engine = engine or SearchEngine.build()

    print(f"\n{'='*50}")
    print(f" Evaluation: {len(labelled)} queries")
    print(f"{'='*50}\n")

    hits = 0
    for i, item in enumerate(labelled, 1):
        response = engine.search(item["query"])
        hit = is_hit(response, item["expected_ids"])
        hits += hit
        rank = next(
            (n for n, r in enumerate(response.results, 1) if r.id in item["expected_ids"]),
            None,
        )
        print(f"Query {i}: {item['query'][:60]!r} -> {'hit at ' + str(rank) if hit else 'miss'}")

    total = len(labelled)
    hit_rate = hits / total if total else 0
    print(f"\n  Result: {hits}/{total} hits ({hit_rate:.0%})\n")
    return hit_rate


if __name__ == "__main__":
    evaluate()
