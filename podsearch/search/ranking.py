"""
Result aggregation and ranking.

Per-phrase result lists are folded by chunk id. A chunk's score is its best
single similarity, boosted for every additional phrase that also found it:

    score = max_similarity * (1 + min((count - 1) * step, cap))

With the defaults (step 0.05, cap 0.5) ten or more corroborating phrases
give the full +50%.
"""

from podsearch.config.settings import settings
from podsearch.db.models import TranscriptChunk
from podsearch.db.store import TranscriptStore
from podsearch.search.models import AggregatedMatch, ScoredResult
from podsearch.logger import get_logger

logger = get_logger(__name__)


def boosted_score(
    max_similarity: float,
    count: int,
    step: float | None = None,
    cap: float | None = None,
) -> float:
    step = settings.frequency_boost_step if step is None else step
    cap = settings.frequency_boost_cap if cap is None else cap
    boost = min((count - 1) * step, cap)
    return max_similarity * (1 + boost)


def is_podcast_meta(content: str, ignored_meta: list[str] | None = None) -> bool:
    """Outros and housekeeping match many queries but say nothing."""
    if ignored_meta is None:
        ignored_meta = settings.ignored_podcast_meta
    lowered = content.lower()
    return any(phrase.lower() in lowered for phrase in ignored_meta)


def fold_matches(
    phrase_results: list[list[TranscriptChunk]],
    ignored_meta: list[str] | None = None,
) -> dict[int, AggregatedMatch]:
    """Merge every phrase's chunks by id. Dict order is first-seen order."""
    matches: dict[int, AggregatedMatch] = {}

    for chunks in phrase_results:
        for chunk in chunks:
            if is_podcast_meta(chunk.content, ignored_meta):
                continue

            existing = matches.get(chunk.id)
            if existing is None:
                matches[chunk.id] = AggregatedMatch.first(chunk)
            else:
                existing.add(chunk)

    return matches


class ResultAggregator:
    def __init__(self, store: TranscriptStore | None = None):
        self.store = store or TranscriptStore()
        self.max_results = settings.max_results
        self.boost_step = settings.frequency_boost_step
        self.boost_cap = settings.frequency_boost_cap
        self.ignored_meta = list(settings.ignored_podcast_meta)
        self.unknown_title = settings.unknown_episode_title

    def aggregate(
        self, phrase_results: list[list[TranscriptChunk]]
    ) -> tuple[list[ScoredResult], int]:
        """
        Fold, score, sort, title and truncate.

        Returns the top results and the number of distinct chunks found
        before truncation.
        """
        matches = fold_matches(phrase_results, self.ignored_meta)

        scored = [
            (boosted_score(m.max_similarity, m.count, self.boost_step, self.boost_cap), m)
            for m in matches.values()
        ]
        # sort is stable, so equal scores keep first-seen order
        scored.sort(key=lambda item: item[0], reverse=True)

        titles = self._lookup_titles({m.chunk.episode_id for _, m in scored})

        results = [
            ScoredResult(
                id=m.chunk.id,
                episode_id=m.chunk.episode_id,
                content=m.chunk.content,
                start_timestamp=m.chunk.start_timestamp,
                url=m.chunk.url,
                similarity=score,
                match_count=m.count,
                matched_phrase=m.phrases[0],
                episode_title=titles.get(m.chunk.episode_id) or self.unknown_title,
            )
            for score, m in scored
        ]

        logger.info(
            "aggregation_done",
            chunks_in=sum(len(r) for r in phrase_results),
            distinct=len(results),
            returned=min(len(results), self.max_results),
        )
        return results[: self.max_results], len(results)

    def _lookup_titles(self, episode_ids: set[str]) -> dict[str, str]:
        if not episode_ids:
            return {}
        try:
            return self.store.lookup_titles(episode_ids)
        except Exception as e:
            logger.warning(
                "episode_title_lookup_failed", episodes=len(episode_ids), error=str(e)
            )
            return {}
