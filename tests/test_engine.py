"""End-to-end pipeline with fake LLM, embeddings and store."""

import pytest

from podsearch.search.engine import SearchEngine
from podsearch.search.exceptions import PhraseGenerationError
from podsearch.search.prompts import (
    CURATION_PROMPT,
    EXPANSION_SYSTEM_PREFIX,
    GENERAL_PROMPT,
    INTENT_CLASSIFICATION_PROMPT,
)

from fakes import FakeEmbeddingService, FakeLLMClient, FakeTranscriptStore, make_chunk


def scripted_llm(intent_reply: str, expansion_reply: str) -> FakeLLMClient:
    def respond(prompt, system):
        if system == INTENT_CLASSIFICATION_PROMPT:
            return intent_reply
        return expansion_reply

    return FakeLLMClient(responder=respond)


def build_engine(llm, store=None, embedder=None) -> SearchEngine:
    return SearchEngine.build(
        llm_client=llm,
        embedding_service=embedder or FakeEmbeddingService(),
        store=store or FakeTranscriptStore(),
    )


def test_general_intent_uses_general_template():
    llm = scripted_llm("GENERAL", "the business model of Airbnb\nstaying in an Airbnb")
    engine = build_engine(llm)

    engine.search("Airbnb")

    expansion_call = llm.calls[1]
    assert expansion_call["system"] == EXPANSION_SYSTEM_PREFIX + GENERAL_PROMPT.render()
    assert expansion_call["system"] != EXPANSION_SYSTEM_PREFIX + CURATION_PROMPT.render()


def test_unrecognised_intent_reply_uses_general_template():
    llm = scripted_llm("I think this is a curation query", "Airbnb hosts")
    engine = build_engine(llm)

    engine.search("Airbnb")

    assert llm.calls[1]["system"] == EXPANSION_SYSTEM_PREFIX + GENERAL_PROMPT.render()


def test_full_search_ranks_and_titles_results():
    store = FakeTranscriptStore(
        results={
            "this blew my mind": [
                make_chunk(42, 0.6, episode_id="ep-9"),
                make_chunk(7, 0.62, episode_id="ep-3"),
            ],
            "holy cow": [make_chunk(42, 0.55, episode_id="ep-9")],
        },
        titles={"ep-9": "The Wildest Business Ideas"},
    )
    llm = scripted_llm(
        "CURATION",
        "1. this blew my mind\n- holy cow\nrepurpose this for short form\n",
    )
    engine = build_engine(llm, store=store)

    response = engine.search("cool ideas for short form")

    assert response.generated_phrases == ["this blew my mind", "holy cow"]
    assert response.total_found == 2
    assert [r.id for r in response.results] == [42, 7]

    top = response.results[0]
    assert top.similarity == pytest.approx(0.63)
    assert top.match_count == 2
    assert top.matched_phrase == "this blew my mind"
    assert top.episode_title == "The Wildest Business Ideas"
    assert response.results[1].episode_title == "Unknown Episode"
    assert llm.calls[1]["system"] == EXPANSION_SYSTEM_PREFIX + CURATION_PROMPT.render()


def test_failed_phrases_do_not_fail_the_search():
    store = FakeTranscriptStore(
        results={"good phrase": [make_chunk(1, 0.5)]},
        failing={"store breaks"},
    )
    llm = scripted_llm("ADVICE", "good phrase\nstore breaks\nembedding breaks")
    engine = build_engine(
        llm, store=store, embedder=FakeEmbeddingService(failing={"embedding breaks"})
    )

    response = engine.search("advice on burnout")

    assert response.generated_phrases == ["good phrase", "store breaks", "embedding breaks"]
    assert [r.id for r in response.results] == [1]


def test_zero_phrases_fails_the_search():
    llm = scripted_llm("CURATION", "clip this\nrepurpose for short form")
    store = FakeTranscriptStore()
    engine = build_engine(llm, store=store)

    with pytest.raises(PhraseGenerationError):
        engine.search("viral clips")

    assert store.match_calls == []


def test_classifier_error_propagates_before_expansion():
    llm = FakeLLMClient(error=ConnectionError("upstream unavailable"))
    engine = build_engine(llm)

    with pytest.raises(ConnectionError):
        engine.search("Airbnb")

    assert len(llm.calls) == 1


def test_expansion_error_propagates():
    def respond(prompt, system):
        if system == INTENT_CLASSIFICATION_PROMPT:
            return "GENERAL"
        raise TimeoutError("expansion timed out")

    engine = build_engine(FakeLLMClient(responder=respond))

    with pytest.raises(TimeoutError):
        engine.search("Airbnb")
