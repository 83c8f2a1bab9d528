"""HTTP layer: request validation, response shape and error mapping."""

import pytest
from fastapi.testclient import TestClient

from podsearch.api.app import app
from podsearch.api.routes import get_caption_generator, get_search_engine
from podsearch.captions.generator import CaptionGenerator
from podsearch.search.engine import SearchEngine
from podsearch.search.prompts import INTENT_CLASSIFICATION_PROMPT

from fakes import FakeEmbeddingService, FakeLLMClient, FakeTranscriptStore, make_chunk


def respond(prompt, system):
    if system == INTENT_CLASSIFICATION_PROMPT:
        return "GENERAL"
    return "the business model of Airbnb\nstaying in an Airbnb"


@pytest.fixture
def store():
    return FakeTranscriptStore(
        results={
            "the business model of Airbnb": [make_chunk(42, 0.6, episode_id="ep-1")],
            "staying in an Airbnb": [make_chunk(42, 0.55, episode_id="ep-1")],
        },
        titles={"ep-1": "Airbnb Deep Dive"},
    )


@pytest.fixture
def llm():
    return FakeLLMClient(responder=respond)


@pytest.fixture
def client(llm, store):
    engine = SearchEngine.build(
        llm_client=llm, embedding_service=FakeEmbeddingService(), store=store
    )
    app.dependency_overrides[get_search_engine] = lambda: engine
    app.dependency_overrides[get_caption_generator] = lambda: CaptionGenerator(
        FakeLLMClient(replies=["This is actually illegal to know\n#business #startup"])
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_search_returns_ranked_results(client):
    response = client.post("/search", json={"query": "Airbnb"})

    assert response.status_code == 200
    body = response.json()
    assert body["generated_phrases"] == ["the business model of Airbnb", "staying in an Airbnb"]
    assert body["total_found"] == 1
    assert len(body["results"]) == 1

    result = body["results"][0]
    assert result["id"] == 42
    assert result["episode_id"] == "ep-1"
    assert result["episode_title"] == "Airbnb Deep Dive"
    assert result["similarity"] == pytest.approx(0.63)
    assert result["match_count"] == 2
    assert result["matched_phrase"] == "the business model of Airbnb"
    assert set(result) == {
        "id",
        "episode_id",
        "content",
        "start_timestamp",
        "url",
        "similarity",
        "match_count",
        "matched_phrase",
        "episode_title",
    }


@pytest.mark.parametrize(
    "payload",
    [{"query": ""}, {}, {"query": 42}, {"query": None}, {"query": ["Airbnb"]}, ["Airbnb"]],
)
def test_search_rejects_bad_query(client, llm, payload):
    response = client.post("/search", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Query is required"}
    assert llm.calls == []


def test_search_rejects_non_json_body(client, llm):
    response = client.post(
        "/search", content=b"not json", headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Query is required"}
    assert llm.calls == []


def test_zero_phrases_returns_distinct_error(store):
    def banned_only(prompt, system):
        if system == INTENT_CLASSIFICATION_PROMPT:
            return "CURATION"
        return "clip\nrepurpose"

    engine = SearchEngine.build(
        llm_client=FakeLLMClient(responder=banned_only),
        embedding_service=FakeEmbeddingService(),
        store=store,
    )
    app.dependency_overrides[get_search_engine] = lambda: engine
    try:
        response = TestClient(app).post("/search", json={"query": "viral moments"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate search phrases"}


def test_model_failure_returns_generic_error(store):
    engine = SearchEngine.build(
        llm_client=FakeLLMClient(error=RuntimeError("api key revoked")),
        embedding_service=FakeEmbeddingService(),
        store=store,
    )
    app.dependency_overrides[get_search_engine] = lambda: engine
    try:
        response = TestClient(app).post("/search", json={"query": "Airbnb"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_caption(client):
    response = client.post("/caption", json={"content": "the smartest thing I ever did"})

    assert response.status_code == 200
    assert response.json() == {"caption": "This is actually illegal to know\n#business #startup"}


def test_caption_requires_content(client):
    response = client.post("/caption", json={"content": ""})

    assert response.status_code == 400
    assert response.json() == {"error": "Content is required"}


def test_caption_failure():
    app.dependency_overrides[get_caption_generator] = lambda: CaptionGenerator(
        FakeLLMClient(error=RuntimeError("boom"))
    )
    try:
        response = TestClient(app).post("/caption", json={"content": "hello"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate caption"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
