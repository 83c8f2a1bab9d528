"""
HTTP routes.

POST /search   - classify -> expand -> parallel retrieval -> ranked results
POST /caption  - social caption for a clip's spoken content
GET  /health   - liveness

Errors are returned as {"error": "..."} with 400 or 500.
"""

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from podsearch.captions.generator import CaptionGenerator
from podsearch.search.engine import SearchEngine
from podsearch.search.exceptions import PhraseGenerationError
from podsearch.search.models import SearchResponse
from podsearch.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


class CaptionResponse(BaseModel):
    caption: str


class HealthResponse(BaseModel):
    status: str = "ok"


@lru_cache
def get_search_engine() -> SearchEngine:
    return SearchEngine.build()


@lru_cache
def get_caption_generator() -> CaptionGenerator:
    return CaptionGenerator()


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def read_text_field(request: Request, name: str) -> str | None:
    """A non-empty string field from a JSON object body, else None."""
    try:
        body: Any = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    value = body.get(name)
    if not isinstance(value, str) or not value:
        return None
    return value


@router.post("/search", response_model=SearchResponse)
async def search(
    request: Request,
    engine: SearchEngine = Depends(get_search_engine),
):
    query = await read_text_field(request, "query")
    if query is None:
        return error_response("Query is required", status.HTTP_400_BAD_REQUEST)

    try:
        return await run_in_threadpool(engine.search, query)
    except PhraseGenerationError as e:
        logger.error("search_failed", query=query[:100], error=str(e))
        return error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("search_api_error", query=query[:100])
        return error_response(
            "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@router.post("/caption", response_model=CaptionResponse)
async def caption(
    request: Request,
    generator: CaptionGenerator = Depends(get_caption_generator),
):
    content = await read_text_field(request, "content")
    if content is None:
        return error_response("Content is required", status.HTTP_400_BAD_REQUEST)

    try:
        text = await run_in_threadpool(generator.generate, content)
    except Exception:
        logger.exception("caption_generation_error")
        return error_response(
            "Failed to generate caption", status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return CaptionResponse(caption=text)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()
