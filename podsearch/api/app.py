"""
FastAPI application.

Run with: uvicorn podsearch.api.app:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from podsearch.api.routes import router
from podsearch.config.settings import settings
from podsearch.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        "startup",
        llm_model=settings.llm_model,
        embedding_model=settings.embedding_model,
        embedding_dimension=settings.embedding_dimension,
    )
    yield
    logger.info("shutdown")


app = FastAPI(
    title="podsearch",
    description="Semantic search over podcast transcripts with intent-aware query expansion",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
