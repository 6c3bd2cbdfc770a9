from __future__ import annotations

import logging
from collections.abc import AsyncGenerator  # noqa: TC003
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from listing_studio.config import settings
from listing_studio.database import create_tables
from listing_studio.llm.factory import close_completion_client
from listing_studio.routers import (
    analytics,
    brand_voices,
    contents,
    exports,
    generate,
    health,
    properties,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Import models so Base.metadata knows about them
    import listing_studio.models  # noqa: F401

    create_tables()
    yield
    await close_completion_client()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(properties.router, prefix=settings.api_prefix, tags=["properties"])
app.include_router(generate.router, prefix=settings.api_prefix, tags=["generate"])
app.include_router(contents.router, prefix=settings.api_prefix, tags=["contents"])
app.include_router(
    brand_voices.router, prefix=settings.api_prefix, tags=["brand-voices"]
)
app.include_router(exports.router, prefix=settings.api_prefix, tags=["exports"])
app.include_router(analytics.router, prefix=settings.api_prefix, tags=["analytics"])
