from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckweights.api import health_router, weights_router
from deckweights.config import settings
from deckweights.models.failure import KnownError
from deckweights.services.weight_cache import WeightTableCache
from deckweights.sources.weight_source import create_weight_source


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    source = create_weight_source(settings)
    cache = WeightTableCache(source, settings.table_specs())
    app.state.weight_cache = cache

    if settings.warm_on_startup:
        await cache.warm(*cache.table_ids)

    yield

    await source.aclose()


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version=pkg_version("deckweights"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render known failures as a FailureDetail body."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )


app.include_router(health_router)
app.include_router(weights_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
