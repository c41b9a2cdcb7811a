"""Weather service — REST API over an in-memory city temperature store."""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weatherservice.auth import verify_api_key
from weatherservice.config import Settings, settings
from weatherservice.models import ErrorMessage
from weatherservice.routes import health
from weatherservice.routes import weather as weather_routes
from weatherservice.store import WeatherStore, get_store, load_seed

logging.basicConfig(
    level=settings.log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("weatherservice")


def _error_response(status: int, error: str, headers=None) -> JSONResponse:
    body = ErrorMessage(status=status, error=error)
    return JSONResponse(body.model_dump(), status_code=status, headers=headers)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return _error_response(
        exc.status_code, str(exc.detail), getattr(exc, "headers", None)
    )


async def _validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = first.get("msg", "invalid value")
        if where:
            message = f"{where}: {message}"
    else:
        message = "Invalid request"
    return _error_response(400, message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Settings.validate()

    store: WeatherStore = app.state.store
    if settings.SEED_PATH and os.path.exists(settings.SEED_PATH):
        added = load_seed(store, settings.SEED_PATH)
        log.info("Seeded %d readings from %s", added, settings.SEED_PATH)

    log.info("Weather service started on port %s", settings.PORT)
    yield
    log.info("Weather service shutdown complete")


def create_app(store: WeatherStore | None = None) -> FastAPI:
    """Build the API bound to *store*, or to the process-wide store."""
    app = FastAPI(
        title="Weather Service",
        version="0.1.0",
        lifespan=lifespan,
        dependencies=[Depends(verify_api_key)],
    )
    app.state.store = store if store is not None else get_store()

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)

    app.include_router(health.router)
    app.include_router(weather_routes.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weatherservice.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=logging.getLevelName(settings.log_level()).lower(),
    )
