from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from cadence.config import get_settings
from cadence.logging_config import configure_logging, request_id_scope
from cadence.routes.api import api_router

configure_logging()
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Starting Cadence application default_timezone=%s max_results=%s",
        settings.default_timezone,
        settings.max_results,
    )
    yield
    logger.info("Shutting down Cadence application")


async def _request_id_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    with request_id_scope(request_id):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_app() -> FastAPI:
    app = FastAPI(title="Cadence", version="0.1.0", lifespan=lifespan)
    app.middleware("http")(_request_id_middleware)

    if get_settings().app_mode in {"all", "api"}:
        app.include_router(api_router, prefix="/api")
    return app


app = create_app()
