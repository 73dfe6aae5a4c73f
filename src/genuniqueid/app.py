"""genuniqueid — FastAPI gateway application.

Lets an identity host outside Python run the unique-id filter over a
subject's attributes. The filter is built once at startup from the
gateway configuration.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from genuniqueid.auth import make_api_key_checker
from genuniqueid.config import GatewayConfig, load_config
from genuniqueid.errors import DecodeError, GenUniqueIdError, StateConsistencyError
from genuniqueid.filter import UniqueIdFilter
from genuniqueid.routes import meta, process
from genuniqueid.routes.meta import GATEWAY_VERSION

logger = logging.getLogger("genuniqueid")
audit_logger = logging.getLogger("genuniqueid.audit")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: resolve the filter. A bad filter config aborts startup."""
    config: GatewayConfig = app.state.config
    uid_filter = UniqueIdFilter(config.filter_config, salt_provider=config.salt)
    logger.info(
        "Filter ready: %s -> %s (encoding: %s, privacy: %s)",
        uid_filter.config.source_attribute,
        uid_filter.config.target_attribute,
        uid_filter.config.encoding,
        uid_filter.config.privacy,
    )
    app.state.filter = uid_filter
    yield
    logger.info("genuniqueid gateway shut down")


def register_exception_handlers(app: FastAPI) -> None:
    """Map filter errors onto HTTP responses."""

    @app.exception_handler(DecodeError)
    async def decode_handler(request: Request, exc: DecodeError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(StateConsistencyError)
    async def state_handler(request: Request, exc: StateConsistencyError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(GenUniqueIdError)
    async def genuniqueid_handler(request: Request, exc: GenUniqueIdError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(config: GatewayConfig | None = None) -> FastAPI:
    """Application factory."""
    if config is None:
        config = load_config()

    app = FastAPI(
        title="genuniqueid",
        description="Scoped eduPersonUniqueId values from directory GUIDs",
        version=GATEWAY_VERSION,
        lifespan=lifespan,
    )
    app.state.config = config

    check_key = make_api_key_checker(config.api_key)

    register_exception_handlers(app)

    # ── Audit middleware ──────────────────────────────────────

    @app.middleware("http")
    async def audit_log(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start
        audit_logger.info(
            "%s %s %d %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response

    # ── Routers ───────────────────────────────────────────────

    app.include_router(meta.router, dependencies=[Depends(check_key)])
    app.include_router(process.router, dependencies=[Depends(check_key)])

    return app
