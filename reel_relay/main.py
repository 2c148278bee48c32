from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reel_relay.config import Settings, get_settings
from reel_relay.handlers import download_handler
from reel_relay.models import ErrorBody
from reel_relay.services import MediaFetcher, ProviderClient, RelayError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(ErrorBody(message=message).model_dump(), status_code=status_code)


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the relay app.

    ``settings`` falls back to the environment at startup, not at import
    time. ``transport`` is handed to both outbound clients (tests use an
    ``httpx.MockTransport``).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or get_settings()
        logging.basicConfig(
            level=resolved.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        app.state.settings = resolved
        app.state.provider = ProviderClient(resolved, transport=transport)
        app.state.media_fetcher = MediaFetcher(resolved, transport=transport)
        logger.info("Relay ready, provider %s", resolved.provider_base_url)
        try:
            yield
        finally:
            await app.state.provider.close()
            await app.state.media_fetcher.close()

    app = FastAPI(title="Reel Relay API", lifespan=lifespan)

    app.include_router(download_handler.router)
    # Path used by the original web front end.
    app.include_router(download_handler.router, prefix="/api")

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.detail)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.detail)
        return _error_response(exc.status_code, exc.public_message)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return _error_response(500, "Internal server error")

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("reel_relay.main:app", host="0.0.0.0", port=8000)
