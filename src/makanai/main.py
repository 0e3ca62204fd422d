"""FastAPI entrypoint."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from makanai.config import ProviderCredentials, Settings, get_settings, validate_settings_for_env
from makanai.logging import clear_context, configure_logging
from makanai.providers.registry import build_adapters
from makanai.proxy.dispatch import ProviderDispatcher
from makanai.routes.generate import router as generate_router

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(
    credentials: ProviderCredentials | None = None,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the proxy app around an explicit credentials value.

    Credentials default to the keys found in settings; tests inject their own
    value and an httpx transport instead of touching the environment.
    """
    settings = settings or get_settings()
    if credentials is None:
        credentials = ProviderCredentials.from_settings(settings)
    dispatcher = ProviderDispatcher(
        credentials,
        adapters=build_adapters(settings),
        timeout_seconds=settings.upstream_timeout_seconds,
        transport=transport,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        validate_settings_for_env(settings)
        configure_logging(settings.log_level, app_env=settings.app_env)
        logger.info(
            "AI proxy ready (configured providers: %s)",
            ", ".join(credentials.configured()) or "none",
        )
        yield

    app = FastAPI(
        title="makanai-flow AI proxy",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.dispatcher = dispatcher

    @app.middleware("http")
    async def _cors(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        clear_context()
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def _not_found(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and wrong methods alike (405 included) are reported as 404.
        del request, exc
        return JSONResponse({"error": "Not found"}, status_code=404)

    app.include_router(generate_router)
    return app


app = create_app()
