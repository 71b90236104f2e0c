"""FastAPI server exposing the comparison relay."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ai_compare.constants import EMPTY_PROMPT_ERROR, HEALTH_STATUS, INTERNAL_ERROR
from ai_compare.errors import PromptValidationError
from ai_compare.relay import compare_impl
from ai_compare.schemas.compare import CompareRequest, CompareResponse, ErrorResponse, HealthResponse
from ai_compare.settings import settings
from ai_compare.utils.helpers import get_version

logger = logging.getLogger(__name__)

COMPARE_PATH = "/api/compare"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own one pooled httpx client for all outbound provider calls."""
    async with httpx.AsyncClient() as http_client:
        app.state.http_client = http_client
        yield


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparsable or mistyped compare bodies count as an empty prompt."""
    if request.url.path.rstrip("/") == COMPARE_PATH:
        logger.info(f"[SERVER] Rejected compare body: {exc.errors()}")
        return _error(400, EMPTY_PROMPT_ERROR)
    return await request_validation_exception_handler(request, exc)


def create_app(static_dir: str | None = None) -> FastAPI:
    """Build the application.

    Args:
        static_dir: Front-end bundle directory (default: settings.static_dir).
            Mounted at '/' after the API routes when it exists.
    """
    app = FastAPI(title=settings.server_name, version=get_version(), lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Accept a trailing slash; the static mount at "/" would otherwise swallow it
    @app.post(
        COMPARE_PATH,
        response_model=CompareResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    @app.post(f"{COMPARE_PATH}/", response_model=CompareResponse, include_in_schema=False)
    async def compare(request: Request, body: CompareRequest | None = None):
        try:
            return await compare_impl(body.prompt if body else None, request.app.state.http_client)
        except PromptValidationError as e:
            return _error(400, str(e))
        except Exception:
            logger.exception(f"[SERVER] Error in {COMPARE_PATH}")
            return _error(500, INTERNAL_ERROR)

    @app.get("/api/health", response_model=HealthResponse)
    @app.get("/api/health/", response_model=HealthResponse, include_in_schema=False)
    async def health() -> HealthResponse:
        return HealthResponse(status=HEALTH_STATUS)

    static_path = Path(static_dir if static_dir is not None else settings.static_dir)
    if static_path.is_dir():
        app.mount("/", StaticFiles(directory=static_path, html=True), name="static")
        logger.info(f"[SERVER] Serving static files from {static_path.resolve()}")
    else:
        logger.debug(f"[SERVER] Static directory {static_path} not found, serving API only")

    return app


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name (LOG_LEVEL, or an override such as 'DEBUG') to its number, INFO if unknown."""
    return logging.getLevelNamesMapping().get((level or settings.log_level).upper(), logging.INFO)


def configure_logging(level: str | None = None) -> int:
    """Configure root logging and return the numeric level in effect."""
    log_level = resolve_log_level(level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # httpx logs full request URLs, which carry the Gemini key in the query string
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return log_level


def run(host: str | None = None, port: int | None = None, log_level: int | None = None) -> None:
    """Start uvicorn with the relay app."""
    if log_level is None:
        log_level = resolve_log_level()
    host = host or settings.host
    port = port or settings.port
    app = create_app()
    logger.info(f"[SERVER] {settings.server_name} is running on http://{host}:{port}")
    logger.info("[SERVER] Make sure OPENAI_API_KEY, ANTHROPIC_API_KEY and GOOGLE_API_KEY are set")
    uvicorn.run(app, host=host, port=port, log_level=log_level)


def main() -> None:
    """Entry point for ai-compare-server command."""
    run(log_level=configure_logging())


if __name__ == "__main__":
    main()
