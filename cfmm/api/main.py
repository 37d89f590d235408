"""FastAPI application for the CFMM engine.

This is the dispatch layer: it authenticates nobody and meters nothing. The
caller names the acting account in each request body.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cfmm.api.endpoints import router
from cfmm.errors import CfmmError, LedgerError, SafeIntError, error_kind
from cfmm.models import ErrorResponse

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("CFMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("CFMM_PORT", "8000"))
DEBUG = os.environ.get("CFMM_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (64 KB); requests are small fixed-shape JSON
MAX_REQUEST_SIZE = 64 * 1024

logger = structlog.get_logger()

app = FastAPI(
    title="CFMM",
    description="Constant-product market maker accounting engine",
    version="0.1.0",
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(CfmmError)
@app.exception_handler(LedgerError)
@app.exception_handler(SafeIntError)
async def operation_rejected(request: Request, exc: Exception) -> JSONResponse:
    """Rejected operations are reported with their error kind, not as 500s."""
    logger.info("operation_rejected", path=request.url.path, error=error_kind(exc))
    body = ErrorResponse(error=error_kind(exc), detail=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def configure_logging(debug: bool = DEBUG) -> None:
    """Render structlog output as console lines in debug mode, JSON otherwise."""
    renderer = (
        structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
    )


def run() -> None:
    """Run the CFMM API server.

    Configuration via environment variables:
    - CFMM_HOST: Host to bind to (default: 0.0.0.0)
    - CFMM_PORT: Port to bind to (default: 8000)
    - CFMM_DEBUG: Enable debug logging and reload mode (default: false)
    - CFMM_* engine parameters, see CfmmConfig.from_env
    """
    configure_logging(DEBUG)
    uvicorn.run(
        "cfmm.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
