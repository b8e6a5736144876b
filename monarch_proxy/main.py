"""
FastAPI application for the Monarch transactions proxy.

Exposes a single endpoint, POST /get-transactions, that checks the caller's
proxy API key, pulls their Monarch token out of the Authorization header and
relays the request body's filters to Monarch's GraphQL API.
"""

import json
import logging
import secrets
from typing import Any, Optional

from fastapi import APIRouter, FastAPI, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import log
from .config import Settings
from .errors import (
    INVALID_JSON,
    MISSING_FILTERS,
    MISSING_TOKEN,
    UNAUTHORIZED_API_KEY,
    BadRequest,
    InternalError,
    ProxyError,
    Unauthorized,
)
from .graphql_client import get_transactions_summary
from .models import ErrorResponse, TransactionsRequest

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "Token "

router = APIRouter()


# ----------------------------------------------------------------
# Request validation
# ----------------------------------------------------------------

def check_api_key(settings: Settings, api_key: Optional[str]) -> None:
    """Reject the request unless x-api-key matches the configured secret."""
    expected = settings.PROXY_API_KEY
    if not expected or not api_key or not secrets.compare_digest(api_key.encode(), expected.encode()):
        raise Unauthorized(UNAUTHORIZED_API_KEY)


def extract_token(authorization: Optional[str]) -> str:
    """Return the token from an ``Authorization: Token <token>`` header."""
    if not authorization or not authorization.startswith(TOKEN_PREFIX):
        raise Unauthorized(MISSING_TOKEN)
    return authorization.split(" ", 1)[1]


async def read_filters(request: Request) -> Any:
    """Return the body's ``filters`` value. An empty body counts as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        payload = {}
    else:
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError):
            raise BadRequest(INVALID_JSON)

    filters = payload.get("filters") if isinstance(payload, dict) else None
    if filters is None:
        raise BadRequest(MISSING_FILTERS)
    return filters


# ----------------------------------------------------------------
# Routes
# ----------------------------------------------------------------

@router.post(
    "/get-transactions",
    tags=["Transactions"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": TransactionsRequest.model_json_schema()}},
        }
    },
)
async def get_transactions(
    request: Request,
    x_api_key: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
):
    """
    Get the transactions aggregate summary from Monarch.

    Checks run in order and the first failure ends the request:

    - **x-api-key** must equal the proxy's configured secret (401)
    - **Authorization** must be `Token <token>` (401)
    - body must be `{"filters": {...}}` (400)

    The upstream JSON is returned unchanged. Any upstream failure is a 500
    with the failure message in `details`.
    """
    logger.info("Received request for /get-transactions")
    settings: Settings = request.app.state.settings

    try:
        check_api_key(settings, x_api_key)
        token = extract_token(authorization)
        filters = await read_filters(request)
    except ProxyError as e:
        logger.warning(f"Request rejected: {e.message}")
        raise

    logger.debug(f"Processing with filters: {json.dumps(filters, indent=2)}")

    try:
        result = await run_in_threadpool(
            get_transactions_summary, token, filters, settings.UPSTREAM_TIMEOUT
        )
        # Rendering fails on values JSON cannot carry (NaN, Infinity)
        response = JSONResponse(content=result)
    except Exception as e:
        logger.error(f"Error processing request: {e}")
        raise InternalError(details=str(e))

    logger.info("Successfully fetched data from Monarch API")
    return response


# ----------------------------------------------------------------
# Error handling
# ----------------------------------------------------------------

async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


# ----------------------------------------------------------------
# App factory
# ----------------------------------------------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the proxy application.

    Args:
        settings: Configuration to serve with; read from the environment if omitted
    """
    settings = settings or Settings.from_env()
    log.setup_logging(level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.include_router(router)
    return app


def run() -> None:
    """Start the proxy with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    proxy = create_app(settings)

    log.header(f"{settings.API_TITLE} v{settings.API_VERSION}")
    if not settings.PROXY_API_KEY:
        log.warn("PROXY_API_KEY is not set; every request will be rejected with 401")
    if settings.UPSTREAM_TIMEOUT is None:
        log.info("Upstream timeout disabled")
    log.ok(f"Monarch proxy server listening at http://localhost:{settings.PORT}")

    uvicorn.run(
        proxy,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
