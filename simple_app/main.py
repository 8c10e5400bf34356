from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .logger import log_request
from .schemas import ErrorBody, Health, Welcome
from .utils import Clock, iso_timestamp, now_utc, uptime_seconds


def request_target(request: Request) -> str:
    """Return the request target as the client sent it, still percent-encoded."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        target = raw_path.decode("latin-1").split("?", 1)[0]
    else:
        target = request.scope["path"]
    query = request.scope.get("query_string", b"")
    if query:
        target = f"{target}?{query.decode('latin-1')}"
    return target


def create_app(clock: Clock = now_utc, started_at: Optional[datetime] = None) -> FastAPI:
    """Build the application.

    ``started_at`` defaults to the clock's current time and is what ``/health``
    measures uptime against. Only ``GET /`` and ``GET /health`` exist; every
    other method or path gets the fixed 404 body, so slash redirects and the
    generated docs routes are switched off.
    """
    app = FastAPI(
        title="Simple Docker App",
        version=__version__,
        redirect_slashes=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.clock = clock
    app.state.started_at = started_at if started_at is not None else clock()

    # === Request logging ===

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        log_request(iso_timestamp(clock()), request.method, request_target(request), response.status_code)
        return response

    # === Errors ===

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException):
        # 405 on a known path is reported as 404 too
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=ErrorBody().model_dump())
        return await http_exception_handler(request, exc)

    # === Endpoints ===

    @app.get("/", response_model=Welcome)
    async def root() -> Welcome:
        return Welcome()

    @app.get("/health", response_model=Health)
    async def health() -> Health:
        now = clock()
        return Health(
            timestamp=iso_timestamp(now),
            uptime=uptime_seconds(app.state.started_at, now),
        )

    return app
