from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core import config, db, log, tracing
from posts import router as posts_router
from posts import schemas as post_schemas
from posts.repository import PostRepository


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Logger and storage are built once per process and shared via app.state.
    logger = log.configure_logging(level=config.log_level(), fmt=config.log_format())
    app.state.logger = logger

    database_path = config.database_path()
    logger.info("starting_server", database_path=database_path)
    try:
        app.state.posts = await PostRepository.initialize(database_path, logger=logger)
    except db.StorageError as exc:
        logger.error("database_initialization_failed", error=str(exc))
        raise
    try:
        yield
    finally:
        await app.state.posts.close()


app = FastAPI(lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    trace_id = tracing.get_trace_id(request)
    request_log = request.app.state.logger.bind(trace_id=trace_id)
    request_log.info("request_received", method=request.method, path=request.url.path)

    # Loggers without a request binding (e.g. the repository's) pick the id
    # up through merge_contextvars.
    with structlog.contextvars.bound_contextvars(trace_id=trace_id):
        response = await call_next(request)

    response.headers[tracing.TRACE_HEADER] = trace_id
    request_log.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
    )
    return response


def _error_response(request: Request, status_code: int, message: str, headers=None) -> JSONResponse:
    trace_id = tracing.get_trace_id(request)
    body = post_schemas.ErrorResponse(error=message, trace_id=trace_id)
    response_headers = {tracing.TRACE_HEADER: trace_id, **(headers or {})}
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=response_headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return PlainTextResponse("Method Not Allowed", status_code=405, headers=exc.headers)
    return _error_response(request, exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    location = errors[0]["loc"][0] if errors and errors[0].get("loc") else "body"
    if location == "path":
        message = "Invalid post ID"
    else:
        message = "Invalid request body"

    request.app.state.logger.warning(
        "request_validation_failed",
        trace_id=tracing.get_trace_id(request),
        path=request.url.path,
        error=message,
        details=[error.get("msg") for error in errors],
    )
    return _error_response(request, 400, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    request.app.state.logger.error(
        "unhandled_error",
        trace_id=tracing.get_trace_id(request),
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return _error_response(request, 500, "Internal Server Error")


app.include_router(posts_router.router, tags=["posts"])
# The first release served the same routes under a version prefix.
app.include_router(posts_router.router, prefix="/v1", tags=["posts"])


def run() -> None:
    uvicorn.run(app, host=config.listen_host(), port=config.listen_port())


if __name__ == "__main__":
    run()
