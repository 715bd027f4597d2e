"""Entry point for the ShareNote server."""

import asyncio
import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from sharenote import config
from sharenote.config import SERVER_HOST, SERVER_PORT
from sharenote.database import get_db_connection, init_database
from sharenote.routes.auth_routes import router as auth_router
from sharenote.routes.content_routes import router as content_router
from sharenote.routes.moderation_routes import router as moderation_router
from sharenote.routes.share_routes import router as share_router
from sharenote.exceptions import (
    ShareNoteException,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    InvalidAPIKeyError,
    InvalidTitleError,
    InvalidCustomSlugError,
    SlugTakenError,
    SlugGenerationExhaustedError,
    InvalidPathError,
    PathConflictError,
    InvalidContentError,
    ContentNotFoundError,
    UnauthorizedAccessError,
)

logger = setup_logging('sharenote')

app = FastAPI(
    title="ShareNote",
    description="Note and file sharing with slugs, share codes and shared folders",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and bound their duration.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    try:
        response = await asyncio.wait_for(call_next(request), timeout=config.REQUEST_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.error(
            f"Request timed out after {config.REQUEST_TIMEOUT_SECONDS}s: "
            f"{request.method} {request.url.path} [request_id={request_id}]"
        )
        response = JSONResponse(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            content={"detail": "Request timed out", "code": "TIMEOUT"}
        )

    duration = time.time() - start_time
    user_id = getattr(request.state, 'user_id', None)

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s "
        f"[request_id={request_id}] [user_id={user_id or 'anonymous'}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize database on application startup.
    """
    logger.info("ShareNote server starting up...")
    init_database()
    logger.info("Database initialized")


def _error_response(request: Request, exc: Exception, status_code: int, code: str) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"{type(exc).__name__}: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": code})


@app.exception_handler(UserAlreadyExistsError)
async def user_already_exists_handler(request: Request, exc: UserAlreadyExistsError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "USER_ALREADY_EXISTS")


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS")


@app.exception_handler(InvalidAPIKeyError)
async def invalid_api_key_handler(request: Request, exc: InvalidAPIKeyError):
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED, "INVALID_API_KEY")


@app.exception_handler(InvalidTitleError)
async def invalid_title_handler(request: Request, exc: InvalidTitleError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_TITLE")


@app.exception_handler(InvalidCustomSlugError)
async def invalid_custom_slug_handler(request: Request, exc: InvalidCustomSlugError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_CUSTOM_SLUG")


@app.exception_handler(SlugTakenError)
async def slug_taken_handler(request: Request, exc: SlugTakenError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "SLUG_TAKEN")


@app.exception_handler(InvalidPathError)
async def invalid_path_handler(request: Request, exc: InvalidPathError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_PATH")


@app.exception_handler(PathConflictError)
async def path_conflict_handler(request: Request, exc: PathConflictError):
    return _error_response(request, exc, status.HTTP_409_CONFLICT, "PATH_CONFLICT")


@app.exception_handler(InvalidContentError)
async def invalid_content_handler(request: Request, exc: InvalidContentError):
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "INVALID_CONTENT")


@app.exception_handler(ContentNotFoundError)
async def content_not_found_handler(request: Request, exc: ContentNotFoundError):
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND, "NOT_FOUND")


@app.exception_handler(UnauthorizedAccessError)
async def unauthorized_access_handler(request: Request, exc: UnauthorizedAccessError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    user_id = getattr(request.state, 'user_id', 'unknown')
    logger.warning(
        f"Unauthorized access error: {exc} [request_id={request_id}] [user_id={user_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": str(exc), "code": "UNAUTHORIZED_ACCESS"}
    )


@app.exception_handler(SlugGenerationExhaustedError)
async def slug_generation_exhausted_handler(request: Request, exc: SlugGenerationExhaustedError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Slug generation exhausted: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "SLUG_GENERATION_EXHAUSTED"}
    )


@app.exception_handler(ShareNoteException)
async def sharenote_exception_handler(request: Request, exc: ShareNoteException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"ShareNote exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "INTERNAL_ERROR"}
    )


app.include_router(auth_router)
app.include_router(content_router)
app.include_router(share_router)
app.include_router(moderation_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "ShareNote API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "sharenote"}


@app.get("/ready")
async def ready_check():
    """
    Readiness check endpoint.
    Verifies the database answers queries.
    """
    try:
        with get_db_connection() as conn:
            conn.execute("SELECT 1 FROM contents LIMIT 1")
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {str(e)}"

    ready = db_status == "ok"
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": ready,
            "database": db_status
        }
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "sharenote.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT
    )


if __name__ == "__main__":
    main()
