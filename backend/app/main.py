import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .cors import ALLOWED_HEADERS, ALLOWED_METHODS, LaunchpadCORSMiddleware
from .database import init_db
from .errors import LaunchpadError, MethodNotAllowedError, RequestValidationError
from .routes.analyses import router as analyses_router
from .routes.analyze import router as analyze_router
from .routes.login import router as login_router
from .routes.mockup import router as mockup_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    print("Starting Velocity Launchpad API")
    print(f"   Environment: {settings.environment}")
    print(f"   Gemini Key:  {' Configured' if settings.gemini_api_key else ' Not set (analysis will fail)'}")
    print(f"   Gemini Model: {settings.gemini_model} (timeout {settings.gemini_timeout:.0f}s)")
    print(f"   CORS origins: {len(settings.cors_origins)} allowed")
    init_db()

    yield

    print("Shutting down Velocity Launchpad API")


app = FastAPI(
    title="Velocity Launchpad API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    LaunchpadCORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)

app.include_router(login_router)
app.include_router(analyze_router)
app.include_router(analyses_router)
app.include_router(mockup_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Velocity Launchpad",
        "version": "0.1.0",
        "description": "Search-grounded startup idea analysis",
        "docs": "/docs",
        "endpoints": {
            "login": "POST /login - Check an invite key",
            "analyze": "POST /analyze - Analyze a startup idea",
            "history": "GET /analyses?key= - Recent analyses for a key",
            "delete": "DELETE /analyses?key=&id= - Delete an analysis",
            "mockup": "POST /mockup - Generate an app mockup image",
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server is running",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy",
        "service": "velocity-launchpad",
        "version": "0.1.0"
    }


# ── Error mapping: every failure is {"error": "..."} ─────────────────────

def _error_response(status_code: int, message: str, exc: Exception) -> JSONResponse:
    content = {"error": message}
    if settings.expose_error_detail:
        cause = exc.__cause__ or exc
        content["detail"] = f"{type(cause).__name__}: {cause}"
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(LaunchpadError)
async def launchpad_exception_handler(request: Request, exc: LaunchpadError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message, exc)


@app.exception_handler(BodyValidationError)
async def body_validation_exception_handler(request: Request, exc: BodyValidationError):
    """Malformed JSON bodies and wrong field types are plain 400s."""
    return _error_response(
        RequestValidationError.status_code,
        RequestValidationError.default_message,
        exc,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        message = MethodNotAllowedError.default_message
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "Internal server error", exc)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
