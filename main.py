from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import os

from app.core.config import settings
from app.core.context import build_app_context
from app.core.exceptions import ToteArtError
from app.core.logging_config import logger
from app.api.v1.endpoints import generate, health

# Simple Sentry setup for API tracking
import sentry_sdk
if os.getenv("SENTRY_DSN"):
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        environment=settings.ENVIRONMENT,
        send_default_pii=False,
    )

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Custom tote artwork previews and render storage",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin"],
    max_age=3600
)

# Include routers
app.include_router(generate.router, prefix=f"{settings.API_PREFIX}/generate", tags=["generate"])
app.include_router(health.router, prefix=f"{settings.API_PREFIX}/health", tags=["health"])


@app.exception_handler(ToteArtError)
async def tote_art_error_handler(request: Request, exc: ToteArtError):
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".replace("  ", " ").strip()
    else:
        message = "Invalid request"
    logger.warning(f"{request.method} {request.url.path} -> 400 {message}")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": "Server error"})


@app.on_event("startup")
def startup_event():
    """Build provider and storage clients once per process"""
    if getattr(app.state, "context", None) is None:
        app.state.context = build_app_context(settings)
    logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")


@app.get("/")
def root():
    logger.info("Root endpoint accessed")
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
