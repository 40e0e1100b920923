"""
Main FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import StorefrontError, ValidationError
from app.core.startup import run_startup_tasks


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_tasks()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Storefront accounts and session authentication",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Render domain errors as ``{"message": ...}`` with their status code."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 with a message plus the per-field errors."""
    errors = exc.errors()
    if any(error.get("type") == "missing" for error in errors):
        message = ValidationError.default_message
    else:
        message = "Invalid request fields"
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"message": message, "detail": jsonable_encoder(errors)},
    )


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "status": "online",
        "service": settings.APP_NAME,
        "version": "0.1.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include API routers
from app.api import api_router

app.include_router(api_router, prefix=settings.API_V1_PREFIX)
