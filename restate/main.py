"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from pydantic import ValidationError as PydanticValidationError
import logging

from restate.appwrite import AppwriteException, create_client
from restate.config import settings
from restate.routers import auth_router, properties_router, agents_router
from restate.utils.exceptions import APIException, ServiceUnavailableError
from restate.services.error_handler import ErrorHandlerService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Appwrite endpoint: {settings.appwrite_endpoint} (project {settings.appwrite_project_id or 'unset'})")

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Property listings backed by Appwrite.

    ## Features

    * **Browse**: featured listings and newest-first search by type and name
    * **Details**: property detail with reviews, gallery and listing agent
    * **Authentication**: Google OAuth through Appwrite sessions

    ## Authentication

    Start at `/api/v1/auth/oauth/google`. The callback returns a session secret;
    send it back as the `X-Appwrite-Session` header.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "OAuth login and session management"
        },
        {
            "name": "Properties",
            "description": "Property browsing and search"
        },
        {
            "name": "Agents",
            "description": "Listing agents"
        },
        {
            "name": "Health",
            "description": "System health endpoints"
        }
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(properties_router, prefix=settings.api_v1_prefix)
app.include_router(agents_router, prefix=settings.api_v1_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    """Handle Pydantic validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(AppwriteException)
async def appwrite_exception_handler(request: Request, exc: AppwriteException):
    """Handle errors from the Appwrite backend."""
    return ErrorHandlerService.handle_appwrite_error(exc, request)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle FastAPI HTTP exceptions with structured error responses."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint providing basic API information.
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "healthy",
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_v1_prefix
    }


async def check_appwrite_connection() -> bool:
    async with create_client() as client:
        return await client.ping()


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with an Appwrite connectivity probe.
    """
    if not await check_appwrite_connection():
        logger.error("Health check failed: Appwrite unreachable")
        raise ServiceUnavailableError("Appwrite connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "appwrite": "connected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "restate.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
