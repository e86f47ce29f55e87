"""
Job Portal API - Main Application

FastAPI backend with:
- MongoDB GridFS for resume / profile photo storage
- NewsAPI pass-through for the news page
- Resend for contact form emails

Run: uvicorn jobportal.main:app --reload
"""

from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobportal import __version__
from jobportal.api.routes import api_router
from jobportal.core.config import Settings, get_settings
from jobportal.core.exceptions import JobPortalError, UpstreamServiceError
from jobportal.core.logging import configure_logging
from jobportal.db.mongodb import (
    create_gridfs_bucket,
    create_mongo_client,
    get_database,
    test_mongo_connection,
)
from jobportal.schemas.schemas import HealthResponse
from jobportal.services.file_storage import FileStore
from jobportal.services.mailer import ResendMailer
from jobportal.services.news_client import NewsClient
from jobportal.services.user_service import UserService

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build every shared client once; routes get them via jobportal.api.deps."""
    settings: Settings = app.state.settings

    mongo_client = create_mongo_client(settings)
    db = get_database(mongo_client, settings)
    http = httpx.AsyncClient()

    app.state.mongo_client = mongo_client
    app.state.file_store = FileStore(
        create_gridfs_bucket(db, settings),
        url_prefix=settings.api_prefix,
        chunk_size=settings.file_stream_chunk_size,
    )
    app.state.user_service = UserService(db[settings.users_collection])
    app.state.news_client = NewsClient(http, settings)
    app.state.mailer = ResendMailer(http, settings)
    logger.info(
        "Job Portal API started",
        mongodb_db=settings.mongodb_db,
        news_configured=settings.news_configured,
        email_configured=settings.email_configured,
    )
    try:
        yield
    finally:
        await http.aclose()
        mongo_client.close()
        logger.info("Job Portal API stopped")


async def handle_app_error(request: Request, exc: JobPortalError) -> JSONResponse:
    """Render any JobPortalError as {"success": false, "message": ...}."""
    body = {"success": False, "message": exc.message}
    if isinstance(exc, UpstreamServiceError) and exc.detail:
        body["error"] = exc.detail

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        path=request.url.path,
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing and body-parsing errors (404, 405, bad multipart) in the same shape."""
    logger.warning(
        "Request failed", path=request.url.path, status_code=exc.status_code, message=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """First offending parameter, e.g. "Invalid query parameter pageSize: ..."."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())]
    where = f"{loc[0]} parameter {'.'.join(loc[1:])}" if len(loc) > 1 else "request"
    return f"Invalid {where}: {first.get('msg', 'invalid value')}"


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(exc)
    logger.warning("Request failed", path=request.url.path, status_code=422, message=message)
    return JSONResponse(status_code=422, content={"success": False, "message": message})


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title="Job Portal API",
        description="""
        Backend for the job portal frontend.

        ## Features
        - **Uploads**: Resume (PDF/DOC/DOCX) and profile photo (JPG/PNG) upload to GridFS
        - **Files**: Inline streaming of stored files
        - **Resume**: Per-user resume download / redirect
        - **Contact**: Contact form delivered by email
        - **News**: Headlines from NewsAPI
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(JobPortalError, handle_app_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    # Include API routes
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/", tags=["Health"])
    async def root():
        return {"status": "healthy", "app": "Job Portal API", "version": __version__}

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check(request: Request):
        """Detailed health check."""
        connected = test_mongo_connection(request.app.state.mongo_client)
        return HealthResponse(
            status="healthy" if connected else "degraded",
            mongodb="connected" if connected else "disconnected",
            news_configured=settings.news_configured,
            email_configured=settings.email_configured,
        )

    return app


app = create_app()
