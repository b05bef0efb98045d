import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from brandkeeper.core.audit.service import AuditMiddleware
from brandkeeper.core.auth.router import router as auth_router
from brandkeeper.core.brand.router import router as brand_router
from brandkeeper.core.companies.router import router as companies_router
from brandkeeper.core.countries.router import router as countries_router
from brandkeeper.core.errors import INVALID_DATA_MESSAGE, UNAUTHORIZED_MESSAGE, UNEXPECTED_MESSAGE, AppError
from brandkeeper.core.fonts.router import router as fonts_router
from brandkeeper.core.profile.router import router as profile_router
from brandkeeper.core.signatures.router import router as signatures_router
from brandkeeper.core.social_media.router import router as social_media_router
from brandkeeper.core.users.router import router as users_router
from brandkeeper.core.validation import issues_from_errors
from brandkeeper.db.session import engine
from brandkeeper.logging_config import setup_logging
from brandkeeper.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await engine.dispose()


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        issues = issues_from_errors(exc.errors())
        logger.info("Invalid request to %s: %s", request.url.path, [issue["path"] for issue in issues])
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_DATA_MESSAGE, issues)

    @app.exception_handler(StarletteHTTPException)
    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            message = UNAUTHORIZED_MESSAGE
        else:
            message = exc.detail if isinstance(exc.detail, str) else UNEXPECTED_MESSAGE
        return _error(exc.status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_MESSAGE, str(exc) or exc.__class__.__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Brand Keeper API",
        version="0.1.0",
        docs_url="/docs" if settings.APP_DEBUG else None,
        redoc_url="/redoc" if settings.APP_DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(AuditMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_DEBUG else [settings.APP_URL],
        allow_credentials=not settings.APP_DEBUG,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for router in (
        auth_router,
        brand_router,
        companies_router,
        social_media_router,
        countries_router,
        signatures_router,
        fonts_router,
        profile_router,
        users_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    media_path = urlparse(settings.MEDIA_URL).path.rstrip("/") or "/media"
    app.mount(media_path, StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False), name="media")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
