import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from reminders.core.config import Settings, settings as default_settings
from reminders.core.exceptions import LoginRequired, SeedingDisabledError
from reminders.core.limiter import limiter
from reminders.core.logging_config import init_application_logging, set_correlation_id
from reminders.core.security import SecurityHeadersMiddleware, get_or_create_secret_key
from reminders.core.templates import templates
from reminders.core.utils.database_helpers import check_database_health
from reminders.db.init_db import init_database
from reminders.db.session import engine, get_db_sync
from reminders.dependencies import get_reminder_repository
from reminders.repositories.reminders import ReminderRepository
from reminders.web.utils.csrf import csrf_token

init_application_logging()

logger = logging.getLogger("reminders.main")


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete input is a 400, not FastAPI's default 422"""
    if _wants_json(request):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors(), exclude={"input", "ctx", "url"})},
        )
    return templates.TemplateResponse(
        request,
        "error.html",
        {"status_code": status.HTTP_400_BAD_REQUEST, "detail": "Bad request"},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """JSON errors for the API, rendered error pages for the web UI"""
    headers = getattr(exc, "headers", None)
    if _wants_json(request):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )
    return templates.TemplateResponse(
        request,
        "error.html",
        {"status_code": exc.status_code, "detail": exc.detail},
        status_code=exc.status_code,
        headers=headers,
    )


async def login_required_handler(request: Request, exc: LoginRequired):
    """Protected web routes send anonymous clients to the login page"""
    return RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)


def _seed_demo_user(app_settings: Settings) -> None:
    from reminders.db.seeds.demo_user import seed_demo_user

    with get_db_sync() as db:
        try:
            seed_demo_user(db, app_settings)
        except SeedingDisabledError as e:
            logger.warning(str(e))


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application"""
    app_settings = app_settings or default_settings
    secret_key = get_or_create_secret_key(app_settings.SECRET_KEY)

    init_database(engine)
    if app_settings.DEV_MODE and app_settings.SEED_DEMO_USER:
        _seed_demo_user(app_settings)

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Reminders with a JSON API and a server-rendered web UI",
        version=app_settings.VERSION,
    )

    app.state.settings = app_settings
    app.state.secret_key = secret_key

    # Attach limiter to app.state for access in route decorators
    limiter.enabled = app_settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(LoginRequired, login_required_handler)

    app.add_middleware(
        SessionMiddleware,
        secret_key=secret_key,
        session_cookie=app_settings.SESSION_COOKIE,
        max_age=app_settings.session_max_age,
        https_only=app_settings.is_production,
        same_site="lax",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    templates.env.globals["app_name"] = app_settings.APP_NAME
    templates.env.globals["csrf_token"] = csrf_token

    if app_settings.SECURITY_HEADERS_ENABLED:
        app.add_middleware(SecurityHeadersMiddleware)

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        correlation_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_correlation_id(correlation_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = correlation_id
        return response

    from reminders.api import reminders as reminders_api
    from reminders.web import auth as auth_web
    from reminders.web import home
    from reminders.web import reminders as reminders_web

    app.include_router(reminders_api.router, prefix="/api/reminders")
    app.include_router(home.router, tags=["Web"])
    app.include_router(reminders_web.router, tags=["Web"])
    app.include_router(auth_web.router, tags=["Authentication Web"])

    @app.get("/health")
    def health_check():
        """Basic health check endpoint."""
        return {"status": "healthy"}

    @app.get("/api/health")
    def api_health_check(repo: ReminderRepository = Depends(get_reminder_repository)):
        """Health check with database connectivity details."""
        health_status = {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": app_settings.VERSION,
            "environment": {
                "dev_mode": app_settings.DEV_MODE,
                "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            },
            "services": {},
        }

        db_health = check_database_health()
        health_status["services"]["database"] = {
            "status": db_health["status"],
            "type": db_health["database_type"],
            "connected": db_health["connected"],
            "table_count": db_health["table_count"],
            "last_error": db_health["last_error"],
        }
        if db_health["status"] == "unhealthy":
            health_status["status"] = "unhealthy"
            return JSONResponse(status_code=503, content=health_status)
        health_status["services"]["database"]["reminder_count"] = repo.count()
        if db_health["status"] != "healthy":
            health_status["status"] = "degraded"
        return health_status

    logger.info(
        "Application configured",
        extra={
            "environment": app_settings.ENVIRONMENT,
            "rate_limit_login": app_settings.rate_limit_login,
        },
    )
    return app


app = create_app()
