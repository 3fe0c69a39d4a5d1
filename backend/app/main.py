"""
Point d'entrée principal de l'API PFE Tracker.
Démarrage : uvicorn app.main:app --reload
"""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings
from app.database import Database
from app.errors import AppError, NotFound
from app.logging_config import configure_logging
from app.middleware import RequestLoggingMiddleware
from app.routers import auth, meta, projects, sprints
from app.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

NOT_FOUND_HINTS = {"api": "/api", "health": "/health", "auth": "/api/auth"}


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l'application à partir d'une configuration explicite.
    Les collaborateurs (base de données, mots de passe, tokens) sont stockés dans app.state.
    """
    app_settings = app_settings or settings
    app_settings.validate_runtime_config()
    configure_logging(app_settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Ouvre la base au démarrage (création du schéma si demandé) et la ferme à l'arrêt."""
        database = Database(app_settings.DATABASE_URL)
        if app_settings.CREATE_TABLES:
            database.create_all()
        app.state.database = database
        logger.info("PFE Tracker API démarrée (env=%s, version=%s)", app_settings.ENV, app_settings.APP_VERSION)
        yield
        database.dispose()

    app = FastAPI(
        title="PFE Tracker API",
        description="API de suivi des projets de fin d'études : projets, sprints et encadrants",
        version=app_settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.password_hasher = PasswordHasher(rounds=app_settings.BCRYPT_ROUNDS)
    app.state.token_service = TokenService.from_settings(app_settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    app.include_router(meta.router)
    app.include_router(auth.router)
    app.include_router(projects.router)
    app.include_router(sprints.router)

    _register_exception_handlers(app, app_settings)
    return app


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        msg = err.get("msg", "")
        if msg.startswith("Value error, "):
            messages.append(msg[len("Value error, "):])
        else:
            field = err.get("loc", ("",))[-1]
            messages.append(f"{field}: {msg}")
    return ", ".join(messages) or "Données invalides"


def _is_malformed_path_id(exc: RequestValidationError) -> bool:
    """Toutes les erreurs portent sur un identifiant UUID du chemin."""
    errors = exc.errors()
    return bool(errors) and all(
        err.get("loc", ("",))[0] == "path" and err.get("type", "").startswith("uuid")
        for err in errors
    )


def _register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Erreur %s sur %s : %s", exc.status_code, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Un identifiant mal formé désigne une ressource qui ne peut pas exister
        if _is_malformed_path_id(exc):
            return _error(NotFound.status_code, NotFound.default_message)
        return _error(400, _validation_message(exc))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning("Conflit d'unicité sur %s : %s", request.url.path, exc.orig)
        return _error(400, "Cette ressource existe déjà")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error(
                404,
                f"Route {request.url.path} non trouvée",
                availableEndpoints=NOT_FOUND_HINTS,
            )
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Intercepte toutes les exceptions non gérées. La trace n'est renvoyée au client
        qu'en dehors de la production.
        """
        logger.error("Exception non gérée : %s", exc, exc_info=True)
        extra = {}
        if not app_settings.is_production:
            extra = {
                "error": str(exc),
                "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            }
        return _error(500, "Erreur serveur interne", **extra)


app = create_app()
