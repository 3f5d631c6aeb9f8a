# futurehire/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from futurehire.api.v1.auth import router as auth_router
from futurehire.api.v1.users import router as users_router
from futurehire.core.config import Settings, settings as default_settings
from futurehire.core.errors import ServiceError, StoreUnavailable
from futurehire.core.security import PasswordHasher, TokenService
from futurehire.db.mongo import close_db
from futurehire.repositories.users import CredentialStore, build_store
from futurehire.services.auth import AuthService
from futurehire.services.records import UserRecordService
from futurehire.services.resume_analysis import MockResumeAnalyzer

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[CredentialStore] = None) -> FastAPI:
    """
    Build the application. Fails closed: a missing SECRET_KEY raises
    ``ConfigurationError`` here, before any route can be served.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL)

    tokens = TokenService.from_settings(settings)
    hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    store = store or build_store(settings)

    app = FastAPI(title="FutureHire API")
    app.state.settings = settings
    app.state.tokens = tokens
    app.state.store = store
    app.state.auth = AuthService(store, hasher, tokens)
    app.state.records = UserRecordService(store)
    app.state.resume_analyzer = MockResumeAnalyzer()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error", "kind": "internal"})

    app.include_router(auth_router)
    app.include_router(users_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event():
        try:
            await store.ensure_indexes()
        except StoreUnavailable:
            # retried lazily before the first insert
            logger.warning("Could not create store indexes at startup")

    @app.on_event("shutdown")
    async def shutdown_event():
        close_db()

    return app


app = create_app()
