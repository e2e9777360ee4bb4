# main.py
import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from skateroom.config import settings
from skateroom.config import build_sqlalchemy_db_url
from skateroom.database import Base, SessionLocal, engine
from skateroom.db.blobs import BlobStorageError, build_avatar_storage
from skateroom.db.store import StoreError
from skateroom.api.routes.health import router as health_router
from skateroom.routers import auth, gear, sessions, users
from skateroom.services.identity import IdentityProvider
import skateroom.models  # noqa: F401  # ensure all models are registered


logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.exception(
        "store.error path=%s collection=%s operation=%s", request.url.path, exc.collection, exc.operation,
        exc_info=exc,
    )
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


async def _blob_error_handler(request: Request, exc: BlobStorageError) -> JSONResponse:
    logger.exception("blob_storage.error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


def create_app() -> FastAPI:
    _configure_logging()

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(StoreError, _store_error_handler)
    application.add_exception_handler(BlobStorageError, _blob_error_handler)

    application.state.identity = IdentityProvider(SessionLocal)
    application.state.avatar_storage = build_avatar_storage(settings)

    # Health endpoints
    application.include_router(health_router)

    application.include_router(auth.router, prefix="/auth", tags=["auth"])
    application.include_router(users.router, prefix="/users", tags=["users"])
    application.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
    application.include_router(gear.router, prefix="/gear", tags=["gear"])

    storage_dir = Path(settings.storage_dir)
    storage_dir.mkdir(parents=True, exist_ok=True)
    application.mount(settings.storage_url_path, StaticFiles(directory=storage_dir), name="storage")

    # Auto-create tables only for local sqlite; shared databases are migrated explicitly.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
