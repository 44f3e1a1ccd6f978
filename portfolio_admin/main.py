# portfolio_admin/main.py
from __future__ import annotations
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings as default_settings
from .database import init_db
from .errors import register_exception_handlers
from .logging import RequestLoggingMiddleware, configure_logging, get_logger
from .routes import profile as profile_routes
from .routes import records as records_routes
from .services.storage import FileStore

logger = get_logger("portfolio_admin")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    store = FileStore(settings.upload_path, settings.upload_url_prefix)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.init_buckets()
        init_db()
        logger.info("startup_complete", app=settings.app_name, upload_root=str(store.root))
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.file_store = store

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(profile_routes.router)
    app.include_router(records_routes.router)
    app.mount(store.url_prefix, StaticFiles(directory=store.root, check_dir=False), name="uploads")

    @app.get("/health")
    def health():
        return {"ok": True, "app": settings.app_name}

    return app


app = create_app()
