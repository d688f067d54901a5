import logging
import os

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import connections, content, editors, schemas

logger = logging.getLogger(__name__)


def create_app(config_obj=None) -> FastAPI:
    from ..config import Config
    from ..db import close_db, create_tables, init_db
    from ..editors.registry import default_registry

    if config_obj is None:
        config_file = os.environ.get("CONFIG_FILE", "config.toml")
        config_obj = Config.load_from_file(config_file)

    app = FastAPI(title="Quire API")

    app.state.config = config_obj
    app.state.registry = default_registry()

    db_path = os.environ.get("QUIRE_DB_PATH", config_obj.database_path)
    init_db(db_path)
    create_tables()

    if config_obj.web.allow_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    api_router = APIRouter(prefix="/api/{project}/{environment}")
    api_router.include_router(content.router)
    api_router.include_router(schemas.router)
    api_router.include_router(connections.router)
    api_router.include_router(editors.router)
    app.include_router(api_router)

    @app.on_event("shutdown")
    def shutdown_db():
        close_db()

    return app
