"""Database initialization and operations."""

import logging
from pathlib import Path

from playhouse.pool import PooledSqliteDatabase

from .consts import DB_MAX_CONNECTIONS, DB_PRAGMAS, DB_STALE_TIMEOUT
from .models import ConnectionRecord, ContentRecord, SchemaRecord, User, database_proxy

logger = logging.getLogger(__name__)

database = None

TABLES = [User, SchemaRecord, ContentRecord, ConnectionRecord]


def init_db(db_path: str):
    """Initialize database connection pool."""
    global database

    db_file = Path(db_path)
    db_dir = db_file.parent
    if db_dir and not db_dir.exists():
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created database directory: {db_dir}")

    database = PooledSqliteDatabase(
        db_path,
        max_connections=DB_MAX_CONNECTIONS,
        stale_timeout=DB_STALE_TIMEOUT,
        pragmas=DB_PRAGMAS,
        check_same_thread=False,
    )

    database_proxy.initialize(database)
    logger.info(f"Database connection pool initialized: {db_path}")


def create_tables():
    """Create database tables."""
    database.create_tables(TABLES, safe=True)

    logger.info("Database tables created")


def close_db():
    """Close database connection."""
    global database
    if database:
        database.close()
        logger.info("Database connection closed")


def create_user(
    username: str,
    token: str | None = None,
    is_admin: bool = False,
    scopes: dict[str, list[str]] | None = None,
) -> User:
    """Create or update a user."""
    with database.atomic():
        user = User.get_or_none(User.username == username)
        if user is None:
            user = User(username=username)
        user.token = token
        user.is_admin = is_admin
        user.scopes = scopes or {}
        user.save()
        logger.info(f"User saved: {username}")
        return user
