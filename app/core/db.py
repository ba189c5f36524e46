import os
import logging
from contextlib import contextmanager
from logging import INFO
from typing import Optional
from tortoise import Tortoise
from tortoise.exceptions import ConfigurationError, IntegrityError, OperationalError
from tortoise.transactions import in_transaction
from app.core import config
from app.core.exceptions import Conflict, NotFound, StorageFailure
from app.scripts.seed_data import seed

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(INFO)
log = logging.getLogger("inventory.db")

SQLITE_SCHEME = "sqlite://"

_active_url: Optional[str] = None


def _sqlite_file(db_url: str) -> Optional[str]:
    """Returns the backing file of a SQLite URL, or None for in-memory and other engines."""
    if not db_url.startswith(SQLITE_SCHEME):
        return None
    path = db_url[len(SQLITE_SCHEME):].split("?", 1)[0]
    if not path or path == ":memory:":
        return None
    return path


async def init_db(db_url: Optional[str] = None):
    """Initializes the Tortoise ORM connection and applies the schema."""
    global _active_url
    _active_url = db_url or config.DB_URL
    try:
        await Tortoise.init(
            db_url=_active_url,
            modules={"models": config.MODELS_MODULES},
        )
        await apply_schema()
        log.info("Database connection established.")
    except Exception as e:
        log.error(f"FATAL ERROR: Could not connect to database at {_active_url}. Error: {e}")
        # Re-raise to prevent the application from starting without a database
        raise e


async def apply_schema():
    """Creates the four tables and their constraints when they do not exist yet."""
    await Tortoise.generate_schemas(safe=True)


async def close_db():
    """Closes all database connections, if any were opened."""
    if not Tortoise._inited:
        return
    try:
        await Tortoise.close_connections()
    except ConfigurationError:
        # Connections were already released by an earlier close
        return
    log.info("Database connections closed.")


async def reset_db(db_url: Optional[str] = None):
    """
    Drops every change made since the last reset: closes the connection, deletes
    the database file, reopens it and restores the schema and reference dataset.
    """
    db_url = db_url or _active_url or config.DB_URL
    await close_db()

    path = _sqlite_file(db_url)
    if path and os.path.exists(path):
        os.remove(path)
        # WAL mode leaves side files next to the database
        for suffix in ("-wal", "-shm"):
            if os.path.exists(path + suffix):
                os.remove(path + suffix)

    await init_db(db_url)
    async with in_transaction() as conn:
        await seed(conn)
    log.info("Database reset to the reference dataset.")


@contextmanager
def storage_errors(conflict: Optional[str] = None, missing: Optional[str] = None):
    """
    Translates storage exceptions raised inside the block into service errors.
    Unique violations become Conflict(conflict), foreign key violations become
    NotFound(missing); everything else is a StorageFailure.
    """
    try:
        yield
    except IntegrityError as e:
        text = str(e).lower()
        if conflict and ("unique" in text or "duplicate" in text):
            raise Conflict(conflict) from e
        if missing and "foreign key" in text:
            raise NotFound(missing) from e
        raise StorageFailure(str(e)) from e
    except OperationalError as e:
        raise StorageFailure(str(e)) from e
