"""Database connection and engine management."""

import logging
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

load_dotenv(".env.local")
load_dotenv()

logger = logging.getLogger(__name__)

DB_ENV_VARS = ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD")

# Concurrent lease updates each check out their own pooled connection
POOL_SIZE = 20
MAX_OVERFLOW = 100


def build_database_url() -> str:
    """Resolve the database URL from DATABASE_URL or the DB_* variables."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    missing = [name for name in DB_ENV_VARS if not os.getenv(name)]
    if missing:
        logger.warning(
            "Missing environment variables: %s. Using default values; "
            "set them in .env.local for a real database.",
            ", ".join(missing),
        )

    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME", "cam_database")
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


def make_engine(url: str | None = None) -> Engine:
    """Create an engine whose pool can serve a full update batch at once."""
    url = url or build_database_url()
    if url.startswith("sqlite"):
        return create_engine(url, echo=False)
    return create_engine(
        url,
        echo=False,
        pool_size=POOL_SIZE,
        max_overflow=MAX_OVERFLOW,
    )


Base = declarative_base()


def init_db(engine: Engine) -> None:
    """Create the owned and leases tables if they do not exist."""
    # Importing models registers both tables on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
