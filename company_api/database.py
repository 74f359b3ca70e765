# company_api/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from company_api.config import settings


def _engine_options(url: str) -> dict:
    """Pool options for the configured backend.

    PostgreSQL gets a bounded pool: requests beyond DB_POOL_SIZE wait up to
    DB_POOL_TIMEOUT seconds for a connection instead of opening new ones.
    SQLite (local development and tests) has no server-side pool to size.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_pre_ping": True,  # Check connection health
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "connect_args": {"connect_timeout": settings.DB_CONNECT_TIMEOUT},
    }


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.DEBUG,
    **_engine_options(settings.database_url)
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Dependency to get DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
