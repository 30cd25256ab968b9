"""
Database connection setup.

The engine is only built when ``DATABASE_URL`` is configured; without it the
service still starts and persistence fails per request.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str, service_role: str = "", echo: bool = False):
    """Create an engine, injecting the service-role credential as password."""
    url = make_url(database_url)
    if service_role:
        url = url.set(password=service_role)

    # SQLite connections are shared across threadpool workers
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args = {"check_same_thread": False}

    return create_engine(url, connect_args=connect_args, echo=echo, pool_pre_ping=True)


engine = None
SessionLocal = None
if settings.DATABASE_URL:
    engine = build_engine(settings.DATABASE_URL, settings.DATABASE_SERVICE_ROLE, echo=settings.DEBUG)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
else:
    logger.warning("DATABASE_URL not set; uploads will fail until it is configured")


def get_db():
    """Database session dependency; yields ``None`` when unconfigured."""
    if SessionLocal is None:
        yield None
        return
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
