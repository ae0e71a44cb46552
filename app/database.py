"""
Database connection and session management for Social Events Backend
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.config import settings


def build_engine(database_url: str, echo: bool = False):
    """
    Create a SQLAlchemy engine for the given URL.

    PostgreSQL gets a connection pool; SQLite (used by the test-suite) gets a
    single shared connection so an in-memory database survives across sessions.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,      # Test connections before using
        pool_size=10,            # Connection pool size
        max_overflow=20,         # Overflow connections allowed
        echo=echo                # Log SQL queries in debug mode
    )


# Create database engine with connection pooling
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Session factory for creating database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session in endpoints

    Usage in FastAPI endpoints:
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Initialize database tables"""
    # Import models so they are registered on Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
