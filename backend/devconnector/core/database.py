from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from devconnector.core.config import settings

# SQLite connections are bound to the creating thread unless told otherwise,
# and FastAPI runs sync dependencies in a threadpool
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create database engine - manages connection pool
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

# Session factory - each request gets a new session
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all database models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session.

    The session is closed after the request completes, even when the
    handler raised.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
