"""
Database configuration - SQLAlchemy persistence layer
"""
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from hotelres.config import settings
from hotelres.exceptions import PersistenceError

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

_is_sqlite = SQLALCHEMY_DATABASE_URL.startswith("sqlite")

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {}
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency: yield a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables"""
    from hotelres.models import ontology  # noqa
    Base.metadata.create_all(bind=engine)

    if _is_sqlite:
        # WAL mode for better concurrent reads
        with engine.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.execute(text("PRAGMA synchronous=NORMAL"))
            conn.commit()


def commit_or_rollback(db, action: str) -> None:
    """
    Commit the session; on failure roll back and raise PersistenceError

    Args:
        db: SQLAlchemy session
        action: short description used in the log line and error message
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {e}")
        raise PersistenceError(f"Could not {action}, please try again") from e
