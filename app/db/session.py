import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from app.core.config import settings
from app.core.exceptions import ConflictError, TransactionError

logger = logging.getLogger(__name__)

# Create engine
# For PostgreSQL, we might need to adjust pool_size and max_overflow in production
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session, conflict_detail: str = "Conflicting write") -> Iterator[Session]:
    """
    Run a multi-statement mutation as one unit of work on ``db``.

    Commits when the block exits cleanly. On any error the session is rolled
    back before the error leaves the block, so callers never observe a
    half-applied write:

    - ``IntegrityError``  -> ``ConflictError(conflict_detail)``
    - other SQLAlchemy    -> ``TransactionError``
    - anything else       -> re-raised unchanged
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity violation, rolled back: %s", exc.orig)
        raise ConflictError(conflict_detail) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure, rolled back.")
        raise TransactionError("Server Error") from exc
    except Exception:
        db.rollback()
        raise
