# vehicle_tracker/infrastructure/database/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vehicle_tracker.config.logging_config import get_logger
from vehicle_tracker.infrastructure.database.base_model import BaseModel

logger = get_logger(__name__)

_engine: Engine | None = None

_SessionLocal = sessionmaker(
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def init_engine(database_url: str, *, echo: bool = False) -> Engine:
    global _engine

    if _engine is not None:
        _engine.dispose()

    if database_url.startswith("sqlite"):
        # in-memory sqlite must share one connection across threads
        _engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        _engine = create_engine(database_url, echo=echo, pool_pre_ping=True)

    _SessionLocal.configure(bind=_engine)
    logger.info("database_engine_initialised", dialect=_engine.dialect.name)
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database engine not initialised; call init_engine() first.")
    return _engine


def create_schema() -> None:
    import vehicle_tracker.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.create_all(bind=get_engine())


def drop_schema() -> None:
    BaseModel.metadata.drop_all(bind=get_engine())


@contextmanager
def db_session() -> Iterator[Session]:
    session: Session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
