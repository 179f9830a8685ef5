# SchoolDesk - database setup
# Sync engine: a save has to be durable before the mutating call returns.
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from .models import Base

# Default for dev; override via config
DATABASE_URL = "sqlite:///./schooldesk.db"

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(database_url: str | None = None) -> Engine:
    url = database_url or DATABASE_URL
    if url in _MEMORY_URLS:
        # One shared connection, otherwise every session sees a fresh empty database
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(url, echo=False)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker):
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(engine)
