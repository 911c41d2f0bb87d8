from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

SessionFactory = Callable[[], Session]


def create_engine_for(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Requests may be served from a worker thread other than the one that
        # opened the connection.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, future=True, connect_args=connect_args)


def create_sqlalchemy_session_factory(engine: Engine) -> SessionFactory:
    """Create a factory producing SQLAlchemy sessions bound to ``engine``.

    Sessions do not expire objects on commit so domain conversion can run
    after the commit that produced them.
    """

    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)

    def _factory() -> Session:
        return SessionLocal()

    return _factory
