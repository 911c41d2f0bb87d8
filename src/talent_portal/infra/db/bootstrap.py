from __future__ import annotations

import logging
from typing import Optional

from src.talent_portal.config import settings
from src.talent_portal.infra.db.inmemory import build_inmemory_store
from src.talent_portal.infra.db.models import Base
from src.talent_portal.infra.db.repositories import Store
from src.talent_portal.infra.db.session import create_engine_for, create_sqlalchemy_session_factory
from src.talent_portal.infra.db.sql_store import build_sql_store

logger = logging.getLogger(__name__)

# Active store for the process. Routes receive it through ``get_store`` so the
# binding can be swapped at startup (SQL) or per test.
_store: Store = build_inmemory_store()


def get_store() -> Store:
    """FastAPI dependency returning the active store."""

    return _store


def set_store(store: Store) -> Store:
    global _store
    _store = store
    return store


def init_sql_store(database_url: Optional[str] = None) -> Optional[Store]:
    """Switch the active store to SQL-backed repositories.

    With an explicit ``database_url`` this always switches. Otherwise it is a
    no-op unless USE_SQL_REPOS is enabled and DATABASE_URL is configured, in
    which case the in-memory store stays active.
    """

    if database_url is None:
        if not settings.use_sql_repos:
            return None
        database_url = settings.database_url
        if not database_url:
            logger.warning("USE_SQL_REPOS is enabled but DATABASE_URL is not set; keeping in-memory store")
            return None

    engine = create_engine_for(database_url)

    # Create tables if they do not exist. A real deployment should run
    # migrations instead.
    Base.metadata.create_all(engine)

    store = build_sql_store(create_sqlalchemy_session_factory(engine))
    logger.info("Using SQL store at %s", engine.url.render_as_string(hide_password=True))
    return set_store(store)
