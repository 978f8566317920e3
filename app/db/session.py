from typing import Optional

from sqlalchemy import event
from sqlmodel import Session, create_engine
from app.core.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith('sqlite'):
        return {'connect_args': {'check_same_thread': False}}
    return {'pool_pre_ping': True}


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return str(value).lower()


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's builtin lower() only folds ASCII.
    dbapi_connection.create_function('lower', 1, _unicode_lower, deterministic=True)


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
if engine.dialect.name == 'sqlite':
    event.listen(engine, 'connect', _register_sqlite_functions)


def get_session():
    with Session(engine) as session:
        yield session
