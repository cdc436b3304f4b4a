import logging
import os

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .live import OBSERVER_KEY, TableObserver
from .settings import get_settings

log = logging.getLogger(__name__)

settings = get_settings()

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass


def make_engine(url: str, *, echo: bool = False) -> Engine:
    kwargs = {"echo": echo}
    if url.startswith("sqlite"):
        # sync FastAPI routes run in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every checkout is a new empty db
            kwargs["poolclass"] = StaticPool
    eng = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(eng, "connect", _enable_foreign_keys)
    return eng


def _enable_foreign_keys(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# one observer per database file, so writes through any engine on that file
# wake every live query on it
_observers: dict[str, TableObserver] = {}


def observer_for_engine(eng: Engine) -> TableObserver:
    database = eng.url.database
    if not database or database == ":memory:":
        # every in-memory engine is its own database
        return TableObserver(Base.metadata)
    key = os.path.abspath(database)
    if key not in _observers:
        _observers[key] = TableObserver(Base.metadata)
    return _observers[key]


def make_session_factory(eng: Engine) -> sessionmaker:
    """Session factory whose commits feed live queries."""
    observer = observer_for_engine(eng)
    factory = sessionmaker(
        bind=eng, autocommit=False, autoflush=False, info={OBSERVER_KEY: observer}
    )
    observer.bind(factory)
    return factory


def init_database(eng: Engine, factory: sessionmaker, *, schema_version: int, seed: bool = True) -> bool:
    """Create the schema, rebuilding it when the stored version differs.

    There is no migration path: a version mismatch drops every table.
    Returns True when the store was (re)created.
    """
    from . import models  # noqa: F401  # registers every table on Base.metadata
    from .seed import preload_exercise_definitions

    with eng.begin() as conn:
        current = conn.execute(text("PRAGMA user_version")).scalar_one()
        existing = set(inspect(conn).get_table_names())
        expected = set(Base.metadata.tables)
        if current == schema_version and expected <= existing:
            return False

        if existing:
            log.warning("schema version %s != %s, rebuilding store", current, schema_version)
            Base.metadata.drop_all(conn)
        Base.metadata.create_all(conn)
        conn.execute(text(f"PRAGMA user_version = {int(schema_version)}"))
        log.info("created store schema v%s", schema_version)

    if seed:
        with factory() as db:
            preload_exercise_definitions(db)
    return True


# Process-wide store
engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# Session factory
SessionLocal = make_session_factory(engine)

# Dependency for FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
