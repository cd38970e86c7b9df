from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from app.core.config import settings


def _use_immediate_transactions(engine: Engine) -> None:
    """
    Make SQLite take its write lock when a transaction begins.

    pysqlite defers BEGIN until the first write, so two sessions can both read
    a slot's booking count before either inserts. BEGIN IMMEDIATE serialises
    the whole admission transaction instead, which is what the row lock does
    on PostgreSQL.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine, applying the SQLite specifics when needed."""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", 30)
        engine = create_engine(database_url, connect_args=connect_args, **kwargs)
        _use_immediate_transactions(engine)
        return engine
    return create_engine(database_url, pool_pre_ping=True, **kwargs)


# The engine is the entry point to the database. It's configured with the
# database URL and handles the connection pooling.
engine = make_engine(settings.DATABASE_URL)

# SessionLocal is a factory for creating new Session objects, one per request.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always close, even if the endpoint raised.
        db.close()
