# checkout_service/data/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from checkout_service.utils.settings import DATABASE_URL


def build_engine(url: str, **kwargs):
    """
    Engine factory shared by the app and the tests.

    pysqlite opens transactions lazily and never emits SAVEPOINT correctly,
    so for SQLite we take over BEGIN ourselves (SQLAlchemy's documented recipe).
    Nested transactions are needed for the best-effort checkout steps.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


engine = build_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # close() rolls back anything left open before the connection goes back to the pool
        db.close()
