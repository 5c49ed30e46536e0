"""
core/db.py -- SQLAlchemy engine factory shared by every store.

catalog/store.py and auth/store.py each own their tables, but both must open
SQLite the same way, so engine creation lives in the kernel.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine


def _set_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    """Enable WAL journaling and foreign key enforcement.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool. foreign_keys is off by default in SQLite, so
    without it books.author_id would accept any integer.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


def make_engine(db_url: str) -> Engine:
    """Create an engine, applying the SQLite connection tweaks when relevant."""
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        # TestClient and uvicorn run sync handlers in a thread pool.
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine
