"""
store/documents.py -- SQLAlchemy Core document store for users and page views.

Each collection is one table holding a JSON document per row. The email is
copied into its own indexed column so lookups by owner do not scan JSON, and
the users table makes it UNIQUE. Everything else about a document is opaque
to the store: it hands back exactly what was inserted plus the generated _id.

Pattern: Repository + Data Mapper. DocumentStore owns the engine and exposes
one Collection per table; _row_to_document is the mapper. Route code never
touches SQL directly.

Identifiers are 24 lowercase hex characters (4-byte timestamp + 8 random
bytes), the same shape clients already expect from ObjectId-based stores.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = DocumentStore()                                 # SQLite default
    store = DocumentStore("postgresql://user:pw@host/db")   # PostgreSQL
    store.connect()                                         # optional; first call does it
    result = store.users.insert_one({"email": "a@b.com", "role": "user"})
    doc = store.users.find_one_by_id(result.inserted_id)
    store.close()

Layer rule: no imports from api/ or auth/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column, Integer, MetaData, String, Table, create_engine, event, select, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import get_settings
from store.models import DeleteResult, InsertResult

logger = logging.getLogger("oyou.store")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()


def _collection_table(name: str, unique_email: bool) -> Table:
    return Table(
        name,
        metadata,
        Column("seq", Integer, primary_key=True, autoincrement=True),  # insertion order
        Column("id", String(24), nullable=False, unique=True),
        Column("email", String(320), index=not unique_email, unique=unique_email),
        Column("body", JSON, nullable=False),
        Column("created_at", String(32), nullable=False),
    )


_users = _collection_table("user", unique_email=True)
_views = _collection_table("view", unique_email=False)


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode so readers do not block during writes.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_document_id() -> str:
    """Return a 24-char hex id: big-endian seconds since epoch + 8 random bytes."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class Collection:
    """One named set of documents. Every method is a single store operation."""

    def __init__(self, store: DocumentStore, table: Table) -> None:
        self._store = store
        self.table = table

    @property
    def name(self) -> str:
        return self.table.name

    def find_all(self) -> list[dict[str, Any]]:
        """Return every document in insertion order."""
        with self._store.open() as conn:
            rows = conn.execute(select(self.table).order_by(self.table.c.seq)).fetchall()
        return [_row_to_document(r) for r in rows]

    def find_one_by_id(self, doc_id: str) -> dict[str, Any] | None:
        """Look up a document by _id. Returns None if not found."""
        with self._store.open() as conn:
            row = conn.execute(select(self.table).where(self.table.c.id == doc_id)).fetchone()
        return _row_to_document(row) if row is not None else None

    def find_one_by_email(self, email: str) -> dict[str, Any] | None:
        """Return the first document owned by email, or None."""
        with self._store.open() as conn:
            row = conn.execute(
                select(self.table).where(self.table.c.email == email).order_by(self.table.c.seq).limit(1)
            ).fetchone()
        return _row_to_document(row) if row is not None else None

    def find_by_email(self, email: str) -> list[dict[str, Any]]:
        """Return every document owned by email in insertion order."""
        with self._store.open() as conn:
            rows = conn.execute(
                select(self.table).where(self.table.c.email == email).order_by(self.table.c.seq)
            ).fetchall()
        return [_row_to_document(r) for r in rows]

    def insert_one(self, document: dict[str, Any]) -> InsertResult:
        """Store a document and return its generated _id.

        A caller-supplied "_id" is discarded; the store always assigns one.
        Raises sqlalchemy.exc.IntegrityError when a unique email already exists.
        """
        body = {k: v for k, v in document.items() if k != "_id"}
        doc_id = new_document_id()
        with self._store.open() as conn:
            conn.execute(
                self.table.insert().values(
                    id=doc_id,
                    email=body.get("email"),
                    body=body,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
        logger.info("inserted %s into %s", doc_id, self.name)
        return InsertResult(inserted_id=doc_id)

    def delete_one(self, doc_id: str) -> DeleteResult:
        """Delete a document by _id. An unknown id deletes nothing and is not an error."""
        with self._store.open() as conn:
            result = conn.execute(self.table.delete().where(self.table.c.id == doc_id))
            conn.commit()
        if result.rowcount:
            logger.info("deleted %s from %s", doc_id, self.name)
        return DeleteResult(deleted_count=result.rowcount)


class DocumentStore:
    """Holds the shared engine and the users / views collections.

    Nothing touches the database until the first store call. The engine and
    the collection tables are created on demand, and a failed attempt is
    retried by the next call, so a database that is down at boot only fails
    the requests made while it is down.
    """

    def __init__(self, db_url: str | None = None) -> None:
        self.db_url = db_url or get_settings().resolved_database_url
        self._engine: Engine | None = None
        self._schema_ready = False
        self._lock = threading.RLock()
        self.users = Collection(self, _users)
        self.views = Collection(self, _views)

    @property
    def engine(self) -> Engine:
        """The SQLAlchemy engine, created on first access.

        Raises sqlalchemy.exc.ArgumentError for a malformed URL and
        ImportError when the URL's DBAPI driver is not installed.
        """
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    connect_args: dict = {}
                    if self.db_url.startswith("sqlite"):
                        connect_args["check_same_thread"] = False
                    engine = create_engine(self.db_url, connect_args=connect_args)
                    if self.db_url.startswith("sqlite"):
                        event.listen(engine, "connect", _set_wal_mode)
                    self._engine = engine
        return self._engine

    def connect(self) -> None:
        """Create missing collection tables. A no-op once that has succeeded.

        Raises sqlalchemy.exc.SQLAlchemyError if the database is unreachable.
        """
        if self._schema_ready:
            return
        with self._lock:
            if not self._schema_ready:
                metadata.create_all(self.engine)
                self._schema_ready = True
                logger.info("document store schema ready")

    def open(self) -> Connection:
        """Return a new connection, creating the schema first if still missing."""
        self.connect()
        return self.engine.connect()

    def ping(self) -> bool:
        """Return True if a trivial query succeeds. Never raises."""
        try:
            with self.open() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, ImportError) as e:
            logger.warning("store ping failed: %s", e)
            return False

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_document(row) -> dict[str, Any]:
    return {"_id": row.id, **row.body}
