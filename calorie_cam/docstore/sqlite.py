# -*- coding: utf-8 -*-
"""Document store — SQLite implementation (JSON documents, json_extract filters)."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from ..app_db import db_conn, init_app_db
from ..errors import StorageError
from .base import Document, DocumentStore, Filter, check_field_name

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _json_path(field: str) -> str:
    return f"$.{check_field_name(field)}"


class SQLiteDocumentStore(DocumentStore):
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        try:
            init_app_db(db_path)
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to initialize document store: {exc}") from exc

    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        now = _utc_now()
        payload = json.dumps(data, ensure_ascii=False)
        try:
            with db_conn(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO documents (collection, id, data, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(collection, id) DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at
                    """,
                    (collection, doc_id, payload, now, now),
                )
        except sqlite3.Error as exc:
            logger.error("document write failed: %s/%s: %s", collection, doc_id, exc)
            raise StorageError(f"Failed to write document: {exc}") from exc

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            with db_conn(self.db_path) as conn:
                row = conn.execute(
                    "SELECT id, data FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read document: {exc}") from exc
        if not row:
            return None
        return Document(id=row["id"], data=json.loads(row["data"]))

    def add(self, collection: str, data: Dict[str, Any]) -> str:
        doc_id = uuid4().hex
        self.set(collection, doc_id, data)
        return doc_id

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Document]:
        sql = ["SELECT id, data FROM documents WHERE collection = ?"]
        params: List[Any] = [collection]
        for f in filters:
            sql.append(f"AND json_extract(data, ?) {f.op.replace('==', '=')} ?")
            params.extend([_json_path(f.field), f.value])
        if order_by:
            path = _json_path(order_by)
            sql.append("ORDER BY json_extract(data, ?) IS NULL, json_extract(data, ?) ASC, rowid ASC")
            params.extend([path, path])
        else:
            sql.append("ORDER BY rowid ASC")
        if limit is not None:
            sql.append("LIMIT ?")
            params.append(int(limit))

        try:
            with db_conn(self.db_path) as conn:
                rows = conn.execute(" ".join(sql), params).fetchall()
        except sqlite3.Error as exc:
            logger.error("document query failed: %s: %s", collection, exc)
            raise StorageError(f"Failed to query documents: {exc}") from exc
        return [Document(id=row["id"], data=json.loads(row["data"])) for row in rows]
