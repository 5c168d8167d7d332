# -*- coding: utf-8 -*-
"""Document store — in-process implementation (tests, demos)."""

from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from .base import Document, DocumentStore, Filter, check_field_name


class MemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        with self._lock:
            self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._collections.get(collection, {}).get(doc_id)
            if data is None:
                return None
            return Document(id=doc_id, data=copy.deepcopy(data))

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
        with self._lock:
            rows = list(self._collections.get(collection, {}).items())
        docs = [
            Document(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in rows
            if all(f.matches(data) for f in filters)
        ]
        if order_by:
            check_field_name(order_by)
            present = [d for d in docs if d.data.get(order_by) is not None]
            missing = [d for d in docs if d.data.get(order_by) is None]
            present.sort(key=lambda d: d.data[order_by])
            docs = present + missing
        if limit is not None:
            docs = docs[:limit]
        return docs
