# -*- coding: utf-8 -*-
"""Document store — abstract handle over a hierarchical collection/document store.

Components receive a store handle at construction time. Collections are
slash-joined paths such as ``foods`` or ``users/<uid>/meals``; documents are
JSON-compatible dicts addressed by an id unique within their collection.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

OPERATORS = ("==", "<", "<=", ">", ">=")

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Filter:
    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op!r}")
        check_field_name(self.field)

    def matches(self, data: Dict[str, Any]) -> bool:
        if self.field not in data:
            return False
        actual = data[self.field]
        try:
            if self.op == "==":
                return actual == self.value
            if self.op == "<":
                return actual < self.value
            if self.op == "<=":
                return actual <= self.value
            if self.op == ">":
                return actual > self.value
            return actual >= self.value
        except TypeError:
            # Mixed types never match a range filter.
            return False


@dataclass
class Document:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)


def collection_path(*segments: str) -> str:
    parts = [str(s).strip("/") for s in segments]
    if any(not p for p in parts):
        raise ValueError("Collection path segments must be non-empty")
    return "/".join(parts)


def check_field_name(name: str) -> str:
    if not _FIELD_RE.match(name):
        raise ValueError(f"Invalid document field name: {name!r}")
    return name


class DocumentStore:
    """CRUD + query interface. Implementations raise StorageError on backend failure."""

    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        raise NotImplementedError

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def add(self, collection: str, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Document]:
        raise NotImplementedError

    def list(self, collection: str) -> List[Document]:
        return self.query(collection)

    def close(self) -> None:
        """Release backend resources (no-op by default)."""
