# -*- coding: utf-8 -*-
"""Document store handles (abstract interface + memory / SQLite backends)."""

from .base import Document, DocumentStore, Filter, collection_path
from .memory import MemoryDocumentStore
from .sqlite import SQLiteDocumentStore

__all__ = [
    "Document",
    "DocumentStore",
    "Filter",
    "MemoryDocumentStore",
    "SQLiteDocumentStore",
    "collection_path",
]
