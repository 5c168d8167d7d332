# -*- coding: utf-8 -*-
"""Auth — anonymous accounts on the document store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..docstore import DocumentStore

ACCOUNTS_COLLECTION = "accounts"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class AccountStore:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def create_anonymous(self) -> Dict[str, Any]:
        data = {"anonymous": True, "created_at": _utc_now()}
        user_id = self.store.add(ACCOUNTS_COLLECTION, data)
        return {"id": user_id, **data}

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        doc = self.store.get(ACCOUNTS_COLLECTION, user_id)
        return {"id": doc.id, **doc.data} if doc else None
