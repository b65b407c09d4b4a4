"""
Temporary preview handles for the selected image.

The browser shows the picked photo through GET /preview/<token>. A handle
lives until it is released (new file selected, or session reset); after
that the URL answers 404.
"""
import threading
import uuid
from typing import Dict, Optional, Tuple


class PreviewStore:
    def __init__(self, status_store):
        self.status = status_store
        self._items: Dict[str, Tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def create(self, raw: bytes, mime_type: str) -> str:
        token = uuid.uuid4().hex[:12]
        with self._lock:
            self._items[token] = (raw, mime_type)
        self.status.log(f"preview: created {token} ({len(raw)} bytes)")
        return token

    def get(self, token: str) -> Optional[Tuple[bytes, str]]:
        with self._lock:
            return self._items.get(token)

    def release(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            found = self._items.pop(token, None) is not None
        if found:
            self.status.log(f"preview: released {token}")
        return found

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def preview_url(token: Optional[str]) -> Optional[str]:
    return f"/preview/{token}" if token else None
