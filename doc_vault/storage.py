"""Storage backends and the whole-collection repository on top of them.

A backend is a flat string key/value store in the manner of browser local
storage. ``DocumentRepository`` reads and writes each collection wholesale as
one JSON blob; services never patch a stored collection in place.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from cryptography.fernet import Fernet, InvalidToken

from .config import StorageConfig
from .errors import ConflictError
from .models import Document, Folder, ViewingSession

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class InMemoryStorage:
    """Process-local key/value store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._items)


class JsonFileStorage:
    """Keeps every key in a single JSON snapshot on disk, optionally encrypted."""

    def __init__(self, path: str, *, encryption_key: Optional[str] = None) -> None:
        self.path = Path(path).expanduser()
        self._cipher = _StateCipher(encryption_key) if encryption_key else None
        self._items: Dict[str, str] = {}
        self._load()

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._persist()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._persist()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            raw = self.path.read_bytes()
            decoded = self._cipher.decrypt(raw) if self._cipher else raw
            payload = json.loads(decoded.decode("utf-8"))
        except (OSError, ValueError, InvalidToken) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return
        if isinstance(payload, dict):
            self._items = {str(key): str(value) for key, value in payload.items()}

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        raw = json.dumps(self._items, indent=2, sort_keys=True).encode("utf-8")
        encoded = self._cipher.encrypt(raw) if self._cipher else raw
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(encoded)
        tmp_path.replace(self.path)


class _StateCipher:
    def __init__(self, secret: str) -> None:
        self._fernet = Fernet(self._normalize(secret))

    def encrypt(self, payload: bytes) -> bytes:
        return self._fernet.encrypt(payload)

    def decrypt(self, payload: bytes) -> bytes:
        return self._fernet.decrypt(payload)

    @staticmethod
    def _normalize(secret: str) -> bytes:
        try:
            if len(base64.urlsafe_b64decode(secret)) == 32:
                return secret.encode()
        except (binascii.Error, ValueError):
            pass
        digest = hashlib.sha256(secret.encode()).digest()
        return base64.urlsafe_b64encode(digest)


def build_storage(config: StorageConfig) -> StorageBackend:
    if config.backend == "memory":
        return InMemoryStorage()
    if config.backend == "json":
        if not config.state_path:
            raise ValueError("json storage backend requires a state_path")
        return JsonFileStorage(config.state_path, encryption_key=config.state_encryption_key)
    raise NotImplementedError(f"Unknown storage backend: {config.backend}")


class DocumentRepository:
    """Whole-collection accessor for documents, folders and viewing sessions."""

    def __init__(self, backend: StorageBackend, config: Optional[StorageConfig] = None) -> None:
        self.backend = backend
        self.config = config or StorageConfig()

    def load_documents(self) -> List[Document]:
        return [Document.from_dict(item) for item in self._read(self.config.documents_key, [])]

    def save_documents(self, documents: List[Document]) -> None:
        self._write(self.config.documents_key, [document.to_dict() for document in documents])

    def load_folders(self) -> List[Folder]:
        return [Folder.from_dict(item) for item in self._read(self.config.folders_key, [])]

    def save_folders(self, folders: List[Folder]) -> None:
        self._write(self.config.folders_key, [folder.to_dict() for folder in folders])

    def load_viewing_sessions(self) -> Dict[str, ViewingSession]:
        raw = self._read(self.config.sessions_key, {})
        return {document_id: ViewingSession.from_dict(item) for document_id, item in raw.items()}

    def save_viewing_sessions(self, sessions: Dict[str, ViewingSession]) -> None:
        self._write(
            self.config.sessions_key,
            {document_id: session.to_dict() for document_id, session in sessions.items()},
        )

    def _read(self, key: str, default):
        blob = self.backend.get_item(key)
        if not blob:
            return default
        try:
            return json.loads(blob)
        except ValueError as exc:
            logger.warning("Stored collection %s is not valid JSON: %s", key, exc)
            raise ConflictError("Stored collection is corrupt", key=key) from exc

    def _write(self, key: str, payload) -> None:
        self.backend.set_item(key, json.dumps(payload))
