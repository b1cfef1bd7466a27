"""Per-document ownership and ACL entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Union

from ..errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from ..models import Document, PermissionEntry, PermissionLevel
from .base import BaseService

LevelLike = Union[PermissionLevel, str]


def has_level(document: Document, user_id: str, required: LevelLike) -> bool:
    """Owner always passes; anyone else needs an entry ranked at least ``required``."""
    if document.permissions.owner == user_id:
        return True
    entry = document.permissions.entry_for(user_id)
    if entry is None:
        return False
    return PermissionLevel.rank(entry.level) >= PermissionLevel.rank(required) > 0


def require_level(document: Document, user_id: str, required: LevelLike, message: str = "Permission denied") -> None:
    if not has_level(document, user_id, required):
        raise PermissionDeniedError(message, document_id=document.id, user_id=user_id)


@dataclass
class AccessControlService(BaseService):
    def grant(self, document_id: str, user_id: str, level: LevelLike) -> Document:
        parsed = PermissionLevel.parse(level)
        if parsed is None:
            raise ValidationFailedError(f"Invalid permission level: {level}")
        documents, index = self._locate(document_id)
        document = documents[index]
        entry = document.permissions.entry_for(user_id)
        if entry is None:
            document.permissions.access.append(PermissionEntry(user_id=user_id, level=parsed.value))
        else:
            entry.level = parsed.value
        self.repository.save_documents(documents)
        self.emit_event("permission_granted", document_id=document_id, user_id=user_id, level=parsed.value)
        return document

    def revoke(self, document_id: str, user_id: str) -> Document:
        documents, index = self._locate(document_id)
        document = documents[index]
        remaining = [entry for entry in document.permissions.access if entry.user_id != user_id]
        if len(remaining) == len(document.permissions.access):
            return document
        document.permissions.access = remaining
        self.repository.save_documents(documents)
        self.emit_event("permission_revoked", document_id=document_id, user_id=user_id)
        return document

    def check(self, document_id: str, user_id: str, required: LevelLike) -> bool:
        try:
            document = self._require_document(document_id)
        except NotFoundError:
            return False
        return has_level(document, user_id, required)

    def get_document_users(self, document_id: str) -> List[Dict[str, object]]:
        document = self._require_document(document_id)
        users: List[Dict[str, object]] = [
            {"userId": entry.user_id, "level": entry.level, "isOwner": False}
            for entry in document.permissions.access
        ]
        if document.permissions.owner:
            users.append({"userId": document.permissions.owner, "level": PermissionLevel.ADMIN.value, "isOwner": True})
        return users

    def transfer_ownership(self, document_id: str, current_owner: str, new_owner: str) -> Document:
        documents, index = self._locate(document_id)
        document = documents[index]
        if document.permissions.owner != current_owner:
            raise PermissionDeniedError("Only the current owner can transfer ownership", document_id=document_id)
        document.permissions.owner = new_owner
        # the owner never holds an ACL entry
        document.permissions.access = [entry for entry in document.permissions.access if entry.user_id != new_owner]
        self.repository.save_documents(documents)
        self.emit_event("ownership_transferred", document_id=document_id, owner=new_owner)
        return document
