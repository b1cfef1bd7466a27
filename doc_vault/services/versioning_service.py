"""Immutable version snapshots and the current-version pointer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import ConflictError, NotFoundError, ValidationFailedError
from ..models import Document, FileUpload, PermissionLevel, Version, utc_now
from .access_service import require_level
from .base import BaseService
from .document_service import new_file_ref
from .validation import FileValidator


def _mirror_current(document: Document, version: Version) -> None:
    document.current_version = version.number
    document.url = version.file_ref
    document.size = version.size


@dataclass
class VersioningService(BaseService):
    validator: FileValidator = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.validator is None:
            self.validator = FileValidator(self.config.validation)

    def create_version(
        self,
        document_id: str,
        file: Optional[FileUpload],
        user_id: str,
        comment: str = "",
    ) -> Version:
        documents, index = self._locate(document_id)
        document = documents[index]
        require_level(document, user_id, PermissionLevel.EDIT)
        outcome = self.validator.validate(file)
        if not outcome.valid:
            raise ValidationFailedError(outcome.message)
        if outcome.mime_type != document.mime_type:
            raise ValidationFailedError(
                "New version must be the same file type as the original document",
                expected=document.mime_type,
                received=outcome.mime_type,
            )
        version = Version(
            id=str(uuid.uuid4()),
            number=len(document.versions) + 1,
            file_ref=new_file_ref(),
            name=file.name,
            size=file.size,
            mime_type=outcome.mime_type,
            comment=comment or "",
            created_by=user_id,
            created_at=utc_now(),
        )
        document.versions.append(version)
        _mirror_current(document, version)
        document.metadata.touch()
        self.repository.save_documents(documents)
        self.emit_event("version_created", document_id=document_id, number=str(version.number))
        return version

    def get_versions(self, document_id: str) -> List[Version]:
        return list(self._require_document(document_id).versions)

    def get_version(self, document_id: str, version_id: str) -> Version:
        version = self._require_document(document_id).version_by_id(version_id)
        if version is None:
            raise NotFoundError("Version not found", document_id=document_id, version_id=version_id)
        return version

    def get_version_by_number(self, document_id: str, number: int) -> Version:
        version = self._require_document(document_id).version_by_number(number)
        if version is None:
            raise NotFoundError("Version not found", document_id=document_id, number=number)
        return version

    def set_current_version(self, document_id: str, number: int, user_id: str) -> Document:
        documents, index = self._locate(document_id)
        document = documents[index]
        require_level(document, user_id, PermissionLevel.EDIT)
        version = document.version_by_number(number)
        if version is None:
            raise NotFoundError("Version not found", document_id=document_id, number=number)
        _mirror_current(document, version)
        document.metadata.touch()
        self.repository.save_documents(documents)
        self.emit_event("current_version_set", document_id=document_id, number=str(number))
        return document

    def delete_version(self, document_id: str, version_id: str, user_id: str) -> Document:
        documents, index = self._locate(document_id)
        document = documents[index]
        require_level(document, user_id, PermissionLevel.ADMIN, "Permission denied. Only admins can delete versions.")
        if len(document.versions) <= 1:
            raise ConflictError("Cannot delete the only version of a document", document_id=document_id)
        target = document.version_by_id(version_id)
        if target is None:
            raise NotFoundError("Version not found", document_id=document_id, version_id=version_id)
        current = document.version_by_number(document.current_version)
        remaining = [version for version in document.versions if version.id != version_id]
        for position, version in enumerate(remaining, start=1):
            version.number = position
        document.versions = remaining
        if current is None or current.id == version_id:
            current = remaining[-1]
        _mirror_current(document, current)
        document.metadata.touch()
        self.repository.save_documents(documents)
        self.emit_event("version_deleted", document_id=document_id, version_id=version_id)
        return document
