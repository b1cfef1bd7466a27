"""Document upload and metadata management."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..errors import ValidationFailedError
from ..models import Document, DocumentMetadata, FileUpload, Permissions, PermissionLevel, Version, utc_now
from ..schemas import MetadataUpdate, parse_input
from .access_service import require_level
from .base import BaseService, normalize_tags
from .validation import FileValidator


def new_file_ref() -> str:
    """Transient reference standing in for an object URL; valid for the process lifetime only."""
    return f"blob:doc-vault/{uuid.uuid4()}"


@dataclass
class DocumentService(BaseService):
    validator: FileValidator = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.validator is None:
            self.validator = FileValidator(self.config.validation)

    def upload(
        self,
        file: Optional[FileUpload],
        *,
        title: Optional[str] = None,
        description: str = "",
        tags: Optional[Sequence[str]] = None,
        owner: Optional[str] = None,
    ) -> Document:
        outcome = self.validator.validate(file)
        if not outcome.valid:
            raise ValidationFailedError(outcome.message)
        owner_id = owner or self.config.auth.default_user
        now = utc_now()
        file_ref = new_file_ref()
        initial = Version(
            id=str(uuid.uuid4()),
            number=1,
            file_ref=file_ref,
            name=file.name,
            size=file.size,
            mime_type=outcome.mime_type,
            comment="Initial version",
            created_by=owner_id,
            created_at=now,
        )
        document = Document(
            id=str(uuid.uuid4()),
            name=file.name,
            size=file.size,
            mime_type=outcome.mime_type,
            last_modified=file.last_modified,
            url=file_ref,
            metadata=DocumentMetadata(
                title=title or file.name,
                description=description or "",
                tags=normalize_tags(tags or []),
                created_at=now,
                updated_at=now,
            ),
            permissions=Permissions(owner=owner_id),
            versions=[initial],
            current_version=1,
        )
        documents = self.repository.load_documents()
        documents.append(document)
        self.repository.save_documents(documents)
        self.emit_event("document_uploaded", document_id=document.id, mime_type=document.mime_type)
        return document

    def list_documents(self) -> List[Document]:
        return self.repository.load_documents()

    def get_document(self, document_id: str) -> Document:
        return self._require_document(document_id)

    def update_metadata(self, document_id: str, update: Any, user_id: Optional[str] = None) -> Document:
        changes = parse_input(MetadataUpdate, update)
        actor = user_id or self.config.auth.default_user
        documents, index = self._locate(document_id)
        document = documents[index]
        require_level(
            document,
            actor,
            PermissionLevel.EDIT,
            "Permission denied. You do not have edit access to this document.",
        )
        if changes.title is not None:
            document.metadata.title = changes.title
        if changes.description is not None:
            document.metadata.description = changes.description
        if changes.tags is not None:
            document.metadata.tags = normalize_tags(changes.tags)
        document.metadata.touch()
        self.repository.save_documents(documents)
        self.emit_event("document_metadata_updated", document_id=document_id, user_id=actor)
        return document

    def delete_document(self, document_id: str) -> None:
        documents, index = self._locate(document_id)
        del documents[index]
        self.repository.save_documents(documents)
        sessions = self.repository.load_viewing_sessions()
        if sessions.pop(document_id, None) is not None:
            self.repository.save_viewing_sessions(sessions)
        self.emit_event("document_deleted", document_id=document_id)
