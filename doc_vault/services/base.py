"""Base class for document vault services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..config import DocVaultConfig
from ..errors import NotFoundError, ValidationFailedError
from ..models import Document
from ..storage import DocumentRepository
from ..telemetry import TelemetryCollector


@dataclass
class BaseService:
    config: DocVaultConfig
    telemetry: TelemetryCollector
    repository: DocumentRepository

    def emit_event(self, message: str, **attrs: str) -> None:
        self.telemetry.emit_event(message, attrs)

    def _locate(self, document_id: str) -> Tuple[List[Document], int]:
        """Load the full collection and the index of ``document_id`` within it."""
        documents = self.repository.load_documents()
        for index, document in enumerate(documents):
            if document.id == document_id:
                return documents, index
        raise NotFoundError("Document not found", document_id=document_id)

    def _require_document(self, document_id: str) -> Document:
        documents, index = self._locate(document_id)
        return documents[index]


def normalize_tags(tags) -> List[str]:
    """Trim and lower-case every tag, dropping blanks and duplicates while keeping order."""
    cleaned: List[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationFailedError("Tags must be strings")
        value = tag.strip().lower()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned
