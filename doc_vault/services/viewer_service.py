"""View/download descriptors, preview configuration and view tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from ..models import Document, PermissionLevel, ViewEvent, utc_now
from .access_service import require_level
from .base import BaseService

VIEWER_TYPES = {
    "application/pdf": "pdf",
    "application/msword": "docx",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-excel": "xlsx",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "image/jpeg": "image",
    "image/png": "image",
    "image/gif": "image",
    "image/svg+xml": "image",
    "text/plain": "text",
    "text/csv": "text",
}


@dataclass
class ViewDescriptor:
    url: str
    mime_type: str
    name: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "type": self.mime_type, "name": self.name, "size": self.size}


def _describe(document: Document) -> ViewDescriptor:
    return ViewDescriptor(url=document.url, mime_type=document.mime_type, name=document.name, size=document.size)


@dataclass
class ViewerService(BaseService):
    def get_view_url(self, document_id: str, user_id: str) -> ViewDescriptor:
        document = self._require_document(document_id)
        require_level(document, user_id, PermissionLevel.VIEW)
        return _describe(document)

    def get_download_url(self, document_id: str, user_id: str) -> ViewDescriptor:
        document = self._require_document(document_id)
        require_level(document, user_id, PermissionLevel.DOWNLOAD)
        return _describe(document)

    def get_preview_config(self, document_id: str) -> Dict[str, Any]:
        document = self._require_document(document_id)
        return {
            "documentId": document.id,
            "url": document.url,
            "type": document.mime_type,
            "viewerType": VIEWER_TYPES.get(document.mime_type, "unknown"),
            "name": document.name,
            "size": document.size,
            "metadata": document.metadata.to_dict(),
        }

    def track_view(self, document_id: str, user_id: str) -> Document:
        documents, index = self._locate(document_id)
        document = documents[index]
        event = ViewEvent(user_id=user_id, timestamp=utc_now())
        document.view_count += 1
        document.view_history.append(event)
        document.last_viewed = event.timestamp
        self.repository.save_documents(documents)
        self.emit_event("document_viewed", document_id=document_id, user_id=user_id)
        return document

    def get_view_history(self, document_id: str) -> List[ViewEvent]:
        return list(self._require_document(document_id).view_history)
