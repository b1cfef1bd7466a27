"""Estimated pagination, page descriptors and per-document viewing sessions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..errors import ValidationFailedError
from ..models import Document, ViewingSession, utc_now
from .base import BaseService

KB = 1024
BYTES_PER_PAGE = {
    "application/pdf": 50 * KB,
    "application/msword": 20 * KB,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": 20 * KB,
    "application/vnd.ms-powerpoint": 100 * KB,
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": 100 * KB,
}
THUMBNAIL_WIDTH = 120
THUMBNAIL_HEIGHT = 160


def estimate_page_count(document: Document) -> int:
    per_page = BYTES_PER_PAGE.get(document.mime_type)
    if not per_page:
        return 1
    return max(1, math.ceil(document.size / per_page))


@dataclass
class NavigationService(BaseService):
    def get_page_count(self, document_id: str) -> int:
        documents, index = self._locate(document_id)
        document = documents[index]
        pages = estimate_page_count(document)
        if document.page_count != pages:
            document.page_count = pages
            self.repository.save_documents(documents)
        return pages

    def get_page_content(self, document_id: str, page_number: int) -> Dict[str, Any]:
        document, total = self._checked_page(document_id, page_number)
        return {
            "documentId": document.id,
            "pageNumber": page_number,
            "totalPages": total,
            "url": document.url,
            "type": document.mime_type,
            "pageParam": f"#page={page_number}" if document.mime_type == "application/pdf" else "",
        }

    def get_page_thumbnail(self, document_id: str, page_number: int) -> Dict[str, Any]:
        document, total = self._checked_page(document_id, page_number)
        thumbnail_url = document.url
        if document.mime_type == "application/pdf":
            thumbnail_url = f"{document.url}#page={page_number}"
        return {
            "documentId": document.id,
            "pageNumber": page_number,
            "totalPages": total,
            "thumbnailUrl": thumbnail_url,
            "width": THUMBNAIL_WIDTH,
            "height": THUMBNAIL_HEIGHT,
        }

    def get_all_page_thumbnails(self, document_id: str) -> List[Dict[str, Any]]:
        total = self.get_page_count(document_id)
        return [self.get_page_thumbnail(document_id, page) for page in range(1, total + 1)]

    def set_current_page(self, document_id: str, page_number: int) -> ViewingSession:
        self._checked_page(document_id, page_number)
        sessions = self.repository.load_viewing_sessions()
        session = ViewingSession(current_page=page_number, last_viewed=utc_now())
        sessions[document_id] = session
        self.repository.save_viewing_sessions(sessions)
        return session

    def get_viewing_session(self, document_id: str) -> Optional[ViewingSession]:
        return self.repository.load_viewing_sessions().get(document_id)

    def _checked_page(self, document_id: str, page_number: int):
        total = self.get_page_count(document_id)
        if page_number < 1 or page_number > total:
            raise ValidationFailedError(f"Invalid page number. Document has {total} pages.", document_id=document_id)
        return self._require_document(document_id), total
