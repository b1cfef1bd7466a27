"""Metadata search plus keyword search over externally extracted document text."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import ValidationFailedError
from ..models import Document
from ..schemas import SearchParams, parse_input
from .base import BaseService, normalize_tags

SEARCHABLE_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "text/csv",
}
PAGE_BREAK = "\f"
SNIPPET_RADIUS = 30


@dataclass
class ContentMatch:
    page: int
    offset: int
    snippet: str
    highlight_start: int
    highlight_end: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "offset": self.offset,
            "snippet": self.snippet,
            "highlightRange": {"start": self.highlight_start, "end": self.highlight_end},
        }


@dataclass
class ContentSearchResult:
    document_id: str
    keyword: str
    matches: List[ContentMatch] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documentId": self.document_id,
            "keyword": self.keyword,
            "matches": [match.to_dict() for match in self.matches],
            "count": self.count,
        }


class ContentIndex:
    """Holds text produced by an external extractor, one entry per page."""

    def __init__(self) -> None:
        self._pages: Dict[str, List[str]] = {}

    def index_text(self, document_id: str, text: str) -> int:
        pages = text.split(PAGE_BREAK) if text else []
        self._pages[document_id] = pages
        return len(pages)

    def pages(self, document_id: str) -> List[str]:
        return list(self._pages.get(document_id, []))

    def drop(self, document_id: str) -> None:
        self._pages.pop(document_id, None)


def _matches_keyword(document: Document, needle: str) -> bool:
    metadata = document.metadata
    if needle in (metadata.title or "").lower():
        return True
    if needle in (metadata.description or "").lower():
        return True
    if any(needle in tag.lower() for tag in metadata.tags):
        return True
    return needle in (document.name or "").lower()


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _created_at(document: Document) -> Optional[datetime]:
    try:
        return _as_utc(datetime.fromisoformat(document.metadata.created_at))
    except (TypeError, ValueError):
        return None


@dataclass
class SearchService(BaseService):
    content_index: ContentIndex = field(default_factory=ContentIndex)

    def search_by_keyword(self, keyword: Optional[str]) -> List[Document]:
        needle = (keyword or "").strip().lower()
        if not needle:
            return []
        return [document for document in self.repository.load_documents() if _matches_keyword(document, needle)]

    def advanced_search(self, params: Any) -> List[Document]:
        query = parse_input(SearchParams, params)
        needle = query.keyword.lower() if query.keyword else None
        date_from = _as_utc(query.date_from) if query.date_from else None
        date_to = _as_utc(query.date_to) if query.date_to else None
        wanted_tags = normalize_tags(query.tags)
        results = []
        for document in self.repository.load_documents():
            if needle and not _matches_keyword(document, needle):
                continue
            if query.file_types and document.mime_type not in query.file_types:
                continue
            if wanted_tags and not any(tag in document.metadata.tags for tag in wanted_tags):
                continue
            if date_from or date_to:
                created = _created_at(document)
                if created is None:
                    continue
                if date_from and created < date_from:
                    continue
                if date_to and created > date_to:
                    continue
            results.append(document)
        return results

    def index_content(self, document_id: str, text: str) -> int:
        self._require_document(document_id)
        pages = self.content_index.index_text(document_id, text)
        self.emit_event("content_indexed", document_id=document_id, pages=str(pages))
        return pages

    def search_within_document(self, document_id: str, keyword: Optional[str]) -> ContentSearchResult:
        needle = (keyword or "").strip().lower()
        if not needle:
            return ContentSearchResult(document_id=document_id, keyword="")
        document = self._require_document(document_id)
        if document.mime_type not in SEARCHABLE_TYPES:
            raise ValidationFailedError("Document type not searchable", document_id=document_id)
        result = ContentSearchResult(document_id=document_id, keyword=needle)
        for page_number, text in enumerate(self.content_index.pages(document_id), start=1):
            lowered = text.lower()
            start = lowered.find(needle)
            while start != -1:
                snippet_start = max(0, start - SNIPPET_RADIUS)
                snippet_end = min(len(text), start + len(needle) + SNIPPET_RADIUS)
                result.matches.append(
                    ContentMatch(
                        page=page_number,
                        offset=start,
                        snippet=text[snippet_start:snippet_end],
                        highlight_start=start - snippet_start,
                        highlight_end=start - snippet_start + len(needle),
                    )
                )
                start = lowered.find(needle, start + len(needle))
        return result
