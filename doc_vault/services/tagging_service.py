"""Tag normalisation and set operations on document metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..errors import ValidationFailedError
from ..models import Document
from .base import BaseService, normalize_tags


def _require_list(tags, *, allow_empty: bool) -> None:
    if isinstance(tags, (str, bytes)) or not isinstance(tags, (list, tuple, set, frozenset)):
        raise ValidationFailedError("Tags must be an array")
    if not allow_empty and not tags:
        raise ValidationFailedError("Tags must be a non-empty array")


@dataclass
class TaggingService(BaseService):
    def add_tags(self, document_id: str, tags: Sequence[str]) -> Document:
        _require_list(tags, allow_empty=False)
        cleaned = normalize_tags(tags)
        if not cleaned:
            raise ValidationFailedError("No valid tags provided")
        documents, index = self._locate(document_id)
        document = documents[index]
        document.metadata.tags = normalize_tags(list(document.metadata.tags) + cleaned)
        document.metadata.touch()
        self.repository.save_documents(documents)
        self.emit_event("tags_added", document_id=document_id, tags=",".join(cleaned))
        return document

    def remove_tags(self, document_id: str, tags: Sequence[str]) -> Document:
        _require_list(tags, allow_empty=False)
        doomed = set(normalize_tags(tags))
        documents, index = self._locate(document_id)
        document = documents[index]
        document.metadata.tags = [tag for tag in document.metadata.tags if tag not in doomed]
        document.metadata.touch()
        self.repository.save_documents(documents)
        self.emit_event("tags_removed", document_id=document_id, tags=",".join(sorted(doomed)))
        return document

    def set_tags(self, document_id: str, tags: Sequence[str]) -> Document:
        _require_list(tags, allow_empty=True)
        documents, index = self._locate(document_id)
        document = documents[index]
        document.metadata.tags = normalize_tags(tags)
        document.metadata.touch()
        self.repository.save_documents(documents)
        self.emit_event("tags_set", document_id=document_id)
        return document

    def get_all_tags(self) -> List[str]:
        tags = set()
        for document in self.repository.load_documents():
            tags.update(document.metadata.tags)
        return sorted(tags)

    def find_documents_by_tag(self, tag: str) -> List[Document]:
        needle = str(tag).strip().lower()
        if not needle:
            return []
        return [document for document in self.repository.load_documents() if needle in document.metadata.tags]
