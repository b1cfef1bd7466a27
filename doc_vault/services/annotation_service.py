"""Page-scoped annotations owned by their authors."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, List, Tuple

from ..errors import NotFoundError, PermissionDeniedError
from ..models import Annotation, Document, PermissionLevel, Position, utc_now
from ..schemas import AnnotationDraft, AnnotationUpdate, parse_input
from .access_service import require_level
from .base import BaseService


def _find(document: Document, annotation_id: str) -> Tuple[int, Annotation]:
    for index, annotation in enumerate(document.annotations):
        if annotation.id == annotation_id:
            return index, annotation
    raise NotFoundError("Annotation not found", document_id=document.id, annotation_id=annotation_id)


@dataclass
class AnnotationService(BaseService):
    def add(self, document_id: str, draft: Any, user_id: str) -> Annotation:
        documents, index = self._locate(document_id)
        document = documents[index]
        require_level(document, user_id, PermissionLevel.EDIT)
        payload = parse_input(AnnotationDraft, draft)
        now = utc_now()
        annotation = Annotation(
            id=str(uuid.uuid4()),
            document_id=document_id,
            page_number=payload.page_number,
            type=payload.type.value,
            position=Position(x=payload.position.x, y=payload.position.y),
            content=payload.content,
            style=dict(payload.style),
            created_by=user_id,
            created_at=now,
            updated_at=now,
        )
        document.annotations.append(annotation)
        self.repository.save_documents(documents)
        self.emit_event("annotation_added", document_id=document_id, annotation_id=annotation.id)
        return annotation

    def get(self, document_id: str) -> List[Annotation]:
        return list(self._require_document(document_id).annotations)

    def get_for_page(self, document_id: str, page_number: int) -> List[Annotation]:
        return [annotation for annotation in self.get(document_id) if annotation.page_number == page_number]

    def update(self, document_id: str, annotation_id: str, updates: Any, user_id: str) -> Annotation:
        documents, index = self._locate(document_id)
        document = documents[index]
        require_level(document, user_id, PermissionLevel.EDIT)
        _, annotation = _find(document, annotation_id)
        if annotation.created_by != user_id:
            raise PermissionDeniedError("You can only edit your own annotations", annotation_id=annotation_id)
        changes = parse_input(AnnotationUpdate, updates)
        provided = changes.model_fields_set
        if "type" in provided and changes.type is not None:
            annotation.type = changes.type.value
        if "page_number" in provided and changes.page_number is not None:
            annotation.page_number = changes.page_number
        if "position" in provided and changes.position is not None:
            annotation.position = Position(x=changes.position.x, y=changes.position.y)
        if "content" in provided and changes.content is not None:
            annotation.content = changes.content
        if "style" in provided and changes.style is not None:
            annotation.style = dict(changes.style)
        annotation.updated_at = utc_now()
        self.repository.save_documents(documents)
        self.emit_event("annotation_updated", document_id=document_id, annotation_id=annotation_id)
        return annotation

    def delete(self, document_id: str, annotation_id: str, user_id: str) -> None:
        documents, index = self._locate(document_id)
        document = documents[index]
        require_level(document, user_id, PermissionLevel.EDIT)
        position, annotation = _find(document, annotation_id)
        if annotation.created_by != user_id and document.permissions.owner != user_id:
            raise PermissionDeniedError("You can only delete your own annotations", annotation_id=annotation_id)
        del document.annotations[position]
        self.repository.save_documents(documents)
        self.emit_event("annotation_deleted", document_id=document_id, annotation_id=annotation_id)
