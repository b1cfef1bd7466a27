"""Data models shared across document vault services.

Records serialise to the camelCase layout kept in storage (``mimeType``,
``currentVersion``, ``folderId`` ...) so a persisted collection stays readable
by any other client of the same blobs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PermissionLevel(str, Enum):
    VIEW = "view"
    DOWNLOAD = "download"
    EDIT = "edit"
    ADMIN = "admin"

    @classmethod
    def rank(cls, level: Any) -> int:
        """Position in the view < download < edit < admin order; unknown levels rank 0."""
        value = level.value if isinstance(level, PermissionLevel) else level
        return _PERMISSION_RANKS.get(value, 0)

    @classmethod
    def parse(cls, level: Any) -> Optional["PermissionLevel"]:
        if isinstance(level, PermissionLevel):
            return level
        try:
            return cls(level)
        except ValueError:
            return None


_PERMISSION_RANKS = {
    PermissionLevel.VIEW.value: 1,
    PermissionLevel.DOWNLOAD.value: 2,
    PermissionLevel.EDIT.value: 3,
    PermissionLevel.ADMIN.value: 4,
}


class AnnotationType(str, Enum):
    HIGHLIGHT = "highlight"
    COMMENT = "comment"
    DRAWING = "drawing"
    STICKY_NOTE = "sticky_note"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"


@dataclass
class FileUpload:
    """Describes a file handed in by the caller; bytes are never persisted."""

    name: str
    size: int
    mime_type: str = ""
    last_modified: Optional[int] = None
    content: Optional[bytes] = None


@dataclass
class PermissionEntry:
    user_id: str
    level: str

    def to_dict(self) -> Dict[str, Any]:
        return {"userId": self.user_id, "level": self.level}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PermissionEntry":
        return cls(user_id=data["userId"], level=data["level"])


@dataclass
class Permissions:
    owner: str
    access: List[PermissionEntry] = field(default_factory=list)

    def entry_for(self, user_id: str) -> Optional[PermissionEntry]:
        for entry in self.access:
            if entry.user_id == user_id:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"owner": self.owner, "access": [entry.to_dict() for entry in self.access]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Permissions":
        return cls(
            owner=data.get("owner", ""),
            access=[PermissionEntry.from_dict(item) for item in data.get("access") or []],
        )


@dataclass
class DocumentMetadata:
    title: str
    description: str = ""
    tags: List[str] = field(default_factory=list)
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    def touch(self) -> None:
        self.updated_at = utc_now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentMetadata":
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            tags=list(data.get("tags") or []),
            created_at=data.get("createdAt") or utc_now(),
            updated_at=data.get("updatedAt") or utc_now(),
        )


@dataclass
class Version:
    id: str
    number: int
    file_ref: str
    name: str
    size: int
    mime_type: str
    comment: str
    created_by: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "url": self.file_ref,
            "name": self.name,
            "size": self.size,
            "type": self.mime_type,
            "comment": self.comment,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Version":
        return cls(
            id=data["id"],
            number=int(data["number"]),
            file_ref=data.get("url", ""),
            name=data.get("name", ""),
            size=int(data.get("size", 0)),
            mime_type=data.get("type", ""),
            comment=data.get("comment", ""),
            created_by=data.get("createdBy", ""),
            created_at=data.get("createdAt") or utc_now(),
        )


@dataclass
class Position:
    x: float = 0
    y: float = 0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class Annotation:
    id: str
    document_id: str
    page_number: int
    type: str
    position: Position
    content: str
    style: Dict[str, Any]
    created_by: str
    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "documentId": self.document_id,
            "pageNumber": self.page_number,
            "type": self.type,
            "position": self.position.to_dict(),
            "content": self.content,
            "style": dict(self.style),
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Annotation":
        position = data.get("position") or {}
        return cls(
            id=data["id"],
            document_id=data["documentId"],
            page_number=int(data.get("pageNumber", 1)),
            type=data["type"],
            position=Position(x=position.get("x", 0), y=position.get("y", 0)),
            content=data.get("content", ""),
            style=dict(data.get("style") or {}),
            created_by=data.get("createdBy", ""),
            created_at=data.get("createdAt") or utc_now(),
            updated_at=data.get("updatedAt") or utc_now(),
        )


@dataclass
class ViewEvent:
    user_id: str
    timestamp: str = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, str]:
        return {"userId": self.user_id, "timestamp": self.timestamp}


@dataclass
class Document:
    id: str
    name: str
    size: int
    mime_type: str
    last_modified: Optional[int]
    url: str
    metadata: DocumentMetadata
    permissions: Permissions
    versions: List[Version] = field(default_factory=list)
    current_version: int = 1
    folder_id: Optional[str] = None
    annotations: List[Annotation] = field(default_factory=list)
    view_count: int = 0
    view_history: List[ViewEvent] = field(default_factory=list)
    last_viewed: Optional[str] = None
    page_count: Optional[int] = None

    def version_by_number(self, number: int) -> Optional[Version]:
        for version in self.versions:
            if version.number == number:
                return version
        return None

    def version_by_id(self, version_id: str) -> Optional[Version]:
        for version in self.versions:
            if version.id == version_id:
                return version
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "type": self.mime_type,
            "lastModified": self.last_modified,
            "url": self.url,
            "metadata": self.metadata.to_dict(),
            "versions": [version.to_dict() for version in self.versions],
            "currentVersion": self.current_version,
            "folderId": self.folder_id,
            "permissions": self.permissions.to_dict(),
            "annotations": [annotation.to_dict() for annotation in self.annotations],
            "viewCount": self.view_count,
            "viewHistory": [event.to_dict() for event in self.view_history],
            "lastViewed": self.last_viewed,
            "pageCount": self.page_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            size=int(data.get("size", 0)),
            mime_type=data.get("type", ""),
            last_modified=data.get("lastModified"),
            url=data.get("url", ""),
            metadata=DocumentMetadata.from_dict(data.get("metadata") or {}),
            permissions=Permissions.from_dict(data.get("permissions") or {}),
            versions=[Version.from_dict(item) for item in data.get("versions") or []],
            current_version=int(data.get("currentVersion", 1)),
            folder_id=data.get("folderId"),
            annotations=[Annotation.from_dict(item) for item in data.get("annotations") or []],
            view_count=int(data.get("viewCount", 0)),
            view_history=[
                ViewEvent(user_id=item["userId"], timestamp=item["timestamp"])
                for item in data.get("viewHistory") or []
            ],
            last_viewed=data.get("lastViewed"),
            page_count=data.get("pageCount"),
        )


@dataclass
class Folder:
    id: str
    name: str
    parent_id: Optional[str]
    created_at: str = field(default_factory=utc_now)
    updated_at: str = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "parentId": self.parent_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Folder":
        return cls(
            id=data["id"],
            name=data["name"],
            parent_id=data.get("parentId"),
            created_at=data.get("createdAt") or utc_now(),
            updated_at=data.get("updatedAt") or utc_now(),
        )


@dataclass
class FolderNode:
    folder: Folder
    children: List["FolderNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload = self.folder.to_dict()
        payload["children"] = [child.to_dict() for child in self.children]
        return payload


@dataclass
class ViewingSession:
    current_page: int
    last_viewed: str = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {"currentPage": self.current_page, "lastViewed": self.last_viewed}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ViewingSession":
        return cls(current_page=int(data.get("currentPage", 1)), last_viewed=data.get("lastViewed") or utc_now())


@dataclass
class ObservabilityEvent:
    event_type: str
    message: str
    attributes: Optional[dict] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
