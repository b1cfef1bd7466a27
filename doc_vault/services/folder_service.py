"""Folder tree management and moving documents between folders."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..errors import ConflictError, NotFoundError, ValidationFailedError
from ..models import Folder, FolderNode, utc_now
from ..schemas import FolderUpdate, parse_input
from .base import BaseService


def _clean_name(name: Optional[str], message: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationFailedError(message)
    return cleaned


@dataclass
class FolderService(BaseService):
    def create(self, name: str, parent_id: Optional[str] = None) -> Folder:
        cleaned = _clean_name(name, "Folder name is required")
        folders = self.repository.load_folders()
        if parent_id is not None and not any(folder.id == parent_id for folder in folders):
            raise ValidationFailedError("Parent folder does not exist", parent_id=parent_id)
        now = utc_now()
        folder = Folder(id=str(uuid.uuid4()), name=cleaned, parent_id=parent_id, created_at=now, updated_at=now)
        folders.append(folder)
        self.repository.save_folders(folders)
        self.emit_event("folder_created", folder_id=folder.id)
        return folder

    def list_folders(self) -> List[Folder]:
        return self.repository.load_folders()

    def get_folder(self, folder_id: str) -> Folder:
        for folder in self.repository.load_folders():
            if folder.id == folder_id:
                return folder
        raise NotFoundError("Folder not found", folder_id=folder_id)

    def update(self, folder_id: str, updates: Any) -> Folder:
        changes = parse_input(FolderUpdate, updates)
        provided = changes.model_fields_set
        folders = self.repository.load_folders()
        by_id: Dict[str, Folder] = {folder.id: folder for folder in folders}
        folder = by_id.get(folder_id)
        if folder is None:
            raise NotFoundError("Folder not found", folder_id=folder_id)
        name = folder.name
        if "name" in provided:
            name = _clean_name(changes.name, "Folder name cannot be empty")
        parent_id = folder.parent_id
        if "parent_id" in provided:
            parent_id = changes.parent_id
            if parent_id is not None:
                if parent_id == folder_id:
                    raise ValidationFailedError("Folder cannot be its own parent", folder_id=folder_id)
                if parent_id not in by_id:
                    raise ValidationFailedError("Parent folder does not exist", parent_id=parent_id)
                if self._is_ancestor(folder_id, parent_id, by_id):
                    raise ValidationFailedError("Folder cannot be moved beneath its own descendant", folder_id=folder_id)
        folder.name = name
        folder.parent_id = parent_id
        folder.updated_at = utc_now()
        self.repository.save_folders(folders)
        self.emit_event("folder_updated", folder_id=folder_id)
        return folder

    def delete(self, folder_id: str) -> None:
        folders = self.repository.load_folders()
        if not any(folder.id == folder_id for folder in folders):
            raise NotFoundError("Folder not found", folder_id=folder_id)
        if any(folder.parent_id == folder_id for folder in folders):
            raise ConflictError("Cannot delete folder with subfolders", folder_id=folder_id)
        if any(document.folder_id == folder_id for document in self.repository.load_documents()):
            raise ConflictError("Cannot delete folder containing documents", folder_id=folder_id)
        self.repository.save_folders([folder for folder in folders if folder.id != folder_id])
        self.emit_event("folder_deleted", folder_id=folder_id)

    def get_hierarchy(self) -> List[FolderNode]:
        folders = self.repository.load_folders()
        nodes = {folder.id: FolderNode(folder=folder) for folder in folders}
        roots: List[FolderNode] = []
        for folder in folders:
            parent = nodes.get(folder.parent_id) if folder.parent_id else None
            if parent is not None:
                parent.children.append(nodes[folder.id])
            else:
                roots.append(nodes[folder.id])
        return roots

    def move_documents(self, document_ids: Sequence[str], folder_id: Optional[str]) -> bool:
        if folder_id is not None and not any(folder.id == folder_id for folder in self.repository.load_folders()):
            raise NotFoundError("Destination folder does not exist", folder_id=folder_id)
        wanted = set(document_ids)
        documents = self.repository.load_documents()
        moved = 0
        for document in documents:
            if document.id in wanted:
                document.folder_id = folder_id
                document.metadata.touch()
                moved += 1
        if moved:
            self.repository.save_documents(documents)
            self.emit_event("documents_moved", folder_id=folder_id or "", count=str(moved))
        return moved > 0

    @staticmethod
    def _is_ancestor(folder_id: str, candidate_parent: str, by_id: Dict[str, Folder]) -> bool:
        """True when ``folder_id`` already sits on the ancestor chain of ``candidate_parent``."""
        seen = set()
        cursor: Optional[str] = candidate_parent
        while cursor is not None and cursor not in seen:
            if cursor == folder_id:
                return True
            seen.add(cursor)
            parent = by_id.get(cursor)
            cursor = parent.parent_id if parent else None
        return False
