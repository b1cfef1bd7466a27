"""Gateway for presentation-layer clients.

Every public operation returns a ``Result``: domain failures raised by the
services come back as failed results carrying their ``ErrorKind``; anything
else is a programming error and propagates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from ..errors import DocVaultError, Result
from ..models import Annotation, Document, FileUpload, Folder, FolderNode, Version, ViewEvent, ViewingSession
from .access_service import AccessControlService
from .annotation_service import AnnotationService
from .document_service import DocumentService
from .folder_service import FolderService
from .navigation_service import NavigationService
from .search_service import ContentSearchResult, SearchService
from .tagging_service import TaggingService
from .versioning_service import VersioningService
from .viewer_service import ViewDescriptor, ViewerService

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DocumentGateway:
    document_service: DocumentService
    access_service: AccessControlService
    tagging_service: TaggingService
    versioning_service: VersioningService
    folder_service: FolderService
    annotation_service: AnnotationService
    search_service: SearchService
    viewer_service: ViewerService
    navigation_service: NavigationService

    def _call(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
        try:
            return Result.success(operation(*args, **kwargs))
        except DocVaultError as exc:
            logger.info("%s failed (%s): %s", operation.__name__, exc.kind.value, exc.message)
            return Result.failure(exc)

    # Documents --------------------------------------------------------------

    def upload_document(self, file: Optional[FileUpload], **metadata: Any) -> Result[Document]:
        return self._call(self.document_service.upload, file, **metadata)

    def get_documents(self) -> Result[List[Document]]:
        return self._call(self.document_service.list_documents)

    def get_document(self, document_id: str) -> Result[Document]:
        return self._call(self.document_service.get_document, document_id)

    def update_document_metadata(self, document_id: str, update: Any, user_id: Optional[str] = None) -> Result[Document]:
        return self._call(self.document_service.update_metadata, document_id, update, user_id)

    def delete_document(self, document_id: str) -> Result[None]:
        result = self._call(self.document_service.delete_document, document_id)
        if result.ok:
            self.search_service.content_index.drop(document_id)
        return result

    # Access control ---------------------------------------------------------

    def grant_permission(self, document_id: str, user_id: str, level: str) -> Result[Document]:
        return self._call(self.access_service.grant, document_id, user_id, level)

    def revoke_permission(self, document_id: str, user_id: str) -> Result[Document]:
        return self._call(self.access_service.revoke, document_id, user_id)

    def check_permission(self, document_id: str, user_id: str, level: str) -> Result[bool]:
        return self._call(self.access_service.check, document_id, user_id, level)

    def get_document_users(self, document_id: str) -> Result[List[dict]]:
        return self._call(self.access_service.get_document_users, document_id)

    def transfer_ownership(self, document_id: str, current_owner: str, new_owner: str) -> Result[Document]:
        return self._call(self.access_service.transfer_ownership, document_id, current_owner, new_owner)

    # Tagging ----------------------------------------------------------------

    def add_tags(self, document_id: str, tags: Sequence[str]) -> Result[Document]:
        return self._call(self.tagging_service.add_tags, document_id, tags)

    def remove_tags(self, document_id: str, tags: Sequence[str]) -> Result[Document]:
        return self._call(self.tagging_service.remove_tags, document_id, tags)

    def set_tags(self, document_id: str, tags: Sequence[str]) -> Result[Document]:
        return self._call(self.tagging_service.set_tags, document_id, tags)

    def get_all_tags(self) -> Result[List[str]]:
        return self._call(self.tagging_service.get_all_tags)

    def find_documents_by_tag(self, tag: str) -> Result[List[Document]]:
        return self._call(self.tagging_service.find_documents_by_tag, tag)

    # Versioning -------------------------------------------------------------

    def create_version(self, document_id: str, file: Optional[FileUpload], user_id: str, comment: str = "") -> Result[Version]:
        return self._call(self.versioning_service.create_version, document_id, file, user_id, comment)

    def get_versions(self, document_id: str) -> Result[List[Version]]:
        return self._call(self.versioning_service.get_versions, document_id)

    def get_version(self, document_id: str, version_id: str) -> Result[Version]:
        return self._call(self.versioning_service.get_version, document_id, version_id)

    def get_version_by_number(self, document_id: str, number: int) -> Result[Version]:
        return self._call(self.versioning_service.get_version_by_number, document_id, number)

    def set_current_version(self, document_id: str, number: int, user_id: str) -> Result[Document]:
        return self._call(self.versioning_service.set_current_version, document_id, number, user_id)

    def delete_version(self, document_id: str, version_id: str, user_id: str) -> Result[Document]:
        return self._call(self.versioning_service.delete_version, document_id, version_id, user_id)

    # Folders ----------------------------------------------------------------

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> Result[Folder]:
        return self._call(self.folder_service.create, name, parent_id)

    def get_folders(self) -> Result[List[Folder]]:
        return self._call(self.folder_service.list_folders)

    def get_folder(self, folder_id: str) -> Result[Folder]:
        return self._call(self.folder_service.get_folder, folder_id)

    def update_folder(self, folder_id: str, updates: Any) -> Result[Folder]:
        return self._call(self.folder_service.update, folder_id, updates)

    def delete_folder(self, folder_id: str) -> Result[None]:
        return self._call(self.folder_service.delete, folder_id)

    def get_folder_hierarchy(self) -> Result[List[FolderNode]]:
        return self._call(self.folder_service.get_hierarchy)

    def move_documents_to_folder(self, document_ids: Sequence[str], folder_id: Optional[str]) -> Result[bool]:
        return self._call(self.folder_service.move_documents, document_ids, folder_id)

    # Annotations ------------------------------------------------------------

    def add_annotation(self, document_id: str, draft: Any, user_id: str) -> Result[Annotation]:
        return self._call(self.annotation_service.add, document_id, draft, user_id)

    def get_annotations(self, document_id: str) -> Result[List[Annotation]]:
        return self._call(self.annotation_service.get, document_id)

    def get_page_annotations(self, document_id: str, page_number: int) -> Result[List[Annotation]]:
        return self._call(self.annotation_service.get_for_page, document_id, page_number)

    def update_annotation(self, document_id: str, annotation_id: str, updates: Any, user_id: str) -> Result[Annotation]:
        return self._call(self.annotation_service.update, document_id, annotation_id, updates, user_id)

    def delete_annotation(self, document_id: str, annotation_id: str, user_id: str) -> Result[None]:
        return self._call(self.annotation_service.delete, document_id, annotation_id, user_id)

    # Search -----------------------------------------------------------------

    def search_documents(self, keyword: Optional[str]) -> Result[List[Document]]:
        return self._call(self.search_service.search_by_keyword, keyword)

    def advanced_search(self, params: Any) -> Result[List[Document]]:
        return self._call(self.search_service.advanced_search, params)

    def index_document_content(self, document_id: str, text: str) -> Result[int]:
        return self._call(self.search_service.index_content, document_id, text)

    def search_within_document(self, document_id: str, keyword: Optional[str]) -> Result[ContentSearchResult]:
        return self._call(self.search_service.search_within_document, document_id, keyword)

    # Viewing ----------------------------------------------------------------

    def get_view_url(self, document_id: str, user_id: str) -> Result[ViewDescriptor]:
        return self._call(self.viewer_service.get_view_url, document_id, user_id)

    def get_download_url(self, document_id: str, user_id: str) -> Result[ViewDescriptor]:
        return self._call(self.viewer_service.get_download_url, document_id, user_id)

    def get_preview_config(self, document_id: str) -> Result[dict]:
        return self._call(self.viewer_service.get_preview_config, document_id)

    def track_view(self, document_id: str, user_id: str) -> Result[Document]:
        return self._call(self.viewer_service.track_view, document_id, user_id)

    def get_view_history(self, document_id: str) -> Result[List[ViewEvent]]:
        return self._call(self.viewer_service.get_view_history, document_id)

    # Navigation -------------------------------------------------------------

    def get_page_count(self, document_id: str) -> Result[int]:
        return self._call(self.navigation_service.get_page_count, document_id)

    def get_page_content(self, document_id: str, page_number: int) -> Result[dict]:
        return self._call(self.navigation_service.get_page_content, document_id, page_number)

    def get_page_thumbnail(self, document_id: str, page_number: int) -> Result[dict]:
        return self._call(self.navigation_service.get_page_thumbnail, document_id, page_number)

    def get_all_page_thumbnails(self, document_id: str) -> Result[List[dict]]:
        return self._call(self.navigation_service.get_all_page_thumbnails, document_id)

    def set_current_page(self, document_id: str, page_number: int) -> Result[ViewingSession]:
        return self._call(self.navigation_service.set_current_page, document_id, page_number)

    def get_viewing_session(self, document_id: str) -> Result[Optional[ViewingSession]]:
        return self._call(self.navigation_service.get_viewing_session, document_id)
