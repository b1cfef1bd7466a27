"""Runtime wiring for the document vault."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import DocVaultConfig
from .services.access_service import AccessControlService
from .services.annotation_service import AnnotationService
from .services.document_service import DocumentService
from .services.folder_service import FolderService
from .services.gateway import DocumentGateway
from .services.navigation_service import NavigationService
from .services.search_service import SearchService
from .services.tagging_service import TaggingService
from .services.validation import FileValidator
from .services.versioning_service import VersioningService
from .services.viewer_service import ViewerService
from .storage import DocumentRepository, StorageBackend, build_storage
from .telemetry import TelemetryCollector, configure_logging


@dataclass
class DocVaultRuntime:
    config: DocVaultConfig
    telemetry: TelemetryCollector
    repository: DocumentRepository
    gateway: DocumentGateway
    document_service: DocumentService
    access_service: AccessControlService
    tagging_service: TaggingService
    versioning_service: VersioningService
    folder_service: FolderService
    annotation_service: AnnotationService
    search_service: SearchService
    viewer_service: ViewerService
    navigation_service: NavigationService

    @classmethod
    def bootstrap(
        cls,
        config: Optional[DocVaultConfig] = None,
        *,
        storage: Optional[StorageBackend] = None,
        setup_logging: bool = False,
    ) -> "DocVaultRuntime":
        cfg = config or DocVaultConfig.default()
        if setup_logging:
            configure_logging(cfg.observability.log_level)
        telemetry = TelemetryCollector(cfg.observability)
        repository = DocumentRepository(storage or build_storage(cfg.storage), cfg.storage)
        validator = FileValidator(cfg.validation)
        common = dict(config=cfg, telemetry=telemetry, repository=repository)

        document_service = DocumentService(validator=validator, **common)
        access_service = AccessControlService(**common)
        tagging_service = TaggingService(**common)
        versioning_service = VersioningService(validator=validator, **common)
        folder_service = FolderService(**common)
        annotation_service = AnnotationService(**common)
        search_service = SearchService(**common)
        viewer_service = ViewerService(**common)
        navigation_service = NavigationService(**common)

        gateway = DocumentGateway(
            document_service=document_service,
            access_service=access_service,
            tagging_service=tagging_service,
            versioning_service=versioning_service,
            folder_service=folder_service,
            annotation_service=annotation_service,
            search_service=search_service,
            viewer_service=viewer_service,
            navigation_service=navigation_service,
        )
        return cls(
            config=cfg,
            telemetry=telemetry,
            repository=repository,
            gateway=gateway,
            document_service=document_service,
            access_service=access_service,
            tagging_service=tagging_service,
            versioning_service=versioning_service,
            folder_service=folder_service,
            annotation_service=annotation_service,
            search_service=search_service,
            viewer_service=viewer_service,
            navigation_service=navigation_service,
        )
