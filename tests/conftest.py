from __future__ import annotations

import pytest

from doc_vault.models import FileUpload
from doc_vault.runtime import DocVaultRuntime
from doc_vault.storage import InMemoryStorage

OWNER = "current-user"
MB = 1024 * 1024


def pdf(name: str = "report.pdf", size: int = 2 * MB) -> FileUpload:
    return FileUpload(name=name, size=size, mime_type="application/pdf", last_modified=1700000000000)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def runtime(storage: InMemoryStorage) -> DocVaultRuntime:
    # Fresh runtime per test so collections never leak between cases.
    return DocVaultRuntime.bootstrap(storage=storage)


@pytest.fixture
def document(runtime: DocVaultRuntime):
    return runtime.document_service.upload(pdf(), title="Report")


STALE = "2000-01-01T00:00:00.000Z"


def make_stale(runtime: DocVaultRuntime, document_id: str) -> None:
    documents = runtime.repository.load_documents()
    for item in documents:
        if item.id == document_id:
            item.metadata.updated_at = STALE
    runtime.repository.save_documents(documents)
