from __future__ import annotations

import json

import pytest

from doc_vault.config import DocVaultConfig, StorageConfig
from doc_vault.errors import ConflictError, ErrorKind
from doc_vault.runtime import DocVaultRuntime
from doc_vault.storage import DocumentRepository, InMemoryStorage, JsonFileStorage, build_storage

from conftest import pdf


def test_collections_are_camel_case_json_blobs(runtime, storage, document):
    runtime.folder_service.create("Invoices")
    payload = json.loads(storage.get_item("documents"))

    assert payload[0]["id"] == document.id
    assert payload[0]["currentVersion"] == 1
    assert payload[0]["type"] == "application/pdf"
    assert payload[0]["metadata"]["title"] == "Report"
    assert payload[0]["permissions"] == {"owner": "current-user", "access": []}
    assert json.loads(storage.get_item("folders"))[0]["parentId"] is None
    assert sorted(storage.keys()) == ["documents", "folders"]


def test_repository_round_trip_preserves_records(runtime, document):
    runtime.annotation_service.add(document.id, {"type": "comment", "content": "hi"}, "current-user")
    runtime.viewer_service.track_view(document.id, "alice")
    reloaded = runtime.repository.load_documents()[0]

    assert reloaded.to_dict() == runtime.document_service.get_document(document.id).to_dict()
    assert reloaded.annotations[0].content == "hi"
    assert reloaded.view_history[0].user_id == "alice"


def test_empty_storage_yields_empty_collections():
    repository = DocumentRepository(InMemoryStorage())
    assert repository.load_documents() == []
    assert repository.load_folders() == []
    assert repository.load_viewing_sessions() == {}


@pytest.mark.parametrize("key", [None, "correct horse battery staple"])
def test_json_file_storage_survives_restart(tmp_path, key):
    path = tmp_path / "state" / "vault.json"
    config = DocVaultConfig.default()
    config.storage = StorageConfig(backend="json", state_path=str(path), state_encryption_key=key)

    first = DocVaultRuntime.bootstrap(config)
    uploaded = first.document_service.upload(pdf(), title="Persisted")

    second = DocVaultRuntime.bootstrap(config)
    assert second.document_service.get_document(uploaded.id).metadata.title == "Persisted"

    raw = path.read_bytes()
    if key:
        assert b"Persisted" not in raw
    else:
        assert b"Persisted" in raw


def test_json_file_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "vault.json"
    path.write_text("{not json", encoding="utf-8")
    backend = JsonFileStorage(str(path))
    assert backend.get_item("documents") is None


def test_build_storage_selects_backend(tmp_path):
    assert isinstance(build_storage(StorageConfig()), InMemoryStorage)
    assert isinstance(build_storage(StorageConfig(backend="json", state_path=str(tmp_path / "s.json"))), JsonFileStorage)
    with pytest.raises(ValueError):
        build_storage(StorageConfig(backend="json"))
    with pytest.raises(NotImplementedError):
        build_storage(StorageConfig(backend="redis"))


def test_corrupt_collection_blob_is_a_conflict(runtime, storage):
    storage.set_item("documents", "{not json")

    with pytest.raises(ConflictError):
        runtime.repository.load_documents()
    result = runtime.gateway.get_documents()
    assert result.kind is ErrorKind.CONFLICT
