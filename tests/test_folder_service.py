from __future__ import annotations

import pytest

from doc_vault.errors import ConflictError, NotFoundError, ValidationFailedError

from conftest import STALE, make_stale, pdf


def test_create_trims_and_rejects_blank_names(runtime):
    folders = runtime.folder_service
    folder = folders.create("  Invoices  ")
    assert folder.name == "Invoices"
    assert folder.parent_id is None
    with pytest.raises(ValidationFailedError):
        folders.create("   ")
    with pytest.raises(ValidationFailedError):
        folders.create("Child", parent_id="missing")


def test_self_parenting_is_rejected_and_folder_unchanged(runtime):
    folders = runtime.folder_service
    invoices = folders.create("Invoices")

    with pytest.raises(ValidationFailedError):
        folders.update(invoices.id, {"parentId": invoices.id})

    stored = folders.get_folder(invoices.id)
    assert stored.parent_id is None
    assert stored.updated_at == invoices.updated_at


def test_deep_cycles_are_rejected(runtime):
    folders = runtime.folder_service
    a = folders.create("A")
    b = folders.create("B", a.id)
    c = folders.create("C", b.id)

    with pytest.raises(ValidationFailedError):
        folders.update(a.id, {"parentId": c.id})
    assert folders.get_folder(a.id).parent_id is None


def test_update_renames_and_reparents(runtime):
    folders = runtime.folder_service
    a = folders.create("A")
    b = folders.create("B")

    updated = folders.update(b.id, {"name": " Bee ", "parentId": a.id})
    assert updated.name == "Bee"
    assert updated.parent_id == a.id

    moved_back = folders.update(b.id, {"parentId": None})
    assert moved_back.parent_id is None
    assert moved_back.name == "Bee"

    with pytest.raises(ValidationFailedError):
        folders.update(b.id, {"name": "  "})
    with pytest.raises(ValidationFailedError):
        folders.update(b.id, {"parentId": "ghost"})
    with pytest.raises(NotFoundError):
        folders.update("ghost", {"name": "x"})


def test_delete_with_child_folder_conflicts_and_leaves_storage_unchanged(runtime, storage):
    folders = runtime.folder_service
    parent = folders.create("Parent")
    folders.create("Child", parent.id)
    before = storage.get_item("folders")

    with pytest.raises(ConflictError):
        folders.delete(parent.id)
    assert storage.get_item("folders") == before


def test_delete_with_documents_conflicts(runtime, document):
    folders = runtime.folder_service
    folder = folders.create("Reports")
    folders.move_documents([document.id], folder.id)

    with pytest.raises(ConflictError):
        folders.delete(folder.id)


def test_delete_empty_folder_removes_it_everywhere(runtime):
    folders = runtime.folder_service
    keep = folders.create("Keep")
    doomed = folders.create("Doomed")

    folders.delete(doomed.id)

    assert [folder.id for folder in folders.list_folders()] == [keep.id]
    assert [node.folder.id for node in folders.get_hierarchy()] == [keep.id]
    with pytest.raises(NotFoundError):
        folders.delete(doomed.id)


def test_hierarchy_builds_forest(runtime):
    folders = runtime.folder_service
    root = folders.create("Root")
    child = folders.create("Child", root.id)
    folders.create("Grandchild", child.id)
    other = folders.create("Other")

    forest = folders.get_hierarchy()
    assert [node.folder.name for node in forest] == ["Root", "Other"]
    assert forest[0].children[0].folder.name == "Child"
    assert forest[0].children[0].children[0].folder.name == "Grandchild"
    assert forest[1].children == []
    assert forest[0].to_dict()["children"][0]["name"] == "Child"
    assert other.id == forest[1].folder.id


def test_move_documents(runtime, document):
    folders = runtime.folder_service
    target = folders.create("Target")
    untouched = runtime.document_service.upload(pdf("b.pdf"))

    assert folders.move_documents([document.id], target.id) is True
    assert runtime.document_service.get_document(document.id).folder_id == target.id
    assert runtime.document_service.get_document(untouched.id).folder_id is None

    assert folders.move_documents([document.id], None) is True
    assert runtime.document_service.get_document(document.id).folder_id is None

    assert folders.move_documents(["unknown"], target.id) is False
    with pytest.raises(NotFoundError):
        folders.move_documents([document.id], "ghost")


def test_move_documents_bumps_updated_at(runtime, document):
    target = runtime.folder_service.create("Target")
    bystander = runtime.document_service.upload(pdf("b.pdf"))
    make_stale(runtime, document.id)
    make_stale(runtime, bystander.id)

    runtime.folder_service.move_documents([document.id], target.id)

    assert runtime.document_service.get_document(document.id).metadata.updated_at != STALE
    assert runtime.document_service.get_document(bystander.id).metadata.updated_at == STALE
