from __future__ import annotations

import pytest

from doc_vault.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from doc_vault.models import PermissionLevel

from conftest import OWNER


def test_owner_passes_every_level_regardless_of_acl(runtime, document):
    access = runtime.access_service
    access.grant(document.id, OWNER, "view")
    for level in PermissionLevel:
        assert access.check(document.id, OWNER, level)


def test_stranger_without_entry_is_denied_view(runtime, document):
    assert not runtime.access_service.check(document.id, "stranger", PermissionLevel.VIEW)


def test_edit_grant_implies_view_and_download_but_not_admin(runtime, document):
    access = runtime.access_service
    access.grant(document.id, "alice", PermissionLevel.EDIT)

    assert access.check(document.id, "alice", "view")
    assert access.check(document.id, "alice", "download")
    assert access.check(document.id, "alice", "edit")
    assert not access.check(document.id, "alice", "admin")


def test_grant_upserts_a_single_entry_per_user(runtime, document):
    access = runtime.access_service
    access.grant(document.id, "alice", "view")
    updated = access.grant(document.id, "alice", "admin")

    entries = [entry for entry in updated.permissions.access if entry.user_id == "alice"]
    assert len(entries) == 1
    assert entries[0].level == "admin"
    stored = runtime.document_service.get_document(document.id)
    assert [entry.to_dict() for entry in stored.permissions.access] == [{"userId": "alice", "level": "admin"}]


def test_grant_rejects_unknown_level(runtime, document):
    with pytest.raises(ValidationFailedError):
        runtime.access_service.grant(document.id, "alice", "superuser")


def test_grant_on_missing_document_is_not_found(runtime):
    with pytest.raises(NotFoundError):
        runtime.access_service.grant("missing", "alice", "view")


def test_unknown_required_level_is_denied_for_entry_holders(runtime, document):
    runtime.access_service.grant(document.id, "alice", "admin")
    assert not runtime.access_service.check(document.id, "alice", "superuser")
    assert runtime.access_service.check(document.id, OWNER, "superuser")


def test_revoke_removes_entry_and_is_noop_when_absent(runtime, document):
    access = runtime.access_service
    access.grant(document.id, "alice", "edit")
    revoked = access.revoke(document.id, "alice")
    assert revoked.permissions.access == []
    assert not access.check(document.id, "alice", "view")

    unchanged = access.revoke(document.id, "nobody")
    assert unchanged.permissions.access == []


def test_check_on_missing_document_is_false(runtime):
    assert runtime.access_service.check("missing", OWNER, "view") is False


def test_document_users_lists_owner_as_admin(runtime, document):
    runtime.access_service.grant(document.id, "alice", "download")
    users = runtime.access_service.get_document_users(document.id)

    assert {"userId": "alice", "level": "download", "isOwner": False} in users
    assert {"userId": OWNER, "level": "admin", "isOwner": True} in users


def test_transfer_ownership_requires_matching_current_owner(runtime, document):
    access = runtime.access_service
    with pytest.raises(PermissionDeniedError):
        access.transfer_ownership(document.id, "impostor", "mallory")
    assert runtime.document_service.get_document(document.id).permissions.owner == OWNER

    access.grant(document.id, "bob", "view")
    transferred = access.transfer_ownership(document.id, OWNER, "bob")
    assert transferred.permissions.owner == "bob"
    assert transferred.permissions.entry_for("bob") is None
    assert access.check(document.id, "bob", "admin")
    assert not access.check(document.id, OWNER, "view")
