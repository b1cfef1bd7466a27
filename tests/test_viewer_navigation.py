from __future__ import annotations

import pytest

from doc_vault.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from doc_vault.models import FileUpload

from conftest import OWNER, pdf


def test_view_and_download_respect_levels(runtime, document):
    viewer = runtime.viewer_service
    runtime.access_service.grant(document.id, "reader", "view")

    descriptor = viewer.get_view_url(document.id, "reader")
    assert descriptor.url == document.url
    assert descriptor.to_dict()["type"] == "application/pdf"
    with pytest.raises(PermissionDeniedError):
        viewer.get_download_url(document.id, "reader")
    assert viewer.get_download_url(document.id, OWNER).name == "report.pdf"
    with pytest.raises(NotFoundError):
        viewer.get_view_url("missing", OWNER)


def test_preview_config_viewer_types(runtime, document):
    sheet = runtime.document_service.upload(
        FileUpload(name="a.pptx", size=10, mime_type="application/vnd.openxmlformats-officedocument.presentationml.presentation")
    )
    assert runtime.viewer_service.get_preview_config(document.id)["viewerType"] == "pdf"
    assert runtime.viewer_service.get_preview_config(sheet.id)["viewerType"] == "unknown"


def test_track_view_appends_history(runtime, document):
    viewer = runtime.viewer_service
    viewer.track_view(document.id, "alice")
    updated = viewer.track_view(document.id, "bob")

    assert updated.view_count == 2
    assert [event.user_id for event in viewer.get_view_history(document.id)] == ["alice", "bob"]
    assert updated.last_viewed == updated.view_history[-1].timestamp


def test_page_count_estimates_by_type(runtime, document):
    navigation = runtime.navigation_service
    # 2MB pdf at 50KB per page
    assert navigation.get_page_count(document.id) == 41
    assert runtime.document_service.get_document(document.id).page_count == 41

    image = runtime.document_service.upload(FileUpload(name="a.png", size=4_000_000, mime_type="image/png"))
    assert navigation.get_page_count(image.id) == 1

    tiny = runtime.document_service.upload(pdf("tiny.pdf", size=0))
    assert navigation.get_page_count(tiny.id) == 1


def test_page_content_and_thumbnails(runtime):
    navigation = runtime.navigation_service
    document = runtime.document_service.upload(pdf(size=120 * 1024))

    content = navigation.get_page_content(document.id, 2)
    assert content["totalPages"] == 3
    assert content["pageParam"] == "#page=2"

    thumbs = navigation.get_all_page_thumbnails(document.id)
    assert [thumb["pageNumber"] for thumb in thumbs] == [1, 2, 3]
    assert thumbs[2]["thumbnailUrl"].endswith("#page=3")
    assert (thumbs[0]["width"], thumbs[0]["height"]) == (120, 160)

    with pytest.raises(ValidationFailedError):
        navigation.get_page_content(document.id, 4)
    with pytest.raises(ValidationFailedError):
        navigation.get_page_thumbnail(document.id, 0)


def test_viewing_session_persisted(runtime, storage, document):
    session = runtime.navigation_service.set_current_page(document.id, 3)
    assert session.current_page == 3
    assert runtime.navigation_service.get_viewing_session(document.id).current_page == 3
    assert document.id in storage.get_item("viewingSessions")

    with pytest.raises(ValidationFailedError):
        runtime.navigation_service.set_current_page(document.id, 999)
