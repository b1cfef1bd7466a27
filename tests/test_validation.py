from __future__ import annotations

from doc_vault.config import ValidationConfig
from doc_vault.models import FileUpload
from doc_vault.services.validation import FileValidator


def test_limits_and_messages():
    validator = FileValidator(ValidationConfig())

    ok = validator.validate(FileUpload(name="a.png", size=1024, mime_type="image/png"))
    assert ok.valid and ok.mime_type == "image/png"

    too_big = validator.validate(FileUpload(name="a.svg", size=3 * 1024 * 1024, mime_type="image/svg+xml"))
    assert not too_big.valid
    assert too_big.message == "File is too large. Maximum size for image/svg+xml is 2MB"

    unsupported = validator.validate(FileUpload(name="a.exe", size=1))
    assert unsupported.message == "Unsupported file type: .exe"

    assert not validator.validate(None).valid


def test_lookup_helpers():
    validator = FileValidator(ValidationConfig(type_limits={"text/plain": 10}))
    assert validator.max_file_size("text/plain") == 10
    assert validator.max_file_size("application/pdf") is None
    assert not validator.validate(FileUpload(name="doc.pdf", size=1)).valid
    assert ".pdf" in FileValidator.supported_types_string()
