"""Supported file types and upload validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

from ..config import ValidationConfig
from ..models import FileUpload

EXTENSION_TO_MIME: Dict[str, str] = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
}


@dataclass(frozen=True)
class ValidationOutcome:
    valid: bool
    message: str
    mime_type: Optional[str] = None


@dataclass
class FileValidator:
    config: ValidationConfig

    def resolve_mime_type(self, file: FileUpload) -> Optional[str]:
        if file.mime_type:
            return file.mime_type
        extension = os.path.splitext(file.name or "")[1].lower()
        return EXTENSION_TO_MIME.get(extension)

    def validate(self, file: Optional[FileUpload]) -> ValidationOutcome:
        if file is None:
            return ValidationOutcome(False, "No file provided")
        mime_type = self.resolve_mime_type(file)
        if not mime_type or mime_type not in self.config.type_limits:
            label = mime_type or os.path.splitext(file.name or "")[1] or "unknown"
            return ValidationOutcome(False, f"Unsupported file type: {label}")
        max_size = self.config.type_limits[mime_type]
        if file.size > max_size:
            max_mb = max_size / (1024 * 1024)
            return ValidationOutcome(
                False,
                f"File is too large. Maximum size for {mime_type} is {max_mb:g}MB",
                mime_type,
            )
        return ValidationOutcome(True, "File is valid", mime_type)

    def max_file_size(self, mime_type: str) -> Optional[int]:
        return self.config.type_limits.get(mime_type)

    @staticmethod
    def supported_types_string() -> str:
        return ", ".join(EXTENSION_TO_MIME)
