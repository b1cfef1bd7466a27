"""Local document-management core: documents, versions, folders and access control."""

from .config import DocVaultConfig  # noqa: F401
from .runtime import DocVaultRuntime  # noqa: F401
