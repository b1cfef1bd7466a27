"""Configuration primitives for the document vault."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

MB = 1024 * 1024


def _default_type_limits() -> Dict[str, int]:
    return {
        "application/pdf": 10 * MB,
        "application/msword": 5 * MB,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": 5 * MB,
        "application/vnd.ms-excel": 5 * MB,
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": 5 * MB,
        "application/vnd.ms-powerpoint": 5 * MB,
        "application/vnd.openxmlformats-officedocument.presentationml.presentation": 5 * MB,
        "text/plain": 1 * MB,
        "text/csv": 2 * MB,
        "image/jpeg": 5 * MB,
        "image/png": 5 * MB,
        "image/gif": 5 * MB,
        "image/svg+xml": 2 * MB,
    }


@dataclass
class StorageConfig:
    backend: str = "memory"
    state_path: Optional[str] = None
    state_encryption_key: Optional[str] = None
    documents_key: str = "documents"
    folders_key: str = "folders"
    sessions_key: str = "viewingSessions"


@dataclass
class ValidationConfig:
    type_limits: Dict[str, int] = field(default_factory=_default_type_limits)


@dataclass
class AuthConfig:
    default_user: str = "current-user"


@dataclass
class ObservabilityConfig:
    log_level: str = "INFO"
    max_events: int = 500


@dataclass
class DocVaultConfig:
    storage: StorageConfig
    validation: ValidationConfig
    auth: AuthConfig
    observability: ObservabilityConfig
    feature_flags: Dict[str, bool] = field(default_factory=dict)

    @staticmethod
    def default() -> "DocVaultConfig":
        return DocVaultConfig(
            storage=StorageConfig(),
            validation=ValidationConfig(),
            auth=AuthConfig(),
            observability=ObservabilityConfig(),
        )

    @staticmethod
    def from_env(environ: Optional[Dict[str, str]] = None) -> "DocVaultConfig":
        """Build a config from ``DOC_VAULT_*`` variables layered over the defaults."""
        env = os.environ if environ is None else environ
        cfg = DocVaultConfig.default()
        state_path = env.get("DOC_VAULT_STATE_PATH", "").strip()
        if state_path:
            cfg.storage.backend = "json"
            cfg.storage.state_path = state_path
        cfg.storage.state_encryption_key = env.get("DOC_VAULT_STATE_KEY") or None
        cfg.auth.default_user = env.get("DOC_VAULT_DEFAULT_USER", cfg.auth.default_user)
        cfg.observability.log_level = env.get("DOC_VAULT_LOG_LEVEL", cfg.observability.log_level).upper()
        return cfg
