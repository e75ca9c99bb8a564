"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_int, require_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    DeclarationError,
    DuplicateKeyError,
    MissingConfigurationError,
    UnknownReferenceError,
)
from .github import DEFAULT_GITHUB_API_URL, GitHubConfig, get_github_config, github_resilience
from .http_resilience import (
    IDEMPOTENT_METHODS,
    RateLimit,
    ResilienceConfig,
    RetryablePayloadError,
    RetryPolicy,
)
from .logging import configure_logging
from .sync import DEFAULT_PAGE_SIZE, SyncConfig, get_sync_config

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_PAGE_SIZE",
    "IDEMPOTENT_METHODS",
    "ConfigurationError",
    "DeclarationError",
    "DuplicateKeyError",
    "GitHubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryablePayloadError",
    "RetryPolicy",
    "SyncConfig",
    "UnknownReferenceError",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_github_config",
    "get_sync_config",
    "github_resilience",
    "require_env_var",
    "require_env_vars",
]
