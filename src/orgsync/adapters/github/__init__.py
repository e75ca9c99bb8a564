"""Public interface for the GitHub adapter."""

from __future__ import annotations

from .client import (
    GitHubAPIError,
    GitHubClient,
    PlannedWrite,
    log_rate_limit,
    retry_after_quota_reset,
)
from .translator import to_repository_permission

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "PlannedWrite",
    "log_rate_limit",
    "retry_after_quota_reset",
    "to_repository_permission",
]
