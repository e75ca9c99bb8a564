"""Synchronization defaults for the reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, env_int
from .errors import ConfigurationError

DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class SyncConfig:
    dry_run: bool = False
    page_size: int = DEFAULT_PAGE_SIZE


def get_sync_config(*, dry_run: bool | None = None, page_size: int | None = None) -> SyncConfig:
    """Build the sync settings, letting explicit arguments override the environment."""

    effective_page_size = page_size or env_int("ORGSYNC_PAGE_SIZE", default=DEFAULT_PAGE_SIZE)
    if not 1 <= effective_page_size <= DEFAULT_PAGE_SIZE:
        raise ConfigurationError(f"Page size must be between 1 and {DEFAULT_PAGE_SIZE}")
    return SyncConfig(
        dry_run=env_flag("ORGSYNC_DRY_RUN") if dry_run is None else dry_run,
        page_size=effective_page_size,
    )
