"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from orgsync.adapters.declaration import ConfigAccessor, read_declaration_file
from orgsync.adapters.github import GitHubClient
from orgsync.adapters.http_resilience import ResilienceConfig, ResilientClient
from orgsync.config import get_github_config, get_sync_config
from orgsync.domain.reconciliation import SyncOrchestrator

if TYPE_CHECKING:
    from pathlib import Path

    from orgsync.config import GitHubConfig, SyncConfig
    from orgsync.domain.ports import DeclarationSource
    from orgsync.domain.reconciliation import AggregateReport

ClientFactory = Callable[[ResilienceConfig], ResilientClient]


log = getLogger(__name__)


def sync_organization(
    *,
    declaration_path: str | Path,
    github: GitHubConfig | None = None,
    sync: SyncConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> AggregateReport:
    """Converge the GitHub organization onto the declaration file."""

    declaration = ConfigAccessor(read_declaration_file(declaration_path))
    effective_github = github or get_github_config()
    effective_sync = sync or get_sync_config()
    log.info(
        "Starting GitHub organization sync: organization=%s, file=%s, dry_run=%s",
        effective_github.organization,
        declaration_path,
        effective_sync.dry_run,
    )

    report = asyncio.run(
        _run(declaration, effective_github, effective_sync, client_factory=client_factory)
    )

    log.info(
        "Finished GitHub organization sync: organization=%s, changes=%s, dry_run=%s",
        effective_github.organization,
        report.total_changes,
        effective_sync.dry_run,
    )
    return report


async def _run(
    declaration: DeclarationSource,
    github: GitHubConfig,
    sync: SyncConfig,
    *,
    client_factory: ClientFactory | None,
) -> AggregateReport:
    client = GitHubClient(
        github,
        dry_run=sync.dry_run,
        page_size=sync.page_size,
        client_factory=client_factory,
    )
    async with client:
        orchestrator = SyncOrchestrator(client, declaration)
        return await orchestrator.sync_all()
