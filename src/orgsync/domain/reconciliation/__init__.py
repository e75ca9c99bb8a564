"""Reconciliation core: diff engine, per-resource reconcilers and orchestrator."""

from __future__ import annotations

from .diff import DiffResult, diff
from .orchestrator import SyncOrchestrator
from .reconcilers import (
    sync_members,
    sync_repositories,
    sync_repository_collaborators,
    sync_team_members,
    sync_team_repositories,
    sync_teams,
)
from .report import AggregateReport, ResourceChanges, ScopedChanges
from .state import SyncPhase, require_teams_synced

__all__ = [
    "AggregateReport",
    "DiffResult",
    "ResourceChanges",
    "ScopedChanges",
    "SyncOrchestrator",
    "SyncPhase",
    "diff",
    "require_teams_synced",
    "sync_members",
    "sync_repositories",
    "sync_repository_collaborators",
    "sync_team_members",
    "sync_team_repositories",
    "sync_teams",
]
