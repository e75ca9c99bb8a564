"""Sequencing of the reconcilers for one organization run."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from . import reconcilers
from .report import AggregateReport
from .state import SyncPhase

if TYPE_CHECKING:
    from orgsync.domain.ports import DeclarationSource, OrganizationClient

    from .report import (
        CollaboratorChanges,
        MemberChanges,
        RepositoryChanges,
        TeamChanges,
        TeamMemberChanges,
        TeamRepositoryChanges,
    )

log = getLogger(__name__)


class SyncOrchestrator:
    """Run the reconcilers in dependency order and collect one report.

    The order is fixed: teams, members, repositories, repository collaborators,
    team members, team repositories. Members, team members and team repositories
    depend on teams; calling them before :meth:`sync_teams` raises
    ``PreconditionError`` without touching the organization.

    ``report`` is filled in as each reconciler computes its diff, so after a failed
    :meth:`sync_all` it holds everything diffed before the failure.
    """

    def __init__(self, client: OrganizationClient, declaration: DeclarationSource) -> None:
        self.client = client
        self.declaration = declaration
        self.phase = SyncPhase.TEAMS_PENDING
        self.report = AggregateReport()

    async def sync_all(self) -> AggregateReport:
        log.info("Starting organization sync")
        await self.sync_teams()
        await self.sync_members()
        await self.sync_repositories()
        await self.sync_repository_collaborators()
        await self.sync_team_members()
        await self.sync_team_repositories()
        log.info("Finished organization sync: changes=%s", self.report.total_changes)
        return self.report

    async def sync_teams(self) -> TeamChanges:
        changes = await reconcilers.sync_teams(self.client, self.declaration, self.report)
        self.phase = SyncPhase.TEAMS_SYNCED
        return changes

    async def sync_members(self) -> MemberChanges:
        return await reconcilers.sync_members(
            self.client, self.declaration, self.report, phase=self.phase
        )

    async def sync_repositories(self) -> RepositoryChanges:
        return await reconcilers.sync_repositories(self.client, self.declaration, self.report)

    async def sync_repository_collaborators(self) -> list[CollaboratorChanges]:
        return await reconcilers.sync_repository_collaborators(
            self.client, self.declaration, self.report
        )

    async def sync_team_members(self) -> list[TeamMemberChanges]:
        return await reconcilers.sync_team_members(
            self.client, self.declaration, self.report, phase=self.phase
        )

    async def sync_team_repositories(self) -> list[TeamRepositoryChanges]:
        return await reconcilers.sync_team_repositories(
            self.client, self.declaration, self.report, phase=self.phase
        )
