"""Per-resource reconcilers.

Each reconciler reads the desired state from the declaration and the current
state from the organization client, diffs them, records the actionable
partitions on the report, then applies ``add``, ``sub`` and ``not_eq`` in that
order, one call at a time. A failing call propagates immediately; calls already
issued are not undone.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from orgsync.config.errors import UnknownReferenceError
from orgsync.domain.ports.remote import (
    AddCollaborator,
    AddMember,
    AddTeamMember,
    AddTeamRepository,
    CreateRepository,
    CreateTeam,
    DeleteRepository,
    DeleteTeam,
    RemoveCollaborator,
    RemoveMember,
    RemoveTeamMember,
    RemoveTeamRepository,
    UpdateCollaborator,
    UpdateMember,
    UpdateRepository,
    UpdateTeam,
    UpdateTeamRepository,
)

from .diff import diff
from .report import ResourceChanges, ScopedChanges
from .state import SyncPhase, require_teams_synced

if TYPE_CHECKING:
    from collections.abc import Mapping

    from orgsync.domain.model import (
        CollaboratorSpec,
        MemberSpec,
        RemoteCollaborator,
        RemoteMember,
        RemoteRepository,
        RemoteTeam,
        RemoteTeamMember,
        RemoteTeamRepository,
        RepositorySpec,
        TeamRepositorySpec,
        TeamSpec,
    )
    from orgsync.domain.ports import DeclarationSource, OrganizationClient

    from .report import (
        AggregateReport,
        CollaboratorChanges,
        MemberChanges,
        RepositoryChanges,
        TeamChanges,
        TeamMemberChanges,
        TeamRepositoryChanges,
    )

log = getLogger(__name__)


def _same_text(desired: str | None, current: str | None) -> bool:
    # the API reports a missing description as null or ""
    return (desired or None) == (current or None)


def _team_equal(desired: TeamSpec, current: RemoteTeam) -> bool:
    return (
        desired.name == current.name
        and _same_text(desired.description, current.description)
        and desired.visibility == current.privacy
    )


def _member_equal(desired: MemberSpec, current: RemoteMember) -> bool:
    return desired.login == current.login and desired.role == current.role


def _repository_equal(desired: RepositorySpec, current: RemoteRepository) -> bool:
    return (
        desired.name == current.name
        and _same_text(desired.description, current.description)
        and desired.visibility == current.visibility
    )


def _collaborator_equal(desired: CollaboratorSpec, current: RemoteCollaborator) -> bool:
    return desired.login == current.login and desired.permission == current.permission


def _team_member_equal(desired: MemberSpec, current: RemoteTeamMember) -> bool:
    return desired.login == current.login


def _team_repository_equal(desired: TeamRepositorySpec, current: RemoteTeamRepository) -> bool:
    return desired.name == current.name and desired.permission == current.permission


async def sync_teams(
    client: OrganizationClient,
    declaration: DeclarationSource,
    report: AggregateReport,
) -> TeamChanges:
    """Converge organization teams; the caller marks teams as synced afterwards."""

    desired = declaration.list_teams()
    current = await client.list_teams()
    result = diff(desired, current, key=lambda c: c.name, equal=_team_equal)
    changes: TeamChanges = ResourceChanges.from_diff(result)
    report.teams = changes

    for wanted in result.add:
        log.info("add team: name=%s, privacy=%s", wanted.name, wanted.visibility)
        await client.create_team(
            CreateTeam(name=wanted.name, description=wanted.description, privacy=wanted.visibility)
        )

    for team in result.sub:
        log.info("remove team: name=%s, slug=%s", team.name, team.slug)
        await client.delete_team(DeleteTeam(slug=team.slug))

    for wanted, team in result.not_eq:
        log.info("update team: slug=%s, desired=%s, current=%s", team.slug, wanted, team)
        await client.update_team(
            UpdateTeam(
                slug=team.slug,
                name=wanted.name,
                description=wanted.description,
                privacy=wanted.visibility,
            )
        )

    return changes


async def sync_members(
    client: OrganizationClient,
    declaration: DeclarationSource,
    report: AggregateReport,
    *,
    phase: SyncPhase,
) -> MemberChanges:
    """Converge organization membership and roles.

    New members are invited together with their declared teams, so team names are
    resolved to ids before any invitation is sent. An unknown team name aborts the
    reconciler without issuing writes.
    """

    require_teams_synced(phase, "members")

    desired = declaration.list_members()
    current = await client.list_members()
    result = diff(desired, current, key=lambda c: c.login, equal=_member_equal)
    changes: MemberChanges = ResourceChanges.from_diff(result)
    report.members = changes

    team_ids: dict[str, tuple[int, ...]] = {}
    if result.add:
        teams = {team.name: team.id for team in await client.list_teams()}
        team_ids = {wanted.login: _resolve_team_ids(wanted, teams) for wanted in result.add}

    for wanted in result.add:
        log.info("add member to organization: login=%s, role=%s", wanted.login, wanted.role)
        await client.add_member(
            AddMember(
                login=wanted.login,
                email=wanted.email,
                role=wanted.role,
                team_ids=team_ids[wanted.login],
            )
        )

    for member in result.sub:
        log.info("remove member from organization: login=%s", member.login)
        await client.remove_member(RemoveMember(login=member.login))

    for wanted, member in result.not_eq:
        log.info(
            "update member: login=%s, role=%s -> %s", member.login, member.role, wanted.role
        )
        await client.update_member(UpdateMember(login=wanted.login, role=wanted.role))

    return changes


def _resolve_team_ids(member: MemberSpec, teams: Mapping[str, int]) -> tuple[int, ...]:
    ids: list[int] = []
    for name in member.teams:
        team_id = teams.get(name)
        if team_id is None:
            raise UnknownReferenceError("team", name)
        ids.append(team_id)
    return tuple(ids)


async def sync_repositories(
    client: OrganizationClient,
    declaration: DeclarationSource,
    report: AggregateReport,
) -> RepositoryChanges:
    desired = declaration.list_repositories()
    current = await client.list_repositories(with_collaborators=False)
    result = diff(desired, current, key=lambda c: c.name, equal=_repository_equal)
    changes: RepositoryChanges = ResourceChanges.from_diff(result)
    report.repositories = changes

    for wanted in result.add:
        log.info("add repository: name=%s, visibility=%s", wanted.name, wanted.visibility)
        await client.create_repository(
            CreateRepository(
                name=wanted.name,
                description=wanted.description,
                visibility=wanted.visibility,
            )
        )

    for repository in result.sub:
        log.info("remove repository: name=%s", repository.name)
        await client.delete_repository(DeleteRepository(name=repository.name))

    for wanted, repository in result.not_eq:
        log.info("update repository: name=%s, desired=%s, current=%s", wanted.name, wanted, repository)
        await client.update_repository(
            UpdateRepository(
                name=wanted.name,
                description=wanted.description,
                visibility=wanted.visibility,
            )
        )

    return changes


async def sync_repository_collaborators(
    client: OrganizationClient,
    declaration: DeclarationSource,
    report: AggregateReport,
) -> list[CollaboratorChanges]:
    """Converge direct collaborators of every remote repository.

    Grants declared for repositories that do not exist remotely are skipped; the
    repository reconciler runs first so those only occur when it was told not to
    create them.
    """

    desired = declaration.list_repository_collaborators()
    repositories = await client.list_repositories(with_collaborators=True)
    scoped: list[CollaboratorChanges] = []

    for repository in repositories:
        log.debug("reconcile collaborators: repository=%s", repository.name)
        result = diff(
            desired.get(repository.name, {}),
            repository.collaborators,
            key=lambda c: c.login,
            equal=_collaborator_equal,
        )
        if not result.has_changes:
            continue
        changes: CollaboratorChanges = ScopedChanges.for_scope(repository.name, result)
        scoped.append(changes)
        report.repository_collaborators.append(changes)

        for wanted in result.add:
            log.info(
                "add repository collaborator: repository=%s, login=%s, permission=%s",
                repository.name,
                wanted.login,
                wanted.permission,
            )
            await client.add_collaborator(
                AddCollaborator(
                    repository=repository.name,
                    login=wanted.login,
                    permission=wanted.permission,
                )
            )

        for collaborator in result.sub:
            log.info(
                "remove repository collaborator: repository=%s, login=%s",
                repository.name,
                collaborator.login,
            )
            await client.remove_collaborator(
                RemoveCollaborator(repository=repository.name, login=collaborator.login)
            )

        for wanted, collaborator in result.not_eq:
            log.info(
                "update repository collaborator: repository=%s, login=%s, permission=%s -> %s",
                repository.name,
                wanted.login,
                collaborator.permission,
                wanted.permission,
            )
            await client.update_collaborator(
                UpdateCollaborator(
                    repository=repository.name,
                    login=wanted.login,
                    permission=wanted.permission,
                )
            )

    return scoped


async def sync_team_members(
    client: OrganizationClient,
    declaration: DeclarationSource,
    report: AggregateReport,
    *,
    phase: SyncPhase,
) -> list[TeamMemberChanges]:
    require_teams_synced(phase, "team-members")

    desired = declaration.list_team_members()
    teams = await client.list_teams()
    scoped: list[TeamMemberChanges] = []

    for team in teams:
        log.debug("reconcile team-members: team=%s, slug=%s", team.name, team.slug)
        current = await client.list_team_members(team.slug)
        result = diff(
            desired.get(team.name, {}),
            current,
            key=lambda c: c.login,
            equal=_team_member_equal,
        )
        if not result.has_changes:
            continue
        changes: TeamMemberChanges = ScopedChanges.for_scope(team.name, result)
        scoped.append(changes)
        report.team_members.append(changes)

        for wanted in result.add:
            log.info("add team member: team=%s, login=%s", team.slug, wanted.login)
            await client.add_team_member(AddTeamMember(slug=team.slug, login=wanted.login))

        for member in result.sub:
            log.info("remove team member: team=%s, login=%s", team.slug, member.login)
            await client.remove_team_member(RemoveTeamMember(slug=team.slug, login=member.login))

    return scoped


async def sync_team_repositories(
    client: OrganizationClient,
    declaration: DeclarationSource,
    report: AggregateReport,
    *,
    phase: SyncPhase,
) -> list[TeamRepositoryChanges]:
    require_teams_synced(phase, "team-repositories")

    desired = declaration.list_team_repositories()
    teams = await client.list_teams()
    scoped: list[TeamRepositoryChanges] = []

    for team in teams:
        log.debug("reconcile team-repositories: team=%s, slug=%s", team.name, team.slug)
        current = await client.list_team_repositories(team.slug)
        result = diff(
            desired.get(team.name, {}),
            current,
            key=lambda c: c.name,
            equal=_team_repository_equal,
        )
        if not result.has_changes:
            continue
        changes: TeamRepositoryChanges = ScopedChanges.for_scope(team.name, result)
        scoped.append(changes)
        report.team_repositories.append(changes)

        for wanted in result.add:
            log.info(
                "add team repository: team=%s, repository=%s, permission=%s",
                team.slug,
                wanted.name,
                wanted.permission,
            )
            await client.add_team_repository(
                AddTeamRepository(slug=team.slug, repository=wanted.name, permission=wanted.permission)
            )

        for repository in result.sub:
            log.info("remove team repository: team=%s, repository=%s", team.slug, repository.name)
            await client.remove_team_repository(
                RemoveTeamRepository(slug=team.slug, repository=repository.name)
            )

        for wanted, repository in result.not_eq:
            log.info(
                "update team repository: team=%s, repository=%s, permission=%s -> %s",
                team.slug,
                wanted.name,
                repository.permission,
                wanted.permission,
            )
            await client.update_team_repository(
                UpdateTeamRepository(
                    slug=team.slug, repository=wanted.name, permission=wanted.permission
                )
            )

    return scoped
