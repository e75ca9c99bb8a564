"""In-memory organization client and declaration builders for reconciliation tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from orgsync.adapters.declaration import ConfigAccessor
from orgsync.domain.errors import RemoteError
from orgsync.domain.model import (
    MemberRole,
    MemberSpec,
    OrganizationDeclaration,
    RemoteCollaborator,
    RemoteMember,
    RemoteRepository,
    RemoteTeam,
    RemoteTeamMember,
    RemoteTeamRepository,
    RepositoryVisibility,
    TeamPrivacy,
)

if TYPE_CHECKING:
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


def declaration_from(data: dict[str, object]) -> ConfigAccessor:
    return ConfigAccessor(OrganizationDeclaration.model_validate(data))


def member(login: str, *, role: str = "member", teams: tuple[str, ...] = ()) -> MemberSpec:
    return MemberSpec(
        login=login,
        email=f"{login}@example.com",
        role=MemberRole(role),
        teams=teams,
    )


def remote_team(
    team_id: int,
    name: str,
    *,
    privacy: TeamPrivacy = TeamPrivacy.CLOSED,
    description: str | None = None,
) -> RemoteTeam:
    return RemoteTeam(
        id=team_id,
        slug=name.lower().replace(" ", "-"),
        name=name,
        privacy=privacy,
        description=description,
    )


def remote_repository(
    repo_id: int,
    name: str,
    *,
    visibility: RepositoryVisibility = RepositoryVisibility.PRIVATE,
    description: str | None = None,
    collaborators: tuple[RemoteCollaborator, ...] = (),
) -> RemoteRepository:
    return RemoteRepository(
        id=repo_id,
        name=name,
        visibility=visibility,
        description=description,
        collaborators=collaborators,
    )


@dataclass
class FakeOrganizationClient:
    """Organization client serving fixed snapshots and recording every write.

    Writes do not change the snapshots, so later reads observe the state as it
    was before the run. ``fail_on`` names a write operation that raises
    ``RemoteError`` instead of being recorded.
    """

    members: list[RemoteMember] = field(default_factory=list[RemoteMember])
    repositories: list[RemoteRepository] = field(default_factory=list[RemoteRepository])
    teams: list[RemoteTeam] = field(default_factory=list[RemoteTeam])
    team_members: dict[str, list[RemoteTeamMember]] = field(
        default_factory=dict[str, list[RemoteTeamMember]]
    )
    team_repositories: dict[str, list[RemoteTeamRepository]] = field(
        default_factory=dict[str, list[RemoteTeamRepository]]
    )
    fail_on: str | None = None
    writes: list[tuple[str, object]] = field(default_factory=list[tuple[str, object]])
    reads: list[str] = field(default_factory=list[str])

    def _write(self, operation: str, request: object) -> None:
        if operation == self.fail_on:
            raise RemoteError(f"{operation} failed", status_code=500)
        self.writes.append((operation, request))

    async def list_members(self) -> list[RemoteMember]:
        self.reads.append("members")
        return list(self.members)

    async def add_member(self, request: AddMember) -> None:
        self._write("add_member", request)

    async def update_member(self, request: UpdateMember) -> None:
        self._write("update_member", request)

    async def remove_member(self, request: RemoveMember) -> None:
        self._write("remove_member", request)

    async def list_repositories(self, *, with_collaborators: bool = False) -> list[RemoteRepository]:
        self.reads.append("repositories")
        if with_collaborators:
            return list(self.repositories)
        return [
            RemoteRepository(
                id=repo.id,
                name=repo.name,
                visibility=repo.visibility,
                description=repo.description,
            )
            for repo in self.repositories
        ]

    async def create_repository(self, request: CreateRepository) -> None:
        self._write("create_repository", request)

    async def update_repository(self, request: UpdateRepository) -> None:
        self._write("update_repository", request)

    async def delete_repository(self, request: DeleteRepository) -> None:
        self._write("delete_repository", request)

    async def add_collaborator(self, request: AddCollaborator) -> None:
        self._write("add_collaborator", request)

    async def update_collaborator(self, request: UpdateCollaborator) -> None:
        self._write("update_collaborator", request)

    async def remove_collaborator(self, request: RemoveCollaborator) -> None:
        self._write("remove_collaborator", request)

    async def list_teams(self) -> list[RemoteTeam]:
        self.reads.append("teams")
        return list(self.teams)

    async def create_team(self, request: CreateTeam) -> None:
        self._write("create_team", request)

    async def update_team(self, request: UpdateTeam) -> None:
        self._write("update_team", request)

    async def delete_team(self, request: DeleteTeam) -> None:
        self._write("delete_team", request)

    async def list_team_repositories(self, slug: str) -> list[RemoteTeamRepository]:
        self.reads.append(f"team_repositories:{slug}")
        return list(self.team_repositories.get(slug, []))

    async def add_team_repository(self, request: AddTeamRepository) -> None:
        self._write("add_team_repository", request)

    async def update_team_repository(self, request: UpdateTeamRepository) -> None:
        self._write("update_team_repository", request)

    async def remove_team_repository(self, request: RemoveTeamRepository) -> None:
        self._write("remove_team_repository", request)

    async def list_team_members(self, slug: str) -> list[RemoteTeamMember]:
        self.reads.append(f"team_members:{slug}")
        return list(self.team_members.get(slug, []))

    async def add_team_member(self, request: AddTeamMember) -> None:
        self._write("add_team_member", request)

    async def remove_team_member(self, request: RemoveTeamMember) -> None:
        self._write("remove_team_member", request)

    @property
    def operations(self) -> list[str]:
        return [operation for operation, _ in self.writes]
