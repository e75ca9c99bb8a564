"""Port for reading and mutating the live organization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from orgsync.domain.model import (
        MemberRole,
        RemoteMember,
        RemoteRepository,
        RemoteTeam,
        RemoteTeamMember,
        RemoteTeamRepository,
        RepositoryPermission,
        RepositoryVisibility,
        TeamPrivacy,
    )


@dataclass(frozen=True, slots=True)
class AddMember:
    login: str
    email: str
    role: MemberRole
    team_ids: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class UpdateMember:
    login: str
    role: MemberRole


@dataclass(frozen=True, slots=True)
class RemoveMember:
    login: str


@dataclass(frozen=True, slots=True)
class CreateRepository:
    name: str
    visibility: RepositoryVisibility
    description: str | None = None


UpdateRepository = CreateRepository


@dataclass(frozen=True, slots=True)
class DeleteRepository:
    name: str


@dataclass(frozen=True, slots=True)
class AddCollaborator:
    repository: str
    login: str
    permission: RepositoryPermission


UpdateCollaborator = AddCollaborator


@dataclass(frozen=True, slots=True)
class RemoveCollaborator:
    repository: str
    login: str


@dataclass(frozen=True, slots=True)
class CreateTeam:
    name: str
    privacy: TeamPrivacy
    description: str | None = None
    parent_team_id: int | None = None


@dataclass(frozen=True, slots=True)
class UpdateTeam:
    slug: str
    name: str | None = None
    description: str | None = None
    privacy: TeamPrivacy | None = None
    parent_team_id: int | None = None


@dataclass(frozen=True, slots=True)
class DeleteTeam:
    slug: str


@dataclass(frozen=True, slots=True)
class AddTeamRepository:
    slug: str
    repository: str
    permission: RepositoryPermission | None = None


UpdateTeamRepository = AddTeamRepository


@dataclass(frozen=True, slots=True)
class RemoveTeamRepository:
    slug: str
    repository: str


@dataclass(frozen=True, slots=True)
class AddTeamMember:
    slug: str
    login: str


RemoveTeamMember = AddTeamMember


@runtime_checkable
class OrganizationClient(Protocol):
    """Async reads and writes against one organization.

    Implementations raise ``RemoteError`` for any failed call. Retries, if any,
    happen inside the implementation and are invisible to callers.
    """

    async def list_members(self) -> Sequence[RemoteMember]: ...

    async def add_member(self, request: AddMember) -> None: ...

    async def update_member(self, request: UpdateMember) -> None: ...

    async def remove_member(self, request: RemoveMember) -> None: ...

    async def list_repositories(
        self, *, with_collaborators: bool = False
    ) -> Sequence[RemoteRepository]: ...

    async def create_repository(self, request: CreateRepository) -> None: ...

    async def update_repository(self, request: UpdateRepository) -> None: ...

    async def delete_repository(self, request: DeleteRepository) -> None: ...

    async def add_collaborator(self, request: AddCollaborator) -> None: ...

    async def update_collaborator(self, request: UpdateCollaborator) -> None: ...

    async def remove_collaborator(self, request: RemoveCollaborator) -> None: ...

    async def list_teams(self) -> Sequence[RemoteTeam]: ...

    async def create_team(self, request: CreateTeam) -> None: ...

    async def update_team(self, request: UpdateTeam) -> None: ...

    async def delete_team(self, request: DeleteTeam) -> None: ...

    async def list_team_repositories(self, slug: str) -> Sequence[RemoteTeamRepository]: ...

    async def add_team_repository(self, request: AddTeamRepository) -> None: ...

    async def update_team_repository(self, request: UpdateTeamRepository) -> None: ...

    async def remove_team_repository(self, request: RemoveTeamRepository) -> None: ...

    async def list_team_members(self, slug: str) -> Sequence[RemoteTeamMember]: ...

    async def add_team_member(self, request: AddTeamMember) -> None: ...

    async def remove_team_member(self, request: RemoveTeamMember) -> None: ...


__all__ = [
    "AddCollaborator",
    "AddMember",
    "AddTeamMember",
    "AddTeamRepository",
    "CreateRepository",
    "CreateTeam",
    "DeleteRepository",
    "DeleteTeam",
    "OrganizationClient",
    "RemoveCollaborator",
    "RemoveMember",
    "RemoveTeamMember",
    "RemoveTeamRepository",
    "UpdateCollaborator",
    "UpdateMember",
    "UpdateRepository",
    "UpdateTeam",
    "UpdateTeamRepository",
]
