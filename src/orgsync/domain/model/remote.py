"""Current-state entities, as observed on the remote platform."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import MemberRole, RepositoryPermission, RepositoryVisibility, TeamPrivacy


@dataclass(frozen=True, slots=True)
class RemoteMember:
    login: str
    role: MemberRole


@dataclass(frozen=True, slots=True)
class RemoteCollaborator:
    login: str
    permission: RepositoryPermission


@dataclass(frozen=True, slots=True)
class RemoteRepository:
    id: int
    name: str
    visibility: RepositoryVisibility
    description: str | None = None
    collaborators: tuple[RemoteCollaborator, ...] = ()


@dataclass(frozen=True, slots=True)
class RemoteTeamParent:
    id: int
    slug: str
    name: str


@dataclass(frozen=True, slots=True)
class RemoteTeam:
    id: int
    slug: str
    name: str
    privacy: TeamPrivacy
    description: str | None = None
    parent: RemoteTeamParent | None = None


@dataclass(frozen=True, slots=True)
class RemoteTeamRepository:
    id: int
    name: str
    permission: RepositoryPermission


@dataclass(frozen=True, slots=True)
class RemoteTeamMember:
    login: str
