"""Domain entities for declared and observed organization state."""

from __future__ import annotations

from .declared import (
    CollaboratorSpec,
    MemberRepository,
    MemberSpec,
    Meta,
    OrganizationDeclaration,
    OutsideCollaboratorSpec,
    RepositorySpec,
    TeamRepositorySpec,
    TeamSpec,
)
from .enums import MemberRole, RepositoryPermission, RepositoryVisibility, TeamPrivacy
from .remote import (
    RemoteCollaborator,
    RemoteMember,
    RemoteRepository,
    RemoteTeam,
    RemoteTeamMember,
    RemoteTeamParent,
    RemoteTeamRepository,
)

__all__ = [
    "CollaboratorSpec",
    "MemberRepository",
    "MemberRole",
    "MemberSpec",
    "Meta",
    "OrganizationDeclaration",
    "OutsideCollaboratorSpec",
    "RemoteCollaborator",
    "RemoteMember",
    "RemoteRepository",
    "RemoteTeam",
    "RemoteTeamMember",
    "RemoteTeamParent",
    "RemoteTeamRepository",
    "RepositoryPermission",
    "RepositorySpec",
    "RepositoryVisibility",
    "TeamPrivacy",
    "TeamRepositorySpec",
    "TeamSpec",
]
