"""Translate GitHub payloads into remote domain entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from orgsync.domain.model import (
    MemberRole,
    RemoteCollaborator,
    RemoteMember,
    RemoteRepository,
    RemoteTeam,
    RemoteTeamMember,
    RemoteTeamParent,
    RemoteTeamRepository,
    RepositoryPermission,
    RepositoryVisibility,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import (
        CollaboratorPayload,
        MemberEdge,
        PermissionsPayload,
        RepositoryPayload,
        TeamMemberPayload,
        TeamPayload,
        TeamRepositoryPayload,
    )


def to_repository_permission(permissions: PermissionsPayload | None) -> RepositoryPermission:
    """Return the highest access level granted by a permissions object."""

    if permissions is not None:
        if permissions.admin:
            return RepositoryPermission.ADMIN
        if permissions.maintain:
            return RepositoryPermission.MAINTAIN
        if permissions.push:
            return RepositoryPermission.PUSH
        if permissions.triage:
            return RepositoryPermission.TRIAGE
        if permissions.pull:
            return RepositoryPermission.PULL
    raise ValueError(f"Cannot convert repository permissions: {permissions!r}")


def parse_member(edge: MemberEdge) -> RemoteMember:
    return RemoteMember(login=edge.node.login, role=MemberRole(edge.role.lower()))


def parse_collaborator(payload: CollaboratorPayload) -> RemoteCollaborator:
    return RemoteCollaborator(
        login=payload.login,
        permission=to_repository_permission(payload.permissions),
    )


def parse_repository(
    payload: RepositoryPayload,
    collaborators: Iterable[CollaboratorPayload] = (),
) -> RemoteRepository:
    return RemoteRepository(
        id=payload.id,
        name=payload.name,
        description=payload.description,
        visibility=RepositoryVisibility.PRIVATE if payload.private else RepositoryVisibility.PUBLIC,
        collaborators=tuple(parse_collaborator(item) for item in collaborators),
    )


def parse_team(payload: TeamPayload) -> RemoteTeam:
    parent = payload.parent
    return RemoteTeam(
        id=payload.id,
        slug=payload.slug,
        name=payload.name,
        description=payload.description,
        privacy=payload.privacy,
        parent=RemoteTeamParent(id=parent.id, slug=parent.slug, name=parent.name)
        if parent is not None
        else None,
    )


def parse_team_repository(payload: TeamRepositoryPayload) -> RemoteTeamRepository:
    return RemoteTeamRepository(
        id=payload.id,
        name=payload.name,
        permission=to_repository_permission(payload.permissions),
    )


def parse_team_member(payload: TeamMemberPayload) -> RemoteTeamMember:
    return RemoteTeamMember(login=payload.login)
