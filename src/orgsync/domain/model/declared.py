"""Desired-state entities, as declared by the organization document.

These models are the validated form of the YAML declaration. They are frozen for
the duration of a run and carry no remote identifiers (ids, slugs); the
reconcilers take those from the current state when addressing updates.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import MemberRole, RepositoryPermission, RepositoryVisibility, TeamPrivacy

Meta = dict[str, Any]


def _none_to_empty(value: object) -> object:
    return () if value is None else value


class DeclaredModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class MemberRepository(DeclaredModel):
    name: str
    permission: RepositoryPermission


class TeamRepositorySpec(DeclaredModel):
    name: str
    permission: RepositoryPermission


class MemberSpec(DeclaredModel):
    login: str
    email: str
    role: MemberRole
    teams: tuple[str, ...] = ()
    repositories: tuple[MemberRepository, ...] = ()
    # free-form bag for other tooling; never compared
    meta: Meta | None = None

    _normalize_lists = field_validator("teams", "repositories", mode="before")(_none_to_empty)


class OutsideCollaboratorSpec(DeclaredModel):
    login: str
    repositories: tuple[MemberRepository, ...]
    meta: Meta | None = None


class TeamSpec(DeclaredModel):
    name: str
    description: str | None = None
    visibility: TeamPrivacy
    repositories: tuple[TeamRepositorySpec, ...] = ()

    _normalize_lists = field_validator("repositories", mode="before")(_none_to_empty)


class RepositorySpec(DeclaredModel):
    name: str
    description: str | None = None
    visibility: RepositoryVisibility


class CollaboratorSpec(DeclaredModel):
    """A direct repository grant, flattened from members and outside collaborators."""

    login: str
    permission: RepositoryPermission


class OrganizationDeclaration(DeclaredModel):
    members: tuple[MemberSpec, ...] = ()
    outside_collaborators: tuple[OutsideCollaboratorSpec, ...] = Field(
        default=(), alias="outsideCollaborators"
    )
    teams: tuple[TeamSpec, ...] = ()
    repositories: tuple[RepositorySpec, ...] = ()

    _normalize_lists = field_validator(
        "members", "outside_collaborators", "teams", "repositories", mode="before"
    )(_none_to_empty)
