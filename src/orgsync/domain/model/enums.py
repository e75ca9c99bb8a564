"""Enumerations shared by declared and remote entities."""

from __future__ import annotations

from enum import StrEnum


class MemberRole(StrEnum):
    ADMIN = "admin"
    MEMBER = "member"


class TeamPrivacy(StrEnum):
    CLOSED = "closed"
    SECRET = "secret"


class RepositoryPermission(StrEnum):
    """Repository access levels, named as the REST API spells them."""

    PULL = "pull"
    TRIAGE = "triage"
    PUSH = "push"
    MAINTAIN = "maintain"
    ADMIN = "admin"


class RepositoryVisibility(StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"
