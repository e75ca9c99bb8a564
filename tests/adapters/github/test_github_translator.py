from __future__ import annotations

import pytest

from orgsync.adapters.github import to_repository_permission
from orgsync.adapters.github.schema import MemberEdge, PermissionsPayload, TeamPayload
from orgsync.adapters.github.translator import parse_member, parse_team
from orgsync.domain.model import MemberRole, RemoteTeamParent, RepositoryPermission


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        ({"admin": True, "maintain": True, "push": True, "pull": True}, RepositoryPermission.ADMIN),
        ({"maintain": True, "push": True, "pull": True}, RepositoryPermission.MAINTAIN),
        ({"push": True, "triage": True, "pull": True}, RepositoryPermission.PUSH),
        ({"triage": True, "pull": True}, RepositoryPermission.TRIAGE),
        ({"pull": True}, RepositoryPermission.PULL),
    ],
)
def test_highest_granted_permission_wins(
    flags: dict[str, bool], expected: RepositoryPermission
) -> None:
    assert to_repository_permission(PermissionsPayload.model_validate(flags)) is expected


@pytest.mark.parametrize("permissions", [None, PermissionsPayload()])
def test_missing_permissions_cannot_be_converted(permissions: PermissionsPayload | None) -> None:
    with pytest.raises(ValueError, match="Cannot convert"):
        to_repository_permission(permissions)


def test_parse_member_lowercases_graphql_role() -> None:
    edge = MemberEdge.model_validate({"role": "ADMIN", "node": {"login": "alice"}})

    member = parse_member(edge)

    assert member.role is MemberRole.ADMIN


def test_parse_team_keeps_parent_reference() -> None:
    payload = TeamPayload.model_validate(
        {
            "id": 9,
            "slug": "web",
            "name": "Web",
            "privacy": "closed",
            "parent": {"id": 1, "slug": "eng", "name": "Engineering", "url": "ignored"},
            "members_url": "ignored",
        }
    )

    team = parse_team(payload)

    assert team.parent == RemoteTeamParent(id=1, slug="eng", name="Engineering")
    assert team.description is None
