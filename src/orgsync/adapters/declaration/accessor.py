"""Keyed views over a validated declaration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from orgsync.config.errors import DuplicateKeyError
from orgsync.domain.model import CollaboratorSpec

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from orgsync.domain.model import (
        MemberSpec,
        OrganizationDeclaration,
        RepositorySpec,
        TeamRepositorySpec,
        TeamSpec,
    )


def _index[T](
    items: Iterable[T],
    key: Callable[[T], str],
    *,
    kind: str,
    scope: str | None = None,
) -> dict[str, T]:
    indexed: dict[str, T] = {}
    for item in items:
        k = key(item)
        if k in indexed:
            raise DuplicateKeyError(kind, k, scope=scope)
        indexed[k] = item
    return indexed


class ConfigAccessor:
    """Expose the declaration as the mappings the reconcilers diff against."""

    def __init__(self, declaration: OrganizationDeclaration) -> None:
        self.declaration = declaration

    def list_members(self) -> dict[str, MemberSpec]:
        return _index(self.declaration.members, lambda m: m.login, kind="member")

    def list_repositories(self) -> dict[str, RepositorySpec]:
        return _index(self.declaration.repositories, lambda r: r.name, kind="repository")

    def list_teams(self) -> dict[str, TeamSpec]:
        return _index(self.declaration.teams, lambda t: t.name, kind="team")

    def list_repository_collaborators(self) -> dict[str, dict[str, CollaboratorSpec]]:
        """Flatten direct grants per repository, keyed by login.

        Members' repository grants come first, then outside collaborators'. A login
        granted twice on one repository is a duplicate.
        """

        grants: dict[str, dict[str, CollaboratorSpec]] = {}
        holders = (*self.declaration.members, *self.declaration.outside_collaborators)
        for holder in holders:
            for repository in holder.repositories:
                scope = grants.setdefault(repository.name, {})
                if holder.login in scope:
                    raise DuplicateKeyError(
                        "collaborator", holder.login, scope=f"repository {repository.name}"
                    )
                scope[holder.login] = CollaboratorSpec(
                    login=holder.login, permission=repository.permission
                )
        return grants

    def list_team_members(self) -> dict[str, dict[str, MemberSpec]]:
        members: dict[str, dict[str, MemberSpec]] = {}
        for member in self.declaration.members:
            for team in member.teams:
                scope = members.setdefault(team, {})
                if member.login in scope:
                    raise DuplicateKeyError("team member", member.login, scope=f"team {team}")
                scope[member.login] = member
        return members

    def list_team_repositories(self) -> dict[str, dict[str, TeamRepositorySpec]]:
        """Repositories per declared team; every team appears, even without any."""

        return {
            team.name: _index(
                team.repositories,
                lambda r: r.name,
                kind="team repository",
                scope=f"team {team.name}",
            )
            for team in self.list_teams().values()
        }
