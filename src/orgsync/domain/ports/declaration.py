"""Port for reading the desired organization state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from orgsync.domain.model import (
        CollaboratorSpec,
        MemberSpec,
        RepositorySpec,
        TeamRepositorySpec,
        TeamSpec,
    )


@runtime_checkable
class DeclarationSource(Protocol):
    """Keyed views over the declaration.

    Every listing preserves declaration order and raises ``DuplicateKeyError``
    when two entries share a key within the same collection.
    """

    def list_members(self) -> Mapping[str, MemberSpec]: ...

    def list_repositories(self) -> Mapping[str, RepositorySpec]: ...

    def list_teams(self) -> Mapping[str, TeamSpec]: ...

    def list_repository_collaborators(self) -> Mapping[str, Mapping[str, CollaboratorSpec]]: ...

    def list_team_members(self) -> Mapping[str, Mapping[str, MemberSpec]]: ...

    def list_team_repositories(self) -> Mapping[str, Mapping[str, TeamRepositorySpec]]: ...


__all__ = ["DeclarationSource"]
