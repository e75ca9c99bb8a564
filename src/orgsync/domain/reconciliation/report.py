"""Structured results of a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter

from orgsync.domain.model import (  # noqa: TC001  # resolved at runtime by pydantic
    CollaboratorSpec,
    MemberSpec,
    RemoteCollaborator,
    RemoteMember,
    RemoteRepository,
    RemoteTeam,
    RemoteTeamMember,
    RemoteTeamRepository,
    RepositorySpec,
    TeamRepositorySpec,
    TeamSpec,
)

from .diff import DiffResult  # noqa: TC001


@dataclass(slots=True)
class ResourceChanges[D, C]:
    """Actionable partitions of one diff; ``eq`` is dropped."""

    add: list[D] = field(default_factory=list[D])
    sub: list[C] = field(default_factory=list[C])
    not_eq: list[tuple[D, C]] = field(default_factory=list[tuple[D, C]])

    @classmethod
    def from_diff(cls, result: DiffResult[D, C]) -> ResourceChanges[D, C]:
        return cls(add=list(result.add), sub=list(result.sub), not_eq=list(result.not_eq))

    @property
    def total(self) -> int:
        return len(self.add) + len(self.sub) + len(self.not_eq)


@dataclass(slots=True)
class ScopedChanges[D, C](ResourceChanges[D, C]):
    """Changes for one parent resource, such as a repository or a team."""

    name: str = ""

    @classmethod
    def for_scope(cls, name: str, result: DiffResult[D, C]) -> ScopedChanges[D, C]:
        return cls(
            name=name,
            add=list(result.add),
            sub=list(result.sub),
            not_eq=list(result.not_eq),
        )


type MemberChanges = ResourceChanges[MemberSpec, RemoteMember]
type RepositoryChanges = ResourceChanges[RepositorySpec, RemoteRepository]
type TeamChanges = ResourceChanges[TeamSpec, RemoteTeam]
type CollaboratorChanges = ScopedChanges[CollaboratorSpec, RemoteCollaborator]
type TeamMemberChanges = ScopedChanges[MemberSpec, RemoteTeamMember]
type TeamRepositoryChanges = ScopedChanges[TeamRepositorySpec, RemoteTeamRepository]


@dataclass(slots=True)
class AggregateReport:
    """Combined output of all reconcilers, filled in as each one computes its diff."""

    teams: TeamChanges | None = None
    members: MemberChanges | None = None
    repositories: RepositoryChanges | None = None
    repository_collaborators: list[CollaboratorChanges] = field(
        default_factory=list["CollaboratorChanges"]
    )
    team_members: list[TeamMemberChanges] = field(default_factory=list["TeamMemberChanges"])
    team_repositories: list[TeamRepositoryChanges] = field(
        default_factory=list["TeamRepositoryChanges"]
    )

    @property
    def total_changes(self) -> int:
        flat = [self.teams, self.members, self.repositories]
        total = sum(changes.total for changes in flat if changes is not None)
        scoped = (*self.repository_collaborators, *self.team_members, *self.team_repositories)
        return total + sum(changes.total for changes in scoped)

    def to_dict(self) -> dict[str, Any]:
        return _REPORT_ADAPTER.dump_python(self, mode="json")

    def to_json(self, *, indent: int | None = None) -> str:
        return _REPORT_ADAPTER.dump_json(self, indent=indent).decode("utf-8")


_REPORT_ADAPTER: TypeAdapter[AggregateReport] = TypeAdapter(AggregateReport)
