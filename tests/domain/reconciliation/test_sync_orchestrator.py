from __future__ import annotations

import asyncio

import pytest

from orgsync.domain.errors import PreconditionError, RemoteError
from orgsync.domain.model import MemberRole, RemoteMember, RemoteTeamMember
from orgsync.domain.reconciliation import SyncOrchestrator, SyncPhase
from tests.helpers.organization import (
    FakeOrganizationClient,
    declaration_from,
    remote_repository,
    remote_team,
)

DECLARATION = {
    "teams": [
        {
            "name": "Core",
            "visibility": "closed",
            "repositories": [{"name": "api", "permission": "push"}],
        }
    ],
    "members": [
        {
            "login": "alice",
            "email": "alice@example.com",
            "role": "admin",
            "teams": ["Core"],
            "repositories": [{"name": "api", "permission": "admin"}],
        }
    ],
    "repositories": [{"name": "api", "visibility": "private"}],
}


def _snapshot() -> FakeOrganizationClient:
    return FakeOrganizationClient(
        members=[
            RemoteMember(login="alice", role=MemberRole.MEMBER),
            RemoteMember(login="bob", role=MemberRole.MEMBER),
        ],
        repositories=[remote_repository(1, "api"), remote_repository(2, "old")],
        teams=[remote_team(7, "Core"), remote_team(8, "Stale")],
        team_members={"stale": [RemoteTeamMember(login="bob")]},
    )


@pytest.mark.parametrize(
    "operation",
    ["sync_members", "sync_team_members", "sync_team_repositories"],
)
def test_gated_reconcilers_fail_before_teams_are_synced(operation: str) -> None:
    client = _snapshot()
    orchestrator = SyncOrchestrator(client, declaration_from(DECLARATION))

    with pytest.raises(PreconditionError, match="teams are not synced"):
        asyncio.run(getattr(orchestrator, operation)())

    assert client.writes == []
    assert client.reads == []
    assert orchestrator.phase is SyncPhase.TEAMS_PENDING


def test_ungated_reconcilers_run_before_teams() -> None:
    client = _snapshot()
    orchestrator = SyncOrchestrator(client, declaration_from(DECLARATION))

    changes = asyncio.run(orchestrator.sync_repositories())

    assert [repo.name for repo in changes.sub] == ["old"]
    assert client.operations == ["delete_repository"]


def test_sync_all_runs_reconcilers_in_dependency_order() -> None:
    client = _snapshot()
    orchestrator = SyncOrchestrator(client, declaration_from(DECLARATION))

    report = asyncio.run(orchestrator.sync_all())

    assert client.operations == [
        "delete_team",
        "remove_member",
        "update_member",
        "delete_repository",
        "add_collaborator",
        "add_team_member",
        "remove_team_member",
        "add_team_repository",
    ]
    assert orchestrator.phase is SyncPhase.TEAMS_SYNCED
    assert report is orchestrator.report
    assert report.total_changes == len(client.writes)
    assert [scope.name for scope in report.team_members] == ["Core", "Stale"]


def test_sync_all_keeps_partial_report_when_a_write_fails() -> None:
    client = _snapshot()
    client.fail_on = "delete_repository"
    orchestrator = SyncOrchestrator(client, declaration_from(DECLARATION))

    with pytest.raises(RemoteError):
        asyncio.run(orchestrator.sync_all())

    report = orchestrator.report
    assert report.teams is not None
    assert report.members is not None
    assert report.repositories is not None
    assert [repo.name for repo in report.repositories.sub] == ["old"]
    assert report.repository_collaborators == []
    assert client.operations == ["delete_team", "remove_member", "update_member"]


def test_sync_all_on_converged_organization_issues_no_writes() -> None:
    declaration = declaration_from(
        {
            "teams": [{"name": "Core", "visibility": "closed"}],
            "members": [
                {"login": "alice", "email": "alice@example.com", "role": "admin", "teams": ["Core"]}
            ],
        }
    )
    client = FakeOrganizationClient(
        members=[RemoteMember(login="alice", role=MemberRole.ADMIN)],
        teams=[remote_team(7, "Core")],
        team_members={"core": [RemoteTeamMember(login="alice")]},
    )

    report = asyncio.run(SyncOrchestrator(client, declaration).sync_all())

    assert client.writes == []
    assert report.total_changes == 0
    assert report.to_dict()["team_members"] == []
