from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from orgsync.adapters.declaration import parse_declaration, read_declaration_file
from orgsync.config.errors import DeclarationError
from orgsync.domain.model import MemberRole, RepositoryVisibility, TeamPrivacy

if TYPE_CHECKING:
    from pathlib import Path

ORGANIZATION_YAML = """
members:
  - login: alice
    email: alice@example.com
    role: admin
    teams: [Core]
    repositories:
      - name: api
        permission: admin
    meta:
      slack: "@alice"
outsideCollaborators:
  - login: ext
    repositories:
      - name: docs
        permission: pull
teams:
  - name: Core
    description: Core maintainers
    visibility: closed
    repositories:
      - name: api
        permission: push
repositories:
  - name: api
    visibility: private
  - name: docs
    description: Documentation
    visibility: public
"""


def test_parse_declaration_reads_all_sections() -> None:
    declaration = parse_declaration(ORGANIZATION_YAML)

    alice = declaration.members[0]
    assert alice.role is MemberRole.ADMIN
    assert alice.teams == ("Core",)
    assert alice.meta == {"slack": "@alice"}
    assert declaration.outside_collaborators[0].login == "ext"
    assert declaration.teams[0].visibility is TeamPrivacy.CLOSED
    assert [repo.visibility for repo in declaration.repositories] == [
        RepositoryVisibility.PRIVATE,
        RepositoryVisibility.PUBLIC,
    ]


@pytest.mark.parametrize("content", ["", "members:\nteams: ~\n"])
def test_parse_declaration_treats_blank_sections_as_empty(content: str) -> None:
    declaration = parse_declaration(content)

    assert declaration.members == ()
    assert declaration.teams == ()
    assert declaration.repositories == ()


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("members: [", "Invalid YAML"),
        ("- just\n- a list\n", "Expected a mapping"),
        ("members:\n  - login: a\n    email: a@x\n    role: owner\n", "Invalid declaration"),
        ("unknown: 1\n", "Invalid declaration"),
    ],
)
def test_parse_declaration_rejects_invalid_documents(content: str, message: str) -> None:
    with pytest.raises(DeclarationError, match=message):
        parse_declaration(content, source="org.yml")


def test_read_declaration_file(tmp_path: Path) -> None:
    path = tmp_path / "org.yml"
    path.write_text(ORGANIZATION_YAML, encoding="utf-8")

    declaration = read_declaration_file(path)

    assert [team.name for team in declaration.teams] == ["Core"]


def test_read_declaration_file_missing(tmp_path: Path) -> None:
    with pytest.raises(DeclarationError, match="Cannot read declaration file"):
        read_declaration_file(tmp_path / "missing.yml")
