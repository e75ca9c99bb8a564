"""Domain port definitions for adapters."""

from __future__ import annotations

from .declaration import DeclarationSource
from .remote import (
    AddCollaborator,
    AddMember,
    AddTeamMember,
    AddTeamRepository,
    CreateRepository,
    CreateTeam,
    DeleteRepository,
    DeleteTeam,
    OrganizationClient,
    RemoveCollaborator,
    RemoveMember,
    RemoveTeamMember,
    RemoveTeamRepository,
    UpdateCollaborator,
    UpdateMember,
    UpdateRepository,
    UpdateTeam,
    UpdateTeamRepository,
)

__all__ = [
    "AddCollaborator",
    "AddMember",
    "AddTeamMember",
    "AddTeamRepository",
    "CreateRepository",
    "CreateTeam",
    "DeclarationSource",
    "DeleteRepository",
    "DeleteTeam",
    "OrganizationClient",
    "RemoveCollaborator",
    "RemoveMember",
    "RemoveTeamMember",
    "RemoveTeamRepository",
    "UpdateCollaborator",
    "UpdateMember",
    "UpdateRepository",
    "UpdateTeam",
    "UpdateTeamRepository",
]
