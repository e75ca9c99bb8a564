"""Pydantic models describing the GitHub API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from orgsync.domain.model import TeamPrivacy  # noqa: TC001


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PermissionsPayload(GitHubBaseModel):
    admin: bool = False
    maintain: bool = False
    push: bool = False
    triage: bool = False
    pull: bool = False


class RepositoryPayload(GitHubBaseModel):
    id: int
    name: str
    description: str | None = None
    private: bool


class CollaboratorPayload(GitHubBaseModel):
    login: str
    permissions: PermissionsPayload | None = None


class TeamParentPayload(GitHubBaseModel):
    id: int
    slug: str
    name: str


class TeamPayload(GitHubBaseModel):
    id: int
    slug: str
    name: str
    description: str | None = None
    privacy: TeamPrivacy
    parent: TeamParentPayload | None = None


class TeamRepositoryPayload(GitHubBaseModel):
    id: int
    name: str
    permissions: PermissionsPayload | None = None


class TeamMemberPayload(GitHubBaseModel):
    login: str


class InvitationPayload(GitHubBaseModel):
    id: int
    login: str | None = None
    email: str | None = None
    role: str | None = None


class MemberNode(GitHubBaseModel):
    login: str


class MemberEdge(GitHubBaseModel):
    role: str
    node: MemberNode


class PageInfo(GitHubBaseModel):
    has_next_page: bool = Field(alias="hasNextPage")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class MembersWithRole(GitHubBaseModel):
    edges: list[MemberEdge]
    page_info: PageInfo = Field(alias="pageInfo")


class OrganizationMembers(GitHubBaseModel):
    members_with_role: MembersWithRole = Field(alias="membersWithRole")


class MembersData(GitHubBaseModel):
    organization: OrganizationMembers


class GraphQLError(GitHubBaseModel):
    message: str


class MembersResponse(GitHubBaseModel):
    data: MembersData | None = None
    errors: list[GraphQLError] | None = None


class ErrorResponse(GitHubBaseModel):
    message: str
    documentation_url: str | None = None
