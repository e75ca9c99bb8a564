"""HTTP client for the GitHub organization APIs."""

from __future__ import annotations

import asyncio
import dataclasses
import re
import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ValidationError

from orgsync.adapters.http_resilience import (
    ResilienceConfig,
    ResilientClient,
    RetryablePayloadError,
)
from orgsync.config.sync import DEFAULT_PAGE_SIZE
from orgsync.domain.errors import RemoteError
from orgsync.domain.model import MemberRole, RemoteRepository, RemoteTeam

from .schema import (
    CollaboratorPayload,
    ErrorResponse,
    InvitationPayload,
    MembersResponse,
    RepositoryPayload,
    TeamMemberPayload,
    TeamPayload,
    TeamRepositoryPayload,
)
from .translator import (
    parse_member,
    parse_repository,
    parse_team,
    parse_team_member,
    parse_team_repository,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from orgsync.config.github import GitHubConfig
    from orgsync.domain.model import RemoteMember, RemoteTeamMember, RemoteTeamRepository
    from orgsync.domain.ports.remote import (
        AddCollaborator,
        AddMember,
        AddTeamMember,
        AddTeamRepository,
        CreateRepository,
        CreateTeam,
        DeleteRepository,
        DeleteTeam,
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

log = getLogger(__name__)

_MEMBERS_QUERY = """
query listOrganizationMember($organization: String!, $cursor: String) {
  organization(login: $organization) {
    membersWithRole(first: 100, after: $cursor) {
      edges {
        role
        node {
          login
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

# the invitation API names the plain member role differently
_INVITATION_ROLES = {
    MemberRole.ADMIN: "admin",
    MemberRole.MEMBER: "direct_member",
}

_SECONDARY_RATE_LIMIT = re.compile(r"secondary rate limit", re.IGNORECASE)

_QUOTA_RETRIED = "orgsync.quota_retried"


class GitHubAPIError(RemoteError):
    """Raised when a GitHub call fails or returns an unexpected payload."""


@dataclass(frozen=True, slots=True)
class PlannedWrite:
    """A write that dry-run mode logged instead of sending."""

    operation: str
    request: object


@dataclass(slots=True)
class _PendingInvitations:
    logins: set[str]
    emails: set[str]


def _is_quota_exhausted(response: httpx.Response) -> bool:
    return (
        response.status_code in {403, 429}
        and response.headers.get("x-ratelimit-remaining") == "0"
    )


async def retry_after_quota_reset(request: httpx.Request, response: httpx.Response) -> None:
    """Response check asking for one more attempt once an exhausted quota resets.

    Sleeps until ``x-ratelimit-reset`` and raises :class:`RetryablePayloadError`.
    A request that already waited once is passed through, so its error surfaces.
    """

    if not _is_quota_exhausted(response) or request.extensions.get(_QUOTA_RETRIED):
        return
    request.extensions[_QUOTA_RETRIED] = True
    reset = response.headers.get("x-ratelimit-reset")
    delay = max(0.0, float(reset) - time.time()) if reset and reset.isdigit() else 0.0
    log.warning(
        "request quota exhausted, retrying after reset: %s %s, wait=%.0fs",
        request.method,
        request.url,
        delay,
    )
    await response.aclose()
    await asyncio.sleep(delay)
    raise RetryablePayloadError(
        f"request quota exhausted: {request.method} {request.url}", response=response
    )


async def log_rate_limit(response: httpx.Response) -> None:
    """Response hook warning about exhausted or secondary rate limits.

    A secondary limit is only reported, never retried.
    """

    if response.status_code not in {403, 429}:
        return
    request = response.request
    if _is_quota_exhausted(response):
        log.warning(
            "request quota still exhausted: %s %s, reset=%s",
            request.method,
            request.url,
            response.headers.get("x-ratelimit-reset"),
        )
        return
    await response.aread()
    if "retry-after" in response.headers or _SECONDARY_RATE_LIMIT.search(response.text):
        log.warning("secondary rate limit detected: %s %s", request.method, request.url)


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _without_none(**values: object) -> dict[str, object]:
    return {key: value for key, value in values.items() if value is not None}


class GitHubClient:
    """Organization client over the GitHub REST and GraphQL APIs.

    In dry-run mode reads still go to GitHub, while every write is logged and
    recorded on :attr:`planned_writes` instead of being sent. Teams and
    repositories that a dry run would have created or deleted are reflected in
    later listings, so dependent reconcilers see what a real run would see.
    """

    def __init__(
        self,
        config: GitHubConfig,
        *,
        dry_run: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self.organization = config.organization
        self.dry_run = dry_run
        self.page_size = page_size
        self.planned_writes: list[PlannedWrite] = []

        resilience = dataclasses.replace(
            config.resilience,
            response_hooks=(*config.resilience.response_hooks, log_rate_limit),
            response_checks=(*config.resilience.response_checks, retry_after_quota_reset),
        )
        self._http = (client_factory or ResilientClient)(resilience)
        self._pending: _PendingInvitations | None = None

        self._dry_run_teams: dict[str, RemoteTeam] = {}
        self._dry_run_deleted_teams: set[str] = set()
        self._dry_run_repositories: dict[str, RemoteRepository] = {}
        self._dry_run_deleted_repositories: set[str] = set()
        # lower-cased logins
        self._dry_run_removed_members: set[str] = set()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # members

    async def list_members(self) -> list[RemoteMember]:
        members: list[RemoteMember] = []
        cursor: str | None = None
        while True:
            response = await self._request(
                "POST",
                "/graphql",
                json={
                    "query": _MEMBERS_QUERY,
                    "variables": {"organization": self.organization, "cursor": cursor},
                },
            )
            payload = _validate(MembersResponse, response.json())
            if payload.errors or payload.data is None:
                messages = "; ".join(error.message for error in payload.errors or ())
                raise GitHubAPIError(f"GraphQL query for members failed: {messages}")
            connection = payload.data.organization.members_with_role
            members.extend(_translate(parse_member, edge) for edge in connection.edges)
            if not connection.page_info.has_next_page:
                break
            cursor = connection.page_info.end_cursor

        log.debug("organization members: %s", members)
        log.info("listed organization members: count=%s", len(members))
        return members

    async def add_member(self, request: AddMember) -> None:
        pending = await self._pending_invitations()
        if request.login.lower() in pending.logins or request.email.lower() in pending.emails:
            log.info("already invited to organization: login=%s", request.login)
            return
        if self._skip_write("invite member", request):
            return

        await self._request(
            "POST",
            f"/orgs/{self.organization}/invitations",
            json={
                "email": request.email,
                "role": _INVITATION_ROLES[request.role],
                "team_ids": list(request.team_ids),
            },
        )
        log.info("invited to organization: login=%s, role=%s", request.login, request.role)

    async def update_member(self, request: UpdateMember) -> None:
        if self._skip_write("update member", request):
            return
        await self._request(
            "PUT",
            f"/orgs/{self.organization}/memberships/{request.login}",
            json={"role": str(request.role)},
        )
        log.info("updated member: login=%s, role=%s", request.login, request.role)

    async def remove_member(self, request: RemoveMember) -> None:
        if self._skip_write("remove member", request):
            self._dry_run_removed_members.add(request.login.lower())
            return
        await self._request("DELETE", f"/orgs/{self.organization}/memberships/{request.login}")
        log.info("removed member: login=%s", request.login)

    async def _pending_invitations(self) -> _PendingInvitations:
        if self._pending is None:
            items = await self._paginate(f"/orgs/{self.organization}/invitations")
            invitations = [_validate(InvitationPayload, item) for item in items]
            self._pending = _PendingInvitations(
                logins={item.login.lower() for item in invitations if item.login},
                emails={item.email.lower() for item in invitations if item.email},
            )
            log.debug("pending invitations: %s", invitations)
            log.info("listed pending invitations: count=%s", len(invitations))
        return self._pending

    # repositories

    async def list_repositories(self, *, with_collaborators: bool = False) -> list[RemoteRepository]:
        items = await self._paginate(f"/orgs/{self.organization}/repos")
        repositories: list[RemoteRepository] = []
        for item in items:
            payload = _validate(RepositoryPayload, item)
            if payload.name in self._dry_run_deleted_repositories:
                continue
            collaborators: list[CollaboratorPayload] = []
            if with_collaborators:
                collaborators = await self._list_collaborators(payload.name)
            repositories.append(_translate(parse_repository, payload, collaborators))
        repositories.extend(self._dry_run_repositories.values())

        log.debug("organization repositories: %s", repositories)
        log.info("listed organization repositories: count=%s", len(repositories))
        return repositories

    async def _list_collaborators(self, repository: str) -> list[CollaboratorPayload]:
        items = await self._paginate(
            f"/repos/{self.organization}/{repository}/collaborators",
            params={"affiliation": "direct"},
        )
        collaborators = [
            collaborator
            for collaborator in (_validate(CollaboratorPayload, item) for item in items)
            if collaborator.login.lower() not in self._dry_run_removed_members
        ]
        log.debug("direct collaborators: repository=%s, count=%s", repository, len(collaborators))
        return collaborators

    async def create_repository(self, request: CreateRepository) -> None:
        if self._skip_write("create repository", request):
            self._dry_run_repositories[request.name] = RemoteRepository(
                id=0,
                name=request.name,
                description=request.description,
                visibility=request.visibility,
            )
            return
        await self._request(
            "POST",
            f"/orgs/{self.organization}/repos",
            json=_without_none(
                name=request.name,
                description=request.description,
                private=request.visibility == "private",
            ),
        )
        log.info("created repository: name=%s", request.name)

    async def update_repository(self, request: UpdateRepository) -> None:
        if self._skip_write("update repository", request):
            return
        await self._request(
            "PATCH",
            f"/repos/{self.organization}/{request.name}",
            json={
                "description": request.description or "",
                "private": request.visibility == "private",
            },
        )
        log.info("updated repository: name=%s", request.name)

    async def delete_repository(self, request: DeleteRepository) -> None:
        if self._skip_write("delete repository", request):
            self._dry_run_deleted_repositories.add(request.name)
            return
        await self._request("DELETE", f"/repos/{self.organization}/{request.name}")
        log.info("deleted repository: name=%s", request.name)

    # repository collaborators

    async def add_collaborator(self, request: AddCollaborator) -> None:
        await self._put_collaborator("add", request)

    async def update_collaborator(self, request: UpdateCollaborator) -> None:
        await self._put_collaborator("update", request)

    async def _put_collaborator(self, op: str, request: AddCollaborator) -> None:
        if self._skip_write(f"{op} collaborator", request):
            return
        await self._request(
            "PUT",
            f"/repos/{self.organization}/{request.repository}/collaborators/{request.login}",
            json={"permission": str(request.permission)},
        )
        log.info(
            "%s collaborator: repository=%s, login=%s, permission=%s",
            op,
            request.repository,
            request.login,
            request.permission,
        )

    async def remove_collaborator(self, request: RemoveCollaborator) -> None:
        if self._skip_write("remove collaborator", request):
            return
        await self._request(
            "DELETE",
            f"/repos/{self.organization}/{request.repository}/collaborators/{request.login}",
        )
        log.info("removed collaborator: repository=%s, login=%s", request.repository, request.login)

    # teams

    async def list_teams(self) -> list[RemoteTeam]:
        items = await self._paginate(f"/orgs/{self.organization}/teams")
        teams = [_translate(parse_team, _validate(TeamPayload, item)) for item in items]
        teams = [team for team in teams if team.slug not in self._dry_run_deleted_teams]
        teams.extend(self._dry_run_teams.values())

        log.debug("organization teams: %s", [(team.id, team.name, team.slug) for team in teams])
        log.info("listed organization teams: count=%s", len(teams))
        return teams

    async def create_team(self, request: CreateTeam) -> None:
        if self._skip_write("create team", request):
            self._dry_run_teams[request.name] = RemoteTeam(
                id=0,
                slug=_slugify(request.name),
                name=request.name,
                description=request.description,
                privacy=request.privacy,
            )
            return
        await self._request(
            "POST",
            f"/orgs/{self.organization}/teams",
            json=_without_none(
                name=request.name,
                description=request.description,
                privacy=request.privacy,
                parent_team_id=request.parent_team_id,
            ),
        )
        log.info("created team: name=%s", request.name)

    async def update_team(self, request: UpdateTeam) -> None:
        if self._skip_write("update team", request):
            return
        await self._request(
            "PATCH",
            f"/orgs/{self.organization}/teams/{request.slug}",
            json=_without_none(
                name=request.name,
                description=request.description,
                privacy=request.privacy,
                parent_team_id=request.parent_team_id,
            ),
        )
        log.info("updated team: slug=%s", request.slug)

    async def delete_team(self, request: DeleteTeam) -> None:
        if self._skip_write("delete team", request):
            self._dry_run_deleted_teams.add(request.slug)
            return
        await self._request("DELETE", f"/orgs/{self.organization}/teams/{request.slug}")
        log.info("deleted team: slug=%s", request.slug)

    # team repositories

    async def list_team_repositories(self, slug: str) -> list[RemoteTeamRepository]:
        if self._is_dry_run_team(slug):
            return []
        items = await self._paginate(f"/orgs/{self.organization}/teams/{slug}/repos")
        repositories = [
            repository
            for repository in (
                _translate(parse_team_repository, _validate(TeamRepositoryPayload, item))
                for item in items
            )
            if repository.name not in self._dry_run_deleted_repositories
        ]
        log.debug("team repositories: team=%s, repositories=%s", slug, repositories)
        log.info("listed team repositories: team=%s, count=%s", slug, len(repositories))
        return repositories

    async def add_team_repository(self, request: AddTeamRepository) -> None:
        await self._put_team_repository("add", request)

    async def update_team_repository(self, request: UpdateTeamRepository) -> None:
        await self._put_team_repository("update", request)

    async def _put_team_repository(self, op: str, request: AddTeamRepository) -> None:
        if self._skip_write(f"{op} team repository", request):
            return
        await self._request(
            "PUT",
            f"/orgs/{self.organization}/teams/{request.slug}"
            f"/repos/{self.organization}/{request.repository}",
            json=_without_none(permission=request.permission),
        )
        log.info(
            "%s team repository: team=%s, repository=%s, permission=%s",
            op,
            request.slug,
            request.repository,
            request.permission,
        )

    async def remove_team_repository(self, request: RemoveTeamRepository) -> None:
        if self._skip_write("remove team repository", request):
            return
        await self._request(
            "DELETE",
            f"/orgs/{self.organization}/teams/{request.slug}"
            f"/repos/{self.organization}/{request.repository}",
        )
        log.info("removed team repository: team=%s, repository=%s", request.slug, request.repository)

    # team members

    async def list_team_members(self, slug: str) -> list[RemoteTeamMember]:
        if self._is_dry_run_team(slug):
            return []
        items = await self._paginate(f"/orgs/{self.organization}/teams/{slug}/members")
        members = [
            member
            for member in (
                _translate(parse_team_member, _validate(TeamMemberPayload, item)) for item in items
            )
            if member.login.lower() not in self._dry_run_removed_members
        ]
        log.debug("team members: team=%s, members=%s", slug, members)
        log.info("listed team members: team=%s, count=%s", slug, len(members))
        return members

    async def add_team_member(self, request: AddTeamMember) -> None:
        if self._skip_write("add team member", request):
            return
        await self._request(
            "PUT",
            f"/orgs/{self.organization}/teams/{request.slug}/memberships/{request.login}",
            json={"role": "member"},
        )
        log.info("added team member: team=%s, login=%s", request.slug, request.login)

    async def remove_team_member(self, request: RemoveTeamMember) -> None:
        if self._skip_write("remove team member", request):
            return
        await self._request(
            "DELETE",
            f"/orgs/{self.organization}/teams/{request.slug}/memberships/{request.login}",
        )
        log.info("removed team member: team=%s, login=%s", request.slug, request.login)

    # plumbing

    def _skip_write(self, operation: str, request: object) -> bool:
        if not self.dry_run:
            return False
        log.info("dry-run: %s: %s", operation, request)
        self.planned_writes.append(PlannedWrite(operation=operation, request=request))
        return True

    def _is_dry_run_team(self, slug: str) -> bool:
        return any(team.slug == slug for team in self._dry_run_teams.values())

    async def _paginate(
        self,
        path: str,
        *,
        params: dict[str, str | int] | None = None,
    ) -> list[object]:
        items: list[object] = []
        url: str | None = path
        query: dict[str, str | int] | None = {**(params or {}), "per_page": self.page_size}
        while url is not None:
            response = await self._request("GET", url, params=query)
            payload = response.json()
            if not isinstance(payload, list):
                raise GitHubAPIError(f"Unexpected GitHub response payload for {path}")
            items.extend(payload)
            url = response.links.get("next", {}).get("url")
            # the next link already carries the query string
            query = None
        return items

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str | int] | None = None,
        json: object = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, url, params=params, json=json)
        except RetryablePayloadError as exc:
            status_code = exc.response.status_code
            raise GitHubAPIError(f"{method} {url} failed: {exc}", status_code=status_code) from exc
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"{method} {url} failed: {exc}") from exc

        if response.is_error:
            message = response.reason_phrase
            try:
                message = ErrorResponse.model_validate(response.json()).message
            except (ValueError, ValidationError):
                pass
            log.error("GitHub API error %s: %s %s: %s", response.status_code, method, url, message)
            raise GitHubAPIError(
                f"{method} {url} returned {response.status_code}: {message}",
                status_code=response.status_code,
            )
        return response


def _validate[M: BaseModel](model: type[M], payload: object) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise GitHubAPIError(f"Unexpected GitHub response payload: {exc}") from exc


def _translate[T](func: Callable[..., T], *args: Any) -> T:
    try:
        return func(*args)
    except ValueError as exc:
        raise GitHubAPIError(str(exc)) from exc
