"""Asana API client."""

import logging
from typing import Any, Iterable, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from asana_hooks.api.auth import AuthContext
from asana_hooks.api.models import (
    Project,
    Section,
    Story,
    Tag,
    Task,
    Team,
    User,
    Workspace,
)
from asana_hooks.api.request import RequestBuilder
from asana_hooks.api.transport import APIError, HttpxTransport, Transport
from asana_hooks.config.settings import DEFAULT_BASE_URL

M = TypeVar("M", bound=BaseModel)


class ResourceClient:
    """Typed fetch operations for each Asana resource kind.

    Every operation issues its requests one at a time and propagates
    ``TransportError`` from the transport unchanged.
    """

    def __init__(
        self,
        auth: AuthContext,
        transport: Optional[Transport] = None,
        base_url: str = DEFAULT_BASE_URL,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the client.

        Args:
            auth: Credentials used for every request.
            transport: Async callable executing requests. Defaults to
                ``HttpxTransport``.
            base_url: API base URL.
            logger: Optional logger for debug output.
        """
        self.auth = auth
        self.requests = RequestBuilder(auth, base_url=base_url)
        self.transport = transport or HttpxTransport()
        self.logger = logger or logging.getLogger(__name__)

    async def request(self, path: str, **options: Any) -> Any:
        """Execute a request and return the parsed response body."""
        return await self.transport(self.requests.build(path, **options))

    async def _data(self, path: str, **options: Any) -> Any:
        response = await self.request(path, **options)
        if not isinstance(response, dict):
            return None
        return response.get("data")

    async def _one(self, model: type[M], path: str, **options: Any) -> M:
        data = await self._data(path, **options)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise APIError(f"Failed to parse {path} response: {e}") from e

    async def _many(self, model: type[M], path: str, **options: Any) -> list[M]:
        data = await self._data(path, **options)
        if data is None:
            return []
        try:
            return [model.model_validate(item) for item in data]
        except (ValidationError, TypeError) as e:
            raise APIError(f"Failed to parse {path} response: {e}") from e

    # Workspaces and organizations

    async def get_workspace(self, workspace_id: str) -> Workspace:
        return await self._one(Workspace, f"workspaces/{workspace_id}")

    async def get_workspaces(self) -> list[Workspace]:
        return await self._many(Workspace, "workspaces")

    async def get_organizations(self) -> list[Workspace]:
        """Return the workspaces that are organizations.

        The list endpoint does not report ``is_organization``, so every
        workspace is fetched individually, in list order.
        """
        organizations: list[Workspace] = []
        workspaces = await self.get_workspaces()

        for workspace in workspaces:
            detail = await self.get_workspace(workspace.gid)
            if detail.is_organization:
                organizations.append(detail)

        self.logger.debug(
            f"Found {len(organizations)} organizations among {len(workspaces)} workspaces"
        )
        return organizations

    # Projects, sections, tasks

    async def get_project(self, project_id: str) -> Project:
        return await self._one(Project, f"projects/{project_id}")

    async def get_projects(
        self,
        workspace_id: Optional[str] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> list[Project]:
        """List projects, optionally filtered by workspace.

        Args:
            workspace_id: Workspace GID used as a server-side filter.
            params: Extra query parameters; they take precedence over
                ``workspace_id``.
        """
        query: dict[str, Any] = {"workspace": workspace_id}
        query.update(params or {})
        return await self._many(Project, "projects", params=query)

    async def get_sections(self, project_id: str) -> list[Section]:
        """List a project's sections. Empty when the response has no data."""
        return await self._many(Section, f"projects/{project_id}/sections")

    async def get_task(self, task_id: str) -> Task:
        return await self._one(Task, f"tasks/{task_id}")

    async def get_tasks(self, params: Optional[dict[str, Any]] = None) -> list[Task]:
        """List tasks matching server-side filters such as ``{"project": gid}``."""
        return await self._many(Task, "tasks", params=params)

    async def get_story(self, story_id: str) -> Story:
        return await self._one(Story, f"stories/{story_id}")

    # Tags, teams, users

    async def get_tag(self, tag_id: str) -> Tag:
        return await self._one(Tag, f"tags/{tag_id}")

    async def get_tags(self) -> list[Tag]:
        return await self._many(Tag, "tags")

    async def get_team(self, team_id: str) -> Team:
        return await self._one(Team, f"teams/{team_id}")

    async def get_teams(self, organizations: Union[str, Iterable[str], None]) -> list[Team]:
        """List the teams of one or more organizations.

        Args:
            organizations: An organization GID or a collection of them. Teams
                are organization-scoped, so plain workspace GIDs are rejected
                by the remote API.

        Returns:
            Teams of every organization, concatenated in input order.
        """
        if organizations is None or isinstance(organizations, str):
            organizations = [organizations]

        teams: list[Team] = []
        for organization_id in organizations:
            teams.extend(await self._many(Team, f"organizations/{organization_id}/teams"))
        return teams

    async def get_user(self, user_id: str) -> User:
        return await self._one(User, f"users/{user_id}")

    async def get_users(
        self,
        workspace: Optional[str] = None,
        team: Optional[str] = None,
    ) -> list[User]:
        return await self._many(User, "users", params={"workspace": workspace, "team": team})
