"""Dependent option resolution for pick-list fields."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence

from asana_hooks.api.client import ResourceClient
from asana_hooks.api.models import Option, Resource

Fetch = Callable[..., Awaitable[Sequence[Resource]]]


class UnknownOptionKind(KeyError):
    """Raised when no option source is registered for a kind."""

    pass


def to_options(resources: Iterable[Resource]) -> list[Option]:
    """Map resources to ``(label, value)`` options, preserving order.

    Resources without a name or gid cannot be selected and are skipped.
    """
    return [
        Option(label=resource.name, value=resource.gid)
        for resource in resources
        if resource.name is not None and resource.gid
    ]


@dataclass(frozen=True)
class OptionSource:
    """How to fetch one kind of option, and which parent values it needs."""

    parents: tuple[str, ...]
    fetch: Fetch


async def _workspaces(client: ResourceClient) -> Sequence[Resource]:
    return await client.get_workspaces()


async def _organizations(client: ResourceClient) -> Sequence[Resource]:
    return await client.get_organizations()


async def _projects(client: ResourceClient, workspace: Optional[str] = None) -> Sequence[Resource]:
    return await client.get_projects(workspace)


async def _tasks(client: ResourceClient, project: Optional[str] = None) -> Sequence[Resource]:
    return await client.get_tasks({"project": project})


async def _sections(client: ResourceClient, project: Optional[str] = None) -> Sequence[Resource]:
    return await client.get_sections(project)


async def _tags(client: ResourceClient) -> Sequence[Resource]:
    return await client.get_tags()


async def _teams(client: ResourceClient, organization: Optional[str] = None) -> Sequence[Resource]:
    return await client.get_teams(organization)


async def _users(
    client: ResourceClient,
    workspace: Optional[str] = None,
    team: Optional[str] = None,
) -> Sequence[Resource]:
    return await client.get_users(workspace=workspace, team=team)


DEFAULT_SOURCES: dict[str, OptionSource] = {
    "workspaces": OptionSource((), _workspaces),
    "organizations": OptionSource((), _organizations),
    "projects": OptionSource(("workspace",), _projects),
    "tasks": OptionSource(("project",), _tasks),
    "sections": OptionSource(("project",), _sections),
    "tags": OptionSource((), _tags),
    "teams": OptionSource(("organization",), _teams),
    "users": OptionSource(("workspace", "team"), _users),
}


class OptionResolver:
    """Resolves option kinds to pick-list options through a ``ResourceClient``.

    Each call re-queries the remote API with the parent values it is given;
    earlier results are never reused.
    """

    def __init__(
        self,
        client: ResourceClient,
        sources: Optional[dict[str, OptionSource]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.client = client
        self.sources = dict(DEFAULT_SOURCES if sources is None else sources)
        self.logger = logger or logging.getLogger(__name__)

    def kinds(self) -> list[str]:
        return list(self.sources)

    def parents_of(self, kind: str) -> tuple[str, ...]:
        return self._source(kind).parents

    def _source(self, kind: str) -> OptionSource:
        try:
            return self.sources[kind]
        except KeyError:
            raise UnknownOptionKind(kind) from None

    async def resolve(self, kind: str, **parents: Any) -> list[Option]:
        """Fetch and map the options of ``kind``.

        Args:
            kind: Option kind, e.g. ``"sections"``.
            **parents: Values of the kind's declared parent fields. Missing
                parents are forwarded as ``None``; the remote API reports
                any resulting error.

        Returns:
            The options, in remote order.

        Raises:
            UnknownOptionKind: If ``kind`` is not registered.
            TypeError: If a parent not declared by ``kind`` is given.
        """
        source = self._source(kind)
        unexpected = set(parents) - set(source.parents)
        if unexpected:
            raise TypeError(f"Unexpected parents for {kind!r}: {sorted(unexpected)}")

        self.logger.debug(f"Resolving {kind} options with {parents}")
        resources = await source.fetch(self.client, **parents)
        return to_options(resources)
