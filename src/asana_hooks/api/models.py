"""Pydantic models for Asana API resources."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Resource(BaseModel):
    """Shape shared by every remote resource: a gid and a display name."""

    model_config = ConfigDict(extra="allow")

    gid: str
    name: Optional[str] = None
    resource_type: Optional[str] = None

    @field_validator("gid", mode="before")
    @classmethod
    def coerce_gid(cls, v: Any) -> Any:
        """Accept numeric gids, which older payloads sometimes contain."""
        if isinstance(v, int):
            return str(v)
        return v


class Workspace(Resource):
    """A workspace. Organizations are workspaces with ``is_organization`` set."""

    is_organization: bool = False


class Project(Resource):
    pass


class Section(Resource):
    pass


class Task(Resource):
    pass


class Story(Resource):
    text: Optional[str] = None


class Tag(Resource):
    pass


class Team(Resource):
    organization: Optional[Resource] = None


class User(Resource):
    email: Optional[str] = None


class Webhook(BaseModel):
    """A webhook subscription."""

    model_config = ConfigDict(extra="allow")

    gid: str
    resource: Optional[Resource] = None
    target: str = ""
    active: bool = False
    # Only known at creation time, from the handshake
    secret: Optional[str] = None


class Option(BaseModel):
    """A selectable ``(label, value)`` pair."""

    label: str
    value: str
