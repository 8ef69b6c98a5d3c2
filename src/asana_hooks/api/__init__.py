"""Asana API client and models."""

from asana_hooks.api.models import (
    Option,
    Project,
    Resource,
    Section,
    Story,
    Tag,
    Task,
    Team,
    User,
    Webhook,
    Workspace,
)
from asana_hooks.api.auth import AuthContext, AuthError, load_credentials
from asana_hooks.api.request import RequestBuilder, RequestDescriptor
from asana_hooks.api.transport import (
    APIError,
    HttpxTransport,
    NotFoundError,
    Transport,
    TransportError,
)
from asana_hooks.api.client import ResourceClient

__all__ = [
    "Option",
    "Project",
    "Resource",
    "Section",
    "Story",
    "Tag",
    "Task",
    "Team",
    "User",
    "Webhook",
    "Workspace",
    "AuthContext",
    "AuthError",
    "load_credentials",
    "RequestBuilder",
    "RequestDescriptor",
    "APIError",
    "HttpxTransport",
    "NotFoundError",
    "Transport",
    "TransportError",
    "ResourceClient",
]
