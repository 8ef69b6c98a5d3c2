"""Request composition for the Asana REST API."""

from dataclasses import dataclass, field
from typing import Any, Optional

from asana_hooks.api.auth import AuthContext
from asana_hooks.config.settings import DEFAULT_BASE_URL


@dataclass
class RequestDescriptor:
    """A fully composed request, ready for a transport to execute."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: Optional[dict[str, Any]] = None
    json: Any = None


class RequestBuilder:
    """Composes authenticated requests against the API base URL."""

    def __init__(self, auth: AuthContext, base_url: str = DEFAULT_BASE_URL):
        self.auth = auth
        self.base_url = base_url.rstrip("/")

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.auth.bearer_token()}",
        }

    def build(
        self,
        path: str,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> RequestDescriptor:
        """Build a request descriptor for ``path``.

        Args:
            path: Path relative to the API base URL, e.g. ``projects/123``.
            method: HTTP method.
            headers: Headers overriding or extending the defaults.
            params: Query parameters. ``None`` values are dropped.
            json: JSON body.

        Returns:
            The request descriptor.
        """
        merged = self.headers()
        if headers:
            merged.update(headers)

        query = None
        if params:
            query = {key: value for key, value in params.items() if value is not None}

        return RequestDescriptor(
            method=method.upper(),
            url=f"{self.base_url}/{path}",
            headers=merged,
            params=query or None,
            json=json,
        )
