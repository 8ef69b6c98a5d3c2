"""HTTP transport executing composed requests."""

import logging
import ssl
from typing import Any, Awaitable, Callable, Optional

import certifi
import httpx

from asana_hooks.api.request import RequestDescriptor

# Any async callable that executes a request and returns the parsed JSON body
Transport = Callable[[RequestDescriptor], Awaitable[Any]]


def _get_ssl_context() -> ssl.SSLContext:
    """Create an SSL context using certifi's CA bundle."""
    return ssl.create_default_context(cafile=certifi.where())


class APIError(Exception):
    """Raised when an API request fails."""

    pass


class TransportError(APIError):
    """Raised for a non-2xx response or a failed request."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotFoundError(TransportError):
    """Raised when the remote API answers 404."""

    pass


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpxTransport:
    """Default transport built on ``httpx.AsyncClient``."""

    def __init__(
        self,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds (ignored when ``client`` is given).
            client: Optional pre-configured client, owned by the caller.
            logger: Optional logger for debug output.
        """
        self.timeout = timeout
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    async def __call__(self, request: RequestDescriptor) -> Any:
        if self.client is not None:
            return await self._send(self.client, request)

        async with httpx.AsyncClient(timeout=self.timeout, verify=_get_ssl_context()) as client:
            return await self._send(client, request)

    async def _send(self, client: httpx.AsyncClient, request: RequestDescriptor) -> Any:
        self.logger.debug(f"{request.method} {request.url} params={request.params}")

        try:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                params=request.params,
                json=request.json,
            )
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body = _error_body(e.response)
            error_cls = NotFoundError if status == 404 else TransportError
            raise error_cls(
                f"API request failed: status={status}, url={request.url}",
                status_code=status,
                body=body,
            ) from e

        except httpx.RequestError as e:
            raise TransportError(f"API request failed: {e}") from e

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Failed to parse API response: {e}",
                status_code=response.status_code,
                body=response.text[:200],
            ) from e
