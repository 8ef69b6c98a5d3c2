"""Webhook creation handshake.

Creating a webhook makes the remote service call the target URL with an
``X-Hook-Secret`` header before it answers the creation request. The target
must echo the header back. This registry links that inbound callback to the
pending creation call waiting for it.
"""

import asyncio
import logging
from typing import Mapping, Optional

from asana_hooks.webhooks.models import HOOK_SECRET_HEADER, get_header


class HandshakeError(Exception):
    """Raised when a handshake callback cannot be accepted."""

    pass


class HandshakeRegistry:
    """Pending webhook handshakes, keyed by target URL."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._pending: dict[str, asyncio.Future] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, target: str) -> asyncio.Lock:
        """Return the lock serializing webhook creations for ``target``."""
        if target not in self._locks:
            self._locks[target] = asyncio.Lock()
        return self._locks[target]

    def expect(self, target: str) -> asyncio.Future:
        """Register a pending handshake for ``target``.

        Must be called from the event loop, before the creation request is
        sent. The returned future resolves to the negotiated secret.
        """
        if target in self._pending:
            raise HandshakeError(f"A webhook creation is already pending for {target}")

        future = asyncio.get_running_loop().create_future()
        self._pending[target] = future
        return future

    def accept(self, target: str, headers: Mapping[str, str]) -> dict[str, str]:
        """Accept a handshake callback from the remote service.

        Args:
            target: The URL the callback was delivered to.
            headers: The callback's request headers.

        Returns:
            Headers the host must send back in its 200 response.

        Raises:
            HandshakeError: If the secret header is missing or no creation is
                pending for ``target``.
        """
        try:
            secret = get_header(headers, HOOK_SECRET_HEADER)
        except UnicodeError as e:
            raise HandshakeError(f"Handshake for {target} has an unreadable header: {e}") from e
        if not secret:
            raise HandshakeError(f"Handshake for {target} has no {HOOK_SECRET_HEADER} header")

        future = self._pending.get(target)
        if future is None:
            raise HandshakeError(f"No webhook creation pending for {target}")

        if not future.done():
            future.set_result(secret)
        self.logger.debug(f"Accepted webhook handshake for {target}")

        return {HOOK_SECRET_HEADER: secret}

    def discard(self, target: str) -> None:
        future = self._pending.pop(target, None)
        if future is not None and not future.done():
            future.cancel()

    def pending(self) -> list[str]:
        return list(self._pending)
