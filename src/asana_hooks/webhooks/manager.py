"""Webhook registration and removal."""

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from asana_hooks.api.auth import AuthContext
from asana_hooks.api.models import Webhook
from asana_hooks.api.request import RequestBuilder
from asana_hooks.api.transport import HttpxTransport, Transport, TransportError
from asana_hooks.config.settings import DEFAULT_BASE_URL, DEFAULT_HANDSHAKE_TIMEOUT
from asana_hooks.webhooks.handshake import HandshakeError, HandshakeRegistry
from asana_hooks.webhooks.models import WebhookResult


class WebhookManager:
    """Creates and deletes webhook subscriptions.

    Failures are logged and reported through ``WebhookResult``; neither
    operation raises for a remote error.
    """

    def __init__(
        self,
        auth: AuthContext,
        transport: Optional[Transport] = None,
        handshakes: Optional[HandshakeRegistry] = None,
        handshake_timeout: float = DEFAULT_HANDSHAKE_TIMEOUT,
        base_url: str = DEFAULT_BASE_URL,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the manager.

        Args:
            auth: Credentials used for every request.
            transport: Async callable executing requests.
            handshakes: Registry fed by the host's handshake endpoint. Without
                it, creation is reported as soon as the remote service accepts
                the request.
            handshake_timeout: Seconds to wait for the handshake callback.
            base_url: API base URL.
            logger: Optional logger for debug output.
        """
        self.requests = RequestBuilder(auth, base_url=base_url)
        self.transport = transport or HttpxTransport()
        self.handshakes = handshakes
        self.handshake_timeout = handshake_timeout
        self.logger = logger or logging.getLogger(__name__)

    async def create_hook(self, resource: str, target: str) -> WebhookResult:
        """Subscribe ``target`` to events on ``resource``.

        The remote service calls ``target`` during this request to exchange a
        secret. When a handshake registry is configured, success is only
        reported once that callback has been accepted, and creations sharing
        a target run one after another so each handshake reaches its caller.

        Args:
            resource: GID of the resource to watch.
            target: URL receiving the handshake and event deliveries.

        Returns:
            WebhookResult carrying the created webhook on success.
        """
        if self.handshakes is None:
            return await self._create(resource, target, waiter=None)

        async with self.handshakes.lock(target):
            try:
                waiter = self.handshakes.expect(target)
            except HandshakeError as e:
                self.logger.warning(f"Webhook creation for {resource} not started: {e}")
                return WebhookResult(success=False, error_message=str(e))

            try:
                return await self._create(resource, target, waiter)
            finally:
                self.handshakes.discard(target)

    async def _create(
        self,
        resource: str,
        target: str,
        waiter: Optional[asyncio.Future],
    ) -> WebhookResult:
        request = self.requests.build(
            "webhooks",
            method="POST",
            json={"data": {"resource": resource, "target": target}},
        )
        try:
            response = await self.transport(request)
        except TransportError as e:
            error_msg = f"Webhook creation for {resource} failed: {e}"
            self.logger.warning(f"{error_msg} body={e.body}")
            return WebhookResult(
                success=False,
                status_code=e.status_code,
                error_message=error_msg,
            )

        data = response.get("data") if isinstance(response, dict) else None
        try:
            webhook = Webhook.model_validate(data)
        except ValidationError as e:
            error_msg = f"Webhook creation for {resource} returned an invalid body: {e}"
            self.logger.warning(error_msg)
            return WebhookResult(success=False, error_message=error_msg)

        if waiter is not None:
            try:
                webhook.secret = await asyncio.wait_for(waiter, self.handshake_timeout)
            except asyncio.TimeoutError:
                error_msg = (
                    f"Webhook {webhook.gid} created but no handshake reached {target} "
                    f"within {self.handshake_timeout}s"
                )
                self.logger.warning(error_msg)
                return WebhookResult(
                    success=False,
                    hook_id=webhook.gid,
                    webhook=webhook,
                    error_message=error_msg,
                )

        self.logger.debug(f"Webhook {webhook.gid} created for {resource} -> {target}")
        return WebhookResult(success=True, hook_id=webhook.gid, webhook=webhook)

    async def delete_hook(self, hook_id: str) -> WebhookResult:
        """Delete a webhook. Failures are logged, never raised."""
        request = self.requests.build(f"webhooks/{hook_id}", method="DELETE")

        try:
            await self.transport(request)
        except TransportError as e:
            error_msg = f"Webhook {hook_id} deletion failed: {e}"
            self.logger.warning(f"{error_msg} body={e.body}")
            return WebhookResult(
                success=False,
                hook_id=hook_id,
                status_code=e.status_code,
                error_message=error_msg,
            )

        self.logger.debug(f"Webhook {hook_id} deleted")
        return WebhookResult(success=True, hook_id=hook_id)
