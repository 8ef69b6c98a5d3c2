"""Webhook lifecycle and delivery verification."""

from asana_hooks.webhooks.models import HOOK_SECRET_HEADER, WebhookResult, get_header
from asana_hooks.webhooks.handshake import HandshakeError, HandshakeRegistry
from asana_hooks.webhooks.manager import WebhookManager
from asana_hooks.webhooks.verifier import WebhookVerifier, canonical_body, stringify

__all__ = [
    "HOOK_SECRET_HEADER",
    "WebhookResult",
    "get_header",
    "HandshakeError",
    "HandshakeRegistry",
    "WebhookManager",
    "WebhookVerifier",
    "canonical_body",
    "stringify",
]
