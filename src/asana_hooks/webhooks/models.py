"""Data models for webhook management."""

from dataclasses import dataclass
from typing import Mapping, Optional

import httpx

from asana_hooks.api.models import Webhook

HOOK_SECRET_HEADER = "X-Hook-Secret"


@dataclass
class WebhookResult:
    """Result of a webhook create or delete call."""

    success: bool
    hook_id: Optional[str] = None
    webhook: Optional[Webhook] = None
    status_code: Optional[int] = None
    error_message: Optional[str] = None


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Look up a header case-insensitively."""
    return httpx.Headers(headers, encoding="utf-8").get(name)
