"""Authenticity check for inbound webhook deliveries."""

import base64
import hashlib
import hmac
import json
import logging
import math
import re
from decimal import Decimal
from typing import Any, Mapping, Optional

from asana_hooks.api.auth import AuthContext
from asana_hooks.webhooks.models import HOOK_SECRET_HEADER, get_header

# Any surrogate left in a decoded str is unpaired
LONE_SURROGATE = re.compile("[\ud800-\udfff]")

# Integers beyond this lose precision when parsed as JavaScript numbers
MAX_SAFE_INTEGER = 2**53 - 1


def _js_number(value: float) -> str:
    """Format a number the way JavaScript's ``Number.prototype.toString`` does."""
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr gives the shortest round-tripping digits, as JavaScript does
    _, digits, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digits)
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text


def _js_string(value: str) -> str:
    text = json.dumps(value, ensure_ascii=False)
    return LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)


def stringify(value: Any) -> str:
    """Serialize parsed JSON exactly like JavaScript's ``JSON.stringify``.

    Output is compact and keeps non-ASCII characters. Unpaired surrogates are
    written as ``\\uXXXX`` escapes and numbers use JavaScript formatting
    (``1e16`` becomes ``10000000000000000``, ``1.0`` becomes ``1``).
    """
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return _js_string(value)
    if isinstance(value, int):
        if abs(value) > MAX_SAFE_INTEGER:
            return _js_number(float(value))
        return str(value)
    if isinstance(value, float):
        return _js_number(value)
    if isinstance(value, Mapping):
        items = (f"{_js_string(str(key))}:{stringify(item)}" for key, item in value.items())
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(stringify(item) for item in value) + "]"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def canonical_body(body: Any) -> bytes:
    """Return the bytes the signature is computed over.

    Raw bytes are used as received and text is UTF-8 encoded. Parsed JSON is
    re-serialized with ``stringify``.

    Raises:
        UnicodeEncodeError: If ``body`` is text holding unpaired surrogates.
    """
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    return stringify(body).encode("utf-8")


class WebhookVerifier:
    """Validates that a webhook delivery came from the remote service.

    Run ``verify`` before acting on any delivery. A ``False`` result means
    the request must be rejected; it is not an error to retry.
    """

    def __init__(self, auth: AuthContext, logger: Optional[logging.Logger] = None):
        self.auth = auth
        self.logger = logger or logging.getLogger(__name__)

    def sign(self, body: Any) -> str:
        """Return the base64 HMAC-SHA1 digest of ``body``."""
        digest = hmac.new(
            self.auth.webhook_secret().encode("utf-8"),
            canonical_body(body),
            hashlib.sha1,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def verify(self, body: Any, headers: Mapping[str, str]) -> bool:
        """Check the ``X-Hook-Secret`` header against the body's signature.

        Never raises. Input that cannot be encoded or serialized is rejected.
        """
        if not self.auth.webhook_secret():
            self.logger.warning("Rejecting webhook delivery: no webhook secret configured")
            return False

        try:
            signature = get_header(headers, HOOK_SECRET_HEADER)
            if not signature:
                self.logger.debug(f"Rejecting webhook delivery: missing {HOOK_SECRET_HEADER}")
                return False

            expected = self.sign(body)
            matches = hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
        except (TypeError, ValueError) as e:
            self.logger.debug(f"Rejecting webhook delivery: unreadable input: {e}")
            return False

        if not matches:
            self.logger.debug("Rejecting webhook delivery: signature mismatch")
            return False

        return True

    def verify_request(self, request: Any) -> bool:
        """Verify any request object exposing ``body`` and ``headers``."""
        return self.verify(request.body, request.headers)
