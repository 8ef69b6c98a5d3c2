"""Tests for webhook delivery verification."""

import base64
import hashlib
import hmac
import json
from types import SimpleNamespace

import pytest

from asana_hooks.api.auth import AuthContext
from asana_hooks.webhooks.verifier import WebhookVerifier, canonical_body

BODY = {"events": [{"action": "changed", "resource": {"gid": "333", "name": "Café"}}]}


def expected_signature(secret: str, payload: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


@pytest.fixture
def verifier(auth):
    return WebhookVerifier(auth)


class TestCanonicalBody:
    """Test canonical_body serialization."""

    def test_compact_json_keeps_unicode(self):
        assert canonical_body({"a": 1, "b": ["é"]}) == '{"a":1,"b":["é"]}'.encode("utf-8")

    def test_bytes_untouched(self):
        assert canonical_body(b'{"a": 1}') == b'{"a": 1}'

    def test_text_encoded(self):
        assert canonical_body('{"a": "é"}') == '{"a": "é"}'.encode("utf-8")

    def test_lone_surrogate_escaped(self):
        body = json.loads('{"text": "\\ud800"}')
        assert canonical_body(body) == b'{"text":"\\ud800"}'

    def test_numbers_formatted_like_javascript(self):
        assert canonical_body({"a": 1e16}) == b'{"a":10000000000000000}'
        assert canonical_body({"a": 1.0}) == b'{"a":1}'
        assert canonical_body({"a": 1e21}) == b'{"a":1e+21}'
        assert canonical_body({"a": 1.5e-7}) == b'{"a":1.5e-7}'
        assert canonical_body({"a": 0.000001}) == b'{"a":0.000001}'
        assert canonical_body({"a": -2.5}) == b'{"a":-2.5}'

    def test_non_finite_numbers_become_null(self):
        assert canonical_body([float("nan"), float("inf")]) == b"[null,null]"

    def test_literals(self):
        assert canonical_body({"a": True, "b": None, "c": False}) == b'{"a":true,"b":null,"c":false}'


class TestWebhookVerifier:
    """Test WebhookVerifier.verify."""

    def test_valid_signature(self, verifier):
        payload = json.dumps(BODY, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        headers = {"X-Hook-Secret": expected_signature("hook-secret", payload)}

        assert verifier.verify(BODY, headers) is True

    def test_sign_matches_reference(self, verifier):
        payload = b'{"events":[]}'
        assert verifier.sign(payload) == expected_signature("hook-secret", payload)

    def test_header_lookup_is_case_insensitive(self, verifier):
        headers = {"x-hook-secret": verifier.sign(BODY)}
        assert verifier.verify(BODY, headers) is True

    def test_mutated_body(self, verifier):
        headers = {"X-Hook-Secret": verifier.sign(BODY)}
        mutated = {"events": [{"action": "changes", "resource": {"gid": "333", "name": "Café"}}]}

        assert verifier.verify(mutated, headers) is False

    def test_single_byte_mutation_of_raw_body(self, verifier):
        raw = b'{"events":[{"action":"added"}]}'
        headers = {"X-Hook-Secret": verifier.sign(raw)}

        for index in range(len(raw)):
            mutated = bytearray(raw)
            mutated[index] ^= 0x01
            assert verifier.verify(bytes(mutated), headers) is False

    def test_wrong_secret(self, verifier):
        other = WebhookVerifier(AuthContext(access_token="test-token", secret="other"))
        headers = {"X-Hook-Secret": other.sign(BODY)}

        assert verifier.verify(BODY, headers) is False

    def test_missing_header(self, verifier):
        assert verifier.verify(BODY, {}) is False

    def test_empty_header(self, verifier):
        assert verifier.verify(BODY, {"X-Hook-Secret": ""}) is False

    def test_no_secret_configured(self):
        verifier = WebhookVerifier(AuthContext(access_token="test-token"))
        headers = {"X-Hook-Secret": expected_signature("", b"{}")}

        assert verifier.verify({}, headers) is False

    def test_non_ascii_header(self, verifier):
        assert verifier.verify(BODY, {"X-Hook-Secret": "ünïcode"}) is False

    def test_verify_request(self, verifier):
        request = SimpleNamespace(body=BODY, headers={"X-Hook-Secret": verifier.sign(BODY)})
        assert verifier.verify_request(request) is True

    def test_parsed_and_raw_forms_agree(self, verifier):
        raw = json.dumps(BODY, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        assert verifier.sign(raw) == verifier.sign(BODY)


class TestUnencodableInput:
    """Test that verify rejects input it cannot encode instead of raising."""

    def test_lone_surrogate_in_parsed_body(self, verifier):
        body = json.loads('{"events": [{"text": "\\ud800"}]}')
        assert verifier.verify(body, {"X-Hook-Secret": "c2lnbmF0dXJl"}) is False

    def test_lone_surrogate_body_with_valid_signature(self, verifier):
        body = json.loads('{"events": [{"text": "\\ud800"}]}')
        payload = b'{"events":[{"text":"\\ud800"}]}'
        headers = {"X-Hook-Secret": expected_signature("hook-secret", payload)}

        assert verifier.verify(body, headers) is True

    def test_lone_surrogate_in_text_body(self, verifier):
        assert verifier.verify('{"text": "\ud800"}', {"X-Hook-Secret": "c2lnbmF0dXJl"}) is False

    def test_lone_surrogate_in_header(self, verifier):
        assert verifier.verify(BODY, {"X-Hook-Secret": "\ud800"}) is False

    def test_unserializable_body(self, verifier):
        assert verifier.verify({"when": object()}, {"X-Hook-Secret": "c2lnbmF0dXJl"}) is False
