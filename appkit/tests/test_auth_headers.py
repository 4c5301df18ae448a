"""
Tests for auth header resolution.

This module covers parsing of auth types into variants and the header
rules for each variant, including the fail-open behavior for auth types
that have no rule.
"""

import base64

import pytest

from appkit.core.auth_headers import (
    BasicAuth,
    BearerAuth,
    HeadersAuth,
    NoAuth,
    ResolvedAuth,
    UnrecognizedAuth,
    parse_auth,
    resolve,
    resolve_auth_headers,
)


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class TestParseAuth:
    """Tests for turning auth types into variants."""

    @pytest.mark.parametrize("auth_type", [None, "", "none"])
    def test_no_auth(self, auth_type):
        assert isinstance(parse_auth(auth_type, {"token": "ignored"}), NoAuth)

    def test_basic(self):
        auth = parse_auth("basic", {"username": "u", "password": "p"})
        assert auth == BasicAuth(username="u", password="p")

    def test_basic_missing_fields_default_to_empty(self):
        assert parse_auth("basic", {}) == BasicAuth(username="", password="")
        assert parse_auth("basic", None) == BasicAuth(username="", password="")

    def test_bearer(self):
        assert parse_auth("bearer", {"token": "t"}) == BearerAuth(token="t")
        assert parse_auth("bearer", None) == BearerAuth(token="")

    def test_headers_skips_entries_without_key(self):
        auth = parse_auth("headers", [
            {"key": "X-One", "value": "1"},
            {"key": "", "value": "dropped"},
            {"value": "no key"},
            "not-an-entry",
            None,
            {"key": "X-Two", "value": "2"},
        ])
        assert isinstance(auth, HeadersAuth)
        assert [(e.key, e.value) for e in auth.entries] == [("X-One", "1"), ("X-Two", "2")]

    def test_unknown_type_is_unrecognized(self):
        auth = parse_auth("oauth2", {"token": "t"})
        assert auth == UnrecognizedAuth(auth_type="oauth2")


class TestResolveAuthHeaders:
    """Tests for the header rules of each auth type."""

    def test_basic_encodes_credentials(self):
        headers = resolve_auth_headers("basic", {"username": "u", "password": "p"})
        assert headers == {"Authorization": "Basic " + b64("u:p")}

    def test_basic_without_credentials_still_builds_header(self):
        assert resolve_auth_headers("basic", {}) == {"Authorization": "Basic " + b64(":")}

    def test_basic_handles_non_ascii(self):
        headers = resolve_auth_headers("basic", {"username": "jörg", "password": "pässword"})
        assert headers["Authorization"] == "Basic " + b64("jörg:pässword")

    def test_bearer(self):
        assert resolve_auth_headers("bearer", {"token": "t"}) == {"Authorization": "Bearer t"}

    def test_bearer_without_token(self):
        assert resolve_auth_headers("bearer", {}) == {"Authorization": "Bearer "}

    @pytest.mark.parametrize("auth_params", [None, {}, {"token": "t"}, [{"key": "X", "value": "y"}], "junk"])
    def test_none_and_missing_type_yield_no_headers(self, auth_params):
        assert resolve_auth_headers(None, auth_params) == {}
        assert resolve_auth_headers("none", auth_params) == {}

    def test_headers_in_order(self):
        headers = resolve_auth_headers("headers", [
            {"key": "X-Api-Key", "value": "abc"},
            {"key": "X-Tenant", "value": "acme"},
        ])
        assert headers == {"X-Api-Key": "abc", "X-Tenant": "acme"}
        assert list(headers) == ["X-Api-Key", "X-Tenant"]

    @pytest.mark.parametrize("entries, expected", [
        ([{"key": "A", "value": "1"}, {"key": "A", "value": "2"}], {"A": "2"}),
        ([{"key": "A", "value": "1"}, {"key": "B", "value": "2"}, {"key": "A", "value": "3"}], {"A": "3", "B": "2"}),
        ([{"key": "A", "value": "1"}, {"key": "A", "value": "1"}], {"A": "1"}),
        ([], {}),
    ])
    def test_headers_last_entry_wins(self, entries, expected):
        assert resolve_auth_headers("headers", entries) == expected

    def test_headers_with_no_params(self):
        assert resolve_auth_headers("headers", None) == {}

    def test_unrecognized_type_fails_open(self):
        assert resolve_auth_headers("apiKey", {"key": "secret"}) == {}
        assert resolve_auth_headers("oauth2_client_credentials", None) == {}


class TestResolvedAuth:
    """Tests for the resolved auth container."""

    def test_redacted_summary_hides_values(self):
        resolved = resolve(parse_auth("bearer", {"token": "very-secret"}))
        summary = resolved.redacted_summary()

        assert summary == {"auth_type": "bearer", "has_headers": True, "header_names": ["Authorization"]}
        assert "very-secret" not in str(summary)

    def test_has_credentials(self):
        assert resolve(NoAuth()).has_credentials() is False
        assert resolve(BearerAuth(token="x")).has_credentials() is True
        assert ResolvedAuth("oauth2").has_credentials() is False
