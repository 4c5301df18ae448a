"""
Auth header resolution for integration apps.

This module turns a declared auth type and the user-supplied auth
parameters into transport-level headers. Auth is first parsed into one of a
closed set of variants (none, basic, bearer, headers, unrecognized) and the
variant is then resolved to a header mapping.

Unrecognized auth types resolve to an empty header set. Checking that an
auth type is one the app declares is left to the host.
"""

import base64
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class NoAuth(BaseModel):
    """No authentication."""
    type: Literal["none"] = "none"


class BasicAuth(BaseModel):
    """HTTP basic authentication."""
    type: Literal["basic"] = "basic"
    username: str = ""
    password: str = ""


class BearerAuth(BaseModel):
    """Bearer token authentication."""
    type: Literal["bearer"] = "bearer"
    token: str = ""


class HeaderEntry(BaseModel):
    """A single user-supplied header."""
    key: str = Field(..., min_length=1)
    value: str = ""


class HeadersAuth(BaseModel):
    """Arbitrary headers, applied in order."""
    type: Literal["headers"] = "headers"
    entries: List[HeaderEntry] = Field(default_factory=list)


class UnrecognizedAuth(BaseModel):
    """An auth type this resolver has no rule for."""
    type: Literal["unrecognized"] = "unrecognized"
    auth_type: str


AuthVariant = Union[NoAuth, BasicAuth, BearerAuth, HeadersAuth, UnrecognizedAuth]


@dataclass
class ResolvedAuth:
    """Container for resolved auth headers."""

    auth_type: str
    headers: Dict[str, str] = field(default_factory=dict)

    def has_credentials(self) -> bool:
        """Check if any headers were resolved."""
        return bool(self.headers)

    def redacted_summary(self) -> Dict[str, Any]:
        """Get a summary with header values redacted for logging."""
        return {
            "auth_type": self.auth_type,
            "has_headers": bool(self.headers),
            "header_names": list(self.headers.keys()),
        }


def _param(auth_params: Any, key: str) -> str:
    if not isinstance(auth_params, Mapping):
        return ""
    value = auth_params.get(key)
    return "" if value is None else str(value)


def parse_auth(auth_type: Optional[str], auth_params: Any = None) -> AuthVariant:
    """
    Parse an auth type and its parameters into an auth variant.

    Missing fields default to empty strings and malformed header entries are
    skipped, so parsing never fails for the documented input shapes.

    Args:
        auth_type: Declared auth type name, or None
        auth_params: Credentials matching the auth type's schema

    Returns:
        One of NoAuth, BasicAuth, BearerAuth, HeadersAuth, UnrecognizedAuth
    """
    if not auth_type or auth_type == "none":
        return NoAuth()

    if auth_type == "basic":
        return BasicAuth(
            username=_param(auth_params, "username"),
            password=_param(auth_params, "password")
        )

    if auth_type == "bearer":
        return BearerAuth(token=_param(auth_params, "token"))

    if auth_type == "headers":
        entries = []
        for entry in auth_params or []:
            if not isinstance(entry, Mapping) or not entry.get("key"):
                continue
            entries.append(HeaderEntry(key=str(entry["key"]), value=_param(entry, "value")))
        return HeadersAuth(entries=entries)

    return UnrecognizedAuth(auth_type=auth_type)


def resolve(auth: AuthVariant) -> ResolvedAuth:
    """Resolve a parsed auth variant to its headers."""
    if isinstance(auth, BasicAuth):
        encoded = base64.b64encode(f"{auth.username}:{auth.password}".encode("utf-8")).decode("ascii")
        return ResolvedAuth("basic", {"Authorization": f"Basic {encoded}"})

    if isinstance(auth, BearerAuth):
        return ResolvedAuth("bearer", {"Authorization": f"Bearer {auth.token}"})

    if isinstance(auth, HeadersAuth):
        headers: Dict[str, str] = {}
        for entry in auth.entries:
            # later entries overwrite earlier ones with the same key
            headers[entry.key] = entry.value
        return ResolvedAuth("headers", headers)

    if isinstance(auth, UnrecognizedAuth):
        logger.debug(f"No header rule for auth type '{auth.auth_type}', sending no auth headers")
        return ResolvedAuth(auth.auth_type)

    return ResolvedAuth("none")


def resolve_auth_headers(auth_type: Optional[str], auth_params: Any = None) -> Dict[str, str]:
    """
    Map an auth type and its parameters to transport headers.

    Args:
        auth_type: Declared auth type name (none, basic, bearer, headers), or None
        auth_params: Credentials for the auth type

    Returns:
        Header mapping; empty for no auth and for unrecognized auth types
    """
    return resolve(parse_auth(auth_type, auth_params)).headers
