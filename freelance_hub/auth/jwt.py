"""HS256 access tokens for API callers."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from freelance_hub.core.exceptions import AuthenticationError

_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class AccessToken:
    access_token: str
    token_type: str = "bearer"


def _encode_segment(data: dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _decode_segment(segment: str) -> dict[str, Any]:
    padded = segment + "=" * (-len(segment) % 4)
    try:
        decoded = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except ValueError as exc:
        raise AuthenticationError("Malformed token segment.") from exc
    if not isinstance(decoded, dict):
        raise AuthenticationError("Malformed token segment.")
    return decoded


def _signature(signing_input: str, secret: str) -> str:
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    digest = hmac.new(secret.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign ``payload`` adding ``iat``/``exp``/``jti`` unless already present."""
    issued_at = int(time.time())
    claims = {
        "iat": issued_at,
        "exp": issued_at + int(ttl.total_seconds()),
        "jti": uuid.uuid4().hex,
        **payload,
    }
    signing_input = f"{_encode_segment(_HEADER)}.{_encode_segment(claims)}"
    return f"{signing_input}.{_signature(signing_input, secret)}"


def decode_jwt(token: str, secret: str, verify_exp: bool = True) -> dict[str, Any]:
    """Return the claims of a token signed with ``secret``."""
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthenticationError("Invalid token format.")
    header_segment, payload_segment, signature = parts

    expected = _signature(f"{header_segment}.{payload_segment}", secret)
    if not hmac.compare_digest(expected, signature):
        raise AuthenticationError("Invalid token signature.")
    if _decode_segment(header_segment).get("alg") != _HEADER["alg"]:
        raise AuthenticationError("Unsupported token algorithm.")

    claims = _decode_segment(payload_segment)
    if verify_exp:
        try:
            expires_at = int(claims["exp"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Token is missing a valid exp claim.") from exc
        if expires_at < int(time.time()):
            raise AuthenticationError("Token has expired.")
    return claims


def create_access_token(
    user_id: str,
    email: str,
    role: str,
    secret: str,
    ttl_minutes: int = 60,
) -> AccessToken:
    """Issue the bearer token returned by signup and signin."""
    claims = {"sub": str(user_id), "email": email, "role": role, "token_use": "access"}
    return AccessToken(access_token=encode_jwt(claims, secret=secret, ttl=timedelta(minutes=ttl_minutes)))
