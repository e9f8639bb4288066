"""
Bearer access token signing and validation.

Token format: urlsafe-base64 payload "user_id=..&role=..&issued_at=.."
followed by "." and the hex HMAC-SHA256 of that payload.

Security features:
- HMAC-SHA256 signature verification
- Expiry (issued_at + max age)
- Constant-time comparison
"""

import base64
import binascii
import hashlib
import hmac
import logging
import time
from urllib.parse import parse_qsl, urlencode

from pydantic import BaseModel

from enums.user_role import UserRole

logger = logging.getLogger(__name__)


class AccessTokenError(Exception):
    """Raised when access token validation fails."""
    pass


class TokenClaims(BaseModel):
    user_id: int
    role: UserRole
    issued_at: int


def _sign(payload: str, secret: str) -> str:
    return hmac.new(
        key=secret.encode('utf-8'),
        msg=payload.encode('utf-8'),
        digestmod=hashlib.sha256
    ).hexdigest()


def issue_access_token(user_id: int, role: UserRole, secret: str, issued_at: int | None = None) -> str:
    if not secret:
        raise AccessTokenError("Token secret not configured")
    issued_at = int(time.time()) if issued_at is None else issued_at
    payload = urlencode({'user_id': user_id, 'role': role.value, 'issued_at': issued_at})
    encoded = base64.urlsafe_b64encode(payload.encode('utf-8')).decode('ascii')
    return f"{encoded}.{_sign(payload, secret)}"


def validate_access_token(token: str, secret: str, max_age_seconds: int) -> TokenClaims:
    """
    Validates an access token signature and age.

    Args:
        token: Raw token from the Authorization header
        secret: Signing secret (config.AUTH_TOKEN_SECRET)
        max_age_seconds: Maximum token age

    Returns:
        TokenClaims for the authenticated user

    Raises:
        AccessTokenError: If validation fails
    """
    if not token:
        raise AccessTokenError("No token provided")

    if not secret:
        raise AccessTokenError("Token secret not configured")

    encoded, _, received_signature = token.partition('.')
    if not encoded or not received_signature:
        raise AccessTokenError("Malformed token")

    try:
        payload = base64.urlsafe_b64decode(encoded.encode('ascii')).decode('utf-8')
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise AccessTokenError(f"Failed to decode token: {e}")

    if not hmac.compare_digest(_sign(payload, secret), received_signature):
        logger.warning(f"Access token signature mismatch | Received: {received_signature[:16]}...")
        raise AccessTokenError("Invalid signature")

    parsed = dict(parse_qsl(payload, keep_blank_values=True))
    try:
        claims = TokenClaims(
            user_id=int(parsed['user_id']),
            role=UserRole(parsed['role']),
            issued_at=int(parsed['issued_at']),
        )
    except (KeyError, ValueError) as e:
        raise AccessTokenError(f"Invalid token claims: {e}")

    age_seconds = time.time() - claims.issued_at
    if age_seconds > max_age_seconds:
        raise AccessTokenError(f"Token expired ({int(age_seconds)}s > {max_age_seconds}s max)")

    if age_seconds < -60:  # Allow 60s clock skew
        raise AccessTokenError("Token issued in the future")

    return claims
