"""Shared-secret access guard for admin mutations."""

import hmac
from dataclasses import dataclass

from photo_diary.domain.errors import ServerMisconfiguredError

BEARER_PREFIX = "Bearer "


def extract_token(header_value: str | None) -> str:
    """Return the token from a bearer header, or the raw header value."""
    header = header_value or ""
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX) :]
    return header


@dataclass
class AccessGuard:
    """Compares presented tokens against the configured admin secret."""

    secret: str | None

    def authorize(self, header_value: str | None) -> bool:
        """Return True when the presented token equals the secret.

        Raises ServerMisconfiguredError when no secret is configured.
        """
        if not self.secret:
            raise ServerMisconfiguredError()
        token = extract_token(header_value)
        return hmac.compare_digest(token.encode(), self.secret.encode())
