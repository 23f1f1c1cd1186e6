"""Session guard: admin password check and session cookie lifecycle.

There is a single admin identity. Logging in with the configured password
yields the deterministic token from ``token_service`` in an HTTP-only cookie;
every mutating request re-derives the token and compares. No session state
is stored anywhere.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote

from edgenotes.exceptions import AuthenticationError
from edgenotes.services.token_service import TokenSigner, constant_time_equals

if TYPE_CHECKING:
    from edgenotes.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = "edgenote"
DEFAULT_MAX_AGE_SECONDS = 60 * 60 * 24 * 30
_EXPIRED = "Thu, 01 Jan 1970 00:00:00 GMT"
_COOKIE_FLAGS = ("HttpOnly", "Secure", "SameSite=Strict")


def parse_cookies(header: str | None) -> dict[str, str]:
    """Parse a ``Cookie`` header into a name -> URL-decoded value mapping.

    Pairs are split on ``;`` and then at the first ``=``. Pairs without
    ``=`` are ignored; a later duplicate name overwrites an earlier one.
    """
    cookies: dict[str, str] = {}
    if not header:
        return cookies
    for part in header.split(";"):
        name, sep, value = part.partition("=")
        if not sep:
            continue
        cookies[name.strip()] = unquote(value.strip())
    return cookies


class SessionGuard:
    """Gate for the admin session.

    Two states: anonymous (no or invalid cookie) and authenticated (cookie
    holds the token derived from the server secret).
    """

    def __init__(
        self,
        secret: str,
        admin_password: str,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
    ) -> None:
        self._signer = TokenSigner(secret)
        self._admin_password = admin_password
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionGuard:
        return cls(
            secret=settings.secret_key,
            admin_password=settings.admin_password,
            cookie_name=settings.session_cookie_name,
            max_age_seconds=settings.session_max_age_seconds,
        )

    def check_password(self, password: str | None) -> bool:
        if not password or not self._admin_password:
            return False
        return constant_time_equals(password, self._admin_password)

    def login(self, password: str | None) -> str:
        """Return a session token, or raise ``AuthenticationError``."""
        if not self.check_password(password):
            logger.warning("Rejected admin login attempt")
            raise AuthenticationError("Invalid password")
        return self._signer.sign()

    def is_authed(self, cookie_header: str | None) -> bool:
        token = parse_cookies(cookie_header).get(self.cookie_name)
        if not token:
            return False
        return self._signer.verify(token)

    def session_cookie(self, token: str) -> str:
        """Build the ``Set-Cookie`` value that starts a session."""
        parts = [
            f"{self.cookie_name}={quote(token, safe='')}",
            f"Max-Age={self.max_age_seconds}",
            "Path=/",
            *_COOKIE_FLAGS,
        ]
        return "; ".join(parts)

    def cleared_cookie(self) -> str:
        """Build the ``Set-Cookie`` value that ends a session."""
        parts = [
            f"{self.cookie_name}=",
            f"Expires={_EXPIRED}",
            "Max-Age=0",
            "Path=/",
            *_COOKIE_FLAGS,
        ]
        return "; ".join(parts)
