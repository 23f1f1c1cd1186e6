"""Application-level exception types.

Convention:
- ``StoreUnavailableError``: the key-value backend failed. Surfaced as 503
  so infrastructure trouble is distinguishable from bad input.
- ``ValueError`` subclasses: input rejected before any store write. Their
  message is safe to forward to clients and is returned as a 400 detail.
- ``AuthenticationError``: wrong or missing admin password (401).

Anything else that escapes a handler is logged by the global handlers in
``edgenotes/main.py`` and answered with a generic 500.
"""

from __future__ import annotations


class StoreUnavailableError(Exception):
    """Raised when the key-value backend cannot serve a get/put/delete."""


class AuthenticationError(Exception):
    """Raised when a login presents a missing or wrong password."""


class PageValidationError(ValueError):
    """Raised when a page name or id is rejected."""


class ProtectedPageError(ValueError):
    """Raised on an attempt to delete the default page."""


class SettingValidationError(ValueError):
    """Raised when an appearance setting key is not recognized."""
