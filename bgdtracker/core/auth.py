"""Shared-secret confirmation for destructive actions (delete, clear all)."""
from __future__ import annotations

import hmac
import logging

from bgdtracker.core.errors import AuthorizationError

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Compare an entered secret against the single configured secret."""

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def check(self, entered: str | None) -> bool:
        candidate = (entered or "").strip()
        return hmac.compare_digest(candidate.encode("utf-8"), self._secret.encode("utf-8"))

    def require(self, entered: str | None, action: str = "continue") -> None:
        """Raise ``AuthorizationError`` unless ``entered`` matches the secret."""

        if not self.check(entered):
            logger.warning("Rejected confirmation secret for action: %s", action)
            raise AuthorizationError("Incorrect password! Please try again.")
