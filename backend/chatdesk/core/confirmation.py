"""
Confirmation Gate - Two-phase confirmation for destructive actions.

A caller first requests a ticket for an (action, target) pair, shows the
user a prompt, and only then presents the token to the destructive
operation. Tokens are single-use and expire.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

ACTION_DELETE_SESSION = "delete_session"
ACTION_CLEAR_SESSION = "clear_session"


@dataclass(frozen=True)
class Confirmation:
    token: str
    action: str
    target_id: str
    expires_at: datetime


class ConfirmationGate:
    """Issues and redeems confirmation tokens."""

    def __init__(self, ttl_seconds: int = 120,
                 clock: Optional[Callable[[], datetime]] = None):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._pending: Dict[str, Confirmation] = {}

    def request(self, action: str, target_id: str) -> Confirmation:
        """Issue a token authorizing ``action`` on ``target_id`` once."""
        self._drop_expired()
        confirmation = Confirmation(
            token=secrets.token_urlsafe(16),
            action=action,
            target_id=target_id,
            expires_at=self._clock() + self.ttl,
        )
        self._pending[confirmation.token] = confirmation
        logger.debug(f"Confirmation requested: action={action}, target={target_id}")
        return confirmation

    def consume(self, token: Optional[str], action: str, target_id: str) -> bool:
        """
        Redeem ``token`` for ``action`` on ``target_id``.

        Returns:
            bool: True only for a known, unexpired token issued for exactly
            this action and target. A matching token is removed.
        """
        if not token:
            return False

        confirmation = self._pending.get(token)
        if confirmation is None:
            return False
        if confirmation.action != action or confirmation.target_id != target_id:
            return False

        del self._pending[token]
        if confirmation.expires_at <= self._clock():
            logger.info(f"Confirmation expired: action={action}, target={target_id}")
            return False
        return True

    def _drop_expired(self) -> None:
        now = self._clock()
        expired = [t for t, c in self._pending.items() if c.expires_at <= now]
        for token in expired:
            del self._pending[token]
