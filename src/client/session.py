"""Explicit session state: signed-in user and a throttled credit counter."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from src.client.functions import FunctionsClient
from src.client.preferences import utcnow

logger = logging.getLogger(__name__)

REFRESH_COOLDOWN = timedelta(minutes=2)


@dataclass
class SessionUser:
    id: str
    email: str = ""


@dataclass
class SessionState:
    functions: FunctionsClient
    user: SessionUser | None = None
    credits: int = 0
    last_refreshed_at: datetime | None = None
    cooldown: timedelta = field(default=REFRESH_COOLDOWN)

    def sign_in(self, user: SessionUser, access_token: str) -> None:
        self.user = user
        self.functions.access_token = access_token
        self.last_refreshed_at = None

    def sign_out(self) -> None:
        self.user = None
        self.credits = 0
        self.last_refreshed_at = None
        self.functions.access_token = None

    def _cooling_down(self, now: datetime) -> bool:
        return self.last_refreshed_at is not None and now - self.last_refreshed_at < self.cooldown

    async def refresh_credits(self, force: bool = False, now: datetime | None = None) -> bool:
        """Fetch the balance unless a refresh happened within the cooldown. Returns True if refreshed."""
        if self.user is None:
            self.credits = 0
            return False

        now = now or utcnow()
        if not force and self._cooling_down(now):
            logger.debug("Credit refresh throttled, waiting for cooldown")
            return False

        result = await self.functions.invoke("credits", {"action": "check_only"})
        if not result.ok:
            logger.warning("Failed to refresh credits: %s", result.error)
            return False

        self.credits = int(result.data.get("remaining", 0))
        self.last_refreshed_at = now
        return True

    def deduct_credits(self, amount: int) -> None:
        self.credits = max(0, self.credits - amount)
