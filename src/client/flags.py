"""Prompts and permissions remembered across restarts."""

import logging
from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel, ValidationError

from src.client.preferences import PreferenceStore, utcnow

ONBOARDING_KEY = "hasCompletedOnboarding"
AUDIO_PERMISSIONS_KEY = "oneiros_audio_permissions"
INSTALL_PROMPT_KEY = "install_prompt_dismissed"

PermissionStatus = Literal["pending", "granted", "denied"]

logger = logging.getLogger(__name__)


class DismissalTimer:
    """Hide a prompt for `window` after the user dismisses it."""

    def __init__(self, store: PreferenceStore, key: str, window: timedelta = timedelta(hours=24)):
        self.store = store
        self.key = key
        self.window = window

    def dismiss(self, now: datetime | None = None) -> None:
        self.store.set(self.key, True, ttl=self.window, now=now)

    def is_hidden(self, now: datetime | None = None) -> bool:
        return bool(self.store.get(self.key, False, now=now))

    def should_show(self, now: datetime | None = None) -> bool:
        return not self.is_hidden(now)


def upgrade_prompt_timer(store: PreferenceStore, trigger: str) -> DismissalTimer:
    return DismissalTimer(store, f"upgrade_dismissed_{trigger}")


def install_prompt_timer(store: PreferenceStore) -> DismissalTimer:
    return DismissalTimer(store, INSTALL_PROMPT_KEY, window=timedelta(days=7))


class OnboardingFlow:
    """A multi-step intro shown until completed or skipped once."""

    def __init__(self, store: PreferenceStore, steps: int = 4):
        self.store = store
        self.steps = steps
        self.current_step = 0
        self.is_open = self.should_show()

    def should_show(self) -> bool:
        return not self.store.get(ONBOARDING_KEY, False)

    def next(self) -> None:
        if self.current_step < self.steps - 1:
            self.current_step += 1
        else:
            self.complete()

    def skip(self) -> None:
        self.complete()

    def complete(self) -> None:
        self.store.set(ONBOARDING_KEY, True)
        self.is_open = False

    def reset(self) -> None:
        self.store.remove(ONBOARDING_KEY)
        self.current_step = 0
        self.is_open = True


class AudioPermissionState(BaseModel):
    mic: PermissionStatus = "pending"
    speaker: PermissionStatus = "pending"
    last_checked: datetime


class AudioPermissions:
    def __init__(self, store: PreferenceStore):
        self.store = store
        self.state = AudioPermissionState(last_checked=utcnow())
        stored = store.get(AUDIO_PERMISSIONS_KEY)
        if stored:
            try:
                self.state = AudioPermissionState.model_validate(stored)
            except ValidationError:
                logger.warning("Ignoring malformed audio permission state")

    def _persist(self) -> None:
        self.store.set(AUDIO_PERMISSIONS_KEY, self.state.model_dump(mode="json"))

    def update_mic(self, status: PermissionStatus, now: datetime | None = None) -> None:
        self.state = self.state.model_copy(update={"mic": status, "last_checked": now or utcnow()})
        self._persist()

    def update_speaker(self, status: PermissionStatus, now: datetime | None = None) -> None:
        self.state = self.state.model_copy(update={"speaker": status, "last_checked": now or utcnow()})
        self._persist()

    def reset(self) -> None:
        self.state = AudioPermissionState(last_checked=utcnow())
        self.store.remove(AUDIO_PERMISSIONS_KEY)
