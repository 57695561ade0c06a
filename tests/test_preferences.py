"""Tests for the preference store, dismissal timers, onboarding and audio permissions."""

from datetime import datetime, timedelta, timezone

import pytest

from src.client.flags import (
    AUDIO_PERMISSIONS_KEY,
    ONBOARDING_KEY,
    AudioPermissions,
    DismissalTimer,
    OnboardingFlow,
    install_prompt_timer,
    upgrade_prompt_timer,
)
from src.client.preferences import PreferenceStore, utcnow

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path):
    return PreferenceStore(tmp_path / "prefs.json")


def test_set_and_get(store):
    store.set("theme", "dark")
    assert store.get("theme") == "dark"
    assert store.get("missing", "fallback") == "fallback"


def test_values_survive_a_new_store(store):
    store.set("theme", "dark")
    assert PreferenceStore(store.path).get("theme") == "dark"


def test_remove_and_clear(store):
    store.set("a", 1)
    store.set("b", 2)
    store.remove("a")
    assert store.get("a") is None
    store.clear()
    assert store.get("b") is None


def test_malformed_file_reads_as_empty(store):
    store.path.write_text("{not json", encoding="utf-8")
    assert store.get("anything") is None
    store.set("fresh", True)
    assert store.get("fresh") is True


def test_malformed_entry_is_dropped(store):
    store.path.write_text('{"bad": {"value": 1}, "good": {"value": 2, "written_at": "2025-03-01T12:00:00Z"}}', encoding="utf-8")
    assert store.get("bad") is None
    assert store.get("good") == 2


def test_dismissal_hides_for_24_hours(store):
    timer = DismissalTimer(store, "upgrade_dismissed_credits")
    assert timer.should_show(now=T0)

    timer.dismiss(now=T0)

    assert timer.is_hidden(now=T0 + timedelta(hours=23, minutes=59))
    assert timer.should_show(now=T0 + timedelta(hours=24))
    assert timer.should_show(now=T0 + timedelta(hours=24, minutes=1))


def test_dismissal_survives_restart(store):
    upgrade_prompt_timer(store, "credits").dismiss(now=T0)

    reloaded = upgrade_prompt_timer(PreferenceStore(store.path), "credits")
    assert reloaded.is_hidden(now=T0 + timedelta(hours=1))


def test_dismissals_are_per_trigger(store):
    upgrade_prompt_timer(store, "credits").dismiss(now=T0)
    assert upgrade_prompt_timer(store, "feature").should_show(now=T0)


def test_install_prompt_hidden_for_a_week(store):
    timer = install_prompt_timer(store)
    timer.dismiss(now=T0)
    assert timer.is_hidden(now=T0 + timedelta(days=6))
    assert timer.should_show(now=T0 + timedelta(days=7))


def test_onboarding_shown_until_completed(store):
    flow = OnboardingFlow(store, steps=3)
    assert flow.is_open

    flow.next()
    flow.next()
    assert flow.current_step == 2
    flow.next()

    assert not flow.is_open
    assert store.get(ONBOARDING_KEY) is True
    assert not OnboardingFlow(store).is_open


def test_onboarding_skip_persists(store):
    OnboardingFlow(store).skip()
    assert not OnboardingFlow(PreferenceStore(store.path)).should_show()


def test_onboarding_reset(store):
    flow = OnboardingFlow(store)
    flow.skip()
    flow.reset()
    assert flow.is_open
    assert OnboardingFlow(store).should_show()


def test_audio_permissions_persist(store):
    perms = AudioPermissions(store)
    assert perms.state.mic == "pending"

    perms.update_mic("granted", now=T0)
    perms.update_speaker("denied", now=T0)

    reloaded = AudioPermissions(store)
    assert reloaded.state.mic == "granted"
    assert reloaded.state.speaker == "denied"
    assert reloaded.state.last_checked == T0


def test_audio_permissions_reset(store):
    perms = AudioPermissions(store)
    perms.update_mic("granted")
    perms.reset()
    assert perms.state.mic == "pending"
    assert store.get(AUDIO_PERMISSIONS_KEY) is None


def test_malformed_audio_permissions_are_ignored(store):
    store.set(AUDIO_PERMISSIONS_KEY, {"mic": "sometimes"})
    assert AudioPermissions(store).state.mic == "pending"


def test_naive_dismissal_compares_with_aware_reads(store):
    timer = DismissalTimer(store, "upgrade_dismissed_naive")
    timer.dismiss(now=datetime.now())

    assert timer.is_hidden()
    assert timer.should_show(now=utcnow() + timedelta(hours=25))


def test_aware_dismissal_compares_with_naive_reads(store):
    timer = DismissalTimer(store, "upgrade_dismissed_aware")
    timer.dismiss(now=utcnow())

    assert timer.is_hidden(now=datetime.now())
    assert timer.should_show(now=datetime.now() + timedelta(hours=25))


def test_stored_times_are_utc(store):
    record = store.set("flag", True, ttl=timedelta(hours=1), now=datetime.now())
    assert record.written_at.tzinfo == timezone.utc
    assert store.get_record("flag").expires_at.tzinfo == timezone.utc
