"""Small persistent key-value store for user preferences and one-time flags.

Each entry is a `PreferenceRecord` with an optional `expires_at`. Expiry is
evaluated on read by comparing against the current time; nothing runs in the
background and concurrent processes are not synchronised (two processes can
each decide to re-show the same prompt).
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken as local time, as `datetime.now()` returns."""
    return value.astimezone(timezone.utc)


class PreferenceRecord(BaseModel):
    value: Any
    written_at: datetime
    expires_at: datetime | None = None

    @field_validator("written_at", "expires_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    def is_active(self, now: datetime | None = None) -> bool:
        """True until `expires_at`; the expiry instant itself counts as expired."""
        if self.expires_at is None:
            return True
        return as_utc(now or utcnow()) < self.expires_at


class PreferenceStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, PreferenceRecord]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning("Preference file %s is unreadable; starting empty", self.path)
            return {}
        if not isinstance(raw, dict):
            return {}

        records = {}
        for key, entry in raw.items():
            try:
                records[key] = PreferenceRecord.model_validate(entry)
            except ValidationError:
                logger.warning("Dropping malformed preference %r", key)
        return records

    def _save(self, records: dict[str, PreferenceRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {key: record.model_dump(mode="json") for key, record in records.items()}
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def get_record(self, key: str) -> PreferenceRecord | None:
        return self._load().get(key)

    def get(self, key: str, default: Any = None, now: datetime | None = None) -> Any:
        """Return the value if present and not expired, else `default`."""
        record = self.get_record(key)
        if record is None or not record.is_active(now):
            return default
        return record.value

    def set(self, key: str, value: Any, ttl: timedelta | None = None, now: datetime | None = None) -> PreferenceRecord:
        now = as_utc(now or utcnow())
        record = PreferenceRecord(value=value, written_at=now, expires_at=now + ttl if ttl is not None else None)
        records = self._load()
        records[key] = record
        self._save(records)
        return record

    def remove(self, key: str) -> None:
        records = self._load()
        if records.pop(key, None) is not None:
            self._save(records)

    def clear(self) -> None:
        self._save({})
