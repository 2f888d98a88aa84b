"""Sync status record kept in the agent directory."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

SYNC_SOURCE = "obsidian-dev-skills initialization"


class SyncStatus(BaseModel):
    """Contents of sync-status.json.

    Other tools keep their own fields in the same file, so unknown keys are
    allowed and carried through.
    """

    model_config = ConfigDict(extra="allow")

    lastFullSync: str
    lastSyncSource: str


def today_iso(now: datetime | None = None) -> str:
    """Return the current UTC date as YYYY-MM-DD."""
    now = now or datetime.now(UTC)
    return now.astimezone(UTC).date().isoformat()


def load_sync_status(path: Path) -> dict[str, Any]:
    """Load the existing status object.

    Returns an empty dict if the file doesn't exist or isn't a JSON object.
    """
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def record_sync(
    path: Path, today: str | None = None, source: str = SYNC_SOURCE
) -> SyncStatus:
    """Merge a new sync record into ``path`` and write it back.

    Existing keys keep their position; ``lastFullSync`` and
    ``lastSyncSource`` are overwritten.
    """
    merged = load_sync_status(path)
    merged.update(lastFullSync=today or today_iso(), lastSyncSource=source)
    status = SyncStatus.model_validate(merged)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(merged, indent=2) + "\n", encoding="utf-8")

    return status
