"""
Wire format of real-time events.

    {"type": "ticket.ready", "tenant_id": 1, "location_id": 2,
     "entity": {"ticket_id": 5, ...}, "actor": {}, "ts": "...", "v": 1}
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

SCHEMA_VERSION = 1


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass
class Event:
    """
    One notification. `entity` holds the ids and statuses subscribers need;
    `actor` identifies the staff member when known.
    """

    type: str
    tenant_id: int
    location_id: int
    entity: dict[str, Any] = field(default_factory=dict)
    actor: dict[str, Any] = field(default_factory=dict)
    ts: str | None = None
    v: int = SCHEMA_VERSION

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type:
            raise ValueError("event type must be a non-empty string")
        for name in ("tenant_id", "location_id"):
            if not _positive_int(getattr(self, name)):
                raise ValueError(f"event {name} must be a positive integer")
        for name in ("entity", "actor"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, dict):
                raise ValueError(f"event {name} must be an object")

    def to_json(self) -> str:
        """Serialize, stamping the current UTC time when `ts` is unset."""
        data = asdict(self)
        data["entity"] = self.entity or {}
        data["actor"] = self.actor or {}
        data["ts"] = self.ts or datetime.now(timezone.utc).isoformat()
        return json.dumps(data, ensure_ascii=False, default=str)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Event":
        return cls(**json.loads(raw))
