"""Error types raised while reading wardrobe records."""

from __future__ import annotations

from typing import Optional


class InvalidRecord(ValueError):
    """A record is missing a required field or carries an unparseable value."""

    def __init__(self, record_id: Optional[str], field: str, reason: str) -> None:
        self.record_id = record_id
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid record {record_id or '<unknown>'}: {field} {reason}")

    def as_dict(self) -> dict:
        return {"record_id": self.record_id, "field": self.field, "reason": self.reason}


__all__ = ["InvalidRecord"]
