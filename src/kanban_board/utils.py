"""Provide utility helpers for identifiers and timestamps."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def _now_iso() -> str:
    """Current UTC time as an RFC 3339 timestamp."""
    return datetime.now(timezone.utc).isoformat()


def _generate_id() -> str:
    return str(uuid.uuid4())
