"""Repository helpers for persisted preferences."""
from __future__ import annotations

import json
from typing import Any, Dict

from cofi.db import app_session
from cofi.db.models import Setting
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.settings_repo")


def load_all() -> Dict[str, Any]:
    """Return every stored preference decoded from JSON; bad rows are skipped."""
    values: Dict[str, Any] = {}
    with app_session() as session:
        for row in session.query(Setting).all():
            try:
                values[row.key] = json.loads(row.value)
            except (TypeError, ValueError):
                LOG.warning("Ignoring undecodable setting key=%s", row.key)
    return values


def upsert(key: str, value: Any) -> None:
    encoded = json.dumps(value)
    with app_session() as session:
        record = session.get(Setting, key)
        if record:
            record.value = encoded
            return
        session.add(Setting(key=key, value=encoded))


__all__ = ["load_all", "upsert"]
