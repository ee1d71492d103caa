import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from sipcalc import config
from sipcalc.storage.database import connect, init_db

logger = logging.getLogger(__name__)

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "defaultPlanKind": "fixed",
    "defaultCategory": "mid",
    "defaultInflationRate": 6,
    "showAdvancedOptions": False,
    "notifications": True,
}


class PreferenceStore:
    def __init__(self, db_path: Union[str, Path, None] = None):
        self.db_path = db_path or config.DB_PATH
        init_db(self.db_path)

    def get(self) -> Dict[str, Any]:
        """Stored preferences layered over the defaults."""
        conn = connect(self.db_path)
        try:
            row = conn.execute("select payload from preferences where slot = 1").fetchone()
        finally:
            conn.close()
        stored: Dict[str, Any] = {}
        if row is not None:
            try:
                stored = json.loads(row["payload"])
            except json.JSONDecodeError:
                logger.warning("Ignoring unreadable preferences")
        return {**DEFAULT_PREFERENCES, **stored}

    def update(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        merged = {**self.get(), **changes}
        conn = connect(self.db_path)
        try:
            conn.execute(
                "insert or replace into preferences (slot, payload) values (1, ?)",
                (json.dumps(merged),),
            )
            conn.commit()
        finally:
            conn.close()
        return merged
