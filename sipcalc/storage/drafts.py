"""Single-slot cache for the plan the user has not submitted yet."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from sipcalc import config
from sipcalc.storage.database import connect, init_db, utc_now

logger = logging.getLogger(__name__)


class DraftCache:
    """Holds one draft at a time; a draft older than ``ttl_hours`` is dropped when read."""

    def __init__(
        self,
        db_path: Union[str, Path, None] = None,
        ttl_hours: Optional[float] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db_path = db_path or config.DB_PATH
        self.ttl = timedelta(hours=ttl_hours if ttl_hours is not None else config.DRAFT_TTL_HOURS)
        self.clock = clock
        init_db(self.db_path)

    def save(self, fields: Dict[str, Any]) -> str:
        saved_at = self.clock().isoformat()
        conn = connect(self.db_path)
        try:
            conn.execute(
                "insert or replace into drafts (slot, payload, saved_at) values (1, ?, ?)",
                (json.dumps(fields), saved_at),
            )
            conn.commit()
        finally:
            conn.close()
        return saved_at

    def load(self) -> Optional[Dict[str, Any]]:
        conn = connect(self.db_path)
        try:
            row = conn.execute("select payload, saved_at from drafts where slot = 1").fetchone()
        finally:
            conn.close()
        if row is None:
            return None

        saved_at = datetime.fromisoformat(row["saved_at"])
        if self.clock() - saved_at >= self.ttl:
            logger.info("Draft saved at %s has expired", row["saved_at"])
            self.clear()
            return None

        try:
            fields = json.loads(row["payload"])
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable draft")
            self.clear()
            return None
        return {**fields, "savedAt": row["saved_at"]}

    def clear(self) -> None:
        conn = connect(self.db_path)
        try:
            conn.execute("delete from drafts")
            conn.commit()
        finally:
            conn.close()
