"""Saved calculations, newest first, capped at a fixed count."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from sipcalc import config
from sipcalc.schemas.storage import HistoryImport
from sipcalc.storage.database import connect, init_db, iso_utc, utc_now

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"


class HistoryImportError(ValueError):
    pass


def _new_id() -> str:
    return uuid.uuid4().hex


class HistoryStore:
    """
    Each record is ``{"id", "timestamp", "kind", "plan", "result"}`` plus
    ``imported``/``importDate`` for records that came in through
    :meth:`import_json`. Beyond ``limit`` the earliest-stored records are
    dropped, so an import always lands as the newest entries whatever its
    timestamps say.
    """

    def __init__(
        self,
        db_path: Union[str, Path, None] = None,
        limit: Optional[int] = None,
        clock: Callable = utc_now,
    ):
        self.db_path = db_path or config.DB_PATH
        self.limit = limit if limit is not None else config.HISTORY_LIMIT
        self.clock = clock
        init_db(self.db_path)

    def _timestamp(self) -> str:
        return iso_utc(self.clock())

    def _insert(self, conn: sqlite3.Connection, record: Dict[str, Any]) -> None:
        conn.execute(
            """
            insert into calculations (id, created_at, kind, plan, result, imported, import_date)
            values (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record["id"],
                record["timestamp"],
                record["kind"],
                json.dumps(record["plan"]),
                json.dumps(record["result"]),
                1 if record.get("imported") else 0,
                record.get("importDate"),
            ),
        )

    def _trim(self, conn: sqlite3.Connection) -> int:
        cursor = conn.execute(
            """
            delete from calculations
            where seq not in (
                select seq from calculations
                order by seq desc
                limit ?
            )
            """,
            (self.limit,),
        )
        if cursor.rowcount:
            logger.info("Discarded %d old calculation(s) over the limit of %d", cursor.rowcount, self.limit)
        return cursor.rowcount

    @staticmethod
    def _to_record(row: sqlite3.Row) -> Optional[Dict[str, Any]]:
        try:
            plan = json.loads(row["plan"])
            result = json.loads(row["result"])
        except json.JSONDecodeError:
            logger.warning("Skipping unreadable calculation %s", row["id"])
            return None
        record = {
            "id": row["id"],
            "timestamp": row["created_at"],
            "kind": row["kind"],
            "plan": plan,
            "result": result,
        }
        if row["imported"]:
            record["imported"] = True
            record["importDate"] = row["import_date"]
        return record

    def save(self, kind: str, plan: Dict[str, Any], result: Dict[str, Any]) -> str:
        record = {
            "id": _new_id(),
            "timestamp": self._timestamp(),
            "kind": kind,
            "plan": plan,
            "result": result,
        }
        conn = connect(self.db_path)
        try:
            self._insert(conn, record)
            self._trim(conn)
            conn.commit()
        finally:
            conn.close()
        logger.info("Saved %s calculation %s", kind, record["id"])
        return record["id"]

    def list(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = "select * from calculations order by created_at desc, seq desc"
        params: tuple = ()
        if limit is not None:
            query += " limit ?"
            params = (limit,)
        conn = connect(self.db_path)
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()
        records = [self._to_record(row) for row in rows]
        return [record for record in records if record is not None]

    def summaries(self, limit: int = 10) -> List[Dict[str, Any]]:
        out = []
        for record in self.list(limit=limit):
            result = record["result"]
            out.append(
                {
                    "id": record["id"],
                    "timestamp": record["timestamp"],
                    "kind": record["kind"],
                    "totalContributed": result.get("totalContributed"),
                    # goal results carry the target instead of a projected value
                    "finalValue": result.get("finalValue", result.get("targetValue")),
                    "growth": result.get("growth"),
                    "years": result.get("years"),
                }
            )
        return out

    def get(self, calculation_id: str) -> Optional[Dict[str, Any]]:
        conn = connect(self.db_path)
        try:
            row = conn.execute("select * from calculations where id = ?", (calculation_id,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return self._to_record(row)

    def delete(self, calculation_id: str) -> bool:
        conn = connect(self.db_path)
        try:
            cursor = conn.execute("delete from calculations where id = ?", (calculation_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()
        if deleted:
            logger.info("Deleted calculation %s", calculation_id)
        return deleted

    def clear(self) -> None:
        conn = connect(self.db_path)
        try:
            conn.execute("delete from calculations")
            conn.commit()
        finally:
            conn.close()
        logger.info("Cleared calculation history")

    def stats(self) -> Dict[str, Any]:
        conn = connect(self.db_path)
        try:
            row = conn.execute("select count(*) as total, max(created_at) as latest from calculations").fetchone()
        finally:
            conn.close()
        return {"calculationsCount": row["total"], "lastCalculation": row["latest"]}

    def export_json(self) -> str:
        # oldest first, the order they were saved in
        calculations = list(reversed(self.list()))
        return json.dumps(
            {
                "exportDate": self._timestamp(),
                "version": EXPORT_VERSION,
                "calculations": calculations,
            },
            indent=2,
        )

    def import_json(self, payload: str) -> int:
        """Add every calculation from an export as the newest entries.

        Returns how many imported records are still held after the
        retention limit is applied.
        """
        try:
            data = HistoryImport.model_validate_json(payload)
        except ValidationError as exc:
            error = exc.errors(include_url=False)[0]
            location = ".".join(str(part) for part in error["loc"]) or "import"
            raise HistoryImportError(f"invalid import at {location}: {error['msg']}") from exc

        import_date = self._timestamp()
        records = [
            {
                # fresh ids so imports never collide with local records
                "id": _new_id(),
                "timestamp": iso_utc(item.timestamp) if item.timestamp else import_date,
                "kind": item.kind,
                "plan": item.plan,
                "result": item.result,
                "imported": True,
                "importDate": import_date,
            }
            for item in data.calculations
        ]

        conn = connect(self.db_path)
        try:
            for record in records:
                self._insert(conn, record)
            self._trim(conn)
            kept = 0
            if records:
                placeholders = ",".join("?" for _ in records)
                kept = conn.execute(
                    f"select count(*) from calculations where id in ({placeholders})",
                    [record["id"] for record in records],
                ).fetchone()[0]
            conn.commit()
        finally:
            conn.close()
        logger.info("Imported %d calculation(s), %d kept", len(records), kept)
        return kept
