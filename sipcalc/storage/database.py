import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

SCHEMA = (
    """
    create table if not exists calculations (
        seq integer primary key autoincrement,
        id text not null unique,
        created_at text not null,
        kind text not null,
        plan text not null,
        result text not null,
        imported integer not null default 0,
        import_date text
    )
    """,
    """
    create table if not exists drafts (
        slot integer primary key check (slot = 1),
        payload text not null,
        saved_at text not null
    )
    """,
    """
    create table if not exists preferences (
        slot integer primary key check (slot = 1),
        payload text not null
    )
    """,
)


def connect(db_path: Union[str, Path]) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Union[str, Path]) -> None:
    conn = connect(db_path)
    try:
        for statement in SCHEMA:
            conn.execute(statement)
        conn.commit()
    finally:
        conn.close()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_utc(moment: datetime) -> str:
    """Fixed-width UTC text so stored timestamps sort chronologically as strings."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")
