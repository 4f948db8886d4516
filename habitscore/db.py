"""SQLite database layer — persistent storage for habits, completions, settings.

Lightweight schema. Tables are created automatically on first run.
Day-stamps are stored as `YYYY-MM-DD` text so lexical order is date order.
"""

import sqlite3
import logging
from datetime import datetime, timezone, timedelta

from habitscore.config import DB_PATH, TIMEZONE_OFFSET_HOURS, LOG_SQL

logger = logging.getLogger(__name__)

TZ = timezone(timedelta(hours=TIMEZONE_OFFSET_HOURS))


def _connect() -> sqlite3.Connection:
    """Return a connection with row_factory set."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    if LOG_SQL:
        conn.set_trace_callback(logger.debug)
    return conn


def init_db() -> None:
    """Create tables if they don't exist."""
    conn = _connect()
    conn.executescript("""
        -- Habits (defined by user). Archived habits are kept but never scored.
        CREATE TABLE IF NOT EXISTS habits (
            id          INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id     INTEGER NOT NULL,
            name        TEXT    NOT NULL,
            archived    INTEGER NOT NULL DEFAULT 0,
            sort_order  INTEGER NOT NULL DEFAULT 0,
            created_at  TEXT    NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_habits_user
            ON habits(user_id, archived);

        -- One row per (user, habit, day) that was checked off
        CREATE TABLE IF NOT EXISTS habit_completions (
            id         INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id    INTEGER NOT NULL,
            habit_id   INTEGER NOT NULL REFERENCES habits(id),
            day        TEXT    NOT NULL,
            completed  INTEGER NOT NULL DEFAULT 1
        );
        CREATE UNIQUE INDEX IF NOT EXISTS idx_completions_user_habit_day
            ON habit_completions(user_id, habit_id, day);
        CREATE INDEX IF NOT EXISTS idx_completions_user_day
            ON habit_completions(user_id, day);

        -- Per-user settings
        CREATE TABLE IF NOT EXISTS user_settings (
            user_id         INTEGER PRIMARY KEY,
            pass_percentage INTEGER NOT NULL
                CHECK (pass_percentage BETWEEN 0 AND 100)
        );
    """)
    conn.close()
    logger.info("Database initialized at %s", DB_PATH)


# ═══════════════════════════════════════════════════════════════════════════
# Habits
# ═══════════════════════════════════════════════════════════════════════════

def create_habit(user_id: int, name: str, sort_order: int = 0) -> int:
    """Create a new habit. Returns habit id."""
    now = datetime.now(TZ).isoformat()
    conn = _connect()
    cur = conn.execute(
        "INSERT INTO habits (user_id, name, sort_order, created_at) VALUES (?, ?, ?, ?)",
        (user_id, name, sort_order, now),
    )
    conn.commit()
    hid = cur.lastrowid
    conn.close()
    return hid


def create_habits(user_id: int, names: list[str]) -> int:
    """Insert several habits in one transaction. Returns number inserted."""
    if not names:
        return 0
    now = datetime.now(TZ).isoformat()
    conn = _connect()
    conn.executemany(
        "INSERT INTO habits (user_id, name, created_at) VALUES (?, ?, ?)",
        [(user_id, name, now) for name in names],
    )
    conn.commit()
    conn.close()
    return len(names)


def get_active_habits(user_id: int) -> list[dict]:
    """Non-archived habits in display order (sort_order, then creation)."""
    conn = _connect()
    rows = conn.execute(
        """SELECT id, name, sort_order, created_at FROM habits
           WHERE user_id = ? AND archived = 0
           ORDER BY sort_order, created_at, id""",
        (user_id,),
    ).fetchall()
    conn.close()
    return [dict(r) for r in rows]


def count_active_habits(user_id: int) -> int:
    conn = _connect()
    row = conn.execute(
        "SELECT COUNT(*) as cnt FROM habits WHERE user_id = ? AND archived = 0",
        (user_id,),
    ).fetchone()
    conn.close()
    return row["cnt"] if row else 0


def habit_belongs_to(user_id: int, habit_id: int) -> bool:
    conn = _connect()
    row = conn.execute(
        "SELECT 1 FROM habits WHERE id = ? AND user_id = ?",
        (habit_id, user_id),
    ).fetchone()
    conn.close()
    return row is not None


# ═══════════════════════════════════════════════════════════════════════════
# Completions
# ═══════════════════════════════════════════════════════════════════════════

def upsert_completion(user_id: int, habit_id: int, day: str) -> None:
    """Mark a habit done on `day`. Idempotent."""
    conn = _connect()
    conn.execute(
        """INSERT INTO habit_completions (user_id, habit_id, day, completed) VALUES (?, ?, ?, 1)
           ON CONFLICT(user_id, habit_id, day) DO UPDATE SET completed = 1""",
        (user_id, habit_id, day),
    )
    conn.commit()
    conn.close()


def delete_completion(user_id: int, habit_id: int, day: str) -> int:
    """Un-mark a habit on `day`. Returns rows deleted (0 or 1)."""
    conn = _connect()
    cur = conn.execute(
        "DELETE FROM habit_completions WHERE user_id = ? AND habit_id = ? AND day = ?",
        (user_id, habit_id, day),
    )
    conn.commit()
    count = cur.rowcount
    conn.close()
    return count


def get_completed_habit_ids(user_id: int, day: str) -> list[int]:
    conn = _connect()
    rows = conn.execute(
        "SELECT habit_id FROM habit_completions WHERE user_id = ? AND day = ? AND completed = 1",
        (user_id, day),
    ).fetchall()
    conn.close()
    return [r["habit_id"] for r in rows]


def get_completion_days(user_id: int, since: str) -> list[str]:
    """Day-stamp of every completed row on or after `since`, one per row.

    Rows for archived habits are included; callers fold these into counts.
    """
    conn = _connect()
    rows = conn.execute(
        """SELECT day FROM habit_completions
           WHERE user_id = ? AND completed = 1 AND day >= ?
           ORDER BY day""",
        (user_id, since),
    ).fetchall()
    conn.close()
    return [r["day"] for r in rows]


# ═══════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════

def get_pass_percentage(user_id: int) -> int | None:
    conn = _connect()
    row = conn.execute(
        "SELECT pass_percentage FROM user_settings WHERE user_id = ?", (user_id,)
    ).fetchone()
    conn.close()
    return row["pass_percentage"] if row else None


def insert_default_settings(user_id: int, pass_percentage: int) -> int:
    """Create the settings row if missing. Returns the stored value."""
    conn = _connect()
    conn.execute(
        "INSERT OR IGNORE INTO user_settings (user_id, pass_percentage) VALUES (?, ?)",
        (user_id, pass_percentage),
    )
    conn.commit()
    row = conn.execute(
        "SELECT pass_percentage FROM user_settings WHERE user_id = ?", (user_id,)
    ).fetchone()
    conn.close()
    return row["pass_percentage"]


def upsert_pass_percentage(user_id: int, pass_percentage: int) -> None:
    conn = _connect()
    conn.execute(
        """INSERT INTO user_settings (user_id, pass_percentage) VALUES (?, ?)
           ON CONFLICT(user_id) DO UPDATE SET pass_percentage = excluded.pass_percentage""",
        (user_id, pass_percentage),
    )
    conn.commit()
    conn.close()
