"""Badge view tracking backed by SQLite.

Tracking is best-effort: a failure here must never affect badge rendering, so
track_badge_view() logs and swallows storage errors.
"""
from __future__ import annotations

import logging
import sqlite3
import time
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

LOGGER = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".badgify" / "views.db"

VIEW_RETENTION_SECONDS = 60 * 60 * 24 * 30
RECENT_VIEWS_LIMIT = 100
TOP_BADGES_LIMIT = 10


class ViewStore:
    """SQLite store for badge views with WAL mode."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.init_db()

    def init_db(self) -> None:
        """Create tables if they do not exist."""
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS badge_views (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp REAL NOT NULL,
                label TEXT NOT NULL,
                value TEXT NOT NULL,
                path TEXT NOT NULL,
                user_agent TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_badge_views_badge
                ON badge_views (label, value);

            CREATE TABLE IF NOT EXISTS counters (
                name TEXT PRIMARY KEY,
                value INTEGER NOT NULL
            );
        """)
        self.conn.commit()

    def record_view(
        self,
        label: str,
        value: str,
        path: str,
        user_agent: str | None = None,
        timestamp: float | None = None,
    ) -> None:
        """Insert one view, bump the lifetime total and drop views past the
        retention window."""
        ts = time.time() if timestamp is None else timestamp
        self.conn.execute(
            "INSERT INTO badge_views (timestamp, label, value, path, user_agent) "
            "VALUES (?, ?, ?, ?, ?)",
            (ts, label, value, path, user_agent),
        )
        self.conn.execute(
            "INSERT INTO counters (name, value) VALUES ('total_views', 1) "
            "ON CONFLICT(name) DO UPDATE SET value = value + 1"
        )
        self.conn.commit()
        self.purge_expired(now=ts)

    def recent_views(self, limit: int = RECENT_VIEWS_LIMIT) -> list[dict]:
        """Return the newest views first."""
        rows = self.conn.execute(
            "SELECT timestamp, label, value, path, user_agent FROM badge_views "
            "ORDER BY timestamp DESC, id DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [dict(row) for row in rows]

    def total_views(self) -> int:
        """Views recorded since the store was created or last cleared.

        Unlike recent_views(), this count survives retention purges.
        """
        row = self.conn.execute(
            "SELECT value FROM counters WHERE name = 'total_views'"
        ).fetchone()
        return int(row["value"]) if row else 0

    def badge_view_count(self, label: str, value: str) -> int:
        row = self.conn.execute(
            "SELECT COUNT(*) AS n FROM badge_views WHERE label = ? AND value = ?",
            (label, value),
        ).fetchone()
        return int(row["n"])

    def purge_expired(self, now: float | None = None) -> int:
        """Delete views older than the retention window. Returns rows removed."""
        cutoff = (time.time() if now is None else now) - VIEW_RETENTION_SECONDS
        cur = self.conn.execute("DELETE FROM badge_views WHERE timestamp < ?", (cutoff,))
        self.conn.commit()
        return cur.rowcount

    def clear(self) -> None:
        """Delete all views and reset the lifetime total."""
        self.conn.execute("DELETE FROM badge_views")
        self.conn.execute("DELETE FROM counters")
        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()


def track_badge_view(
    label: str,
    value: str,
    path: str,
    user_agent: str | None = None,
    db_path: Path | None = None,
) -> bool:
    """Record a view. Returns False instead of raising if storage fails."""
    try:
        store = ViewStore(db_path)
        try:
            store.record_view(label, value, path, user_agent)
        finally:
            store.close()
    except (sqlite3.Error, OSError) as exc:
        LOGGER.warning("Badge view tracking failed: %s", exc)
        return False
    return True


def get_analytics_stats(store: ViewStore) -> dict:
    """Summarize the most recent views.

    Returns total_views (lifetime, see ViewStore.total_views), top_badges
    (label/value by view count), recent_views and views_by_day (UTC dates,
    oldest first).
    """
    recent = store.recent_views(RECENT_VIEWS_LIMIT)

    badge_counts = Counter(f"{v['label']}/{v['value']}" for v in recent)
    top_badges = [
        {"badge": badge, "views": views}
        for badge, views in badge_counts.most_common(TOP_BADGES_LIMIT)
    ]

    day_counts: Counter[str] = Counter()
    for view in recent:
        day = datetime.fromtimestamp(view["timestamp"], tz=timezone.utc).date().isoformat()
        day_counts[day] += 1

    return {
        "total_views": store.total_views(),
        "top_badges": top_badges,
        "recent_views": recent,
        "views_by_day": [{"date": d, "count": c} for d, c in sorted(day_counts.items())],
    }
