from __future__ import annotations

import hashlib
import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from profiler.core.config import settings

_TABLES = ("analyses", "comparisons", "rewrites", "activities")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _get_db_path() -> Path:
    return Path(settings.analytics_db_path)


def text_digest(text: str) -> str:
    return hashlib.sha256((text or "").encode("utf-8", errors="ignore")).hexdigest()[:16]


def init_db() -> None:
    if not settings.analytics_enabled:
        return
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS analyses (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                kind TEXT NOT NULL,
                provider TEXT NOT NULL,
                text_hash TEXT NOT NULL,
                word_count INTEGER,
                overall_score INTEGER,
                override_applied INTEGER NOT NULL DEFAULT 0,
                result_json TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS comparisons (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                provider TEXT NOT NULL,
                text_a_hash TEXT NOT NULL,
                text_b_hash TEXT NOT NULL,
                score_a INTEGER,
                score_b INTEGER,
                winner TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS rewrites (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                provider TEXT NOT NULL,
                text_hash TEXT NOT NULL,
                original_length INTEGER,
                rewritten_length INTEGER,
                instructions TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS activities (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                activity_type TEXT NOT NULL,
                status TEXT NOT NULL,
                provider TEXT,
                error_code TEXT,
                latency_ms INTEGER,
                details_json TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_activities_created_at
            ON activities (created_at)
            """
        )
        conn.commit()
    purge_old_records()


def log_analysis(
    *,
    kind: str,
    provider: str,
    text: str,
    overall_score: int | None,
    override_applied: bool = False,
    result: dict[str, Any] | None = None,
) -> None:
    if not settings.analytics_enabled:
        return
    with sqlite3.connect(_get_db_path()) as conn:
        conn.execute(
            """
            INSERT INTO analyses (
                created_at, kind, provider, text_hash, word_count, overall_score, override_applied, result_json
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                _utc_now(),
                kind,
                provider,
                text_digest(text),
                len((text or "").split()),
                overall_score,
                1 if override_applied else 0,
                json.dumps(result or {}, ensure_ascii=False),
            ),
        )
        conn.commit()


def log_comparison(
    *,
    provider: str,
    text_a: str,
    text_b: str,
    score_a: int | None,
    score_b: int | None,
    winner: str | None,
) -> None:
    if not settings.analytics_enabled:
        return
    with sqlite3.connect(_get_db_path()) as conn:
        conn.execute(
            """
            INSERT INTO comparisons (
                created_at, provider, text_a_hash, text_b_hash, score_a, score_b, winner
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (_utc_now(), provider, text_digest(text_a), text_digest(text_b), score_a, score_b, winner),
        )
        conn.commit()


def log_rewrite(
    *,
    provider: str,
    text: str,
    original_length: int,
    rewritten_length: int,
    instructions: str,
) -> None:
    if not settings.analytics_enabled:
        return
    with sqlite3.connect(_get_db_path()) as conn:
        conn.execute(
            """
            INSERT INTO rewrites (
                created_at, provider, text_hash, original_length, rewritten_length, instructions
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (_utc_now(), provider, text_digest(text), original_length, rewritten_length, instructions[:500]),
        )
        conn.commit()


def log_activity(
    *,
    activity_type: str,
    status: str,
    provider: str | None = None,
    error_code: str | None = None,
    latency_ms: int | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    if not settings.analytics_enabled:
        return
    with sqlite3.connect(_get_db_path()) as conn:
        conn.execute(
            """
            INSERT INTO activities (
                created_at, activity_type, status, provider, error_code, latency_ms, details_json
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                _utc_now(),
                activity_type,
                status,
                provider,
                error_code,
                latency_ms,
                json.dumps(details or {}, ensure_ascii=False),
            ),
        )
        conn.commit()


def purge_old_records() -> dict[str, int]:
    if not settings.analytics_enabled:
        return {table: 0 for table in _TABLES}

    retention = max(1, int(settings.analytics_retention_days))
    deleted = {table: 0 for table in _TABLES}
    with sqlite3.connect(_get_db_path()) as conn:
        for table in _TABLES:
            cur = conn.execute(
                f"DELETE FROM {table} WHERE created_at < datetime('now', ?)",
                (f"-{retention} days",),
            )
            deleted[table] = int(cur.rowcount or 0)
        conn.commit()
    return deleted


def _row_to_dict(cursor: sqlite3.Cursor, row: tuple) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def get_summary() -> dict[str, Any]:
    if not settings.analytics_enabled:
        return {"enabled": False}
    with sqlite3.connect(_get_db_path()) as conn:
        totals = {table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0] for table in _TABLES}
        cur = conn.execute(
            """
            SELECT COUNT(*) FROM activities
            WHERE created_at >= datetime('now', '-7 days')
            """
        )
        activities_7d = cur.fetchone()[0]
        cur = conn.execute("SELECT AVG(overall_score) FROM analyses WHERE overall_score IS NOT NULL")
        avg_score = cur.fetchone()[0]
        cur = conn.execute("SELECT COUNT(*) FROM activities WHERE status = 'error'")
        errors = cur.fetchone()[0]
    return {
        "enabled": True,
        **totals,
        "activities_7d": activities_7d,
        "errors": errors,
        "average_score": round(avg_score, 1) if avg_score is not None else None,
    }


def get_latest(limit: int = 20) -> list[dict[str, Any]]:
    if not settings.analytics_enabled:
        return []
    with sqlite3.connect(_get_db_path()) as conn:
        cur = conn.execute(
            """
            SELECT created_at, activity_type, status, provider, error_code, latency_ms
            FROM activities
            ORDER BY id DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = cur.fetchall()
        return [_row_to_dict(cur, row) for row in rows]
