# ============================================================================
# ReportDesk - SQLite Report Store
#
# Purpose: Persist report records to SQLite for lightweight local storage
# Inputs: Title, content, attachments
# Outputs: SQLite database (reports table)
# Dependencies: pathlib, sqlite3, json, base
# Usage: store = SQLiteReportStore("reports/reportdesk.db"); store.create_report(title, content)
#
# Changelog:
#   2026-09-29: Initial SQLite store, one row per report record
#   2026-10-08: updated_at_utc column; list_reports for the CLI
# ============================================================================

import json
import sqlite3
from pathlib import Path
from typing import Any, List, Optional

from ReportDesk.errors import StoreError
from ReportDesk.logging_utils import get_logger
from ReportDesk.reporting.schema import Attachment, ReportRecord
from ReportDesk.stores.base import ReportStore
from ReportDesk.utils.time import get_utc_timestamp

logger = get_logger(__name__)

_INIT_SQL = """
CREATE TABLE IF NOT EXISTS reports (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    attachments_json TEXT,
    created_at_utc TEXT NOT NULL,
    updated_at_utc TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_reports_updated ON reports(updated_at_utc DESC);
"""


def _attachments_json(attachments: Optional[List[Attachment]]) -> Optional[str]:
    if attachments is None:
        return None
    return json.dumps(
        [a.model_dump(mode="json", by_alias=True, exclude_none=True) for a in attachments],
        separators=(",", ":"),
        ensure_ascii=False,
    )


class SQLiteReportStore(ReportStore):
    """
    Store that keeps report records in a SQLite database, one row per record.
    """

    def __init__(self, db_path: str = "reports/reportdesk.db"):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file (created if missing)
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()
        logger.info(f"SQLiteReportStore initialized: {self.db_path}")

    def _init_db(self) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.executescript(_INIT_SQL)

    def create_report(
        self,
        title: str,
        content: str,
        attachments: Optional[List[Attachment]] = None,
    ) -> ReportRecord:
        """
        Insert a new report row.

        Raises:
            StoreError: If write fails
        """
        now = get_utc_timestamp()
        try:
            with sqlite3.connect(self.db_path) as conn:
                cur = conn.execute(
                    """
                    INSERT INTO reports (title, content, attachments_json, created_at_utc, updated_at_utc)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (title, content, _attachments_json(attachments), now, now),
                )
                report_id = cur.lastrowid
        except sqlite3.Error as e:
            logger.exception("Failed to write report to SQLite")
            raise StoreError(f"Failed to write report to {self.db_path}", details=str(e)) from e

        logger.info(f"Report {report_id} written to DB: {self.db_path}")
        return ReportRecord(id=report_id, title=title, content=content, attachments=attachments)

    def update_report(
        self,
        report_id: Any,
        title: str,
        content: str,
        attachments: Optional[List[Attachment]] = None,
    ) -> ReportRecord:
        """
        Replace title, content and attachments of an existing row.

        Raises:
            StoreError: If the record does not exist or write fails
        """
        try:
            with sqlite3.connect(self.db_path) as conn:
                cur = conn.execute(
                    """
                    UPDATE reports
                    SET title = ?, content = ?, attachments_json = ?, updated_at_utc = ?
                    WHERE id = ?
                    """,
                    (title, content, _attachments_json(attachments), get_utc_timestamp(), report_id),
                )
                updated = cur.rowcount
        except sqlite3.Error as e:
            logger.exception("Failed to update report in SQLite")
            raise StoreError(f"Failed to write report to {self.db_path}", details=str(e)) from e

        if not updated:
            raise StoreError(f"Report {report_id} not found")
        logger.info(f"Report {report_id} updated in DB: {self.db_path}")
        return ReportRecord(id=report_id, title=title, content=content, attachments=attachments)

    def get_report(self, report_id: Any) -> ReportRecord:
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT id, title, content, attachments_json FROM reports WHERE id = ?",
                    (report_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read report from {self.db_path}", details=str(e)) from e

        if row is None:
            raise StoreError(f"Report {report_id} not found")
        attachments = json.loads(row[3]) if row[3] is not None else None
        return ReportRecord(id=row[0], title=row[1], content=row[2], attachments=attachments)

    def list_reports(self, limit: int = 100) -> List[dict]:
        """
        List stored reports, most recently updated first (no content).

        Returns:
            Dicts with keys id, title, created_at_utc, updated_at_utc
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(
                """
                SELECT id, title, created_at_utc, updated_at_utc
                FROM reports ORDER BY updated_at_utc DESC, id DESC LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [dict(row) for row in rows]
