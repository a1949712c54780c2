# ============================================================================
# ReportDesk - Local File Report Store
#
# Purpose: Persist report records to the local filesystem as JSON files
# Inputs: Title, content, attachments
# Outputs: JSON files in the configured directory (report_<id>.json)
# Dependencies: pathlib, json, base
# Usage: store = LocalFileReportStore("reports"); store.create_report(title, content)
#
# Changelog:
#   2026-09-28: Initial LocalFileReportStore
#   2026-10-08: Ids allocated from the highest existing record file
#   2026-10-19: Record ids limited to plain tokens so paths stay in output_dir
# ============================================================================

import json
import re
from pathlib import Path
from typing import Any, List, Optional

from ReportDesk.errors import StoreError
from ReportDesk.logging_utils import get_logger
from ReportDesk.reporting.schema import Attachment, ReportRecord
from ReportDesk.stores.base import ReportStore

logger = get_logger(__name__)

_RECORD_FILE = re.compile(r"report_(\d+)\.json$")
_SAFE_ID = re.compile(r"[A-Za-z0-9_-]+")


class LocalFileReportStore(ReportStore):
    """
    Store that writes one JSON file per report record.
    """

    def __init__(self, output_dir: str = "reports", indent: Optional[int] = None):
        """
        Initialize local file store.

        Args:
            output_dir: Directory path for record files
            indent: JSON indentation (None=compact, 2=pretty)
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.indent = indent
        logger.info(f"LocalFileReportStore initialized: {self.output_dir}")

    def _path(self, report_id: Any) -> Path:
        if isinstance(report_id, bool) or not _SAFE_ID.fullmatch(str(report_id)):
            raise StoreError(f"Invalid report id: {report_id!r}")
        return self.output_dir / f"report_{report_id}.json"

    def _next_id(self) -> int:
        ids = [int(m.group(1)) for m in (_RECORD_FILE.search(p.name) for p in self.output_dir.iterdir()) if m]
        return max(ids, default=0) + 1

    def _write(self, record: ReportRecord) -> None:
        payload = record.model_dump(mode="json", by_alias=True, exclude_none=True)
        if self.indent is None:
            text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        else:
            text = json.dumps(payload, indent=self.indent, ensure_ascii=False)
        self._path(record.id).write_text(text, encoding="utf-8")

    def create_report(
        self,
        title: str,
        content: str,
        attachments: Optional[List[Attachment]] = None,
    ) -> ReportRecord:
        """
        Write a new record file.

        Raises:
            StoreError: If write fails
        """
        try:
            record = ReportRecord(id=self._next_id(), title=title, content=content, attachments=attachments)
            self._write(record)
        except OSError as e:
            logger.exception("Failed to write report to file")
            raise StoreError(f"Failed to write report to {self.output_dir}", details=str(e)) from e

        logger.info(f"Report {record.id} written to {self._path(record.id)}")
        return record

    def update_report(
        self,
        report_id: Any,
        title: str,
        content: str,
        attachments: Optional[List[Attachment]] = None,
    ) -> ReportRecord:
        """
        Overwrite an existing record file.

        Raises:
            StoreError: If the record does not exist or write fails
        """
        if not self._path(report_id).exists():
            raise StoreError(f"Report {report_id} not found")
        try:
            record = ReportRecord(id=report_id, title=title, content=content, attachments=attachments)
            self._write(record)
        except OSError as e:
            logger.exception("Failed to update report file")
            raise StoreError(f"Failed to write report to {self._path(report_id)}", details=str(e)) from e

        logger.info(f"Report {report_id} updated in {self._path(report_id)}")
        return record

    def get_report(self, report_id: Any) -> ReportRecord:
        path = self._path(report_id)
        if not path.exists():
            raise StoreError(f"Report {report_id} not found")
        try:
            return ReportRecord.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read report from {path}", details=str(e)) from e
