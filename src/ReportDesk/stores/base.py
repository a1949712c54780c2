# ============================================================================
# ReportDesk - Base Report Store Interface
#
# Purpose: Abstract base class for report persistence
# Inputs: Title, content payload, attachments
# Outputs: ReportRecord with the store-assigned identity
# Dependencies: abc, reporting.schema
# Usage: class MyStore(ReportStore): ...
#
# Changelog:
#   2026-09-28: Initial ReportStore interface
# ============================================================================

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ReportDesk.reporting.schema import Attachment, ReportRecord


class ReportStore(ABC):
    """
    Abstract base class for report stores.

    A store owns record identity and write ordering. The authoring session
    calls exactly one of ``create_report`` / ``update_report`` per submission.
    """

    @abstractmethod
    def create_report(
        self,
        title: str,
        content: str,
        attachments: Optional[List[Attachment]] = None,
    ) -> ReportRecord:
        """
        Persist a new report.

        Args:
            title: Report title
            content: Serialized content payload (text or JSON)
            attachments: Report-level attachments, if any

        Returns:
            Stored record including its new id

        Raises:
            StoreError: If the write fails
        """
        pass

    @abstractmethod
    def update_report(
        self,
        report_id: Any,
        title: str,
        content: str,
        attachments: Optional[List[Attachment]] = None,
    ) -> ReportRecord:
        """
        Replace the title and content of an existing report.

        Raises:
            StoreError: If the record does not exist or the write fails
        """
        pass

    @abstractmethod
    def get_report(self, report_id: Any) -> ReportRecord:
        """
        Fetch a stored report.

        Raises:
            StoreError: If the record does not exist or cannot be read
        """
        pass
