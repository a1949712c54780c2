# ============================================================================
# ReportDesk - Test Configuration and Fixtures
#
# Purpose: Shared pytest fixtures for testing
# Inputs: None
# Outputs: Fixtures for use in tests
# Dependencies: pytest, ReportDesk
# Usage: pytest tests/ (fixtures are automatically available)
#
# Changelog:
#   2026-09-30: Initial fixtures (acting user, reference date, fake store)
#   2026-10-06: Fake uploader with a failure switch
#   2026-10-07: Directory fixture with staff and a client portfolio
# ============================================================================

from datetime import date
from typing import Any, Dict, List, Optional

import pytest

from ReportDesk.collaborators import StaticDirectory, Uploader
from ReportDesk.errors import StoreError
from ReportDesk.reporting.schema import ActingUser, Attachment, ReportRecord
from ReportDesk.stores.base import ReportStore

# A Sunday, so week-ending defaults equal the reference date
REFERENCE_DATE = date(2026, 10, 18)


class FakeStore(ReportStore):
    """In-memory store recording every call; can be told to fail."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.records: Dict[int, ReportRecord] = {}

    def create_report(self, title, content, attachments=None):
        self.calls.append({"op": "create", "title": title, "content": content, "attachments": attachments})
        if self.error is not None:
            raise self.error
        report_id = len(self.records) + 1
        record = ReportRecord(id=report_id, title=title, content=content, attachments=attachments)
        self.records[report_id] = record
        return record

    def update_report(self, report_id, title, content, attachments=None):
        self.calls.append(
            {"op": "update", "id": report_id, "title": title, "content": content, "attachments": attachments}
        )
        if self.error is not None:
            raise self.error
        record = ReportRecord(id=report_id, title=title, content=content, attachments=attachments)
        self.records[report_id] = record
        return record

    def get_report(self, report_id):
        if report_id not in self.records:
            raise StoreError(f"Report {report_id} not found")
        return self.records[report_id]


class FakeUploader(Uploader):
    """Returns a predictable reference per file name, or raises when told to."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.uploaded: List[str] = []

    def upload(self, file):
        if self.error is not None:
            raise self.error
        self.uploaded.append(file)
        return Attachment(
            url=f"/uploads/{file}",
            filename=file,
            original_name=file,
            size=1024,
            mimetype="application/pdf",
        )


@pytest.fixture
def today():
    return REFERENCE_DATE


@pytest.fixture
def acting_user():
    return ActingUser(id=12, name="Ama Mensah", position="Finance Manager", role="DepartmentHead")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def directory():
    return StaticDirectory(
        departments=[{"id": 1, "name": "Finance"}, {"id": 2, "name": "Marketing"}],
        staff=[{"id": 31, "name": "Kofi Boateng"}, {"id": 32, "name": "Efua Owusu"}],
        clients=[
            {
                "id": 101,
                "name": "Mensah Trading",
                "status": "Active",
                "servicesAvailed": '["Audit", "Tax"]',
                "loanAmount": 25000,
                "createdAt": "2026-10-14T09:30:00Z",
            },
            {
                "id": 102,
                "companyName": "Accra Foods Ltd",
                "status": "Lead",
                "loanAmount": 1200.5,
                "createdAt": "2026-01-03",
            },
            {
                "id": 103,
                "name": "Tema Logistics",
                "status": "Active",
                "servicesAvailed": [],
                "createdAt": "2026-10-12",
            },
        ],
        users=[{"id": 12, "name": "Ama Mensah"}],
    )
