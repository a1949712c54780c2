# ============================================================================
# ReportDesk - Report Validation Tests
#
# Purpose: Test required-field checks and field-level error messages
# Inputs: Report instances with missing fields
# Outputs: Test pass/fail
# Dependencies: pytest, ReportDesk.reporting.validation
# Usage: pytest tests/test_validation.py -v
#
# Changelog:
#   2026-10-03: Initial required-field tests
# ============================================================================

import pydantic
import pytest

from ReportDesk.errors import ValidationError
from ReportDesk.reporting.departments import (
    ClientEngagementReport,
    GenericReport,
    ICTWeeklyReport,
    WeeklyClientOfficerReport,
)
from ReportDesk.reporting.departments.finance import FinanceReport
from ReportDesk.reporting.validation import REQUIRED_FIELDS, REQUIRED_MESSAGE, missing_fields, validate_report


class TestMissingFields:
    def test_keys_are_camel_case_paths(self):
        errors = missing_fields(FinanceReport())
        assert errors["revenue.prinstineConsult"] == REQUIRED_MESSAGE
        assert "reportingPeriod.dateSubmitted" in errors
        assert "revenue.otherRevenue" not in errors

    def test_every_row_checked(self):
        report = WeeklyClientOfficerReport(
            week="One",
            reporting_period="Oct 5 - Oct 11",
            assigned_officer="Ama",
            prepared_by="Ama - Officer",
            tasks=[
                {"clientName": "A", "assignedOfficer": "Ama", "taskForWeek": "Call", "dateStarted": "2026-10-05"},
                {"clientName": "B", "assignedOfficer": "Ama", "dateStarted": "2026-10-05"},
            ],
        )
        assert missing_fields(report) == {"tasks.1.taskForWeek": REQUIRED_MESSAGE}

    def test_first_highlight_required(self):
        report = ClientEngagementReport(highlights=[])
        assert "highlights.0.text" in missing_fields(report)

    def test_whitespace_is_missing(self):
        report = ICTWeeklyReport(week_ending="2026-10-18", prepared_by="Kwame", summary="   ")
        assert missing_fields(report) == {"summary": REQUIRED_MESSAGE}

    def test_every_template_listed(self):
        from ReportDesk.reporting.schema import ReportTemplate

        assert set(REQUIRED_FIELDS) == {t.value for t in ReportTemplate}


class TestValidateReport:
    def test_raises_with_field_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_report(GenericReport(title="Update"))
        assert exc_info.value.field_errors == {"content": REQUIRED_MESSAGE}
        assert "1 required field(s) missing" in str(exc_info.value)

    def test_complete_report_passes(self):
        assert validate_report(GenericReport(title="Update", content="All good")) is True


class TestFromPydantic:
    def test_locations_become_dotted_paths(self):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            FinanceReport.model_validate({"revenue": {"otherRevenue": -5}})
        error = ValidationError.from_pydantic(exc_info.value)
        assert list(error.field_errors) == ["revenue.otherRevenue"]
