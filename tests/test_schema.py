# ============================================================================
# ReportDesk - Report Schema Tests
#
# Purpose: Test department defaults, field coercion, title salvage and the
#          template-tagged union
# Inputs: AuthoringContext built from fixtures
# Outputs: Test pass/fail
# Dependencies: pytest, pydantic, ReportDesk.reporting
# Usage: pytest tests/test_schema.py -v
#
# Changelog:
#   2026-09-06: Initial finance and generic schema tests
#   2026-09-22: Title salvage for every department
#   2026-10-02: Discriminated union on the template tag
# ============================================================================

from datetime import date

import pydantic
import pytest

from ReportDesk.reporting.departments import (
    ClientActivitiesReport,
    ClientEngagementReport,
    FinanceReport,
    GenericReport,
    ICTMonthlyReport,
    ICTWeeklyReport,
    InternalAuditReport,
    MarketingReport,
    WeeklyClientOfficerReport,
    report_instance_adapter,
)
from ReportDesk.reporting.report_builder import ReportBuilder
from ReportDesk.reporting.schema import Attachment, ClientRecord


@pytest.fixture
def context(acting_user, today, directory):
    return ReportBuilder().context(
        acting_user,
        today,
        department_name="Internal Audit",
        staff=directory.list_staff(),
        clients=directory.list_clients(),
    )


class TestDefaults:
    def test_finance_period_from_reference_date(self, context):
        report = FinanceReport.create(context)
        period = report.reporting_period
        assert (period.month, period.year) == ("October", 2026)
        assert period.date_submitted == date(2026, 10, 18)
        assert period.submitted_by == "Ama Mensah"
        assert period.position == "Finance Manager"
        assert report.default_title() == "Finance Department Report - October 2026"

    def test_ict_kpis_carry_default_targets(self, context):
        report = ICTMonthlyReport.create(context)
        assert report.kpis.core_systems_uptime.target == 99.9
        assert report.kpis.security_incidents.target == 0
        assert report.kpis.helpdesk_csat.actual is None

    def test_ict_weekly_week_ending(self, context):
        report = ICTWeeklyReport.create(context)
        assert report.week_ending == date(2026, 10, 18)
        assert report.default_title() == "ICT Weekly Report - Week Ending 2026-10-18"

    def test_marketing_one_row_per_staff_member(self, context):
        report = MarketingReport.create(context)
        assert [row.staff_name for row in report.staff_performance] == ["Kofi Boateng", "Efua Owusu"]
        assert report.staff_performance[0].staff_id == 31
        assert report.period == "October 2026"

    def test_weekly_officer_week_and_first_task(self, context):
        report = WeeklyClientOfficerReport.create(context)
        assert report.week == "Three"
        assert report.week_number == 3
        assert report.reporting_period == "Oct 12 - Oct 18"
        assert report.prepared_by == "Ama Mensah - DepartmentHead"
        assert len(report.tasks) == 1
        assert report.tasks[0].date_started == date(2026, 10, 12)
        assert report.tasks[0].status == "Pending"

    def test_client_activities_first_activity(self, context):
        report = ClientActivitiesReport.create(context)
        assert report.activities[0].activity_date == date(2026, 10, 18)
        assert report.department_unit == "Marketing Department"
        assert report.report_status == "Draft"

    def test_audit_working_papers_and_checklist(self, context):
        report = InternalAuditReport.create(context)
        assert len(report.working_papers) == 10
        assert report.working_papers[0].workpaper_ref == "WOP 1"
        assert len(report.completion_checklist.preparation) == 5
        assert report.introduction.department_name == "Internal Audit"

    def test_audit_reference_numbers(self, context, today):
        report = InternalAuditReport.create(context)
        report.audit_findings.findings = [report.new_finding(today)]
        assert report.new_finding(today).ref_number == "AF-002/2026"
        assert report.new_compliance_issue(today).issue_id == "CL-001"

    def test_audit_additional_sheet_seeded(self, context):
        report = InternalAuditReport.create(context)
        sheet = report.new_sheet("financialNotes")
        assert sheet.sheet_name == "Notes to Financial Statements"
        assert "generalInfo" in sheet.data
        assert report.new_sheet("workingPapers").data == []

    def test_client_engagement_portfolio_snapshot(self, context):
        report = ClientEngagementReport.create(context)
        assert report.header.week_ending == date(2026, 10, 18)
        assert len(report.highlights) == 3
        clients = report.portfolio.clients
        assert [c.name for c in clients] == ["Mensah Trading", "Accra Foods Ltd", "Tema Logistics"]
        assert clients[0].services == ["Audit", "Tax"]
        assert clients[0].created_at == date(2026, 10, 14)

    def test_client_engagement_position_falls_back(self, today):
        from ReportDesk.reporting.schema import ActingUser

        context = ReportBuilder().context(ActingUser(name="Yaw"), today)
        report = ClientEngagementReport.create(context)
        assert report.header.position == "Head of Client Engagement"


class TestFieldCoercion:
    def test_blank_amount_is_none(self):
        report = FinanceReport.model_validate({"revenue": {"prinstineConsult": ""}})
        assert report.revenue.prinstine_consult is None

    def test_negative_amount_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            FinanceReport.model_validate({"revenue": {"otherRevenue": -1}})

    def test_signed_amounts_accept_negatives(self):
        report = InternalAuditReport.model_validate({"cashFlow": {"investing": [{"currentYear": -500}]}})
        assert report.cash_flow.investing[0].current_year == -500

    def test_timestamp_dates_truncated(self):
        report = ICTWeeklyReport.model_validate({"weekEnding": "2026-10-18T00:00:00.000Z"})
        assert report.week_ending == date(2026, 10, 18)

    def test_enumerations_are_closed(self):
        with pytest.raises(pydantic.ValidationError):
            WeeklyClientOfficerReport.model_validate({"tasks": [{"priorityLevel": "Urgent"}]})

    def test_assignment_is_validated(self):
        report = FinanceReport()
        with pytest.raises(pydantic.ValidationError):
            report.revenue.utilities = "lots"

    def test_bare_url_attachment(self):
        assert Attachment.model_validate("/uploads/a.pdf").url == "/uploads/a.pdf"

    def test_client_record_keeps_extra_keys(self):
        record = ClientRecord.model_validate({"id": 1, "name": "X", "region": "Ashanti"})
        assert record.model_extra == {"region": "Ashanti"}


class TestTitleSalvage:
    def test_finance_month_and_year(self, context):
        report = FinanceReport.from_title("Finance Department Report - March 2025", context)
        assert (report.reporting_period.month, report.reporting_period.year) == ("March", 2025)

    def test_ict_weekly_week_ending(self, context):
        report = ICTWeeklyReport.from_title("ICT Weekly Report - Week Ending 2026-09-06", context)
        assert report.week_ending == date(2026, 9, 6)

    def test_weekly_officer_week_number(self, context):
        title = "Marketing Weekly Client Officer Report - Week 2 (Oct 5 - Oct 11)"
        report = WeeklyClientOfficerReport.from_title(title, context)
        assert (report.week, report.week_number) == ("Two", 2)

    def test_client_activities_client_and_period(self, context):
        report = ClientActivitiesReport.from_title("Client Activity Report - Mensah Trading - Q3 2026", context)
        assert report.client_name == "Mensah Trading"
        assert report.reporting_period == "Q3 2026"

    def test_audit_department_and_period(self, context):
        report = InternalAuditReport.from_title("Internal Audit Report - Treasury - FY2025", context)
        assert report.introduction.department_name == "Treasury"
        assert report.introduction.audit_period == "FY2025"

    def test_unmatched_title_keeps_defaults(self, context):
        report = FinanceReport.from_title("Something else", context)
        assert report.reporting_period.month == "October"


class TestReportInstanceUnion:
    def test_template_tag_selects_model(self):
        instance = report_instance_adapter.validate_python({"template": "ict-weekly", "summary": "Quiet week"})
        assert isinstance(instance, ICTWeeklyReport)
        assert instance.summary == "Quiet week"

    def test_unknown_tag_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            report_instance_adapter.validate_python({"template": "payroll"})

    def test_generic_title(self):
        assert GenericReport(title="  Weekly update ").default_title() == "Weekly update"
