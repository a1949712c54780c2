# ============================================================================
# ReportDesk - Report Serializer Tests
#
# Purpose: Test text rendering per template, JSON snapshots and round trips
# Inputs: Populated report instances
# Outputs: Test pass/fail
# Dependencies: pytest, ReportDesk.reporting, ReportDesk.utils.serialization
# Usage: pytest tests/test_serializer.py -v
#
# Changelog:
#   2026-09-25: Initial finance and ICT text rendering tests
#   2026-09-29: Marketing, audit and client engagement rendering
#   2026-10-02: JSON snapshot round trips and derived block
#   2026-10-19: Audit statement figures as currency; authored zero counts
# ============================================================================

import json
from datetime import date

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
)
from ReportDesk.reporting.renderers.base import RenderOptions, format_money
from ReportDesk.reporting.report_builder import ReportBuilder
from ReportDesk.reporting.schema import ContentMode
from ReportDesk.reporting.serializer import render_text, serialize_report
from ReportDesk.utils.serialization import DERIVED_KEY, parse_report_json, serialize_report_to_json


@pytest.fixture
def context(acting_user, today, directory):
    return ReportBuilder().context(
        acting_user,
        today,
        department_name="Marketing",
        staff=directory.list_staff(),
        clients=directory.list_clients(),
    )


def _finance(context) -> FinanceReport:
    report = FinanceReport.create(context)
    report.revenue.prinstine_consult = 1000
    report.revenue.prinstine_academy = 234.5
    report.revenue.microfinance_interest = ""
    report.expenses.operational = 400
    report.cash_flow.opening_balance = 5000
    report.cash_flow.cash_movements = [{"description": "Vehicle purchase", "amount": 3000, "reason": "Fleet"}]
    report.accounts_receivable.top_clients = [{"clientName": "Mensah Trading", "amount": 800, "daysOverdue": 45}]
    return report


def _client_activities(context) -> ClientActivitiesReport:
    report = ClientActivitiesReport.create(context)
    report.report_title = "Mensah Trading - October filings"
    report.client_name = "Mensah Trading"
    report.client_id = 101
    report.reporting_period = "October 2026"
    report.supervisor_manager = "Kofi Boateng"
    report.activities = [
        {
            "activityDate": "2026-10-13",
            "dateSubmittedFiled": "2026-10-14",
            "objectiveTaskPerformed": "Filed VAT return",
            "activityType": "Tax Filing",
            "timeSpent": "2 Hours",
            "status": "Completed",
            "supportingDocuments": [{"url": "/uploads/vat.pdf", "originalName": "vat.pdf", "size": 2048}],
        },
        {"activityDate": "2026-10-15", "objectiveTaskPerformed": "Client call", "timeSpent": "15 Min"},
    ]
    report.key_outcomes = ["Return accepted", ""]
    report.next_actions = [{"action": "Send receipt", "owner": "Ama Mensah", "dueDate": "2026-10-20"}]
    report.achievements_summary = "All filings on time"
    return report


class TestFormatting:
    @pytest.mark.parametrize(
        "value,text",
        [(1234.5, "$1,234.50"), (None, "$0.00"), ("", "$0.00"), (0.005, "$0.01"), (-20, "-$20.00")],
    )
    def test_money(self, value, text):
        assert format_money(value) == text

    def test_currency_symbol_option(self, context):
        report = _finance(context)
        text = render_text(report, RenderOptions(currency_symbol="GH₵"))
        assert "TOTAL REVENUE: GH₵1,234.50" in text


class TestFinanceText:
    def test_totals_and_balance(self, context):
        text = render_text(_finance(context))
        assert "TOTAL REVENUE: $1,234.50" in text
        assert "TOTAL EXPENSES: $400.00" in text
        assert "Closing Cash Balance: $5,834.50" in text
        assert "  1. Vehicle purchase: $3,000.00 - Fleet" in text
        assert "  1. Mensah Trading: $800.00 (45 days overdue)" in text

    def test_eleven_numbered_sections_in_order(self, context):
        lines = render_text(_finance(context)).splitlines()
        numbers = [int(line.split(".")[0]) for line in lines if line[:2].rstrip(".").isdigit() and ". " in line[:4]]
        assert numbers == list(range(1, 12))

    def test_idempotent(self, context):
        report = _finance(context)
        assert serialize_report(report) == serialize_report(report)

    def test_does_not_mutate_instance(self, context):
        report = _finance(context)
        before = report.model_dump()
        serialize_report(report)
        assert report.model_dump() == before


class TestICTText:
    def test_kpi_rows(self, context):
        report = ICTMonthlyReport.create(context)
        report.kpis.helpdesk_csat.actual = 4.2
        text = render_text(report)
        assert "Service Desk | Helpdesk CSAT Score | 4.5/5 | 4.2 | 93.3% | Amber | N/A" in text
        assert "Availability | Core Systems Uptime | 99.9% | N/A | 0.0% | N/A | N/A" in text

    def test_placeholders(self, context):
        text = render_text(ICTMonthlyReport.create(context))
        assert "[No executive summary provided]" in text
        assert "[No projects recorded]" in text
        assert "Approved By: Pending" in text

    def test_weekly_rows_keep_authoring_order(self, context):
        report = ICTWeeklyReport.create(context)
        report.tasks_completed = [{"task": "Patch servers"}, {"task": "Backup audit", "percentComplete": 50}]
        report.upcoming_priorities = [{"priority": "Firewall upgrade", "isHigh": True}]
        text = render_text(report)
        assert "  1. Patch servers (100% complete)\n  2. Backup audit (50% complete)" in text
        assert "  1. Firewall upgrade [HIGH PRIORITY]" in text
        assert "Week Ending: 2026-10-18" in text


class TestMarketingText:
    def test_general_staff_sections(self, context):
        report = MarketingReport.create(context)
        report.staff_performance[0].completed_tasks = ["Flyer design"]
        text = render_text(report)
        assert "Kofi Boateng" in text
        assert "• Flyer design" in text
        assert "• [No completed tasks listed]" in text

    def test_weekly_officer_analytics(self, context):
        report = WeeklyClientOfficerReport.create(context)
        report.tasks = [
            {"clientName": "Mensah Trading", "status": "Done", "priorityLevel": "High"},
            {"clientName": "Accra Foods", "status": "Pending"},
        ]
        text = render_text(report)
        assert "Completed: 1 (50%)" in text
        assert "High Priority Tasks: 1" in text
        assert "Clients Engaged: 2 (Mensah Trading, Accra Foods)" in text

    def test_client_activity_hours(self, context):
        text = render_text(_client_activities(context))
        assert "  Time Spent: 2 Hours (2.00 hours)" in text
        assert "  Time Spent: 15 Min (0.25 hours)" in text
        assert "  1. Send receipt (Owner: Ama Mensah) (Due: 2026-10-20)" in text


class TestAuditText:
    def test_sections_and_summary(self, context, today):
        report = InternalAuditReport.create(context)
        finding = report.new_finding(today)
        finding.risk_rating = "High"
        report.audit_findings.findings = [finding]
        report.completion_checklist.planning[0].checked = True
        text = render_text(report)
        assert "9. NOTES TO FINANCIAL STATEMENTS" in text
        assert "12. COMPLETION CHECKLIST" in text
        assert "- High Risk: 1" in text
        assert "- Outstanding: 1" in text
        assert "Ref: AF-001/2026 | Risk: High" in text
        assert "✓ Risk management and planning decisions revised as necessary." in text
        assert "☐ Agree lead schedule to financial statements." in text

    def test_additional_sheets(self, context):
        report = InternalAuditReport.create(context)
        sheet = report.new_sheet("introduction")
        sheet.data["auditPeriod"] = "FY2025"
        report.additional_sheets = [sheet]
        text = render_text(report)
        assert "Additional Sheet 1: Introduction Sheet" in text
        assert "Audit Period: FY2025" in text

    def test_financial_figures_as_currency(self, context):
        report = InternalAuditReport.create(context)
        report.equity_statement.current_year.opening_balance.capital = 1234567.5
        report.lead_schedule.accounts = [{"accountCode": "1000", "accountName": "Cash", "actualCurrentYr": -250}]
        text = render_text(report)
        assert "Opening Balance - Owners Capital: $1,234,567.50" in text
        assert "Closing Balance - Owners Capital: $0.00" in text
        assert "| -$250.00 | $0.00 | $0.00 | $0.00" in text

    def test_financial_figures_use_currency_symbol(self, context):
        report = InternalAuditReport.create(context)
        report.equity_statement.previous_year.closing_balance.retained_earnings = 9800
        text = render_text(report, RenderOptions(currency_symbol="GH₵"))
        assert "Closing Balance - Retained Earnings: GH₵9,800.00" in text


class TestClientEngagementText:
    def test_counts_from_snapshot(self, context):
        text = render_text(ClientEngagementReport.create(context))
        assert "Period Covered: 12 Oct – 18 Oct 2026" in text
        assert "Total Active Clients: 2" in text
        assert "Total Pending/New Leads: 1" in text
        assert "Total Active Audit/Consultancy Engagements: 1" in text
        assert "New Clients Signed This Week: 2" in text
        assert "Mensah Trading | Audit, Tax | Active | $25,000.00 | [Next Action]" in text
        assert "Accra Foods Ltd | N/A | Lead | $1,200.50 | [Next Action]" in text

    def test_authored_zero_new_clients_kept(self, context):
        report = ClientEngagementReport.create(context)
        report.activities.new_clients_signed = 0
        text = render_text(report)
        assert "New Clients Signed This Week: 0\n" in text
        assert "New Clients Signed This Week: 2" not in text

    def test_feedback_average(self, context):
        report = ClientEngagementReport.create(context)
        report.feedback.client_feedback = [
            {"clientName": "A", "rating": 5},
            {"clientName": "B", "rating": 3},
            {"clientName": "C", "rating": 4},
        ]
        assert "Average Rating: 4.0/5" in render_text(report)

    def test_portfolio_row_limit_and_filter(self, context):
        report = ClientEngagementReport.create(context)
        text = render_text(report, RenderOptions(portfolio_row_limit=1))
        assert "Accra Foods Ltd |" not in text
        report.portfolio.filter_service_type = "Consulting"
        assert "[No clients found]" in render_text(report)

    def test_blank_highlights_skipped(self, context):
        report = ClientEngagementReport.create(context)
        report.highlights[1].text = "Signed two new clients"
        text = render_text(report)
        assert "Highlight 2:\nSigned two new clients" in text
        assert "Highlight 1:" not in text


class TestGeneric:
    def test_content_verbatim(self):
        report = GenericReport(title="Update", content="Line one\n  Line two  ")
        assert serialize_report(report) == "Line one\n  Line two  "


class TestJSONMode:
    def test_client_activities_default_mode(self, context):
        content = serialize_report(_client_activities(context))
        data = json.loads(content)
        assert data["template"] == "marketing-client-activities"
        assert data["activities"][0]["objectiveTaskPerformed"] == "Filed VAT return"
        assert data[DERIVED_KEY] == {"activityHours": [2.0, 0.25]}

    def test_round_trip(self, context):
        report = _client_activities(context)
        assert parse_report_json(serialize_report(report)) == report

    def test_round_trip_weekly_officer(self, context):
        report = WeeklyClientOfficerReport.create(context)
        report.tasks[0].client_name = "Mensah Trading"
        report.tasks[0].status = "Done"
        report.proposals_contracts = [{"url": "/uploads/p.pdf"}]
        parsed = parse_report_json(serialize_report(report), WeeklyClientOfficerReport)
        assert parsed == report
        assert json.loads(serialize_report(report))[DERIVED_KEY]["completionPercent"] == 100

    def test_round_trip_any_template(self, context):
        for report in (_finance(context), ClientEngagementReport.create(context), InternalAuditReport.create(context)):
            assert parse_report_json(serialize_report(report, ContentMode.JSON)) == report

    def test_snapshot_is_deterministic(self, context):
        report = _client_activities(context)
        assert serialize_report_to_json(report) == serialize_report_to_json(report.model_copy(deep=True))

    def test_derived_block_ignored_on_parse(self, context):
        data = json.loads(serialize_report(_finance(context), "json"))
        data[DERIVED_KEY]["cashFlow"]["closing"] = -1
        parsed = parse_report_json(json.dumps(data))
        assert isinstance(parsed, FinanceReport)
        assert parsed.cash_flow.opening_balance == 5000

    def test_parse_rejects_non_objects(self):
        with pytest.raises(ValueError):
            parse_report_json("[1, 2]")

    def test_dates_as_iso_strings(self, context):
        data = json.loads(serialize_report(_client_activities(context)))
        assert data["dateSubmitted"] == date(2026, 10, 18).isoformat()
