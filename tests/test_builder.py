# ============================================================================
# ReportDesk - Report Builder Tests
#
# Purpose: Test fresh instances, reconstruction of existing records and titles
# Inputs: ReportRecord fixtures (JSON snapshots, legacy text, broken content)
# Outputs: Test pass/fail
# Dependencies: pytest, ReportDesk.reporting
# Usage: pytest tests/test_builder.py -v
#
# Changelog:
#   2026-10-01: Initial reconstruction tests
#   2026-10-02: Text-mode templates saved as JSON snapshots
# ============================================================================

import logging
from datetime import date

from ReportDesk.config import Config, RenderingConfig
from ReportDesk.reporting.departments import (
    ClientActivitiesReport,
    FinanceReport,
    GenericReport,
    ICTWeeklyReport,
    WeeklyClientOfficerReport,
)
from ReportDesk.reporting.registry import get_template
from ReportDesk.reporting.report_builder import ReportBuilder
from ReportDesk.reporting.schema import Attachment, ReportRecord
from ReportDesk.reporting.serializer import serialize_report
from ReportDesk.utils.serialization import serialize_report_to_json


def _record(title: str, content: str, **kwargs) -> ReportRecord:
    return ReportRecord(id=kwargs.pop("id", 7), title=title, content=content, **kwargs)


class TestNewInstance:
    def test_defaults_use_explicit_user_and_date(self, acting_user):
        builder = ReportBuilder()
        instance = builder.new_instance(get_template("ict-weekly"), acting_user, date(2026, 10, 21))
        assert isinstance(instance, ICTWeeklyReport)
        assert instance.week_ending == date(2026, 10, 18)
        assert instance.prepared_by == "Ama Mensah"

    def test_staff_and_clients_accept_plain_dicts(self, acting_user, today):
        builder = ReportBuilder()
        instance = builder.new_instance(
            get_template("client-engagement"),
            acting_user,
            today,
            clients=[{"id": 5, "name": "Volta Agro", "status": "Active"}],
        )
        assert instance.portfolio.clients[0].name == "Volta Agro"

    def test_configured_engagement_position(self, today):
        from ReportDesk.reporting.schema import ActingUser

        config = Config(rendering=RenderingConfig(default_engagement_position="Engagement Lead"))
        instance = ReportBuilder(config).new_instance(get_template("client-engagement"), ActingUser(), today)
        assert instance.header.position == "Engagement Lead"


class TestReconstruct:
    def test_json_snapshot_parsed_exactly(self, acting_user, today):
        builder = ReportBuilder()
        spec = get_template("marketing-client-activities")
        original = builder.new_instance(spec, acting_user, today)
        original.client_name = "Mensah Trading"
        original.activities[0].time_spent = "2 Hours"
        record = _record("Client Activity Report - Mensah Trading - Q3", serialize_report(original))

        rebuilt = builder.reconstruct(spec, record, acting_user, date(2027, 1, 1))
        assert rebuilt == original

    def test_broken_json_falls_back_to_title(self, acting_user, today, caplog):
        spec = get_template("marketing-client-activities")
        record = _record("Client Activity Report - Mensah Trading - Q3 2026", '{"template": "marketing-client')

        with caplog.at_level(logging.WARNING):
            rebuilt = ReportBuilder().reconstruct(spec, record, acting_user, today)

        assert isinstance(rebuilt, ClientActivitiesReport)
        assert rebuilt.client_name == "Mensah Trading"
        assert rebuilt.reporting_period == "Q3 2026"
        assert "Falling back to defaults" in caplog.text

    def test_invalid_snapshot_falls_back(self, acting_user, today):
        spec = get_template("marketing-weekly-client-officer")
        record = _record("Marketing Weekly Client Officer Report - Week 2 (x)", '{"tasks": [{"status": "Lost"}]}')
        rebuilt = ReportBuilder().reconstruct(spec, record, acting_user, today)
        assert isinstance(rebuilt, WeeklyClientOfficerReport)
        assert rebuilt.week_number == 2

    def test_legacy_text_salvages_title(self, acting_user, today):
        spec = get_template("finance")
        record = _record("Finance Department Report - March 2025", "FINANCE DEPARTMENT REPORT\n...")
        rebuilt = ReportBuilder().reconstruct(spec, record, acting_user, today)
        assert isinstance(rebuilt, FinanceReport)
        assert rebuilt.reporting_period.month == "March"
        assert rebuilt.reporting_period.year == 2025
        assert rebuilt.revenue.prinstine_consult is None

    def test_text_template_with_json_snapshot(self, acting_user, today):
        builder = ReportBuilder()
        spec = get_template("finance")
        original = builder.new_instance(spec, acting_user, today)
        original.revenue.other_revenue = 75
        record = _record("Finance Department Report - October 2026", serialize_report_to_json(original))
        assert builder.reconstruct(spec, record, acting_user, today) == original

    def test_generic_restores_title_and_content(self, acting_user, today):
        record = _record(
            "Weekly update",
            "Everything on track",
            attachments=[Attachment(url="/uploads/a.pdf")],
        )
        rebuilt = ReportBuilder().reconstruct(get_template("generic"), record, acting_user, today)
        assert isinstance(rebuilt, GenericReport)
        assert (rebuilt.title, rebuilt.content) == ("Weekly update", "Everything on track")
        assert rebuilt.attachments[0].url == "/uploads/a.pdf"


class TestBuildTitle:
    def test_existing_title_kept(self):
        assert ReportBuilder.build_title(FinanceReport(), "Finance Report - Q3") == "Finance Report - Q3"

    def test_template_pattern_for_new_reports(self, acting_user, today):
        instance = ReportBuilder().new_instance(get_template("marketing-weekly-client-officer"), acting_user, today)
        title = ReportBuilder.build_title(instance)
        assert title == "Marketing Weekly Client Officer Report - Week 3 (Oct 12 - Oct 18)"

    def test_blank_existing_title_ignored(self):
        report = ICTWeeklyReport(week_ending="2026-10-18")
        assert ReportBuilder.build_title(report, "  ") == "ICT Weekly Report - Week Ending 2026-10-18"
