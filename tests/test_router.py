# ============================================================================
# ReportDesk - Template Router Tests
#
# Purpose: Test routing precedence, fallbacks and stored-tag routing
# Inputs: Department names, hints, titles, stored content
# Outputs: Test pass/fail
# Dependencies: pytest, ReportDesk.router
# Usage: pytest tests/test_router.py -v
#
# Changelog:
#   2026-10-01: Initial routing precedence tests
#   2026-10-03: route_existing prefers the stored template tag
# ============================================================================

import pytest

from ReportDesk.errors import RoutingError
from ReportDesk.reporting.registry import TEMPLATES, get_template
from ReportDesk.reporting.schema import ContentMode, ReportTemplate
from ReportDesk.router import hint_for_template, route, route_existing


def _tag(department, hint=None, title=None) -> str:
    return route(department, hint, title).tag


class TestRoute:
    def test_ict_monthly_from_title(self):
        assert _tag("ICT Support", None, "ICT Monthly Report - March") == "ict-monthly"

    def test_ict_defaults_to_weekly(self):
        assert _tag("ICT Support") == "ict-weekly"

    def test_ict_monthly_from_hint(self):
        assert _tag("  ICT ", "Monthly") == "ict-monthly"

    def test_audit_head_requests_client_engagement(self):
        assert _tag("Audit", "client-engagement") == "client-engagement"

    def test_client_engagement_head_requests_audit(self):
        assert _tag("Client Engagement", "audit") == "internal-audit"

    def test_audit_title_beats_department_default(self):
        assert _tag("Client Engagement", None, "Internal Audit Report - Q3") == "internal-audit"

    def test_department_defaults(self):
        assert _tag("Client Engagement") == "client-engagement"
        assert _tag("Internal Audit") == "internal-audit"
        assert _tag("Audit and Engagement") == "internal-audit"

    def test_unknown_department_is_generic(self):
        assert _tag("Unknown Dept") == "generic"

    @pytest.mark.parametrize("department", ["", "   ", None])
    def test_blank_department_is_generic(self, department):
        assert _tag(department) == "generic"

    @pytest.mark.parametrize("department", ["Finance", "finance department", " FINANCE "])
    def test_finance_exact_match(self, department):
        assert _tag(department) == "finance"

    def test_finance_substring_is_not_enough(self):
        assert _tag("Finance and Admin") == "generic"


class TestMarketingRouting:
    def test_default_is_general(self):
        assert _tag("Marketing") == "marketing"

    def test_client_activities_by_hint(self):
        assert _tag("Marketing", "client-specific-activities") == "marketing-client-activities"

    @pytest.mark.parametrize(
        "title",
        [
            "Client Activity Report - Mensah Trading - Q3",
            "Client-Specific Activities for October",
            "client-specific review",
        ],
    )
    def test_client_activities_by_title(self, title):
        assert _tag("Marketing", None, title) == "marketing-client-activities"

    def test_weekly_officer_by_title(self):
        title = "Marketing Weekly Client Officer Report - Week 3 (Oct 12 - Oct 18)"
        assert _tag("Marketing", None, title) == "marketing-weekly-client-officer"

    def test_client_activities_checked_first(self):
        assert _tag("Marketing", "weekly-client-officer", "Client activity report") == "marketing-client-activities"


class TestRouteExisting:
    def test_stored_tag_wins_over_title(self):
        spec = route_existing("Marketing", "Untitled", '{"template":"marketing-client-activities"}')
        assert spec.template is ReportTemplate.MARKETING_CLIENT_ACTIVITIES

    def test_explicit_hint_wins_over_stored_tag(self):
        content = '{"template":"marketing-client-activities"}'
        spec = route_existing("Marketing", "Untitled", content, "weekly-client-officer")
        assert spec.template is ReportTemplate.MARKETING_WEEKLY_CLIENT_OFFICER

    def test_text_content_falls_back_to_title(self):
        spec = route_existing("ICT", "ICT Monthly Report - May 2026", "ICT DEPARTMENT MONTHLY REPORT\n")
        assert spec.template is ReportTemplate.ICT_MONTHLY

    def test_malformed_json_falls_back_to_title(self):
        spec = route_existing("Marketing", "Client Activity Report - X - Y", "{not json")
        assert spec.template is ReportTemplate.MARKETING_CLIENT_ACTIVITIES

    def test_hint_for_template(self):
        assert hint_for_template(ReportTemplate.ICT_MONTHLY) == "monthly"
        assert hint_for_template(ReportTemplate.FINANCE) is None
        assert hint_for_template(None) is None


class TestRegistry:
    def test_every_template_registered(self):
        assert set(TEMPLATES) == set(ReportTemplate)

    def test_json_mode_templates(self):
        json_tags = {t.value for t, spec in TEMPLATES.items() if spec.content_mode is ContentMode.JSON}
        assert json_tags == {"marketing-weekly-client-officer", "marketing-client-activities"}

    def test_unknown_tag(self):
        with pytest.raises(RoutingError) as exc_info:
            get_template("payroll")
        assert "finance" in exc_info.value.details
