# ============================================================================
# ReportDesk - Template Router
#
# Purpose: Choose the report template for a department, an optional report
#          type hint and an optional existing report title
# Inputs: Department name, report type hint, existing title / stored content
# Outputs: TemplateSpec
# Dependencies: reporting.registry
# Usage: spec = route("ICT Support", existing_title="ICT Monthly Report - March")
#
# Changelog:
#   2026-09-25: Initial router (substring rules, exact-match table, fallback)
#   2026-10-02: stored_template / hint_for_template so an explicit template tag
#               in JSON content wins over title inference
# ============================================================================

"""
Template routing.

Precedence, first match wins:

1. Department name contains "ict": monthly when the hint is "monthly" or the
   title mentions "monthly"; weekly otherwise.
2. Contains "marketing": client-specific activities, then weekly client
   officer, by hint or title phrase; the general marketing report otherwise.
3. Contains "client engagement" or "audit": audit by hint or title, then
   client engagement by hint or title, then the department's own template.
4. Exact-match table on the normalized department name.
5. Generic fallback.

Substring rules are checked before the exact-match table, and a department's
default template only applies after the hint and the title have both failed
to select one. Either head of the client engagement / audit pair may author
the other's template when it is requested explicitly.
"""

from typing import Optional

from ReportDesk.logging_utils import get_logger
from ReportDesk.reporting.registry import TemplateSpec, get_template
from ReportDesk.reporting.schema import ReportTemplate
from ReportDesk.utils.serialization import stored_template

logger = get_logger(__name__)

# Report type hints understood by route()
HINT_MONTHLY = "monthly"
HINT_CLIENT_ACTIVITIES = "client-specific-activities"
HINT_WEEKLY_CLIENT_OFFICER = "weekly-client-officer"
HINT_AUDIT = "audit"
HINT_CLIENT_ENGAGEMENT = "client-engagement"

CLIENT_ACTIVITIES_TITLE_PHRASES = ("client-specific activities", "client activity report", "client-specific")
WEEKLY_OFFICER_PHRASES = ("weekly client officer", "client officer report")

EXACT_MATCH = {
    "internal audit": ReportTemplate.INTERNAL_AUDIT,
    "audit and engagement": ReportTemplate.INTERNAL_AUDIT,
    "finance": ReportTemplate.FINANCE,
    "finance department": ReportTemplate.FINANCE,
    "client engagement": ReportTemplate.CLIENT_ENGAGEMENT,
}

_TEMPLATE_HINTS = {
    ReportTemplate.ICT_MONTHLY: HINT_MONTHLY,
    ReportTemplate.MARKETING_CLIENT_ACTIVITIES: HINT_CLIENT_ACTIVITIES,
    ReportTemplate.MARKETING_WEEKLY_CLIENT_OFFICER: HINT_WEEKLY_CLIENT_OFFICER,
    ReportTemplate.INTERNAL_AUDIT: HINT_AUDIT,
    ReportTemplate.CLIENT_ENGAGEMENT: HINT_CLIENT_ENGAGEMENT,
}


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _choose(department: str, hint: str, title: str) -> ReportTemplate:
    if "ict" in department:
        if hint == HINT_MONTHLY or "monthly" in title:
            return ReportTemplate.ICT_MONTHLY
        return ReportTemplate.ICT_WEEKLY

    if "marketing" in department:
        if hint == HINT_CLIENT_ACTIVITIES or any(p in title for p in CLIENT_ACTIVITIES_TITLE_PHRASES):
            return ReportTemplate.MARKETING_CLIENT_ACTIVITIES
        if hint == HINT_WEEKLY_CLIENT_OFFICER or any(p in title for p in WEEKLY_OFFICER_PHRASES):
            return ReportTemplate.MARKETING_WEEKLY_CLIENT_OFFICER
        return ReportTemplate.MARKETING

    if "client engagement" in department or "audit" in department:
        if hint == HINT_AUDIT or "audit" in title:
            return ReportTemplate.INTERNAL_AUDIT
        if hint == HINT_CLIENT_ENGAGEMENT or "client engagement" in title:
            return ReportTemplate.CLIENT_ENGAGEMENT
        if "client engagement" in department:
            return ReportTemplate.CLIENT_ENGAGEMENT
        return ReportTemplate.INTERNAL_AUDIT

    return EXACT_MATCH.get(department, ReportTemplate.GENERIC)


def route(
    department_name: Optional[str],
    report_type_hint: Optional[str] = None,
    existing_title: Optional[str] = None,
) -> TemplateSpec:
    """
    Select the template for authoring or editing a report.

    Args:
        department_name: Department of the acting head; blank routes to generic
        report_type_hint: Explicit report type ("monthly", "audit", ...)
        existing_title: Title of the report being edited, if any

    Returns:
        TemplateSpec of the chosen template
    """
    department = _normalize(department_name)
    hint = _normalize(report_type_hint)
    title = _normalize(existing_title)

    template = _choose(department, hint, title) if department else ReportTemplate.GENERIC
    logger.debug(
        f"Routed department={department_name!r} hint={report_type_hint!r} "
        f"title={existing_title!r} -> {template.value}"
    )
    return get_template(template)


def hint_for_template(template: Optional[ReportTemplate]) -> Optional[str]:
    """Router hint that selects ``template``, or None when no hint does."""
    if template is None:
        return None
    return _TEMPLATE_HINTS.get(template)


def route_existing(
    department_name: Optional[str],
    existing_title: Optional[str],
    existing_content: Optional[str],
    report_type_hint: Optional[str] = None,
) -> TemplateSpec:
    """
    Route an existing record, preferring a template tag stored in its content.

    An explicit hint from the caller still wins over the stored tag. Legacy
    records without a tag fall back to title inference.
    """
    hint = report_type_hint or hint_for_template(stored_template(existing_content))
    return route(department_name, hint, existing_title)
