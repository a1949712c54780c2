# ============================================================================
# ReportDesk - Template Registry
#
# Purpose: Single table binding each template tag to its schema model,
#          content mode, text renderer and display label
# Inputs: Template tag
# Outputs: TemplateSpec
# Dependencies: departments, renderers, errors
# Usage: spec = get_template("finance")
#
# Changelog:
#   2026-09-25: Initial registry
#   2026-10-02: Keyed by ReportTemplate; JSON mode for the two marketing
#               client templates
# ============================================================================

from dataclasses import dataclass
from typing import Callable, Dict, Type, Union

from ReportDesk.errors import RoutingError
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
from ReportDesk.reporting.renderers import (
    RenderOptions,
    render_client_activities,
    render_client_engagement,
    render_finance,
    render_generic,
    render_ict_monthly,
    render_ict_weekly,
    render_internal_audit,
    render_marketing,
    render_weekly_client_officer,
)
from ReportDesk.reporting.schema import ContentMode, ReportModel, ReportTemplate


@dataclass(frozen=True)
class TemplateSpec:
    """Everything needed to author, serialize and render one report variant."""

    template: ReportTemplate
    model: Type[ReportModel]
    content_mode: ContentMode
    renderer: Callable[[ReportModel, RenderOptions], str]
    label: str

    @property
    def tag(self) -> str:
        return self.template.value


TEMPLATES: Dict[ReportTemplate, TemplateSpec] = {
    spec.template: spec
    for spec in (
        TemplateSpec(ReportTemplate.FINANCE, FinanceReport, ContentMode.TEXT, render_finance, "Finance Department Report"),
        TemplateSpec(ReportTemplate.ICT_MONTHLY, ICTMonthlyReport, ContentMode.TEXT, render_ict_monthly, "ICT Monthly Report"),
        TemplateSpec(ReportTemplate.ICT_WEEKLY, ICTWeeklyReport, ContentMode.TEXT, render_ict_weekly, "ICT Weekly Report"),
        TemplateSpec(ReportTemplate.MARKETING, MarketingReport, ContentMode.TEXT, render_marketing, "Marketing Department Report"),
        TemplateSpec(
            ReportTemplate.MARKETING_WEEKLY_CLIENT_OFFICER,
            WeeklyClientOfficerReport,
            ContentMode.JSON,
            render_weekly_client_officer,
            "Marketing Weekly Client Officer Report",
        ),
        TemplateSpec(
            ReportTemplate.MARKETING_CLIENT_ACTIVITIES,
            ClientActivitiesReport,
            ContentMode.JSON,
            render_client_activities,
            "Client Activity Report",
        ),
        TemplateSpec(
            ReportTemplate.INTERNAL_AUDIT,
            InternalAuditReport,
            ContentMode.TEXT,
            render_internal_audit,
            "Internal Audit Report",
        ),
        TemplateSpec(
            ReportTemplate.CLIENT_ENGAGEMENT,
            ClientEngagementReport,
            ContentMode.TEXT,
            render_client_engagement,
            "Client Engagement Report",
        ),
        TemplateSpec(ReportTemplate.GENERIC, GenericReport, ContentMode.TEXT, render_generic, "Department Report"),
    )
}


def get_template(template: Union[str, ReportTemplate]) -> TemplateSpec:
    """
    Look up a template by tag.

    Raises:
        RoutingError: If the tag names no known template
    """
    try:
        return TEMPLATES[ReportTemplate(template)]
    except ValueError as e:
        known = ", ".join(t.value for t in ReportTemplate)
        raise RoutingError(f"Unknown report template: {template!r}", details=f"Known templates: {known}") from e


def template_for(instance: ReportModel) -> TemplateSpec:
    """The registry entry for an instance, read from its template tag."""
    return get_template(getattr(instance, "template", ""))
