# ============================================================================
# ReportDesk - ICT Department Report Schemas
#
# Purpose: ICT monthly (9 sections, fixed KPI set) and ICT weekly reports
# Inputs: Authored field values, AuthoringContext for defaults
# Outputs: ICTMonthlyReport, ICTWeeklyReport models; KPI_DEFINITIONS
# Dependencies: pydantic
# Usage: report = ICTWeeklyReport.create(context)
#
# Changelog:
#   2026-09-07: Initial ICT monthly and weekly schemas
#   2026-09-16: KPI definitions carry their own category and display unit
#   2026-09-22: Title salvage for legacy text records
# ============================================================================

import re
from dataclasses import dataclass
from typing import List, Literal, Optional

from pydantic import Field

from ReportDesk.calculator import week_ending_sunday
from ReportDesk.reporting.schema import (
    Attachment,
    AuthoringContext,
    Count,
    ISODate,
    ReportModel,
    Severity,
    SignedAmount,
)
from ReportDesk.utils.time import month_name

_TITLE_PERIOD = re.compile(r"(\w+)\s+(\d{4})")
_TITLE_WEEK_ENDING = re.compile(r"Week Ending\s+(\d{4}-\d{2}-\d{2})", re.IGNORECASE)


@dataclass(frozen=True)
class KPIDefinition:
    """Static description of one monthly ICT KPI."""

    key: str
    name: str
    category: str
    unit: str
    default_target: float
    lower_is_better: bool = False


# Display order of the KPI table
KPI_DEFINITIONS = (
    KPIDefinition("core_systems_uptime", "Core Systems Uptime", "Availability", "%", 99.9),
    KPIDefinition("website_response_time", "Website Response Time", "Performance", "s", 2, lower_is_better=True),
    KPIDefinition("tickets_resolved_sla", "Tickets Resolved within SLA", "Service Desk", "%", 95),
    KPIDefinition("avg_resolution_time", "Average Resolution Time", "Service Desk", "h", 4, lower_is_better=True),
    KPIDefinition("security_incidents", "Security Incidents", "Security", "", 0, lower_is_better=True),
    KPIDefinition("systems_patched", "Systems Patched", "Security", "%", 100),
    KPIDefinition("projects_on_time", "Projects Delivered On Time", "Projects", "%", 90),
    KPIDefinition("budget_variance", "ICT Budget Variance", "Finance", "%", 5),
    KPIDefinition("helpdesk_csat", "Helpdesk CSAT Score", "Service Desk", "/5", 4.5),
)


class KPIEntry(ReportModel):
    target: SignedAmount = None
    actual: SignedAmount = None
    remarks: str = ""


def _kpi(key: str) -> KPIEntry:
    definition = next(d for d in KPI_DEFINITIONS if d.key == key)
    return KPIEntry(target=definition.default_target)


class ICTKPIs(ReportModel):
    core_systems_uptime: KPIEntry = Field(default_factory=lambda: _kpi("core_systems_uptime"))
    website_response_time: KPIEntry = Field(default_factory=lambda: _kpi("website_response_time"))
    tickets_resolved_sla: KPIEntry = Field(default_factory=lambda: _kpi("tickets_resolved_sla"))
    avg_resolution_time: KPIEntry = Field(default_factory=lambda: _kpi("avg_resolution_time"))
    security_incidents: KPIEntry = Field(default_factory=lambda: _kpi("security_incidents"))
    systems_patched: KPIEntry = Field(default_factory=lambda: _kpi("systems_patched"))
    projects_on_time: KPIEntry = Field(default_factory=lambda: _kpi("projects_on_time"))
    budget_variance: KPIEntry = Field(default_factory=lambda: _kpi("budget_variance"))
    helpdesk_csat: KPIEntry = Field(default_factory=lambda: _kpi("helpdesk_csat"))


class Achievement(ReportModel):
    text: str = ""
    image_url: str = ""


class ProjectProgress(ReportModel):
    project: str = ""
    status: Literal["In Progress", "Completed", "On Hold", "Cancelled"] = "In Progress"
    percent_complete: Count = 0
    owner: str = ""
    eta: ISODate = None


class RiskMitigation(ReportModel):
    risk: str = ""
    impact: str = ""
    mitigation: str = ""
    status: Literal["Open", "In Progress", "Resolved", "Closed"] = "Open"


class StaffPerformance(ReportModel):
    absences: Count = None
    overtime: SignedAmount = None
    training_hours: SignedAmount = None


class ICTMonthlyReport(ReportModel):
    """ICT department monthly report."""

    template: Literal["ict-monthly"] = "ict-monthly"
    month: str = ""
    year: Optional[int] = None
    prepared_by: str = ""
    executive_summary: str = ""
    key_achievements: List[Achievement] = Field(default_factory=list)
    kpis: ICTKPIs = Field(default_factory=ICTKPIs)
    project_progress: List[ProjectProgress] = Field(default_factory=list)
    challenges: str = ""
    risk_mitigation: List[RiskMitigation] = Field(default_factory=list)
    staff_performance: StaffPerformance = Field(default_factory=StaffPerformance)
    next_month_plans: List[str] = Field(default_factory=list)
    approved_by: str = ""
    approved_signature: str = ""

    @classmethod
    def create(cls, context: AuthoringContext) -> "ICTMonthlyReport":
        return cls(
            month=month_name(context.today.month),
            year=context.today.year,
            prepared_by=context.user.name,
        )

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "ICTMonthlyReport":
        report = cls.create(context)
        match = _TITLE_PERIOD.search(title or "")
        if match:
            report.month = match.group(1)
            report.year = int(match.group(2))
        return report

    def default_title(self) -> str:
        return f"ICT Monthly Report - {self.month} {self.year or ''}".rstrip()


class CompletedTask(ReportModel):
    task: str = ""
    percent_complete: Count = 100


class PendingTask(ReportModel):
    task: str = ""
    due_date: ISODate = None
    assignee: str = ""


class Challenge(ReportModel):
    issue: str = ""
    severity: Severity = "Medium"


class UpcomingPriority(ReportModel):
    priority: str = ""
    is_high: bool = False


class ICTWeeklyReport(ReportModel):
    """ICT department weekly report."""

    template: Literal["ict-weekly"] = "ict-weekly"
    week_ending: ISODate = None
    prepared_by: str = ""
    summary: str = ""
    tasks_completed: List[CompletedTask] = Field(default_factory=list)
    tasks_pending: List[PendingTask] = Field(default_factory=list)
    challenges: List[Challenge] = Field(default_factory=list)
    support_needed: str = ""
    upcoming_priorities: List[UpcomingPriority] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)

    @classmethod
    def create(cls, context: AuthoringContext) -> "ICTWeeklyReport":
        return cls(
            week_ending=week_ending_sunday(context.today),
            prepared_by=context.user.name,
        )

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "ICTWeeklyReport":
        report = cls.create(context)
        match = _TITLE_WEEK_ENDING.search(title or "")
        if match:
            report.week_ending = match.group(1)
        return report

    def default_title(self) -> str:
        week_ending = self.week_ending.isoformat() if self.week_ending else ""
        return f"ICT Weekly Report - Week Ending {week_ending}".rstrip()
