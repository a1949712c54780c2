# ============================================================================
# ReportDesk - Marketing Department Report Schemas
#
# Purpose: General marketing report, weekly client officer report and
#          client-specific activities report
# Inputs: Authored field values, AuthoringContext for defaults
# Outputs: MarketingReport, WeeklyClientOfficerReport, ClientActivitiesReport
# Dependencies: pydantic
# Usage: report = WeeklyClientOfficerReport.create(context)
#
# Changelog:
#   2026-09-08: Initial general marketing schema (staff rows from directory)
#   2026-09-11: Weekly client officer and client activities schemas (JSON mode)
#   2026-09-22: Title salvage for records whose JSON content cannot be parsed
# ============================================================================

import re
from typing import List, Literal, Optional

from pydantic import Field

from ReportDesk.calculator import WEEK_NAMES, week_of_month
from ReportDesk.reporting.schema import (
    Amount,
    Attachment,
    AuthoringContext,
    Count,
    ISODate,
    Priority,
    RecordId,
    ReportModel,
)
from ReportDesk.utils.time import month_name

_TITLE_WEEK = re.compile(r"Week\s+(\w+)", re.IGNORECASE)
_TITLE_CLIENT_ACTIVITY = re.compile(r"Client Activity Report - (.+?) - (.+)$")

TaskStatus = Literal["Pending", "In Progress", "Done", "Cancelled"]
ActivityStatus = Literal["Pending", "Completed", "Overdue"]
ReportStatus = Literal["Draft", "Submitted", "Approved", "Archived"]


# ============================================================================
# General marketing report
# ============================================================================


class StaffPerformanceRow(ReportModel):
    staff_id: RecordId = None
    staff_name: str = "Staff Member"
    completed_tasks: List[str] = Field(default_factory=list)
    pending_tasks: List[str] = Field(default_factory=list)
    tasks_completed_count: Count = 0
    tasks_pending_count: Count = 0
    support_needed: str = ""
    remarks: str = ""


class GeneralObservations(ReportModel):
    completion_rate: Amount = None
    observations: List[str] = Field(default_factory=list)


class MarketingReport(ReportModel):
    """General marketing department report with one row per staff member."""

    template: Literal["marketing"] = "marketing"
    period: str = ""
    overview: str = ""
    staff_performance: List[StaffPerformanceRow] = Field(default_factory=list)
    general_observations: GeneralObservations = Field(default_factory=GeneralObservations)
    recommendations: List[str] = Field(default_factory=list)
    conclusion: str = ""
    attachments: List[Attachment] = Field(default_factory=list)

    @classmethod
    def create(cls, context: AuthoringContext) -> "MarketingReport":
        rows = [
            StaffPerformanceRow(staff_id=member.id, staff_name=member.name or "Staff Member")
            for member in context.staff
        ]
        return cls(
            period=f"{month_name(context.today.month)} {context.today.year}",
            staff_performance=rows,
        )

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "MarketingReport":
        report = cls.create(context)
        _, sep, period = (title or "").partition(" - ")
        if sep and period.strip():
            report.period = period.strip()
        return report

    def default_title(self) -> str:
        return f"Marketing Department Report - {self.period}".rstrip(" -")


# ============================================================================
# Weekly client officer report
# ============================================================================


class OfficerTask(ReportModel):
    week: str = ""
    client_name: str = ""
    client_id: RecordId = None
    assigned_officer: str = ""
    assigned_officer_id: RecordId = None
    task_for_week: str = ""
    status: TaskStatus = "Pending"
    date_started: ISODate = None
    date_completed: ISODate = None
    priority_level: Priority = "Medium"
    support_needed: str = ""
    remarks: str = ""
    attachments: List[Attachment] = Field(default_factory=list)


class WeeklyClientOfficerReport(ReportModel):
    """Weekly task log of a marketing client officer. Persisted as JSON."""

    template: Literal["marketing-weekly-client-officer"] = "marketing-weekly-client-officer"
    week: str = ""
    week_number: Optional[int] = None
    reporting_period: str = ""
    reporting_period_start: ISODate = None
    reporting_period_end: ISODate = None
    assigned_officer: str = ""
    assigned_officer_id: RecordId = None
    prepared_by: str = ""
    approved_by: str = ""
    approved_by_signature: str = ""
    tasks: List[OfficerTask] = Field(default_factory=list)
    weekly_highlights: str = ""
    challenges: str = ""
    proposals_contracts: List[Attachment] = Field(default_factory=list)
    meeting_minutes_photos: List[Attachment] = Field(default_factory=list)
    flyers_posts_screenshots: List[Attachment] = Field(default_factory=list)
    submission_date: ISODate = None

    @classmethod
    def create(cls, context: AuthoringContext) -> "WeeklyClientOfficerReport":
        info = week_of_month(context.today)
        user = context.user
        return cls(
            week=info.week,
            week_number=info.week_number,
            reporting_period=info.period,
            reporting_period_start=info.start,
            reporting_period_end=info.end,
            assigned_officer=user.name,
            assigned_officer_id=user.id,
            prepared_by=f"{user.name} - {user.role}",
            tasks=[cls.new_task(context)],
            submission_date=context.today,
        )

    @classmethod
    def new_task(cls, context: AuthoringContext) -> OfficerTask:
        """A blank task row for the current week, assigned to the acting user."""
        info = week_of_month(context.today)
        return OfficerTask(
            week=info.week,
            assigned_officer=context.user.name,
            assigned_officer_id=context.user.id,
            date_started=info.start,
        )

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "WeeklyClientOfficerReport":
        report = cls.create(context)
        match = _TITLE_WEEK.search(title or "")
        if match:
            token = match.group(1)
            if token.isdigit() and 1 <= int(token) <= len(WEEK_NAMES):
                report.week_number = int(token)
                report.week = WEEK_NAMES[int(token) - 1]
            else:
                report.week = token
        return report

    def default_title(self) -> str:
        return f"Marketing Weekly Client Officer Report - Week {self.week_number or ''} ({self.reporting_period})"


# ============================================================================
# Client-specific activities report
# ============================================================================


class ClientActivity(ReportModel):
    activity_date: ISODate = None
    date_submitted_filed: ISODate = None
    objective_task_performed: str = ""
    activity_type: str = ""
    location: str = ""
    time_spent: str = ""
    supervisor_witness: str = ""
    supervisor_witness_id: RecordId = None
    status: ActivityStatus = "Pending"
    supporting_documents: List[Attachment] = Field(default_factory=list)


class NextAction(ReportModel):
    action: str = ""
    owner: str = ""
    owner_id: RecordId = None
    due_date: ISODate = None


class ClientActivitiesReport(ReportModel):
    """Activities performed for one client over a period. Persisted as JSON."""

    template: Literal["marketing-client-activities"] = "marketing-client-activities"
    report_title: str = ""
    client_name: str = ""
    client_id: RecordId = None
    name_of_officer: str = ""
    officer_id: RecordId = None
    department_unit: str = "Marketing Department"
    reporting_period: str = ""
    date_submitted: ISODate = None
    supervisor_manager: str = ""
    supervisor_id: RecordId = None
    activities: List[ClientActivity] = Field(default_factory=list)
    achievements_summary: str = ""
    key_outcomes: List[str] = Field(default_factory=list)
    challenges_description: str = ""
    challenges_severity: Priority = "Low"
    next_actions: List[NextAction] = Field(default_factory=list)
    general_recommendations: str = ""
    tax_filing_receipts: List[Attachment] = Field(default_factory=list)
    emails_confirmations: List[Attachment] = Field(default_factory=list)
    photos: List[Attachment] = Field(default_factory=list)
    prepared_by: str = ""
    prepared_by_signature: str = ""
    reviewed_by: str = ""
    reviewed_by_id: RecordId = None
    reviewed_by_signature: str = ""
    final_approval: str = ""
    final_approval_signature: str = ""
    report_status: ReportStatus = "Draft"

    @classmethod
    def create(cls, context: AuthoringContext) -> "ClientActivitiesReport":
        return cls(
            name_of_officer=context.user.name,
            officer_id=context.user.id,
            date_submitted=context.today,
            activities=[cls.new_activity(context)],
            prepared_by=context.user.name,
        )

    @classmethod
    def new_activity(cls, context: AuthoringContext) -> ClientActivity:
        return ClientActivity(activity_date=context.today)

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "ClientActivitiesReport":
        report = cls.create(context)
        match = _TITLE_CLIENT_ACTIVITY.search(title or "")
        if match:
            report.client_name = match.group(1).strip()
            report.reporting_period = match.group(2).strip()
        elif title:
            report.report_title = title
        return report

    def default_title(self) -> str:
        if self.report_title.strip():
            return self.report_title.strip()
        return f"Client Activity Report - {self.client_name} - {self.reporting_period}"
