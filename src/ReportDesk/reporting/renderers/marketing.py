# ============================================================================
# ReportDesk - Marketing Report Renderers
#
# Purpose: Plain-text rendering of the three marketing report variants
# Inputs: MarketingReport / WeeklyClientOfficerReport / ClientActivitiesReport
# Outputs: Text documents
# Dependencies: calculator (task analytics, duration to hours)
# Usage: text = render_weekly_client_officer(report, RenderOptions())
#
# Changelog:
#   2026-09-13: Initial general marketing renderer
#   2026-09-14: Text views of the JSON-mode weekly officer and client
#               activities reports
# ============================================================================

from ReportDesk.calculator import duration_to_hours, task_analytics
from ReportDesk.reporting.departments.marketing import (
    ClientActivitiesReport,
    MarketingReport,
    WeeklyClientOfficerReport,
)
from ReportDesk.reporting.renderers.base import (
    RenderOptions,
    TextDocument,
    count_files,
    format_date,
    format_number,
    text_or,
)


def render_marketing(report: MarketingReport, options: RenderOptions) -> str:
    """Render the general marketing report as text."""
    doc = TextDocument()
    doc.banner("MARKETING DEPARTMENT REPORT")
    doc.field("Reporting Period", report.period)
    doc.blank()

    doc.section("Overview", 1)
    doc.line(text_or(report.overview, "[No overview provided]"))
    doc.blank()

    doc.section("Staff Performance Summary", 2)
    if not report.staff_performance:
        doc.line("[No staff performance recorded]")
        doc.blank()
    for staff in report.staff_performance:
        doc.line(staff.staff_name)
        doc.blank()
        doc.line("Key Tasks Completed / Ongoing:")
        doc.bullets(staff.completed_tasks, placeholder="• [No completed tasks listed]", indent="")
        if any(task.strip() for task in staff.pending_tasks):
            doc.blank()
            doc.line("Pending Task:")
            doc.bullets(staff.pending_tasks, indent="")
        doc.blank()
        doc.line("Status Summary:")
        doc.line(f"• Tasks Completed: {format_number(staff.tasks_completed_count, '0')}")
        doc.line(f"• Tasks Pending/Not Started: {format_number(staff.tasks_pending_count, '0')}")
        doc.blank()
        doc.line("Support Needed:")
        doc.line(f"• {text_or(staff.support_needed, 'None at this time')}")
        doc.blank()
        doc.line("Remarks:")
        doc.line(text_or(staff.remarks, "[No remarks]"))
        doc.blank()

    observations = report.general_observations
    doc.section("General Observations", 3)
    doc.line(f"• Overall Task Completion Rate: {format_number(observations.completion_rate, '[Percentage]')}%")
    doc.bullets(observations.observations, indent="")
    doc.blank()

    doc.section("Recommendations", 4)
    recommendations = [r for r in report.recommendations if r.strip()]
    doc.numbered(recommendations, placeholder="[No recommendations at this time]", indent="")
    doc.blank()

    doc.section("Conclusion", 5)
    doc.line(text_or(report.conclusion, "[Closing statement]"))

    if report.attachments:
        doc.blank()
        doc.line(f"Attachments: {count_files(report.attachments)} file(s)")

    return doc.render()


def render_weekly_client_officer(report: WeeklyClientOfficerReport, options: RenderOptions) -> str:
    """Render the weekly client officer report as text, with derived analytics."""
    doc = TextDocument()
    doc.banner("MARKETING DEPARTMENT WEEKLY CLIENT OFFICER REPORT", width=50)

    doc.section("REPORT HEADER")
    doc.line(f"Week: {text_or(report.week)} (Week {format_number(report.week_number)})")
    doc.field("Reporting Period", report.reporting_period)
    doc.field("Assigned Officer", report.assigned_officer)
    doc.field("Prepared By", report.prepared_by)
    doc.optional_field("Approved By", report.approved_by)
    doc.blank()

    doc.section("WEEKLY TASKS")
    if not report.tasks:
        doc.line("[No tasks recorded]")
    for index, task in enumerate(report.tasks, start=1):
        doc.blank()
        doc.line(f"Task {index}:")
        doc.line(f"  Client Name: {text_or(task.client_name)}")
        doc.line(f"  Assigned Officer: {text_or(task.assigned_officer)}")
        doc.line(f"  Task for the Week: {text_or(task.task_for_week)}")
        doc.line(f"  Status: {task.status}")
        doc.line(f"  Date Started: {format_date(task.date_started)}")
        if task.date_completed:
            doc.line(f"  Date Completed: {format_date(task.date_completed)}")
        doc.line(f"  Priority Level: {task.priority_level}")
        if task.support_needed:
            doc.line(f"  Support Needed: {task.support_needed}")
        if task.remarks:
            doc.line(f"  Remarks/Next Steps: {task.remarks}")
    doc.blank()

    analytics = task_analytics(report.tasks)
    doc.section("SUMMARY & ANALYTICS")
    doc.line(f"Total Tasks This Week: {analytics.total}")
    doc.line(f"Completed: {analytics.done} ({analytics.completion_percent}%)")
    doc.line(f"Pending: {analytics.pending}")
    doc.line(f"In Progress: {analytics.in_progress}")
    doc.line(f"Cancelled: {analytics.cancelled}")
    doc.line(f"High Priority Tasks: {analytics.high_priority}")
    engaged = ", ".join(analytics.clients_engaged) or "None"
    doc.line(f"Clients Engaged: {len(analytics.clients_engaged)} ({engaged})")
    if report.weekly_highlights:
        doc.blank()
        doc.line("Weekly Highlights:")
        doc.line(report.weekly_highlights)
    if report.challenges:
        doc.blank()
        doc.line("Challenges:")
        doc.line(report.challenges)
    doc.blank()

    doc.section("ATTACHMENTS")
    if report.proposals_contracts:
        doc.line(f"Proposals/Contracts: {count_files(report.proposals_contracts)} file(s)")
    if report.meeting_minutes_photos:
        doc.line(f"Meeting Minutes/Photos: {count_files(report.meeting_minutes_photos)} file(s)")
    if report.flyers_posts_screenshots:
        doc.line(f"Flyers/Posts Screenshots: {count_files(report.flyers_posts_screenshots)} file(s)")
    doc.blank()

    doc.section("APPROVAL & SIGN-OFF")
    doc.field("Prepared By", report.prepared_by)
    doc.field("Submission Date", format_date(report.submission_date))
    doc.optional_field("Approved By", report.approved_by)

    return doc.render()


def render_client_activities(report: ClientActivitiesReport, options: RenderOptions) -> str:
    """Render the client-specific activities report as text."""
    doc = TextDocument()
    doc.banner("MARKETING DEPARTMENT – CLIENT-SPECIFIC ACTIVITIES REPORT", width=58)

    doc.section("BASIC INFORMATION", 1)
    doc.field("Report Title", report.report_title)
    doc.field("Client Name", report.client_name)
    doc.field("Name of Officer", report.name_of_officer)
    doc.field("Department/Unit", report.department_unit)
    doc.field("Reporting Period", report.reporting_period)
    doc.field("Date Submitted", format_date(report.date_submitted))
    doc.field("Supervisor/Manager", report.supervisor_manager)
    doc.blank()

    doc.section("SUMMARY OF KEY ACTIVITIES", 2)
    if not report.activities:
        doc.line("[No activities recorded]")
    for index, activity in enumerate(report.activities, start=1):
        doc.blank()
        doc.line(f"Activity {index}:")
        doc.line(f"  Activity Date: {format_date(activity.activity_date)}")
        if activity.date_submitted_filed:
            doc.line(f"  Date Submitted/Filed: {format_date(activity.date_submitted_filed)}")
        doc.line(f"  Activity Type: {text_or(activity.activity_type)}")
        doc.line(f"  Objective/Task Performed: {text_or(activity.objective_task_performed)}")
        doc.line(f"  Location: {text_or(activity.location)}")
        hours = duration_to_hours(activity.time_spent)
        doc.line(f"  Time Spent: {text_or(activity.time_spent)} ({hours:.2f} hours)")
        if activity.supervisor_witness:
            doc.line(f"  Supervisor/Witness: {activity.supervisor_witness}")
        doc.line(f"  Status: {activity.status}")
        if activity.supporting_documents:
            doc.line(f"  Supporting Documents: {count_files(activity.supporting_documents)} file(s)")
    doc.blank()

    doc.section("ACHIEVEMENTS / RESULTS", 3)
    doc.field("Summary", report.achievements_summary)
    if any(outcome.strip() for outcome in report.key_outcomes):
        doc.blank()
        doc.line("Key Outcomes:")
        doc.bullets(report.key_outcomes)
    doc.blank()

    doc.section("CHALLENGES ENCOUNTERED", 4)
    if report.challenges_description:
        doc.field("Description", report.challenges_description)
        doc.field("Severity", report.challenges_severity)
    else:
        doc.line("[No challenges recorded]")
    doc.blank()

    doc.section("RECOMMENDATIONS / NEXT STEPS", 5)
    actions = [a for a in report.next_actions if a.action.strip()]
    if actions:
        doc.line("Next Actions:")
        lines = []
        for action in actions:
            text = action.action
            if action.owner:
                text += f" (Owner: {action.owner})"
            if action.due_date:
                text += f" (Due: {format_date(action.due_date)})"
            lines.append(text)
        doc.numbered(lines)
    if report.general_recommendations:
        doc.blank()
        doc.line("General Recommendations:")
        doc.line(report.general_recommendations)
    if not actions and not report.general_recommendations:
        doc.line("[No recommendations recorded]")
    doc.blank()

    doc.section("ATTACHMENTS", 6)
    if report.tax_filing_receipts:
        doc.line(f"Tax Filing Receipts: {count_files(report.tax_filing_receipts)} file(s)")
    if report.emails_confirmations:
        doc.line(f"Emails/Confirmations: {count_files(report.emails_confirmations)} file(s)")
    if report.photos:
        doc.line(f"Photos: {count_files(report.photos)} file(s)")
    doc.blank()

    doc.section("APPROVAL WORKFLOW", 7)
    doc.field("Prepared By", report.prepared_by)
    doc.field("Report Status", report.report_status)
    doc.optional_field("Reviewed By", report.reviewed_by)
    doc.optional_field("Final Approval", report.final_approval)

    return doc.render()
