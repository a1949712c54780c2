# ============================================================================
# ReportDesk - ICT Report Renderers
#
# Purpose: Plain-text rendering of ICT monthly and weekly reports
# Inputs: ICTMonthlyReport / ICTWeeklyReport, RenderOptions
# Outputs: Text documents
# Dependencies: calculator (KPI performance and rating)
# Usage: text = render_ict_monthly(report, RenderOptions())
#
# Changelog:
#   2026-09-13: Initial ICT renderers
#   2026-09-16: KPI table shows each KPI's own category and unit
# ============================================================================

from ReportDesk.calculator import kpi_performance_percent, kpi_rating
from ReportDesk.reporting.departments.ict import KPI_DEFINITIONS, ICTMonthlyReport, ICTWeeklyReport
from ReportDesk.reporting.renderers.base import (
    PENDING,
    RenderOptions,
    TextDocument,
    format_date,
    format_number,
    text_or,
)

KPI_HEADERS = ("KPI Category", "KPI Name", "Target", "Actual", "Performance %", "Rating", "Remarks")


def _kpi_rows(report: ICTMonthlyReport):
    rows = []
    for definition in KPI_DEFINITIONS:
        entry = getattr(report.kpis, definition.key)
        performance = kpi_performance_percent(entry.actual, entry.target)
        rating = kpi_rating(entry.actual, entry.target, definition.lower_is_better)
        rows.append(
            (
                definition.category,
                definition.name,
                f"{format_number(entry.target, '0')}{definition.unit}",
                format_number(entry.actual),
                f"{performance:.1f}%",
                rating.value,
                text_or(entry.remarks),
            )
        )
    return rows


def render_ict_monthly(report: ICTMonthlyReport, options: RenderOptions) -> str:
    """Render an ICT monthly report as text."""
    doc = TextDocument()
    doc.banner("ICT DEPARTMENT MONTHLY REPORT")
    doc.line(f"Month: {text_or(report.month)} {format_number(report.year, '')}".rstrip())
    doc.field("Prepared By", report.prepared_by)
    doc.blank()

    doc.section("EXECUTIVE SUMMARY", 1)
    doc.line(text_or(report.executive_summary, "[No executive summary provided]"))
    doc.blank()

    doc.section("KEY ACHIEVEMENTS (Top 5)", 2)
    achievements = [a for a in report.key_achievements if a.text.strip()]
    if achievements:
        for index, achievement in enumerate(report.key_achievements, start=1):
            if not achievement.text.strip():
                continue
            doc.line(f"  {index}. {achievement.text}")
            if achievement.image_url:
                doc.line(f"     [Image: {achievement.image_url}]")
    else:
        doc.line("  [No key achievements recorded]")
    doc.blank()

    doc.section("KPIs & PERFORMANCE INDICATORS", 3)
    doc.table(KPI_HEADERS, _kpi_rows(report), rule_width=76)
    doc.blank()

    doc.section("PROJECT & TASK PROGRESS", 4)
    doc.table(
        ("Project", "Status", "% Complete", "Owner", "ETA"),
        [
            (
                text_or(p.project),
                p.status,
                f"{format_number(p.percent_complete, '0')}%",
                text_or(p.owner),
                format_date(p.eta),
            )
            for p in report.project_progress
        ],
        placeholder="[No projects recorded]",
        rule_width=48,
    )
    doc.blank()

    doc.section("DEPARTMENTAL CHALLENGES", 5)
    doc.line(text_or(report.challenges, "[No challenges recorded]"))
    doc.blank()

    doc.section("RISK & MITIGATION ACTIONS", 6)
    doc.table(
        ("Risk", "Impact", "Mitigation", "Status"),
        [(text_or(r.risk), text_or(r.impact), text_or(r.mitigation), r.status) for r in report.risk_mitigation],
        placeholder="[No risks recorded]",
        rule_width=40,
    )
    doc.blank()

    staff = report.staff_performance
    doc.section("STAFF PERFORMANCE & ATTENDANCE", 7)
    doc.field("Absences", format_number(staff.absences))
    doc.field("Overtime", format_number(staff.overtime))
    doc.field("Training Hours", format_number(staff.training_hours))
    doc.blank()

    doc.section("PLANS FOR NEXT MONTH", 8)
    doc.bullets(report.next_month_plans, placeholder="[No plans recorded]")
    doc.blank()

    doc.section("APPROVAL", 9)
    doc.field("Approved By", report.approved_by, placeholder=PENDING)
    doc.optional_field("Approved Signature", report.approved_signature)

    return doc.render()


def render_ict_weekly(report: ICTWeeklyReport, options: RenderOptions) -> str:
    """Render an ICT weekly report as text."""
    doc = TextDocument()
    doc.banner("ICT DEPARTMENT WEEKLY REPORT")
    doc.field("Department", "ICT Department")
    doc.field("Week Ending", format_date(report.week_ending))
    doc.field("Prepared By", report.prepared_by)
    doc.blank()

    doc.section("SUMMARY OF WEEKLY ACTIVITIES", 1)
    doc.line(text_or(report.summary, "[No summary provided]"))
    doc.blank()

    doc.section("TASKS COMPLETED", 2)
    doc.numbered(
        [f"{t.task} ({format_number(t.percent_complete, '0')}% complete)" for t in report.tasks_completed],
        placeholder="[No completed tasks recorded]",
    )
    doc.blank()

    doc.section("TASKS PENDING / CARRIED OVER", 3)
    if report.tasks_pending:
        for index, task in enumerate(report.tasks_pending, start=1):
            doc.line(f"  {index}. {task.task}")
            doc.line(f"     Due Date: {format_date(task.due_date)}")
            doc.line(f"     Assignee: {text_or(task.assignee)}")
    else:
        doc.line("  [No pending tasks recorded]")
    doc.blank()

    doc.section("CHALLENGES / ISSUES", 4)
    doc.numbered(
        [f"[{c.severity}] {c.issue}" for c in report.challenges],
        placeholder="[No challenges recorded]",
    )
    doc.blank()

    doc.section("SUPPORT NEEDED", 5)
    doc.line(text_or(report.support_needed, "[No support needed]"))
    doc.blank()

    doc.section("UPCOMING PRIORITIES (NEXT WEEK)", 6)
    doc.numbered(
        [f"{p.priority}{' [HIGH PRIORITY]' if p.is_high else ''}" for p in report.upcoming_priorities],
        placeholder="[No upcoming priorities recorded]",
    )

    if report.attachments:
        doc.blank()
        doc.section("ATTACHMENTS")
        doc.numbered([a.original_name or a.filename or a.url for a in report.attachments])

    return doc.render()
