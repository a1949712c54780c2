# ============================================================================
# ReportDesk - Client Engagement Report Renderer
#
# Purpose: Plain-text rendering of the weekly client engagement report
# Inputs: ClientEngagementReport (with its portfolio snapshot), RenderOptions
# Outputs: Text document
# Dependencies: calculator (portfolio counts, average rating, period label)
# Usage: text = render_client_engagement(report, RenderOptions())
#
# Changelog:
#   2026-09-16: Initial client engagement renderer
#   2026-09-24: Portfolio table row limit and currency symbol from options
#   2026-10-19: An authored count of new clients signed is kept even when 0
# ============================================================================

from datetime import timedelta

from ReportDesk.calculator import average_rating, client_portfolio_counts, date_range_filter, period_label
from ReportDesk.reporting.departments.client_engagement import NEXT_ACTION_PLACEHOLDER, ClientEngagementReport
from ReportDesk.reporting.renderers.base import (
    NOT_AVAILABLE,
    PENDING,
    RenderOptions,
    TextDocument,
    format_date,
    format_money,
    text_or,
)


def render_client_engagement(report: ClientEngagementReport, options: RenderOptions) -> str:
    """
    Render a client engagement report as text.

    Activity counts are derived from the portfolio snapshot captured when the
    report was drafted, so the same instance always renders the same text.
    """
    header = report.header
    clients = report.portfolio.clients
    counts = client_portfolio_counts(clients, header.week_ending)

    doc = TextDocument()
    doc.banner("CLIENT ENGAGEMENT DEPARTMENT REPORT")

    doc.section("REPORT HEADER", 1)
    doc.field("Date (Week Ending)", format_date(header.week_ending))
    doc.line(f"Prepared By: {text_or(header.prepared_by)} ({text_or(header.position)})")
    doc.field("Approved By", header.approved_by, placeholder=PENDING)
    doc.optional_field("Approved Signature", header.approved_signature)
    doc.field("Period Covered", period_label(header.week_ending))
    doc.blank()

    activities = report.activities
    doc.section("ACTIVITIES SUMMARY", 2)
    doc.line(f"Total Active Clients: {counts.active_clients}")
    doc.line(f"Total Pending/New Leads: {counts.pending_leads}")
    doc.line(f"Total Active Audit/Consultancy Engagements: {counts.active_engagements}")
    new_signed = counts.new_this_week if activities.new_clients_signed is None else activities.new_clients_signed
    doc.line(f"New Clients Signed This Week: {new_signed}")
    if counts.new_this_week and header.week_ending:
        new_clients = date_range_filter(
            clients, "created_at", header.week_ending - timedelta(days=6), header.week_ending
        )
        doc.line("  New Clients:")
        for index, client in enumerate(new_clients, start=1):
            doc.line(f"    {index}. {text_or(client.name)}")
    doc.line(f"Client Meetings Conducted: {activities.client_meetings_conducted or 0}")
    doc.line(f"Proposals Submitted: {activities.proposals_submitted or 0}")
    doc.blank()

    doc.section("WEEKLY HIGHLIGHTS", 3)
    for index, highlight in enumerate(report.highlights, start=1):
        if not highlight.text.strip():
            continue
        doc.line(f"Highlight {index}:")
        doc.line(highlight.text)
        if highlight.image_url:
            doc.line(f"[Image attached: {highlight.image_url}]")
        doc.blank()

    feedback = report.feedback
    doc.section("OVERALL WEEKLY FEEDBACK, CHALLENGES & ACHIEVEMENTS", 4)
    doc.line("Achievements:")
    doc.bullets(feedback.achievements, placeholder="[No achievements recorded]")
    doc.blank()
    doc.line("Challenges Faced:")
    doc.bullets(feedback.challenges, placeholder="[No challenges recorded]")
    doc.blank()
    doc.line("Lessons Learned:")
    doc.line(text_or(feedback.lessons_learned, "[No lessons learned recorded]"))
    doc.blank()
    doc.line("Client Feedback Received:")
    if feedback.client_feedback:
        for index, entry in enumerate(feedback.client_feedback, start=1):
            doc.line(f"  {index}. {entry.client_name}: Rating {entry.rating}/5")
            if entry.comment:
                doc.line(f"     Comment: {entry.comment}")
        doc.blank()
        doc.line(f"Average Rating: {average_rating(feedback.client_feedback)}/5")
    else:
        doc.line("  [No client feedback recorded]")
    doc.blank()

    doc.section("CLIENT ENGAGEMENT WEEKLY PORTFOLIO", 5)
    rows = [
        (
            text_or(client.name),
            ", ".join(client.services) or NOT_AVAILABLE,
            text_or(client.status),
            format_money(client.value, options.currency_symbol),
            client.next_action or NEXT_ACTION_PLACEHOLDER,
        )
        for client in report.portfolio.filtered()[: options.portfolio_row_limit]
    ]
    if rows:
        doc.table(
            ("Client Name", "Service Type", "Status", f"Value ({options.currency_symbol})", "Next Action"),
            rows,
            rule_width=64,
        )
    else:
        doc.line("[No clients found]")
    doc.blank()

    doc.section("NEXT STEPS AND ACTION ITEMS", 6)
    if report.action_items:
        doc.table(
            ("Action Item", "Responsible Person", "Deadline", "Priority", "Status", "Comments"),
            [
                (
                    text_or(item.action_item),
                    text_or(item.responsible_person),
                    format_date(item.deadline),
                    item.priority,
                    text_or(item.status),
                    text_or(item.comments),
                )
                for item in report.action_items
            ],
            rule_width=76,
        )
    else:
        doc.line("[No action items recorded]")

    return doc.render()
