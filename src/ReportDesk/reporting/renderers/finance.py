# ============================================================================
# ReportDesk - Finance Report Renderer
#
# Purpose: Plain-text rendering of the eleven-section finance report
# Inputs: FinanceReport, RenderOptions
# Outputs: Text document
# Dependencies: calculator (revenue, expense and cash-flow totals)
# Usage: text = render_finance(report, RenderOptions())
#
# Changelog:
#   2026-09-12: Initial finance renderer
# ============================================================================

from functools import partial

from ReportDesk.calculator import cash_flow, sum_expenses, sum_revenue
from ReportDesk.reporting.departments.finance import FinanceReport
from ReportDesk.reporting.renderers.base import (
    RenderOptions,
    TextDocument,
    count_files,
    format_date,
    format_money,
    format_number,
    text_or,
)


def render_finance(report: FinanceReport, options: RenderOptions) -> str:
    """Render a finance report as text."""
    money = partial(format_money, symbol=options.currency_symbol)
    doc = TextDocument()
    doc.banner("FINANCE DEPARTMENT REPORT")

    period = report.reporting_period
    doc.section("REPORTING PERIOD", 1)
    doc.field("Month", period.month)
    doc.field("Year", format_number(period.year))
    doc.field("Date Submitted", format_date(period.date_submitted))
    doc.line(f"Submitted By: {text_or(period.submitted_by)} ({text_or(period.position)})")
    doc.blank()

    revenue = report.revenue
    doc.section("REVENUE SUMMARY", 2)
    doc.line(f"Prinstine Consult: {money(revenue.prinstine_consult)}")
    doc.line(f"Prinstine Academy: {money(revenue.prinstine_academy)}")
    doc.line(f"Microfinance & Lending Interest Income: {money(revenue.microfinance_interest)}")
    doc.line(f"Other Revenue: {money(revenue.other_revenue)}")
    doc.optional_field("Other Revenue Comments", revenue.other_revenue_comments)
    doc.line(f"TOTAL REVENUE: {money(sum_revenue(report))}")
    doc.blank()

    expenses = report.expenses
    doc.section("EXPENSE SUMMARY", 3)
    doc.line(f"Operational Expenses: {money(expenses.operational)}")
    doc.line(f"Administrative Expenses: {money(expenses.administrative)}")
    doc.line(f"Salaries & Wages: {money(expenses.salaries_wages)}")
    doc.line(f"Utilities: {money(expenses.utilities)}")
    doc.line(f"Marketing & Advertising: {money(expenses.marketing_advertising)}")
    doc.optional_field("Comments", expenses.expense_comments)
    doc.line(f"TOTAL EXPENSES: {money(sum_expenses(report))}")
    doc.blank()

    totals = cash_flow(report)
    doc.section("CASH FLOW UPDATE", 4)
    doc.line(f"Opening Cash Balance: {money(totals.opening)}")
    doc.line(f"Cash Inflows (Total): {money(totals.inflows)}")
    doc.line(f"Cash Outflows (Total): {money(totals.outflows)}")
    doc.line(f"Closing Cash Balance: {money(totals.closing)}")
    movements = report.cash_flow.cash_movements
    if movements:
        doc.blank()
        doc.line("Major Cash Movements:")
        doc.numbered(
            [f"{text_or(m.description)}: {money(m.amount)} - {text_or(m.reason)}" for m in movements]
        )
    doc.blank()

    receivable = report.accounts_receivable
    doc.section("ACCOUNTS RECEIVABLE (A/R)", 5)
    doc.line(f"New Credit Sales This Month: {money(receivable.new_credit_sales)}")
    doc.line(f"Collections Made: {money(receivable.collections_made)}")
    if receivable.top_clients:
        doc.blank()
        doc.line("Top 3 Outstanding Clients:")
        doc.numbered(
            [
                f"{text_or(c.client_name)}: {money(c.amount)} ({format_number(c.days_overdue, '0')} days overdue)"
                for c in receivable.top_clients
            ]
        )
    if receivable.ar_comments:
        doc.blank()
        doc.field("Comments", receivable.ar_comments)
    doc.blank()

    payable = report.accounts_payable
    doc.section("ACCOUNTS PAYABLE (A/P)", 6)
    doc.line(f"New Payables Incurred: {money(payable.new_payables)}")
    doc.line(f"Payments Made: {money(payable.payments_made)}")
    if payable.top_suppliers:
        doc.blank()
        doc.line("Top 3 Outstanding Suppliers:")
        doc.numbered(
            [
                f"{text_or(s.supplier)}: {money(s.amount)} (Due: {format_date(s.due_date)})"
                for s in payable.top_suppliers
            ]
        )
    if payable.ap_comments:
        doc.blank()
        doc.field("Comments", payable.ap_comments)
    doc.blank()

    payroll = report.payroll
    doc.section("PAYROLL SUMMARY", 7)
    doc.line(f"Total Gross Payroll: {money(payroll.total_gross_payroll)}")
    doc.line(f"Total Deductions: {money(payroll.total_deductions)}")
    doc.line(f"Net Payroll Paid: {money(payroll.net_payroll_paid)}")
    doc.line("Employee Count:")
    doc.line(f"  Full-time: {format_number(payroll.employee_count.full_time, '0')}")
    doc.line(f"  Part-time: {format_number(payroll.employee_count.part_time, '0')}")
    doc.line(f"  Interns: {format_number(payroll.employee_count.interns, '0')}")
    doc.optional_field("Notes", payroll.payroll_notes)
    doc.blank()

    compliance = report.compliance
    doc.section("COMPLIANCE & TAX UPDATES", 8)
    doc.field("GST/VAT Filed", compliance.gst_vat_filed)
    doc.field("Corporate Income Tax (CIT) Status", compliance.cit_status)
    doc.field("Payroll Taxes Paid", "Yes" if compliance.payroll_taxes_paid else "No")
    doc.optional_field("Pending Compliance Issues", compliance.pending_issues)
    if compliance.compliance_files:
        doc.line(f"Compliance Documents: {count_files(compliance.compliance_files)} file(s)")
    doc.blank()

    doc.section("VARIANCE & FINANCIAL RISK ALERTS", 9)
    doc.optional_field("Risks Identified", report.variance.risks_identified)
    doc.optional_field("Mitigation Actions", report.variance.mitigation_actions)
    doc.blank()

    attachments = report.attachments
    doc.section("ATTACHMENTS", 10)
    if attachments.bank_statements:
        doc.line(f"Bank Statements: {count_files(attachments.bank_statements)} file(s)")
    if attachments.payroll_report:
        doc.line("Payroll Report: Attached")
    if attachments.invoices_receipts:
        doc.line(f"Invoices/Receipts: {count_files(attachments.invoices_receipts)} file(s)")
    doc.blank()

    approval = report.approval
    doc.section("APPROVAL WORKFLOW", 11)
    doc.field("Prepared By", approval.prepared_by or period.submitted_by)
    doc.optional_field("Prepared Signature", approval.prepared_signature)
    if approval.reviewed_by:
        doc.field("Reviewed By", approval.reviewed_by)
        doc.optional_field("Reviewed Signature", approval.reviewed_signature)
    if approval.approved_by:
        doc.field("Approved By", approval.approved_by)
        doc.optional_field("Approved Signature", approval.approved_signature)

    return doc.render()
