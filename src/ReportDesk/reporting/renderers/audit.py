# ============================================================================
# ReportDesk - Internal Audit Report Renderer
#
# Purpose: Plain-text rendering of the twelve-section internal audit report
#          and its additional sheets
# Inputs: InternalAuditReport, RenderOptions
# Outputs: Text document
# Dependencies: calculator (findings summary)
# Usage: text = render_internal_audit(report, RenderOptions())
#
# Changelog:
#   2026-09-15: Initial internal audit renderer
#   2026-09-22: Notes to financial statements rendered as section 9
#   2026-10-19: Financial statement figures rendered as currency
# ============================================================================

from typing import Any, Dict, List, Sequence

from ReportDesk.calculator import audit_findings_summary
from ReportDesk.reporting.departments.audit import ChecklistItem, EquityYear, InternalAuditReport, LineItem
from ReportDesk.reporting.renderers.base import (
    RenderOptions,
    TextDocument,
    format_date,
    format_money,
    text_or,
)

CHECKED = "✓"
UNCHECKED = "☐"

# Fields shown for an additional sheet, keyed by sheet type
_SHEET_FIELDS: Dict[str, Sequence[tuple]] = {
    "introduction": (
        ("auditPeriod", "Audit Period"),
        ("auditDate", "Audit Date"),
        ("auditorName", "Auditor"),
        ("departmentName", "Department"),
    ),
    "backgroundInfo": (
        ("companyProfile", "Company Profile"),
        ("ownershipStructure", "Ownership Structure"),
        ("natureOfOperation", "Nature of Operation"),
    ),
    "leadSchedule": (
        ("analyticalReview", "Analytical Review"),
        ("preparedBy", "Prepared By"),
        ("reviewedBy", "Reviewed By"),
        ("managementSignOff", "Management Sign-Off"),
    ),
    "financialNotes": (
        ("generalInfo", "General Info"),
        ("accountingPolicies", "Accounting Policies"),
        ("balanceSheetNotes", "Balance Sheet Notes"),
        ("incomeStatementNotes", "Income Statement Notes"),
        ("cashFlowNotes", "Cash Flow Notes"),
        ("otherDisclosures", "Other Disclosures"),
    ),
}


def _figure(value: Any, symbol: str) -> str:
    return format_money(value, symbol)


def _line_items(doc: TextDocument, heading: str, items: List[LineItem], symbol: str) -> None:
    doc.line(f"{heading}:")
    for item in items:
        doc.line(
            f"  {text_or(item.sub_item)}: Current Year: {_figure(item.current_year, symbol)}, "
            f"Previous Year: {_figure(item.previous_year, symbol)}"
        )


def _equity_year(doc: TextDocument, heading: str, year: EquityYear, symbol: str) -> None:
    doc.line(f"{heading}:")
    doc.line(f"Opening Balance - Owners Capital: {_figure(year.opening_balance.capital, symbol)}")
    doc.line(f"Opening Balance - Retained Earnings: {_figure(year.opening_balance.retained_earnings, symbol)}")
    doc.line("Changes in Equity:")
    for change in year.changes:
        doc.line(
            f"  {text_or(change.description)}: Capital: {_figure(change.capital, symbol)}, "
            f"Retained Earnings: {_figure(change.retained_earnings, symbol)}"
        )
    doc.line(f"Closing Balance - Owners Capital: {_figure(year.closing_balance.capital, symbol)}")
    doc.line(f"Closing Balance - Retained Earnings: {_figure(year.closing_balance.retained_earnings, symbol)}")


def _checklist(doc: TextDocument, heading: str, items: List[ChecklistItem]) -> None:
    doc.line(f"{heading}:")
    for item in items:
        doc.line(f"{CHECKED if item.checked else UNCHECKED} {item.item}")
        if item.comments:
            doc.line(f"  Comments: {item.comments}")


def render_internal_audit(report: InternalAuditReport, options: RenderOptions) -> str:
    """Render an internal audit report as text."""
    doc = TextDocument()
    doc.banner("INTERNAL AUDIT DEPARTMENT REPORT")

    intro = report.introduction
    doc.section("INTRODUCTION SHEET (OVERVIEW)", 1)
    doc.field("Audit Period", intro.audit_period)
    doc.field("Audit Date", format_date(intro.audit_date))
    doc.field("Auditor", intro.auditor_name)
    doc.field("Department", intro.department_name)
    doc.blank()

    doc.section("WORKING PAPERS COVER SHEET", 2)
    for paper in report.working_papers:
        doc.line(f"Ref {paper.ref}: {paper.description} ({paper.workpaper_ref}) - Status: {paper.status}")
    doc.blank()

    background = report.background_info
    doc.section("BACKGROUND INFORMATION", 3)
    doc.field("Company Profile", background.company_profile)
    doc.field("Ownership Structure", background.ownership_structure)
    doc.field("Nature of Operation", background.nature_of_operation)
    doc.field("Industry Overview", background.industry_overview)
    doc.field("Organizational Structure", background.organizational_structure)
    doc.field("Accounting System", background.accounting_system_used)
    doc.field("Significant Events", background.significant_events)
    doc.blank()

    lead = report.lead_schedule
    doc.section("LEAD SCHEDULE", 4)
    doc.table(
        (
            "Account Code",
            "Account Name",
            "Source",
            "Actual Current Yr",
            "Actual Last Yr",
            "Budget Current Yr",
            "Budget Last Yr",
        ),
        [
            (
                text_or(a.account_code),
                text_or(a.account_name),
                text_or(a.source),
                _figure(a.actual_current_yr, options.currency_symbol),
                _figure(a.actual_last_yr, options.currency_symbol),
                _figure(a.budget_current_yr, options.currency_symbol),
                _figure(a.budget_last_yr, options.currency_symbol),
            )
            for a in lead.accounts
        ],
    )
    doc.field("Analytical Review/Comments", lead.analytical_review)
    doc.field("Prepared By", lead.prepared_by)
    doc.field("Reviewed By", lead.reviewed_by)
    doc.field("Management Sign-Off", lead.management_sign_off)
    doc.blank()

    balance = report.balance_sheet
    doc.section("BALANCE SHEET (ASSET/LIABILITY TEMPLATE)", 5)
    doc.line("Assets:")
    _line_items(doc, "Current Assets", balance.assets.current_assets, options.currency_symbol)
    _line_items(doc, "Fixed Assets", balance.assets.fixed_assets, options.currency_symbol)
    _line_items(doc, "Other Assets", balance.assets.other_assets, options.currency_symbol)
    doc.line("Liabilities:")
    _line_items(doc, "Current Liabilities", balance.liabilities.current_liabilities, options.currency_symbol)
    _line_items(doc, "Long-term Liabilities", balance.liabilities.long_term_liabilities, options.currency_symbol)
    _line_items(doc, "Equity", balance.equity, options.currency_symbol)
    doc.blank()

    income = report.income_statement
    doc.section("INCOME STATEMENT (PROFIT/LOSS TEMPLATE)", 6)
    _line_items(doc, "Revenue", income.revenue, options.currency_symbol)
    doc.line("Expenses:")
    _line_items(doc, "General & Admin. Expenses", income.expenses.general_admin, options.currency_symbol)
    _line_items(doc, "Operational Expenses", income.expenses.operational, options.currency_symbol)
    doc.blank()

    doc.section("CASH FLOW STATEMENT (CASH MOVEMENT TEMPLATE)", 7)
    _line_items(doc, "Operating Activities", report.cash_flow.operating, options.currency_symbol)
    _line_items(doc, "Investing Activities", report.cash_flow.investing, options.currency_symbol)
    _line_items(doc, "Financing Activities", report.cash_flow.financing, options.currency_symbol)
    doc.blank()

    doc.section("EQUITY STATEMENT (CHANGES IN EQUITY TEMPLATE)", 8)
    _equity_year(doc, "Previous Year", report.equity_statement.previous_year, options.currency_symbol)
    doc.blank()
    _equity_year(doc, "Current Year", report.equity_statement.current_year, options.currency_symbol)
    doc.blank()

    notes = report.financial_notes
    doc.section("NOTES TO FINANCIAL STATEMENTS", 9)
    doc.field("General Info", notes.general_info)
    doc.field("Accounting Policies", notes.accounting_policies)
    doc.field("Balance Sheet Notes", notes.balance_sheet_notes)
    doc.field("Income Statement Notes", notes.income_statement_notes)
    doc.field("Cash Flow Notes", notes.cash_flow_notes)
    doc.field("Other Disclosures", notes.other_disclosures)
    doc.blank()

    info = report.audit_findings.audit_info
    findings = report.audit_findings.findings
    summary = audit_findings_summary(findings)
    doc.section("AUDIT FINDINGS AND REMEDIAL ACTIONS", 10)
    doc.field("Title", info.title)
    doc.field("Period", info.period)
    doc.field("Date", format_date(info.date))
    doc.field("Auditors", info.auditors)
    doc.blank()
    doc.line("Summary:")
    doc.line(f"- Total Findings: {summary.total}")
    doc.line(f"- High Risk: {summary.high_risk}")
    doc.line(f"- Medium Risk: {summary.medium_risk}")
    doc.line(f"- Low Risk: {summary.low_risk}")
    doc.line(f"- Resolved: {summary.resolved}")
    doc.line(f"- Outstanding: {summary.outstanding}")
    doc.blank()
    for index, finding in enumerate(findings, start=1):
        action = finding.remedial_action
        doc.line(f"Finding {index}: {finding.finding_title}")
        doc.line(f"Ref: {finding.ref_number} | Risk: {finding.risk_rating}")
        doc.field("Condition", finding.condition)
        doc.field("Criteria", finding.criteria)
        doc.field("Cause", finding.cause)
        doc.field("Consequence", finding.consequence)
        doc.field("Remedial Action", action.action_required)
        doc.field("Responsible", action.responsible_person)
        doc.field("Deadline", format_date(action.deadline))
        doc.field("Status", action.status)
        doc.field("Management Response", finding.management_response)
        doc.field("Final Status", finding.final_status)
        doc.blank()

    doc.section("COMPLIANCE AND LEGAL ISSUES", 11)
    for index, issue in enumerate(report.compliance_issues, start=1):
        doc.line(f"Issue {index}: {issue.issue_id}")
        doc.line(f"Type: {issue.issue_type} | Risk Level: {issue.risk_level}")
        doc.field("Description", issue.description)
        doc.field("Date Identified", format_date(issue.date_identified))
        doc.field("Criteria Violated", issue.criteria_violated)
        doc.field("Corrective Action", issue.corrective_action)
        doc.field("Responsible", issue.responsible_person)
        doc.field("Deadline", format_date(issue.deadline))
        doc.field("Status", issue.status)
        doc.blank()

    checklist = report.completion_checklist
    doc.section("COMPLETION CHECKLIST", 12)
    _checklist(doc, "Planning", checklist.planning)
    doc.blank()
    _checklist(doc, "Preparation", checklist.preparation)
    doc.blank()
    _checklist(doc, "Review", checklist.review)

    if report.additional_sheets:
        doc.blank()
        doc.banner("ADDITIONAL SHEETS", width=18)
        for index, sheet in enumerate(report.additional_sheets, start=1):
            doc.section(f"Additional Sheet {index}: {sheet.sheet_name}")
            data = sheet.data if isinstance(sheet.data, dict) else {}
            for key, label in _SHEET_FIELDS.get(sheet.sheet_type, ()):
                doc.field(label, data.get(key))
            sheet_notes = sheet.notes or data.get("notes")
            if sheet_notes:
                doc.blank()
                doc.line("Additional Notes:")
                doc.line(str(sheet_notes))
            doc.blank()

    return doc.render()
