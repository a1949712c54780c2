# ============================================================================
# ReportDesk - Internal Audit Report Schema
#
# Purpose: Internal audit working file: introduction, working papers, financial
#          statement templates, findings, compliance issues, completion checklist
# Inputs: Authored field values, AuthoringContext for defaults
# Outputs: InternalAuditReport model
# Dependencies: pydantic
# Usage: report = InternalAuditReport.create(context)
#
# Changelog:
#   2026-09-09: Initial internal audit schema (12 sections + additional sheets)
#   2026-09-17: Default working papers and completion checklist items
#   2026-09-22: Finding and compliance issue reference numbers
# ============================================================================

import re
from datetime import date
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from ReportDesk.reporting.schema import (
    Attachment,
    AuthoringContext,
    ISODate,
    Priority,
    ReportModel,
    SignedAmount,
)

_TITLE_AUDIT = re.compile(r"Internal Audit Report - (.+?) - (.+)$")

DEFAULT_WORKING_PAPERS = (
    "Completion checklist",
    "Lead schedule (including sign-off)",
    "Working papers supporting lead schedule",
    "Financial statements note disclosure",
    "Audit findings and remedial actions",
    "Compliance and legal issues",
    "Quality control and assurance",
    "Other work performed",
    "Matters for next financial year",
    "Background information",
)

DEFAULT_CHECKLIST = {
    "planning": (
        "Risk management and planning decisions revised as necessary.",
        "Ensure data from Business Areas received by due date; follow up if needed.",
        "Review Treasury requirements; obtain additional info by due date.",
    ),
    "preparation": (
        "Agree lead schedule to financial statements.",
        "Agree lead schedule to trial balance.",
        "Ensure comparative amounts match last year's report.",
        "Complete analytical review (±5% prior, ±2% budget; trend).",
        "Verify to supporting docs; comply with regs.",
    ),
    "review": (
        "All material matters disclosed; figures complete/accurate?",
        "All adjustments resolved; update schedule.",
        "Format consistent with standards; include narratives.",
        "Lead schedule signed off.",
    ),
}

SheetType = Literal[
    "introduction",
    "workingPapers",
    "backgroundInfo",
    "leadSchedule",
    "balanceSheet",
    "incomeStatement",
    "cashFlow",
    "equityStatement",
    "financialNotes",
    "auditFindings",
    "complianceIssues",
    "completionChecklist",
]

SHEET_NAMES = {
    "introduction": "Introduction Sheet",
    "workingPapers": "Working Papers Cover Sheet",
    "backgroundInfo": "Background Information",
    "leadSchedule": "Lead Schedule",
    "balanceSheet": "Balance Sheet",
    "incomeStatement": "Income Statement",
    "cashFlow": "Cash Flow Statement",
    "equityStatement": "Equity Statement",
    "financialNotes": "Notes to Financial Statements",
    "auditFindings": "Audit Findings",
    "complianceIssues": "Compliance and Legal Issues",
    "completionChecklist": "Completion Checklist",
}


class AuditIntroduction(ReportModel):
    audit_period: str = ""
    audit_date: ISODate = None
    auditor_name: str = ""
    department_name: str = ""


class WorkingPaper(ReportModel):
    ref: int
    description: str = ""
    workpaper_ref: str = ""
    status: str = "Pending"


class BackgroundInfo(ReportModel):
    company_profile: str = ""
    ownership_structure: str = ""
    nature_of_operation: str = ""
    industry_overview: str = ""
    organizational_structure: str = ""
    accounting_system_used: str = ""
    significant_events: str = ""
    org_chart_file: Optional[Attachment] = None


class LeadScheduleAccount(ReportModel):
    account_code: str = ""
    account_name: str = ""
    source: str = ""
    actual_current_yr: SignedAmount = None
    actual_last_yr: SignedAmount = None
    budget_current_yr: SignedAmount = None
    budget_last_yr: SignedAmount = None


class LeadSchedule(ReportModel):
    accounts: List[LeadScheduleAccount] = Field(default_factory=list)
    analytical_review: str = ""
    prepared_by: str = ""
    reviewed_by: str = ""
    management_sign_off: str = ""
    completed_checklist: bool = False


class LineItem(ReportModel):
    """One row of a financial statement template; figures may be negative."""

    sub_item: str = ""
    current_year: SignedAmount = None
    previous_year: SignedAmount = None


class Assets(ReportModel):
    current_assets: List[LineItem] = Field(default_factory=list)
    fixed_assets: List[LineItem] = Field(default_factory=list)
    other_assets: List[LineItem] = Field(default_factory=list)


class Liabilities(ReportModel):
    current_liabilities: List[LineItem] = Field(default_factory=list)
    long_term_liabilities: List[LineItem] = Field(default_factory=list)


class BalanceSheet(ReportModel):
    assets: Assets = Field(default_factory=Assets)
    liabilities: Liabilities = Field(default_factory=Liabilities)
    equity: List[LineItem] = Field(default_factory=list)


class IncomeExpenses(ReportModel):
    general_admin: List[LineItem] = Field(default_factory=list)
    operational: List[LineItem] = Field(default_factory=list)


class IncomeStatement(ReportModel):
    revenue: List[LineItem] = Field(default_factory=list)
    expenses: IncomeExpenses = Field(default_factory=IncomeExpenses)


class CashFlowStatement(ReportModel):
    operating: List[LineItem] = Field(default_factory=list)
    investing: List[LineItem] = Field(default_factory=list)
    financing: List[LineItem] = Field(default_factory=list)


class EquityBalance(ReportModel):
    capital: SignedAmount = None
    retained_earnings: SignedAmount = None


class EquityChange(ReportModel):
    description: str = ""
    capital: SignedAmount = None
    retained_earnings: SignedAmount = None


class EquityYear(ReportModel):
    opening_balance: EquityBalance = Field(default_factory=EquityBalance)
    changes: List[EquityChange] = Field(default_factory=list)
    closing_balance: EquityBalance = Field(default_factory=EquityBalance)


class EquityStatement(ReportModel):
    previous_year: EquityYear = Field(default_factory=EquityYear)
    current_year: EquityYear = Field(default_factory=EquityYear)


class FinancialNotes(ReportModel):
    general_info: str = ""
    accounting_policies: str = ""
    balance_sheet_notes: str = ""
    income_statement_notes: str = ""
    cash_flow_notes: str = ""
    other_disclosures: str = ""


class AuditInfo(ReportModel):
    title: str = ""
    department: str = ""
    period: str = ""
    date: ISODate = None
    auditors: str = ""


class RemedialAction(ReportModel):
    action_required: str = ""
    responsible_person: str = ""
    deadline: ISODate = None
    status: str = "Pending"


class AuditFinding(ReportModel):
    finding_title: str = ""
    ref_number: str = ""
    risk_rating: Priority = "Medium"
    condition: str = ""
    criteria: str = ""
    cause: str = ""
    consequence: str = ""
    remedial_action: RemedialAction = Field(default_factory=RemedialAction)
    management_response: str = ""
    auditor_follow_up: str = ""
    final_status: str = "Open"


class AuditFindings(ReportModel):
    # The findings summary is derived; see calculator.audit_findings_summary
    audit_info: AuditInfo = Field(default_factory=AuditInfo)
    findings: List[AuditFinding] = Field(default_factory=list)


class ComplianceIssue(ReportModel):
    issue_id: str = ""
    issue_type: str = "Compliance"
    description: str = ""
    date_identified: ISODate = None
    department: str = ""
    criteria_violated: str = ""
    cause: str = ""
    risk_level: Priority = "Medium"
    impact: str = ""
    corrective_action: str = ""
    responsible_person: str = ""
    deadline: ISODate = None
    status: str = "Open"
    follow_up_notes: str = ""


class ChecklistItem(ReportModel):
    item: str = ""
    checked: bool = False
    comments: str = ""


def _checklist(phase: str) -> List[ChecklistItem]:
    return [ChecklistItem(item=text) for text in DEFAULT_CHECKLIST[phase]]


class CompletionChecklist(ReportModel):
    planning: List[ChecklistItem] = Field(default_factory=lambda: _checklist("planning"))
    preparation: List[ChecklistItem] = Field(default_factory=lambda: _checklist("preparation"))
    review: List[ChecklistItem] = Field(default_factory=lambda: _checklist("review"))


class AdditionalSheet(ReportModel):
    """An extra copy of one of the template sections, stored as authored data."""

    id: Optional[Union[int, str]] = None
    sheet_type: SheetType
    sheet_name: str = ""
    data: Union[Dict[str, Any], List[Any]] = Field(default_factory=dict)
    notes: str = ""


def _default_working_papers() -> List[WorkingPaper]:
    return [
        WorkingPaper(ref=index, description=text, workpaper_ref=f"WOP {index}")
        for index, text in enumerate(DEFAULT_WORKING_PAPERS, start=1)
    ]


# Section models that seed a new additional sheet; list-shaped sheets start empty
_SHEET_SECTIONS = {
    "introduction": AuditIntroduction,
    "backgroundInfo": BackgroundInfo,
    "leadSchedule": LeadSchedule,
    "balanceSheet": BalanceSheet,
    "incomeStatement": IncomeStatement,
    "cashFlow": CashFlowStatement,
    "equityStatement": EquityStatement,
    "financialNotes": FinancialNotes,
    "auditFindings": AuditFindings,
}


class InternalAuditReport(ReportModel):
    """Internal audit department report."""

    template: Literal["internal-audit"] = "internal-audit"
    introduction: AuditIntroduction = Field(default_factory=AuditIntroduction)
    working_papers: List[WorkingPaper] = Field(default_factory=_default_working_papers)
    background_info: BackgroundInfo = Field(default_factory=BackgroundInfo)
    lead_schedule: LeadSchedule = Field(default_factory=LeadSchedule)
    balance_sheet: BalanceSheet = Field(default_factory=BalanceSheet)
    income_statement: IncomeStatement = Field(default_factory=IncomeStatement)
    cash_flow: CashFlowStatement = Field(default_factory=CashFlowStatement)
    equity_statement: EquityStatement = Field(default_factory=EquityStatement)
    financial_notes: FinancialNotes = Field(default_factory=FinancialNotes)
    audit_findings: AuditFindings = Field(default_factory=AuditFindings)
    compliance_issues: List[ComplianceIssue] = Field(default_factory=list)
    completion_checklist: CompletionChecklist = Field(default_factory=CompletionChecklist)
    additional_sheets: List[AdditionalSheet] = Field(default_factory=list)

    @classmethod
    def create(cls, context: AuthoringContext) -> "InternalAuditReport":
        return cls(
            introduction=AuditIntroduction(
                audit_date=context.today,
                auditor_name=context.user.name,
                department_name=context.department_name,
            ),
            audit_findings=AuditFindings(
                audit_info=AuditInfo(department=context.department_name, date=context.today),
            ),
        )

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "InternalAuditReport":
        report = cls.create(context)
        match = _TITLE_AUDIT.search(title or "")
        if match:
            report.introduction.department_name = match.group(1).strip()
            report.introduction.audit_period = match.group(2).strip()
        return report

    def new_finding(self, today: date) -> AuditFinding:
        """A blank finding numbered after the existing ones (AF-001/2026)."""
        number = len(self.audit_findings.findings) + 1
        return AuditFinding(ref_number=f"AF-{number:03d}/{today.year}")

    def new_compliance_issue(self, today: date) -> ComplianceIssue:
        """A blank compliance issue numbered after the existing ones (CL-001)."""
        number = len(self.compliance_issues) + 1
        return ComplianceIssue(
            issue_id=f"CL-{number:03d}",
            date_identified=today,
            department=self.introduction.department_name,
        )

    def new_sheet(self, sheet_type: str, sheet_id: Optional[Union[int, str]] = None) -> AdditionalSheet:
        """An additional sheet seeded with the empty structure of its section."""
        section = _SHEET_SECTIONS.get(sheet_type)
        if section is not None:
            data: Union[Dict[str, Any], List[Any]] = section().model_dump(mode="json", by_alias=True)
        elif sheet_type == "completionChecklist":
            data = {"planning": [], "preparation": [], "review": []}
        else:
            data = []
        if sheet_id is None:
            sheet_id = len(self.additional_sheets) + 1
        return AdditionalSheet(
            id=sheet_id,
            sheet_type=sheet_type,
            sheet_name=SHEET_NAMES.get(sheet_type, sheet_type),
            data=data,
        )

    def default_title(self) -> str:
        intro = self.introduction
        period = intro.audit_period or (intro.audit_date.isoformat() if intro.audit_date else "")
        return f"Internal Audit Report - {intro.department_name or 'Department'} - {period}".rstrip(" -")
