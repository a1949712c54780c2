# ============================================================================
# ReportDesk - Finance Department Report Schema
#
# Purpose: Eleven-section monthly finance report
# Inputs: Authored field values, AuthoringContext for defaults
# Outputs: FinanceReport model
# Dependencies: pydantic
# Usage: report = FinanceReport.create(context)
#
# Changelog:
#   2026-09-06: Initial finance schema (11 sections)
#   2026-09-22: Title salvage for legacy text records ("<Month> <Year>")
# ============================================================================

import re
from typing import List, Literal, Optional

from pydantic import Field

from ReportDesk.reporting.schema import (
    Amount,
    Attachment,
    AuthoringContext,
    Count,
    ISODate,
    ReportModel,
)
from ReportDesk.utils.time import month_name

_TITLE_PERIOD = re.compile(r"(\w+)\s+(\d{4})")


class ReportingPeriod(ReportModel):
    month: str = ""
    year: Optional[int] = None
    date_submitted: ISODate = None
    submitted_by: str = ""
    position: str = ""


class Revenue(ReportModel):
    prinstine_consult: Amount = None
    prinstine_academy: Amount = None
    microfinance_interest: Amount = None
    other_revenue: Amount = None
    other_revenue_comments: str = ""


class Expenses(ReportModel):
    operational: Amount = None
    administrative: Amount = None
    salaries_wages: Amount = None
    utilities: Amount = None
    marketing_advertising: Amount = None
    expense_comments: str = ""


class CashMovement(ReportModel):
    description: str = ""
    amount: Amount = None
    reason: str = ""


class CashFlowSection(ReportModel):
    opening_balance: Amount = None
    cash_movements: List[CashMovement] = Field(default_factory=list)


class OutstandingClient(ReportModel):
    client_name: str = ""
    amount: Amount = None
    days_overdue: Count = None


class AccountsReceivable(ReportModel):
    new_credit_sales: Amount = None
    collections_made: Amount = None
    top_clients: List[OutstandingClient] = Field(default_factory=list)
    ar_comments: str = ""


class OutstandingSupplier(ReportModel):
    supplier: str = ""
    amount: Amount = None
    due_date: ISODate = None


class AccountsPayable(ReportModel):
    new_payables: Amount = None
    payments_made: Amount = None
    top_suppliers: List[OutstandingSupplier] = Field(default_factory=list)
    ap_comments: str = ""


class EmployeeCount(ReportModel):
    full_time: Count = None
    part_time: Count = None
    interns: Count = None


class Payroll(ReportModel):
    total_gross_payroll: Amount = None
    total_deductions: Amount = None
    net_payroll_paid: Amount = None
    employee_count: EmployeeCount = Field(default_factory=EmployeeCount)
    payroll_notes: str = ""


class Compliance(ReportModel):
    gst_vat_filed: str = ""
    cit_status: str = ""
    payroll_taxes_paid: bool = False
    pending_issues: str = ""
    compliance_files: List[Attachment] = Field(default_factory=list)


class Variance(ReportModel):
    risks_identified: str = ""
    mitigation_actions: str = ""


class FinanceAttachments(ReportModel):
    bank_statements: List[Attachment] = Field(default_factory=list)
    payroll_report: Optional[Attachment] = None
    invoices_receipts: List[Attachment] = Field(default_factory=list)


class Approval(ReportModel):
    prepared_by: str = ""
    prepared_signature: str = ""
    reviewed_by: str = ""
    reviewed_signature: str = ""
    approved_by: str = ""
    approved_signature: str = ""


class FinanceReport(ReportModel):
    """Monthly finance department report."""

    template: Literal["finance"] = "finance"
    reporting_period: ReportingPeriod = Field(default_factory=ReportingPeriod)
    revenue: Revenue = Field(default_factory=Revenue)
    expenses: Expenses = Field(default_factory=Expenses)
    cash_flow: CashFlowSection = Field(default_factory=CashFlowSection)
    accounts_receivable: AccountsReceivable = Field(default_factory=AccountsReceivable)
    accounts_payable: AccountsPayable = Field(default_factory=AccountsPayable)
    payroll: Payroll = Field(default_factory=Payroll)
    compliance: Compliance = Field(default_factory=Compliance)
    variance: Variance = Field(default_factory=Variance)
    attachments: FinanceAttachments = Field(default_factory=FinanceAttachments)
    approval: Approval = Field(default_factory=Approval)

    @classmethod
    def create(cls, context: AuthoringContext) -> "FinanceReport":
        return cls(
            reporting_period=ReportingPeriod(
                month=month_name(context.today.month),
                year=context.today.year,
                date_submitted=context.today,
                submitted_by=context.user.name,
                position=context.user.position,
            )
        )

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "FinanceReport":
        """Defaults with month and year recovered from a legacy title."""
        report = cls.create(context)
        match = _TITLE_PERIOD.search(title or "")
        if match:
            report.reporting_period.month = match.group(1)
            report.reporting_period.year = int(match.group(2))
        return report

    def default_title(self) -> str:
        period = self.reporting_period
        return f"Finance Department Report - {period.month} {period.year or ''}".rstrip()
