# ============================================================================
# ReportDesk - Report Validation
#
# Purpose: Check a report instance for missing required fields before it is
#          serialized and submitted
# Inputs: Report instance
# Outputs: Validation result (bool or exception)
# Dependencies: reporting.schema, errors
# Usage: validate_report(report)
#
# Changelog:
#   2026-09-29: Initial required-field table per template
#   2026-10-05: Row fields addressed with "*" (every row of a repeatable section)
# ============================================================================

from typing import Any, Dict, Iterator, List, Tuple

from pydantic.alias_generators import to_camel

from ReportDesk.errors import ValidationError
from ReportDesk.logging_utils import get_logger
from ReportDesk.reporting.schema import ReportModel

logger = get_logger(__name__)

REQUIRED_MESSAGE = "This field is required"

# Attribute paths that must hold a value at submission time, per template tag.
# "*" expands to every row of a repeatable section.
REQUIRED_FIELDS: Dict[str, Tuple[str, ...]] = {
    "finance": (
        "reporting_period.month",
        "reporting_period.year",
        "reporting_period.date_submitted",
        "reporting_period.submitted_by",
        "reporting_period.position",
        "revenue.prinstine_consult",
        "revenue.prinstine_academy",
        "revenue.microfinance_interest",
        "expenses.operational",
        "expenses.administrative",
        "expenses.salaries_wages",
        "expenses.utilities",
        "cash_flow.opening_balance",
        "accounts_receivable.new_credit_sales",
        "accounts_receivable.collections_made",
        "accounts_payable.new_payables",
        "accounts_payable.payments_made",
        "payroll.total_gross_payroll",
        "payroll.total_deductions",
        "payroll.net_payroll_paid",
        "compliance.gst_vat_filed",
        "compliance.cit_status",
    ),
    "ict-monthly": ("month", "year", "executive_summary", "approved_by"),
    "ict-weekly": ("week_ending", "prepared_by", "summary"),
    "marketing": ("overview", "conclusion"),
    "marketing-weekly-client-officer": (
        "week",
        "reporting_period",
        "assigned_officer",
        "prepared_by",
        "tasks.*.client_name",
        "tasks.*.assigned_officer",
        "tasks.*.task_for_week",
        "tasks.*.date_started",
    ),
    "marketing-client-activities": (
        "report_title",
        "client_name",
        "name_of_officer",
        "reporting_period",
        "date_submitted",
        "supervisor_manager",
        "activities.*.activity_date",
        "activities.*.objective_task_performed",
        "achievements_summary",
        "prepared_by",
    ),
    "internal-audit": (
        "introduction.audit_period",
        "introduction.audit_date",
        "background_info.company_profile",
        "audit_findings.findings.*.finding_title",
    ),
    "client-engagement": (
        "header.week_ending",
        "header.prepared_by",
        "header.position",
        "header.approved_by",
        "highlights.0.text",
    ),
    "generic": ("title", "content"),
}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _resolve(obj: Any, parts: List[str], trail: List[str]) -> Iterator[Tuple[str, Any]]:
    """Yield (alias path, value) for every concrete field an attribute path names."""
    if not parts:
        yield ".".join(trail), obj
        return
    head, rest = parts[0], parts[1:]
    if head == "*":
        for index, row in enumerate(obj or []):
            yield from _resolve(row, rest, trail + [str(index)])
    elif head.isdigit():
        rows = obj or []
        index = int(head)
        if index < len(rows):
            yield from _resolve(rows[index], rest, trail + [head])
        else:
            yield ".".join(trail + [head] + [to_camel(p) for p in rest]), None
    else:
        yield from _resolve(getattr(obj, head, None), rest, trail + [to_camel(head)])


def missing_fields(report: ReportModel) -> Dict[str, str]:
    """Field-level messages for every required field that is blank."""
    template = getattr(report, "template", "")
    field_errors: Dict[str, str] = {}
    for path in REQUIRED_FIELDS.get(template, ()):
        for alias_path, value in _resolve(report, path.split("."), []):
            if _is_missing(value):
                field_errors[alias_path] = REQUIRED_MESSAGE
    return field_errors


def validate_report(report: ReportModel) -> bool:
    """
    Validate a report instance before serialization.

    Args:
        report: Report instance to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If required fields are missing; ``field_errors`` is
            keyed by camelCase dotted path (``tasks.0.taskForWeek``)
    """
    field_errors = missing_fields(report)
    if field_errors:
        logger.debug(f"Validation failed for {report.template} report: {sorted(field_errors)}")
        raise ValidationError(
            f"{len(field_errors)} required field(s) missing",
            field_errors=field_errors,
        )
    logger.debug(f"Validation passed for {report.template} report")
    return True
