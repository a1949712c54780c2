# ============================================================================
# ReportDesk - Derived-Field Calculator
#
# Purpose: Pure computations of totals, balances, ratings and conversions
#          from the raw fields of a report instance
# Inputs: Report instances, sections, or plain mappings
# Outputs: Numbers, rating labels, small frozen result records
# Dependencies: datetime, re, math
# Usage: total = sum_revenue(finance_report)
#
# Changelog:
#   2026-09-05: Initial calculator (revenue, expenses, cash flow, KPI rating)
#   2026-09-08: average_rating, duration_to_hours, date_range_filter
#   2026-09-12: week_ending_sunday, period_label (fixed English months)
#   2026-09-19: week_of_month, task_analytics, audit_findings_summary,
#               client_portfolio_counts
#   2026-10-06: KPI performance returns 0.0 for a zero or blank target
#               instead of dividing by zero
# ============================================================================

"""
Derived-field calculator.

Every function here is pure: it reads the instance it is given and never
mutates it. Blank or non-numeric amounts count as ``0`` in arithmetic and
never produce NaN. Functions accept pydantic models, plain objects or
mappings so that legacy dictionaries can be fed through unchanged.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from ReportDesk.utils.time import MONTH_ABBREVIATIONS, parse_iso_date

REVENUE_FIELDS = (
    "prinstine_consult",
    "prinstine_academy",
    "microfinance_interest",
    "other_revenue",
)

EXPENSE_FIELDS = (
    "operational",
    "administrative",
    "salaries_wages",
    "utilities",
    "marketing_advertising",
)

WEEK_NAMES = ("One", "Two", "Three", "Four", "Five")

# Fixed rating bands
AMBER_BAND_LOWER_IS_BETTER = 1.1
AMBER_BAND_HIGHER_IS_BETTER = 0.9

_HOURS_PATTERN = re.compile(r"(\d+\.?\d*)")
_MINUTES_PATTERN = re.compile(r"(\d+)")


class KPIRating(str, Enum):
    """RAG classification of an actual value against its target."""

    GREEN = "Green"
    AMBER = "Amber"
    RED = "Red"
    NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class CashFlowTotals:
    opening: float
    inflows: float
    outflows: float
    closing: float


@dataclass(frozen=True)
class WeekInfo:
    """Monday-start week containing a reference date, located within its month."""

    week: str
    week_number: int
    start: date
    end: date
    period: str


@dataclass(frozen=True)
class TaskAnalytics:
    total: int
    done: int
    pending: int
    in_progress: int
    cancelled: int
    high_priority: int
    clients_engaged: Tuple[str, ...]
    completion_percent: int


@dataclass(frozen=True)
class FindingsSummary:
    total: int
    high_risk: int
    medium_risk: int
    low_risk: int
    resolved: int
    outstanding: int


@dataclass(frozen=True)
class PortfolioCounts:
    active_clients: int
    pending_leads: int
    active_engagements: int
    new_this_week: int


# ============================================================================
# Field access and coercion
# ============================================================================


def _get(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an attribute-bearing object."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _to_number(value: Any) -> Optional[float]:
    """Parse a number; None for blank or non-numeric input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return float(value)
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_amount(value: Any) -> float:
    """Amount as a float, with blank or non-numeric input counting as 0.0."""
    number = _to_number(value)
    return 0.0 if number is None else number


def _leading_int(value: Any) -> int:
    # parseInt semantics: leading digits of the text, else 0
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    match = re.match(r"\s*([+-]?\d+)", str(value))
    return int(match.group(1)) if match else 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============================================================================
# Finance
# ============================================================================


def sum_revenue(report: Any) -> float:
    """
    Total revenue of a finance report.

    Args:
        report: Finance report (or mapping) exposing a ``revenue`` section

    Returns:
        Consult fee + academy fee + interest income + other revenue
    """
    revenue = _get(report, "revenue")
    return sum(coerce_amount(_get(revenue, name)) for name in REVENUE_FIELDS)


def sum_expenses(report: Any) -> float:
    """Total of the five expense lines of a finance report."""
    expenses = _get(report, "expenses")
    return sum(coerce_amount(_get(expenses, name)) for name in EXPENSE_FIELDS)


def cash_flow(report: Any) -> CashFlowTotals:
    """
    Cash-flow balance of a finance report.

    Inflows are total revenue and outflows are total expenses. Itemized cash
    movements are narrative and do not enter the balance.
    """
    opening = coerce_amount(_get(_get(report, "cash_flow"), "opening_balance"))
    inflows = sum_revenue(report)
    outflows = sum_expenses(report)
    return CashFlowTotals(
        opening=opening,
        inflows=inflows,
        outflows=outflows,
        closing=opening + inflows - outflows,
    )


# ============================================================================
# KPIs and ratings
# ============================================================================


def kpi_performance_percent(actual: Any, target: Any) -> float:
    """
    Actual as a percentage of target, one decimal place.

    Returns 0.0 when the actual value is blank, or when the target is blank
    or zero.
    """
    actual_num = _to_number(actual)
    target_num = _to_number(target)
    if actual_num is None or not target_num:
        return 0.0
    return round((actual_num / target_num) * 100, 1)


def kpi_rating(actual: Any, target: Any, lower_is_better: bool = False) -> KPIRating:
    """
    RAG rating of an actual value against its target.

    Higher-is-better: Green at or above target, Amber within 90% of it, else Red.
    Lower-is-better: Green at or below target, Amber within 110% of it, else Red.
    A blank actual value is rated N/A.
    """
    actual_num = _to_number(actual)
    if actual_num is None:
        return KPIRating.NOT_AVAILABLE
    target_num = coerce_amount(target)

    if lower_is_better:
        if actual_num <= target_num:
            return KPIRating.GREEN
        if actual_num <= target_num * AMBER_BAND_LOWER_IS_BETTER:
            return KPIRating.AMBER
        return KPIRating.RED

    if actual_num >= target_num:
        return KPIRating.GREEN
    if actual_num >= target_num * AMBER_BAND_HIGHER_IS_BETTER:
        return KPIRating.AMBER
    return KPIRating.RED


def average_rating(rows: Sequence[Any]) -> float:
    """Mean of the integer ``rating`` of each row, one decimal; 0.0 for no rows."""
    if not rows:
        return 0.0
    total = sum(_leading_int(_get(row, "rating")) for row in rows)
    return round(total / len(rows), 1)


# ============================================================================
# Durations and dates
# ============================================================================


def duration_to_hours(text: Optional[str]) -> float:
    """
    Convert a free-text duration such as "2 Hours" or "15 Min" to hours.

    Best-effort heuristic: "hour" anywhere in the text takes the first decimal
    number as hours; otherwise "min" takes the first integer as minutes.
    Anything else is 0.0.
    """
    if not text:
        return 0.0
    lowered = text.lower()
    if "hour" in lowered:
        match = _HOURS_PATTERN.search(text)
        return float(match.group(1)) if match else 0.0
    if "min" in lowered:
        match = _MINUTES_PATTERN.search(text)
        return float(match.group(1)) / 60 if match else 0.0
    return 0.0


def date_range_filter(rows: Iterable[Any], date_field: str, start: Any, end: Any) -> List[Any]:
    """
    Rows whose ``date_field`` falls within [start, end], inclusive.

    Row order is preserved. Rows with a missing or unparseable date are
    excluded.
    """
    start_date = parse_iso_date(start)
    end_date = parse_iso_date(end)
    if start_date is None or end_date is None:
        return []

    selected = []
    for row in rows:
        row_date = parse_iso_date(_get(row, date_field))
        if row_date is not None and start_date <= row_date <= end_date:
            selected.append(row)
    return selected


def week_ending_sunday(reference: Any) -> str:
    """ISO date of the Sunday on or before ``reference``."""
    ref = parse_iso_date(reference)
    if ref is None:
        raise ValueError(f"Not a date: {reference!r}")
    # weekday(): Monday=0 .. Sunday=6
    return (ref - timedelta(days=(ref.weekday() + 1) % 7)).isoformat()


def period_label(week_ending: Any) -> str:
    """
    Human label for the seven days ending on ``week_ending``.

    Example: "12 Oct – 18 Oct 2026". Empty string for a blank date.
    """
    end = parse_iso_date(week_ending)
    if end is None:
        return ""
    start = end - timedelta(days=6)
    return (
        f"{start.day} {MONTH_ABBREVIATIONS[start.month - 1]} – "
        f"{end.day} {MONTH_ABBREVIATIONS[end.month - 1]} {end.year}"
    )


def week_of_month(reference: Any) -> WeekInfo:
    """
    Locate the Monday-start week containing ``reference`` within its month.

    The week number counts Sunday-aligned offsets from the first of the month
    and is clamped to 1..5.
    """
    ref = parse_iso_date(reference)
    if ref is None:
        raise ValueError(f"Not a date: {reference!r}")

    start = ref - timedelta(days=ref.weekday())
    end = start + timedelta(days=6)

    first = ref.replace(day=1)
    days_since_first = (ref - first).days
    week_number = math.ceil((days_since_first + (first.weekday() + 1) % 7) / 7)
    week_number = min(max(week_number, 1), len(WEEK_NAMES))

    period = (
        f"{MONTH_ABBREVIATIONS[start.month - 1]} {start.day} - "
        f"{MONTH_ABBREVIATIONS[end.month - 1]} {end.day}"
    )
    return WeekInfo(
        week=WEEK_NAMES[week_number - 1],
        week_number=week_number,
        start=start,
        end=end,
        period=period,
    )


# ============================================================================
# Aggregates
# ============================================================================


def task_analytics(tasks: Sequence[Any]) -> TaskAnalytics:
    """Status counts, high-priority count and engaged clients for weekly tasks."""
    statuses = [_get(task, "status") for task in tasks]
    done = statuses.count("Done")
    total = len(tasks)

    clients: List[str] = []
    for task in tasks:
        name = _get(task, "client_name")
        if name and name not in clients:
            clients.append(name)

    return TaskAnalytics(
        total=total,
        done=done,
        pending=statuses.count("Pending"),
        in_progress=statuses.count("In Progress"),
        cancelled=statuses.count("Cancelled"),
        high_priority=sum(1 for task in tasks if _get(task, "priority_level") == "High"),
        clients_engaged=tuple(clients),
        completion_percent=_round_half_up(done / total * 100) if total else 0,
    )


def audit_findings_summary(findings: Sequence[Any]) -> FindingsSummary:
    """Risk-rating counts and resolution status across audit findings."""
    ratings = [_get(finding, "risk_rating") for finding in findings]
    resolved = sum(1 for finding in findings if _get(finding, "final_status") in ("Closed", "Resolved"))
    return FindingsSummary(
        total=len(findings),
        high_risk=ratings.count("High"),
        medium_risk=ratings.count("Medium"),
        low_risk=ratings.count("Low"),
        resolved=resolved,
        outstanding=len(findings) - resolved,
    )


def client_portfolio_counts(clients: Sequence[Any], week_ending: Any) -> PortfolioCounts:
    """Directory-derived counts shown in the client engagement activities summary."""
    statuses = [_get(client, "status") for client in clients]
    end = parse_iso_date(week_ending)
    if end is None:
        new_this_week = 0
    else:
        new_this_week = len(date_range_filter(clients, "created_at", end - timedelta(days=6), end))

    # Directory records carry services_availed; portfolio snapshots carry services
    engaged = [
        client
        for client in clients
        if _get(client, "status") == "Active"
        and _get(client, "services_availed", _get(client, "services"))
    ]
    return PortfolioCounts(
        active_clients=statuses.count("Active"),
        pending_leads=sum(1 for status in statuses if status in ("Lead", "Proposal Sent")),
        active_engagements=len(engaged),
        new_this_week=new_this_week,
    )
