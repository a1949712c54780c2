# ============================================================================
# ReportDesk - Serialization Utilities
#
# Purpose: JSON snapshots of report instances and parsing them back
# Inputs: Report instances / JSON strings
# Outputs: JSON strings / Report instances
# Dependencies: json, pydantic, calculator
# Usage: json_str = serialize_report_to_json(report)
#
# Changelog:
#   2026-09-26: Initial serialization (camelCase aliases, compact separators)
#   2026-10-03: Derived block of calculator outputs materialized at save time;
#               ignored on parse and recomputed instead
# ============================================================================

import json
from dataclasses import asdict
from typing import Any, Dict, Optional, Type

from ReportDesk.calculator import audit_findings_summary, cash_flow, duration_to_hours, task_analytics
from ReportDesk.reporting.departments import report_instance_adapter
from ReportDesk.reporting.schema import ReportModel, ReportTemplate

DERIVED_KEY = "derived"


def derived_fields(report: ReportModel) -> Dict[str, Any]:
    """
    Calculator outputs worth materializing alongside a snapshot.

    Readers that do not embed the calculator (dashboards, exports) can use
    these without recomputing; ReportDesk itself always recomputes.
    """
    template = getattr(report, "template", None)
    if template == "finance":
        return {"cashFlow": asdict(cash_flow(report))}
    if template == "marketing-weekly-client-officer":
        analytics = task_analytics(report.tasks)
        data = asdict(analytics)
        data["clientsEngaged"] = list(data.pop("clients_engaged"))
        return {_camel(key): value for key, value in data.items()}
    if template == "marketing-client-activities":
        return {"activityHours": [round(duration_to_hours(a.time_spent), 2) for a in report.activities]}
    if template == "internal-audit":
        summary = asdict(audit_findings_summary(report.audit_findings.findings))
        return {"findingsSummary": {_camel(key): value for key, value in summary.items()}}
    return {}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def serialize_report_to_json(report: ReportModel, indent: Optional[int] = None) -> str:
    """
    Serialize a report instance to JSON.

    Args:
        report: Report instance to serialize
        indent: JSON indentation (None for compact, 2 for pretty-print)

    Returns:
        JSON string with every field by camelCase alias in declaration order,
        followed by the ``derived`` block when the template has one
    """
    data = report.model_dump(mode="json", by_alias=True)
    derived = derived_fields(report)
    if derived:
        data[DERIVED_KEY] = derived
    if indent is None:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(data, indent=indent, ensure_ascii=False)


def stored_template(content: Optional[str]) -> Optional[ReportTemplate]:
    """
    Template tag stored in a JSON content payload, if there is one.

    Text content and JSON without a recognised ``template`` key return None.
    """
    if not content or not content.lstrip().startswith("{"):
        return None
    try:
        data = json.loads(content)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return ReportTemplate(data.get("template"))
    except ValueError:
        return None


def parse_report_json(json_str: str, model: Optional[Type[ReportModel]] = None) -> ReportModel:
    """
    Parse a JSON snapshot back into a report instance.

    Args:
        json_str: JSON produced by serialize_report_to_json (or a legacy form)
        model: Expected model; when omitted the ``template`` tag selects it

    Returns:
        Report instance; the ``derived`` block is ignored

    Raises:
        ValueError: If the text is not a JSON object
        pydantic.ValidationError: If the object does not fit the model
    """
    data = json.loads(json_str)
    if not isinstance(data, dict):
        raise ValueError("Report content is not a JSON object")
    data.pop(DERIVED_KEY, None)
    if model is not None:
        return model.model_validate(data)
    return report_instance_adapter.validate_python(data)
