# ============================================================================
# ReportDesk - Reporting Package
#
# Purpose: Report schemas, building, serialization and validation
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ReportDesk.reporting import ReportBuilder, serialize_report, validate_report
#
# Changelog:
#   2026-09-03: Initial reporting package
#   2026-09-26: Export the template registry and serializer
# ============================================================================

from ReportDesk.reporting.registry import TEMPLATES, TemplateSpec, get_template
from ReportDesk.reporting.report_builder import ReportBuilder
from ReportDesk.reporting.schema import ActingUser, Attachment, ContentMode, ReportRecord, ReportTemplate
from ReportDesk.reporting.serializer import render_text, serialize_report
from ReportDesk.reporting.validation import validate_report

__all__ = [
    "ActingUser",
    "Attachment",
    "ContentMode",
    "ReportBuilder",
    "ReportRecord",
    "ReportTemplate",
    "TEMPLATES",
    "TemplateSpec",
    "get_template",
    "render_text",
    "serialize_report",
    "validate_report",
]
