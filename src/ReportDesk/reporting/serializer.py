# ============================================================================
# ReportDesk - Report Serializer
#
# Purpose: Produce the persisted content payload of a report instance
# Inputs: Report instance, optional content mode, RenderOptions
# Outputs: Text or JSON content string
# Dependencies: registry, renderers, utils.serialization
# Usage: content = serialize_report(report)
#
# Changelog:
#   2026-09-26: Initial serializer (per-template default content mode)
#   2026-10-03: render_text available for JSON-mode templates too
# ============================================================================

from typing import Optional, Union

from ReportDesk.logging_utils import get_logger
from ReportDesk.reporting.registry import template_for
from ReportDesk.reporting.renderers.base import RenderOptions
from ReportDesk.reporting.schema import ContentMode, ReportModel
from ReportDesk.utils.serialization import serialize_report_to_json

logger = get_logger(__name__)


def render_text(report: ReportModel, options: Optional[RenderOptions] = None) -> str:
    """
    Render any report instance as plain text.

    Args:
        report: Report instance (any template)
        options: Rendering knobs; defaults when omitted

    Returns:
        Deterministic text document
    """
    spec = template_for(report)
    return spec.renderer(report, options or RenderOptions())


def serialize_report(
    report: ReportModel,
    mode: Optional[Union[ContentMode, str]] = None,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Serialize a report instance into its content payload.

    Pure: the same instance always yields the same string. No clock reads,
    no I/O, rows in authoring order.

    Args:
        report: Report instance
        mode: Content mode; defaults to the template's own mode
        options: Rendering knobs for text mode

    Returns:
        Content string (text document, or compact JSON snapshot)
    """
    spec = template_for(report)
    content_mode = ContentMode(mode) if mode is not None else spec.content_mode
    logger.debug(f"Serializing {spec.tag} report as {content_mode.value}")
    if content_mode is ContentMode.JSON:
        return serialize_report_to_json(report)
    return spec.renderer(report, options or RenderOptions())
