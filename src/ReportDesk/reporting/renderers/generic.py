# ============================================================================
# ReportDesk - Generic Report Renderer
#
# Purpose: Text form of the generic fallback report
# Inputs: GenericReport
# Outputs: The authored content, verbatim
# Dependencies: None
# Usage: text = render_generic(report, RenderOptions())
#
# Changelog:
#   2026-09-12: Initial generic renderer
# ============================================================================

from ReportDesk.reporting.departments.generic import GenericReport
from ReportDesk.reporting.renderers.base import RenderOptions


def render_generic(report: GenericReport, options: RenderOptions) -> str:
    return report.content
