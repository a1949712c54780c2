# ============================================================================
# ReportDesk - Text Renderers Package
#
# Purpose: One pure text renderer per report template
# Inputs: Report instance, RenderOptions
# Outputs: Plain-text documents
# Dependencies: calculator
# Usage: from ReportDesk.reporting.renderers import render_finance
#
# Changelog:
#   2026-09-12: Initial renderers package
# ============================================================================

from ReportDesk.reporting.renderers.audit import render_internal_audit
from ReportDesk.reporting.renderers.base import RenderOptions, TextDocument
from ReportDesk.reporting.renderers.client_engagement import render_client_engagement
from ReportDesk.reporting.renderers.finance import render_finance
from ReportDesk.reporting.renderers.generic import render_generic
from ReportDesk.reporting.renderers.ict import render_ict_monthly, render_ict_weekly
from ReportDesk.reporting.renderers.marketing import (
    render_client_activities,
    render_marketing,
    render_weekly_client_officer,
)

__all__ = [
    "RenderOptions",
    "TextDocument",
    "render_client_activities",
    "render_client_engagement",
    "render_finance",
    "render_generic",
    "render_ict_monthly",
    "render_ict_weekly",
    "render_internal_audit",
    "render_marketing",
    "render_weekly_client_officer",
]
