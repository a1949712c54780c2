# ============================================================================
# ReportDesk - Package Initialization
#
# Purpose: Package-level exports and version information
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ReportDesk import ReportSession, __version__
#
# Changelog:
#   2026-09-24: Initial package setup
#   2026-10-08: Export stores and the authoring session
# ============================================================================

__version__ = "0.1.0"
__author__ = "Joe Bachir"
__license__ = "Apache-2.0"

from ReportDesk.config import Config
from ReportDesk.reporting import ActingUser, Attachment, ReportBuilder, ReportRecord, ReportTemplate
from ReportDesk.router import route, route_existing
from ReportDesk.session import ReportSession
from ReportDesk.stores import LocalFileReportStore, ReportStore, SQLiteReportStore

__all__ = [
    "__version__",
    "ActingUser",
    "Attachment",
    "Config",
    "LocalFileReportStore",
    "ReportBuilder",
    "ReportRecord",
    "ReportSession",
    "ReportStore",
    "ReportTemplate",
    "SQLiteReportStore",
    "route",
    "route_existing",
]
