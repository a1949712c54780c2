# ============================================================================
# ReportDesk - Utils Package
#
# Purpose: Shared utility functions
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ReportDesk.utils import get_utc_timestamp, parse_iso_date
#
# Changelog:
#   2026-09-02: Initial utils package
#   2026-10-03: Serialization helpers are imported from utils.serialization
#               directly; they depend on the department schemas, which in
#               turn depend on utils.time
# ============================================================================

from ReportDesk.utils.time import get_utc_timestamp, month_name, month_number, parse_iso_date

__all__ = ["get_utc_timestamp", "month_name", "month_number", "parse_iso_date"]
