# ============================================================================
# ReportDesk - Stores Package
#
# Purpose: Report store interface and reference implementations
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ReportDesk.stores import LocalFileReportStore, store_from_config
#
# Changelog:
#   2026-09-28: Initial stores package
#   2026-10-08: store_from_config selects the store named in Config.store
# ============================================================================

from typing import TYPE_CHECKING

from ReportDesk.stores.base import ReportStore
from ReportDesk.stores.local_file import LocalFileReportStore
from ReportDesk.stores.sqlite_store import SQLiteReportStore

if TYPE_CHECKING:
    from ReportDesk.config import StoreConfig


def store_from_config(store_config: "StoreConfig") -> ReportStore:
    """Build the reference store named by ``store.type``."""
    if store_config.type == "sqlite":
        return SQLiteReportStore(store_config.sqlite_path)
    return LocalFileReportStore(store_config.output_dir)


__all__ = ["LocalFileReportStore", "ReportStore", "SQLiteReportStore", "store_from_config"]
