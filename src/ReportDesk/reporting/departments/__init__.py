# ============================================================================
# ReportDesk - Department Schemas Package
#
# Purpose: One flat report model per template tag, and their closed union
# Inputs: None
# Outputs: Department models, ReportInstance discriminated union
# Dependencies: pydantic
# Usage: from ReportDesk.reporting.departments import FinanceReport, ReportInstance
#
# Changelog:
#   2026-09-06: Initial departments package
#   2026-10-02: ReportInstance discriminated on the template tag
# ============================================================================

from typing import Annotated, Union

from pydantic import Field, TypeAdapter

from ReportDesk.reporting.departments.audit import InternalAuditReport
from ReportDesk.reporting.departments.client_engagement import ClientEngagementReport
from ReportDesk.reporting.departments.finance import FinanceReport
from ReportDesk.reporting.departments.generic import GenericReport
from ReportDesk.reporting.departments.ict import ICTMonthlyReport, ICTWeeklyReport
from ReportDesk.reporting.departments.marketing import (
    ClientActivitiesReport,
    MarketingReport,
    WeeklyClientOfficerReport,
)

ReportInstance = Annotated[
    Union[
        FinanceReport,
        ICTMonthlyReport,
        ICTWeeklyReport,
        MarketingReport,
        WeeklyClientOfficerReport,
        ClientActivitiesReport,
        InternalAuditReport,
        ClientEngagementReport,
        GenericReport,
    ],
    Field(discriminator="template"),
]

report_instance_adapter: TypeAdapter = TypeAdapter(ReportInstance)

__all__ = [
    "ClientActivitiesReport",
    "ClientEngagementReport",
    "FinanceReport",
    "GenericReport",
    "ICTMonthlyReport",
    "ICTWeeklyReport",
    "InternalAuditReport",
    "MarketingReport",
    "ReportInstance",
    "WeeklyClientOfficerReport",
    "report_instance_adapter",
]
