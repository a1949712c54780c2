# ============================================================================
# ReportDesk - Client Engagement Report Schema
#
# Purpose: Six-section weekly client engagement report with a directory
#          snapshot for the portfolio table
# Inputs: Authored field values, AuthoringContext (clients from the directory)
# Outputs: ClientEngagementReport model
# Dependencies: pydantic
# Usage: report = ClientEngagementReport.create(context)
#
# Changelog:
#   2026-09-10: Initial client engagement schema
#   2026-09-18: Portfolio stores a client snapshot so rendering stays pure
# ============================================================================

import json
import re
from typing import Any, List, Literal

from pydantic import Field

from ReportDesk.calculator import week_ending_sunday
from ReportDesk.reporting.schema import (
    Amount,
    AuthoringContext,
    ClientRecord,
    Count,
    ISODate,
    Priority,
    RecordId,
    ReportModel,
)
from ReportDesk.utils.time import parse_iso_date

_TITLE_WEEK_ENDING = re.compile(r"Week Ending\s+(\d{4}-\d{2}-\d{2})", re.IGNORECASE)

DEFAULT_HIGHLIGHT_SLOTS = 3
NEXT_ACTION_PLACEHOLDER = "[Next Action]"


def parse_services(value: Any) -> List[str]:
    """Services availed by a client; the directory may send a JSON-encoded list."""
    if not value:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return [value]
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


class EngagementHeader(ReportModel):
    # Period covered is derived from week_ending
    week_ending: ISODate = None
    prepared_by: str = ""
    position: str = ""
    approved_by: str = ""
    approved_signature: str = ""


class ActivitiesSummary(ReportModel):
    new_clients_signed: Count = None
    client_meetings_conducted: Count = None
    proposals_submitted: Count = None


class Highlight(ReportModel):
    text: str = ""
    image_url: str = ""


class ClientFeedback(ReportModel):
    client_name: str = ""
    rating: int = Field(default=5, ge=1, le=5)
    comment: str = ""


class Feedback(ReportModel):
    achievements: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    lessons_learned: str = ""
    client_feedback: List[ClientFeedback] = Field(default_factory=list)


class PortfolioClient(ReportModel):
    """Directory client as captured when the report was drafted."""

    client_id: RecordId = None
    name: str = ""
    services: List[str] = Field(default_factory=list)
    status: str = ""
    value: Amount = None
    created_at: ISODate = None
    next_action: str = ""

    @classmethod
    def from_record(cls, record: ClientRecord) -> "PortfolioClient":
        return cls(
            client_id=record.client_id if record.client_id is not None else record.id,
            name=record.display_name,
            services=parse_services(record.services_availed),
            status=record.status or "",
            value=record.loan_amount,
            created_at=parse_iso_date(record.created_at),
        )


class Portfolio(ReportModel):
    filter_service_type: str = "all"
    clients: List[PortfolioClient] = Field(default_factory=list)

    def filtered(self) -> List[PortfolioClient]:
        if self.filter_service_type == "all":
            return list(self.clients)
        return [client for client in self.clients if self.filter_service_type in client.services]


class ActionItem(ReportModel):
    action_item: str = ""
    responsible_person: str = ""
    deadline: ISODate = None
    priority: Priority = "Medium"
    status: str = "Not Started"
    comments: str = ""


def _default_highlights() -> List[Highlight]:
    return [Highlight() for _ in range(DEFAULT_HIGHLIGHT_SLOTS)]


class ClientEngagementReport(ReportModel):
    """Weekly client engagement department report."""

    template: Literal["client-engagement"] = "client-engagement"
    header: EngagementHeader = Field(default_factory=EngagementHeader)
    activities: ActivitiesSummary = Field(default_factory=ActivitiesSummary)
    highlights: List[Highlight] = Field(default_factory=_default_highlights)
    feedback: Feedback = Field(default_factory=Feedback)
    portfolio: Portfolio = Field(default_factory=Portfolio)
    action_items: List[ActionItem] = Field(default_factory=list)

    @classmethod
    def create(cls, context: AuthoringContext) -> "ClientEngagementReport":
        return cls(
            header=EngagementHeader(
                week_ending=week_ending_sunday(context.today),
                prepared_by=context.user.name,
                position=context.user.position or context.default_engagement_position,
            ),
            portfolio=Portfolio(clients=[PortfolioClient.from_record(c) for c in context.clients]),
        )

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "ClientEngagementReport":
        report = cls.create(context)
        match = _TITLE_WEEK_ENDING.search(title or "")
        if match:
            report.header.week_ending = match.group(1)
        return report

    def default_title(self) -> str:
        week_ending = self.header.week_ending.isoformat() if self.header.week_ending else ""
        return f"Client Engagement Report - Week Ending {week_ending}".rstrip()
