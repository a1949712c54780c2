# ============================================================================
# ReportDesk - Shared Report Schema Types
#
# Purpose: Field types and records shared by every department schema
# Inputs: None (schema definitions)
# Outputs: Type-safe building blocks for department report models
# Dependencies: pydantic
# Usage: class MySection(ReportModel): amount: Amount = None
#
# Changelog:
#   2026-09-03: Initial shared types (Amount, Count, Attachment, ActingUser)
#   2026-09-10: ReportModel serializes by camelCase alias so JSON snapshots keep
#               the field names of records written by the legacy forms
#   2026-09-18: Attachment accepts a bare URL string (legacy records stored URLs)
#   2026-10-02: Added ReportTemplate tags and ContentMode
# ============================================================================

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    model_validator,
)
from pydantic.alias_generators import to_camel


class ReportTemplate(str, Enum):
    """Tag identifying one department report variant."""

    FINANCE = "finance"
    ICT_MONTHLY = "ict-monthly"
    ICT_WEEKLY = "ict-weekly"
    MARKETING = "marketing"
    MARKETING_WEEKLY_CLIENT_OFFICER = "marketing-weekly-client-officer"
    MARKETING_CLIENT_ACTIVITIES = "marketing-client-activities"
    INTERNAL_AUDIT = "internal-audit"
    CLIENT_ENGAGEMENT = "client-engagement"
    GENERIC = "generic"


class ContentMode(str, Enum):
    """How a report's content payload is produced."""

    TEXT = "text"
    JSON = "json"


def _blank_to_none(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, str):
        return value.strip()
    return value


def _blank_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    value = _blank_to_none(value)
    # Legacy records stored full ISO timestamps in some date fields
    if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
        return value[:10]
    return value


# Blank input is stored as None; arithmetic treats None as 0.
Amount = Annotated[Optional[NonNegativeFloat], BeforeValidator(_blank_to_none)]
SignedAmount = Annotated[Optional[float], BeforeValidator(_blank_to_none)]
Count = Annotated[Optional[NonNegativeInt], BeforeValidator(_blank_to_none)]
ISODate = Annotated[Optional[date], BeforeValidator(_blank_date)]
RecordId = Optional[Union[int, str]]

Priority = Literal["High", "Medium", "Low"]
Severity = Literal["Low", "Medium", "High", "Critical"]
RAGRating = Literal["Green", "Amber", "Red", "N/A"]


class ReportModel(BaseModel):
    """Base for every schema model: camelCase on the wire, validated on assignment."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class Attachment(ReportModel):
    """Reference to a file stored by the upload collaborator. Never interpreted."""

    url: str
    filename: Optional[str] = None
    original_name: Optional[str] = None
    size: Optional[int] = None
    mimetype: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_url(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"url": data}
        return data


class ActingUser(ReportModel):
    """The user authoring a report, passed explicitly to instance construction."""

    id: Optional[Any] = None
    name: str = ""
    position: str = ""
    role: str = ""
    email: str = ""


class ReportRecord(ReportModel):
    """A persisted report as exchanged with a report store."""

    id: Optional[Any] = None
    title: str
    content: str
    attachments: Optional[List[Attachment]] = Field(default=None)


class DirectoryEntry(ReportModel):
    """Opaque ``{id, name, ...}`` record returned by the directory service."""

    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    name: str = ""


class ClientRecord(DirectoryEntry):
    """Client as listed by the directory service."""

    client_id: Optional[Any] = None
    company_name: Optional[str] = None
    status: Optional[str] = None
    services_availed: Optional[Any] = None
    loan_amount: Optional[float] = None
    created_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.company_name or self.name or ""


@dataclass
class AuthoringContext:
    """Everything instance defaults depend on, passed explicitly.

    ``today`` is supplied by the caller so that defaults are reproducible.
    """

    user: ActingUser
    today: date
    department_name: str = ""
    staff: List[DirectoryEntry] = field(default_factory=list)
    clients: List[ClientRecord] = field(default_factory=list)
    default_engagement_position: str = "Head of Client Engagement"
