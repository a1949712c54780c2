# ============================================================================
# ReportDesk - Generic Report Schema
#
# Purpose: Fallback report for departments without a dedicated template
# Inputs: Title, free text, attachments
# Outputs: GenericReport model
# Dependencies: pydantic
# Usage: report = GenericReport(title="Weekly update", content="...")
#
# Changelog:
#   2026-09-06: Initial generic schema
# ============================================================================

from typing import List, Literal

from pydantic import Field

from ReportDesk.reporting.schema import Attachment, AuthoringContext, ReportModel


class GenericReport(ReportModel):
    """Title plus free-text content; the content is persisted verbatim."""

    template: Literal["generic"] = "generic"
    title: str = ""
    content: str = ""
    attachments: List[Attachment] = Field(default_factory=list)

    @classmethod
    def create(cls, context: AuthoringContext) -> "GenericReport":
        return cls()

    @classmethod
    def from_title(cls, title: str, context: AuthoringContext) -> "GenericReport":
        return cls(title=title or "")

    def default_title(self) -> str:
        return self.title.strip()
