# ============================================================================
# ReportDesk - Report Builder
#
# Purpose: Build report instances: department defaults for new reports,
#          reconstruction of existing records, and report titles
# Inputs: TemplateSpec, ActingUser, reference date, directory lookups,
#         existing ReportRecord
# Outputs: Report instances, titles
# Dependencies: reporting.registry, reporting.schema, utils.serialization
# Usage: builder = ReportBuilder(config); report = builder.new_instance(spec, user, today)
#
# Changelog:
#   2026-09-27: Initial builder (defaults, title patterns)
#   2026-10-01: Reconstruction of existing records; JSON parse falls back to
#               defaults plus title salvage instead of raising
#   2026-10-02: Text-mode templates saved with an explicit JSON snapshot are
#               reconstructed from the snapshot
# ============================================================================

from datetime import date
from typing import Any, Iterable, List, Optional

import pydantic

from ReportDesk.config import Config
from ReportDesk.errors import ReconstructionError
from ReportDesk.logging_utils import get_logger
from ReportDesk.reporting.registry import TemplateSpec
from ReportDesk.reporting.schema import (
    ActingUser,
    AuthoringContext,
    ClientRecord,
    ContentMode,
    DirectoryEntry,
    ReportModel,
    ReportRecord,
    ReportTemplate,
)
from ReportDesk.utils.serialization import parse_report_json, stored_template

logger = get_logger(__name__)


def _entries(items: Optional[Iterable[Any]], model: type) -> List[Any]:
    if not items:
        return []
    return [item if isinstance(item, model) else model.model_validate(item) for item in items]


class ReportBuilder:
    """
    Builds report instances for the authoring lifecycle.

    Every default that depends on "now" or on "who" is computed from the
    explicit ``today`` and ``user`` arguments, never from ambient state.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize report builder.

        Args:
            config: Configuration; supplies the default client engagement
                position when the acting user has none
        """
        self.config = config or Config()

    def context(
        self,
        user: ActingUser,
        today: date,
        department_name: str = "",
        staff: Optional[Iterable[Any]] = None,
        clients: Optional[Iterable[Any]] = None,
    ) -> AuthoringContext:
        """Authoring context for one session. Staff and clients may be plain dicts."""
        return AuthoringContext(
            user=user,
            today=today,
            department_name=department_name,
            staff=_entries(staff, DirectoryEntry),
            clients=_entries(clients, ClientRecord),
            default_engagement_position=self.config.rendering.default_engagement_position,
        )

    def new_instance(
        self,
        spec: TemplateSpec,
        user: ActingUser,
        today: date,
        staff: Optional[Iterable[Any]] = None,
        clients: Optional[Iterable[Any]] = None,
        department_name: str = "",
    ) -> ReportModel:
        """
        Create a fresh instance with department defaults.

        Args:
            spec: Template to instantiate
            user: Acting user (preparer name, position, role)
            today: Reference date for month/year, week ending and week info
            staff: Directory staff (one marketing performance row each)
            clients: Directory clients (client engagement portfolio snapshot)
            department_name: Department of the acting head

        Returns:
            New report instance
        """
        context = self.context(user, today, department_name, staff, clients)
        instance = spec.model.create(context)
        logger.debug(f"New {spec.tag} instance for {user.name or 'unknown user'} ({today.isoformat()})")
        return instance

    def reconstruct(
        self,
        spec: TemplateSpec,
        record: ReportRecord,
        user: ActingUser,
        today: date,
        staff: Optional[Iterable[Any]] = None,
        clients: Optional[Iterable[Any]] = None,
        department_name: str = "",
    ) -> ReportModel:
        """
        Rebuild an editable instance from a persisted record.

        JSON snapshots are parsed back exactly. Text content is lossy, so
        text-mode templates restart from defaults with whatever the title
        reveals (month/year, week ending, audit period). A snapshot that
        fails to parse falls back the same way; it never raises.

        Args:
            spec: Template chosen by the router
            record: Existing record (title, content, attachments)
            user: Acting user
            today: Reference date for defaults

        Returns:
            Report instance
        """
        context = self.context(user, today, department_name, staff, clients)

        if spec.template is ReportTemplate.GENERIC:
            return spec.model(
                title=record.title,
                content=record.content,
                attachments=record.attachments or [],
            )

        if spec.content_mode is ContentMode.JSON or stored_template(record.content) is spec.template:
            try:
                return self._parse_snapshot(spec, record)
            except ReconstructionError as e:
                logger.warning(f"Falling back to defaults for {spec.tag} report {record.id!r}: {e.message}")

        return spec.model.from_title(record.title, context)

    def _parse_snapshot(self, spec: TemplateSpec, record: ReportRecord) -> ReportModel:
        try:
            return parse_report_json(record.content, spec.model)
        except (ValueError, pydantic.ValidationError) as e:
            raise ReconstructionError("Report content could not be parsed", details=str(e)) from e

    @staticmethod
    def build_title(instance: ReportModel, existing_title: Optional[str] = None) -> str:
        """
        Title for a submission: the existing title when editing, otherwise the
        template's title pattern filled from the instance.
        """
        if existing_title and existing_title.strip():
            return existing_title
        return instance.default_title()
