# ============================================================================
# ReportDesk - Report Authoring Session
#
# Purpose: Single-writer editing session for one report instance: routing,
#          row and field edits, uploads, validation and submission
# Inputs: Department, acting user, reference date, collaborators (store,
#         uploader, directory), optional existing record
# Outputs: Stored ReportRecord on submit
# Dependencies: router, reporting, stores, collaborators, errors
# Usage: session = ReportSession.start("Finance", user, today, store)
#        session.set_field("revenue.prinstine_consult", 1200)
#        record = session.submit()
#
# Changelog:
#   2026-09-30: Initial session (start/edit, set_field, submit)
#   2026-10-04: Row editing by dotted path; editing rules for officer tasks
#               and client activities
#   2026-10-06: Uploads via the Uploader; failures leave the instance intact
#   2026-10-19: Row indexes outside the section raise ValidationError
# ============================================================================

"""
Authoring session.

A session owns exactly one report instance. Edits validate as they are made,
so the instance is never left holding a malformed value: a rejected edit
raises ``ValidationError`` and changes nothing. Submission serializes the
whole instance and calls exactly one of ``create_report`` / ``update_report``;
a failed submission keeps the instance so the caller can retry.
"""

from datetime import date
from typing import Any, List, Optional, Tuple, Union, get_args, get_origin

import pydantic
from pydantic import BaseModel
from pydantic.alias_generators import to_snake

from ReportDesk.collaborators import Directory, Uploader
from ReportDesk.config import Config
from ReportDesk.errors import ReportDeskError, StoreError, UploadError, ValidationError
from ReportDesk.logging_utils import get_logger
from ReportDesk.reporting.departments.audit import InternalAuditReport
from ReportDesk.reporting.departments.marketing import (
    ClientActivitiesReport,
    ClientActivity,
    OfficerTask,
    WeeklyClientOfficerReport,
)
from ReportDesk.reporting.registry import TemplateSpec
from ReportDesk.reporting.renderers.base import RenderOptions
from ReportDesk.reporting.report_builder import ReportBuilder
from ReportDesk.reporting.schema import ActingUser, Attachment, ReportModel, ReportRecord
from ReportDesk.reporting.serializer import render_text, serialize_report
from ReportDesk.reporting.validation import validate_report
from ReportDesk.router import route, route_existing
from ReportDesk.stores.base import ReportStore

logger = get_logger(__name__)

FieldPath = Union[str, List[Union[str, int]]]


def _split(path: FieldPath) -> List[Union[str, int]]:
    parts = path.split(".") if isinstance(path, str) else list(path)
    if not parts or parts == [""]:
        raise ValueError("Empty field path")
    return [int(p) if isinstance(p, str) and p.isdigit() else p for p in parts]


def _attr(obj: BaseModel, name: str) -> str:
    """Python attribute name for a snake_case or camelCase path segment."""
    fields = type(obj).model_fields
    if name in fields:
        return name
    snake = to_snake(name)
    if snake in fields:
        return snake
    raise ValidationError(f"Unknown field: {name}", field_errors={name: "Unknown field"})


def _item_type(model: BaseModel, name: str) -> Any:
    annotation = type(model).model_fields[name].annotation
    if get_origin(annotation) in (list, List):
        return get_args(annotation)[0]
    raise ValidationError(f"{name} is not a repeatable section", field_errors={name: "Not a list"})


class ReportSession:
    """
    Editing session for one report instance.

    Args:
        spec: Template chosen by the router
        instance: Report instance being edited
        user: Acting user
        today: Reference date for date defaults
        store: Report store receiving the submission
        uploader: Upload collaborator for attachments
        existing: Record being edited, if any (selects update over create)
        options: Text rendering knobs
    """

    def __init__(
        self,
        spec: TemplateSpec,
        instance: ReportModel,
        user: ActingUser,
        today: date,
        store: ReportStore,
        uploader: Optional[Uploader] = None,
        existing: Optional[ReportRecord] = None,
        options: Optional[RenderOptions] = None,
    ):
        self.spec = spec
        self.user = user
        self.today = today
        self.store = store
        self.uploader = uploader
        self.existing = existing
        self.options = options or RenderOptions()
        self._instance: Optional[ReportModel] = instance

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def start(
        cls,
        department_name: str,
        user: ActingUser,
        today: date,
        store: ReportStore,
        uploader: Optional[Uploader] = None,
        report_type_hint: Optional[str] = None,
        directory: Optional[Directory] = None,
        config: Optional[Config] = None,
    ) -> "ReportSession":
        """Route the department and open a session on a fresh instance."""
        config = config or Config()
        spec = route(department_name, report_type_hint)
        builder = ReportBuilder(config)
        instance = builder.new_instance(
            spec,
            user,
            today,
            staff=directory.list_staff() if directory else None,
            clients=directory.list_clients() if directory else None,
            department_name=department_name,
        )
        logger.info(f"Started {spec.tag} report for {department_name!r}")
        return cls(spec, instance, user, today, store, uploader, options=RenderOptions.from_config(config.rendering))

    @classmethod
    def edit(
        cls,
        record: ReportRecord,
        department_name: str,
        user: ActingUser,
        today: date,
        store: ReportStore,
        uploader: Optional[Uploader] = None,
        report_type_hint: Optional[str] = None,
        directory: Optional[Directory] = None,
        config: Optional[Config] = None,
    ) -> "ReportSession":
        """Route an existing record and open a session on its reconstruction."""
        config = config or Config()
        spec = route_existing(department_name, record.title, record.content, report_type_hint)
        builder = ReportBuilder(config)
        instance = builder.reconstruct(
            spec,
            record,
            user,
            today,
            staff=directory.list_staff() if directory else None,
            clients=directory.list_clients() if directory else None,
            department_name=department_name,
        )
        logger.info(f"Editing {spec.tag} report {record.id!r}")
        return cls(
            spec,
            instance,
            user,
            today,
            store,
            uploader,
            existing=record,
            options=RenderOptions.from_config(config.rendering),
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def instance(self) -> ReportModel:
        if self._instance is None:
            raise ReportDeskError("Session is closed; the report was submitted or discarded")
        return self._instance

    @property
    def closed(self) -> bool:
        return self._instance is None

    def discard(self) -> None:
        """Cancel the session; nothing is persisted."""
        if self._instance is not None:
            logger.debug(f"Discarded {self.spec.tag} report")
        self._instance = None

    def preview(self) -> str:
        """Text rendering of the current instance."""
        return render_text(self.instance, self.options)

    # ------------------------------------------------------------------
    # Field and row editing
    # ------------------------------------------------------------------

    def _walk(self, parts: List[Union[str, int]]) -> Tuple[Any, Union[str, int]]:
        """Parent object and final key for a split path."""
        obj: Any = self.instance
        for depth, part in enumerate(parts[:-1]):
            if isinstance(part, int):
                self._check_index(parts[:depth], part, obj)
                obj = obj[part]
            else:
                obj = getattr(obj, _attr(obj, part))
        last = parts[-1]
        if isinstance(obj, BaseModel) and isinstance(last, str):
            last = _attr(obj, last)
        return obj, last

    def _rows(self, path: FieldPath) -> Tuple[BaseModel, str, List[Any]]:
        parent, name = self._walk(_split(path))
        if not isinstance(parent, BaseModel) or not isinstance(name, str):
            raise ValidationError(f"{path} is not a repeatable section", field_errors={str(path): "Not a list"})
        return parent, name, list(getattr(parent, name))

    @staticmethod
    def _check_index(path: FieldPath, index: int, rows: List[Any]) -> None:
        if isinstance(index, int) and isinstance(rows, list) and 0 <= index < len(rows):
            return
        key = path if isinstance(path, str) else ".".join(str(p) for p in path)
        raise ValidationError(f"No row {index} in {key}", field_errors={f"{key}.{index}": "No such row"})

    def _assign(self, target: BaseModel, name: str, value: Any, path: FieldPath) -> None:
        try:
            setattr(target, name, value)
        except pydantic.ValidationError as e:
            raise self._field_error(e, path) from e

    @staticmethod
    def _field_error(exc: pydantic.ValidationError, path: FieldPath) -> ValidationError:
        """The first pydantic message, keyed by the path the caller used."""
        error = ValidationError.from_pydantic(exc)
        messages = list(error.field_errors.values())
        key = path if isinstance(path, str) else ".".join(str(p) for p in path)
        error.field_errors = {key: messages[0] if messages else "Invalid value"}
        return error

    def set_field(self, path: FieldPath, value: Any) -> None:
        """
        Set one field by dotted path (``revenue.prinstine_consult``,
        ``tasks.0.status``). camelCase segments are accepted too.

        Raises:
            ValidationError: If the value does not fit the field
        """
        parts = _split(path)
        if len(parts) >= 3 and isinstance(parts[-2], int) and isinstance(parts[-1], str):
            # Field of a repeatable row: goes through the row editing rules
            self.update_row(parts[:-2], parts[-2], {parts[-1]: value})
            return
        if isinstance(parts[-1], int):
            self.update_row(parts[:-1], parts[-1], value)
            return
        parent, name = self._walk(parts)
        self._assign(parent, name, value, path)

    def _apply_rules(self, row: BaseModel, changed: set) -> BaseModel:
        """Editing rules: done tasks get a completion date, filed activities complete."""
        if isinstance(row, OfficerTask) and "status" in changed:
            if row.status == "Done" and row.date_completed is None:
                row.date_completed = self.today
        if isinstance(row, ClientActivity) and "date_submitted_filed" in changed:
            if row.date_submitted_filed is not None:
                row.status = "Completed"
        return row

    def _default_row(self, parent: BaseModel, name: str) -> Any:
        context = ReportBuilder(None).context(self.user, self.today)
        if isinstance(parent, WeeklyClientOfficerReport) and name == "tasks":
            return parent.new_task(context)
        if isinstance(parent, ClientActivitiesReport) and name == "activities":
            return parent.new_activity(context)
        instance = self.instance
        if isinstance(instance, InternalAuditReport):
            if parent is instance.audit_findings and name == "findings":
                return instance.new_finding(self.today)
            if parent is instance and name == "compliance_issues":
                return instance.new_compliance_issue(self.today)
        item = _item_type(parent, name)
        if isinstance(item, type) and issubclass(item, BaseModel):
            return item()
        return ""

    def add_row(self, path: FieldPath, row: Any = None) -> Any:
        """
        Append a row to a repeatable section.

        Args:
            path: Dotted path of the section (``tasks``, ``audit_findings.findings``)
            row: Row data (model or mapping); a blank default row when omitted

        Returns:
            The appended row
        """
        parent, name, rows = self._rows(path)
        if row is None:
            row = self._default_row(parent, name)
        elif isinstance(row, dict):
            item = _item_type(parent, name)
            if isinstance(item, type) and issubclass(item, BaseModel):
                try:
                    row = item.model_validate(row)
                except pydantic.ValidationError as e:
                    raise self._field_error(e, path) from e
        self._assign(parent, name, rows + [row], path)
        return getattr(parent, name)[-1]

    def add_sheet(self, sheet_type: str) -> Any:
        """Append an additional sheet to an internal audit report."""
        instance = self.instance
        if not isinstance(instance, InternalAuditReport):
            raise ValidationError(
                "Additional sheets belong to internal audit reports",
                field_errors={"additionalSheets": "Not available for this report"},
            )
        try:
            sheet = instance.new_sheet(sheet_type)
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e) from e
        instance.additional_sheets = [*instance.additional_sheets, sheet]
        return instance.additional_sheets[-1]

    def update_row(self, path: FieldPath, index: int, changes: Any) -> Any:
        """
        Change one row; siblings are untouched.

        Args:
            path: Dotted path of the section
            index: Row position
            changes: Mapping of field changes for structured rows, or the new
                value for plain text rows

        Raises:
            ValidationError: If a change does not fit the row (nothing is applied) or
                there is no row at ``index``
        """
        parent, name, rows = self._rows(path)
        self._check_index(path, index, rows)
        current = rows[index]
        if not isinstance(current, BaseModel):
            rows[index] = changes
            self._assign(parent, name, rows, path)
            return getattr(parent, name)[index]
        updates = {_attr(current, key): value for key, value in changes.items()}
        try:
            changed = type(current).model_validate({**current.model_dump(), **updates})
        except pydantic.ValidationError as e:
            raise self._field_error(e, path) from e
        changed = self._apply_rules(changed, set(updates))
        rows[index] = changed
        self._assign(parent, name, rows, path)
        return changed

    def remove_row(self, path: FieldPath, index: int) -> Any:
        """
        Remove one row; later rows shift down, no row is modified.

        Raises:
            ValidationError: If there is no row at ``index``
        """
        parent, name, rows = self._rows(path)
        self._check_index(path, index, rows)
        removed = rows.pop(index)
        self._assign(parent, name, rows, path)
        return removed

    # ------------------------------------------------------------------
    # Uploads and submission
    # ------------------------------------------------------------------

    def attach(self, file: Any, path: FieldPath = "attachments") -> Attachment:
        """
        Upload one file and store its reference at ``path``.

        List fields get the reference appended; single attachment fields are
        replaced.

        Raises:
            UploadError: If the upload fails; the instance is unchanged
        """
        if self.uploader is None:
            raise UploadError("No upload service is configured")
        parent, name = self._walk(_split(path))
        if not isinstance(name, str):
            raise ValidationError(f"{path} is not an attachment field", field_errors={str(path): "Not a field"})

        try:
            attachment = self.uploader.upload(file)
        except Exception as e:
            name_hint = getattr(file, "name", None) or str(file)
            raise UploadError(f"Failed to upload {name_hint}", details=str(e)) from e
        if not isinstance(attachment, Attachment):
            attachment = Attachment.model_validate(attachment)

        current = getattr(parent, name)
        value = [*current, attachment] if isinstance(current, list) else attachment
        self._assign(parent, name, value, path)
        logger.debug(f"Attached {attachment.url} at {path}")
        return attachment

    def _record_attachments(self) -> Optional[List[Attachment]]:
        attachments = getattr(self.instance, "attachments", None)
        if isinstance(attachments, list):
            return list(attachments)
        return None

    def submit(self) -> ReportRecord:
        """
        Validate, serialize and persist the report.

        Returns:
            Stored record

        Raises:
            ValidationError: If required fields are missing (nothing is sent)
            StoreError: If the store rejects the write; the instance is kept
        """
        instance = self.instance
        validate_report(instance)
        content = serialize_report(instance, options=self.options)
        title = ReportBuilder.build_title(instance, self.existing.title if self.existing else None)
        attachments = self._record_attachments()

        try:
            if self.existing is not None and self.existing.id is not None:
                record = self.store.update_report(self.existing.id, title, content, attachments)
            else:
                record = self.store.create_report(title, content, attachments)
        except StoreError:
            logger.exception(f"Store rejected {self.spec.tag} report")
            raise
        except Exception as e:
            logger.exception(f"Store rejected {self.spec.tag} report")
            raise StoreError(str(e)) from e

        logger.info(f"Submitted {self.spec.tag} report {record.id!r}: {title}")
        self._instance = None
        return record
