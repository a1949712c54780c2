# ============================================================================
# ReportDesk - External Collaborator Interfaces
#
# Purpose: Abstract interfaces for the directory and upload services the
#          authoring session consumes
# Inputs: Directory records, files to upload
# Outputs: DirectoryEntry / ClientRecord models, Attachment references
# Dependencies: abc, reporting.schema
# Usage: class MyUploader(Uploader): ...
#
# Changelog:
#   2026-09-28: Initial Directory and Uploader interfaces
#   2026-10-07: StaticDirectory for directory snapshots loaded from JSON
# ============================================================================

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from ReportDesk.errors import ConfigurationError
from ReportDesk.reporting.schema import Attachment, ClientRecord, DirectoryEntry


class Directory(ABC):
    """
    Read-only lookups of departments, clients, staff and users.

    Records are opaque ``{id, name, ...}`` entries; extra keys are kept.
    """

    @abstractmethod
    def list_departments(self) -> List[DirectoryEntry]:
        pass

    @abstractmethod
    def list_clients(self) -> List[ClientRecord]:
        pass

    @abstractmethod
    def list_staff(self) -> List[DirectoryEntry]:
        pass

    @abstractmethod
    def list_users(self) -> List[DirectoryEntry]:
        pass


class Uploader(ABC):
    """Stores one file and returns a reference to it."""

    @abstractmethod
    def upload(self, file: Any) -> Attachment:
        """
        Upload a file.

        Args:
            file: Opaque file handle understood by the implementation

        Returns:
            Attachment reference, stored verbatim in the report instance

        Raises:
            Exception: Any failure; the session reports it as an UploadError
        """
        pass


class StaticDirectory(Directory):
    """Directory backed by in-memory lists, e.g. a snapshot exported to JSON."""

    def __init__(
        self,
        departments: Optional[List[Dict[str, Any]]] = None,
        clients: Optional[List[Dict[str, Any]]] = None,
        staff: Optional[List[Dict[str, Any]]] = None,
        users: Optional[List[Dict[str, Any]]] = None,
    ):
        self._departments = [DirectoryEntry.model_validate(d) for d in departments or []]
        self._clients = [ClientRecord.model_validate(c) for c in clients or []]
        self._staff = [DirectoryEntry.model_validate(s) for s in staff or []]
        self._users = [DirectoryEntry.model_validate(u) for u in users or []]

    @classmethod
    def from_json(cls, path: str) -> "StaticDirectory":
        """
        Load a directory snapshot with optional ``departments``, ``clients``,
        ``staff`` and ``users`` lists.

        Raises:
            ConfigurationError: If the file is missing or is not a JSON object
        """
        snapshot = Path(path)
        try:
            data = json.loads(snapshot.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read directory snapshot {path}", details=str(e)) from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Directory snapshot {path} must be a JSON object")
        return cls(
            departments=data.get("departments"),
            clients=data.get("clients"),
            staff=data.get("staff"),
            users=data.get("users"),
        )

    def list_departments(self) -> List[DirectoryEntry]:
        return list(self._departments)

    def list_clients(self) -> List[ClientRecord]:
        return list(self._clients)

    def list_staff(self) -> List[DirectoryEntry]:
        return list(self._staff)

    def list_users(self) -> List[DirectoryEntry]:
        return list(self._users)
