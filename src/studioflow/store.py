"""Durable, append-only storage of saved projects."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Protocol

import yaml
from pydantic import ValidationError

from .errors import StoreError
from .models import Project

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "projects"


def sort_newest_first(projects: Iterable[Project]) -> List[Project]:
    """Return projects ordered by creation time, newest first."""
    return sorted(projects, key=lambda project: project.created_at, reverse=True)


class ProjectStore(Protocol):
    """Where finished projects are kept. Entries are never edited."""

    def append(self, project: Project) -> None:
        ...

    def list_all(self) -> List[Project]:
        ...


class InMemoryProjectStore:
    """Project store that lives as long as the process."""

    def __init__(self) -> None:
        self._projects: List[Project] = []

    def append(self, project: Project) -> None:
        self._projects.append(project)

    def list_all(self) -> List[Project]:
        return list(self._projects)


class YamlProjectStore:
    """Project store backed by a YAML file on local disk.

    The file holds one mapping; projects live under a single namespace key so
    other settings can share the file.
    """

    def __init__(self, path: Path, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._path = Path(path).expanduser()
        self._namespace = namespace

    @property
    def path(self) -> Path:
        return self._path

    def _load_document(self) -> dict:
        """Load the whole YAML document.

        Raises:
            StoreError: If the file exists but cannot be parsed.
        """
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise StoreError(f"Cannot read project store {self._path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise StoreError(f"Project store {self._path} is not a mapping")
        return data

    def _write_document(self, data: dict) -> None:
        """Write the document atomically via a temporary file in the same directory."""
        tmp_path = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True)
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreError(f"Cannot write project store {self._path}: {e}") from e

    def append(self, project: Project) -> None:
        """Add a project to the end of the store.

        Raises:
            StoreError: If the existing file is unreadable or cannot be written.
        """
        data = self._load_document()
        entries = data.get(self._namespace) or []
        if not isinstance(entries, list):
            raise StoreError(f"Namespace '{self._namespace}' in {self._path} is not a list")

        entries.append(project.model_dump(mode="json"))
        data[self._namespace] = entries
        self._write_document(data)
        logger.info(f"Saved project {project.id} to {self._path}")

    def list_all(self) -> List[Project]:
        """Return all readable projects in insertion order.

        An unreadable store reads as empty; unreadable entries are skipped.
        """
        try:
            data = self._load_document()
        except StoreError as e:
            logger.error(str(e))
            return []

        entries = data.get(self._namespace) or []
        if not isinstance(entries, list):
            logger.error(f"Namespace '{self._namespace}' in {self._path} is not a list")
            return []

        projects: List[Project] = []
        for entry in entries:
            try:
                projects.append(Project(**entry))
            except (TypeError, ValidationError) as e:
                logger.warning(f"Skipping unreadable project entry: {e}")
        return projects
