"""
JSON snapshot importer for Blockweave.

This module reads projects exported by the editor. Two flavours exist: the
export format with plain ISO timestamps, and the local-storage format where
dates are wrapped as ``{"__type": "Date", "value": "..."}``. Both are accepted.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from ..models import Project
from .base import BaseImporter, SnapshotError

REQUIRED_FIELDS = ("id", "name", "files", "globalVariables")


def _unwrap_dates(value: Any) -> Any:
    """Replace local-storage date wrappers with their ISO string."""
    if isinstance(value, dict):
        if value.get("__type") == "Date" and "value" in value:
            return value["value"]
        return {key: _unwrap_dates(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_unwrap_dates(item) for item in value]
    return value


def parse_project(data: Any) -> Project:
    """
    Validate decoded snapshot data into a Project.

    Args:
        data: The decoded JSON document

    Returns:
        The Project

    Raises:
        SnapshotError: If required fields are missing or the data fails validation
    """
    if not isinstance(data, dict):
        raise SnapshotError("Project snapshot must be a JSON object")

    data = _unwrap_dates(data)

    for field_name in REQUIRED_FIELDS:
        if field_name not in data and _snake(field_name) not in data:
            raise SnapshotError(f"Missing required field: {field_name}")

    for field_name in ("files", "globalVariables"):
        value = data.get(field_name, data.get(_snake(field_name)))
        if not isinstance(value, list):
            raise SnapshotError(f"Field '{field_name}' must be an array")

    try:
        return Project.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid project data format: {e}") from e


def _snake(name: str) -> str:
    return "".join(f"_{char.lower()}" if char.isupper() else char for char in name)


class JsonSnapshotImporter(BaseImporter):
    """
    Importer for exported project snapshot files.
    """

    def __init__(self, snapshot_path: Union[str, Path]):
        """
        Initialize the snapshot importer.

        Args:
            snapshot_path: Path to the exported JSON file
        """
        self.snapshot_path = Path(snapshot_path)

    def load_project(self) -> Project:
        """Read and validate the snapshot file."""
        logging.info(f"Loading project snapshot from {self.snapshot_path}")

        try:
            with open(self.snapshot_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise SnapshotError(f"Cannot read snapshot {self.snapshot_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Snapshot {self.snapshot_path} is not valid JSON: {e}") from e

        project = parse_project(data)
        block_count = sum(len(file.blocks) for file in project.files)
        logging.info(f"Loaded project '{project.name}' with {len(project.files)} files and {block_count} blocks")
        return project


def export_project(project: Project) -> str:
    """
    Serialize a project in the editor's export format.

    Returns:
        Indented camelCase JSON with ISO timestamps
    """
    return project.model_dump_json(by_alias=True, indent=2)
