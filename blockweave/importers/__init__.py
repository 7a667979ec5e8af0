"""Project sources for Blockweave."""

from .base import BaseImporter, SnapshotError
from .json_snapshot import JsonSnapshotImporter, export_project, parse_project
from .mock import MockImporter

__all__ = [
    "BaseImporter",
    "SnapshotError",
    "JsonSnapshotImporter",
    "export_project",
    "parse_project",
    "MockImporter",
]
