"""
Base importer interface for Blockweave.

This module defines the abstract interface that all project sources must implement.
"""

from abc import ABC, abstractmethod

from ..models import Project


class SnapshotError(ValueError):
    """Raised when a project snapshot is malformed."""


class BaseImporter(ABC):
    """
    Abstract base class for all project importers.

    Each importer turns a project source (an exported editor snapshot, fixture
    data, ...) into a Project that the resolver and renderers can read.
    """

    @abstractmethod
    def load_project(self) -> Project:
        """
        Load the project snapshot.

        Returns:
            The loaded Project

        Raises:
            SnapshotError: If the source does not describe a valid project
        """
        pass
