"""
Resolution-time models for Blockweave.

References and dependency graphs are produced fresh on every pass and are
never persisted.
"""

from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field

from .base import SnapshotModel


class RefSyntax(str, Enum):
    """Which grammar produced a reference."""

    FILE_PATH = "file-path"
    FILENAME = "filename"


class RefStatus(str, Enum):
    """Resolution state; everything but PENDING is terminal."""

    PENDING = "pending"
    RESOLVED = "resolved"
    NOT_FOUND = "not-found"
    ERROR = "error"


class CrossFileVariableRef(SnapshotModel):
    """
    One occurrence of a cross-file reference in block text.

    Instances are immutable: resolving a reference returns a new instance.
    """

    model_config = ConfigDict(frozen=True)

    syntax: RefSyntax = Field(..., description="Grammar that matched")

    file_path: str = Field(..., description="File designator as written")

    variable_name: str = Field(..., description="Variable key as written")

    is_relative: bool = Field(
        default=False,
        description="True when the path starts with ./ or ../"
    )

    raw: str = Field(..., description="The exact matched text")

    status: RefStatus = RefStatus.PENDING

    resolved_value: Optional[str] = None

    resolved_file_id: Optional[str] = None

    error: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.status is RefStatus.RESOLVED

    def with_status(self, status: RefStatus, **changes) -> "CrossFileVariableRef":
        """Copy of this reference moved to ``status`` with extra field updates."""
        return self.model_copy(update={"status": status, **changes})


class FileDependency(SnapshotModel):
    """
    A file-to-file edge, carrying the references that induced it.
    """

    source_file_id: str

    target_file_id: str

    variable_refs: List[CrossFileVariableRef] = Field(default_factory=list)


class DependencyGraph(SnapshotModel):
    """
    File dependency edges plus the cycles found among them.
    """

    dependencies: List[FileDependency] = Field(default_factory=list)

    circular_refs: List[List[str]] = Field(
        default_factory=list,
        description="Each cycle is a list of file ids ending with its first element"
    )

    @property
    def has_cycles(self) -> bool:
        return bool(self.circular_refs)

    def dependencies_of(self, file_id: str) -> List[FileDependency]:
        """Edges leaving ``file_id``."""
        return [dep for dep in self.dependencies if dep.source_file_id == file_id]
