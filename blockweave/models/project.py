"""
Project, file and variable models for Blockweave.

The resolution core only ever reads these; the host application owns and
mutates them.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import SnapshotModel, Timestamps
from .blocks import Block


class Visibility(str, Enum):
    """
    Access tag on a variable.

    ``protected`` behaves exactly like ``public``: it is meant to be directory
    scoped, but files have no directory model.
    """

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class VariableMetadata(Timestamps):
    """Variable timestamps."""

    last_used_at: Optional[datetime] = None


class Variable(SnapshotModel):
    """
    A key/value pair, either global to the project or local to one file.
    """

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique variable identifier"
    )

    key: str = Field(
        ...,
        description="Lookup key; uniqueness within a scope is not enforced"
    )

    value: str = Field(
        default="",
        description="The substituted value"
    )

    is_output: bool = Field(
        default=False,
        description="Marks a slot an AI generation step is expected to populate"
    )

    description: Optional[str] = Field(
        default=None,
        description="Free-form description shown in the editor"
    )

    visibility: Optional[Visibility] = Field(
        default=None,
        description="Access tag; None behaves like public"
    )

    metadata: VariableMetadata = Field(default_factory=VariableMetadata)


class FileMetadata(Timestamps):
    """Informational counters; never checked against the file's contents."""

    last_accessed_at: Optional[datetime] = None
    block_count: int = 0
    variable_count: int = 0


class File(SnapshotModel):
    """
    A document within a project: an ordered list of blocks plus local variables.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    name: str = Field(
        ...,
        description="Primary cross-file addressing key (uniqueness is not enforced)"
    )

    description: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)

    updated_at: datetime = Field(default_factory=datetime.now)

    local_variables: List[Variable] = Field(default_factory=list)

    blocks: List[Block] = Field(default_factory=list)

    metadata: FileMetadata = Field(default_factory=FileMetadata)

    def find_block(self, block_id: str) -> Optional[Block]:
        """First block with the given identifier, or None."""
        return next((block for block in self.blocks if block.id == block_id), None)

    def find_variable(self, key: str) -> Optional[Variable]:
        """First local variable with the given key, or None."""
        return next((var for var in self.local_variables if var.key == key), None)


class ProjectMetadata(Timestamps):
    """Informational counters; never checked against the project's contents."""

    last_accessed_at: Optional[datetime] = None
    file_count: int = 0
    global_variable_count: int = 0
    total_block_count: int = 0
    version: str = "1.0.0"


class Project(SnapshotModel):
    """
    Root aggregate: ordered files plus global variables.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    name: str = Field(default="New Project")

    description: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)

    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Bumped by the host on every mutation; doubles as the cache generation"
    )

    global_variables: List[Variable] = Field(default_factory=list)

    files: List[File] = Field(default_factory=list)

    metadata: ProjectMetadata = Field(default_factory=ProjectMetadata)

    def find_file(self, file_id: Optional[str]) -> Optional[File]:
        """First file with the given identifier, or None."""
        if file_id is None:
            return None
        return next((file for file in self.files if file.id == file_id), None)

    def find_file_by_name(self, name: str) -> Optional[File]:
        """First file whose name equals ``name`` exactly, or None."""
        return next((file for file in self.files if file.name == name), None)

    def find_global_variable(self, key: str) -> Optional[Variable]:
        """First global variable with the given key, or None."""
        return next((var for var in self.global_variables if var.key == key), None)

    def combined_variables(self, file_id: Optional[str]) -> List[Variable]:
        """
        Global variables followed by the file's local variables.

        Both scopes are kept; lookups that walk this list take the first match,
        so a global variable wins a key collision with a local one.

        Args:
            file_id: The acting file; an unknown id contributes no locals

        Returns:
            The concatenated variable list
        """
        file = self.find_file(file_id)
        local_variables = file.local_variables if file else []
        return [*self.global_variables, *local_variables]

    def touch(self) -> None:
        """Mark the project as modified."""
        self.updated_at = datetime.now()
