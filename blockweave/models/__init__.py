"""Data models for Blockweave."""

from .blocks import (
    Block,
    BlockContentError,
    BlockMetadata,
    BlockType,
    EmbedData,
    TableAlignment,
    TableData,
)
from .project import File, Project, Variable, Visibility
from .references import (
    CrossFileVariableRef,
    DependencyGraph,
    FileDependency,
    RefStatus,
    RefSyntax,
)

__all__ = [
    "Block",
    "BlockContentError",
    "BlockMetadata",
    "BlockType",
    "EmbedData",
    "TableAlignment",
    "TableData",
    "File",
    "Project",
    "Variable",
    "Visibility",
    "CrossFileVariableRef",
    "DependencyGraph",
    "FileDependency",
    "RefStatus",
    "RefSyntax",
]
