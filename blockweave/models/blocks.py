"""
Block models for Blockweave.

A block is the atomic typed content unit of a file. Its content is a tagged
union keyed by the block type: tables carry ``TableData``, embeds carry
``EmbedData`` and every other type carries plain text.

The editor changes a block's type without touching its content, so a block
may hold a variant that does not match its type. Such blocks load as they
are; renderers degrade them to empty output.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import Field, model_validator

from .base import SnapshotModel, Timestamps


class BlockContentError(ValueError):
    """Raised when a block's content is read as the wrong variant."""


class BlockType(str, Enum):
    """The fixed set of block types; values match the editor's wire format."""

    HEADING_1 = "h1"
    HEADING_2 = "h2"
    HEADING_3 = "h3"
    HEADING_4 = "h4"
    HEADING_5 = "h5"
    HEADING_6 = "h6"
    PARAGRAPH = "p"
    UNORDERED_LIST = "ul"
    ORDERED_LIST = "ol"
    CODE = "code"
    TABLE = "table"
    QUOTE = "quote"
    IMAGE = "image"
    LINK = "link"
    JSON_SCHEMA = "jsonschema"
    OUTPUT = "output"
    EMBED = "embed"

    @property
    def is_heading(self) -> bool:
        return self.value in _HEADING_LEVELS

    @property
    def heading_level(self) -> int:
        """Heading level 1-6, or 0 for non-heading types."""
        return _HEADING_LEVELS.get(self.value, 0)


_HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}


class TableAlignment(str, Enum):
    """Per-column alignment of a table block."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TableData(SnapshotModel):
    """
    Structured content of a table block.
    """

    headers: List[str] = Field(
        default_factory=list,
        description="Column headers, in display order"
    )

    rows: List[List[str]] = Field(
        default_factory=list,
        description="Data rows; each row is a list of cell strings"
    )

    alignments: Optional[List[TableAlignment]] = Field(
        default=None,
        description="Optional per-column alignment; missing columns are left aligned"
    )

    def alignment_for(self, column: int) -> TableAlignment:
        """Alignment of a column, defaulting to left."""
        if self.alignments and column < len(self.alignments):
            return self.alignments[column]
        return TableAlignment.LEFT


class EmbedData(SnapshotModel):
    """
    Content of an embed block: a pointer to a block that may live in another file.
    """

    source_file_id: str = Field(
        ...,
        description="Identifier of the file that owns the embedded block"
    )

    source_block_id: str = Field(
        ...,
        description="Identifier of the embedded block"
    )

    is_linked: bool = Field(
        default=True,
        description="True for a live link, False for an inlined copy"
    )


BlockContent = Union[TableData, EmbedData, str]


class BlockMetadata(Timestamps):
    """Timestamps plus a version counter bumped on every content mutation."""

    version: int = Field(
        default=1,
        description="Incremented on every content mutation"
    )


class Block(SnapshotModel):
    """
    A typed content block within a file.
    """

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique block identifier"
    )

    type: BlockType = Field(
        ...,
        description="The block type; decides which content variant is expected"
    )

    name: Optional[str] = Field(
        default=None,
        description="Optional display name, used to address the block for embedding"
    )

    content: BlockContent = Field(
        default="",
        description="Text, TableData or EmbedData depending on the block type"
    )

    metadata: BlockMetadata = Field(
        default_factory=BlockMetadata,
        description="Timestamps and version counter"
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_content(cls, data: Any) -> Any:
        """Pick the content variant from the block type before field validation."""
        if not isinstance(data, dict):
            return data

        try:
            block_type = BlockType(data.get("type"))
        except ValueError:
            return data

        content = data.get("content")
        if content is None:
            return {**data, "content": default_content(block_type)}

        if isinstance(content, dict):
            if block_type is BlockType.TABLE:
                return {**data, "content": TableData.model_validate(content)}
            if block_type is BlockType.EMBED:
                return {**data, "content": EmbedData.model_validate(content)}

        return data

    @property
    def text(self) -> str:
        """Plain-text content; raises BlockContentError for tables and embeds."""
        if not isinstance(self.content, str):
            raise BlockContentError(f"Block '{self.id}' ({self.type.value}) has no text content")
        return self.content

    @property
    def table(self) -> TableData:
        if not isinstance(self.content, TableData):
            raise BlockContentError(f"Block '{self.id}' ({self.type.value}) is not a table")
        return self.content

    @property
    def embed(self) -> EmbedData:
        if not isinstance(self.content, EmbedData):
            raise BlockContentError(f"Block '{self.id}' ({self.type.value}) is not an embed")
        return self.content

    @property
    def has_text(self) -> bool:
        return isinstance(self.content, str)

    @classmethod
    def create(cls, block_type: BlockType, content: Optional[BlockContent] = None,
               name: Optional[str] = None, block_id: Optional[str] = None) -> "Block":
        """
        Create a block with type-appropriate default content.

        Args:
            block_type: The type of the new block
            content: Initial content; defaults to the empty variant for the type
            name: Optional display name
            block_id: Explicit identifier; a UUID is generated when omitted

        Returns:
            The new Block
        """
        now = datetime.now()
        return cls(
            id=block_id or str(uuid.uuid4()),
            type=block_type,
            name=name,
            content=default_content(block_type) if content is None else content,
            metadata=BlockMetadata(created_at=now, updated_at=now, version=1),
        )


def default_content(block_type: BlockType) -> BlockContent:
    """Empty content for a freshly created block of the given type."""
    if block_type is BlockType.TABLE:
        return TableData(headers=["Column 1"], rows=[[""]])
    if block_type is BlockType.EMBED:
        return EmbedData(source_file_id="", source_block_id="")
    return ""
