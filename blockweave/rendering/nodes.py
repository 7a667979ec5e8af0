"""
Render tree nodes.

A node is the display-ready form of one block: text fields are already
substituted. The markdown renderer serializes nodes; UI hosts consume them
directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..models import BlockType, TableAlignment


class NodeKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    CODE = "code"
    TABLE = "table"
    QUOTE = "quote"
    IMAGE = "image"
    LINK = "link"
    EMBED = "embed"
    MISSING_EMBED = "missing-embed"
    PLACEHOLDER = "placeholder"


@dataclass
class RenderNode:
    """
    One projected block.

    Only the fields relevant to ``kind`` are populated.
    """
    kind: NodeKind
    block_id: str
    block_type: BlockType
    text: str = ""
    level: int = 0
    items: List[str] = field(default_factory=list)
    ordered: bool = False
    language: str = ""
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    alignments: List[TableAlignment] = field(default_factory=list)
    url: str = ""
    children: List["RenderNode"] = field(default_factory=list)
    source_file_id: Optional[str] = None
    source_block_id: Optional[str] = None

    @property
    def is_embedded(self) -> bool:
        return self.kind in (NodeKind.EMBED, NodeKind.MISSING_EMBED)

    def to_dict(self) -> dict:
        """JSON-friendly form with empty fields left out."""
        data = {"kind": self.kind.value, "blockId": self.block_id, "blockType": self.block_type.value}
        if self.text:
            data["text"] = self.text
        if self.level:
            data["level"] = self.level
        if self.kind is NodeKind.LIST:
            data["items"] = list(self.items)
            data["ordered"] = self.ordered
        if self.language:
            data["language"] = self.language
        if self.kind is NodeKind.TABLE:
            data["headers"] = list(self.headers)
            data["rows"] = [list(row) for row in self.rows]
            data["alignments"] = [alignment.value for alignment in self.alignments]
        if self.url:
            data["url"] = self.url
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        if self.source_file_id is not None:
            data["sourceFileId"] = self.source_file_id
            data["sourceBlockId"] = self.source_block_id
        return data
