"""
Markdown output for Blockweave.

Serializes render nodes into a markdown document; blocks are separated by a
blank line.
"""

from typing import List, Optional

from ..config import config
from ..models import Block, Project, TableAlignment
from ..resolver import ContentSubstitutionEngine
from .nodes import NodeKind, RenderNode
from .projector import BlockProjector

_ALIGNMENT_MARKERS = {
    TableAlignment.LEFT: "---",
    TableAlignment.CENTER: ":---:",
    TableAlignment.RIGHT: "---:",
}


def table_to_markdown(headers: List[str], rows: List[List[str]],
                      alignments: List[TableAlignment]) -> str:
    """Header row, alignment row and one line per data row."""
    lines = [
        f"| {' | '.join(headers)} |",
        f"| {' | '.join(_ALIGNMENT_MARKERS[alignment] for alignment in alignments)} |",
    ]
    lines.extend(f"| {' | '.join(row)} |" for row in rows)
    return "\n".join(lines)


def node_to_markdown(node: RenderNode) -> str:
    """Markdown text for a single render node."""
    kind = node.kind

    if kind is NodeKind.HEADING:
        return f"{'#' * node.level} {node.text}"
    if kind is NodeKind.PARAGRAPH or kind is NodeKind.PLACEHOLDER:
        return node.text
    if kind is NodeKind.LIST:
        if node.ordered:
            return "\n".join(f"{index}. {item}" for index, item in enumerate(node.items, 1))
        return "\n".join(f"- {item}" for item in node.items)
    if kind is NodeKind.CODE:
        return f"```{node.language}\n{node.text}\n```"
    if kind is NodeKind.TABLE:
        return table_to_markdown(node.headers, node.rows, node.alignments)
    if kind is NodeKind.QUOTE:
        return "\n".join(f"> {line}" for line in node.text.split("\n"))
    if kind is NodeKind.IMAGE:
        return f"![Image]({node.url})"
    if kind is NodeKind.LINK:
        return f"[{node.text}]({node.url})"
    if kind is NodeKind.EMBED:
        return "\n\n".join(node_to_markdown(child) for child in node.children)
    if kind is NodeKind.MISSING_EMBED:
        return config.not_found_markdown

    raise ValueError(f"Unhandled node kind: {kind.value}")


class MarkdownRenderer:
    """
    Renders a sequence of blocks as one markdown document.
    """

    def __init__(self, projector: BlockProjector):
        self.projector = projector

    def render(self, blocks: List[Block]) -> str:
        """
        Render blocks in order.

        Args:
            blocks: Blocks of the acting file (or any selection of blocks)

        Returns:
            Markdown text with blocks separated by blank lines
        """
        nodes = self.projector.project_blocks(blocks)
        return "\n\n".join(node_to_markdown(node) for node in nodes)


def render_file_markdown(project: Project, file_id: str,
                         substitution: Optional[ContentSubstitutionEngine] = None,
                         max_embed_depth: Optional[int] = None) -> str:
    """
    Render a whole file as markdown.

    Args:
        project: The project snapshot
        file_id: The file to render; it is also the acting file
        substitution: Engine to use (a fresh one when omitted)
        max_embed_depth: Overrides rendering.max_embed_depth

    Returns:
        The markdown text, or an empty string for an unknown file
    """
    file = project.find_file(file_id)
    if file is None:
        return ""
    projector = BlockProjector(project, file_id, substitution, max_embed_depth)
    return MarkdownRenderer(projector).render(file.blocks)
