"""
Block projection for Blockweave.

Converts blocks into render nodes. Both the markdown output and the render
tree come from the same projection, so a block looks the same in either.

Every text-bearing field is passed through the content substitution engine
in the context of the acting file. Embedded blocks are projected with that
same context: a source block's own file variables are never consulted, which
makes an embed a reuse of text rather than of values.
"""

import logging
from typing import List, Optional

from ..config import config
from ..models import Block, BlockType, EmbedData, Project, TableData, Variable
from ..resolver import ContentSubstitutionEngine
from .embeds import find_embed_source
from .nodes import NodeKind, RenderNode

_FENCE_LANGUAGES = {
    BlockType.CODE: "",
    BlockType.JSON_SCHEMA: "json",
    BlockType.OUTPUT: "",
}


def split_items(text: str) -> List[str]:
    """List items: one per line, blank lines dropped."""
    return [line for line in text.split("\n") if line.strip()]


class BlockProjector:
    """
    Projects the blocks of one acting file into render nodes.
    """

    def __init__(self, project: Project, current_file_id: Optional[str],
                 substitution: Optional[ContentSubstitutionEngine] = None,
                 max_embed_depth: Optional[int] = None,
                 variables: Optional[List[Variable]] = None):
        """
        Initialize the projector.

        Args:
            project: The project snapshot
            current_file_id: The acting file; supplies the substitution context
            substitution: Engine used for every text field
            max_embed_depth: Embed levels to unwrap before showing an opaque
                label (defaults to rendering.max_embed_depth, normally 1)
            variables: Variables for simple substitution; defaults to the
                project's globals followed by the acting file's locals
        """
        self.project = project
        self.current_file_id = current_file_id
        self.substitution = substitution or ContentSubstitutionEngine()
        self.max_embed_depth = config.max_embed_depth if max_embed_depth is None else max_embed_depth
        self.variables = variables if variables is not None else project.combined_variables(current_file_id)

    def project_blocks(self, blocks: List[Block]) -> List[RenderNode]:
        return [self.project_block(block) for block in blocks]

    def project_block(self, block: Block, depth: int = 0) -> RenderNode:
        """
        Project a single block.

        Args:
            block: The block to project
            depth: How many embeds have been unwrapped to reach this block

        Returns:
            The render node for the block
        """
        block_type = block.type

        if block_type is BlockType.EMBED:
            return self._project_embed(block, depth)

        if block_type is BlockType.TABLE:
            return self._project_table(block)

        # Content that does not match the type renders as empty text
        text = block.content if isinstance(block.content, str) else ""

        if block_type.is_heading:
            return self._node(NodeKind.HEADING, block, text=self._render(text), level=block_type.heading_level)

        if block_type is BlockType.PARAGRAPH:
            return self._node(NodeKind.PARAGRAPH, block, text=self._render(text))

        if block_type in (BlockType.UNORDERED_LIST, BlockType.ORDERED_LIST):
            return self._node(
                NodeKind.LIST, block,
                items=split_items(self._render(text)),
                ordered=block_type is BlockType.ORDERED_LIST,
            )

        if block_type in _FENCE_LANGUAGES:
            return self._node(NodeKind.CODE, block, text=self._render(text), language=_FENCE_LANGUAGES[block_type])

        if block_type is BlockType.QUOTE:
            return self._node(NodeKind.QUOTE, block, text=self._render(text))

        if block_type is BlockType.IMAGE:
            return self._node(NodeKind.IMAGE, block, url=self._render(text))

        if block_type is BlockType.LINK:
            return self._project_link(block, text)

        raise ValueError(f"Unhandled block type: {block_type.value}")

    def _project_table(self, block: Block) -> RenderNode:
        table = block.content
        if not isinstance(table, TableData) or not table.headers:
            return self._node(NodeKind.PLACEHOLDER, block, text="[Empty Table]")

        return self._node(
            NodeKind.TABLE, block,
            headers=[self._render(header) for header in table.headers],
            rows=[[self._render(cell) for cell in row] for row in table.rows],
            alignments=[table.alignment_for(index) for index in range(len(table.headers))],
        )

    def _project_link(self, block: Block, text: str) -> RenderNode:
        # Link content is encoded as "text|url"
        if "|" not in text:
            return self._node(NodeKind.PARAGRAPH, block, text=self._render(text))
        parts = text.split("|")
        return self._node(NodeKind.LINK, block, text=self._render(parts[0]), url=self._render(parts[1]))

    def _project_embed(self, block: Block, depth: int) -> RenderNode:
        if depth >= self.max_embed_depth:
            return self._node(NodeKind.PLACEHOLDER, block, text=f"[Embedded {block.type.value} content]")

        embed = block.content
        if not isinstance(embed, EmbedData):
            logging.warning(f"Embed {block.id} has no embed target")
            return self._node(
                NodeKind.MISSING_EMBED, block,
                text=config.not_found_tree.format(file_id="", block_id=""),
            )

        source = find_embed_source(self.project, embed)
        if source is None:
            logging.warning(
                f"Embed {block.id} points at missing block {embed.source_file_id}#{embed.source_block_id}"
            )
            return self._node(
                NodeKind.MISSING_EMBED, block,
                text=config.not_found_tree.format(
                    file_id=embed.source_file_id, block_id=embed.source_block_id
                ),
                source_file_id=embed.source_file_id,
                source_block_id=embed.source_block_id,
            )

        return self._node(
            NodeKind.EMBED, block,
            children=[self.project_block(source, depth + 1)],
            source_file_id=embed.source_file_id,
            source_block_id=embed.source_block_id,
        )

    def _render(self, text: str) -> str:
        return self.substitution.render_text(text, self.current_file_id, self.project, self.variables)

    @staticmethod
    def _node(kind: NodeKind, block: Block, **fields) -> RenderNode:
        return RenderNode(kind=kind, block_id=block.id, block_type=block.type, **fields)
