"""Block projection into markdown and render trees."""

from .embeds import EmbedNotFoundError, find_embed_source, inline_embed
from .markdown import MarkdownRenderer, node_to_markdown, render_file_markdown, table_to_markdown
from .nodes import NodeKind, RenderNode
from .projector import BlockProjector
from .tree import RenderTreeBuilder, render_file_tree

__all__ = [
    "EmbedNotFoundError",
    "find_embed_source",
    "inline_embed",
    "MarkdownRenderer",
    "node_to_markdown",
    "render_file_markdown",
    "table_to_markdown",
    "NodeKind",
    "RenderNode",
    "BlockProjector",
    "RenderTreeBuilder",
    "render_file_tree",
]
