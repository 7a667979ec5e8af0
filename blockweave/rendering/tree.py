"""Render tree output for Blockweave."""

from typing import List, Optional

from ..models import Block, Project
from ..resolver import ContentSubstitutionEngine
from .nodes import RenderNode
from .projector import BlockProjector


class RenderTreeBuilder:
    """
    Builds the render-ready node list for a sequence of blocks.
    """

    def __init__(self, projector: BlockProjector):
        self.projector = projector

    def build(self, blocks: List[Block]) -> List[RenderNode]:
        return self.projector.project_blocks(blocks)


def render_file_tree(project: Project, file_id: str,
                     substitution: Optional[ContentSubstitutionEngine] = None,
                     max_embed_depth: Optional[int] = None) -> List[RenderNode]:
    """
    Build the render tree of a whole file.

    Returns:
        One node per block, or an empty list for an unknown file
    """
    file = project.find_file(file_id)
    if file is None:
        return []
    projector = BlockProjector(project, file_id, substitution, max_embed_depth)
    return RenderTreeBuilder(projector).build(file.blocks)
