"""
Embed lookup and inlining.

Deleting a file or block never cleans up embeds that point at it; such
dangling embeds simply fail to find their source here.
"""

import logging
from datetime import datetime
from typing import Optional

from ..models import Block, BlockType, EmbedData, Project


class EmbedNotFoundError(LookupError):
    """Raised when an embed block or its source cannot be found for inlining."""


def find_embed_source(project: Project, embed: EmbedData) -> Optional[Block]:
    """
    Find the block an embed points at.

    Args:
        project: The project snapshot
        embed: The embed pointer

    Returns:
        The source block, or None if its file or the block itself is gone
    """
    source_file = project.find_file(embed.source_file_id)
    if source_file is None:
        return None
    return source_file.find_block(embed.source_block_id)


def inline_embed(project: Project, file_id: str, block_id: str) -> Block:
    """
    Turn an embed block into a standalone copy of its source.

    The copy keeps the embed's identity (id and creation time) and takes the
    source's type, content and name. The conversion is one-way. The project is
    not modified; the caller swaps the returned block in.

    Args:
        project: The project snapshot
        file_id: File containing the embed block
        block_id: The embed block's id

    Returns:
        The inlined block, with its version bumped

    Raises:
        EmbedNotFoundError: If the file or block is missing, the block is not
            an embed, or its source no longer exists
    """
    file = project.find_file(file_id)
    if file is None:
        raise EmbedNotFoundError(f"File not found: {file_id}")

    block = file.find_block(block_id)
    if block is None:
        raise EmbedNotFoundError(f"Block {block_id} not found in file {file.name}")
    if block.type is not BlockType.EMBED:
        raise EmbedNotFoundError(f"Block {block_id} is a {block.type.value} block, not an embed")

    embed = block.content
    if not isinstance(embed, EmbedData):
        raise EmbedNotFoundError(f"Embed {block_id} in file {file.name} has no embed target")

    source = find_embed_source(project, embed)
    if source is None:
        raise EmbedNotFoundError(
            f"Embedded block not found: {embed.source_file_id}#{embed.source_block_id}"
        )

    logging.info(f"Inlining embed {block_id} in {file.name} from block {source.id}")
    return block.model_copy(update={
        "type": source.type,
        "content": source.content.model_copy(deep=True) if not isinstance(source.content, str) else source.content,
        "name": source.name,
        "metadata": block.metadata.model_copy(update={
            "updated_at": datetime.now(),
            "version": block.metadata.version + 1,
        }),
    })
