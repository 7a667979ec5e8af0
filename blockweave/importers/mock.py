"""
Mock importer for testing Blockweave.

This module provides a hardcoded sample project for exercising the resolver
and renderers without an exported snapshot.
"""

from ..models import (
    Block,
    BlockType,
    EmbedData,
    File,
    Project,
    TableAlignment,
    TableData,
    Variable,
    Visibility,
)
from .base import BaseImporter


class MockImporter(BaseImporter):
    """
    Mock importer that returns a fixed sample project.

    The sample covers both reference syntaxes, a private variable, a table,
    a live embed and a dangling embed.
    """

    def load_project(self) -> Project:
        """
        Build the sample project.

        Returns:
            A new Project instance on every call
        """
        return Project(
            id="project-sample",
            name="Sample Project",
            global_variables=[
                Variable(id="var-author", key="author", value="Ada"),
                Variable(id="var-product", key="product", value="Blockweave"),
            ],
            files=[
                self._settings_file(),
                self._readme_file(),
                self._docs_file(),
                self._notes_file(),
            ],
        )

    @staticmethod
    def _settings_file() -> File:
        return File(
            id="file-a",
            name="a.md",
            local_variables=[
                Variable(id="var-greeting", key="GREETING", value="hello", visibility=Visibility.PUBLIC),
                Variable(id="var-token", key="API_TOKEN", value="s3cr3t", visibility=Visibility.PRIVATE),
            ],
            blocks=[
                Block.create(BlockType.HEADING_1, "Settings", block_id="block-a-title"),
                Block.create(BlockType.PARAGRAPH, "Token: ${file:./a.md:API_TOKEN}", block_id="block-a-token"),
            ],
        )

    @staticmethod
    def _readme_file() -> File:
        return File(
            id="file-b",
            name="b.md",
            blocks=[
                Block.create(BlockType.HEADING_1, "{{product}} by {{author}}", block_id="block-b-title"),
                Block.create(BlockType.PARAGRAPH, "Greeting: ${file:./a.md:GREETING}", block_id="block-b-greeting"),
                Block.create(BlockType.PARAGRAPH, "Token: ${file:./a.md:API_TOKEN}", block_id="block-b-token"),
                Block.create(
                    BlockType.EMBED,
                    EmbedData(source_file_id="file-docs", source_block_id="block-docs-table"),
                    block_id="block-b-embed",
                ),
                Block.create(
                    BlockType.EMBED,
                    EmbedData(source_file_id="file-deleted", source_block_id="block-gone"),
                    block_id="block-b-dangling",
                ),
            ],
        )

    @staticmethod
    def _docs_file() -> File:
        return File(
            id="file-docs",
            name="docs",
            local_variables=[Variable(id="var-title", key="title", value="Guide")],
            blocks=[
                Block.create(BlockType.HEADING_2, "{{title}}", name="title", block_id="block-docs-heading"),
                Block.create(
                    BlockType.TABLE,
                    TableData(
                        headers=["Name", "Owner"],
                        rows=[["{{product}}", "{{author}}"]],
                        alignments=[TableAlignment.LEFT, TableAlignment.CENTER],
                    ),
                    name="owners",
                    block_id="block-docs-table",
                ),
                Block.create(BlockType.UNORDERED_LIST, "See {{notes.summary}}\n\nDraft", block_id="block-docs-list"),
            ],
        )

    @staticmethod
    def _notes_file() -> File:
        return File(
            id="file-notes",
            name="notes",
            local_variables=[Variable(id="var-summary", key="summary", value="the notes")],
            blocks=[
                Block.create(BlockType.PARAGRAPH, "Notes for {{docs.title}}", block_id="block-notes-intro"),
                Block.create(BlockType.QUOTE, "Quoted from {{docs.title}}", block_id="block-notes-quote"),
            ],
        )
