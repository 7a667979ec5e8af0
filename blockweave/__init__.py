"""
Blockweave: cross-file variable resolution and rendering for block documents.

Resolves variable references across the files of a block-based document
project and renders blocks, including embedded blocks, to markdown or render
trees.
"""

__version__ = "0.1.0"
__author__ = "Blockweave Project"

# Import main components
from .models import Block, BlockType, File, Project, Variable, Visibility
from .resolver import ContentSubstitutionEngine, DependencyGraphBuilder, ReferenceResolver, ResolutionCache
from .rendering import BlockProjector, MarkdownRenderer, RenderTreeBuilder, inline_embed
from .importers import BaseImporter, JsonSnapshotImporter, MockImporter

__all__ = [
    "Block",
    "BlockType",
    "File",
    "Project",
    "Variable",
    "Visibility",
    "ContentSubstitutionEngine",
    "DependencyGraphBuilder",
    "ReferenceResolver",
    "ResolutionCache",
    "BlockProjector",
    "MarkdownRenderer",
    "RenderTreeBuilder",
    "inline_embed",
    "BaseImporter",
    "JsonSnapshotImporter",
    "MockImporter",
]
