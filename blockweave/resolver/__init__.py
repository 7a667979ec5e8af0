"""Cross-file reference resolution engine."""

from .cache import CachedResolution, ResolutionCache
from .graph import DependencyGraphBuilder, detect_cycles
from .parser import parse_references
from .paths import find_file_by_basename, resolve_path
from .resolver import ReferenceResolver
from .substitution import ContentSubstitutionEngine
from .visibility import is_accessible

__all__ = [
    "CachedResolution",
    "ResolutionCache",
    "DependencyGraphBuilder",
    "detect_cycles",
    "parse_references",
    "find_file_by_basename",
    "resolve_path",
    "ReferenceResolver",
    "ContentSubstitutionEngine",
    "is_accessible",
]
