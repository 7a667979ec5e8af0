"""
Cross-file reference resolver for Blockweave.

Combines the parser, the path resolver and the visibility checker with a
local-then-global variable lookup. Resolution never raises: every failure is
reported through the returned reference's status and error message.
"""

import logging
from typing import List, Optional

from ..config import config
from ..models import CrossFileVariableRef, Project, RefStatus, RefSyntax
from .cache import CachedResolution, ResolutionCache
from .parser import contains_references, parse_references
from .paths import find_file_by_basename, resolve_path
from .visibility import is_accessible


class ReferenceResolver:
    """
    Resolves cross-file variable references against a project snapshot.

    The resolver keeps no notion of a current file or project; both are passed
    on every call. Its only state is the resolution cache.
    """

    def __init__(self, cache: Optional[ResolutionCache] = None,
                 auto_invalidate: Optional[bool] = None):
        """
        Initialize the resolver.

        Args:
            cache: Cache to use; a new one is created from configuration when omitted
            auto_invalidate: Clear the cache whenever the project's updated_at
                changes (defaults to the resolver.auto_invalidate setting)
        """
        self.cache = cache if cache is not None else ResolutionCache(enabled=config.cache_enabled)
        self.auto_invalidate = config.auto_invalidate if auto_invalidate is None else auto_invalidate

    def resolve(self, ref: CrossFileVariableRef, current_file_id: str,
                project: Project) -> CrossFileVariableRef:
        """
        Resolve one reference from the point of view of ``current_file_id``.

        Args:
            ref: A parsed reference
            current_file_id: The file whose content contains the reference
            project: The project snapshot

        Returns:
            A new reference in a terminal state (resolved, not-found or error)
        """
        if self.auto_invalidate:
            self.cache.sync_generation(project.updated_at)

        cache_key = ResolutionCache.make_key(
            current_file_id, ref.syntax.value, ref.file_path, ref.variable_name
        )
        cached = self.cache.get(cache_key)
        if cached is not None and project.find_file(cached.file_id) is not None:
            logging.debug(f"Resolution cache hit for {ref.raw} from {current_file_id}")
            return ref.with_status(
                RefStatus.RESOLVED,
                resolved_value=cached.value,
                resolved_file_id=cached.file_id,
                error=None,
            )

        if ref.syntax is RefSyntax.FILENAME:
            target_file_id = find_file_by_basename(ref.file_path, project)
        else:
            target_file_id = resolve_path(current_file_id, ref.file_path, project)

        target_file = project.find_file(target_file_id)
        if target_file is None:
            logging.debug(f"No file matches {ref.file_path!r} for {ref.raw}")
            return ref.with_status(RefStatus.ERROR, error=f"File not found: {ref.file_path}")

        variable = target_file.find_variable(ref.variable_name) or project.find_global_variable(ref.variable_name)
        if variable is None:
            return ref.with_status(
                RefStatus.NOT_FOUND,
                resolved_file_id=target_file.id,
                error=f"Variable '{ref.variable_name}' not found in file {ref.file_path}",
            )

        if not is_accessible(variable, current_file_id, target_file.id):
            return ref.with_status(
                RefStatus.ERROR,
                resolved_file_id=target_file.id,
                error=f"Variable '{ref.variable_name}' is not accessible ({variable.visibility.value})",
            )

        self.cache.set(cache_key, CachedResolution(variable.value, target_file.id))
        logging.debug(f"Resolved {ref.raw} from {current_file_id} via file {target_file.name}")

        return ref.with_status(
            RefStatus.RESOLVED,
            resolved_value=variable.value,
            resolved_file_id=target_file.id,
        )

    def resolve_all(self, text: str, current_file_id: str, project: Project) -> List[CrossFileVariableRef]:
        """Parse ``text`` and resolve every reference in discovery order."""
        if not contains_references(text):
            return []
        return [self.resolve(ref, current_file_id, project) for ref in parse_references(text)]

    def get_file_references(self, file_id: str, project: Project) -> List[CrossFileVariableRef]:
        """
        Resolve every reference found in a file's text blocks.

        Args:
            file_id: The file to scan; references resolve from this file
            project: The project snapshot

        Returns:
            Resolved references in block order, or an empty list for an unknown file
        """
        file = project.find_file(file_id)
        if file is None:
            return []

        refs: List[CrossFileVariableRef] = []
        for block in file.blocks:
            if block.has_text:
                refs.extend(self.resolve_all(block.text, file_id, project))
        return refs

    def clear_cache(self) -> None:
        """Forget every memoized resolution."""
        self.cache.clear()
