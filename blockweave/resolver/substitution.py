"""
Content substitution for Blockweave.

Text is resolved in two passes:

1. Cross-file references are replaced with their values, or with an
   ``[ERROR: ...]`` marker when they cannot be resolved.
2. Plain ``{{key}}`` and ``{{GLOBAL.key}}`` placeholders are replaced from a
   flat variable list, with ``[Unknown: ...]`` / ``[Unknown Global: ...]``
   markers for missing keys.

Pass 1 always runs first; its output is ordinary text for pass 2.
"""

import re
from typing import Dict, Iterable, List, Optional

from ..models import Project, Variable
from .resolver import ReferenceResolver

SIMPLE_VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
GLOBAL_PREFIX = "GLOBAL."


def _first_values(variables: Iterable[Variable]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for variable in variables:
        values.setdefault(variable.key, variable.value)
    return values


class ContentSubstitutionEngine:
    """
    Applies cross-file and simple variable substitution to block text.
    """

    def __init__(self, resolver: Optional[ReferenceResolver] = None):
        self.resolver = resolver or ReferenceResolver()

    def resolve_content(self, text: str, current_file_id: str, project: Project) -> str:
        """
        Replace every cross-file reference in ``text``.

        Each reference's exact text is replaced everywhere it occurs.

        Args:
            text: Raw block text
            current_file_id: The file the text belongs to
            project: The project snapshot

        Returns:
            Text with references replaced by values or error markers
        """
        resolved_text = text
        for ref in self.resolver.resolve_all(text, current_file_id, project):
            if ref.is_resolved:
                replacement = ref.resolved_value or ""
            else:
                replacement = f"[ERROR: {ref.error or 'Unresolved reference'}]"
            resolved_text = resolved_text.replace(ref.raw, replacement)
        return resolved_text

    @staticmethod
    def substitute_simple_variables(text: str, variables: List[Variable],
                                    global_variables: Optional[List[Variable]] = None) -> str:
        """
        Replace ``{{key}}`` and ``{{GLOBAL.key}}`` placeholders.

        Args:
            text: Text to substitute
            variables: Flat variable list; the first variable with a key wins
            global_variables: Scope for ``GLOBAL.`` keys (defaults to ``variables``)

        Returns:
            Substituted text
        """
        values = _first_values(variables)
        global_values = _first_values(variables if global_variables is None else global_variables)

        def replace(match: "re.Match[str]") -> str:
            key = match.group(1).strip()
            if key.startswith(GLOBAL_PREFIX):
                global_key = key[len(GLOBAL_PREFIX):]
                value = global_values.get(global_key)
                return value if value is not None else f"[Unknown Global: {global_key}]"
            value = values.get(key)
            return value if value is not None else f"[Unknown: {key}]"

        return SIMPLE_VARIABLE_PATTERN.sub(replace, text)

    def render_text(self, text: str, current_file_id: Optional[str], project: Project,
                    variables: Optional[List[Variable]] = None) -> str:
        """
        Run both substitution passes.

        Args:
            text: Raw block text
            current_file_id: The acting file; cross-file resolution is skipped when None
            project: The project snapshot
            variables: Variables for the simple pass; defaults to the project's
                globals followed by the acting file's locals

        Returns:
            Display text
        """
        if current_file_id is not None:
            text = self.resolve_content(text, current_file_id, project)
        if variables is None:
            variables = project.combined_variables(current_file_id)
        return self.substitute_simple_variables(text, variables, project.global_variables)
