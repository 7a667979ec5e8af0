"""
Cross-file reference parsing.

Two independent grammars are scanned over the same text:

1. ``${file:<path>:<VARNAME>}`` where the path starts with ``/``, ``./`` or
   ``../`` and the variable name is an uppercase identifier.
2. ``{{<filename>.<varname>}}``; the mandatory dot keeps it apart from the
   plain ``{{key}}`` substitution syntax.
"""

import re
from typing import List

from ..models import CrossFileVariableRef, RefSyntax

FILE_PATH_PATTERN = re.compile(r"\$\{file:(\.{0,2}/[^:]+):([A-Z_][A-Z0-9_]*)\}")
FILENAME_PATTERN = re.compile(r"\{\{([A-Za-z0-9_-]+)\.([A-Za-z0-9_]+)\}\}")

# {{GLOBAL.key}} belongs to the simple substitution pass.
GLOBAL_SCOPE = "GLOBAL"


def parse_references(text: str) -> List[CrossFileVariableRef]:
    """
    Extract every cross-file reference from ``text``.

    File-path references come first, then filename references, each group in
    match order. Repeated occurrences are all reported.

    Args:
        text: Raw block text

    Returns:
        Pending references, one per occurrence
    """
    refs: List[CrossFileVariableRef] = []

    for match in FILE_PATH_PATTERN.finditer(text):
        file_path = match.group(1).strip()
        refs.append(CrossFileVariableRef(
            syntax=RefSyntax.FILE_PATH,
            file_path=file_path,
            variable_name=match.group(2),
            is_relative=file_path.startswith("./") or file_path.startswith("../"),
            raw=match.group(0),
        ))

    for match in FILENAME_PATTERN.finditer(text):
        if match.group(1) == GLOBAL_SCOPE:
            continue
        refs.append(CrossFileVariableRef(
            syntax=RefSyntax.FILENAME,
            file_path=match.group(1),
            variable_name=match.group(2),
            is_relative=False,
            raw=match.group(0),
        ))

    return refs


def contains_references(text: str) -> bool:
    """Cheap check used to skip blocks with no cross-file syntax."""
    return "${file:" in text or "{{" in text
