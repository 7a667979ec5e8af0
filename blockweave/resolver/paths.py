"""
File designator resolution.

Files have no directory model: every branch ends in an equality lookup on the
file name, and only the basename of a path is significant.
"""

import re
from typing import Optional

from ..models import Project

MARKDOWN_SUFFIX = re.compile(r"\.(md|markdown)$", re.IGNORECASE)


def resolve_path(current_file_id: str, raw_path: str, project: Project) -> Optional[str]:
    """
    Map a file-path designator to a file id.

    Args:
        current_file_id: The requesting file; must exist in the project
        raw_path: ``./name``, ``../dir/name`` or ``/name``
        project: The project snapshot

    Returns:
        The target file id, or None when the caller or the target is unknown
    """
    if project.find_file(current_file_id) is None:
        return None

    if raw_path.startswith("./"):
        name = raw_path[2:]
    elif raw_path.startswith("../"):
        name = raw_path.split("/")[-1]
    elif raw_path.startswith("/"):
        name = raw_path[1:]
    else:
        name = raw_path

    target = project.find_file_by_name(name)
    return target.id if target else None


def strip_markdown_suffix(name: str) -> str:
    """Drop a trailing .md/.markdown extension (matched case-insensitively)."""
    return MARKDOWN_SUFFIX.sub("", name)


def find_file_by_basename(designator: str, project: Project) -> Optional[str]:
    """
    Look up a file for the ``{{filename.var}}`` syntax.

    The markdown extension is ignored on both sides; the rest of the name must
    match exactly.

    Args:
        designator: File name as written in the reference
        project: The project snapshot

    Returns:
        Id of the first matching file, or None
    """
    base_name = strip_markdown_suffix(designator)
    for file in project.files:
        if strip_markdown_suffix(file.name) == base_name:
            return file.id
    return None
