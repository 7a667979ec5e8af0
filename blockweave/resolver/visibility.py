"""Variable visibility checks."""

from ..models import Variable, Visibility


def is_accessible(variable: Variable, source_file_id: str, target_file_id: str) -> bool:
    """
    Decide whether ``source_file_id`` may read ``variable`` declared in ``target_file_id``.

    Private variables are only readable from their own file. Protected is
    treated as public until files gain a directory model.
    """
    if variable.visibility is None or variable.visibility is Visibility.PUBLIC:
        return True

    if variable.visibility is Visibility.PRIVATE:
        return source_file_id == target_file_id

    return variable.visibility is Visibility.PROTECTED
