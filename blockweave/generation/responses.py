"""
Parsing of AI generation responses into variables.

A response is expected to hold a JSON object with a ``variables`` entry,
either a list of ``{"key": ..., "value": ...}`` objects or a plain mapping.
Malformed responses never raise; they produce a single diagnostic variable
so the user sees what went wrong.

``apply_generation_response`` writes a parsed response back into a project.
"""

import json
import logging
import re
from datetime import datetime
from typing import Any, List

from ..models import Block, BlockType, Project, Variable
from ..models.project import VariableMetadata

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

MISSING_VARIABLES_MESSAGE = (
    'AI response did not contain variables key in expected format. '
    'Please ensure your JSON schema includes a "variables" array.'
)
PARSE_ERROR_MESSAGE = "Failed to parse AI response as JSON. Please check the response format."


def _output_variable(key: str, value: Any, description: str) -> Variable:
    now = datetime.now()
    return Variable(
        key=key,
        value=value if isinstance(value, str) else json.dumps(value),
        is_output=True,
        description=description,
        metadata=VariableMetadata(created_at=now, updated_at=now),
    )


def parse_generation_response(response: str) -> List[Variable]:
    """
    Extract output variables from a generation response.

    Args:
        response: Raw response text; surrounding prose or code fences are ignored

    Returns:
        The generated variables, or one ``warning`` / ``parse_error`` variable
        when the response is unusable
    """
    match = JSON_OBJECT_PATTERN.search(response)
    if not match:
        logging.warning("Generation response contains no JSON object")
        return []

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logging.warning(f"Failed to parse generation response JSON: {e}")
        return [_output_variable("parse_error", PARSE_ERROR_MESSAGE, "JSON parse error")]

    raw_variables = data.get("variables") if isinstance(data, dict) else None
    variables: List[Variable] = []

    if isinstance(raw_variables, list):
        for item in raw_variables:
            if isinstance(item, dict) and item.get("key") and item.get("value") is not None:
                variables.append(_output_variable(str(item["key"]), item["value"], "Generated from AI response"))
    elif isinstance(raw_variables, dict):
        for key, value in raw_variables.items():
            variables.append(_output_variable(str(key), value, "Generated from AI response"))
    else:
        logging.warning("Generation response has no 'variables' entry")
        variables.append(_output_variable("warning", MISSING_VARIABLES_MESSAGE, "Response format warning"))

    logging.info(f"Parsed {len(variables)} variables from generation response")
    return variables


def apply_generation_response(project: Project, file_id: str, response: str) -> List[Variable]:
    """
    Store a generation response in a file and merge its variables.

    The raw response becomes the content of the file's first output block,
    which is created when the file has none. Each parsed variable updates an
    existing global variable with the same key, else an existing local one,
    else it is added to the file's local variables. The project is touched so
    resolvers with auto-invalidation drop their cached values.

    Args:
        project: The project snapshot; modified in place
        file_id: The file the generation ran for
        response: Raw response text

    Returns:
        The parsed variables

    Raises:
        LookupError: If the file does not exist
    """
    file = project.find_file(file_id)
    if file is None:
        raise LookupError(f"File not found: {file_id}")

    output_block = next((block for block in file.blocks if block.type is BlockType.OUTPUT), None)
    if output_block is None:
        file.blocks.append(Block.create(BlockType.OUTPUT, response))
    else:
        output_block.content = response
        output_block.metadata.updated_at = datetime.now()
        output_block.metadata.version += 1

    variables = parse_generation_response(response)
    for variable in variables:
        existing = project.find_global_variable(variable.key) or file.find_variable(variable.key)
        if existing is None:
            file.local_variables.append(variable)
            logging.info(f"Created output variable {variable.key} in {file.name}")
            continue
        existing.value = variable.value
        existing.is_output = True
        existing.metadata.updated_at = datetime.now()

    project.touch()
    return variables
