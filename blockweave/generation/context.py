"""
Generation context for Blockweave.

Builds the text handed to an AI generation step. The file is projected with
the same renderer as the preview, so embeds and variables expand exactly as
the user sees them.
"""

import json
import math
from typing import Any, Dict, List, Optional

from ..config import config
from ..models import Project, Variable
from ..rendering import render_file_markdown
from ..resolver import ContentSubstitutionEngine


def extract_file_context(project: Project, file_id: str,
                         substitution: Optional[ContentSubstitutionEngine] = None) -> str:
    """
    Markdown projection of a file, stripped of surrounding whitespace.

    Args:
        project: The project snapshot
        file_id: The file to extract
        substitution: Engine to use (a fresh one when omitted)

    Returns:
        The context text, empty for an unknown file
    """
    return render_file_markdown(project, file_id, substitution).strip()


def _infer_schema_type(value: str) -> Dict[str, Any]:
    if value in ("true", "false"):
        return {"type": "boolean", "example": value == "true"}
    try:
        number = float(value)
    except ValueError:
        return {"type": "string", "example": value}
    if not math.isfinite(number):
        return {"type": "string", "example": value}
    example = int(number) if number.is_integer() and "." not in value else number
    return {"type": "number", "example": example}


def build_output_schema(output_variables: List[Variable]) -> Dict[str, Any]:
    """
    JSON schema describing the response expected from a generation step.

    Each output variable becomes a property whose type is inferred from its
    current value: "true"/"false" is boolean, numeric text is a number and
    anything else is a string.

    Args:
        output_variables: Variables the generation step should populate

    Returns:
        The schema as a dictionary
    """
    response_property = {
        "type": "string",
        "description": config.get("generation.response_description", "Response text or explanation"),
    }

    if not output_variables:
        return {
            "type": "object",
            "properties": {"response": response_property},
            "required": ["response"],
        }

    properties: Dict[str, Any] = {}
    for variable in output_variables:
        inferred = _infer_schema_type(variable.value) if variable.value != "" else {"type": "string", "example": ""}
        properties[variable.key] = {
            "type": inferred["type"],
            "description": variable.description or f"Generated value for {variable.key}",
            "example": inferred["example"],
        }

    return {
        "type": "object",
        "properties": {
            "variables": {
                "type": "object",
                "properties": properties,
                "required": [variable.key for variable in output_variables],
            },
            "response": response_property,
        },
        "required": ["variables", "response"],
    }


def build_system_instruction(output_variables: List[Variable], instruction: str = "") -> str:
    """System instruction asking for a JSON answer matching the output schema."""
    lines = [instruction.strip() or "You are a helpful assistant that generates structured content."]
    if output_variables:
        names = ", ".join(f'"{variable.key}"' for variable in output_variables)
        lines.append(
            f'Your response MUST be a valid JSON object with a "variables" and "response". '
            f'"variables" is a list of JSON objects for [{names}] with key containing the generated values. '
            f'"response" is the response.'
        )
    else:
        lines.append('Your response MUST be a valid JSON object with a "response". "response" is the response.')
    lines.append("JSON Schema:")
    lines.append(json.dumps(build_output_schema(output_variables), indent=2))
    lines.append("Do NOT include any extra text, explanations, or markdown formatting.")
    return "\n".join(lines)


def build_prompt(system_instruction: str, context: str, user_input: str = "") -> str:
    """
    Lay out a full prompt for preview.

    The file context is the user prompt; ``user_input`` is used only when the
    context is empty.
    """
    separator = config.get("generation.separator", "----------")
    user_prompt = context if context.strip() else user_input
    return (
        f"{separator} SYSTEM INSTRUCTION {separator}\n{system_instruction}\n\n"
        f"{separator} USER PROMPT {separator}\n{user_prompt}"
    )
