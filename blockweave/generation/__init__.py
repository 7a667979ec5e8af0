"""Helpers for feeding projects to an AI generation step and reading its answer."""

from .context import build_output_schema, build_prompt, build_system_instruction, extract_file_context
from .responses import apply_generation_response, parse_generation_response

__all__ = [
    "build_output_schema",
    "build_prompt",
    "build_system_instruction",
    "extract_file_context",
    "apply_generation_response",
    "parse_generation_response",
]
