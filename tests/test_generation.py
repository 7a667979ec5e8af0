"""
Tests for generation context, output schemas and response parsing.
"""

import unittest
from datetime import datetime

from blockweave.generation import (
    apply_generation_response,
    build_output_schema,
    build_prompt,
    build_system_instruction,
    extract_file_context,
    parse_generation_response,
)
from blockweave.importers import MockImporter
from blockweave.models import BlockType, File, Project, Variable
from blockweave.resolver import ContentSubstitutionEngine, ReferenceResolver, ResolutionCache


class TestGenerationContext(unittest.TestCase):
    """Test context extraction and prompt layout."""

    def test_extract_file_context(self):
        engine = ContentSubstitutionEngine(ReferenceResolver(cache=ResolutionCache(), auto_invalidate=False))

        context = extract_file_context(MockImporter().load_project(), "file-notes", engine)

        self.assertEqual(context, "Notes for Guide\n\n> Quoted from Guide")

    def test_unknown_file_has_empty_context(self):
        self.assertEqual(extract_file_context(MockImporter().load_project(), "missing"), "")

    def test_prompt_layout(self):
        prompt = build_prompt("Be brief.", "Some context")

        self.assertEqual(
            prompt,
            "---------- SYSTEM INSTRUCTION ----------\nBe brief.\n\n"
            "---------- USER PROMPT ----------\nSome context",
        )

    def test_prompt_falls_back_to_user_input(self):
        prompt = build_prompt("Be brief.", "  ", user_input="Write a summary")

        self.assertTrue(prompt.endswith("USER PROMPT ----------\nWrite a summary"))

    def test_system_instruction_names_outputs(self):
        instruction = build_system_instruction([Variable(key="summary", is_output=True)], "Summarize.")

        self.assertTrue(instruction.startswith("Summarize.\n"))
        self.assertIn('["summary"]', instruction)
        self.assertIn("JSON Schema:", instruction)


class TestOutputSchema(unittest.TestCase):
    """Test schema inference from current variable values."""

    def test_no_outputs(self):
        schema = build_output_schema([])

        self.assertEqual(schema["required"], ["response"])
        self.assertEqual(list(schema["properties"]), ["response"])

    def test_type_inference(self):
        schema = build_output_schema([
            Variable(key="flag", value="true"),
            Variable(key="count", value="42"),
            Variable(key="ratio", value="1.5"),
            Variable(key="name", value="Ada", description="Who wrote it"),
            Variable(key="empty", value=""),
            Variable(key="nan", value="nan"),
        ])

        properties = schema["properties"]["variables"]["properties"]
        self.assertEqual(properties["flag"]["type"], "boolean")
        self.assertIs(properties["flag"]["example"], True)
        self.assertEqual((properties["count"]["type"], properties["count"]["example"]), ("number", 42))
        self.assertEqual(properties["ratio"]["example"], 1.5)
        self.assertEqual(properties["name"]["type"], "string")
        self.assertEqual(properties["name"]["description"], "Who wrote it")
        self.assertEqual(properties["empty"]["type"], "string")
        self.assertEqual(properties["nan"]["type"], "string")
        self.assertEqual(schema["properties"]["variables"]["required"], ["flag", "count", "ratio", "name", "empty", "nan"])
        self.assertEqual(schema["required"], ["variables", "response"])


class TestResponseParsing(unittest.TestCase):
    """Test turning generation responses into variables."""

    def test_variables_list(self):
        response = '```json\n{"variables": [{"key": "summary", "value": "Short"}, {"value": "no key"}], "response": "ok"}\n```'

        variables = parse_generation_response(response)

        self.assertEqual([(v.key, v.value) for v in variables], [("summary", "Short")])
        self.assertTrue(variables[0].is_output)

    def test_variables_mapping_with_non_string_values(self):
        variables = parse_generation_response('{"variables": {"count": 3, "tags": ["a"], "name": "Ada"}}')

        self.assertEqual([(v.key, v.value) for v in variables], [("count", "3"), ("tags", '["a"]'), ("name", "Ada")])

    def test_missing_variables_entry(self):
        variables = parse_generation_response('{"response": "only text"}')

        self.assertEqual(len(variables), 1)
        self.assertEqual(variables[0].key, "warning")
        self.assertTrue(variables[0].is_output)

    def test_invalid_json(self):
        variables = parse_generation_response("Here you go: {not json}")

        self.assertEqual([v.key for v in variables], ["parse_error"])

    def test_no_json_object(self):
        self.assertEqual(parse_generation_response("I cannot help with that."), [])


class TestApplyGenerationResponse(unittest.TestCase):
    """Test writing a response back into the project."""

    RESPONSE = (
        '{"variables": [{"key": "author", "value": "Grace"}, '
        '{"key": "summary", "value": "New"}, {"key": "fresh", "value": "1"}], "response": "ok"}'
    )

    def setUp(self):
        self.project = Project(
            updated_at=datetime(2024, 1, 1),
            global_variables=[Variable(key="author", value="Ada")],
            files=[File(id="file-a", name="a.md", local_variables=[Variable(key="summary", value="Old")])],
        )

    def test_variables_are_merged(self):
        apply_generation_response(self.project, "file-a", self.RESPONSE)
        file = self.project.find_file("file-a")

        self.assertEqual(self.project.find_global_variable("author").value, "Grace")
        self.assertTrue(self.project.find_global_variable("author").is_output)
        self.assertEqual(file.find_variable("summary").value, "New")
        self.assertEqual(file.find_variable("fresh").value, "1")
        self.assertEqual(len(file.local_variables), 2)

    def test_output_block_is_created_then_updated(self):
        apply_generation_response(self.project, "file-a", self.RESPONSE)
        apply_generation_response(self.project, "file-a", '{"variables": {}}')

        output_blocks = [b for b in self.project.find_file("file-a").blocks if b.type is BlockType.OUTPUT]
        self.assertEqual(len(output_blocks), 1)
        self.assertEqual(output_blocks[0].text, '{"variables": {}}')
        self.assertEqual(output_blocks[0].metadata.version, 2)

    def test_project_is_touched(self):
        apply_generation_response(self.project, "file-a", self.RESPONSE)

        self.assertGreater(self.project.updated_at, datetime(2024, 1, 1))

    def test_unknown_file(self):
        with self.assertRaises(LookupError):
            apply_generation_response(self.project, "missing", self.RESPONSE)


if __name__ == '__main__':
    unittest.main(verbosity=2)
