"""
Tests for reference parsing, path resolution, visibility and the resolver.
"""

import unittest
from datetime import timedelta

from blockweave.models import Block, BlockType, File, Project, RefStatus, RefSyntax, Variable, Visibility
from blockweave.resolver import (
    ReferenceResolver,
    ResolutionCache,
    find_file_by_basename,
    is_accessible,
    parse_references,
    resolve_path,
)


def make_project(x_visibility=Visibility.PUBLIC):
    """Files a.md (defines X), b.md, docs (defines title) and notes."""
    return Project(
        global_variables=[Variable(key="SHARED", value="from-global"), Variable(key="X", value="global-x")],
        files=[
            File(id="file-a", name="a.md",
                 local_variables=[Variable(key="X", value="hello", visibility=x_visibility)]),
            File(id="file-b", name="b.md"),
            File(id="file-docs", name="docs", local_variables=[Variable(key="title", value="Guide")]),
            File(id="file-notes", name="notes"),
        ],
    )


class TestReferenceParser(unittest.TestCase):
    """Test the two reference grammars."""

    def test_file_path_syntax(self):
        refs = parse_references("Value: ${file:./a.md:X}")

        self.assertEqual(len(refs), 1)
        ref = refs[0]
        self.assertIs(ref.syntax, RefSyntax.FILE_PATH)
        self.assertEqual(ref.file_path, "./a.md")
        self.assertEqual(ref.variable_name, "X")
        self.assertTrue(ref.is_relative)
        self.assertIs(ref.status, RefStatus.PENDING)
        self.assertEqual(ref.raw, "${file:./a.md:X}")

    def test_relative_flag(self):
        parent, absolute = parse_references("${file:../dir/a.md:X} ${file:/a.md:Y_2}")

        self.assertTrue(parent.is_relative)
        self.assertFalse(absolute.is_relative)
        self.assertEqual(absolute.variable_name, "Y_2")

    def test_lowercase_variable_never_matches_file_path_syntax(self):
        self.assertEqual(parse_references("${file:./a.md:name}"), [])

    def test_path_must_start_with_slash_or_dot(self):
        self.assertEqual(parse_references("${file:a.md:X}"), [])

    def test_filename_syntax(self):
        refs = parse_references("Title: {{docs.title}}")

        self.assertEqual(len(refs), 1)
        self.assertIs(refs[0].syntax, RefSyntax.FILENAME)
        self.assertEqual(refs[0].file_path, "docs")
        self.assertEqual(refs[0].variable_name, "title")
        self.assertFalse(refs[0].is_relative)

    def test_plain_and_global_placeholders_are_not_references(self):
        self.assertEqual(parse_references("{{name}} and {{GLOBAL.name}}"), [])

    def test_grammar_order_then_match_order(self):
        text = "{{docs.title}} ${file:./a.md:X} {{notes.b}} ${file:./b.md:Y} {{docs.title}}"
        refs = parse_references(text)

        self.assertEqual(
            [(ref.file_path, ref.variable_name) for ref in refs],
            [("./a.md", "X"), ("./b.md", "Y"), ("docs", "title"), ("notes", "b"), ("docs", "title")],
        )

    def test_plain_text_has_no_references(self):
        self.assertEqual(parse_references("Nothing to see here {not a ref}"), [])


class TestPathResolver(unittest.TestCase):
    """Test file designator resolution."""

    def setUp(self):
        self.project = make_project()

    def test_dot_slash(self):
        self.assertEqual(resolve_path("file-b", "./a.md", self.project), "file-a")

    def test_parent_path_uses_basename(self):
        self.assertEqual(resolve_path("file-b", "../some/dir/a.md", self.project), "file-a")

    def test_absolute_path(self):
        self.assertEqual(resolve_path("file-b", "/a.md", self.project), "file-a")

    def test_unknown_file(self):
        self.assertIsNone(resolve_path("file-b", "./missing.md", self.project))

    def test_unknown_current_file(self):
        self.assertIsNone(resolve_path("nope", "./a.md", self.project))

    def test_basename_lookup_ignores_markdown_suffix(self):
        self.assertEqual(find_file_by_basename("a", self.project), "file-a")
        self.assertEqual(find_file_by_basename("a.MD", self.project), "file-a")
        self.assertEqual(find_file_by_basename("docs.markdown", self.project), "file-docs")
        self.assertIsNone(find_file_by_basename("A", self.project))


class TestVisibility(unittest.TestCase):
    """Test variable visibility rules."""

    def test_untagged_and_public_are_accessible(self):
        self.assertTrue(is_accessible(Variable(key="X"), "f1", "f2"))
        self.assertTrue(is_accessible(Variable(key="X", visibility=Visibility.PUBLIC), "f1", "f2"))

    def test_private_only_from_same_file(self):
        variable = Variable(key="X", visibility=Visibility.PRIVATE)

        self.assertFalse(is_accessible(variable, "f1", "f2"))
        self.assertTrue(is_accessible(variable, "f2", "f2"))

    def test_protected_behaves_like_public(self):
        self.assertTrue(is_accessible(Variable(key="X", visibility=Visibility.PROTECTED), "f1", "f2"))


class TestReferenceResolver(unittest.TestCase):
    """Test resolution outcomes and caching."""

    def setUp(self):
        self.resolver = ReferenceResolver(cache=ResolutionCache(), auto_invalidate=False)

    def resolve(self, text, file_id, project):
        refs = self.resolver.resolve_all(text, file_id, project)
        self.assertEqual(len(refs), 1)
        return refs[0]

    def test_resolves_local_variable(self):
        ref = self.resolve("${file:./a.md:X}", "file-b", make_project())

        self.assertIs(ref.status, RefStatus.RESOLVED)
        self.assertEqual(ref.resolved_value, "hello")
        self.assertEqual(ref.resolved_file_id, "file-a")

    def test_falls_back_to_global_variable(self):
        ref = self.resolve("${file:./a.md:SHARED}", "file-b", make_project())

        self.assertEqual(ref.resolved_value, "from-global")
        self.assertEqual(ref.resolved_file_id, "file-a")

    def test_missing_file(self):
        ref = self.resolve("${file:./missing.md:X}", "file-b", make_project())

        self.assertIs(ref.status, RefStatus.ERROR)
        self.assertEqual(ref.error, "File not found: ./missing.md")
        self.assertIsNone(ref.resolved_file_id)

    def test_missing_variable(self):
        ref = self.resolve("${file:./a.md:NOPE}", "file-b", make_project())

        self.assertIs(ref.status, RefStatus.NOT_FOUND)
        self.assertEqual(ref.error, "Variable 'NOPE' not found in file ./a.md")
        self.assertEqual(ref.resolved_file_id, "file-a")

    def test_private_variable_from_other_file(self):
        ref = self.resolve("${file:./a.md:X}", "file-b", make_project(Visibility.PRIVATE))

        self.assertIs(ref.status, RefStatus.ERROR)
        self.assertEqual(ref.error, "Variable 'X' is not accessible (private)")
        self.assertEqual(ref.resolved_file_id, "file-a")

    def test_private_variable_from_own_file(self):
        ref = self.resolve("${file:./a.md:X}", "file-a", make_project(Visibility.PRIVATE))

        self.assertEqual(ref.resolved_value, "hello")

    def test_filename_syntax(self):
        ref = self.resolve("{{docs.title}}", "file-notes", make_project())

        self.assertEqual(ref.resolved_value, "Guide")
        self.assertEqual(ref.resolved_file_id, "file-docs")

    def test_rename_breaks_name_based_reference(self):
        project = make_project()
        project.find_file("file-docs").name = "documentation"

        ref = self.resolve("{{docs.title}}", "file-notes", project)

        self.assertIs(ref.status, RefStatus.ERROR)
        self.assertEqual(ref.error, "File not found: docs")

    def test_duplicate_file_names_resolve_to_first(self):
        project = make_project()
        project.files.append(File(id="file-a2", name="a.md", local_variables=[Variable(key="X", value="second")]))

        self.assertEqual(self.resolve("${file:./a.md:X}", "file-b", project).resolved_value, "hello")

    def test_cache_returns_stale_value_until_cleared(self):
        project = make_project()
        self.resolve("${file:./a.md:X}", "file-b", project)

        project.find_file("file-a").local_variables[0].value = "changed"
        stale = self.resolve("${file:./a.md:X}", "file-b", project)

        self.assertEqual(stale.resolved_value, "hello")
        self.assertEqual(stale.resolved_file_id, "file-a")
        self.assertEqual(self.resolver.cache.hits, 1)

        self.resolver.clear_cache()
        self.assertEqual(self.resolve("${file:./a.md:X}", "file-b", project).resolved_value, "changed")

    def test_cache_key_includes_requesting_file(self):
        project = make_project(Visibility.PRIVATE)
        self.resolve("${file:./a.md:X}", "file-a", project)

        ref = self.resolve("${file:./a.md:X}", "file-b", project)

        self.assertIs(ref.status, RefStatus.ERROR)

    def test_failures_are_not_cached(self):
        project = make_project()
        self.resolve("${file:./a.md:NOPE}", "file-b", project)

        self.assertEqual(len(self.resolver.cache), 0)

    def test_cached_entry_for_removed_file_is_ignored(self):
        project = make_project()
        self.resolve("${file:./a.md:X}", "file-b", project)
        project.files = [f for f in project.files if f.id != "file-a"]

        ref = self.resolve("${file:./a.md:X}", "file-b", project)

        self.assertIs(ref.status, RefStatus.ERROR)

    def test_auto_invalidation_follows_updated_at(self):
        resolver = ReferenceResolver(cache=ResolutionCache(), auto_invalidate=True)
        project = make_project()
        resolver.resolve_all("${file:./a.md:X}", "file-b", project)

        project.find_file("file-a").local_variables[0].value = "changed"
        project.updated_at = project.updated_at + timedelta(seconds=1)

        ref = resolver.resolve_all("${file:./a.md:X}", "file-b", project)[0]
        self.assertEqual(ref.resolved_value, "changed")

    def test_disabled_cache_never_stores(self):
        resolver = ReferenceResolver(cache=ResolutionCache(enabled=False), auto_invalidate=False)
        project = make_project()
        resolver.resolve_all("${file:./a.md:X}", "file-b", project)

        self.assertEqual(len(resolver.cache), 0)

    def test_get_file_references(self):
        project = make_project()
        file_b = project.find_file("file-b")
        file_b.blocks = [
            Block.create(BlockType.PARAGRAPH, "${file:./a.md:X} and {{docs.title}}"),
            Block.create(BlockType.TABLE),
            Block.create(BlockType.CODE, "${file:./missing.md:X}"),
        ]

        refs = self.resolver.get_file_references("file-b", project)

        self.assertEqual([ref.status for ref in refs], [RefStatus.RESOLVED, RefStatus.RESOLVED, RefStatus.ERROR])
        self.assertEqual(self.resolver.get_file_references("unknown", project), [])


if __name__ == '__main__':
    unittest.main(verbosity=2)
