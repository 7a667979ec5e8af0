#!/usr/bin/env python3
"""
Blockweave - Cross-file variable resolution for block documents

Main entry point for the Blockweave command line. Loads a project snapshot and
renders files, lists their references, audits the dependency graph or prints
the generation context of a file.
"""

import json
import logging
import sys
import argparse
from typing import Optional

from blockweave.config import config
from blockweave.generation import extract_file_context
from blockweave.importers import JsonSnapshotImporter, MockImporter, SnapshotError
from blockweave.models import File, Project
from blockweave.rendering import render_file_markdown, render_file_tree
from blockweave.resolver import ContentSubstitutionEngine, DependencyGraphBuilder, ReferenceResolver


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def load_project(snapshot_path: Optional[str]) -> Project:
    """
    Load the project to work on.

    Args:
        snapshot_path: Exported snapshot file; the sample project is used when None

    Returns:
        The loaded Project
    """
    if snapshot_path:
        return JsonSnapshotImporter(snapshot_path).load_project()
    logging.info("No snapshot given, using the sample project")
    return MockImporter().load_project()


def find_file(project: Project, file_ref: str) -> File:
    """
    Find a file by name or id.

    Raises:
        SystemExit: If no file matches
    """
    file = project.find_file_by_name(file_ref) or project.find_file(file_ref)
    if file is None:
        available = ", ".join(f.name for f in project.files) or "none"
        raise SystemExit(f"File not found: {file_ref} (available: {available})")
    return file


def command_render(project: Project, args) -> int:
    """Print a file as markdown or as a JSON render tree."""
    file = find_file(project, args.file)
    substitution = ContentSubstitutionEngine(ReferenceResolver())

    if args.format == "tree":
        nodes = render_file_tree(project, file.id, substitution, args.max_embed_depth)
        print(json.dumps([node.to_dict() for node in nodes], indent=2))
    else:
        print(render_file_markdown(project, file.id, substitution, args.max_embed_depth))
    return 0


def command_refs(project: Project, args) -> int:
    """List every cross-file reference of a file with its resolution status."""
    file = find_file(project, args.file)
    refs = ReferenceResolver().get_file_references(file.id, project)

    if not refs:
        print(f"No cross-file references in {file.name}")
        return 0

    unresolved = 0
    for ref in refs:
        if ref.is_resolved:
            print(f"[{ref.status.value}] {ref.raw} = {ref.resolved_value!r}")
        else:
            unresolved += 1
            print(f"[{ref.status.value}] {ref.raw}: {ref.error}")

    logging.info(f"{len(refs)} references in {file.name}, {unresolved} unresolved")
    return 0


def command_graph(project: Project, args) -> int:
    """Print file dependencies and cycles; exit status 1 when cycles exist."""
    graph = DependencyGraphBuilder().build(project)
    names = {file.id: file.name for file in project.files}

    print("Dependencies:")
    if not graph.dependencies:
        print("  (none)")
    for file in project.files:
        for dependency in graph.dependencies_of(file.id):
            variables = ", ".join(ref.variable_name for ref in dependency.variable_refs)
            print(f"  {file.name} -> {names[dependency.target_file_id]} ({variables})")

    print("Cycles:")
    if not graph.circular_refs:
        print("  (none)")
    for cycle in graph.circular_refs:
        print("  " + " -> ".join(names.get(file_id, file_id) for file_id in cycle))

    return 1 if graph.has_cycles else 0


def command_context(project: Project, args) -> int:
    """Print the generation context of a file."""
    file = find_file(project, args.file)
    print(extract_file_context(project, file.id))
    return 0


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Blockweave - Cross-file variable resolution for block documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py render --file b.md                           # Render the sample project's b.md
  python main.py --snapshot project.json render --file notes  # Render a file from an export
  python main.py --snapshot project.json render --file notes --format tree
  python main.py --snapshot project.json refs --file notes    # List references and their status
  python main.py --snapshot project.json graph                # Audit dependencies for cycles
        """
    )

    parser.add_argument(
        "--snapshot",
        type=str,
        help="Path to an exported project snapshot (default: built-in sample project)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Blockweave 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render a file")
    render_parser.add_argument("--file", required=True, help="File name or id")
    render_parser.add_argument(
        "--format",
        choices=["markdown", "tree"],
        default="markdown",
        help="Output format (default: markdown)"
    )
    render_parser.add_argument(
        "--max-embed-depth",
        type=int,
        default=None,
        help="Embed levels to unwrap (default: rendering.max_embed_depth)"
    )
    render_parser.set_defaults(handler=command_render)

    refs_parser = subparsers.add_parser("refs", help="List cross-file references of a file")
    refs_parser.add_argument("--file", required=True, help="File name or id")
    refs_parser.set_defaults(handler=command_refs)

    graph_parser = subparsers.add_parser("graph", help="Show file dependencies and cycles")
    graph_parser.set_defaults(handler=command_graph)

    context_parser = subparsers.add_parser("context", help="Print the generation context of a file")
    context_parser.add_argument("--file", required=True, help="File name or id")
    context_parser.set_defaults(handler=command_context)

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging()

    try:
        project = load_project(args.snapshot)
    except SnapshotError as e:
        logging.error(f"Failed to load project: {e}")
        print(f"\nFailed to load project: {e}", file=sys.stderr)
        return 2

    return args.handler(project, args)


if __name__ == "__main__":
    sys.exit(main())
