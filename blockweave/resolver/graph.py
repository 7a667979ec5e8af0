"""
File dependency graph and cycle detection.

The graph is rebuilt wholesale on demand from the references found in every
text block; it is never maintained incrementally.
"""

import logging
from typing import Dict, List, Optional, Set

from ..models import CrossFileVariableRef, DependencyGraph, FileDependency, Project
from .resolver import ReferenceResolver

Adjacency = Dict[str, Dict[str, None]]

_EXHAUSTED = object()


def detect_cycles(adjacency: Adjacency) -> List[List[str]]:
    """
    Report cycles reachable by depth-first search.

    Every unvisited node starts a search; a back edge to a node on the current
    path emits that part of the path closed by the repeated node. Nodes already
    fully explored are not searched again, so this reports reachable cycles
    rather than enumerating every simple cycle.

    Args:
        adjacency: Source file id to ordered target file ids

    Returns:
        Cycles as lists of file ids whose last element repeats the first
    """
    visited: Set[str] = set()
    cycles: List[List[str]] = []

    for start in list(adjacency):
        if start in visited:
            continue

        # One neighbor iterator per node on the current path
        visited.add(start)
        path = [start]
        on_path = {start}
        pending = [iter(adjacency.get(start, {}))]

        while pending:
            neighbor = next(pending[-1], _EXHAUSTED)
            if neighbor is _EXHAUSTED:
                pending.pop()
                on_path.discard(path.pop())
            elif neighbor in on_path:
                cycles.append(path[path.index(neighbor):] + [neighbor])
            elif neighbor not in visited:
                visited.add(neighbor)
                path.append(neighbor)
                on_path.add(neighbor)
                pending.append(iter(adjacency.get(neighbor, {})))

    return cycles


class DependencyGraphBuilder:
    """
    Builds the file-to-file dependency graph of a project.
    """

    def __init__(self, resolver: Optional[ReferenceResolver] = None):
        self.resolver = resolver or ReferenceResolver()
        self.last_graph = DependencyGraph()

    def build(self, project: Project) -> DependencyGraph:
        """
        Resolve every reference in the project and assemble the graph.

        Any reference that names an existing file creates an edge, including
        references to missing or inaccessible variables.

        Args:
            project: The project snapshot

        Returns:
            Edges grouped per (source file, target file) plus detected cycles
        """
        dependencies: List[FileDependency] = []
        adjacency: Adjacency = {}

        for file in project.files:
            refs_by_target: Dict[str, List[CrossFileVariableRef]] = {}

            for block in file.blocks:
                if not block.has_text:
                    continue
                for ref in self.resolver.resolve_all(block.text, file.id, project):
                    if ref.resolved_file_id is None:
                        continue
                    refs_by_target.setdefault(ref.resolved_file_id, []).append(ref)
                    adjacency.setdefault(file.id, {})[ref.resolved_file_id] = None

            for target_file_id, refs in refs_by_target.items():
                dependencies.append(FileDependency(
                    source_file_id=file.id,
                    target_file_id=target_file_id,
                    variable_refs=refs,
                ))

        cycles = detect_cycles(adjacency)
        logging.info(f"Dependency graph built: {len(dependencies)} edges across {len(project.files)} files")
        for cycle in cycles:
            logging.warning(f"Circular reference detected: {' -> '.join(cycle)}")

        self.last_graph = DependencyGraph(dependencies=dependencies, circular_refs=cycles)
        return self.last_graph
