"""Two-pass construction of the module dependency graph."""

import os
from pathlib import Path

from exceptions import ParseError
from graph_analysis import calculate_centrality
from graph_models import BuildStats, DependencyEdge, DependencyGraph, EdgeType, ModuleNode
from import_facts import ImportDeclaration, ImportFactsProvider, ModuleFacts
from import_resolver import ImportResolver, is_local_specifier, is_relative_specifier
from logger import get_logger
from module_classifier import classify_module

logger = get_logger()


def to_module_id(path: Path, root: Path) -> str:
    """Project-relative POSIX path used as the node key."""
    return Path(os.path.relpath(os.path.abspath(path), os.path.abspath(root))).as_posix()


def edge_type_for(declaration: ImportDeclaration) -> EdgeType:
    if declaration.kind == "dynamic":
        return EdgeType.DYNAMIC
    if declaration.kind != "require" and is_relative_specifier(declaration.source):
        return EdgeType.IMPORT
    return EdgeType.REQUIRE


class DependencyGraphBuilder:
    """
    Builds a DependencyGraph from discovered files.

    Pass 1 creates one node per file the facts provider can read; pass 2
    resolves each file's imports into edges between existing nodes and
    updates degree counters. Unparseable files and unresolvable imports are
    dropped without raising and counted in `stats`.
    """

    def __init__(
        self,
        facts_provider: ImportFactsProvider,
        template_framework: bool = False,
        include_external: bool = False,
    ):
        self.facts_provider = facts_provider
        self.template_framework = template_framework
        self.include_external = include_external
        self.stats = BuildStats()

    def build(self, files: list[Path], root: Path) -> DependencyGraph:
        self.stats = BuildStats()
        graph = DependencyGraph()
        nodes_by_id: dict[str, ModuleNode] = {}
        facts_by_id: dict[str, tuple[Path, ModuleFacts]] = {}

        # Pass 1: nodes
        for fpath in files:
            module_id = to_module_id(fpath, root)
            if module_id in nodes_by_id:
                continue
            try:
                facts = self.facts_provider.get_facts(fpath)
            except (ParseError, OSError, UnicodeDecodeError) as e:
                self.stats.skipped_files += 1
                logger.debug(f"Skipping unparseable file {module_id}: {e}")
                continue

            node = ModuleNode(
                id=module_id,
                path=module_id,
                type=classify_module(module_id, self.template_framework),
                exports=list(facts.exports),
            )
            graph.nodes.append(node)
            nodes_by_id[module_id] = node
            facts_by_id[module_id] = (fpath, facts)

        # Pass 2: edges
        resolver = ImportResolver(root, known_files=[path for path, _ in facts_by_id.values()])
        for node in graph.nodes:
            fpath, facts = facts_by_id[node.id]
            for declaration in facts.imports:
                self._add_edge_for(graph, nodes_by_id, node, fpath, declaration, resolver, root)

        calculate_centrality(graph)

        logger.info(
            "Dependency graph built",
            extra={
                "modules": len(graph.nodes),
                "edges": len(graph.edges),
                "skipped_files": self.stats.skipped_files,
                "unresolved_imports": self.stats.unresolved_imports,
                "external_imports": self.stats.external_imports,
            },
        )
        return graph

    def _add_edge_for(
        self,
        graph: DependencyGraph,
        nodes_by_id: dict[str, ModuleNode],
        node: ModuleNode,
        fpath: Path,
        declaration: ImportDeclaration,
        resolver: ImportResolver,
        root: Path,
    ) -> None:
        if not is_local_specifier(declaration.source):
            # Package imports never become edges; with include_external they
            # are at least counted so the summary shows them.
            if self.include_external:
                self.stats.external_imports += 1
                logger.debug(f"External dependency {declaration.source!r} in {node.id} not graphed")
            return

        try:
            target_path = resolver.resolve(fpath, declaration.source)
        except (OSError, ValueError) as e:
            logger.debug(f"Failed to resolve {declaration.source!r} from {node.id}: {e}")
            target_path = None

        target = nodes_by_id.get(to_module_id(target_path, root)) if target_path else None
        if target is None:
            self.stats.unresolved_imports += 1
            logger.debug(f"Unresolved import {declaration.source!r} in {node.id}")
            return

        graph.edges.append(
            DependencyEdge(
                source=node.id,
                target=target.id,
                type=edge_type_for(declaration),
                imports=list(declaration.specifiers),
            )
        )
        node.metrics.out_degree += 1
        target.metrics.in_degree += 1
