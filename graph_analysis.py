"""Graph algorithms over a DependencyGraph: centrality, cycles, metrics, hotspots, focus filtering."""

from collections import deque
from dataclasses import replace

from config import BOTTLENECK_MIN_OUT_DEGREE, HUB_MIN_IN_DEGREE
from graph_models import (
    AnalysisSummary,
    CircularDependency,
    CycleSeverity,
    DependencyGraph,
    DependencyHotspot,
    DependencyMetrics,
    HotspotType,
)
from logger import get_logger

logger = get_logger()

CRITICAL_CYCLE_MAX_LENGTH = 3


def calculate_centrality(graph: DependencyGraph) -> None:
    """
    Sets each node's centrality to (inDegree + outDegree) / node count.
    Plain degree normalisation; no transitive influence.
    """
    total = len(graph.nodes)
    for node in graph.nodes:
        node.metrics.centrality = node.metrics.total_degree / total if total else 0.0


def _make_cycle(cycle: list[str]) -> CircularDependency:
    distinct = len(set(cycle))
    severity = (
        CycleSeverity.CRITICAL if distinct <= CRITICAL_CYCLE_MAX_LENGTH else CycleSeverity.WARNING
    )
    return CircularDependency(
        cycle=cycle,
        severity=severity,
        description=f"Circular dependency ({distinct} modules): {' -> '.join(cycle)}",
    )


def detect_circular_dependencies(graph: DependencyGraph) -> list[CircularDependency]:
    """
    Depth-first search with an explicit stack and an on-stack set.

    Each back edge current -> ancestor closes a cycle, rebuilt by walking
    `parent` from current up to ancestor. Cycles are deduplicated by their
    node set, so distinct cycles over the same modules are reported once.

    Returns:
        Cycles as closed walks (first element repeated at the end)
    """
    adjacency = graph.adjacency()
    visited: set[str] = set()
    on_stack: set[str] = set()
    parent: dict[str, str] = {}
    seen_keys: set[tuple[str, ...]] = set()
    cycles: list[CircularDependency] = []

    for start in [node.id for node in graph.nodes]:
        if start in visited:
            continue

        visited.add(start)
        on_stack.add(start)
        stack = [(start, iter(adjacency.get(start, [])))]

        while stack:
            current, neighbors = stack[-1]
            neighbor = next(neighbors, None)

            if neighbor is None:
                stack.pop()
                on_stack.discard(current)
                continue

            if neighbor not in visited:
                visited.add(neighbor)
                on_stack.add(neighbor)
                parent[neighbor] = current
                stack.append((neighbor, iter(adjacency.get(neighbor, []))))
            elif neighbor in on_stack:
                path = [current]
                walker = current
                while walker != neighbor:
                    walker = parent[walker]
                    path.append(walker)
                path.reverse()
                path.append(neighbor)

                key = tuple(sorted(set(path)))
                if key not in seen_keys:
                    seen_keys.add(key)
                    cycles.append(_make_cycle(path))

    logger.debug("Cycle detection complete", extra={"cycles": len(cycles)})
    return cycles


def calculate_metrics(graph: DependencyGraph) -> DependencyMetrics:
    """Aggregate coupling metrics. An empty graph yields all zeros."""
    total = len(graph.nodes)
    if total == 0:
        return DependencyMetrics()

    out_degrees = [node.metrics.out_degree for node in graph.nodes]
    avg_dependencies = sum(out_degrees) / total
    coupling = sum(node.metrics.total_degree for node in graph.nodes) / total

    # "stability" here is Ce / (Ca + Ce), i.e. instability in Martin's terms
    ratios = [
        node.metrics.out_degree / node.metrics.total_degree
        for node in graph.nodes
        if node.metrics.total_degree > 0
    ]

    return DependencyMetrics(
        total_modules=total,
        avg_dependencies=avg_dependencies,
        max_dependencies=max(out_degrees),
        coupling=coupling,
        cohesion=1 / avg_dependencies if avg_dependencies > 0 else 1.0,
        stability=sum(ratios) / len(ratios) if ratios else 0.0,
    )


def identify_hotspots(graph: DependencyGraph) -> list[DependencyHotspot]:
    """
    hub: inDegree >= 5; bottleneck: outDegree >= 10; god-object: both.
    A node may be reported under several types. Sorted by centrality, highest first.
    """
    hotspots: list[DependencyHotspot] = []

    for node in graph.nodes:
        in_degree = node.metrics.in_degree
        out_degree = node.metrics.out_degree
        is_hub = in_degree >= HUB_MIN_IN_DEGREE
        is_bottleneck = out_degree >= BOTTLENECK_MIN_OUT_DEGREE

        found: list[tuple[HotspotType, str]] = []
        if is_hub:
            found.append((HotspotType.HUB, f"Imported by {in_degree} modules"))
        if is_bottleneck:
            found.append((HotspotType.BOTTLENECK, f"Depends on {out_degree} modules"))
        if is_hub and is_bottleneck:
            found.append(
                (
                    HotspotType.GOD_OBJECT,
                    f"Imported by {in_degree} and depends on {out_degree} modules",
                )
            )

        for hotspot_type, description in found:
            hotspots.append(
                DependencyHotspot(
                    file=node.id,
                    in_degree=in_degree,
                    out_degree=out_degree,
                    centrality=node.metrics.centrality,
                    type=hotspot_type,
                    description=description,
                )
            )

    hotspots.sort(key=lambda h: h.centrality, reverse=True)
    return hotspots


def filter_by_focus(
    graph: DependencyGraph, focus_module: str, max_depth: int | None = None
) -> DependencyGraph:
    """
    Extracts the neighbourhood of the first module whose id or path contains
    `focus_module`, following dependencies and dependents breadth-first.

    Every edge touching a visited node is kept, even when its other end lies
    beyond `max_depth` and is never visited. Nodes are copied, so recomputing
    centrality on the result leaves the input graph untouched. With no matching
    module the input graph is returned as is.
    """
    focus = next(
        (node for node in graph.nodes if focus_module in node.id or focus_module in node.path),
        None,
    )
    if focus is None:
        logger.info(f"Focus module '{focus_module}' not found, using full graph")
        return graph

    outgoing: dict[str, list[int]] = {}
    incoming: dict[str, list[int]] = {}
    for index, edge in enumerate(graph.edges):
        outgoing.setdefault(edge.source, []).append(index)
        incoming.setdefault(edge.target, []).append(index)

    visited: set[str] = set()
    kept_edges: set[int] = set()
    queue: deque[tuple[str, int]] = deque([(focus.id, 0)])

    while queue:
        current, distance = queue.popleft()
        if current in visited:
            continue
        visited.add(current)

        can_expand = max_depth is None or distance + 1 <= max_depth
        for index in outgoing.get(current, []):
            kept_edges.add(index)
            target = graph.edges[index].target
            if can_expand and target not in visited:
                queue.append((target, distance + 1))
        for index in incoming.get(current, []):
            kept_edges.add(index)
            source = graph.edges[index].source
            if can_expand and source not in visited:
                queue.append((source, distance + 1))

    return DependencyGraph(
        nodes=[
            replace(node, metrics=replace(node.metrics))
            for node in graph.nodes
            if node.id in visited
        ],
        edges=[edge for index, edge in enumerate(graph.edges) if index in kept_edges],
    )


def _max_reach_depth(start: str, adjacency: dict[str, list[str]]) -> int:
    distances = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, []):
            if neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)
    return max(distances.values())


def summarize(graph: DependencyGraph, circular_count: int) -> AnalysisSummary:
    """Edge count, mean dependency depth, isolated modules and cycle count."""
    adjacency = graph.adjacency()
    depths = [_max_reach_depth(node.id, adjacency) for node in graph.nodes]

    return AnalysisSummary(
        total_dependencies=len(graph.edges),
        average_depth=sum(depths) / len(depths) if depths else 0.0,
        isolated_modules=sum(1 for node in graph.nodes if node.metrics.total_degree == 0),
        circular_count=circular_count,
    )
