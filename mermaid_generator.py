"""Mermaid diagram text for dependency graphs and cycles."""

from config import MAX_DIAGRAM_NODES
from graph_models import CircularDependency, DependencyGraph, ModuleType

NODE_SHAPES: dict[ModuleType, tuple[str, str]] = {
    ModuleType.COMPONENT: ("[", "]"),
    ModuleType.HOOK: ("([", "])"),
    ModuleType.COMPOSABLE: ("([", "])"),
    ModuleType.PROVIDER: ("[(", ")]"),
    ModuleType.STORE: ("[(", ")]"),
    ModuleType.UTILITY: ("{{", "}}"),
}


def _label(module_id: str) -> str:
    return (module_id.rsplit("/", 1)[-1] or module_id).replace('"', "'")


def generate_dependency_diagram(graph: DependencyGraph, max_nodes: int = MAX_DIAGRAM_NODES) -> str:
    """Left-to-right graph of the `max_nodes` most central modules."""
    lines = ["graph LR"]

    important = sorted(graph.nodes, key=lambda n: n.metrics.centrality, reverse=True)[:max_nodes]

    node_ids: dict[str, str] = {}
    for i, node in enumerate(important):
        node_ids[node.id] = f"n{i}"
        open_shape, close_shape = NODE_SHAPES.get(node.type, ("[", "]"))
        lines.append(f'  n{i}{open_shape}"{_label(node.id)}"{close_shape}')

    drawn: set[tuple[str, str]] = set()
    for edge in graph.edges:
        from_id = node_ids.get(edge.source)
        to_id = node_ids.get(edge.target)
        if from_id and to_id and (from_id, to_id) not in drawn:
            drawn.add((from_id, to_id))
            lines.append(f"  {from_id} --> {to_id}")

    return "\n".join(lines)


def generate_circular_dependency_diagram(cycles: list[CircularDependency]) -> str:
    if not cycles:
        return 'graph LR\n  A["No Circular Dependencies"]'

    lines = ["graph LR"]
    for cycle_index, circular in enumerate(cycles):
        # Closed walk repeats its first module at the end
        ring = circular.cycle[:-1] if len(circular.cycle) > 1 else circular.cycle
        for i, module_id in enumerate(ring):
            current = f"c{cycle_index}_{i}"
            following = f"c{cycle_index}_{(i + 1) % len(ring)}"
            lines.append(
                f'  {current}["{_label(module_id)}"] -->|cycle {cycle_index + 1}| {following}'
            )

    return "\n".join(lines)
