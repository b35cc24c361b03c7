"""Data models for the module dependency graph and its analysis report."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ModuleType(str, Enum):
    COMPONENT = "component"
    HOOK = "hook"
    COMPOSABLE = "composable"
    STORE = "store"
    SERVICE = "service"
    PROVIDER = "provider"
    UTILITY = "utility"


class EdgeType(str, Enum):
    IMPORT = "import"
    DYNAMIC = "dynamic"
    REQUIRE = "require"


class CycleSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


class HotspotType(str, Enum):
    HUB = "hub"
    BOTTLENECK = "bottleneck"
    GOD_OBJECT = "god-object"


@dataclass
class NodeMetrics:
    in_degree: int = 0
    out_degree: int = 0
    centrality: float = 0.0

    @property
    def total_degree(self) -> int:
        return self.in_degree + self.out_degree

    def to_dict(self) -> dict[str, Any]:
        return {
            "inDegree": self.in_degree,
            "outDegree": self.out_degree,
            "centrality": self.centrality,
        }


@dataclass
class ModuleNode:
    """One analysable source file. `id` is the project-relative POSIX path."""

    id: str
    path: str
    type: ModuleType
    exports: list[str] = field(default_factory=list)
    metrics: NodeMetrics = field(default_factory=NodeMetrics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "type": self.type.value,
            "exports": list(self.exports),
            "metrics": self.metrics.to_dict(),
        }


@dataclass
class DependencyEdge:
    source: str
    target: str
    type: EdgeType
    imports: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "type": self.type.value,
            "imports": list(self.imports),
        }


@dataclass
class DependencyGraph:
    """
    Directed multigraph of modules.
    One edge per import statement, so the same ordered pair may repeat.
    """

    nodes: list[ModuleNode] = field(default_factory=list)
    edges: list[DependencyEdge] = field(default_factory=list)

    def get_node(self, node_id: str) -> ModuleNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def adjacency(self) -> dict[str, list[str]]:
        """Outgoing neighbours per node, first-seen order, multiplicity collapsed."""
        adjacency: dict[str, list[str]] = {node.id: [] for node in self.nodes}
        for edge in self.edges:
            targets = adjacency.setdefault(edge.source, [])
            if edge.target not in targets:
                targets.append(edge.target)
        return adjacency

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class CircularDependency:
    cycle: list[str]
    severity: CycleSeverity
    description: str

    @property
    def length(self) -> int:
        return len(set(self.cycle))

    def to_dict(self) -> dict[str, Any]:
        return {
            "cycle": list(self.cycle),
            "severity": self.severity.value,
            "description": self.description,
        }


@dataclass
class DependencyHotspot:
    file: str
    in_degree: int
    out_degree: int
    centrality: float
    type: HotspotType
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "inDegree": self.in_degree,
            "outDegree": self.out_degree,
            "centrality": self.centrality,
            "type": self.type.value,
            "description": self.description,
        }


@dataclass
class DependencyMetrics:
    total_modules: int = 0
    avg_dependencies: float = 0.0
    max_dependencies: int = 0
    coupling: float = 0.0
    cohesion: float = 0.0
    stability: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalModules": self.total_modules,
            "avgDependencies": self.avg_dependencies,
            "maxDependencies": self.max_dependencies,
            "coupling": self.coupling,
            "cohesion": self.cohesion,
            "stability": self.stability,
        }


@dataclass
class BuildStats:
    """Counters for what graph construction dropped silently."""

    skipped_files: int = 0
    unresolved_imports: int = 0
    external_imports: int = 0


@dataclass
class AnalysisSummary:
    total_dependencies: int = 0
    average_depth: float = 0.0
    isolated_modules: int = 0
    circular_count: int = 0
    skipped_files: int = 0
    unresolved_imports: int = 0
    external_imports: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalDependencies": self.total_dependencies,
            "averageDepth": self.average_depth,
            "isolatedModules": self.isolated_modules,
            "circularCount": self.circular_count,
            "skippedFiles": self.skipped_files,
            "unresolvedImports": self.unresolved_imports,
            "externalImports": self.external_imports,
        }


@dataclass
class DependencyAnalysisResult:
    project_name: str
    total_files: int
    graph: DependencyGraph
    circular_dependencies: list[CircularDependency]
    metrics: DependencyMetrics
    hotspots: list[DependencyHotspot]
    recommendations: list[str]
    summary: AnalysisSummary
    diagram: str | None = None
    cycle_diagram: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "project": {"name": self.project_name, "totalFiles": self.total_files},
            "graph": self.graph.to_dict(),
            "circularDependencies": [c.to_dict() for c in self.circular_dependencies],
            "metrics": self.metrics.to_dict(),
            "hotspots": [h.to_dict() for h in self.hotspots],
            "recommendations": list(self.recommendations),
            "summary": self.summary.to_dict(),
        }
        if self.diagram is not None:
            result["diagram"] = self.diagram
        if self.cycle_diagram is not None:
            result["cycleDiagram"] = self.cycle_diagram
        return result
