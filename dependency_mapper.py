"""Dependency graph analysis: discovery, graph construction, focus filtering and reporting."""

from dataclasses import dataclass
from pathlib import Path
from time import time

from config import resolve_project_path
from context import AppContext, get_context
from exceptions import ValidationError
from graph_analysis import (
    calculate_centrality,
    calculate_metrics,
    detect_circular_dependencies,
    filter_by_focus,
    identify_hotspots,
    summarize,
)
from graph_builder import DependencyGraphBuilder
from graph_models import DependencyAnalysisResult, DependencyMetrics
from logger import begin_analysis, end_analysis, get_logger
from mermaid_generator import generate_circular_dependency_diagram, generate_dependency_diagram
from module_classifier import detect_template_framework
from recommendations import generate_recommendations

logger = get_logger()


@dataclass
class DependencyAnalysisParams:
    project_path: str | None = None
    include_globs: list[str] | None = None
    exclude_globs: list[str] | None = None
    depth: int | None = None
    detect_circular: bool = True
    calculate_metrics: bool = True
    generate_diagram: bool = False
    focus_module: str | None = None
    include_external: bool = False

    def validate(self) -> None:
        if self.depth is not None and (
            isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 0
        ):
            raise ValidationError("depth must be a non-negative integer")
        for name in ("include_globs", "exclude_globs"):
            globs = getattr(self, name)
            if globs is not None and (
                not isinstance(globs, list) or not all(isinstance(g, str) for g in globs)
            ):
                raise ValidationError(f"{name} must be a list of strings")


def analyze_dependency_graph(
    params: DependencyAnalysisParams, context: AppContext | None = None
) -> DependencyAnalysisResult:
    """
    Runs a complete analysis of one project. Nothing is cached between calls.

    Raises:
        ValidationError: If params are invalid or the project path is unusable
        DiscoveryError: If the project tree cannot be read
    """
    params.validate()
    ctx = context or get_context()

    try:
        root = resolve_project_path(params.project_path)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    analysis_id = begin_analysis()
    logger.info(f"Analyzing {root}", extra={"focus": params.focus_module})
    try:
        return _run_analysis(params, root, ctx)
    except Exception:
        logger.exception(f"Analysis {analysis_id} failed")
        raise
    finally:
        end_analysis()


def _run_analysis(
    params: DependencyAnalysisParams, root: Path, ctx: AppContext
) -> DependencyAnalysisResult:
    started = time()
    files = ctx.discovery.discover(root, params.include_globs, params.exclude_globs)

    builder = DependencyGraphBuilder(
        ctx.facts_provider,
        template_framework=detect_template_framework(root),
        include_external=params.include_external,
    )
    full_graph = builder.build(files, root)

    graph = full_graph
    if params.focus_module:
        graph = filter_by_focus(full_graph, params.focus_module, params.depth)
        if graph is not full_graph:
            calculate_centrality(graph)

    circular = detect_circular_dependencies(graph) if params.detect_circular else []
    metrics = calculate_metrics(graph) if params.calculate_metrics else DependencyMetrics()
    hotspots = identify_hotspots(graph)
    recommendations = generate_recommendations(circular, metrics, hotspots)

    summary = summarize(graph, len(circular))
    summary.skipped_files = builder.stats.skipped_files
    summary.unresolved_imports = builder.stats.unresolved_imports
    summary.external_imports = builder.stats.external_imports

    diagram = None
    cycle_diagram = None
    if params.generate_diagram:
        diagram = generate_dependency_diagram(graph)
        if params.detect_circular:
            cycle_diagram = generate_circular_dependency_diagram(circular)

    logger.info(
        "Dependency analysis complete",
        extra={
            "root": str(root),
            "files": len(files),
            "modules": len(graph.nodes),
            "edges": len(graph.edges),
            "cycles": len(circular),
            "hotspots": len(hotspots),
            "focus": params.focus_module,
            "duration_s": round(time() - started, 3),
        },
    )

    return DependencyAnalysisResult(
        project_name=root.name,
        total_files=len(files),
        graph=graph,
        circular_dependencies=circular,
        metrics=metrics,
        hotspots=hotspots,
        recommendations=recommendations,
        summary=summary,
        diagram=diagram,
        cycle_diagram=cycle_diagram,
    )
