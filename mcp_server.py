import json
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from config import PROJECT_ROOT, STATE_DIR
from dependency_mapper import DependencyAnalysisParams, analyze_dependency_graph
from exceptions import DependencyMapperError
from logger import setup_logger

logger = setup_logger()


def log(message: str) -> None:
    logger.info(message)


def startup_check() -> None:
    log("=" * 60)
    log("DependencyMapper MCP Server Starting...")
    log(f"Project Root (detected): {PROJECT_ROOT}")
    log(f"Current Working Directory: {Path.cwd()}")
    log(f"MCP Server Location: {Path(__file__).parent}")
    log("=" * 60)

    if not STATE_DIR.exists():
        log(f"Warning: {STATE_DIR} missing, file logging is disabled")


startup_check()

mcp = FastMCP("DependencyMapper")


def map_params(
    path: str | None,
    inc: list[str] | None,
    exc: list[str] | None,
    depth: int | None,
    circular: bool,
    metrics: bool,
    diagram: bool,
    focus: str | None,
    external: bool,
) -> DependencyAnalysisParams:
    """Translates the tool's short argument names into analysis parameters."""
    return DependencyAnalysisParams(
        project_path=path,
        include_globs=inc,
        exclude_globs=exc,
        depth=depth,
        detect_circular=circular,
        calculate_metrics=metrics,
        generate_diagram=diagram,
        focus_module=focus or None,
        include_external=external,
    )


@mcp.tool()
def deps(
    path: str | None = None,
    inc: list[str] | None = None,
    exc: list[str] | None = None,
    depth: int | None = None,
    circular: bool = True,
    metrics: bool = True,
    diagram: bool = False,
    focus: str | None = None,
    external: bool = False,
) -> str:
    """
    Dependency graph, circular deps, coupling metrics.

    Args:
        path: Project root (default: detected project root)
        inc: Include globs
        exc: Exclude globs
        depth: Max depth around the focus module
        circular: Detect circular dependencies
        metrics: Coupling/cohesion/stability metrics
        diagram: Mermaid diagram
        focus: Focus on module (substring of its path)
        external: Count node_modules imports

    Returns:
        JSON report
    """
    try:
        params = map_params(path, inc, exc, depth, circular, metrics, diagram, focus, external)
        result = analyze_dependency_graph(params)
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    except (DependencyMapperError, ValueError) as e:
        logger.warning(f"Dependency analysis rejected: {e}")
        return f"Error: {e}"
    except Exception as e:
        logger.exception("Dependency analysis failed")
        return f"Error analyzing dependencies: {e}"


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
