"""Rule-based advice derived from cycles, metrics and hotspots."""

from config import HIGH_COUPLING, LOW_STABILITY, MAX_RECOMMENDED_DEPENDENCIES, MODERATE_COUPLING
from graph_models import (
    CircularDependency,
    CycleSeverity,
    DependencyHotspot,
    DependencyMetrics,
    HotspotType,
)

HEALTHY_MESSAGE = "Dependency structure looks healthy. Keep modules small and focused."


def generate_recommendations(
    circular_dependencies: list[CircularDependency],
    metrics: DependencyMetrics,
    hotspots: list[DependencyHotspot],
) -> list[str]:
    recommendations: list[str] = []

    critical = sum(1 for c in circular_dependencies if c.severity == CycleSeverity.CRITICAL)
    warnings = len(circular_dependencies) - critical
    if critical:
        recommendations.append(
            f"Break {critical} critical circular dependencies (3 modules or fewer) first: "
            "extract shared code into a separate module or invert the dependency."
        )
    if warnings:
        recommendations.append(
            f"Review {warnings} longer circular dependency chains; introduce interfaces "
            "or events to decouple the modules involved."
        )

    if metrics.coupling > HIGH_COUPLING:
        recommendations.append(
            f"High coupling ({metrics.coupling:.2f} connections per module). Split large "
            "modules and depend on narrow interfaces."
        )
    elif metrics.coupling > MODERATE_COUPLING:
        recommendations.append(
            f"Moderate coupling ({metrics.coupling:.2f} connections per module). Watch "
            "modules that keep gaining imports."
        )

    god_objects = sum(1 for h in hotspots if h.type == HotspotType.GOD_OBJECT)
    hubs = sum(1 for h in hotspots if h.type == HotspotType.HUB)
    if god_objects:
        recommendations.append(
            f"Refactor {god_objects} god-object modules that are both widely imported and "
            "heavily dependent; split them by responsibility."
        )
    if hubs:
        recommendations.append(
            f"{hubs} hub modules are imported widely. Keep their APIs stable and well "
            "tested, since changes ripple to every importer."
        )

    if metrics.total_modules > 0 and metrics.stability < LOW_STABILITY:
        recommendations.append(
            f"Low stability score ({metrics.stability:.2f}): most modules are depended "
            "upon more than they depend on others. Prefer abstractions at the core."
        )

    if metrics.max_dependencies > MAX_RECOMMENDED_DEPENDENCIES:
        recommendations.append(
            f"A module imports {metrics.max_dependencies} others. Consider splitting it "
            "or introducing a facade."
        )

    if not recommendations:
        recommendations.append(HEALTHY_MESSAGE)

    return recommendations
