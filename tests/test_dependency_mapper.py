"""End-to-end tests for dependency analysis."""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from context import AppContext, reset_context
from dependency_mapper import DependencyAnalysisParams, analyze_dependency_graph
from exceptions import DiscoveryError, ValidationError
from file_discovery import FileDiscovery
from graph_models import CycleSeverity, HotspotType
from import_facts import RegexImportFactsProvider
from logger import current_analysis_id


@pytest.fixture(autouse=True)
def clean_context():
    """Reset context before and after each test."""
    reset_context()
    yield
    reset_context()


def write_files(root: Path, files: dict[str, str]) -> None:
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def cycle_project(tmp_path):
    write_files(
        tmp_path,
        {
            "A.ts": "import { b } from './B';\nexport const a = 1;\n",
            "B.ts": "import { c } from './C';\nexport const b = 1;\n",
            "C.ts": "import { a } from './A';\nexport const c = 1;\n",
        },
    )
    return tmp_path


@pytest.fixture
def hub_project(tmp_path):
    files = {"U.ts": "export function util() {}\n"}
    for i in range(10):
        files[f"F{i}.ts"] = "import { util } from './U';\n"
    write_files(tmp_path, files)
    return tmp_path


class TestEndToEnd:
    def test_three_file_cycle(self, cycle_project):
        result = analyze_dependency_graph(DependencyAnalysisParams(project_path=str(cycle_project)))

        assert len(result.circular_dependencies) == 1
        circular = result.circular_dependencies[0]
        assert circular.severity == CycleSeverity.CRITICAL
        assert set(circular.cycle) == {"A.ts", "B.ts", "C.ts"}
        assert result.metrics.coupling == pytest.approx(2.0)
        assert result.metrics.avg_dependencies == pytest.approx(1.0)
        assert result.hotspots == []
        assert result.summary.circular_count == 1
        assert "critical" in result.recommendations[0]

    def test_shared_utility_is_hub(self, hub_project):
        result = analyze_dependency_graph(DependencyAnalysisParams(project_path=str(hub_project)))

        assert result.circular_dependencies == []
        assert [(h.file, h.type) for h in result.hotspots] == [("U.ts", HotspotType.HUB)]
        assert result.hotspots[0].in_degree == 10

    def test_empty_project(self, tmp_path):
        result = analyze_dependency_graph(DependencyAnalysisParams(project_path=str(tmp_path)))

        assert result.graph.nodes == []
        assert result.metrics.to_dict() == {
            "totalModules": 0,
            "avgDependencies": 0,
            "maxDependencies": 0,
            "coupling": 0,
            "cohesion": 0,
            "stability": 0,
        }
        assert len(result.recommendations) == 1

    def test_wire_format(self, cycle_project):
        data = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(cycle_project))
        ).to_dict()

        assert set(data) == {
            "project",
            "graph",
            "circularDependencies",
            "metrics",
            "hotspots",
            "recommendations",
            "summary",
        }
        assert data["project"] == {"name": cycle_project.name, "totalFiles": 3}
        assert data["graph"]["edges"][0] == {
            "from": "A.ts",
            "to": "B.ts",
            "type": "import",
            "imports": ["b"],
        }
        assert data["graph"]["nodes"][0]["metrics"] == {
            "inDegree": 1,
            "outDegree": 1,
            "centrality": pytest.approx(2 / 3),
        }
        assert data["circularDependencies"][0]["severity"] == "critical"


class TestToggles:
    def test_circular_detection_disabled(self, cycle_project):
        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(cycle_project), detect_circular=False)
        )

        assert result.circular_dependencies == []
        assert result.summary.circular_count == 0

    def test_metrics_disabled(self, cycle_project):
        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(cycle_project), calculate_metrics=False)
        )

        assert result.metrics.total_modules == 0
        assert len(result.graph.nodes) == 3

    def test_diagram_requested(self, cycle_project):
        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(cycle_project), generate_diagram=True)
        )
        data = result.to_dict()

        assert data["diagram"].startswith("graph LR")
        assert "-->|cycle 1|" in data["cycleDiagram"]

    def test_focus_module_with_depth(self, tmp_path):
        write_files(
            tmp_path,
            {
                "app.ts": "import { page } from './page';\n",
                "page.ts": "import { widget } from './widget';\n",
                "widget.ts": "import { leaf } from './leaf';\n",
                "leaf.ts": "export const leaf = 1;\n",
                "other.ts": "export const other = 1;\n",
            },
        )

        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(tmp_path), focus_module="page", depth=1)
        )

        assert [n.id for n in result.graph.nodes] == ["app.ts", "page.ts", "widget.ts"]
        assert result.total_files == 5

    def test_focused_centrality_uses_subgraph_size(self, tmp_path):
        files = {"a.ts": "import { b } from './b';\n", "b.ts": "export const b = 1;\n"}
        for i in range(8):
            files[f"other{i}.ts"] = "export const x = 1;\n"
        write_files(tmp_path, files)

        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(tmp_path), focus_module="a.ts")
        )

        assert result.total_files == 10
        assert [n.id for n in result.graph.nodes] == ["a.ts", "b.ts"]
        for node in result.graph.nodes:
            expected = node.metrics.total_degree / len(result.graph.nodes)
            assert node.metrics.centrality == pytest.approx(expected)
            assert node.metrics.centrality == pytest.approx(0.5)

    def test_unknown_focus_uses_full_graph(self, cycle_project):
        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(cycle_project), focus_module="nope")
        )
        assert len(result.graph.nodes) == 3

    def test_external_imports_are_counted(self, tmp_path):
        write_files(tmp_path, {"a.ts": "import React from 'react';\n"})

        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(tmp_path), include_external=True)
        )

        assert result.graph.edges == []
        assert result.summary.external_imports == 1


class TestValidation:
    def test_negative_depth(self, tmp_path):
        with pytest.raises(ValidationError):
            analyze_dependency_graph(DependencyAnalysisParams(project_path=str(tmp_path), depth=-1))

    def test_globs_must_be_lists(self, tmp_path):
        with pytest.raises(ValidationError):
            analyze_dependency_graph(
                DependencyAnalysisParams(project_path=str(tmp_path), include_globs="**/*.ts")
            )

    def test_missing_project(self, tmp_path):
        with pytest.raises(ValidationError):
            analyze_dependency_graph(DependencyAnalysisParams(project_path=str(tmp_path / "nope")))


class TestInjectedContext:
    def test_uses_given_collaborators(self, tmp_path):
        discovery = MagicMock(spec=FileDiscovery)
        discovery.discover.return_value = []
        ctx = AppContext(discovery=discovery, facts_provider=RegexImportFactsProvider())

        result = analyze_dependency_graph(
            DependencyAnalysisParams(project_path=str(tmp_path), include_globs=["src/**"]), ctx
        )

        discovery.discover.assert_called_once_with(tmp_path.resolve(), ["src/**"], None)
        assert result.total_files == 0

    def test_run_is_tagged_with_analysis_id(self, tmp_path):
        seen = []

        def discover(*args):
            seen.append(current_analysis_id())
            return []

        discovery = MagicMock(spec=FileDiscovery)
        discovery.discover.side_effect = discover
        ctx = AppContext(discovery=discovery, facts_provider=RegexImportFactsProvider())

        analyze_dependency_graph(DependencyAnalysisParams(project_path=str(tmp_path)), ctx)

        assert seen[0] is not None
        assert current_analysis_id() is None

    def test_analysis_id_cleared_after_failure(self, tmp_path):
        discovery = MagicMock(spec=FileDiscovery)
        discovery.discover.side_effect = DiscoveryError("unreadable")
        ctx = AppContext(discovery=discovery, facts_provider=RegexImportFactsProvider())

        with pytest.raises(DiscoveryError):
            analyze_dependency_graph(DependencyAnalysisParams(project_path=str(tmp_path)), ctx)

        assert current_analysis_id() is None
