"""Tests for regex-based import/export extraction."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from exceptions import ParseError
from import_facts import (
    RegexImportFactsProvider,
    extract_exports,
    extract_imports,
    parse_import_clause,
)

SAMPLE = """
import React, { useState, useEffect as useFx } from "react";
import * as utils from './utils';
import './styles.css';
export { helper } from './helper';
const Lazy = () => import('./Lazy');
const legacy = require('../legacy');

export const answer = 42;
export function compute() {}
export default class App {}
"""


class TestParseImportClause:
    def test_default_and_named(self):
        assert parse_import_clause("React, { useState, useEffect as useFx }") == [
            "React",
            "useState",
            "useEffect as useFx",
        ]

    def test_namespace(self):
        assert parse_import_clause("* as utils") == ["* as utils"]

    def test_multiline_named_with_types(self):
        clause = "{\n  type Props,\n  render,\n}"
        assert parse_import_clause(clause) == ["Props", "render"]


class TestExtractImports:
    def test_source_order_and_kinds(self):
        imports = extract_imports(SAMPLE)

        assert [(i.source, i.kind) for i in imports] == [
            ("react", "static"),
            ("./utils", "static"),
            ("./styles.css", "static"),
            ("./helper", "static"),
            ("./Lazy", "dynamic"),
            ("../legacy", "require"),
        ]

    def test_specifiers(self):
        imports = extract_imports(SAMPLE)

        assert imports[0].specifiers == ["React", "useState", "useEffect as useFx"]
        assert imports[1].specifiers == ["* as utils"]
        assert imports[2].specifiers == []
        assert imports[3].specifiers == ["helper"]

    def test_type_only_import(self):
        imports = extract_imports("import type { User } from './types';")
        assert [(i.source, i.specifiers) for i in imports] == [("./types", ["User"])]

    def test_export_star_from(self):
        imports = extract_imports("export * from './all';\nexport * as ns from './ns';")
        assert [(i.source, i.specifiers) for i in imports] == [
            ("./all", ["*"]),
            ("./ns", ["* as ns"]),
        ]

    def test_identifiers_containing_import_are_ignored(self):
        assert extract_imports("const important = reimport(x);") == []


class TestExtractExports:
    def test_exports_in_order(self):
        assert extract_exports(SAMPLE) == ["helper", "answer", "compute", "default"]

    def test_export_list_with_alias(self):
        assert extract_exports("const a = 1, b = 2;\nexport { a, b as beta };") == ["a", "beta"]

    def test_async_function_and_duplicates(self):
        content = "export async function load() {}\nexport { load };"
        assert extract_exports(content) == ["load"]


class TestRegexImportFactsProvider:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text(SAMPLE, encoding="utf-8")

        facts = RegexImportFactsProvider().get_facts(path)

        assert facts.exports == ["helper", "answer", "compute", "default"]
        assert len(facts.imports) == 6

    def test_commented_imports_are_ignored(self, tmp_path):
        path = tmp_path / "a.ts"
        path.write_text(
            "// import { old } from './old';\n/* import x from './x'; */\nimport { b } from './b';\n",
            encoding="utf-8",
        )

        facts = RegexImportFactsProvider().get_facts(path)

        assert [i.source for i in facts.imports] == ["./b"]

    def test_vue_uses_script_blocks_only(self, tmp_path):
        path = tmp_path / "Counter.vue"
        path.write_text(
            "<template>\n  <p>import fake from './fake'</p>\n</template>\n"
            "<script setup lang=\"ts\">\nimport { useCounter } from './useCounter';\n</script>\n",
            encoding="utf-8",
        )

        facts = RegexImportFactsProvider().get_facts(path)

        assert [i.source for i in facts.imports] == ["./useCounter"]

    def test_missing_file_raises_parse_error(self, tmp_path):
        with pytest.raises(ParseError):
            RegexImportFactsProvider().get_facts(tmp_path / "missing.ts")

    def test_oversized_file_raises_parse_error(self, tmp_path):
        path = tmp_path / "big.ts"
        path.write_text("x" * 100, encoding="utf-8")

        with pytest.raises(ParseError) as exc_info:
            RegexImportFactsProvider(max_file_size=10).get_facts(path)

        assert "too large" in str(exc_info.value)
