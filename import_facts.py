"""Per-file import/export facts for JavaScript, TypeScript and Vue sources. No AST needed."""

import abc
import re
from dataclasses import dataclass, field
from pathlib import Path

from config import get_max_file_size_bytes, safe_read_text
from exceptions import ParseError

BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
LINE_COMMENT_RE = re.compile(r"^\s*//.*$", re.MULTILINE)
VUE_SCRIPT_RE = re.compile(r"<script\b[^>]*>(.*?)</script>", re.DOTALL | re.IGNORECASE)

STATIC_IMPORT_RE = re.compile(
    r"""\bimport\s+(?:type\s+)?(?P<clause>[^'";]+?)\s+from\s*['"](?P<source>[^'"]+)['"]"""
)
SIDE_EFFECT_IMPORT_RE = re.compile(r"""^\s*import\s*['"](?P<source>[^'"]+)['"]""", re.MULTILINE)
REEXPORT_RE = re.compile(
    r"""\bexport\s+(?:type\s+)?(?P<clause>\*(?:\s+as\s+[\w$]+)?|\{[^}]*\})\s*from\s*['"](?P<source>[^'"]+)['"]"""
)
DYNAMIC_IMPORT_RE = re.compile(r"""\bimport\s*\(\s*['"`](?P<source>[^'"`]+)['"`]\s*\)""")
REQUIRE_RE = re.compile(r"""\brequire\s*\(\s*['"](?P<source>[^'"]+)['"]\s*\)""")

EXPORT_DECLARATION_RE = re.compile(
    r"\bexport\s+(?:async\s+)?(?:function\s*\*?|class|const|let|var)\s+(?P<name>[A-Za-z_$][\w$]*)"
)
EXPORT_LIST_RE = re.compile(r"\bexport\s+(?:type\s+)?\{(?P<names>[^}]*)\}")
EXPORT_DEFAULT_RE = re.compile(r"\bexport\s+default\b")


@dataclass
class ImportDeclaration:
    source: str
    specifiers: list[str] = field(default_factory=list)
    kind: str = "static"  # "static" | "dynamic" | "require"


@dataclass
class ModuleFacts:
    exports: list[str] = field(default_factory=list)
    imports: list[ImportDeclaration] = field(default_factory=list)


class ImportFactsProvider(abc.ABC):
    """Source of exported names and import declarations for one file."""

    @abc.abstractmethod
    def get_facts(self, path: Path) -> ModuleFacts:
        """Raises ParseError when the file cannot be analysed."""


def _strip_comments(content: str) -> str:
    content = BLOCK_COMMENT_RE.sub("", content)
    return LINE_COMMENT_RE.sub("", content)


def _split_names(names: str) -> list[str]:
    result = []
    for raw in names.split(","):
        name = " ".join(raw.split())
        if name.startswith("type "):
            name = name[5:].strip()
        if name:
            result.append(name)
    return result


def parse_import_clause(clause: str) -> list[str]:
    """
    Turns `React, { useState, useEffect as useFx }` into
    ["React", "useState", "useEffect as useFx"].
    """
    clause = clause.strip()
    named: list[str] = []

    brace_start = clause.find("{")
    if brace_start != -1:
        brace_end = clause.find("}", brace_start)
        if brace_end == -1:
            brace_end = len(clause)
        named = _split_names(clause[brace_start + 1 : brace_end])
        clause = clause[:brace_start] + clause[brace_end + 1 :]

    leading = _split_names(clause)
    return leading + named


def _exported_name(spec: str) -> str:
    parts = spec.split(" as ")
    return parts[-1].strip()


def extract_imports(content: str) -> list[ImportDeclaration]:
    """Import declarations in source order."""
    found: list[tuple[int, ImportDeclaration]] = []

    for match in STATIC_IMPORT_RE.finditer(content):
        found.append(
            (
                match.start(),
                ImportDeclaration(match.group("source"), parse_import_clause(match.group("clause"))),
            )
        )
    for match in SIDE_EFFECT_IMPORT_RE.finditer(content):
        found.append((match.start("source"), ImportDeclaration(match.group("source"))))
    for match in REEXPORT_RE.finditer(content):
        clause = match.group("clause").strip()
        specifiers = [clause] if clause.startswith("*") else parse_import_clause(clause)
        found.append((match.start(), ImportDeclaration(match.group("source"), specifiers)))
    for match in DYNAMIC_IMPORT_RE.finditer(content):
        found.append((match.start(), ImportDeclaration(match.group("source"), kind="dynamic")))
    for match in REQUIRE_RE.finditer(content):
        found.append((match.start(), ImportDeclaration(match.group("source"), kind="require")))

    found.sort(key=lambda item: item[0])
    return [declaration for _, declaration in found]


def extract_exports(content: str) -> list[str]:
    """Exported symbol names in source order, `default` for default exports."""
    found: list[tuple[int, str]] = []

    for match in EXPORT_DECLARATION_RE.finditer(content):
        found.append((match.start(), match.group("name")))
    for match in EXPORT_LIST_RE.finditer(content):
        for offset, spec in enumerate(_split_names(match.group("names"))):
            found.append((match.start() + offset, _exported_name(spec)))
    for match in EXPORT_DEFAULT_RE.finditer(content):
        found.append((match.start(), "default"))

    found.sort(key=lambda item: item[0])

    exports: list[str] = []
    for _, name in found:
        if name not in exports:
            exports.append(name)
    return exports


class RegexImportFactsProvider(ImportFactsProvider):
    """Scans files with regular expressions; `.vue` files contribute their <script> blocks."""

    def __init__(self, max_file_size: int | None = None):
        self.max_file_size = max_file_size if max_file_size is not None else get_max_file_size_bytes()

    def _read_source(self, path: Path) -> str:
        try:
            size = path.stat().st_size
        except OSError as e:
            raise ParseError(str(path), f"cannot stat file: {e}") from e

        if size > self.max_file_size:
            raise ParseError(str(path), f"file too large ({size} bytes)")

        try:
            content = safe_read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(str(path), str(e)) from e

        if path.suffix.lower() == ".vue":
            content = "\n".join(VUE_SCRIPT_RE.findall(content))

        return _strip_comments(content)

    def get_facts(self, path: Path) -> ModuleFacts:
        content = self._read_source(path)
        return ModuleFacts(exports=extract_exports(content), imports=extract_imports(content))
