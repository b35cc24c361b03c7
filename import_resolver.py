"""Maps import specifiers to in-project files."""

import os
from collections.abc import Iterable
from pathlib import Path

from config import RESOLVE_EXTENSIONS


def is_relative_specifier(source: str) -> bool:
    return source.startswith(".")


def is_local_specifier(source: str) -> bool:
    """Relative (./, ../) or absolute (/) specifiers; anything else is a package."""
    return source.startswith(".") or source.startswith("/")


def _normalize(path: Path | str) -> Path:
    return Path(os.path.normpath(os.path.abspath(path)))


class ImportResolver:
    """
    Heuristic resolver: probes the specifier as given, then with each of
    RESOLVE_EXTENSIONS, then as a directory holding index.<ext>.

    Candidates are checked against `known_files` when supplied (the set of
    discovered project files) and against the filesystem otherwise. Bundler
    aliases and package exports maps are not understood.
    """

    def __init__(
        self,
        root: Path,
        known_files: Iterable[Path] | None = None,
        extensions: tuple[str, ...] = RESOLVE_EXTENSIONS,
    ):
        self.root = _normalize(root)
        self.extensions = extensions
        self._known: set[Path] | None = (
            {_normalize(p) for p in known_files} if known_files is not None else None
        )

    def _exists(self, candidate: Path) -> bool:
        if not candidate.is_relative_to(self.root):
            return False
        if self._known is not None:
            return candidate in self._known
        return candidate.is_file()

    def _base_path(self, importing_file: Path, source: str) -> Path:
        if source.startswith("/"):
            as_given = _normalize(source)
            if as_given.is_relative_to(self.root):
                return as_given
            return _normalize(self.root / source.lstrip("/"))
        return _normalize(_normalize(importing_file).parent / source)

    def resolve(self, importing_file: Path, source: str) -> Path | None:
        """
        Args:
            importing_file: Absolute path of the file containing the import
            source: Import specifier as written

        Returns:
            Absolute path of the target file, or None for external or
            unresolvable specifiers
        """
        if not source or not is_local_specifier(source):
            return None

        base = self._base_path(importing_file, source)

        if base.suffix in self.extensions and self._exists(base):
            return base

        if not base.name:
            return None

        for ext in self.extensions:
            candidate = base.with_name(base.name + ext)
            if self._exists(candidate):
                return candidate

        for ext in self.extensions:
            candidate = base / f"index{ext}"
            if self._exists(candidate):
                return candidate

        return None
