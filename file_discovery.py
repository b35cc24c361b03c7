"""Source file discovery with include/exclude glob patterns."""

import fnmatch
import os
import re
from pathlib import Path

from config import DEFAULT_EXCLUDE_GLOBS, DEFAULT_INCLUDE_GLOBS, get_max_files, is_dir_ignored
from exceptions import DiscoveryError
from logger import get_logger

logger = get_logger()

BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """`**/*.{ts,vue}` -> [`**/*.ts`, `**/*.vue`]. Nested braces are not supported."""
    match = BRACE_RE.search(pattern)
    if not match:
        return [pattern]

    expanded = []
    head, tail = pattern[: match.start()], pattern[match.end() :]
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def compile_globs(patterns: list[str]) -> list[str]:
    """
    Expands braces and adds a variant where each `**/` matches zero directories,
    so `**/*.ts` also matches `index.ts` at the root.
    """
    compiled: list[str] = []
    for pattern in patterns:
        pattern = pattern.replace("\\", "/").removeprefix("./")
        for variant in expand_braces(pattern):
            for candidate in (variant, variant.replace("**/", "")):
                if candidate and candidate not in compiled:
                    compiled.append(candidate)
    return compiled


def matches_any(rel_path: str, compiled_patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(rel_path, pattern) for pattern in compiled_patterns)


class FileDiscovery:
    """Walks a project tree and returns the files selected by glob patterns."""

    def discover(
        self,
        root: Path,
        include_globs: list[str] | None = None,
        exclude_globs: list[str] | None = None,
        max_files: int | None = None,
    ) -> list[Path]:
        """
        Args:
            root: Project root directory
            include_globs: Patterns relative to root (default: JS/TS/Vue sources)
            exclude_globs: Patterns removing files from the selection
            max_files: Upper bound on returned files (default: DEPMAP_MAX_FILES)

        Returns:
            Sorted absolute paths

        Raises:
            DiscoveryError: If root is not a readable directory
        """
        if not root.is_dir():
            raise DiscoveryError(f"Project root is not a directory: {root}")

        includes = compile_globs(include_globs or DEFAULT_INCLUDE_GLOBS)
        excludes = compile_globs(
            DEFAULT_EXCLUDE_GLOBS if exclude_globs is None else exclude_globs
        )
        limit = max_files if max_files is not None else get_max_files()

        def on_error(error: OSError) -> None:
            if Path(error.filename or "") == root:
                raise DiscoveryError(f"Cannot read project root {root}: {error}") from error
            logger.debug(f"Skipping unreadable directory: {error}")

        results: list[Path] = []
        for dirpath, dirs, files in os.walk(root, onerror=on_error):
            dirs[:] = sorted(d for d in dirs if not is_dir_ignored(d) and not d.startswith("."))
            for fname in sorted(files):
                fpath = Path(dirpath) / fname
                rel_path = fpath.relative_to(root).as_posix()
                if not matches_any(rel_path, includes) or matches_any(rel_path, excludes):
                    continue
                results.append(fpath)

        results.sort()
        if len(results) > limit:
            logger.warning(
                "File limit reached, truncating discovery",
                extra={"discovered": len(results), "limit": limit},
            )
            results = results[:limit]

        logger.debug("Discovery complete", extra={"root": str(root), "files": len(results)})
        return results
