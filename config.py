import os
import sys
from pathlib import Path


def find_project_root() -> Path:
    """
    Intelligently finds the project root directory.

    Detection strategy:
    1. Check command-line argument --project-root
    2. Check environment variables (WORKSPACE_FOLDER, PROJECT_ROOT)
    3. Search upward for project markers (.git, package.json, tsconfig.json, etc.)
    4. Fall back to current working directory

    Returns:
        Path to project root directory
    """
    # Strategy 1: Check command-line arguments
    for i, arg in enumerate(sys.argv):
        if arg == "--project-root" and i + 1 < len(sys.argv):
            project_path = Path(sys.argv[i + 1]).resolve()
            if project_path.exists():
                return project_path

    # Strategy 2: Check environment variables
    for env_var in ["WORKSPACE_FOLDER", "PROJECT_ROOT", "PROJECT_PATH"]:
        if env_path := os.getenv(env_var):
            project_path = Path(env_path).resolve()
            if project_path.exists():
                return project_path

    # Strategy 3: Search upward for project markers
    current = Path.cwd().resolve()
    project_markers = [
        ".git",
        "package.json",
        "tsconfig.json",
        "jsconfig.json",
        "nuxt.config.ts",
        "vite.config.ts",
        "pyproject.toml",
    ]

    # Search up to 10 levels up
    for _ in range(10):
        for marker in project_markers:
            if (current / marker).exists():
                return current

        parent = current.parent
        if parent == current:  # Reached root
            break
        current = parent

    # Strategy 4: Fall back to cwd
    return Path.cwd().resolve()


# Auto-detect project root
PROJECT_ROOT = find_project_root()

STATE_DIR = PROJECT_ROOT / ".depmap"
LOG_FILE = STATE_DIR / "depmap.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

MAX_FILES = 5000
MAX_FILE_SIZE_MB = 2
MAX_DIAGRAM_NODES = 50

DEFAULT_INCLUDE_GLOBS: list[str] = ["**/*.{ts,tsx,js,jsx,vue}"]
DEFAULT_EXCLUDE_GLOBS: list[str] = [
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.next/**",
]

DEFAULT_IGNORED_DIRS: set[str] = {
    ".git",
    "node_modules",
    ".depmap",
    ".next",
    ".nuxt",
    ".output",
    ".svelte-kit",
    "venv",
    ".venv",
    "__pycache__",
    ".idea",
    ".vscode",
    "dist",
    "build",
    "coverage",
    ".cache",
    ".turbo",
}

# Probed in order when an import specifier has no usable extension
RESOLVE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".vue", ".mjs", ".cjs")

TEMPLATE_FRAMEWORK_PACKAGES: set[str] = {"vue", "nuxt", "nuxt3"}

# Hotspot thresholds
HUB_MIN_IN_DEGREE = 5
BOTTLENECK_MIN_OUT_DEGREE = 10

# Recommendation thresholds
HIGH_COUPLING = 10
MODERATE_COUPLING = 5
LOW_STABILITY = 0.3
MAX_RECOMMENDED_DEPENDENCIES = 15


def _env_int(name: str, default: int) -> int:
    env_value = os.getenv(name)
    if env_value:
        try:
            return int(env_value)
        except ValueError:
            pass
    return default


def get_max_files() -> int:
    """
    Get maximum number of files analysed per call.
    Can be overridden via DEPMAP_MAX_FILES environment variable.
    """
    return _env_int("DEPMAP_MAX_FILES", MAX_FILES)


def get_max_file_size_bytes() -> int:
    return _env_int("DEPMAP_MAX_FILE_SIZE_MB", MAX_FILE_SIZE_MB) * 1024 * 1024


def is_dir_ignored(name: str) -> bool:
    return name in DEFAULT_IGNORED_DIRS or name.endswith(".egg-info")


def resolve_project_path(path: str | None) -> Path:
    """
    Resolves the project path passed to an analysis call.

    Args:
        path: Project directory. None, "" and "." refer to PROJECT_ROOT;
              relative paths are resolved against PROJECT_ROOT.

    Returns:
        Resolved Path object

    Raises:
        ValueError: If path does not exist or is not a directory
    """
    if path is None or path in ("", "."):
        return PROJECT_ROOT

    if not isinstance(path, str):
        raise ValueError("Path must be a string")

    try:
        if Path(path).is_absolute():
            target_path = Path(path).resolve()
        else:
            target_path = (PROJECT_ROOT / path).resolve()
    except (OSError, RuntimeError) as e:
        raise ValueError(f"Invalid path '{path}': {e}") from e

    if not target_path.exists():
        raise ValueError(f"Path '{path}' does not exist")
    if not target_path.is_dir():
        raise ValueError(f"Path '{path}' is not a directory")

    return target_path


def safe_read_text(file_path: Path) -> str:
    """
    Safely reads text file with automatic encoding detection.
    Tries multiple encodings instead of ignoring errors.

    Args:
        file_path: Path to the file to read

    Returns:
        File content as string

    Raises:
        UnicodeDecodeError: If file cannot be decoded with any supported encoding
        OSError: If file cannot be read
    """
    encodings = ["utf-8", "utf-8-sig", "latin-1", "cp1252"]

    for encoding in encodings:
        try:
            return file_path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
        except Exception as e:
            raise OSError(f"Error reading file {file_path}: {e}") from e

    raise UnicodeDecodeError(
        "multi-encoding",
        b"",
        0,
        1,
        f"Cannot decode {file_path} with any supported encoding: {encodings}",
    )
