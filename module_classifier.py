"""Structural role classification of modules by path conventions."""

import json
from pathlib import Path, PurePosixPath

from config import TEMPLATE_FRAMEWORK_PACKAGES
from graph_models import ModuleType
from logger import get_logger

logger = get_logger()

# First match wins
DIRECTORY_CONVENTIONS: list[tuple[ModuleType, set[str]]] = [
    (ModuleType.COMPONENT, {"components"}),
    (ModuleType.HOOK, {"hooks"}),
    (ModuleType.COMPOSABLE, {"composables"}),
    (ModuleType.STORE, {"stores", "store"}),
    (ModuleType.SERVICE, {"services", "api"}),
    (ModuleType.PROVIDER, {"providers"}),
]


def classify_module(path: str, template_framework: bool = False) -> ModuleType:
    """
    Labels a module by its structural role.

    Args:
        path: Project-relative path of the module
        template_framework: True when the project uses a template-based
            framework (Vue/Nuxt), which turns `use*` files into composables

    Returns:
        The module's role
    """
    pure = PurePosixPath(path.replace("\\", "/"))
    directories = {part.lower() for part in pure.parts[:-1]}

    for module_type, names in DIRECTORY_CONVENTIONS:
        if directories & names:
            return module_type

    if pure.name.startswith("use"):
        if template_framework or pure.suffix == ".vue":
            return ModuleType.COMPOSABLE
        return ModuleType.HOOK

    return ModuleType.UTILITY


def detect_template_framework(root: Path) -> bool:
    """Checks package.json for a Vue or Nuxt dependency."""
    package_json = root / "package.json"
    if not package_json.is_file():
        return False

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {package_json}: {e}")
        return False

    if not isinstance(data, dict):
        return False

    for section in ("dependencies", "devDependencies", "peerDependencies"):
        deps = data.get(section)
        if isinstance(deps, dict) and TEMPLATE_FRAMEWORK_PACKAGES & set(deps):
            return True
    return False
