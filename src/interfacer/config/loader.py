import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

log = logging.getLogger(__name__)


@dataclass
class InterfacerConfig:
    # Extra import roots handed to the extractor, absolute after loading.
    search_paths: List[str] = field(default_factory=list)


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while current_dir.parent != current_dir:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def load_config_from_path(search_path: Path) -> InterfacerConfig:
    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        return InterfacerConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.warning(f"Ignoring unreadable config {config_path}: {e}")
        return InterfacerConfig()

    tool_data: Dict[str, Any] = data.get("tool", {}).get("interfacer", {})
    base_dir = config_path.parent
    search_paths = [
        str((base_dir / p).resolve()) for p in tool_data.get("search_paths", [])
    ]
    return InterfacerConfig(search_paths=search_paths)
