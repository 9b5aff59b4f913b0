import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from .pointer import SemanticPointer

log = logging.getLogger(__name__)

DEFAULT_LANG = "en"
LANG_ENV_VAR = "INTERFACER_LANG"

_PACKAGED_CATALOGS = (
    Path(__file__).resolve().parent.parent / "common" / "assets" / "needle"
)
_PROJECT_OVERRIDES = Path(".interfacer") / "needle"


def _find_project_root(start_dir: Path) -> Path:
    current_dir = start_dir.resolve()
    while current_dir.parent != current_dir:
        if (current_dir / "pyproject.toml").is_file():
            return current_dir
        if (current_dir / ".git").is_dir():
            return current_dir
        current_dir = current_dir.parent
    return start_dir


def _read_catalogs(directory: Path) -> Dict[str, str]:
    """Merges the flat JSON catalogs of one language, in file name order."""
    templates: Dict[str, str] = {}
    if not directory.is_dir():
        return templates

    for path in sorted(directory.glob("*.json")):
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning(f"Skipping unreadable message catalog {path}: {e}")
            continue
        templates.update((key, str(value)) for key, value in data.items())
    return templates


class Needle:
    """
    Resolves semantic pointers to message templates.

    Templates come from the packaged catalogs, overridden per key by
    `.interfacer/needle/<lang>/*.json` in the project root.
    """

    def __init__(
        self,
        catalog_dir: Optional[Path] = None,
        project_root: Optional[Path] = None,
    ):
        self.catalog_dir = catalog_dir or _PACKAGED_CATALOGS
        self.project_root = project_root
        self._registry: Dict[str, Dict[str, str]] = {}

    def _templates(self, lang: str) -> Dict[str, str]:
        if lang not in self._registry:
            project_root = self.project_root or _find_project_root(Path.cwd())
            templates = _read_catalogs(self.catalog_dir / lang)
            templates.update(_read_catalogs(project_root / _PROJECT_OVERRIDES / lang))
            self._registry[lang] = templates
        return self._registry[lang]

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        """
        Lookup order: target language, then the default language, then the
        key itself.
        """
        key = str(pointer)
        target_lang = lang or os.getenv(LANG_ENV_VAR, DEFAULT_LANG)

        for candidate in dict.fromkeys((target_lang, DEFAULT_LANG)):
            template = self._templates(candidate).get(key)
            if template is not None:
                return template
        return key


needle = Needle()
