from pathlib import Path
from textwrap import dedent
from typing import Any, Dict


class WorkspaceFactory:
    """Builds a throwaway source tree, optionally with a pyproject.toml."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._sources: Dict[str, str] = {}
        self._interfacer_config: Dict[str, Any] = {}

    def with_config(self, interfacer_config: Dict[str, Any]) -> "WorkspaceFactory":
        self._interfacer_config = interfacer_config
        return self

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._sources[path] = dedent(content)
        return self

    def with_package(self, path: str) -> "WorkspaceFactory":
        """Marks every directory along 'path' as a regular package."""
        parts = Path(path).parts
        for i in range(1, len(parts) + 1):
            init_path = (Path(*parts[:i]) / "__init__.py").as_posix()
            self._sources.setdefault(init_path, "")
        return self

    def build(self) -> Path:
        for rel_path, content in self._sources.items():
            output_path = self.root_path / rel_path
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")

        if self._interfacer_config:
            # tomli_w is only installed with the test extra.
            import tomli_w

            pyproject = {"tool": {"interfacer": self._interfacer_config}}
            with (self.root_path / "pyproject.toml").open("wb") as f:
                tomli_w.dump(pyproject, f)

        return self.root_path
