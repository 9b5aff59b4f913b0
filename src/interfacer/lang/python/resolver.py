from pathlib import Path
from typing import Optional

from interfacer.spec import (
    AmbiguousModuleError,
    ModuleLoaderProtocol,
    ModuleNotFoundAtPathError,
    ResolvedModule,
)
from .loader import FilesystemModuleLoader

_RELATIVE_PREFIXES = ("./", "../")


def is_relative_reference(path: str) -> bool:
    return path.replace("\\", "/").startswith(_RELATIVE_PREFIXES)


class ModulePathResolver:
    def __init__(
        self,
        root_path: Path,
        loader: Optional[ModuleLoaderProtocol] = None,
    ):
        self.root_path = root_path
        self.loader = loader or FilesystemModuleLoader()

    def resolve(self, path: str) -> ResolvedModule:
        normalized = path.replace("\\", "/")
        if not is_relative_reference(normalized):
            return ResolvedModule(name=normalized)

        candidates = self.loader.load(self.root_path / normalized)
        if not candidates:
            raise ModuleNotFoundAtPathError(path)
        if len(candidates) > 1:
            raise AmbiguousModuleError(path, sorted(c.name for c in candidates))

        found = candidates[0]
        return ResolvedModule(name=found.name, search_path=found.search_path)
