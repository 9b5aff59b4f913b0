from pathlib import Path
from typing import List, Tuple

from interfacer.spec import ModuleDescriptor, ResolutionError


def _package_root(directory: Path) -> Tuple[List[str], Path]:
    """
    Walks upwards while directories are regular packages.

    Returns the package name parts (outermost first) and the first
    directory that is not a package, which is the import root.
    """
    parts: List[str] = []
    current = directory
    while (current / "__init__.py").is_file():
        parts.insert(0, current.name)
        if current.parent == current:
            break
        current = current.parent
    return parts, current


class FilesystemModuleLoader:
    """
    Finds the Python module(s) living at a directory or file.

    A package directory yields the package itself, a plain directory
    yields every module directly inside it.
    """

    def load(self, working_dir: Path) -> List[ModuleDescriptor]:
        target = working_dir.resolve()
        if not target.exists():
            raise ResolutionError(f"path '{working_dir}' does not exist")

        if target.is_file():
            if target.suffix != ".py":
                raise ResolutionError(f"'{working_dir}' is not a Python source file")
            return [self._describe_file(target)]

        if (target / "__init__.py").is_file():
            parts, search_path = _package_root(target)
            return [ModuleDescriptor(name=".".join(parts), search_path=search_path)]

        return [
            self._describe_file(path)
            for path in sorted(target.glob("*.py"))
            if path.stem.isidentifier()
        ]

    def _describe_file(self, file_path: Path) -> ModuleDescriptor:
        parts, search_path = _package_root(file_path.parent)
        if file_path.name != "__init__.py":
            parts.append(file_path.stem)
        if not parts:
            raise ResolutionError(f"cannot derive a module name for '{file_path}'")
        return ModuleDescriptor(name=".".join(parts), search_path=search_path)
