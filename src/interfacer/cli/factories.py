from pathlib import Path

from interfacer.app import InterfacerApp
from interfacer.config import load_config_from_path


def get_project_root() -> Path:
    return Path.cwd()


def make_app() -> InterfacerApp:
    # Composition Root: the default collaborators are wired inside the app.
    root_path = get_project_root()
    return InterfacerApp(
        root_path=root_path,
        config=load_config_from_path(root_path),
    )
