from .core import InterfacerApp
from .model import build_render_model, split_as_value
from .renderer import InterfaceRenderer, GENERATED_MARKER
from .writer import write_output, STDOUT_SENTINEL

__all__ = [
    "InterfacerApp",
    "build_render_model",
    "split_as_value",
    "InterfaceRenderer",
    "GENERATED_MARKER",
    "write_output",
    "STDOUT_SENTINEL",
]
