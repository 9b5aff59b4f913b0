from .pointer import L, SemanticPointer
from .runtime import Needle, needle

__all__ = ["L", "SemanticPointer", "Needle", "needle"]
