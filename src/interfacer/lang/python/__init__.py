"""Python language support for interfacer."""

from .canonical import LibCSTCanonicalizer
from .extractor import GriffeInterfaceExtractor
from .loader import FilesystemModuleLoader
from .query import build_query, parse_query
from .resolver import ModulePathResolver, is_relative_reference
from .signature import SignatureFormatter

__all__ = [
    "LibCSTCanonicalizer",
    "GriffeInterfaceExtractor",
    "FilesystemModuleLoader",
    "build_query",
    "parse_query",
    "ModulePathResolver",
    "is_relative_reference",
    "SignatureFormatter",
]
