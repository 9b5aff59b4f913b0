from .errors import (
    InterfacerError,
    UsageError,
    ResolutionError,
    ModuleNotFoundAtPathError,
    AmbiguousModuleError,
    QuerySyntaxError,
    ExtractionError,
    RenderError,
    OutputError,
)
from .models import (
    GenerateOptions,
    ModuleDescriptor,
    ResolvedModule,
    Query,
    ExtractionResult,
    RenderModel,
    Argument,
    ArgumentKind,
    FunctionDef,
)
from .protocols import (
    ModuleLoaderProtocol,
    InterfaceExtractorProtocol,
    CanonicalizerProtocol,
    RendererProtocol,
)

__all__ = [
    # Errors
    "InterfacerError",
    "UsageError",
    "ResolutionError",
    "ModuleNotFoundAtPathError",
    "AmbiguousModuleError",
    "QuerySyntaxError",
    "ExtractionError",
    "RenderError",
    "OutputError",
    # Pipeline values
    "GenerateOptions",
    "ModuleDescriptor",
    "ResolvedModule",
    "Query",
    "ExtractionResult",
    "RenderModel",
    # Signature IR
    "Argument",
    "ArgumentKind",
    "FunctionDef",
    # Collaborators
    "ModuleLoaderProtocol",
    "InterfaceExtractorProtocol",
    "CanonicalizerProtocol",
    "RendererProtocol",
]
