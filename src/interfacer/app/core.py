from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, Sequence

from interfacer.common import bus
from interfacer.config import InterfacerConfig
from interfacer.needle import L
from interfacer.spec import (
    GenerateOptions,
    InterfaceExtractorProtocol,
    ModuleLoaderProtocol,
    RendererProtocol,
    ResolvedModule,
)
from interfacer.lang.python import (
    GriffeInterfaceExtractor,
    ModulePathResolver,
    build_query,
)
from .model import build_render_model
from .renderer import InterfaceRenderer
from .writer import STDOUT_SENTINEL, write_output

ExtractorFactory = Callable[[Sequence[Path]], InterfaceExtractorProtocol]


class InterfacerApp:
    def __init__(
        self,
        root_path: Path,
        loader: Optional[ModuleLoaderProtocol] = None,
        extractor_factory: Optional[ExtractorFactory] = None,
        renderer: Optional[RendererProtocol] = None,
        config: Optional[InterfacerConfig] = None,
        stdout: Optional[BinaryIO] = None,
    ):
        self.root_path = root_path
        self.resolver = ModulePathResolver(root_path, loader)
        self.extractor_factory: ExtractorFactory = (
            extractor_factory or GriffeInterfaceExtractor
        )
        self.renderer = renderer or InterfaceRenderer()
        self.config = config or InterfacerConfig()
        self.stdout = stdout

    def _search_paths_for(self, resolved: ResolvedModule) -> List[Path]:
        # Resolved import root first, then configured roots, then the project.
        paths: List[Path] = []
        if resolved.search_path is not None:
            paths.append(resolved.search_path)
        paths.extend(Path(p) for p in self.config.search_paths)
        paths.append(self.root_path)
        return paths

    def generate(self, options: GenerateOptions) -> bytes:
        options.validate()

        resolved = self.resolver.resolve(options.for_path)
        bus.debug(L.generate.resolve.done, path=options.for_path, module=resolved.name)

        query = build_query(resolved.name, options.type_name)

        extractor = self.extractor_factory(self._search_paths_for(resolved))
        extraction = extractor.extract(query, options.include_private)
        bus.debug(
            L.generate.extract.done,
            fqn=query.fqn,
            methods=len(extraction.methods),
            deps=len(extraction.dependencies),
        )

        model = build_render_model(query, extraction, options.as_value)
        payload = self.renderer.render(model)
        bus.debug(L.generate.render.done, name=model.interface_name, size=len(payload))
        return payload

    def run_generate(self, options: GenerateOptions) -> bytes:
        payload = self.generate(options)
        write_output(options.output, payload, stdout=self.stdout)
        if options.output != STDOUT_SENTINEL:
            bus.success(L.generate.file.success, path=options.output)
        return payload
