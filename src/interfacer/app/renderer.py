from typing import List, Optional

from interfacer.spec import CanonicalizerProtocol, RenderModel
from interfacer.lang.python import LibCSTCanonicalizer

GENERATED_MARKER = "# Code generated by interfacer; DO NOT EDIT."


class InterfaceRenderer:
    """
    Assembles the protocol module as plain text and hands it to the
    canonicalizer, which is where syntax errors surface.
    """

    def __init__(
        self,
        canonicalizer: Optional[CanonicalizerProtocol] = None,
        indent_spaces: int = 4,
    ):
        self.canonicalizer = canonicalizer or LibCSTCanonicalizer()
        self._indent_str = " " * indent_spaces

    def assemble(self, model: RenderModel) -> str:
        lines: List[str] = [GENERATED_MARKER]
        if model.package_name:
            lines.append(f"# package: {model.package_name}")
        lines.append("")

        lines.append("from __future__ import annotations")
        lines.append("")
        lines.append("from typing import Protocol")
        lines.append("")

        if model.dependencies:
            for dep in model.dependencies:
                lines.append(f"import {dep}")
            lines.append("")

        lines.append("")
        lines.append(f"class {model.interface_name}(Protocol):")
        lines.append(
            f'{self._indent_str}"""{model.interface_name} is an interface '
            f'generated for {model.source_type}."""'
        )

        for method in model.methods:
            lines.append("")
            for line in method.splitlines():
                lines.append(f"{self._indent_str}{line}")

        return "\n".join(lines) + "\n"

    def render(self, model: RenderModel) -> bytes:
        return self.canonicalizer.format(self.assemble(model).encode("utf-8"))
