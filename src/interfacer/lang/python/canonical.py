from typing import List, Optional, Sequence

import libcst as cst

from interfacer.spec import RenderError

_IMPORT_GROUPS = {"future", "from", "import"}


def _group_key(stmt: cst.CSTNode) -> str:
    if isinstance(stmt, (cst.ClassDef, cst.FunctionDef)):
        return "definition"
    if isinstance(stmt, cst.SimpleStatementLine) and stmt.body:
        small = stmt.body[0]
        if isinstance(small, cst.ImportFrom):
            module = small.module
            if isinstance(module, cst.Name) and module.value == "__future__":
                return "future"
            return "from"
        if isinstance(small, cst.Import):
            return "import"
    return "other"


def _comments_only(lines: Sequence[cst.EmptyLine]) -> List[cst.EmptyLine]:
    return [line for line in lines if line.comment is not None]


def _with_blank_lines(node, count: int):
    leading = [cst.EmptyLine(indent=False) for _ in range(count)]
    return node.with_changes(
        leading_lines=leading + _comments_only(node.leading_lines)
    )


class _LayoutNormalizer(cst.CSTTransformer):
    """
    Normalises vertical spacing and indentation without reordering anything.
    """

    def leave_TrailingWhitespace(
        self,
        original_node: cst.TrailingWhitespace,
        updated_node: cst.TrailingWhitespace,
    ) -> cst.TrailingWhitespace:
        if updated_node.comment is None:
            return updated_node.with_changes(whitespace=cst.SimpleWhitespace(""))
        return updated_node

    def leave_EmptyLine(
        self, original_node: cst.EmptyLine, updated_node: cst.EmptyLine
    ) -> cst.EmptyLine:
        if updated_node.comment is None:
            return updated_node.with_changes(
                indent=False, whitespace=cst.SimpleWhitespace("")
            )
        return updated_node

    def leave_Decorator(
        self, original_node: cst.Decorator, updated_node: cst.Decorator
    ) -> cst.Decorator:
        return updated_node.with_changes(
            leading_lines=_comments_only(updated_node.leading_lines)
        )

    def leave_FunctionDef(
        self, original_node: cst.FunctionDef, updated_node: cst.FunctionDef
    ) -> cst.FunctionDef:
        return updated_node.with_changes(lines_after_decorators=())

    def leave_IndentedBlock(
        self, original_node: cst.IndentedBlock, updated_node: cst.IndentedBlock
    ) -> cst.IndentedBlock:
        return updated_node.with_changes(
            indent=None, footer=_comments_only(updated_node.footer)
        )

    def leave_ClassDef(
        self, original_node: cst.ClassDef, updated_node: cst.ClassDef
    ) -> cst.ClassDef:
        updated_node = updated_node.with_changes(lines_after_decorators=())
        block = updated_node.body
        if not isinstance(block, cst.IndentedBlock):
            return updated_node

        # Members are separated by exactly one blank line.
        body = [
            _with_blank_lines(stmt, 0 if i == 0 else 1)
            for i, stmt in enumerate(block.body)
        ]
        return updated_node.with_changes(body=block.with_changes(body=body))

    def leave_Module(
        self, original_node: cst.Module, updated_node: cst.Module
    ) -> cst.Module:
        header = _comments_only(updated_node.header)
        statements = list(updated_node.body)
        # Comments glued to the first statement belong to the file header.
        if statements and not header:
            header = _comments_only(statements[0].leading_lines)
            statements[0] = statements[0].with_changes(leading_lines=())

        body = []
        prev_key: Optional[str] = None
        for i, stmt in enumerate(statements):
            key = _group_key(stmt)
            if i == 0:
                blanks = 1 if header else 0
            elif key == "definition" or prev_key == "definition":
                blanks = 2
            elif key == prev_key and key in _IMPORT_GROUPS:
                blanks = 0
            else:
                blanks = 1
            body.append(_with_blank_lines(stmt, blanks))
            prev_key = key

        return updated_node.with_changes(
            header=header,
            body=body,
            footer=_comments_only(updated_node.footer),
            default_indent="    ",
            default_newline="\n",
            has_trailing_newline=True,
        )


class LibCSTCanonicalizer:
    """
    Validates generated source and normalises its layout.

    This is the only syntax check in the pipeline: anything the
    renderer assembled that is not valid Python is rejected here.
    """

    def format(self, source: bytes) -> bytes:
        try:
            module = cst.parse_module(source)
        except cst.ParserSyntaxError as e:
            raise RenderError(
                f"generated source is not valid Python "
                f"(line {e.raw_line}, column {e.raw_column}): {e.message}"
            ) from e

        code = module.visit(_LayoutNormalizer()).code

        # libcst accepts a few constructs the compiler rejects
        # (duplicate parameters, for instance).
        try:
            compile(code, "<interfacer>", "exec", dont_inherit=True)
        except SyntaxError as e:
            raise RenderError(
                f"generated source is not valid Python (line {e.lineno}): {e.msg}"
            ) from e

        return code.encode("utf-8")
