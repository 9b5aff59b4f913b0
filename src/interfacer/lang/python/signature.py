from typing import List

from interfacer.spec import Argument, ArgumentKind, FunctionDef


class SignatureFormatter:
    """Renders a FunctionDef as a one-line protocol member (plus decorators)."""

    def format_args(self, args: List[Argument]) -> str:
        parts = []

        has_pos_only = any(a.kind == ArgumentKind.POSITIONAL_ONLY for a in args)
        pos_only_emitted = False
        kw_only_marker_emitted = False

        for i, arg in enumerate(args):
            if has_pos_only and not pos_only_emitted:
                if arg.kind != ArgumentKind.POSITIONAL_ONLY:
                    parts.append("/")
                    pos_only_emitted = True

            if arg.kind == ArgumentKind.KEYWORD_ONLY and not kw_only_marker_emitted:
                # *args already opens the keyword-only section.
                prev_was_var_pos = (
                    i > 0 and args[i - 1].kind == ArgumentKind.VAR_POSITIONAL
                )
                if not prev_was_var_pos:
                    parts.append("*")
                kw_only_marker_emitted = True

            arg_str = arg.name
            if arg.kind == ArgumentKind.VAR_POSITIONAL:
                arg_str = f"*{arg.name}"
                kw_only_marker_emitted = True
            elif arg.kind == ArgumentKind.VAR_KEYWORD:
                arg_str = f"**{arg.name}"

            if arg.annotation:
                arg_str += f": {arg.annotation}"

            if arg.has_default:
                arg_str += " = ..." if arg.annotation else "=..."

            parts.append(arg_str)

        if has_pos_only and not pos_only_emitted:
            parts.append("/")

        return ", ".join(parts)

    def format(self, func: FunctionDef) -> str:
        lines = [f"@{dec}" for dec in func.decorators]

        prefix = "async " if func.is_async else ""
        args_str = self.format_args(func.args)
        ret_str = f" -> {func.return_annotation}" if func.return_annotation else ""
        lines.append(f"{prefix}def {func.name}({args_str}){ret_str}: ...")

        return "\n".join(lines)
