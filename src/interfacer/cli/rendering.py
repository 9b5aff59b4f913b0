import typer

_LEVEL_COLORS = {
    "success": typer.colors.GREEN,
    "warning": typer.colors.YELLOW,
    "error": typer.colors.RED,
    "debug": typer.colors.BRIGHT_BLACK,
}


class CliRenderer:
    """Writes bus messages to stderr; stdout carries the generated code."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, message: str, level: str) -> None:
        if level == "debug" and not self.verbose:
            return
        typer.secho(message, fg=_LEVEL_COLORS.get(level), err=True)
