import typer

from interfacer.common import bus
from interfacer.needle import L, needle
from interfacer.spec import GenerateOptions, InterfacerError
from .factories import make_app
from .rendering import CliRenderer

app = typer.Typer(
    name="interfacer",
    help=needle.get(L.cli.app.description),
    add_completion=False,
)


@app.command()
def generate(
    for_path: str = typer.Option(
        "", "-for", "--for", help=needle.get(L.cli.option.for_path.help)
    ),
    type_name: str = typer.Option(
        "", "-type", "--type", help=needle.get(L.cli.option.type.help)
    ),
    as_value: str = typer.Option(
        "", "-as", "--as", help=needle.get(L.cli.option.as_value.help)
    ),
    output: str = typer.Option(
        "-", "-out", "--out", help=needle.get(L.cli.option.out.help)
    ),
    include_private: bool = typer.Option(
        False, "-all", "--all", help=needle.get(L.cli.option.all.help)
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=needle.get(L.cli.option.verbose.help)
    ),
):
    # The CLI is the composition root. It decides *which* renderer to use.
    bus.set_renderer(CliRenderer(verbose=verbose))

    options = GenerateOptions(
        for_path=for_path,
        type_name=type_name,
        as_value=as_value,
        output=output,
        include_private=include_private,
    )
    try:
        make_app().run_generate(options)
    except InterfacerError as e:
        bus.error(L.cli.error.generate, error=str(e))
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
