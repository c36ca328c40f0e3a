import logging
from typing import Annotated

import typer

from solc_ast.cli.report import nodes, summary, symbols, unknown
from solc_ast.cli.validate import validate

app = typer.Typer(
    name="solc-ast",
    help="solc-ast CLI: inspect and validate Solidity compiler ASTs.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    log_level: Annotated[
        str,
        typer.Option("--log-level", envvar="SOLC_AST_LOG_LEVEL", help="Logging level (DEBUG, INFO, WARNING, ...)."),
    ] = "WARNING",
) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


app.command("validate")(validate)
app.command("summary")(summary)
app.command("nodes")(nodes)
app.command("symbols")(symbols)
app.command("unknown")(unknown)


def main() -> None:
    app()
