from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from solc_ast.core.parse import load_asts
from solc_ast.errors import AstParseError

console = Console()


def validate(
    files: Annotated[list[Path], typer.Argument(help="AST, standard-JSON output or artifact files.")],
) -> None:
    """Parse each file and report whether its ASTs are well-formed."""
    failures = 0
    for path in files:
        try:
            asts = load_asts(path)
        except (AstParseError, OSError) as exc:
            failures += 1
            console.print(f"[red]FAIL[/red] {escape(str(path))}: {escape(str(exc))}")
            continue
        console.print(f"[green]OK[/green] {escape(str(path))} ({len(asts)} source(s))")

    if failures:
        raise typer.Exit(code=1)
