from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from solc_ast.core.parse import load_asts
from solc_ast.core.query import exported_symbols, list_nodes, summarize, unknown_node_types
from solc_ast.errors import AstParseError
from solc_ast.models import Ast

console = Console()

FileArgument = Annotated[Path, typer.Argument(help="AST, standard-JSON output or artifact file.")]


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(escape(str(v)) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _load(file: Path) -> dict[str, Ast]:
    try:
        return load_asts(file)
    except (AstParseError, OSError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def summary(file: FileArgument) -> None:
    """Show one row per source: root id, root kind and node counts."""
    rows = summarize(_load(file))
    _render_table(["source", "id", "nodeType", "nodes", "unknown"], rows)


def nodes(
    file: FileArgument,
    type: Annotated[str | None, typer.Option("--type", help="Exact nodeType to filter on.")] = None,
    limit: Annotated[int, typer.Option(help="Max rows to return.")] = 50,
) -> None:
    """List nodes in depth-first order."""
    rows = list_nodes(_load(file), type, limit)
    _render_table(["source", "id", "nodeType", "src"], rows)


def symbols(file: FileArgument) -> None:
    """List exported symbols and the node ids that define them."""
    rows = [(source, symbol, ", ".join(str(i) for i in ids)) for source, symbol, ids in exported_symbols(_load(file))]
    _render_table(["source", "symbol", "ids"], rows)


def unknown(file: FileArgument) -> None:
    """Count nodeType tags that are not in the known table."""
    rows = unknown_node_types(_load(file))
    _render_table(["nodeType", "count"], rows)
