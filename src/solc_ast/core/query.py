from collections import Counter
from collections.abc import Mapping

from solc_ast.core.node_types import AnyNodeType, OtherNodeType, format_node_type
from solc_ast.models import Ast


def summarize(asts: Mapping[str, Ast]) -> list[tuple[str, int, str, int, int]]:
    """Return (source, root_id, root_type, node_count, unknown_count) per source, root included."""
    rows = []
    for source, ast in asts.items():
        types = [ast.node_type, *(node.node_type for node in ast.walk())]
        unknown = sum(1 for node_type in types if isinstance(node_type, OtherNodeType))
        rows.append((source, ast.id, format_node_type(ast.node_type), len(types), unknown))
    return rows


def list_nodes(
    asts: Mapping[str, Ast],
    node_type: AnyNodeType | str | None = None,
    limit: int = 50,
) -> list[tuple[str, int, str, str]]:
    """Return (source, id, type, src) for nodes in depth-first order, optionally filtered by kind."""
    rows: list[tuple[str, int, str, str]] = []
    for source, ast in asts.items():
        nodes = ast.walk() if node_type is None else ast.find(node_type)
        for node in nodes:
            if len(rows) >= limit:
                return rows
            rows.append((source, node.id, format_node_type(node.node_type), str(node.src)))
    return rows


def exported_symbols(asts: Mapping[str, Ast]) -> list[tuple[str, str, list[int]]]:
    return [
        (source, symbol, ids)
        for source, ast in asts.items()
        for symbol, ids in sorted(ast.exported_symbols.items())
    ]


def unknown_node_types(asts: Mapping[str, Ast]) -> list[tuple[str, int]]:
    """Return (nodeType, count) for tags outside the known table, most frequent first."""
    counts: Counter[str] = Counter()
    for ast in asts.values():
        if isinstance(ast.node_type, OtherNodeType):
            counts[ast.node_type.name] += 1
        for node in ast.walk():
            if isinstance(node.node_type, OtherNodeType):
                counts[node.node_type.name] += 1
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))
