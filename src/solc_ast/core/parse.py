import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from solc_ast.errors import AstParseError, MalformedField, MissingRequiredField
from solc_ast.models import Ast, AstModel, Node

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=AstModel)

_REQUIRED_FIELDS = frozenset({"id", "nodeType", "src", "absolutePath"})


def _decode(data: Any) -> Any:
    if isinstance(data, str | bytes | bytearray):
        try:
            return json.loads(data)
        except RecursionError:
            raise AstParseError("Invalid JSON: document is nested too deeply to decode") from None
        except ValueError as exc:
            raise AstParseError(f"Invalid JSON: {exc}") from exc
    return data


def _children(raw: Mapping[str, Any], with_body: bool) -> tuple[list[Mapping[str, Any]], Mapping[str, Any] | None]:
    """Child mappings of one raw node, checked for shape before anything is validated."""
    node_id = raw.get("id")
    nodes = raw.get("nodes", [])
    if not isinstance(nodes, list | tuple):
        raise MalformedField("nodes", node_id, nodes)
    for child in nodes:
        if not isinstance(child, Mapping):
            raise MalformedField("nodes", node_id, child)

    body = raw.get("body") if with_body else None
    if body is not None and not isinstance(body, Mapping):
        raise MalformedField("body", node_id, body)
    return list(nodes), body


def _translate(exc: ValidationError, raw: Mapping[str, Any]) -> AstParseError:
    """Turn the first pydantic error on one raw node into a single domain error for the whole file."""
    error = exc.errors(include_url=False)[0]
    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, AstParseError):
        return cause
    if error["type"] == "recursion_loop":
        return AstParseError(f"Value nested too deeply to validate on node {raw.get('id')!r}")

    loc = error["loc"]
    field = str(loc[0]) if loc else "<node>"
    value: Any = raw
    for step in loc:
        try:
            value = value[step]
        except (KeyError, IndexError, TypeError):
            value = None
            break
    if field in _REQUIRED_FIELDS:
        return MissingRequiredField(field, raw.get("id"), value)
    return MalformedField(field, raw.get("id"), value)


def _build(model: type[M], raw: Any) -> M:
    """Validate a raw tree bottom-up with an explicit stack.

    Each node is validated on its own with already-built children in place, so nesting
    depth is bounded by memory rather than by the interpreter or pydantic-core.
    """
    if not isinstance(raw, Mapping):
        raise MalformedField("<document>", None, type(raw).__name__)

    built: dict[int, AstModel] = {}
    open_ids: set[int] = set()
    stack: list[tuple[Mapping[str, Any], bool]] = [(raw, False)]
    while stack:
        item, expanded = stack.pop()
        is_root = item is raw
        with_body = not is_root or "body" in model.model_fields
        nodes, body = _children(item, with_body)
        if not expanded:
            open_ids.add(id(item))
            stack.append((item, True))
            for child in [*nodes, *([body] if body is not None else [])]:
                if id(child) in open_ids:
                    raise AstParseError(f"Node {item.get('id')!r} contains itself")
                if id(child) not in built:
                    stack.append((child, False))
            continue

        fields = dict(item)
        if "nodes" in item:
            fields["nodes"] = [built[id(child)] for child in nodes]
        if body is not None:
            fields["body"] = built[id(body)]
        target = model if is_root else Node
        try:
            built[id(item)] = target.model_validate(fields)
        except ValidationError as exc:
            raise _translate(exc, item) from exc
        open_ids.discard(id(item))
    return built[id(raw)]  # type: ignore[return-value]


def _parse(model: type[M], data: Any) -> M:
    return _build(model, _decode(data))


def parse_node(data: Mapping[str, Any] | str | bytes) -> Node:
    return _parse(Node, data)


def parse_ast(data: Mapping[str, Any] | str | bytes) -> Ast:
    """Parse the AST of one source file.

    Raises an ``AstParseError`` subclass if any required field anywhere in the tree is
    missing or malformed; unknown node kinds and unknown keys never fail.
    """
    ast = _parse(Ast, data)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Parsed AST for %s (%d nodes)", ast.absolute_path, sum(1 for _ in ast.walk()))
    return ast


def parse_sources(output: Mapping[str, Any] | str | bytes) -> dict[str, Ast]:
    """Parse every source AST in a solc standard-JSON output, keyed by source path."""
    document = _decode(output)
    sources = document.get("sources") if isinstance(document, Mapping) else None
    if not isinstance(sources, Mapping):
        raise MalformedField("sources", None, sources)

    asts: dict[str, Ast] = {}
    for path, entry in sources.items():
        ast_json = entry.get("ast") if isinstance(entry, Mapping) else None
        if ast_json is None:
            logger.warning("Source %s has no AST, skipping", path)
            continue
        asts[path] = parse_ast(ast_json)
    return asts


def asts_from_document(document: Any) -> dict[str, Ast]:
    """Accept a single AST, a standard-JSON output or a build artifact with an ``ast`` key."""
    if isinstance(document, Mapping):
        if "absolutePath" in document or "nodeType" in document:
            ast = parse_ast(document)
            return {ast.absolute_path: ast}
        if "sources" in document:
            return parse_sources(document)
        if isinstance(document.get("ast"), Mapping):
            ast = parse_ast(document["ast"])
            return {ast.absolute_path: ast}
    raise AstParseError("Unrecognized document: expected an AST, a solc standard-JSON output or an artifact")


def load_asts(path: str | Path) -> dict[str, Ast]:
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    asts = asts_from_document(_decode(raw))
    logger.info("Loaded %d AST(s) from %s", len(asts), file_path)
    return asts
