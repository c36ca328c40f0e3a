from solc_ast.core.node_types import (
    AnyNodeType,
    NodeCategory,
    NodeType,
    OtherNodeType,
    format_node_type,
    parse_node_type,
)
from solc_ast.core.parse import asts_from_document, load_asts, parse_ast, parse_node, parse_sources
from solc_ast.core.source_location import SourceLocation
from solc_ast.errors import AstParseError, MalformedField, MalformedLocation, MissingRequiredField
from solc_ast.models import Ast, Node

__all__ = [
    "AnyNodeType",
    "Ast",
    "AstParseError",
    "MalformedField",
    "MalformedLocation",
    "MissingRequiredField",
    "Node",
    "NodeCategory",
    "NodeType",
    "OtherNodeType",
    "SourceLocation",
    "asts_from_document",
    "format_node_type",
    "load_asts",
    "parse_ast",
    "parse_node",
    "parse_sources",
    "parse_node_type",
]
