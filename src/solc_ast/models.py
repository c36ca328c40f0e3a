import json
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, TypeAdapter, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from solc_ast.core.json_values import copy_json
from solc_ast.core.node_types import AnyNodeType, NodeType, NodeTypeField, OtherNodeType, format_node_type
from solc_ast.core.source_location import SourceLocation, SourceLocationField

T = TypeVar("T")

NodeId = Annotated[StrictInt, Field(ge=0)]

_CHILD_FIELDS = frozenset({"nodes", "body"})


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def _tag(node_type: AnyNodeType | str) -> str:
    if isinstance(node_type, NodeType | OtherNodeType):
        return format_node_type(node_type)
    return node_type


def _wire_value(value: Any) -> Any:
    if isinstance(value, SourceLocation):
        return value.format()
    if isinstance(value, NodeType | OtherNodeType):
        return format_node_type(value)
    return copy_json(value)


def _dump_shallow(model: "AstModel") -> dict[str, Any]:
    """Wire dict of one model without its child nodes."""
    out = {
        to_camel(name): _wire_value(getattr(model, name))
        for name in type(model).model_fields
        if name not in _CHILD_FIELDS and name in model.model_fields_set
    }
    for key, value in (model.model_extra or {}).items():
        out[key] = copy_json(value)
    return out


class AstModel(BaseModel, ABC):
    """Shared behaviour of ``Node`` and ``Ast``.

    Wire keys are camelCase. Keys without a typed field are kept as pydantic extras
    and exposed through ``other``. Extras are copied in and out, so a tree never
    shares containers with its input or its readers.
    """

    model_config = ConfigDict(alias_generator=to_camel, extra="allow", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _detach_extras(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        typed = {to_camel(name) for name in cls.model_fields}
        return {key: value if key in typed else copy_json(value) for key, value in data.items()}

    @abstractmethod
    def _walk_roots(self) -> list["Node"]: ...

    @property
    def other(self) -> Mapping[str, Any]:
        """Attributes without a typed field, in key order."""
        extra = self.model_extra or {}
        return MappingProxyType({key: copy_json(extra[key]) for key in sorted(extra)})

    def attribute(self, key: str, type_: type[T]) -> T | None:
        """Re-read the untyped attribute ``key`` as ``type_``.

        Returns ``None`` when the key is missing or the stored value does not fit ``type_``.
        """
        extra = self.model_extra or {}
        if key not in extra:
            return None
        try:
            return _adapter(type_).validate_python(copy_json(extra[key]))
        except ValidationError:
            return None

    def walk(self) -> Iterator["Node"]:
        """Yield nodes depth-first: a node, its ``nodes`` in order, then its ``body``."""
        stack = list(reversed(self._walk_roots()))
        while stack:
            node = stack.pop()
            yield node
            if node.body is not None:
                stack.append(node.body)
            stack.extend(reversed(node.nodes))

    def find(self, node_type: AnyNodeType | str) -> Iterator["Node"]:
        tag = _tag(node_type)
        return (node for node in self.walk() if format_node_type(node.node_type) == tag)

    def to_dict(self) -> dict[str, Any]:
        """Dump back to the wire shape, leaving out modeled fields the input did not carry."""
        root = _dump_shallow(self)
        stack: list[tuple[AstModel, dict[str, Any]]] = [(self, root)]
        while stack:
            model, out = stack.pop()
            if "nodes" in model.model_fields_set:
                out["nodes"] = []
                for child in model.nodes:  # type: ignore[attr-defined]
                    child_out = _dump_shallow(child)
                    out["nodes"].append(child_out)
                    stack.append((child, child_out))
            if isinstance(model, Node) and "body" in model.model_fields_set:
                out["body"] = None
                if model.body is not None:
                    out["body"] = _dump_shallow(model.body)
                    stack.append((model.body, out["body"]))
        return root

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class Node(AstModel):
    id: NodeId
    node_type: NodeTypeField
    src: SourceLocationField
    nodes: list["Node"] = Field(default_factory=list)
    body: "Node | None" = None

    def _walk_roots(self) -> list["Node"]:
        return [self]


Node.model_rebuild()  # necessary for recursive types


class Ast(AstModel):
    """Root of the AST of one source file. ``walk`` starts below the root."""

    absolute_path: StrictStr
    id: NodeId
    exported_symbols: dict[str, list[NodeId]] = Field(default_factory=dict)
    node_type: NodeTypeField
    src: SourceLocationField
    nodes: list[Node] = Field(default_factory=list)

    def _walk_roots(self) -> list[Node]:
        return list(self.nodes)

    def node_by_id(self, node_id: int) -> Node | None:
        return next((node for node in self.walk() if node.id == node_id), None)
