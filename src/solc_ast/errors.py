from typing import Any


class AstParseError(ValueError):
    """Base class for every hard failure while reading a solc AST."""


class MalformedLocation(AstParseError):
    def __init__(self, text: object) -> None:
        self.text = text
        super().__init__(f"{text!r} is not a valid source location, expected '<start>:<length>:<index>'")


class MissingRequiredField(AstParseError):
    """A required field is absent or does not have the expected JSON shape."""

    def __init__(self, field: str, node_id: Any = None, value: Any = None) -> None:
        self.field = field
        self.node_id = node_id
        self.value = value
        super().__init__(_describe("missing or malformed required field", field, node_id, value))


class MalformedField(AstParseError):
    """An optional modeled field is present but has the wrong shape."""

    def __init__(self, field: str, node_id: Any = None, value: Any = None) -> None:
        self.field = field
        self.node_id = node_id
        self.value = value
        super().__init__(_describe("malformed field", field, node_id, value))


def _describe(problem: str, field: str, node_id: Any, value: Any) -> str:
    where = f" on node {node_id}" if node_id is not None else ""
    got = f" (got {value!r})" if value is not None else ""
    return f"{problem} {field!r}{where}{got}"
