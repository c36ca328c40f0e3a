import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, NonNegativeInt, model_serializer, model_validator
from pydantic_core import PydanticCustomError

from solc_ast.errors import MalformedLocation

_SRC_PATTERN = re.compile(r"(\d+):(-?\d+):(-?\d+)", re.ASCII)
_UNKNOWN = "-1"


def _split(text: object) -> tuple[int, int | None, int | None]:
    match = _SRC_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise MalformedLocation(text)
    start, length, index = (int(group) for group in match.groups())
    return start, (length if length >= 0 else None), (index if index >= 0 else None)


class SourceLocation(BaseModel):
    """Byte range of a node, written by solc as ``<start>:<length>:<index>``.

    ``length`` and ``index`` are ``-1`` on the wire when solc does not know them;
    here they are ``None``. ``index`` points into the compilation unit's source list.
    """

    model_config = ConfigDict(frozen=True)

    start: NonNegativeInt
    length: NonNegativeInt | None = None
    index: NonNegativeInt | None = None

    @classmethod
    def parse(cls, text: str) -> "SourceLocation":
        start, length, index = _split(text)
        return cls(start=start, length=length, index=index)

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        if isinstance(data, str):
            start, length, index = _split(data)
            return {"start": start, "length": length, "index": index}
        return data

    @model_serializer
    def _to_wire(self) -> str:
        return self.format()

    def format(self) -> str:
        length = _UNKNOWN if self.length is None else str(self.length)
        index = _UNKNOWN if self.index is None else str(self.index)
        return f"{self.start}:{length}:{index}"

    def __str__(self) -> str:
        return self.format()

    @property
    def end(self) -> int | None:
        """Exclusive end offset, or ``None`` when the length is unknown."""
        if self.length is None:
            return None
        return self.start + self.length

    def slice(self, source: bytes) -> bytes:
        if self.length is None:
            raise ValueError(f"Cannot slice source with unknown length: {self}")
        return source[self.start : self.start + self.length]


def _wire_string(value: Any) -> Any:
    if isinstance(value, str | SourceLocation):
        return value
    raise PydanticCustomError("src_type", "src must be a '<start>:<length>:<index>' string")


# Field type used by the models: on the wire a location is only ever a string.
SourceLocationField = Annotated[SourceLocation, BeforeValidator(_wire_string)]
