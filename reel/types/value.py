"""ValueTree nodes.

Nodes are immutable; sub-trees of ``If`` and ``Call`` are plain shared
references. The reader only ever builds a node after its children, so a
tree can never contain a back-edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from reel import Value
from reel.types.nil import NilType

ByteCodeT = TypeVar("ByteCodeT")


@dataclass(frozen=True)
class Str:
    text: str
    kind = "str"

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class If:
    pred: Value
    then: Value
    orelse: Value
    kind = "if"

    def __str__(self) -> str:
        return "<if expression>"


@dataclass(frozen=True)
class Lambda(Generic[ByteCodeT]):
    code: ByteCodeT
    kind = "lambda"

    def __str__(self) -> str:
        return f"`{self.code}'"


@dataclass(frozen=True)
class Call:
    callee: Value
    args: tuple[Value, ...] = ()
    kind = "call"

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def __str__(self) -> str:
        printed = "".join(f"{a} " for a in self.args)
        return f"({self.callee} [ {printed}])"


@dataclass(frozen=True)
class Macro:
    name: str
    kind = "macro"

    def __str__(self) -> str:
        return f"@{self.name}~"


def kind_of(node: Any) -> str:
    """Return the variant name of a ValueTree node."""
    if isinstance(node, (Str, If, Lambda, Call, Macro, NilType)):
        return node.kind
    raise TypeError(f"not a value tree node: {node!r}")
