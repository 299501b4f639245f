from __future__ import annotations

from enum import Enum


class Opcode(Enum):
    LT = "<"
    GT = ">"
    PLUS = "+"
    MINUS = "-"
    DOT = "."
    COMMA = ","
    LBRACKET = "["
    RBRACKET = "]"

    def __str__(self) -> str:
        return self.value


OPCODES: dict[str, Opcode] = {op.value: op for op in Opcode}
