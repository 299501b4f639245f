"""Tape machine bytecode and its interpreter loop.

The tape is a growable array of unsigned bytes; cells wrap modulo 256.
Brackets are resolved into a jump table when the source is compiled, so
an unbalanced program is a compile error rather than a run-time fault.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from reel import config
from reel.errors import CompileFailure, MachineError
from reel.tape.opcodes import OPCODES, Opcode


class TapeCompileError(CompileFailure):
    """ Raised when tape source contains something other than opcodes"""


class TapeFault(MachineError):
    """ Raised when a running program breaks a machine precondition"""


@dataclass(frozen=True)
class TapeSource:
    """Convert stage: source text waiting to be compiled."""

    text: str

    @classmethod
    def of(cls, text: str | bytes) -> TapeSource:
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("latin-1")
        return cls(text)

    def resolve(self) -> TapeCode:
        ops = []
        for c in self.text:
            op = OPCODES.get(c)
            if op is None:
                raise TapeCompileError(f"unexpected character {c}")
            ops.append(op)
        return TapeCode(tuple(ops))


def _jump_table(ops: tuple[Opcode, ...]) -> dict[int, int]:
    jumps: dict[int, int] = {}
    stack: list[int] = []
    for pc, op in enumerate(ops):
        if op is Opcode.LBRACKET:
            stack.append(pc)
        elif op is Opcode.RBRACKET:
            if not stack:
                raise TapeCompileError("unmatched `]`")
            start = stack.pop()
            jumps[start] = pc
            jumps[pc] = start
    if stack:
        raise TapeCompileError("unmatched `[`")
    return jumps


@dataclass(frozen=True)
class TapeCode:
    ops: tuple[Opcode, ...]
    jumps: dict[int, int] = field(default=None, compare=False, repr=False, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "ops", tuple(self.ops))
        if self.jumps is None:
            object.__setattr__(self, "jumps", _jump_table(self.ops))

    def __str__(self) -> str:
        return "".join(op.value for op in self.ops)

    def __bytes__(self) -> bytes:
        return str(self).encode("ascii")

    def __len__(self) -> int:
        return len(self.ops)

    @classmethod
    def print(cls, data: bytes) -> TapeCode:
        """Build a program that writes ``data`` using a single cell."""
        ops: list[Opcode] = []
        current = 0
        for b in data:
            diff = b - current
            ops.extend([Opcode.PLUS if diff > 0 else Opcode.MINUS] * abs(diff))
            ops.append(Opcode.DOT)
            current = b
        return cls(tuple(ops))

    def execute(self, output, input) -> None:
        """Run to completion, reading from ``input`` and writing to ``output``.

        Raises TapeFault on an illegal pointer movement. Reading past the end
        of the input yields 0.
        """
        ops, jumps = self.ops, self.jumps
        mem = np.zeros(config.get_tape_size(), dtype=np.uint8)
        ptr = 0
        pc = 0
        end = len(ops)
        while pc < end:
            op = ops[pc]
            if op is Opcode.GT:
                ptr += 1
                if ptr == len(mem):
                    mem = np.concatenate([mem, np.zeros(len(mem), dtype=np.uint8)])
            elif op is Opcode.LT:
                if ptr == 0:
                    raise TapeFault("illegal pointer movement")
                ptr -= 1
            elif op is Opcode.PLUS:
                mem[ptr:ptr + 1] += 1
            elif op is Opcode.MINUS:
                mem[ptr:ptr + 1] -= 1
            elif op is Opcode.DOT:
                output.send(int(mem[ptr]))
            elif op is Opcode.COMMA:
                b = input.recv()
                mem[ptr] = 0 if b is None else b
            elif op is Opcode.LBRACKET:
                if mem[ptr] == 0:
                    pc = jumps[pc]
            elif op is Opcode.RBRACKET:
                if mem[ptr] != 0:
                    pc = jumps[pc]
            pc += 1
