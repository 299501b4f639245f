from reel.tape.opcodes import Opcode
from reel.tape.code import TapeCode, TapeSource, TapeCompileError, TapeFault
from reel.tape.machine import TapeMachine

__all__ = [
    "Opcode", "TapeCode", "TapeSource", "TapeCompileError", "TapeFault",
    "TapeMachine",
]
