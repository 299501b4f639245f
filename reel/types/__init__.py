from reel.types.nil import Nil, NilType
from reel.types.value import Str, If, Lambda, Call, Macro, kind_of
from reel.types.signal import Signal, Continue, Quit

__all__ = [
    "Nil", "NilType", "Str", "If", "Lambda", "Call", "Macro", "kind_of",
    "Signal", "Continue", "Quit",
]
