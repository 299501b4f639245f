# Core type aliases for reel's data model.
#
# Naming guidance:
# - Value:      Use in reader/evaluator code to denote a ValueTree node.
# - Decoded:    Use in codec/protocol code to denote a parsed bencode value
#               (bytes, int, list or dict[bytes, Decoded]).

from typing import Any, Union

# ValueTree node alias (Str | If | Lambda | Call | Macro | Nil)
Value = Any
# Plain Python rendition of a bencode value
Decoded = Union[bytes, int, list, dict]

__version__ = "0.1.0"
