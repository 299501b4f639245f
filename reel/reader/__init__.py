from reel.reader.parser import Reader, read_expression
from reel.reader.repl import Repl, ReplState

__all__ = ["Reader", "read_expression", "Repl", "ReplState"]
