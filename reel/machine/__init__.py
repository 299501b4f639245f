from reel.machine.contract import Machine, Executable

__all__ = ["Machine", "Executable"]
