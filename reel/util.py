from __future__ import annotations


def escape(text: str) -> str:
    """Escape control and non-ASCII characters for display."""
    return text.encode("unicode_escape").decode("ascii")


def pretty(raw: bytes) -> str:
    """Render raw machine output, keeping printable ASCII as-is."""
    out = []
    for b in raw:
        if 0x20 <= b <= 0x7E:
            out.append(chr(b))
        else:
            out.append(f"0x{b:02X}")
    return "".join(out)
