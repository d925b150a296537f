"""Identifier interning and string literal storage."""

from dataclasses import dataclass, field

__all__ = ["elf_hash", "NamePool", "StringLiteral"]


def elf_hash(data):
    """ELF hash of a byte string (a str is hashed as UTF-8)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    h = 0
    for byte in data:
        # characters are signed on the target, so high bytes subtract
        ch = byte - 256 if byte > 127 else byte
        h = ((h << 4) + ch) & 0xFFFFFFFF
        x = h & 0xF0000000
        if x:
            h ^= x >> 24
            h &= ~x & 0xFFFFFFFF
    return h


class NamePool:
    """Keeps one shared copy of every identifier name."""

    def __init__(self):
        self._names = {}

    def intern(self, name):
        """Return the pooled copy of name, adding it if it is new."""
        return self._names.setdefault(name, name)

    def __contains__(self, name):
        return name in self._names

    def __len__(self):
        return len(self._names)


@dataclass
class StringLiteral:
    """Characters of a narrow or wide string literal, without terminator."""

    units: list = field(default_factory=list)
    wide: bool = False

    def append(self, chars, wide=False):
        """Append characters (a str, bytes or code units) to the literal."""
        if isinstance(chars, str):
            chars = [ord(c) for c in chars]
        self.units.extend(chars)
        self.wide = wide

    def __len__(self):
        return len(self.units)

    def to_bytes(self, wchar_size=4):
        """Memory image of the literal, terminator included, little endian."""
        if not self.wide:
            return bytes(u & 0xFF for u in self.units) + b"\0"
        mask = (1 << (8 * wchar_size)) - 1
        return b"".join(
            (u & mask).to_bytes(wchar_size, "little") for u in [*self.units, 0]
        )