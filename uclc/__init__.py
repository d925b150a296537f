"""Building blocks of a small C compiler for 32-bit x86: tokens, types, symbols, assembly data output."""

__version__ = "0.1.0"

__all__ = [
    "asm",
    "names",
    "opcodes",
    "options",
    "records",
    "symbols",
    "tokens",
    "typesystem",
]