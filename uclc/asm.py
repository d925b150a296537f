"""Assembly output for x86: GNU as (AT&T syntax) and MASM (Intel syntax)."""

import io
import struct
from enum import Enum

from uclc.symbols import SymbolKind
from uclc.tokens import Token
from uclc.typesystem import TypeCode, align_up, type_code

__all__ = ["Segment", "AsmEmitter", "GasEmitter", "MasmEmitter"]


class Segment(Enum):
    """Output sections."""

    DATA = "data"
    CODE = "code"


def _signed32(value):
    value = int(value) & 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _is_print(byte):
    return 0x20 <= byte <= 0x7E


def _as_bytes(data):
    if hasattr(data, "to_bytes") and not isinstance(data, (bytes, bytearray)):
        return data.to_bytes()
    if isinstance(data, str):
        return data.encode("latin-1")
    return bytes(data)


class AsmEmitter:
    """Common state of an assembly writer: the text written and data layout."""

    def __init__(self):
        self._out = io.StringIO()
        # address counter of the data section, used to avoid needless alignment
        self.org = 0
        self.float_num = 0
        # counter used to give function-local statics unique names
        self.temp_num = 0

    def output(self):
        """All the assembly text written so far."""
        return self._out.getvalue()

    def _put(self, text):
        self._out.write(text)

    def _align(self, sym, directive):
        align = sym.ty.align
        if align and self.org % align != 0:
            self._put(f"{directive} {align}\n")
            self.org = align_up(self.org, align)
        self.org += sym.ty.size

    @staticmethod
    def _is_static_storage(sym):
        return sym.level == 0 or sym.sclass in (Token.STATIC, Token.EXTERN)


class GasEmitter(AsmEmitter):
    """Writes AT&T-syntax assembly for the GNU assembler."""

    def access_name(self, sym):
        """The text that names sym in an instruction operand."""
        if sym.aname is not None:
            return sym.aname
        kind = sym.kind
        if kind == SymbolKind.CONSTANT:
            sym.aname = f"${sym.name}"
        elif kind in (SymbolKind.STRING, SymbolKind.LABEL):
            sym.aname = f".{sym.name}"
        elif kind in (SymbolKind.VARIABLE, SymbolKind.TEMP):
            if sym.level == 0 or sym.sclass == Token.EXTERN:
                sym.aname = sym.name
            elif sym.sclass == Token.STATIC:
                # a dot cannot appear in a C identifier, so this cannot clash
                sym.aname = f"{sym.name}.{self.temp_num}"
                self.temp_num += 1
            else:
                sym.aname = f"{sym.offset}(%ebp)"
        elif kind == SymbolKind.FUNCTION:
            sym.aname = sym.name
        elif kind == SymbolKind.OFFSET:
            base = sym.link
            n = sym.offset
            if self._is_static_storage(base):
                sign = "+" if n >= 0 else ""
                sym.aname = f"{self.access_name(base)}{sign}{n}"
            else:
                sym.aname = f"{n + base.offset}(%ebp)"
        else:
            raise ValueError(f"symbol kind {kind!r} has no access name")
        return sym.aname

    def begin_program(self):
        self.org = 0
        self.float_num = 0
        self.temp_num = 0
        self._put("# Code auto-generated by uclc\n\n")

    def end_program(self):
        self._out.flush()

    def segment(self, seg):
        seg = Segment(seg)
        self._put(".data\n\n" if seg == Segment.DATA else ".text\n\n")

    def import_symbol(self, sym):
        """External symbols need no declaration for this assembler."""

    def export(self, sym):
        self._put(f".globl\t{self.access_name(sym)}\n\n")

    def define_string(self, data, size=None):
        """Define the first size bytes of a string literal."""
        data = _as_bytes(data)
        if size is None:
            size = len(data)
        if size > 0 and data[size - 1] == 0:
            self._put('.string\t"')
            size -= 1
        else:
            self._put('.ascii\t"')
        for byte in data[:size]:
            if not _is_print(byte):
                self._put(f"\\{byte:03o}")
            elif byte == ord('"'):
                self._put('\\"')
            elif byte == ord("\\"):
                self._put("\\\\")
            else:
                self._put(chr(byte))
        self._put('"\n')

    def define_float_constant(self, sym):
        sym.aname = f".flt{self.float_num}"
        self.float_num += 1
        self._align(sym, ".align")
        self._put(f"{sym.aname}:\t")
        self.define_value(sym.ty, sym.val)

    def define_global(self, sym):
        self._align(sym, ".align")
        if sym.sclass != Token.STATIC:
            self.export(sym)
        self._put(f"{self.access_name(sym)}:\t")

    def define_comm_data(self, sym):
        name = self.access_name(sym)
        directive = ".lcomm" if sym.sclass == Token.STATIC else ".comm"
        self._put(f"{directive}\t{name},{sym.ty.size}\n")

    def define_address(self, sym):
        self._put(f".long\t{self.access_name(sym)}")

    def define_value(self, ty, value):
        code = type_code(ty)
        if code in (TypeCode.I1, TypeCode.U1):
            self._put(f".byte\t{int(value) & 0xFF}\n")
        elif code in (TypeCode.I2, TypeCode.U2):
            self._put(f".word\t{int(value) & 0xFFFF}\n")
        elif code in (TypeCode.I4, TypeCode.U4):
            self._put(f".long\t{_signed32(value)}\n")
        elif code == TypeCode.F4:
            (bits,) = struct.unpack("<i", struct.pack("<f", float(value)))
            self._put(f".long\t{bits}\n")
        elif code == TypeCode.F8:
            lo, hi = struct.unpack("<ii", struct.pack("<d", float(value)))
            self._put(f".long\t{lo}\n.long\t{hi}\n")
        else:
            raise ValueError(f"cannot define a value of type code {code.name}")

    def space(self, size):
        self._put(f".space\t{size}\n")

    def define_label(self, sym):
        self._put(f"{self.access_name(sym)}:\n")


class MasmEmitter(AsmEmitter):
    """Writes Intel-syntax assembly for MASM."""

    def access_name(self, sym):
        """The text that names sym in an instruction operand."""
        if sym.aname is not None:
            return sym.aname
        kind = sym.kind
        if kind == SymbolKind.CONSTANT:
            if sym.name.startswith("0x"):
                sym.aname = f"0{sym.name[2:]}H"
            else:
                sym.aname = sym.name
        elif kind in (SymbolKind.STRING, SymbolKind.IREGISTER, SymbolKind.LABEL):
            sym.aname = sym.name
        elif kind in (SymbolKind.VARIABLE, SymbolKind.TEMP):
            if sym.level == 0 or sym.sclass == Token.EXTERN:
                sym.aname = f"_{sym.name}"
            elif sym.sclass == Token.STATIC:
                sym.aname = f"{sym.name}{self.temp_num}"
                self.temp_num += 1
            else:
                sym.aname = f"({sym.offset})[ebp]"
        elif kind == SymbolKind.FUNCTION:
            sym.aname = f"_{sym.name}"
        elif kind == SymbolKind.OFFSET:
            base = sym.link
            n = sym.offset
            if self._is_static_storage(base):
                sign = "+" if n >= 0 else ""
                sym.aname = f"{self.access_name(base)}{sign}{n}"
            else:
                sym.aname = f"({n + base.offset})[ebp]"
        else:
            raise ValueError(f"symbol kind {kind!r} has no access name")
        return sym.aname

    def begin_program(self):
        self.org = 0
        self.float_num = 0
        self.temp_num = 0
        self._put("; Code auto-generated by uclc\n")
        self._put(".486\n")
        self._put(".MODEL FLAT\n")
        self._put("EXTRN _memset:NEAR32\n\n")

    def end_program(self):
        self._put("END\n")
        self._out.flush()

    def segment(self, seg):
        seg = Segment(seg)
        self._put(".DATA\n\n" if seg == Segment.DATA else ".CODE\n\n")

    def import_symbol(self, sym):
        self._put(f"EXTRN {self.access_name(sym)}:NEAR32\n\n")

    def export(self, sym):
        self._put(f"PUBLIC {self.access_name(sym)}\n\n")

    def define_string(self, data, size=None):
        """Define the first size bytes of a string literal."""
        data = _as_bytes(data)
        if size is None:
            size = len(data)
        self._put("BYTE\t")
        i = 0
        while i < size:
            if not _is_print(data[i]):
                self._put(f"0{data[i]:x}H")
                i += 1
                if data[i - 1] == ord("\n"):
                    # keep lines short enough for the assembler
                    self._put("\n\tBYTE\t")
                    continue
            else:
                self._put("'")
                while i < size and _is_print(data[i]):
                    self._put("''" if data[i] == ord("'") else chr(data[i]))
                    i += 1
                self._put("'")
            if i < size:
                self._put(", ")
        self._put("\n")

    def define_float_constant(self, sym):
        sym.aname = f"flt{self.float_num}"
        self.float_num += 1
        self._align(sym, "align")
        self._put(f"{sym.aname}\t")
        self.define_value(sym.ty, sym.val)

    def define_global(self, sym):
        self._align(sym, "align")
        if sym.sclass != Token.STATIC:
            self.export(sym)
        self._put(f"{self.access_name(sym)}\t")

    def define_comm_data(self, sym):
        self._align(sym, "align")
        name = self.access_name(sym)
        if sym.sclass == Token.STATIC:
            self._put(f"{name}\t")
            self.space(sym.ty.size)
        else:
            self._put(f"COMM\t{name}:{sym.ty.size}\n")

    def define_address(self, sym):
        self._put(f"DWORD\t{self.access_name(sym)}")

    def define_value(self, ty, value):
        code = type_code(ty)
        if code in (TypeCode.I1, TypeCode.U1):
            self._put(f"BYTE\t0{int(value) & 0xFF:x}H\n")
        elif code in (TypeCode.I2, TypeCode.U2):
            self._put(f"WORD\t0{int(value) & 0xFFFF:x}H\n")
        elif code in (TypeCode.I4, TypeCode.U4):
            self._put(f"DWORD\t0{int(value) & 0xFFFFFFFF:x}H\n")
        elif code == TypeCode.F4:
            (bits,) = struct.unpack("<I", struct.pack("<f", float(value)))
            self._put(f"DWORD\t0{bits:x}H\n")
        elif code == TypeCode.F8:
            lo, hi = struct.unpack("<II", struct.pack("<d", float(value)))
            self._put(f"DWORD\t0{lo:x}H, 0{hi:x}H\n")
        else:
            raise ValueError(f"cannot define a value of type code {code.name}")

    def space(self, size):
        self._put(f"BYTE {size} DUP (0)\n")

    def define_label(self, sym):
        self._put(f"{self.access_name(sym)}:\n")