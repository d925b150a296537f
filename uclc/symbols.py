"""Symbols, scopes and the symbol table of a translation unit."""

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from uclc.tokens import Token
from uclc.typesystem import Categ, categ_name, primitive, unqual

__all__ = [
    "SymbolKind",
    "Symbol",
    "VariableSymbol",
    "FunctionSymbol",
    "Scope",
    "SymbolTable",
    "symbol_kind_name",
]


class SymbolKind(IntEnum):
    """What a symbol stands for."""

    TAG = 0
    TYPEDEF_NAME = 1
    ENUM_CONSTANT = 2
    CONSTANT = 3
    VARIABLE = 4
    TEMP = 5
    OFFSET = 6
    STRING = 7
    LABEL = 8
    FUNCTION = 9
    REGISTER = 10
    IREGISTER = 11


_KIND_NAMES = (
    "SK_Tag", "SK_TypedefName", "SK_EnumConstant", "SK_Constant", "SK_Variable",
    "SK_Temp", "SK_Offset", "SK_String", "SK_Label", "SK_Function", "SK_Register",
    "SK_IRegister", "SK_NotAvailable",
)


def symbol_kind_name(kind):
    """Diagnostic name of a symbol kind."""
    return _KIND_NAMES[int(kind)]


@dataclass(eq=False)
class Symbol:
    """A named entity: tag, typedef, constant, variable, label, function ...

    For offset symbols, link is the base symbol the offset applies to.
    """

    kind: SymbolKind
    name: str | None
    ty: object = None
    level: int = 0
    sclass: Token | None = None
    ref: int = 0
    defined: bool = False
    addressed: bool = False
    needwb: bool = False
    val: object = None
    reg: "Symbol | None" = None
    link: "Symbol | None" = None
    coord: object = None
    aname: str | None = None


@dataclass(eq=False)
class VariableSymbol(Symbol):
    """A variable, temporary or offset into another variable."""

    idata: object = None
    definition: object = None
    uses: list = field(default_factory=list)
    offset: int = 0


@dataclass(eq=False)
class FunctionSymbol(Symbol):
    """A function; variables holds its parameters, locals and temporaries in order."""

    params: list = field(default_factory=list)
    locals: list = field(default_factory=list)
    variables: list = field(default_factory=list)
    nbblock: int = 0
    entry_bb: object = None
    exit_bb: object = None
    val_num_table: list = field(default_factory=lambda: [None] * 16)


class Scope:
    """One level of a nested name space."""

    def __init__(self, level=0, outer=None):
        self.level = level
        self.outer = outer
        self._symbols = {}

    def lookup(self, name, search_outer=True):
        """Find name here, and in enclosing scopes if search_outer is true.

        The symbol found takes on the level of the scope it was found in.
        """
        scope = self
        while scope is not None:
            sym = scope._symbols.get(name)
            if sym is not None:
                sym.level = scope.level
                return sym
            if not search_outer:
                break
            scope = scope.outer
        return None

    def add(self, sym):
        """Add sym to this scope, hiding any earlier symbol of the same name."""
        sym.level = self.level
        self._symbols[sym.name] = sym
        return sym

    def __contains__(self, name):
        return name in self._symbols

    def __len__(self):
        return len(self._symbols)


def _float32(value):
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _signed32(value):
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


class SymbolTable:
    """Scopes and symbol lists of one translation unit."""

    def __init__(self):
        self.level = 0
        self.global_tags = Scope(0)
        self.global_ids = Scope(0)
        self.tags = self.global_tags
        self.identifiers = self.global_ids
        self.in_parameter_list = False
        self._saved_identifiers = None
        self._saved_tags = None
        self._constants = {}
        self.functions = []
        self.globals = []
        self.strings = []
        self.float_constants = []
        self.temp_num = 0
        self.label_num = 0
        self.string_num = 0
        self.current_function = None
        self.warnings = []

    # scopes

    def enter_scope(self):
        """Open a nested scope for identifiers and tags."""
        self.level += 1
        self.identifiers = Scope(self.level, self.identifiers)
        self.tags = Scope(self.level, self.tags)

    def exit_scope(self):
        """Close the innermost scope."""
        if self.identifiers.outer is None:
            raise RuntimeError("no scope to exit")
        self.level -= 1
        self.identifiers = self.identifiers.outer
        self.tags = self.tags.outer

    def enter_parameter_list(self):
        self.in_parameter_list = True
        self.enter_scope()

    def leave_parameter_list(self):
        self.in_parameter_list = False
        self.exit_scope()

    def save_parameter_list_table(self):
        """Remember the scopes of the parameter list just parsed."""
        self._saved_identifiers = self.identifiers
        self._saved_tags = self.tags

    def restore_parameter_list_table(self):
        """Reopen the saved parameter-list scopes as the function body's outer scope."""
        if self._saved_identifiers is None:
            raise RuntimeError("no parameter list table saved")
        self.level += 1
        saved = self._saved_identifiers
        saved.outer = self.identifiers
        saved.level = self.level
        self.identifiers = saved

        saved = self._saved_tags
        saved.outer = self.tags
        saved.level = self.level
        self.tags = saved

    def lookup_id(self, name):
        return self.identifiers.lookup(name)

    def lookup_tag(self, name):
        return self.tags.lookup(name)

    # declarations

    def add_tag(self, name, ty, coord=None):
        """Declare a struct, union or enum tag in the current scope."""
        sym = Symbol(SymbolKind.TAG, name, ty, coord=coord)
        if self.in_parameter_list:
            shown = name if name else "<anonymous>"
            self.warnings.append((
                coord,
                f"declaration of '{categ_name(ty.categ)} {shown}' "
                "will not be visible outside of this function",
            ))
        return self.tags.add(sym)

    def add_enum_constant(self, name, ty, value, coord=None):
        sym = Symbol(SymbolKind.ENUM_CONSTANT, name, ty, val=value, coord=coord)
        return self.identifiers.add(sym)

    def add_typedef_name(self, name, ty, coord=None):
        sym = Symbol(SymbolKind.TYPEDEF_NAME, name, ty, coord=coord)
        return self.identifiers.add(sym)

    def _function(self):
        if self.current_function is None:
            raise RuntimeError("no current function")
        return self.current_function

    def add_variable(self, name, ty, sclass, coord=None):
        """Declare a variable; globals and statics join the globals list."""
        sym = VariableSymbol(SymbolKind.VARIABLE, name, ty, sclass=sclass, coord=coord)
        if self.level == 0 or sclass == Token.STATIC:
            self.globals.append(sym)
        elif sclass != Token.EXTERN:
            self._function().variables.append(sym)
        if sclass == Token.EXTERN and self.identifiers is not self.global_ids:
            self.global_ids.add(sym)
        return self.identifiers.add(sym)

    def add_function(self, name, ty, sclass, coord=None):
        """Declare a function; it is always visible at file scope."""
        sym = FunctionSymbol(SymbolKind.FUNCTION, name, ty, sclass=sclass, coord=coord)
        self.functions.append(sym)
        if self.identifiers is not self.global_ids:
            self.identifiers.add(sym)
        return self.global_ids.add(sym)

    # constants and generated symbols

    def _coord(self):
        return self.current_function.coord if self.current_function else None

    def add_constant(self, ty, value):
        """The constant symbol of value with type ty, shared by equal constants."""
        ty = unqual(ty)
        if ty.is_integer():
            ty = primitive(Categ.INT)
        elif ty.is_pointer():
            ty = primitive(Categ.POINTER)
        elif ty.categ == Categ.LONGDOUBLE:
            ty = primitive(Categ.DOUBLE)

        categ = ty.categ
        if categ == Categ.INT:
            value = _signed32(int(value))
            key = (categ, value)
            name = f"{value}"
        elif categ == Categ.POINTER:
            value = int(value) & 0xFFFFFFFF
            key = (categ, value)
            name = "0" if value == 0 else f"0x{value:x}"
        elif categ == Categ.FLOAT:
            value = _float32(float(value))
            key = (categ, struct.pack("<f", value))
            name = "%g" % value
        elif categ == Categ.DOUBLE:
            value = float(value)
            key = (categ, struct.pack("<d", value))
            name = "%g" % value
        else:
            raise ValueError(f"no constants of type category {categ.name}")

        sym = self._constants.get(key)
        if sym is not None:
            return sym
        sym = Symbol(
            SymbolKind.CONSTANT, name, ty, sclass=Token.STATIC, val=value,
            coord=self._coord(),
        )
        self._constants[key] = sym
        if categ in (Categ.FLOAT, Categ.DOUBLE):
            self.float_constants.append(sym)
        return sym

    def int_constant(self, value):
        return self.add_constant(primitive(Categ.INT), value)

    def add_string(self, ty, literal, coord=None):
        """A new string literal symbol; equal literals are not shared."""
        sym = Symbol(
            SymbolKind.STRING, f"str{self.string_num}", ty, sclass=Token.STATIC,
            val=literal, coord=coord,
        )
        self.string_num += 1
        self.strings.append(sym)
        return sym

    def create_temp(self, ty):
        """A new temporary of the current function."""
        fsym = self._function()
        sym = VariableSymbol(
            SymbolKind.TEMP, f"t{self.temp_num}", ty, level=1, coord=fsym.coord,
        )
        self.temp_num += 1
        fsym.variables.append(sym)
        return sym

    def create_label(self):
        """A new basic-block label."""
        sym = Symbol(SymbolKind.LABEL, f"BB{self.label_num}", coord=self._coord())
        self.label_num += 1
        return sym

    def create_offset(self, ty, base, offset, coord=None):
        """An object of type ty at a constant offset inside base."""
        if offset == 0 and (base.ty.is_arith() or ty is base.ty):
            return base
        if base.kind == SymbolKind.OFFSET:
            offset += base.offset
            base = base.link
        sym = VariableSymbol(
            SymbolKind.OFFSET, f"{base.name}[{offset}]", ty, addressed=True,
            link=base, offset=offset, coord=coord,
        )
        base.ref += 1
        return sym