"""C types of the target: primitive types, derived types and type relations."""

import copy
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag

__all__ = [
    "Categ",
    "Qual",
    "TypeCode",
    "Type",
    "ArrayType",
    "EnumType",
    "Field",
    "RecordType",
    "Parameter",
    "Signature",
    "FunctionType",
    "IGNORE_ZERO_SIZE_ARRAY",
    "align_up",
    "primitive",
    "default_function_type",
    "categ_name",
    "enum_type",
    "qualify",
    "unqual",
    "array_of",
    "pointer_to",
    "function_returning",
    "promote",
    "is_zero_size_array",
    "is_incomplete_enum",
    "is_incomplete_record",
    "is_incomplete_type",
    "is_compatible",
    "composite_type",
    "common_real_type",
    "adjust_parameter",
    "type_code",
    "type_to_string",
]

IGNORE_ZERO_SIZE_ARRAY = True

# Target configuration: sizes in bytes.
CHAR_SIZE = 1
SHORT_SIZE = 2
INT_SIZE = 4
LONG_SIZE = 4
LONG_LONG_SIZE = 4
FLOAT_SIZE = 4
DOUBLE_SIZE = 8
LONG_DOUBLE_SIZE = 8


class Categ(IntEnum):
    """Type categories, in the order the type rules depend on."""

    CHAR = 0
    UCHAR = 1
    SHORT = 2
    USHORT = 3
    INT = 4
    UINT = 5
    LONG = 6
    ULONG = 7
    LONGLONG = 8
    ULONGLONG = 9
    ENUM = 10
    FLOAT = 11
    DOUBLE = 12
    LONGDOUBLE = 13
    POINTER = 14
    VOID = 15
    UNION = 16
    STRUCT = 17
    ARRAY = 18
    FUNCTION = 19


class Qual(IntFlag):
    """Type qualifiers."""

    CONST = 0x1
    VOLATILE = 0x2


class TypeCode(IntEnum):
    """Machine-level representation of a type."""

    I1 = 0
    U1 = 1
    I2 = 2
    U2 = 3
    I4 = 4
    U4 = 5
    F4 = 6
    F8 = 7
    V = 8
    B = 9


_CATEG_NAMES = (
    "CHAR", "UCHAR", "SHORT", "USHORT", "INT", "UINT", "LONG", "ULONG",
    "LONGLONG", "ULONGLONG", "ENUM", "FLOAT", "DOUBLE", "LONGDOUBLE",
    "POINTER", "VOID", "UNION", "STRUCT", "ARRAY", "FUNCTION", "NA",
)


def categ_name(categ):
    """Upper-case name of a type category."""
    return _CATEG_NAMES[int(categ)]


def align_up(size, align):
    """Round size up to a multiple of align; an align of 0 leaves it alone."""
    if align == 0:
        return size
    return (size + align - 1) & ~(align - 1)


@dataclass(eq=False, repr=False)
class Type:
    """A C type; bty is the base type of derived and qualified types."""

    categ: Categ
    qual: int = 0
    align: int = 0
    size: int = 0
    bty: "Type | None" = None

    def __repr__(self):
        return f"{type(self).__name__}({type_to_string(self)!r})"

    def is_integer(self):
        return self.categ <= Categ.ENUM

    def is_unsigned(self):
        return bool(self.categ & 0x1)

    def is_real(self):
        return Categ.FLOAT <= self.categ <= Categ.LONGDOUBLE

    def is_arith(self):
        return self.categ <= Categ.LONGDOUBLE

    def is_scalar(self):
        return self.categ <= Categ.POINTER

    def is_pointer(self):
        return self.categ == Categ.POINTER

    def is_record(self):
        return self.categ in (Categ.STRUCT, Categ.UNION)

    def is_function(self):
        return self.categ == Categ.FUNCTION


@dataclass(eq=False, repr=False)
class ArrayType(Type):
    """An array; length is the element count."""

    length: int = 0


@dataclass(eq=False, repr=False)
class EnumType(Type):
    """An enumeration, compatible with int."""

    name: str | None = None
    complete: bool = False


@dataclass(eq=False)
class Field:
    """A member of a struct or union; bits is 0 unless it is a bit-field."""

    name: str | None
    ty: Type
    bits: int = 0
    offset: int = 0
    pos: int = 0


@dataclass(eq=False, repr=False)
class RecordType(Type):
    """A struct or union."""

    name: str | None = None
    fields: list = field(default_factory=list)
    has_const_field: bool = False
    has_flex_array: bool = False
    complete: bool = False


@dataclass(eq=False)
class Parameter:
    """A parameter of a function declaration."""

    name: str | None
    ty: Type
    reg: bool = False


@dataclass(eq=False)
class Signature:
    """Parameter information of a function type."""

    has_proto: bool = False
    has_ellipsis: bool = False
    params: list = field(default_factory=list)


@dataclass(eq=False, repr=False)
class FunctionType(Type):
    """A function type; bty is the return type."""

    sig: Signature = field(default_factory=Signature)


def _make_primitives():
    sizes = {
        Categ.CHAR: CHAR_SIZE, Categ.UCHAR: CHAR_SIZE,
        Categ.SHORT: SHORT_SIZE, Categ.USHORT: SHORT_SIZE,
        Categ.INT: INT_SIZE, Categ.UINT: INT_SIZE,
        Categ.LONG: LONG_SIZE, Categ.ULONG: LONG_SIZE,
        Categ.LONGLONG: LONG_LONG_SIZE, Categ.ULONGLONG: LONG_LONG_SIZE,
        Categ.FLOAT: FLOAT_SIZE, Categ.DOUBLE: DOUBLE_SIZE,
        Categ.LONGDOUBLE: LONG_DOUBLE_SIZE, Categ.POINTER: INT_SIZE,
    }
    table = {}
    for categ in Categ:
        if categ > Categ.VOID:
            break
        size = sizes.get(categ, 0)
        table[categ] = Type(categ, 0, size, size, None)
    table[Categ.POINTER].bty = table[Categ.INT]
    return table


_TYPES = _make_primitives()


def primitive(categ):
    """The shared type object of a primitive category (CHAR .. VOID)."""
    try:
        return _TYPES[Categ(categ)]
    except (KeyError, ValueError):
        raise ValueError(f"no primitive type for category {categ!r}") from None


_DEFAULT_FUNCTION_TYPE = FunctionType(
    Categ.FUNCTION,
    0,
    INT_SIZE,
    INT_SIZE,
    _TYPES[Categ.INT],
    Signature(has_proto=False, has_ellipsis=False, params=[]),
)


def default_function_type():
    """The type of an undeclared function: int f()."""
    return _DEFAULT_FUNCTION_TYPE


def enum_type(name):
    """A new enumeration type named name (None for an anonymous one)."""
    base = _TYPES[Categ.INT]
    return EnumType(Categ.ENUM, 0, base.align, base.size, base, name=name)


def qualify(qual, ty):
    """ty qualified with qual; ty itself if nothing changes."""
    if qual == 0 or qual == ty.qual:
        return ty
    qty = copy.copy(ty)
    qty.qual |= qual
    qty.bty = ty.bty if ty.qual != 0 else ty
    return qty


def unqual(ty):
    """The unqualified version of ty."""
    return ty.bty if ty.qual else ty


def array_of(length, ty):
    """An array of length elements of ty."""
    return ArrayType(Categ.ARRAY, 0, ty.align, length * ty.size, ty, length=length)


def pointer_to(ty):
    """A pointer to ty."""
    ptr = _TYPES[Categ.POINTER]
    return Type(Categ.POINTER, 0, ptr.align, ptr.size, ty)


def function_returning(ty, sig):
    """A function type returning ty with signature sig."""
    ptr = _TYPES[Categ.POINTER]
    return FunctionType(Categ.FUNCTION, 0, ptr.align, ptr.size, ty, sig)


def promote(ty):
    """Default argument promotion."""
    if ty.categ < Categ.INT:
        return _TYPES[Categ.INT]
    if ty.categ == Categ.FLOAT:
        return _TYPES[Categ.DOUBLE]
    return ty


def is_zero_size_array(ty):
    ty = unqual(ty)
    return ty.categ == Categ.ARRAY and ty.length == 0 and ty.size == 0


def is_incomplete_enum(ty):
    ty = unqual(ty)
    return ty.categ == Categ.ENUM and not ty.complete


def is_incomplete_record(ty):
    ty = unqual(ty)
    return ty.is_record() and not ty.complete


def is_incomplete_type(ty, ignore_zero_array):
    """True for incomplete enums and records, or arrays of them."""
    ty = unqual(ty)
    if ty.categ == Categ.ENUM:
        return is_incomplete_enum(ty)
    if ty.is_record():
        return is_incomplete_record(ty)
    if ty.categ == Categ.ARRAY:
        if ignore_zero_array:
            return is_incomplete_type(ty.bty, IGNORE_ZERO_SIZE_ARRAY)
        if is_zero_size_array(ty):
            return True
        return is_incomplete_type(ty.bty, not IGNORE_ZERO_SIZE_ARRAY)
    return False


def _compatible_functions(fty1, fty2):
    sig1, sig2 = fty1.sig, fty2.sig
    if not is_compatible(fty1.bty, fty2.bty):
        return False
    if not sig1.has_proto and not sig2.has_proto:
        return True
    if sig1.has_proto and sig2.has_proto:
        if sig1.has_ellipsis != sig2.has_ellipsis or len(sig1.params) != len(sig2.params):
            return False
        return all(is_compatible(p1.ty, p2.ty) for p1, p2 in zip(sig1.params, sig2.params))
    if not sig1.has_proto:
        sig1, sig2 = sig2, sig1
    # sig1 has a prototype, sig2 has none
    if sig1.has_ellipsis:
        return False
    if not sig2.params:
        return all(is_compatible(promote(p.ty), p.ty) for p in sig1.params)
    if len(sig1.params) != len(sig2.params):
        return False
    return all(
        is_compatible(p1.ty, promote(p2.ty)) for p1, p2 in zip(sig1.params, sig2.params)
    )


def is_compatible(ty1, ty2):
    """True if ty1 and ty2 are compatible types."""
    if ty1 is ty2:
        return True
    if ty1.qual != ty2.qual:
        return False
    ty1, ty2 = unqual(ty1), unqual(ty2)
    if ty1.categ != ty2.categ:
        return False
    if ty1.categ == Categ.POINTER:
        return is_compatible(ty1.bty, ty2.bty)
    if ty1.categ == Categ.ARRAY:
        return is_compatible(ty1.bty, ty2.bty) and (
            ty1.size == ty2.size or ty1.size == 0 or ty2.size == 0
        )
    if ty1.categ == Categ.FUNCTION:
        return _compatible_functions(ty1, ty2)
    return ty1 is ty2


def composite_type(ty1, ty2):
    """The composite of two compatible types.

    For function types the first type is updated in place, as the
    composite of its return and parameter types.
    """
    if not is_compatible(ty1, ty2):
        raise ValueError("composite type of incompatible types")
    if ty1.categ == Categ.ENUM:
        return ty1
    if ty2.categ == Categ.ENUM:
        return ty2
    if ty1.categ == Categ.POINTER:
        return qualify(ty1.qual, pointer_to(composite_type(ty1.bty, ty2.bty)))
    if ty1.categ == Categ.ARRAY:
        return ty1 if ty1.size != 0 else ty2
    if ty1.categ == Categ.FUNCTION:
        ty1.bty = composite_type(ty1.bty, ty2.bty)
        if ty1.sig.has_proto and ty2.sig.has_proto:
            for p1, p2 in zip(ty1.sig.params, ty2.sig.params):
                p1.ty = composite_type(p1.ty, p2.ty)
            return ty1
        return ty1 if ty1.sig.has_proto else ty2
    return ty1


def common_real_type(ty1, ty2):
    """Result type of the usual arithmetic conversions."""
    for categ in (Categ.LONGDOUBLE, Categ.DOUBLE, Categ.FLOAT):
        if ty1.categ == categ or ty2.categ == categ:
            return _TYPES[categ]
    int_ty = _TYPES[Categ.INT]
    ty1 = int_ty if ty1.categ < Categ.INT else ty1
    ty2 = int_ty if ty2.categ < Categ.INT else ty2
    if ty1.categ == ty2.categ:
        return ty1
    if ty1.is_unsigned() == ty2.is_unsigned():
        return ty1 if ty1.categ > ty2.categ else ty2
    if ty2.is_unsigned():
        ty1, ty2 = ty2, ty1
    # ty1 is unsigned, ty2 is signed
    if ty1.categ >= ty2.categ:
        return ty1
    if ty2.size > ty1.size:
        return ty2
    return _TYPES[Categ(ty2.categ + 1)]


def adjust_parameter(ty):
    """Type a parameter declared with ty actually has."""
    ty = unqual(ty)
    if ty.categ == Categ.ARRAY:
        return pointer_to(ty.bty)
    if ty.categ == Categ.FUNCTION:
        return pointer_to(ty)
    return ty


_C = TypeCode
_TYPE_CODES = (
    _C.I1, _C.U1, _C.I2, _C.U2, _C.I4, _C.U4, _C.I4, _C.U4, _C.I4, _C.U4, _C.I4,
    _C.F4, _C.F8, _C.F8, _C.U4, _C.V, _C.B, _C.B, _C.B,
)
del _C


def type_code(ty):
    """The machine representation of ty; function types have none."""
    if ty.categ == Categ.FUNCTION:
        raise ValueError("function types have no type code")
    return _TYPE_CODES[ty.categ]


_PRIMITIVE_NAMES = (
    "char", "unsigned char", "short", "unsigned short", "int", "unsigned int",
    "long", "unsigned long", "long long", "unsigned long long", "enum", "float",
    "double", "long double",
)


def _tag(name):
    return "(null)" if name is None else name


def type_to_string(ty):
    """Readable text of a type."""
    if ty.qual != 0:
        qual = ty.qual
        if qual == Qual.CONST:
            text = "const"
        elif qual == Qual.VOLATILE:
            text = "volatile"
        else:
            text = "const volatile"
        return f"{text} {type_to_string(unqual(ty))}"
    categ = ty.categ
    if categ <= Categ.LONGDOUBLE and categ != Categ.ENUM:
        return _PRIMITIVE_NAMES[categ]
    if categ == Categ.ENUM:
        return f"enum {_tag(ty.name)}"
    if categ == Categ.POINTER:
        return f"{type_to_string(ty.bty)} *"
    if categ == Categ.UNION:
        return f"union {_tag(ty.name)}"
    if categ == Categ.STRUCT:
        return f"struct {_tag(ty.name)}"
    if categ == Categ.ARRAY:
        count = ty.size // ty.bty.size if ty.bty.size else ty.length
        return f"{type_to_string(ty.bty)}[{count}]"
    if categ == Categ.VOID:
        return "void"
    if categ == Categ.FUNCTION:
        return f"{type_to_string(ty.bty)} ()"
    raise ValueError(f"unknown type category {categ!r}")