import pytest

from uclc.typesystem import (
    ArrayType,
    Categ,
    EnumType,
    Parameter,
    Qual,
    RecordType,
    Signature,
    TypeCode,
    adjust_parameter,
    align_up,
    array_of,
    categ_name,
    common_real_type,
    composite_type,
    default_function_type,
    enum_type,
    function_returning,
    is_compatible,
    is_incomplete_enum,
    is_incomplete_record,
    is_incomplete_type,
    is_zero_size_array,
    pointer_to,
    primitive,
    promote,
    qualify,
    type_code,
    type_to_string,
    unqual,
)

INT = primitive(Categ.INT)
UINT = primitive(Categ.UINT)
CHAR = primitive(Categ.CHAR)


def test_primitive_sizes_follow_configuration():
    assert primitive(Categ.CHAR).size == 1
    assert primitive(Categ.SHORT).size == 2
    assert INT.size == 4
    assert primitive(Categ.LONG).size == 4
    assert primitive(Categ.DOUBLE).size == 8
    assert primitive(Categ.POINTER).size == 4
    assert primitive(Categ.VOID).size == 0


def test_primitive_alignment_equals_size():
    for categ in Categ:
        if categ > Categ.VOID:
            break
        ty = primitive(categ)
        assert ty.align == ty.size
        assert ty.categ == categ


def test_primitive_rejects_derived_category():
    with pytest.raises(ValueError):
        primitive(Categ.STRUCT)


def test_categ_name():
    assert categ_name(Categ.ULONGLONG) == "ULONGLONG"
    assert categ_name(20) == "NA"


def test_align_up_zero_alignment_keeps_size():
    assert align_up(7, 0) == 7
    for size in range(20):
        aligned = align_up(size, 4)
        assert aligned % 4 == 0 and size <= aligned < size + 4


def test_qualify_and_unqual_round_trip():
    cint = qualify(Qual.CONST, INT)
    assert cint.qual == Qual.CONST
    assert unqual(cint) is INT
    assert qualify(0, INT) is INT
    assert qualify(Qual.CONST, cint) is cint
    cvint = qualify(Qual.VOLATILE, cint)
    assert unqual(cvint) is INT
    assert INT.qual == 0


def test_type_to_string():
    assert type_to_string(qualify(Qual.CONST, INT)) == "const int"
    assert type_to_string(qualify(Qual.CONST | Qual.VOLATILE, CHAR)) == "const volatile char"
    assert type_to_string(pointer_to(INT)) == "int *"
    assert type_to_string(array_of(3, INT)) == "int[3]"
    assert type_to_string(RecordType(Categ.STRUCT, name="Data")) == "struct Data"
    assert type_to_string(enum_type("color")) == "enum color"
    assert type_to_string(default_function_type()) == "int ()"
    assert type_to_string(primitive(Categ.VOID)) == "void"


def test_enum_is_int_sized_and_compatible_with_itself():
    ety = enum_type("e")
    assert ety.size == INT.size and ety.bty is INT
    assert is_compatible(ety, ety)
    assert not is_compatible(ety, INT)


def test_promote():
    assert promote(CHAR) is INT
    assert promote(primitive(Categ.FLOAT)) is primitive(Categ.DOUBLE)
    assert promote(UINT) is UINT


def test_compatible_pointers_and_qualifiers():
    assert is_compatible(pointer_to(INT), pointer_to(INT))
    assert not is_compatible(pointer_to(INT), pointer_to(CHAR))
    assert not is_compatible(qualify(Qual.CONST, INT), INT)


def test_compatible_arrays_with_unknown_size():
    assert is_compatible(array_of(0, INT), array_of(3, INT))
    assert is_compatible(array_of(3, INT), array_of(3, INT))
    assert not is_compatible(array_of(2, INT), array_of(3, INT))


def test_compatible_records_only_when_identical():
    a = RecordType(Categ.STRUCT, name="Data")
    b = RecordType(Categ.STRUCT, name="Data")
    assert is_compatible(a, a)
    assert not is_compatible(a, b)


def _proto(*types, ellipsis=False):
    return function_returning(
        INT,
        Signature(has_proto=True, has_ellipsis=ellipsis,
                  params=[Parameter(None, t) for t in types]),
    )


def test_compatible_functions():
    assert is_compatible(_proto(INT, INT), _proto(INT, INT))
    assert not is_compatible(_proto(INT), _proto(INT, ellipsis=True))
    assert not is_compatible(_proto(INT), _proto(INT, INT))
    old = function_returning(INT, Signature())
    assert is_compatible(_proto(INT, INT), old)
    assert not is_compatible(_proto(INT, CHAR), old)
    assert not is_compatible(old, _proto(INT, ellipsis=True))
    old_def = function_returning(
        INT, Signature(has_proto=False, params=[Parameter("a", CHAR)])
    )
    assert is_compatible(_proto(INT), old_def)
    assert not is_compatible(_proto(CHAR), old_def)


def test_composite_array_prefers_known_size():
    sized = array_of(3, INT)
    unsized = array_of(0, INT)
    assert composite_type(unsized, sized) is sized
    assert composite_type(sized, unsized) is sized


def test_composite_function_prefers_prototype():
    old = function_returning(INT, Signature())
    proto = _proto(INT)
    assert composite_type(old, proto) is proto


def test_composite_rejects_incompatible():
    with pytest.raises(ValueError):
        composite_type(INT, CHAR)


def test_common_real_type():
    double = primitive(Categ.DOUBLE)
    assert common_real_type(INT, double) is double
    assert common_real_type(CHAR, CHAR) is INT
    assert common_real_type(INT, UINT) is UINT
    # long cannot hold every unsigned int on this target
    assert common_real_type(UINT, primitive(Categ.LONG)) is primitive(Categ.ULONG)
    assert common_real_type(primitive(Categ.FLOAT), INT) is primitive(Categ.FLOAT)


def test_common_real_type_is_symmetric():
    cats = [c for c in Categ if c <= Categ.LONGDOUBLE and c != Categ.ENUM]
    for a in cats:
        for b in cats:
            assert common_real_type(primitive(a), primitive(b)) is common_real_type(
                primitive(b), primitive(a)
            )


def test_adjust_parameter():
    adjusted = adjust_parameter(array_of(3, INT))
    assert adjusted.categ == Categ.POINTER and adjusted.bty is INT
    fn = default_function_type()
    adjusted = adjust_parameter(fn)
    assert adjusted.categ == Categ.POINTER and adjusted.bty is fn
    assert adjust_parameter(qualify(Qual.CONST, INT)) is INT


def test_type_code():
    assert type_code(CHAR) == TypeCode.I1
    assert type_code(primitive(Categ.USHORT)) == TypeCode.U2
    assert type_code(primitive(Categ.LONG)) == TypeCode.I4
    assert type_code(enum_type(None)) == TypeCode.I4
    assert type_code(primitive(Categ.LONGDOUBLE)) == TypeCode.F8
    assert type_code(pointer_to(INT)) == TypeCode.U4
    assert type_code(primitive(Categ.VOID)) == TypeCode.V
    assert type_code(array_of(2, INT)) == TypeCode.B
    with pytest.raises(ValueError):
        type_code(default_function_type())


def test_incomplete_types():
    rec = RecordType(Categ.STRUCT, name="A")
    assert is_incomplete_record(rec)
    assert is_incomplete_type(array_of(2, rec), False)
    rec.complete = True
    assert not is_incomplete_type(rec, False)
    assert is_incomplete_enum(EnumType(Categ.ENUM, name="e"))
    empty = array_of(0, INT)
    assert is_zero_size_array(empty)
    assert is_incomplete_type(empty, False)
    assert not is_incomplete_type(empty, True)
    assert not is_incomplete_type(INT, False)


def test_predicates():
    assert INT.is_integer() and INT.is_arith() and INT.is_scalar()
    assert UINT.is_unsigned() and not INT.is_unsigned()
    assert primitive(Categ.DOUBLE).is_real()
    assert pointer_to(INT).is_pointer()
    assert RecordType(Categ.UNION).is_record()
    assert default_function_type().is_function()
    assert not isinstance(array_of(1, INT), EnumType)
    assert isinstance(array_of(1, INT), ArrayType)