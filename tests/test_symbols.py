import pytest

from uclc.records import add_field, end_record, start_record
from uclc.symbols import (
    FunctionSymbol,
    Scope,
    SymbolKind,
    SymbolTable,
    VariableSymbol,
    symbol_kind_name,
)
from uclc.tokens import Token
from uclc.typesystem import (
    Categ,
    Qual,
    array_of,
    function_returning,
    Signature,
    pointer_to,
    primitive,
    qualify,
)

INT = primitive(Categ.INT)
DOUBLE = primitive(Categ.DOUBLE)


@pytest.fixture
def table():
    return SymbolTable()


def in_function(table, name="main"):
    fsym = table.add_function(name, function_returning(INT, Signature()), Token.EXTERN)
    table.current_function = fsym
    return fsym


def test_symbol_kind_names():
    assert symbol_kind_name(SymbolKind.TAG) == "SK_Tag"
    assert symbol_kind_name(SymbolKind.OFFSET) == "SK_Offset"
    assert symbol_kind_name(12) == "SK_NotAvailable"


def test_scope_lookup_outer_and_local_only():
    outer = Scope(0)
    inner = Scope(1, outer)
    sym = outer.add(VariableSymbol(SymbolKind.VARIABLE, "x", INT))
    assert inner.lookup("x") is sym
    assert inner.lookup("x", search_outer=False) is None
    assert "x" in outer and "x" not in inner


def test_shadowing_and_exit_scope(table):
    g = table.add_variable("a", INT, Token.EXTERN)
    fsym = in_function(table)
    table.enter_scope()
    local = table.add_variable("a", INT, Token.AUTO)
    assert table.lookup_id("a") is local
    assert local.level == 1
    assert fsym.variables == [local]
    table.exit_scope()
    assert table.lookup_id("a") is g
    assert table.level == 0


def test_exit_global_scope_raises(table):
    with pytest.raises(RuntimeError):
        table.exit_scope()


def test_tags_and_identifiers_are_separate(table):
    rty = start_record("Data", Categ.STRUCT)
    tag = table.add_tag("Data", rty)
    assert table.lookup_tag("Data") is tag
    assert table.lookup_id("Data") is None
    assert table.warnings == []


def test_tag_in_parameter_list_warns(table):
    table.enter_parameter_list()
    table.add_tag("P", start_record("P", Categ.STRUCT))
    table.leave_parameter_list()
    assert len(table.warnings) == 1
    assert "STRUCT P" in table.warnings[0][1]
    assert table.lookup_tag("P") is None


def test_parameter_list_restore(table):
    table.enter_parameter_list()
    param = table.add_variable("n", INT, Token.AUTO) if False else None
    table.add_typedef_name("T", INT)
    table.save_parameter_list_table()
    table.leave_parameter_list()
    assert param is None
    assert table.lookup_id("T") is None
    table.restore_parameter_list_table()
    assert table.level == 1
    assert table.lookup_id("T").kind == SymbolKind.TYPEDEF_NAME
    assert table.lookup_id("T").level == 1


def test_globals_and_statics(table):
    g = table.add_variable("g", INT, Token.EXTERN)
    fsym = in_function(table)
    table.enter_scope()
    s = table.add_variable("s", INT, Token.STATIC)
    assert table.globals == [g, s]
    assert fsym.variables == []


def test_extern_in_block_visible_globally(table):
    in_function(table)
    table.enter_scope()
    e = table.add_variable("e", INT, Token.EXTERN)
    table.exit_scope()
    assert table.lookup_id("e") is e
    assert e not in table.globals


def test_function_is_global(table):
    table.enter_scope()
    f = table.add_function("f", function_returning(INT, Signature()), Token.EXTERN)
    table.exit_scope()
    assert isinstance(f, FunctionSymbol)
    assert table.lookup_id("f") is f
    assert table.functions == [f]


def test_enum_constant(table):
    sym = table.add_enum_constant("RED", INT, 3)
    assert sym.val == 3
    assert table.lookup_id("RED") is sym


def test_integer_constants_shared(table):
    a = table.int_constant(5)
    b = table.add_constant(primitive(Categ.CHAR), 5)
    assert a is b
    assert a.name == "5"
    assert a.ty is INT
    assert a.sclass == Token.STATIC
    assert table.int_constant(-1).name == "-1"


def test_pointer_constant_names(table):
    ptr = pointer_to(INT)
    assert table.add_constant(ptr, 0).name == "0"
    c = table.add_constant(ptr, 255)
    assert c.name == "0xff"
    assert c.ty is primitive(Categ.POINTER)


def test_float_constants(table):
    d = table.add_constant(DOUBLE, 1.5)
    assert d.name == "1.5"
    assert table.add_constant(primitive(Categ.LONGDOUBLE), 1.5) is d
    f = table.add_constant(primitive(Categ.FLOAT), 1.5)
    assert f is not d
    assert table.float_constants == [d, f]


def test_constant_of_struct_rejected(table):
    with pytest.raises(ValueError):
        table.add_constant(start_record("S", Categ.STRUCT), 0)


def test_qualified_constant_type(table):
    assert table.add_constant(qualify(Qual.CONST, INT), 7) is table.int_constant(7)


def test_strings_numbered_and_not_shared(table):
    ty = array_of(3, primitive(Categ.CHAR))
    s0 = table.add_string(ty, "ab")
    s1 = table.add_string(ty, "ab")
    assert (s0.name, s1.name) == ("str0", "str1")
    assert table.strings == [s0, s1]


def test_temps_and_labels(table):
    fsym = in_function(table)
    t0 = table.create_temp(INT)
    t1 = table.create_temp(INT)
    assert (t0.name, t1.name) == ("t0", "t1")
    assert t0.kind == SymbolKind.TEMP and t0.level == 1
    assert fsym.variables == [t0, t1]
    assert [table.create_label().name for _ in range(2)] == ["BB0", "BB1"]


def test_temp_needs_function(table):
    with pytest.raises(RuntimeError):
        table.create_temp(INT)


def test_offset_zero_returns_base(table):
    base = table.add_variable("d", DOUBLE, Token.EXTERN)
    assert table.create_offset(DOUBLE, base, 0) is base


def test_offsets_chain_to_base(table):
    inner = start_record("In", Categ.STRUCT)
    add_field(inner, "a", INT)
    add_field(inner, "b", INT)
    end_record(inner)
    base = table.add_variable("dt", inner, Token.EXTERN)
    first = table.create_offset(inner, base, 4)
    assert first.name == "dt[4]"
    assert first.link is base and first.addressed
    second = table.create_offset(INT, first, 4)
    assert second.link is base
    assert second.offset == first.offset + 4
    assert second.name == f"dt[{second.offset}]"
    assert base.ref == 2