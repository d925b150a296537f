# uclc

`uclc` is a library of building blocks for a compiler of a C subset that
targets 32-bit x86. It has no runtime dependencies.

## Modules

- **`uclc.opcodes`**: the intermediate-language opcodes (`Opcode`) and the
  expression-tree operators (`Operator`). Each operator has `precedence()`,
  `symbol()`, `kind()` (an `OpKind`) and `ir_opcode()`. `uil_code_name(code)`
  returns the text an opcode is shown with in intermediate-code listings.
- **`uclc.tokens`**: the `Token` enum and `find_keyword(name, extra_keywords)`,
  which returns the keyword token for a name or `Token.ID`. `__int64` is a
  keyword only when it is listed in `extra_keywords`. `binary_operator` and
  `unary_operator` map a token to an `Operator` (or `Operator.NONE`), and
  `starts_declaration`, `starts_expression` and `starts_statement` test whether
  a token may begin each construct.
- **`uclc.names`**: `NamePool`, whose `intern(name)` returns one shared copy of
  each name; `elf_hash(data)`, the ELF hash of a byte string (a `str` is hashed
  as UTF-8, bytes are treated as signed chars); and `StringLiteral`, a narrow or
  wide literal that grows with `append` and gives its memory image, terminator
  included, with `to_bytes(wchar_size)`.
- **`uclc.options`**: `parse_command_line(argv)` returns an `Options` value. It
  understands `-ext:EXT`, `-o FILE`, `-ignore A,B,...`, `-keyword A,B,...`,
  `--dump-ast` and `--dump-IR`; the first other argument starts the list of
  input files. An option missing its argument raises `ValueError`.
- **`uclc.typesystem`**: C types sized for a 32-bit target (`int`, `long` and
  `long long` are 4 bytes, `double` and `long double` 8). It has the shared
  primitive types (`primitive(categ)`), `qualify`/`unqual`, `pointer_to`,
  `array_of`, `function_returning`, `enum_type`, `promote`, `is_compatible`,
  `composite_type`, `common_real_type`, `adjust_parameter`, the incomplete-type
  checks, `type_code` and `type_to_string`.
- **`uclc.records`**: struct and union construction and layout:
  `start_record`, `add_field`, `lookup_field` (which also looks inside unnamed
  struct/union members), `add_offset` and `end_record`, with bit-fields,
  alignment and flexible array members.
- **`uclc.symbols`**: `SymbolTable` with nested `Scope`s for identifiers and
  tags, parameter-list scopes, variables, functions, typedef names, enum
  constants, shared constants (`add_constant`, `int_constant`), string
  literals, temporaries (`t0`, `t1`, ...), labels (`BB0`, `BB1`, ...) and offset
  symbols (`create_offset`). A tag declared inside a parameter list adds a
  warning to `SymbolTable.warnings`.
- **`uclc.asm`**: `GasEmitter` (AT&T syntax) and `MasmEmitter` (Intel syntax)
  write program headers, segments, exports, labels, global and common data,
  string literals, float constants, values and space. `access_name(sym)` gives
  the operand text of a symbol; `output()` returns everything written.

## Examples

### Types

```python
from uclc.typesystem import Categ, primitive, pointer_to, array_of, type_to_string, common_real_type

int_ty = primitive(Categ.INT)
print(type_to_string(pointer_to(int_ty)))          # int *
print(type_to_string(array_of(4, int_ty)))         # int[4]

# long and unsigned int are both 4 bytes, so the common type is unsigned long
print(type_to_string(common_real_type(primitive(Categ.UINT), primitive(Categ.LONG))))
```

### Struct layout

```python
from uclc.typesystem import Categ, primitive
from uclc.records import start_record, add_field, end_record, lookup_field

rec = start_record("point", Categ.STRUCT)
add_field(rec, "x", primitive(Categ.CHAR), 0)
add_field(rec, "y", primitive(Categ.INT), 0)
end_record(rec)

print(rec.size, lookup_field(rec, "y").offset)     # 8 4
```

`end_record` raises `LayoutError` for a flexible array member in a union, and
for a struct that holds nothing but a flexible array member.

### Symbols and scopes

```python
from uclc.symbols import SymbolTable

table = SymbolTable()
table.enter_scope()
# ... add_variable / add_tag / add_typedef_name ...
table.exit_scope()

one = table.int_constant(1)
assert table.int_constant(1) is one                # equal constants are shared
```

### Assembly output

```python
from uclc.asm import GasEmitter, Segment

gas = GasEmitter()
gas.begin_program()
gas.segment(Segment.DATA)
gas.space(12)
gas.end_program()
print(gas.output())
```

`MasmEmitter` has the same methods and writes MASM syntax instead.

## What the package does not do

`uclc` is not a working compiler. It has no preprocessor, lexer or parser, no
semantic checking of a syntax tree, no translation of code into intermediate
instructions, no register allocation or instruction selection, and no command
to run. The assembly emitters write data definitions, labels and directives
only; they do not write the code of functions.

## Running the tests

Install the `test` extra and run `pytest` from the project root.