"""Token kinds, keyword lookup and token classification."""

from enum import Enum, auto

from uclc.opcodes import Operator

__all__ = [
    "Token",
    "find_keyword",
    "binary_operator",
    "unary_operator",
    "starts_declaration",
    "starts_expression",
    "starts_statement",
]


class Token(Enum):
    """Token kinds used by the front end."""

    INT64 = auto()
    AUTO = auto()
    BREAK = auto()
    CASE = auto()
    CHAR = auto()
    CONST = auto()
    CONTINUE = auto()
    DEFAULT = auto()
    DO = auto()
    DOUBLE = auto()
    ELSE = auto()
    ENUM = auto()
    EXTERN = auto()
    FLOAT = auto()
    FOR = auto()
    GOTO = auto()
    IF = auto()
    INT = auto()
    LONG = auto()
    REGISTER = auto()
    RETURN = auto()
    SHORT = auto()
    SIGNED = auto()
    SIZEOF = auto()
    STATIC = auto()
    STRUCT = auto()
    SWITCH = auto()
    TYPEDEF = auto()
    UNION = auto()
    UNSIGNED = auto()
    VOID = auto()
    VOLATILE = auto()
    WHILE = auto()

    ID = auto()

    INTCONST = auto()
    UINTCONST = auto()
    LONGCONST = auto()
    ULONGCONST = auto()
    LLONGCONST = auto()
    ULLONGCONST = auto()
    FLOATCONST = auto()
    DOUBLECONST = auto()
    LDOUBLECONST = auto()
    STRING = auto()
    WIDESTRING = auto()

    ASSIGN = auto()
    BITOR_ASSIGN = auto()
    BITXOR_ASSIGN = auto()
    BITAND_ASSIGN = auto()
    LSHIFT_ASSIGN = auto()
    RSHIFT_ASSIGN = auto()
    ADD_ASSIGN = auto()
    SUB_ASSIGN = auto()
    MUL_ASSIGN = auto()
    DIV_ASSIGN = auto()
    MOD_ASSIGN = auto()
    OR = auto()
    AND = auto()
    BITOR = auto()
    BITXOR = auto()
    BITAND = auto()
    EQUAL = auto()
    UNEQUAL = auto()
    GREAT = auto()
    LESS = auto()
    GREAT_EQ = auto()
    LESS_EQ = auto()
    LSHIFT = auto()
    RSHIFT = auto()
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    MOD = auto()
    INC = auto()
    DEC = auto()
    NOT = auto()
    COMP = auto()

    LPAREN = auto()
    LBRACE = auto()
    SEMICOLON = auto()


_KEYWORDS = {
    "auto": Token.AUTO,
    "break": Token.BREAK,
    "case": Token.CASE,
    "char": Token.CHAR,
    "const": Token.CONST,
    "continue": Token.CONTINUE,
    "default": Token.DEFAULT,
    "do": Token.DO,
    "double": Token.DOUBLE,
    "else": Token.ELSE,
    "enum": Token.ENUM,
    "extern": Token.EXTERN,
    "float": Token.FLOAT,
    "for": Token.FOR,
    "goto": Token.GOTO,
    "if": Token.IF,
    "int": Token.INT,
    "long": Token.LONG,
    "register": Token.REGISTER,
    "return": Token.RETURN,
    "short": Token.SHORT,
    "signed": Token.SIGNED,
    "sizeof": Token.SIZEOF,
    "static": Token.STATIC,
    "struct": Token.STRUCT,
    "switch": Token.SWITCH,
    "typedef": Token.TYPEDEF,
    "union": Token.UNION,
    "unsigned": Token.UNSIGNED,
    "void": Token.VOID,
    "volatile": Token.VOLATILE,
    "while": Token.WHILE,
}

# Keywords that are recognised only when enabled on the command line.
_OPTIONAL_KEYWORDS = {"__int64": Token.INT64}


def find_keyword(name, extra_keywords=()):
    """Return the keyword token for name, or Token.ID for an identifier."""
    token = _KEYWORDS.get(name)
    if token is not None:
        return token
    if name in extra_keywords:
        return _OPTIONAL_KEYWORDS.get(name, Token.ID)
    return Token.ID


_N = Operator.NONE
_TOKEN_OPERATORS = {
    Token.ASSIGN: (Operator.ASSIGN, _N),
    Token.BITOR_ASSIGN: (Operator.BITOR_ASSIGN, _N),
    Token.BITXOR_ASSIGN: (Operator.BITXOR_ASSIGN, _N),
    Token.BITAND_ASSIGN: (Operator.BITAND_ASSIGN, _N),
    Token.LSHIFT_ASSIGN: (Operator.LSHIFT_ASSIGN, _N),
    Token.RSHIFT_ASSIGN: (Operator.RSHIFT_ASSIGN, _N),
    Token.ADD_ASSIGN: (Operator.ADD_ASSIGN, _N),
    Token.SUB_ASSIGN: (Operator.SUB_ASSIGN, _N),
    Token.MUL_ASSIGN: (Operator.MUL_ASSIGN, _N),
    Token.DIV_ASSIGN: (Operator.DIV_ASSIGN, _N),
    Token.MOD_ASSIGN: (Operator.MOD_ASSIGN, _N),
    Token.OR: (Operator.OR, _N),
    Token.AND: (Operator.AND, _N),
    Token.BITOR: (Operator.BITOR, _N),
    Token.BITXOR: (Operator.BITXOR, _N),
    Token.BITAND: (Operator.BITAND, Operator.ADDRESS),
    Token.EQUAL: (Operator.EQUAL, _N),
    Token.UNEQUAL: (Operator.UNEQUAL, _N),
    Token.GREAT: (Operator.GREAT, _N),
    Token.LESS: (Operator.LESS, _N),
    Token.GREAT_EQ: (Operator.GREAT_EQ, _N),
    Token.LESS_EQ: (Operator.LESS_EQ, _N),
    Token.LSHIFT: (Operator.LSHIFT, _N),
    Token.RSHIFT: (Operator.RSHIFT, _N),
    Token.ADD: (Operator.ADD, Operator.POS),
    Token.SUB: (Operator.SUB, Operator.NEG),
    Token.MUL: (Operator.MUL, Operator.DEREF),
    Token.DIV: (Operator.DIV, _N),
    Token.MOD: (Operator.MOD, _N),
    Token.INC: (_N, Operator.PREINC),
    Token.DEC: (_N, Operator.PREDEC),
    Token.NOT: (_N, Operator.NOT),
    Token.COMP: (_N, Operator.COMP),
}
del _N


def binary_operator(token):
    """Operator a token stands for between two operands, or Operator.NONE."""
    return _TOKEN_OPERATORS.get(token, (Operator.NONE, Operator.NONE))[0]


def unary_operator(token):
    """Operator a token stands for before one operand, or Operator.NONE."""
    return _TOKEN_OPERATORS.get(token, (Operator.NONE, Operator.NONE))[1]


_FIRST_DECLARATION = frozenset({
    Token.AUTO, Token.EXTERN, Token.REGISTER, Token.STATIC, Token.TYPEDEF,
    Token.CONST, Token.VOLATILE, Token.SIGNED, Token.UNSIGNED, Token.SHORT,
    Token.LONG, Token.CHAR, Token.INT, Token.INT64, Token.FLOAT,
    Token.DOUBLE, Token.ENUM, Token.STRUCT, Token.UNION, Token.VOID, Token.ID,
})

_FIRST_EXPRESSION = frozenset({
    Token.SIZEOF, Token.ID, Token.INTCONST, Token.UINTCONST, Token.LONGCONST,
    Token.ULONGCONST, Token.LLONGCONST, Token.ULLONGCONST, Token.FLOATCONST,
    Token.DOUBLECONST, Token.LDOUBLECONST, Token.STRING, Token.WIDESTRING,
    Token.BITAND, Token.ADD, Token.SUB, Token.MUL, Token.INC, Token.DEC,
    Token.NOT, Token.COMP, Token.LPAREN,
})

_FIRST_STATEMENT = _FIRST_EXPRESSION | {
    Token.BREAK, Token.CASE, Token.CONTINUE, Token.DEFAULT, Token.DO,
    Token.FOR, Token.GOTO, Token.IF, Token.LBRACE, Token.RETURN,
    Token.SWITCH, Token.WHILE, Token.SEMICOLON,
}


def starts_declaration(token):
    """True if a declaration may begin with token."""
    return token in _FIRST_DECLARATION


def starts_expression(token):
    """True if an expression may begin with token."""
    return token in _FIRST_EXPRESSION


def starts_statement(token):
    """True if a statement may begin with token."""
    return token in _FIRST_STATEMENT