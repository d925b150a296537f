"""Intermediate-language opcodes and the operators of the expression tree."""

from enum import Enum, IntEnum

__all__ = ["Opcode", "OpKind", "Operator", "uil_code_name"]


class Opcode(IntEnum):
    """Opcodes of the intermediate language."""

    BOR = 0
    BXOR = 1
    BAND = 2
    LSH = 3
    RSH = 4
    ADD = 5
    SUB = 6
    MUL = 7
    DIV = 8
    MOD = 9
    NEG = 10
    BCOM = 11
    JZ = 12
    JNZ = 13
    JE = 14
    JNE = 15
    JG = 16
    JL = 17
    JGE = 18
    JLE = 19
    JMP = 20
    IJMP = 21
    INC = 22
    DEC = 23
    ADDR = 24
    DEREF = 25
    EXTI1 = 26
    EXTU1 = 27
    EXTI2 = 28
    EXTU2 = 29
    TRUI1 = 30
    TRUI2 = 31
    CVTI4F4 = 32
    CVTI4F8 = 33
    CVTU4F4 = 34
    CVTU4F8 = 35
    CVTF4 = 36
    CVTF4I4 = 37
    CVTF4U4 = 38
    CVTF8 = 39
    CVTF8I4 = 40
    CVTF8U4 = 41
    MOV = 42
    IMOV = 43
    CALL = 44
    RET = 45
    CLR = 46
    NOP = 47


_UIL_NAMES = {
    Opcode.BOR: "|",
    Opcode.BXOR: "^",
    Opcode.BAND: "&",
    Opcode.LSH: "<<",
    Opcode.RSH: ">>",
    Opcode.ADD: "+",
    Opcode.SUB: "-",
    Opcode.MUL: "*",
    Opcode.DIV: "/",
    Opcode.MOD: "%",
    Opcode.NEG: "-",
    Opcode.BCOM: "~",
    Opcode.JZ: "",
    Opcode.JNZ: "!",
    Opcode.JE: "==",
    Opcode.JNE: "!=",
    Opcode.JG: ">",
    Opcode.JL: "<",
    Opcode.JGE: ">=",
    Opcode.JLE: "<=",
    Opcode.JMP: "jmp",
    Opcode.IJMP: "ijmp",
    Opcode.INC: "++",
    Opcode.DEC: "--",
    Opcode.ADDR: "&",
    Opcode.DEREF: "*",
    Opcode.EXTI1: "(int)(char)",
    Opcode.EXTU1: "(int)(unsigned char)",
    Opcode.EXTI2: "(int)(short)",
    Opcode.EXTU2: "(int)(unsigned short)",
    Opcode.TRUI1: "(char)(int)",
    Opcode.TRUI2: "(short)(int)",
    Opcode.CVTI4F4: "(float)(int)",
    Opcode.CVTI4F8: "(double)(int)",
    Opcode.CVTU4F4: "(float)(unsigned)",
    Opcode.CVTU4F8: "(double)(unsigned)",
    Opcode.CVTF4: "(double)(float)",
    Opcode.CVTF4I4: "(int)(float)",
    Opcode.CVTF4U4: "(unsigned)(float)",
    Opcode.CVTF8: "(float)(double)",
    Opcode.CVTF8I4: "(int)(double)",
    Opcode.CVTF8U4: "(unsigned)(double)",
    Opcode.MOV: "=",
    Opcode.IMOV: "*=",
    Opcode.CALL: "call",
    Opcode.RET: "ret",
    Opcode.CLR: "",
    Opcode.NOP: "NOP",
}


def uil_code_name(code):
    """Return the text used for an opcode in intermediate-code listings."""
    return _UIL_NAMES[Opcode(code)]


class OpKind(Enum):
    """The translation family an expression operator belongs to."""

    COMMA = "Comma"
    ASSIGNMENT = "Assignment"
    CONDITIONAL = "Conditional"
    ERROR = "Error"
    BINARY = "Binary"
    UNARY = "Unary"
    POSTFIX = "Postfix"
    PRIMARY = "Primary"


class Operator(IntEnum):
    """Operators of expression tree nodes."""

    COMMA = 0
    ASSIGN = 1
    BITOR_ASSIGN = 2
    BITXOR_ASSIGN = 3
    BITAND_ASSIGN = 4
    LSHIFT_ASSIGN = 5
    RSHIFT_ASSIGN = 6
    ADD_ASSIGN = 7
    SUB_ASSIGN = 8
    MUL_ASSIGN = 9
    DIV_ASSIGN = 10
    MOD_ASSIGN = 11
    QUESTION = 12
    COLON = 13
    OR = 14
    AND = 15
    BITOR = 16
    BITXOR = 17
    BITAND = 18
    EQUAL = 19
    UNEQUAL = 20
    GREAT = 21
    LESS = 22
    GREAT_EQ = 23
    LESS_EQ = 24
    LSHIFT = 25
    RSHIFT = 26
    ADD = 27
    SUB = 28
    MUL = 29
    DIV = 30
    MOD = 31
    CAST = 32
    PREINC = 33
    PREDEC = 34
    ADDRESS = 35
    DEREF = 36
    POS = 37
    NEG = 38
    COMP = 39
    NOT = 40
    SIZEOF = 41
    INDEX = 42
    CALL = 43
    MEMBER = 44
    PTR_MEMBER = 45
    POSTINC = 46
    POSTDEC = 47
    ID = 48
    CONST = 49
    STR = 50
    NONE = 51

    def precedence(self):
        """Binding strength; larger binds tighter."""
        return _OPERATOR_INFO[self][0]

    def symbol(self):
        """Source text of the operator."""
        return _OPERATOR_INFO[self][1]

    def kind(self):
        """The translation family of the operator."""
        return _OPERATOR_INFO[self][2]

    def ir_opcode(self):
        """The intermediate opcode the operator maps to directly, or NOP."""
        return _OPERATOR_INFO[self][3]


_K = OpKind
_O = Operator
_OPERATOR_INFO = {
    _O.COMMA: (1, ",", _K.COMMA, Opcode.NOP),
    _O.ASSIGN: (2, "=", _K.ASSIGNMENT, Opcode.NOP),
    _O.BITOR_ASSIGN: (2, "|=", _K.ASSIGNMENT, Opcode.NOP),
    _O.BITXOR_ASSIGN: (2, "^=", _K.ASSIGNMENT, Opcode.NOP),
    _O.BITAND_ASSIGN: (2, "&=", _K.ASSIGNMENT, Opcode.NOP),
    _O.LSHIFT_ASSIGN: (2, "<<=", _K.ASSIGNMENT, Opcode.NOP),
    _O.RSHIFT_ASSIGN: (2, ">>=", _K.ASSIGNMENT, Opcode.NOP),
    _O.ADD_ASSIGN: (2, "+=", _K.ASSIGNMENT, Opcode.NOP),
    _O.SUB_ASSIGN: (2, "-=", _K.ASSIGNMENT, Opcode.NOP),
    _O.MUL_ASSIGN: (2, "*=", _K.ASSIGNMENT, Opcode.NOP),
    _O.DIV_ASSIGN: (2, "/=", _K.ASSIGNMENT, Opcode.NOP),
    _O.MOD_ASSIGN: (2, "%=", _K.ASSIGNMENT, Opcode.NOP),
    _O.QUESTION: (3, "?", _K.CONDITIONAL, Opcode.NOP),
    _O.COLON: (3, ":", _K.ERROR, Opcode.NOP),
    _O.OR: (4, "||", _K.BINARY, Opcode.NOP),
    _O.AND: (5, "&&", _K.BINARY, Opcode.NOP),
    _O.BITOR: (6, "|", _K.BINARY, Opcode.BOR),
    _O.BITXOR: (7, "^", _K.BINARY, Opcode.BXOR),
    _O.BITAND: (8, "&", _K.BINARY, Opcode.BAND),
    _O.EQUAL: (9, "==", _K.BINARY, Opcode.JE),
    _O.UNEQUAL: (9, "!=", _K.BINARY, Opcode.JNE),
    _O.GREAT: (10, ">", _K.BINARY, Opcode.JG),
    _O.LESS: (10, "<", _K.BINARY, Opcode.JL),
    _O.GREAT_EQ: (10, ">=", _K.BINARY, Opcode.JGE),
    _O.LESS_EQ: (10, "<=", _K.BINARY, Opcode.JLE),
    _O.LSHIFT: (11, "<<", _K.BINARY, Opcode.LSH),
    _O.RSHIFT: (11, ">>", _K.BINARY, Opcode.RSH),
    _O.ADD: (12, "+", _K.BINARY, Opcode.ADD),
    _O.SUB: (12, "-", _K.BINARY, Opcode.SUB),
    _O.MUL: (13, "*", _K.BINARY, Opcode.MUL),
    _O.DIV: (13, "/", _K.BINARY, Opcode.DIV),
    _O.MOD: (13, "%", _K.BINARY, Opcode.MOD),
    _O.CAST: (14, "cast", _K.UNARY, Opcode.NOP),
    _O.PREINC: (14, "++", _K.UNARY, Opcode.NOP),
    _O.PREDEC: (14, "--", _K.UNARY, Opcode.NOP),
    _O.ADDRESS: (14, "&", _K.UNARY, Opcode.ADDR),
    _O.DEREF: (14, "*", _K.UNARY, Opcode.DEREF),
    _O.POS: (14, "+", _K.UNARY, Opcode.NOP),
    _O.NEG: (14, "-", _K.UNARY, Opcode.NEG),
    _O.COMP: (14, "~", _K.UNARY, Opcode.BCOM),
    _O.NOT: (14, "!", _K.UNARY, Opcode.NOP),
    _O.SIZEOF: (14, "sizeof", _K.UNARY, Opcode.NOP),
    _O.INDEX: (15, "[]", _K.POSTFIX, Opcode.NOP),
    _O.CALL: (15, "call", _K.POSTFIX, Opcode.NOP),
    _O.MEMBER: (15, ".", _K.POSTFIX, Opcode.NOP),
    _O.PTR_MEMBER: (15, "->", _K.POSTFIX, Opcode.NOP),
    _O.POSTINC: (15, "++", _K.POSTFIX, Opcode.INC),
    _O.POSTDEC: (15, "--", _K.POSTFIX, Opcode.DEC),
    _O.ID: (16, "id", _K.PRIMARY, Opcode.NOP),
    _O.CONST: (16, "const", _K.PRIMARY, Opcode.NOP),
    _O.STR: (16, "str", _K.PRIMARY, Opcode.NOP),
    _O.NONE: (17, "nop", _K.ERROR, Opcode.NOP),
}
del _K, _O