"""Primitive operators of the language.

Unary operators carry a fixity (``OpPos``) that decides their layout.
Most operators are plain enum members; the few that carry data
(``StaticAccess``, ``Embed``, ``SwitchOp``) are small frozen dataclasses.

Binary operators with a symbol print infix (``a + b``); the rest are
builtins written in prefix form with their ``%name%`` spelling.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class OpPos(Enum):
    """Where a unary operator sits relative to its operand."""

    PREFIX = "prefix"
    POSTFIX = "postfix"
    SPECIAL = "special"


class UnaryOp(Enum):
    """Unary primitive operators without payload."""

    ITE = "ite"
    IS_NUM = "isnum"
    IS_BOOL = "isbool"
    IS_STR = "isstr"
    IS_FUN = "isfun"
    IS_ARRAY = "isarray"
    IS_RECORD = "isrecord"
    BOOL_AND = "booland"
    BOOL_OR = "boolor"
    BOOL_NOT = "boolnot"
    BLAME = "blame"
    POL = "pol"
    ARRAY_MAP = "arraymap"
    ARRAY_GEN = "arraygen"
    RECORD_MAP = "recordmap"
    SEQ = "seq"
    DEEP_SEQ = "deepseq"
    ARRAY_HEAD = "head"
    ARRAY_TAIL = "tail"
    ARRAY_LENGTH = "length"
    FIELDS_OF = "fieldsof"
    VALUES_OF = "valuesof"
    CHUNKS_CONCAT = "chunksconcat"
    STR_TRIM = "strtrim"
    STR_CHARS = "strchars"
    CHAR_CODE = "charcode"
    CHAR_FROM_CODE = "charfromcode"
    STR_UPPERCASE = "struppercase"
    STR_LOWERCASE = "strlowercase"
    STR_LENGTH = "strlength"
    TO_STR = "tostr"
    NUM_FROM_STR = "numfromstr"
    ENUM_FROM_STR = "enumfromstr"

    @property
    def pos(self) -> OpPos:
        if self in (UnaryOp.BOOL_AND, UnaryOp.BOOL_OR):
            return OpPos.POSTFIX
        if self is UnaryOp.ITE:
            return OpPos.SPECIAL
        return OpPos.PREFIX

    @property
    def symbol(self) -> str:
        return _UNARY_SYMBOLS.get(self, f"%{self.value}%")


_UNARY_SYMBOLS = {
    UnaryOp.ITE: "if",
    UnaryOp.BOOL_AND: "&&",
    UnaryOp.BOOL_OR: "||",
    UnaryOp.BOOL_NOT: "!",
}


@dataclass(frozen=True, slots=True)
class StaticAccess:
    """Field access with a statically known name: ``record.field``."""

    field: str

    @property
    def pos(self) -> OpPos:
        return OpPos.POSTFIX


@dataclass(frozen=True, slots=True)
class Embed:
    """Embed a value into a larger enum type."""

    tag: str

    @property
    def pos(self) -> OpPos:
        return OpPos.PREFIX

    @property
    def symbol(self) -> str:
        return f"%embed% {self.tag}"


@dataclass(frozen=True, slots=True)
class SwitchOp:
    """Internal primitive behind ``switch``; only exists after desugaring."""

    has_default: bool

    @property
    def pos(self) -> OpPos:
        return OpPos.SPECIAL


UnaryOperator: TypeAlias = UnaryOp | StaticAccess | Embed | SwitchOp


class BinaryOp(Enum):
    """Binary primitive operators."""

    PLUS = "+"
    SUB = "-"
    MULT = "*"
    DIV = "/"
    MODULO = "%"
    EQ = "=="
    LESS_THAN = "<"
    LESS_OR_EQ = "<="
    GREATER_THAN = ">"
    GREATER_OR_EQ = ">="
    MERGE = "&"
    STR_CONCAT = "++"
    ARRAY_CONCAT = "@"
    DYN_ACCESS = "."
    POW = "%pow%"
    UNWRAP = "%unwrap%"
    GO_FIELD = "%gofield%"
    DYN_EXTEND = "%dynextend%"
    DYN_REMOVE = "%dynremove%"
    HAS_FIELD = "%hasfield%"
    ARRAY_ELEM_AT = "%elemat%"
    HASH = "%hash%"
    SERIALIZE = "%serialize%"
    DESERIALIZE = "%deserialize%"
    STR_SPLIT = "%strsplit%"
    STR_CONTAINS = "%strcontains%"
    STR_IS_MATCH = "%strismatch%"
    STR_MATCH = "%strmatch%"
    ASSUME = "%assume%"
    TAG = "%tag%"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def is_infix(self) -> bool:
        return not self.value.startswith("%") or self is BinaryOp.MODULO


class NAryOp(Enum):
    """Primitive operators taking more than two arguments."""

    STR_REPLACE = "strreplace"
    STR_REPLACE_REGEX = "strreplaceregex"
    STR_SUBSTR = "substr"
    MERGE_CONTRACT = "mergecontract"

    @property
    def symbol(self) -> str:
        return f"%{self.value}%"


__all__ = [
    "BinaryOp",
    "Embed",
    "NAryOp",
    "OpPos",
    "StaticAccess",
    "SwitchOp",
    "UnaryOp",
    "UnaryOperator",
]
