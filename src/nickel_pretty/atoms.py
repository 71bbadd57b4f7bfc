"""Syntactic atom classification.

An atom never needs parentheses in an operand position: literals,
variables and enclosed forms (records, arrays, strings). The translators
consult these predicates instead of guessing from the rendered text.
"""

from nickel_pretty.operators import StaticAccess
from nickel_pretty.term import (
    Array,
    Bool,
    Enum,
    Lbl,
    Null,
    Num,
    Op1,
    ParseError,
    RecRecord,
    Record,
    ResolvedImport,
    Str,
    StrChunks,
    Sym,
    Term,
    Var,
    Wrapped,
)
from nickel_pretty.types import (
    BoolType,
    DynRecordType,
    DynType,
    EnumType,
    FlatType,
    NumType,
    RecordType,
    RowEmpty,
    StrType,
    SymType,
    Types,
    TypeVar,
)


def is_atom(term: Term) -> bool:
    """True if ``term`` prints without surrounding parentheses anywhere."""
    match term:
        case Null() | Bool() | Str() | StrChunks() | Var() | Enum():
            return True
        case Record() | RecRecord() | Array():
            return True
        case Num(value=value):
            # -1 reads as negation applied to 1
            return value >= 0
        case Op1(op=StaticAccess()):
            return True
        case Lbl() | Sym() | Wrapped() | ResolvedImport() | ParseError():
            # Internal placeholders print as comments; parentheses would not help.
            return True
        case _:
            return False


def is_type_atom(ty: Types) -> bool:
    """True if ``ty`` prints without surrounding parentheses anywhere."""
    match ty:
        case DynType() | NumType() | BoolType() | StrType() | SymType() | TypeVar():
            return True
        case EnumType() | RecordType() | DynRecordType() | RowEmpty():
            return True
        case FlatType(term=term):
            return is_atom(term)
        case _:
            return False


__all__ = ["is_atom", "is_type_atom"]
