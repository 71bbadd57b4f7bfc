"""Scoped printer configuration and reusable printers.

PrettyConfig lives in a ContextVar, so a width set with
pretty_config_context() applies to everything printed inside the block
and nowhere else.
"""

from nickel_pretty import PrettyConfig, PrettyPrinter, pretty, pretty_config_context
from nickel_pretty.operators import BinaryOp, UnaryOp
from nickel_pretty.term import App, Fun, Op1, Op2, Var
from nickel_pretty.types import Arrow, Forall, TypeVar

# fun x y => if x then y else (y + y) - y
term = Fun(
    "x",
    Fun(
        "y",
        App(
            App(Op1(UnaryOp.ITE, Var("x")), Var("y")),
            Op2(BinaryOp.SUB, Op2(BinaryOp.PLUS, Var("y"), Var("y")), Var("y")),
        ),
    ),
)

print(pretty(term))

with pretty_config_context(PrettyConfig(width=16, indent=4)):
    print(pretty(term))

printer = PrettyPrinter(width=12)
print(printer(Forall("a", Forall("b", Arrow(TypeVar("a"), Arrow(TypeVar("b"), TypeVar("a")))))))
