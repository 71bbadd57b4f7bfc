"""Tests for the high-level nickel_pretty API."""

from nickel_pretty.doc import Doc
from nickel_pretty.term import Array, Fun, Num, Record, Var
from nickel_pretty.types import Arrow, NumType


class TestPrettyFunction:
    """Tests for pretty()."""

    def test_record(self) -> None:
        from nickel_pretty import pretty

        assert pretty(Record({"b": Num(1), "a": Num(2)})) == "{ a = 2, b = 1 }"

    def test_width_argument(self) -> None:
        from nickel_pretty import pretty

        assert pretty(Record({"b": Num(1), "a": Num(2)}), width=5) == "{\n  a = 2,\n  b = 1,\n}"

    def test_output_has_no_trailing_whitespace(self) -> None:
        from nickel_pretty import pretty

        term = Record({"f": Fun("x", Record({"a": Var("x"), "b": Array((Num(1), Num(2)))}))})
        for width in (1, 5, 10, 20, 80):
            out = pretty(term, width=width)
            assert all(line == line.rstrip() for line in out.splitlines())


class TestPrettyTypesFunction:
    """Tests for pretty_types()."""

    def test_arrow(self) -> None:
        from nickel_pretty import pretty_types

        assert pretty_types(Arrow(NumType(), NumType())) == "Num -> Num"


class TestToDoc:
    """Tests for to_doc()."""

    def test_returns_document(self) -> None:
        from nickel_pretty import render, to_doc

        doc = to_doc(Array((Num(1), Num(2))))
        assert isinstance(doc, Doc)
        assert render(doc, 80) == "[1, 2]"
        assert render(doc, 4) == "[\n  1,\n  2,\n]"


class TestPrettyPrinter:
    """Tests for the reusable PrettyPrinter."""

    def test_terms_and_types(self) -> None:
        from nickel_pretty import PrettyPrinter

        printer = PrettyPrinter(width=40)
        assert printer(Array((Num(1), Num(2)))) == "[1, 2]"
        assert printer(Arrow(NumType(), NumType())) == "Num -> Num"

    def test_config(self) -> None:
        from nickel_pretty import PrettyPrinter

        printer = PrettyPrinter(width=40, indent=4, max_depth=10)
        assert printer.config.width == 40
        assert printer.config.indent == 4
        assert printer.config.max_depth == 10

    def test_to_doc(self) -> None:
        from nickel_pretty import PrettyPrinter

        printer = PrettyPrinter()
        assert isinstance(printer.to_doc(NumType()), Doc)
        assert isinstance(printer.to_doc(Num(1)), Doc)

    def test_satisfies_renderer_protocol(self) -> None:
        from nickel_pretty import ASTRenderer, PrettyPrinter, TermRenderer, TypesRenderer

        assert isinstance(TermRenderer(), ASTRenderer)
        assert isinstance(TypesRenderer(), ASTRenderer)
        assert isinstance(PrettyPrinter(), ASTRenderer)
