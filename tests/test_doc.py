"""Tests for the document algebra and its measures."""

from nickel_pretty.doc import (
    UNFLATTENABLE,
    Concat,
    Group,
    Measure,
    Text,
    concat,
    concat_measure,
    flatten_measure,
    group,
    hardline,
    intersperse,
    line,
    linebreak,
    nest,
    nil,
    suffix_len,
    text,
)


class TestMeasure:
    """Measure composition."""

    def test_concat_flat_parts(self) -> None:
        assert concat_measure(Measure(2, -1), Measure(3, -1)) == Measure(5, -1)

    def test_concat_uses_first_possible_newline(self) -> None:
        assert concat_measure(Measure(2, 1), Measure(5, 0)) == Measure(7, 1)

    def test_concat_newline_in_second_part(self) -> None:
        assert concat_measure(Measure(2, -1), Measure(1, 0)) == Measure(3, 2)

    def test_flatten_drops_newlines(self) -> None:
        assert flatten_measure(Measure(4, 1)) == Measure(4, -1)

    def test_suffix_len(self) -> None:
        assert suffix_len(Measure(9, 3)) == 3
        assert suffix_len(Measure(9, -1)) == 9


class TestConstructors:
    """Doc constructors precompute measures and normalize trivially."""

    def test_empty_text_is_nil(self) -> None:
        assert text("") is nil()

    def test_text_measure(self) -> None:
        assert text("abc").measure == Measure(3, -1)

    def test_multiline_text_cannot_be_flat(self) -> None:
        doc = text("ab\ncdef")
        assert doc.measure.flat == UNFLATTENABLE
        assert doc.measure.nonflat == 2

    def test_line_measure(self) -> None:
        assert line().measure == Measure(1, 0)
        assert linebreak().measure == Measure(0, 0)

    def test_hardline_is_unflattenable(self) -> None:
        assert hardline().measure.flat == UNFLATTENABLE

    def test_concat_splices_nested_concats(self) -> None:
        doc = concat(text("a"), concat(text("b"), text("c")))
        assert isinstance(doc, Concat)
        assert len(doc.docs) == 3
        assert doc.measure == Measure(3, -1)

    def test_concat_of_one_doc_is_that_doc(self) -> None:
        doc = text("a")
        assert concat(doc) is doc

    def test_concat_of_nothing_is_nil(self) -> None:
        assert concat() is nil()

    def test_add_operator(self) -> None:
        doc = text("a") + line() + text("b")
        assert doc.measure == Measure(3, 1)

    def test_nest_zero_is_identity(self) -> None:
        doc = text("a") + line()
        assert nest(0, doc) is doc

    def test_group_is_idempotent(self) -> None:
        doc = (text("a") + line()).group()
        assert isinstance(doc, Group)
        assert group(doc) is doc

    def test_group_skips_text(self) -> None:
        assert isinstance(text("a").group(), Text)

    def test_intersperse(self) -> None:
        doc = intersperse([text("a"), text("b"), text("c")], text(", "))
        assert doc.measure.flat == len("a, b, c")

    def test_intersperse_empty(self) -> None:
        assert intersperse([], text(",")) is nil()

    def test_enclosing_helpers(self) -> None:
        assert text("x").parens().measure.flat == 3
        assert text("x").double_quotes().measure.flat == 3
