"""Tests for the term renderer.

Covers every term variant plus the layout decisions that keep output
re-parseable: parenthesization, sugar for conditionals and curried
functions, deterministic field order and narrow-width breaking.
"""

import pytest

from nickel_pretty import pretty
from nickel_pretty.destruct import RecordPattern, SimpleMatch
from nickel_pretty.operators import BinaryOp, Embed, NAryOp, StaticAccess, UnaryOp
from nickel_pretty.renderers import TermRenderer
from nickel_pretty.renderers.term import format_number
from nickel_pretty.term import (
    App,
    Array,
    Bool,
    Enum,
    Fun,
    FunPattern,
    Import,
    Lbl,
    Let,
    LetPattern,
    MergePriority,
    MetaValue,
    Null,
    Num,
    Op1,
    Op2,
    OpN,
    ParseError,
    RecordAttrs,
    RecRecord,
    Record,
    ResolvedImport,
    Str,
    StrChunks,
    StrExpr,
    Switch,
    Sym,
    Var,
    Wrapped,
)
from nickel_pretty.types import FlatType, NumType, StrType


def _plus(left, right):
    return Op2(BinaryOp.PLUS, left, right)


# =========================================================================
# Literals
# =========================================================================


class TestLiterals:
    """Constants and plain strings."""

    def test_null_and_bools(self) -> None:
        assert pretty(Null()) == "null"
        assert pretty(Bool(True)) == "true"
        assert pretty(Bool(False)) == "false"

    def test_enum_tag(self) -> None:
        assert pretty(Enum("foo")) == "`foo"

    def test_quoted_enum_tag(self) -> None:
        assert pretty(Enum("a b")) == '`"a b"'

    def test_var(self) -> None:
        assert pretty(Var("x")) == "x"

    def test_string_is_escaped(self) -> None:
        assert pretty(Str('he said "hi"')) == '"he said \\"hi\\""'

    def test_string_interpolation_opener_is_escaped(self) -> None:
        assert pretty(Str("50%{")) == '"50\\%{"'

    def test_backslash_quote_and_opener_together(self) -> None:
        assert pretty(Str('a\\b"c%{d')) == '"a\\\\b\\"c\\%{d"'


class TestNumbers:
    """Decimal notation without exponent."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, "1"),
            (1.0, "1"),
            (1.5, "1.5"),
            (-3, "-3"),
            (0.1, "0.1"),
            (1e20, "100000000000000000000"),
            (1e-7, "0.0000001"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_num_term(self) -> None:
        assert pretty(Num(42)) == "42"


# =========================================================================
# Strings with interpolation
# =========================================================================


class TestStrChunks:
    """Interpolated strings."""

    def test_empty(self) -> None:
        assert pretty(StrChunks(())) == '""'

    def test_single_literal(self) -> None:
        assert pretty(StrChunks.of('a "b"')) == '"a \\"b\\""'

    def test_single_expression(self) -> None:
        assert pretty(StrChunks.of(StrExpr(Var("x")))) == '"%{x}"'

    def test_mixed_chunks_use_multiline_syntax(self) -> None:
        term = StrChunks.of("Hello, ", StrExpr(Var("name")), "!")
        assert pretty(term) == 'm%"Hello, %{name}!"%m'

    def test_stored_order_is_reversed(self) -> None:
        term = StrChunks.of("a", StrExpr(Var("x")))
        assert term.chunks[0] == StrExpr(Var("x"))

    def test_marker_widens_for_colliding_literal(self) -> None:
        term = StrChunks.of("cost: 50%{", StrExpr(Var("x")))
        assert pretty(term) == 'm%%"cost: 50%{%%{x}"%%m'

    def test_marker_widens_for_closing_delimiter(self) -> None:
        term = StrChunks.of('quote "%%m', StrExpr(Var("x")))
        assert pretty(term) == 'm%%%"quote "%%m%%%{x}"%%%m'

    def test_trailing_percent_before_interpolation(self) -> None:
        term = StrChunks.of("50%", StrExpr(Var("x")), "!")
        assert pretty(term) == 'm%%"50%%%{x}!"%%m'

    def test_delimiter_split_across_literals(self) -> None:
        term = StrChunks.of('a"%', "m", StrExpr(Var("x")))
        out = pretty(term)
        assert out == 'm%%"a"%m%%{x}"%%m'
        assert out.count('"%%m') == 1


# =========================================================================
# Records
# =========================================================================


class TestRecords:
    """Record literals."""

    def test_sorted_fields(self) -> None:
        assert pretty(Record({"b": Num(1), "a": Num(2)})) == "{ a = 2, b = 1 }"

    def test_narrow_width_breaks_one_field_per_line(self) -> None:
        out = pretty(Record({"b": Num(1), "a": Num(2)}), width=5)
        assert out == "{\n  a = 2,\n  b = 1,\n}"

    def test_empty(self) -> None:
        assert pretty(Record({})) == "{}"

    def test_open_record(self) -> None:
        term = Record({"a": Num(1)}, RecordAttrs(open=True))
        assert pretty(term) == "{ a = 1, .. }"
        assert pretty(term, width=5) == "{\n  a = 1,\n  ..\n}"

    def test_open_empty_record(self) -> None:
        assert pretty(Record({}, RecordAttrs(open=True))) == "{ .. }"

    def test_quoted_field_name(self) -> None:
        assert pretty(Record({"foo bar": Num(1)})) == '{ "foo bar" = 1 }'

    def test_non_atomic_value(self) -> None:
        term = Record({"a": _plus(Num(1), Num(2))})
        assert pretty(term) == "{ a = 1 + 2 }"
        assert pretty(term, width=12) == "{\n  a = 1 + 2,\n}"

    def test_trailing_comma_counts_toward_width(self) -> None:
        term = Record({"a": _plus(Num(1), Num(2))})
        out = pretty(term, width=11)
        assert out == "{\n  a =\n    1 + 2,\n}"
        assert max(len(line) for line in out.split("\n")) <= 11

    def test_nested_records(self) -> None:
        term = Record({"server": Record({"port": Num(80), "host": Str("x")})})
        assert pretty(term) == '{ server = { host = "x", port = 80 } }'

    def test_nested_records_broken(self) -> None:
        term = Record({"server": Record({"port": Num(80), "host": Str("x")})})
        expected = '{\n  server = {\n    host = "x",\n    port = 80,\n  },\n}'
        assert pretty(term, width=20) == expected

    def test_indent_setting(self) -> None:
        out = pretty(Record({"a": Num(1)}), width=3, indent=4)
        assert out == "{\n    a = 1,\n}"

    def test_rec_record_dynamic_fields_after_static(self) -> None:
        term = RecRecord(
            {"z": Num(1)},
            dyn_fields=((Str("b"), Num(2)), (Str("a"), Num(3))),
        )
        assert pretty(term) == '{ z = 1, "a" = 3, "b" = 2 }'

    def test_rec_record_interpolated_key(self) -> None:
        term = RecRecord({}, dyn_fields=((StrChunks.of(StrExpr(Var("k"))), Num(1)),))
        assert pretty(term) == '{ "%{k}" = 1 }'


class TestFieldMetadata:
    """Annotated record fields."""

    def test_type_and_default(self) -> None:
        field = MetaValue(Num(80), types=NumType(), priority=MergePriority.DEFAULT)
        assert pretty(Record({"port": field})) == "{ port : Num | default = 80 }"

    def test_contract(self) -> None:
        field = MetaValue(Num(80), contracts=(FlatType(Var("Port")),))
        assert pretty(Record({"port": field})) == "{ port | Port = 80 }"

    def test_doc(self) -> None:
        field = MetaValue(Str("x"), doc="The name")
        assert pretty(Record({"a": field})) == '{ a | doc "The name" = "x" }'

    def test_without_value(self) -> None:
        assert pretty(Record({"a": MetaValue(types=StrType())})) == "{ a : Str }"

    def test_normal_priority_prints_nothing(self) -> None:
        assert pretty(Record({"a": MetaValue(Num(1))})) == "{ a = 1 }"


# =========================================================================
# Functions and binders
# =========================================================================


class TestFunctions:
    """Function literals."""

    def test_curried_parameters_collapse(self) -> None:
        term = Fun("x", Fun("y", _plus(Var("x"), Var("y"))))
        assert pretty(term) == "fun x y => x + y"

    def test_broken_body_is_indented(self) -> None:
        term = Fun("x", Fun("y", _plus(Var("x"), Var("y"))))
        assert pretty(term, width=12) == "fun x y =>\n  x + y"

    def test_pattern_parameter(self) -> None:
        term = FunPattern(None, RecordPattern((SimpleMatch("a"), SimpleMatch("b"))), Var("a"))
        assert pretty(term) == "fun {a, b} => a"

    def test_aliased_open_pattern(self) -> None:
        term = FunPattern("x", RecordPattern((SimpleMatch("a"),), open=True), Var("x"))
        assert pretty(term) == "fun x@{a, ..} => x"

    def test_mixed_parameters(self) -> None:
        term = Fun("f", FunPattern(None, RecordPattern((SimpleMatch("a"),)), Var("a")))
        assert pretty(term) == "fun f {a} => a"


class TestPatterns:
    """Destructuring patterns."""

    def _render(self, pattern: RecordPattern) -> str:
        return pretty(FunPattern(None, pattern, Null()))

    def test_rest_binder(self) -> None:
        pattern = RecordPattern((SimpleMatch("a"),), rest="others")
        assert self._render(pattern) == "fun {a, ..others} => null"

    def test_default_value(self) -> None:
        pattern = RecordPattern((SimpleMatch("a", MetaValue(Num(1))),))
        assert self._render(pattern) == "fun {a ? 1} => null"

    def test_type_annotation(self) -> None:
        pattern = RecordPattern((SimpleMatch("a", MetaValue(types=NumType())),))
        assert self._render(pattern) == "fun {a : Num} => null"

    def test_empty_pattern(self) -> None:
        assert self._render(RecordPattern(())) == "fun {} => null"


class TestLet:
    """Let bindings."""

    def test_simple(self) -> None:
        assert pretty(Let("x", Num(1), Var("x"))) == "let x = 1 in x"

    def test_body_moves_to_next_line(self) -> None:
        assert pretty(Let("x", Num(1), Var("x")), width=12) == "let x = 1 in\nx"

    def test_annotated_binding(self) -> None:
        term = Let("x", MetaValue(Num(1), types=NumType()), Var("x"))
        assert pretty(term) == "let x : Num = 1 in x"

    def test_pattern_binding(self) -> None:
        term = LetPattern(None, RecordPattern((SimpleMatch("a"),)), Var("r"), Var("a"))
        assert pretty(term) == "let {a} = r in a"

    def test_aliased_pattern_binding(self) -> None:
        term = LetPattern("r", RecordPattern((SimpleMatch("a"),)), Var("s"), Var("a"))
        assert pretty(term) == "let r@{a} = s in a"

    def test_long_chain_renders_one_binding_per_line(self) -> None:
        term = Var("x")
        for i in reversed(range(250)):
            term = Let(f"x{i}", Num(i), term)
        lines = pretty(term).split("\n")
        assert len(lines) == 250
        assert lines[0] == "let x0 = 0 in"
        assert lines[-1] == "let x249 = 249 in x"


# =========================================================================
# Application and conditionals
# =========================================================================


class TestApplication:
    """Function application."""

    def test_spine_flattens(self) -> None:
        assert pretty(App(App(Var("f"), Var("x")), Num(1))) == "f x 1"

    def test_non_atomic_argument(self) -> None:
        assert pretty(App(Var("f"), _plus(Num(1), Num(2)))) == "f (1 + 2)"

    def test_negative_argument(self) -> None:
        assert pretty(App(Var("f"), Num(-1))) == "f (-1)"

    def test_function_head(self) -> None:
        assert pretty(App(Fun("x", Var("x")), Num(1))) == "(fun x => x) 1"

    def test_field_access_head(self) -> None:
        head = Op1(StaticAccess("map"), Var("array"))
        assert pretty(App(head, Var("f"))) == "array.map f"

    def test_operator_section_head_is_parenthesized(self) -> None:
        term = App(App(Op1(UnaryOp.BOOL_AND, Var("a")), Var("b")), Var("c"))
        assert pretty(term) == "(a && b) c"

    def test_applied_operator_section(self) -> None:
        term = App(Op1(UnaryOp.BOOL_AND, Var("a")), Var("b"))
        assert pretty(term) == "a && b"


class TestConditional:
    """``if``/``then``/``else`` sugar."""

    def _ite(self):
        return App(App(Op1(UnaryOp.ITE, Var("c")), Num(1)), Num(2))

    def test_flat(self) -> None:
        assert pretty(self._ite()) == "if c then 1 else 2"

    def test_broken(self) -> None:
        assert pretty(self._ite(), width=10) == "if c then\n  1\nelse\n  2"

    def test_partial_application(self) -> None:
        assert pretty(App(Op1(UnaryOp.ITE, Var("c")), Num(1))) == "if c then 1 else"

    def test_bare_primitive(self) -> None:
        assert pretty(Op1(UnaryOp.ITE, Var("c"))) == "if c"

    def test_as_argument(self) -> None:
        assert pretty(App(Var("f"), self._ite())) == "f (if c then 1 else 2)"


# =========================================================================
# Operators
# =========================================================================


class TestOperators:
    """Primitive operators."""

    def test_infix(self) -> None:
        assert pretty(_plus(Var("a"), Var("b"))) == "a + b"

    def test_nested_infix_is_parenthesized(self) -> None:
        assert pretty(_plus(_plus(Var("a"), Var("b")), Var("c"))) == "(a + b) + c"

    def test_negation(self) -> None:
        assert pretty(Op2(BinaryOp.SUB, Num(0), Var("x"))) == "-x"

    def test_negation_of_compound(self) -> None:
        term = Op2(BinaryOp.SUB, Num(0), _plus(Var("a"), Var("b")))
        assert pretty(term) == "-(a + b)"

    def test_subtraction(self) -> None:
        assert pretty(Op2(BinaryOp.SUB, Num(1), Var("x"))) == "1 - x"

    def test_modulo_is_infix(self) -> None:
        assert pretty(Op2(BinaryOp.MODULO, Var("a"), Num(2))) == "a % 2"

    def test_prefix_builtin(self) -> None:
        assert pretty(Op2(BinaryOp.POW, Num(2), Num(3))) == "%pow% 2 3"

    def test_nary(self) -> None:
        term = OpN(NAryOp.STR_SUBSTR, (Str("abc"), Num(0), Num(1)))
        assert pretty(term) == '%substr% "abc" 0 1'

    def test_not(self) -> None:
        assert pretty(Op1(UnaryOp.BOOL_NOT, Var("b"))) == "!b"

    def test_prefix_unary(self) -> None:
        assert pretty(Op1(UnaryOp.IS_NUM, Var("x"))) == "%isnum% x"

    def test_postfix_unary(self) -> None:
        assert pretty(Op1(UnaryOp.BOOL_AND, Var("a"))) == "a &&"

    def test_embed(self) -> None:
        assert pretty(Op1(Embed("foo"), Var("x"))) == "%embed% foo x"

    def test_static_access(self) -> None:
        assert pretty(Op1(StaticAccess("port"), Var("server"))) == "server.port"

    def test_static_access_quoted(self) -> None:
        assert pretty(Op1(StaticAccess("a b"), Var("r"))) == 'r."a b"'

    def test_dynamic_access_string(self) -> None:
        assert pretty(Op2(BinaryOp.DYN_ACCESS, Str("port"), Var("r"))) == 'r."port"'

    def test_dynamic_access_expression(self) -> None:
        assert pretty(Op2(BinaryOp.DYN_ACCESS, Var("k"), Var("r"))) == 'r."%{k}"'

    def test_broken_infix(self) -> None:
        term = _plus(Var("aaaa"), Var("bbbb"))
        assert pretty(term, width=8) == "aaaa +\n  bbbb"

    def test_long_left_nested_chain(self) -> None:
        term = Num(0)
        for i in range(1, 301):
            term = _plus(term, Num(i))
        out = pretty(term, width=10_000)
        assert out.startswith("(" * 299 + "0 + 1) + 2)")
        assert out.endswith(") + 300")


# =========================================================================
# Switch, arrays, imports, metadata
# =========================================================================


class TestSwitch:
    """Switch expressions."""

    def test_sorted_cases_with_default(self) -> None:
        term = Switch(Var("x"), {"b": Num(2), "a": Num(1)}, default=Num(0))
        assert pretty(term) == "switch { `a => 1, `b => 2, _ => 0 } x"

    def test_broken(self) -> None:
        term = Switch(Var("x"), {"a": Num(1)})
        assert pretty(term, width=10) == "switch {\n  `a => 1,\n} x"

    def test_no_cases(self) -> None:
        assert pretty(Switch(Var("x"), {})) == "switch {} x"

    def test_compound_scrutinee(self) -> None:
        term = Switch(App(Var("f"), Var("y")), {"a": Num(1)})
        assert pretty(term) == "switch { `a => 1 } (f y)"


class TestArrays:
    """Array literals."""

    def test_flat(self) -> None:
        assert pretty(Array((Num(1), Num(2)))) == "[1, 2]"

    def test_broken(self) -> None:
        assert pretty(Array((Num(1), Num(2))), width=4) == "[\n  1,\n  2,\n]"

    def test_empty(self) -> None:
        assert pretty(Array(())) == "[]"

    def test_elements_are_not_parenthesized(self) -> None:
        assert pretty(Array((_plus(Num(1), Num(2)),))) == "[1 + 2]"


class TestMetaValue:
    """Annotated terms outside of records."""

    def test_type_annotation(self) -> None:
        assert pretty(MetaValue(Num(1), types=NumType())) == "1 : Num"

    def test_contract_annotation(self) -> None:
        term = MetaValue(Var("x"), contracts=(FlatType(Var("Port")),))
        assert pretty(term) == "x | Port"

    def test_several_clauses(self) -> None:
        term = MetaValue(Var("x"), types=NumType(), contracts=(FlatType(Var("Port")),))
        assert pretty(term) == "x : Num | Port"

    def test_compound_value_is_parenthesized(self) -> None:
        term = MetaValue(_plus(Num(1), Num(2)), types=NumType())
        assert pretty(term) == "(1 + 2) : Num"

    def test_no_clause(self) -> None:
        assert pretty(MetaValue(Num(1))) == "1"

    def test_doc_only_outside_record_prints_value(self) -> None:
        assert pretty(MetaValue(Num(1), doc="ignored")) == "1"


class TestImportsAndInternalNodes:
    """Imports and nodes without concrete syntax."""

    def test_import(self) -> None:
        assert pretty(Import("lib.ncl")) == 'import "lib.ncl"'

    @pytest.mark.parametrize(
        ("term", "comment"),
        [
            (Lbl(), "# <label>"),
            (Sym(3), "# <symbol: 3>"),
            (Wrapped(7, Num(1)), "# <wrapped: 7>"),
            (ResolvedImport(2), "# <import: file 2>"),
            (ParseError(), "# <parse error>"),
        ],
    )
    def test_printed_as_comment(self, term, comment: str) -> None:
        assert pretty(term) == comment + "\n"

    def test_comment_forces_enclosing_group_broken(self) -> None:
        out = pretty(Record({"a": Lbl()}))
        assert out.startswith("{\n  a = # <label>\n")


class TestTermRendererInstance:
    """TermRenderer used directly."""

    def test_render(self) -> None:
        renderer = TermRenderer()
        assert renderer.render(Record({"a": Num(1)})) == "{ a = 1 }"

    def test_reusable(self) -> None:
        renderer = TermRenderer()
        term = Array((Num(1),))
        assert renderer.render(term) == renderer.render(term)

    def test_shares_types_renderer(self) -> None:
        renderer = TermRenderer()
        assert renderer.types.config is renderer.config
