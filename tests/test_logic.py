"""
Tests for the expression core: normalizer, parser, evaluator.

These tests verify that:
1. Raw input is rewritten onto the canonical ASCII alphabet
2. Precedence and left-to-right chaining hold at every level
3. Every malformed input raises its dedicated error
4. The tree evaluates identically to its SymPy counterpart
"""

import itertools

import pytest
from sympy import Symbol
from sympy.logic import boolalg

from truthtable.logic import (
    MAX_NESTING_DEPTH,
    And,
    Constant,
    EmptyExpressionError,
    ExpressionError,
    ExpressionTooComplexError,
    Iff,
    Implies,
    InvalidTokenError,
    Not,
    Or,
    Parser,
    TrailingInputError,
    UnexpectedEndError,
    UnmatchedParenthesisError,
    Variable,
    evaluate,
    normalize,
    parse_expression,
    to_sympy,
    token_at,
    variables,
)

A, B, C, D = (Variable(name) for name in "abcd")


def parse(text):
    return parse_expression(normalize(text))


# =============================================================================
# NORMALIZER
# =============================================================================

class TestNormalize:
    """Test symbol mapping and whitespace handling."""

    def test_strips_whitespace_and_lowercases(self):
        assert normalize("  A &\tB \n") == "a&b"

    def test_maps_unicode_glyphs(self):
        assert normalize("¬a ∧ b ∨ c → d ↔ a") == "!a&b|c->d<->a"

    def test_tilde_is_negation(self):
        assert normalize("~(a | b)") == "!(a|b)"

    def test_literals_are_lowercased(self):
        assert normalize("TRUE & False") == "true&false"

    def test_unknown_characters_pass_through(self):
        assert normalize("a @ b") == "a@b"

    @pytest.mark.parametrize(
        "raw",
        ["a & b", "¬A ∨ B", "(a → b) ↔ ~c", "TRUE | d", "a @ b", ""],
    )
    def test_is_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once


# =============================================================================
# TOKEN RECOGNITION
# =============================================================================

class TestTokenAt:

    def test_recognizes_operators(self):
        assert token_at("a<->b", 1) == "<->"
        assert token_at("a->b", 1) == "->"
        assert token_at("!a", 0) == "!"

    def test_recognizes_literals_and_variables(self):
        assert token_at("false", 0) == "false"
        assert token_at("d", 0) == "d"

    def test_rejects_unknown(self):
        assert token_at("a@b", 1) is None
        assert token_at("e", 0) is None
        assert token_at("a-", 1) is None
        assert token_at("a", 5) is None


# =============================================================================
# PARSER
# =============================================================================

class TestParserStructure:
    """Test the shape of the trees the parser builds."""

    def test_single_variable(self):
        assert parse("a") == A

    def test_literals(self):
        assert parse("true") == Constant(True)
        assert parse("false") == Constant(False)

    def test_and_binds_tighter_than_or(self):
        assert parse("a | b & c") == Or(A, And(B, C))

    def test_or_binds_tighter_than_implies(self):
        assert parse("a -> b | c") == Implies(A, Or(B, C))

    def test_implies_binds_tighter_than_iff(self):
        assert parse("a <-> b -> c") == Iff(A, Implies(B, C))

    def test_negation_binds_tightest(self):
        assert parse("!a & b") == And(Not(A), B)

    def test_and_chains_to_the_left(self):
        assert parse("a & b & c") == And(And(A, B), C)

    def test_implies_chains_to_the_left(self):
        assert parse("a -> b -> c") == Implies(Implies(A, B), C)

    def test_iff_chains_to_the_left(self):
        assert parse("a <-> b <-> c") == Iff(Iff(A, B), C)

    def test_parentheses_override_precedence(self):
        assert parse("!(a & b)") == Not(And(A, B))
        assert parse("(a | b) & c") == And(Or(A, B), C)

    def test_double_negation_is_kept(self):
        assert parse("!!a") == Not(Not(A))

    def test_parser_reports_consumption(self):
        parser = Parser("a&b")
        parser.parse()
        assert parser.at_end()

    def test_parser_stops_before_unparsed_input(self):
        parser = Parser("ab")
        assert parser.parse() == A
        assert not parser.at_end()
        assert parser.pos == 1


class TestParserErrors:
    """Test that every malformed input is rejected with its own error."""

    def test_errors_are_value_errors(self):
        assert issubclass(ExpressionError, ValueError)
        assert issubclass(EmptyExpressionError, ExpressionError)

    def test_dangling_operator(self):
        with pytest.raises(UnexpectedEndError, match="unexpected end of expression"):
            parse("a &")

    def test_empty_string(self):
        with pytest.raises(UnexpectedEndError):
            parse_expression("")

    def test_unclosed_parenthesis(self):
        with pytest.raises(UnmatchedParenthesisError, match=r"expected '\)'"):
            parse("(a & b")

    def test_parenthesis_closed_by_wrong_token(self):
        with pytest.raises(UnmatchedParenthesisError) as excinfo:
            parse("(a b)")
        assert excinfo.value.char == "b"

    def test_adjacent_variables_are_trailing_input(self):
        with pytest.raises(TrailingInputError, match="trailing symbols") as excinfo:
            parse("a b")
        assert excinfo.value.char == "b"
        assert excinfo.value.position == 1

    def test_stray_closing_parenthesis(self):
        with pytest.raises(TrailingInputError):
            parse("a)")

    def test_unknown_operator_cites_character(self):
        with pytest.raises(InvalidTokenError, match="invalid token near '@'") as excinfo:
            parse("a @ b")
        assert excinfo.value.char == "@"
        assert excinfo.value.position == 1

    def test_unknown_primary(self):
        with pytest.raises(InvalidTokenError, match="near 'e'"):
            parse("e & a")

    def test_operator_where_operand_expected(self):
        with pytest.raises(InvalidTokenError, match=r"near '\)'"):
            parse("()")

    def test_half_arrow(self):
        with pytest.raises(InvalidTokenError, match="near '-'"):
            parse("a - b")

    def test_too_long(self):
        with pytest.raises(ExpressionTooComplexError, match="longer than"):
            parse_expression("a|" * 200 + "a")

    def test_too_deeply_parenthesized(self):
        depth = MAX_NESTING_DEPTH + 1
        with pytest.raises(ExpressionTooComplexError, match="nests deeper"):
            parse_expression("(" * depth + "a" + ")" * depth)

    def test_too_many_negations(self):
        with pytest.raises(ExpressionTooComplexError):
            parse_expression("!" * (MAX_NESTING_DEPTH + 1) + "a")

    def test_nesting_at_the_limit_is_accepted(self):
        depth = MAX_NESTING_DEPTH
        assert parse_expression("(" * depth + "a" + ")" * depth) == A
        assert evaluate(parse_expression("!" * depth + "a"), {"a": True}) is True


# =============================================================================
# EVALUATION
# =============================================================================

class TestEvaluate:
    """Test operator semantics on single assignments."""

    @pytest.mark.parametrize(
        "text, a, b, expected",
        [
            ("a & b", True, False, False),
            ("a & b", True, True, True),
            ("a | b", True, False, True),
            ("a | b", False, False, False),
            ("a -> b", True, False, False),
            ("a -> b", False, False, True),
            ("a -> b", False, True, True),
            ("a <-> b", True, True, True),
            ("a <-> b", True, False, False),
            ("a <-> b", False, False, True),
            ("!a", True, False, False),
        ],
    )
    def test_operator_truth_values(self, text, a, b, expected):
        assert evaluate(parse(text), {"a": a, "b": b}) is expected

    def test_precedence_changes_result(self):
        assert evaluate(parse("a | b & c"), {"a": False, "b": True, "c": False}) is False

    def test_left_chained_implication(self):
        assert evaluate(parse("a -> b -> c"), {"a": True, "b": False, "c": False}) is True

    def test_tree_is_reusable(self):
        tree = parse("a & !b")
        assert evaluate(tree, {"a": True, "b": False}) is True
        assert evaluate(tree, {"a": True, "b": True}) is False
        assert evaluate(tree, {"a": True, "b": False}) is True

    def test_constants_need_no_context(self):
        assert evaluate(parse("true & false"), {}) is False
        assert evaluate(parse("true | false"), {}) is True

    def test_missing_variable(self):
        with pytest.raises(ValueError, match="'c' has no assigned value"):
            evaluate(parse("a & c"), {"a": True})


class TestVariables:

    def test_sorted_and_distinct(self):
        assert variables(parse("d & a | a -> b")) == ("a", "b", "d")

    def test_literal_letters_are_not_variables(self):
        assert variables(parse("false | true")) == ()
        assert variables(parse("false | c")) == ("c",)


# =============================================================================
# SYMPY BRIDGE
# =============================================================================

class TestToSympy:
    """Cross-check the evaluator against SymPy on every assignment."""

    @pytest.mark.parametrize(
        "text",
        [
            "a & b | !c",
            "a -> b -> c",
            "(a <-> b) & (c | !d)",
            "!(a & b) <-> !a | !b",
            "a | b & c -> d",
            "true -> a",
            "false <-> b",
        ],
    )
    def test_matches_evaluate(self, text):
        tree = parse(text)
        names = variables(tree)
        formula = to_sympy(tree)
        for bits in itertools.product([False, True], repeat=len(names)):
            context = dict(zip(names, bits))
            subs = {
                Symbol(name.upper()): boolalg.true if bit else boolalg.false
                for name, bit in context.items()
            }
            assert bool(formula.xreplace(subs)) == evaluate(tree, context)

    def test_uses_uppercase_symbols(self):
        formula = to_sympy(parse("a & b"))
        assert formula.free_symbols == {Symbol("A"), Symbol("B")}

    def test_constant_expression(self):
        assert to_sympy(parse("true & false")) == boolalg.false
