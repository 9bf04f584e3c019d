"""Boolean expression parsing and evaluation for the truth table calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple, Union

from sympy import Symbol
from sympy.logic import boolalg

VARIABLES = "abcd"
MAX_EXPRESSION_LENGTH = 256
MAX_NESTING_DEPTH = 64

ACCEPTED_SYMBOLS = "Use A–D, !, &, |, ->, <->, parentheses, true/false."

# Glyph replacements, applied in order.
_SYMBOL_MAP: Tuple[Tuple[str, str], ...] = (
    ("¬", "!"),
    ("~", "!"),
    ("∧", "&"),
    ("∨", "|"),
    ("→", "->"),
    ("↔", "<->"),
)

# Non-variable tokens, longest first.
_TOKENS: Tuple[str, ...] = ("false", "true", "<->", "->", "(", ")", "!", "&", "|")


# ------------------------------- errors -------------------------------

class ExpressionError(ValueError):
    """Base class for every failure to turn text into a truth table."""

    def __init__(self, message: str, char: Optional[str] = None, position: Optional[int] = None):
        self.message = message
        self.char = char
        self.position = position
        super().__init__(message)


class EmptyExpressionError(ExpressionError):
    """The input holds nothing but whitespace."""


class InvalidTokenError(ExpressionError):
    """A character that cannot begin or continue a valid construct."""


class UnexpectedEndError(ExpressionError):
    """Input ended while an operand was still expected."""


class UnmatchedParenthesisError(ExpressionError):
    """An opening parenthesis without its closing partner."""


class TrailingInputError(ExpressionError):
    """Valid tokens left over after a complete expression."""


class ExpressionTooComplexError(ExpressionError):
    """Input exceeds the length or nesting limits."""


# ------------------------------- expression tree -------------------------------

@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class Constant:
    value: bool


@dataclass(frozen=True)
class Not:
    operand: "Node"


@dataclass(frozen=True)
class And:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Or:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Implies:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Iff:
    left: "Node"
    right: "Node"


Node = Union[Variable, Constant, Not, And, Or, Implies, Iff]


# ------------------------------- normalizer -------------------------------

def normalize(text: str) -> str:
    """Rewrite raw input into the canonical ASCII operator alphabet."""
    compact = "".join(text.split())
    for glyph, replacement in _SYMBOL_MAP:
        compact = compact.replace(glyph, replacement)
    return compact.lower()


def token_at(text: str, pos: int) -> Optional[str]:
    """Return the recognized token starting at pos, or None."""
    if pos >= len(text):
        return None
    if text[pos] in VARIABLES:
        return text[pos]
    for token in _TOKENS:
        if text.startswith(token, pos):
            return token
    return None


# ------------------------------- parser -------------------------------

class Parser:
    """Recursive-descent parser over a normalized expression.

    Precedence from weakest to strongest: ``<->``, ``->``, ``|``, ``&``,
    ``!``. Every binary level folds to the left, so ``a -> b -> c`` reads
    as ``(a -> b) -> c``.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.depth = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> Optional[str]:
        return None if self.at_end() else self.text[self.pos]

    def match(self, word: str) -> bool:
        if self.text.startswith(word, self.pos):
            self.pos += len(word)
            return True
        return False

    def parse(self) -> Node:
        return self.parse_iff()

    def parse_iff(self) -> Node:
        left = self.parse_implies()
        while self.match("<->"):
            left = Iff(left, self.parse_implies())
        return left

    def parse_implies(self) -> Node:
        left = self.parse_or()
        while self.match("->"):
            left = Implies(left, self.parse_or())
        return left

    def parse_or(self) -> Node:
        left = self.parse_and()
        while self.match("|"):
            left = Or(left, self.parse_and())
        return left

    def parse_and(self) -> Node:
        left = self.parse_not()
        while self.match("&"):
            left = And(left, self.parse_not())
        return left

    def parse_not(self) -> Node:
        if self.match("!"):
            self._descend()
            node = Not(self.parse_not())
            self.depth -= 1
            return node
        return self.parse_primary()

    def parse_primary(self) -> Node:
        if self.match("("):
            self._descend()
            inside = self.parse_iff()
            if not self.match(")"):
                raise UnmatchedParenthesisError("expected ')'", self.peek(), self.pos)
            self.depth -= 1
            return inside
        if self.at_end():
            raise UnexpectedEndError("unexpected end of expression", None, self.pos)

        char = self.text[self.pos]
        if char in VARIABLES:
            self.pos += 1
            return Variable(char)
        if self.match("true"):
            return Constant(True)
        if self.match("false"):
            return Constant(False)
        raise InvalidTokenError(
            f"invalid token near '{char}'. {ACCEPTED_SYMBOLS}", char, self.pos
        )

    def _descend(self) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise ExpressionTooComplexError(
                f"expression nests deeper than {MAX_NESTING_DEPTH} levels", None, self.pos
            )


def parse_expression(normalized: str) -> Node:
    """Parse a normalized string, requiring every character to be consumed."""
    if len(normalized) > MAX_EXPRESSION_LENGTH:
        raise ExpressionTooComplexError(
            f"expression is longer than {MAX_EXPRESSION_LENGTH} symbols"
        )
    parser = Parser(normalized)
    tree = parser.parse()
    if not parser.at_end():
        char = parser.peek()
        if token_at(normalized, parser.pos) is None:
            raise InvalidTokenError(
                f"invalid token near '{char}'. {ACCEPTED_SYMBOLS}", char, parser.pos
            )
        raise TrailingInputError(
            "trailing symbols after end of expression", char, parser.pos
        )
    return tree


# ------------------------------- evaluation -------------------------------

def evaluate(node: Node, context: Mapping[str, bool]) -> bool:
    """Evaluate the tree against one variable assignment."""
    if isinstance(node, Variable):
        if node.name not in context:
            raise ValueError(f"variable '{node.name}' has no assigned value")
        return bool(context[node.name])
    if isinstance(node, Constant):
        return node.value
    if isinstance(node, Not):
        return not evaluate(node.operand, context)

    left = evaluate(node.left, context)
    right = evaluate(node.right, context)
    if isinstance(node, And):
        return left and right
    if isinstance(node, Or):
        return left or right
    if isinstance(node, Implies):
        return (not left) or right
    if isinstance(node, Iff):
        return left == right
    raise TypeError(f"unknown expression node: {node!r}")


def variables(node: Node) -> Tuple[str, ...]:
    """Return the distinct variable names used by the tree, sorted."""
    found = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Variable):
            found.add(current.name)
        elif isinstance(current, Not):
            stack.append(current.operand)
        elif isinstance(current, (And, Or, Implies, Iff)):
            stack.extend((current.left, current.right))
    return tuple(sorted(found))


# ------------------------------- SymPy bridge -------------------------------

_SYMPY_BINARY = {
    And: boolalg.And,
    Or: boolalg.Or,
    Implies: boolalg.Implies,
    Iff: boolalg.Equivalent,
}


def to_sympy(node: Node, symbols: Optional[Dict[str, Symbol]] = None):
    """Convert the tree into an equivalent SymPy boolean expression."""
    if symbols is None:
        symbols = {name: Symbol(name.upper()) for name in variables(node)}
    if isinstance(node, Variable):
        return symbols[node.name]
    if isinstance(node, Constant):
        return boolalg.true if node.value else boolalg.false
    if isinstance(node, Not):
        return boolalg.Not(to_sympy(node.operand, symbols))
    op = _SYMPY_BINARY[type(node)]
    return op(to_sympy(node.left, symbols), to_sympy(node.right, symbols))
