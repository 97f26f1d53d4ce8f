"""
Arithmetic Expression Evaluation

Tokenizes and parses calculator expressions into an explicit tree, then
walks the tree to compute a value. Nothing is ever handed to the Python
interpreter, so only the operators and functions listed here exist.

Grammar (lowest to highest precedence):

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("+" | "-") unary | power
    power      := postfix ("^" unary)?
    postfix    := primary "!"*
    primary    := NUMBER | CONSTANT | FUNCTION "(" expression ")"
                | "√" postfix | "(" expression ")"

``^`` is right-associative and binds tighter than a leading minus, so
``-2^2`` is -4 and ``2^3^2`` is 512.
"""

import enum
import math
import re
from typing import Callable, Dict, List, Union
from dataclasses import dataclass

from calcdesk.calculations.errors import InvalidInputError

MAX_EXPRESSION_LENGTH = 1000
MAX_NESTING_DEPTH = 100  # unary signs, parentheses, calls, roots and factorials combined
MAX_FACTORIAL = 170  # largest n with a finite float n!

TOKEN_PATTERN = re.compile(
    r"\s*(?:(?P<number>\d+\.?\d*|\.\d+)|(?P<name>[A-Za-z]+|π)|(?P<op>\*\*|[-+*/^()!√×÷]))"
)

OPERATOR_ALIASES = {"**": "^", "×": "*", "÷": "/"}

CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
}


class AngleMode(str, enum.Enum):
    radians = "radians"
    degrees = "degrees"


@dataclass(frozen=True)
class Token:
    kind: str  # "number", "name" or "op"
    text: str
    position: int


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Factorial:
    operand: "Node"


@dataclass(frozen=True)
class Call:
    function: str
    argument: "Node"


Node = Union[Number, UnaryOp, BinaryOp, Factorial, Call]


def tokenize(text: str) -> List[Token]:
    """Split an expression into number, name and operator tokens."""
    if len(text) > MAX_EXPRESSION_LENGTH:
        raise InvalidInputError("Expression is too long")

    tokens = []
    position = 0
    text = text.rstrip()

    while position < len(text):
        match = TOKEN_PATTERN.match(text, position)
        if match is None:
            raise InvalidInputError(
                f"Unexpected character {text[position:].lstrip()[:1]!r} at position {position}"
            )
        kind = match.lastgroup
        value = match.group(kind)
        tokens.append(Token(kind, OPERATOR_ALIASES.get(value, value), match.start(kind)))
        position = match.end()

    return tokens


class Parser:
    """Recursive-descent parser producing an expression tree."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    def parse(self) -> Node:
        if not self.tokens:
            raise InvalidInputError("Expression is empty")
        node = self._expression()
        if self._peek() is not None:
            token = self._peek()
            raise InvalidInputError(
                f"Unexpected {token.text!r} at position {token.position}"
            )
        return node

    def _peek(self):
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _accept(self, *ops: str) -> bool:
        token = self._peek()
        if token is not None and token.kind == "op" and token.text in ops:
            self.index += 1
            return True
        return False

    def _descend(self) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise InvalidInputError("Expression is nested too deeply")

    def _expect(self, op: str) -> None:
        if not self._accept(op):
            token = self._peek()
            where = "end of expression" if token is None else repr(token.text)
            raise InvalidInputError(f"Expected {op!r} but found {where}")

    def _expression(self) -> Node:
        node = self._term()
        while True:
            token = self._peek()
            if self._accept("+", "-"):
                node = BinaryOp(token.text, node, self._term())
            else:
                return node

    def _term(self) -> Node:
        node = self._unary()
        while True:
            token = self._peek()
            if self._accept("*", "/"):
                node = BinaryOp(token.text, node, self._unary())
            else:
                return node

    def _unary(self) -> Node:
        self._descend()
        token = self._peek()
        if self._accept("+", "-"):
            node = UnaryOp(token.text, self._unary())
        else:
            node = self._power()
        self.depth -= 1
        return node

    def _power(self) -> Node:
        base = self._postfix()
        if self._accept("^"):
            return BinaryOp("^", base, self._unary())
        return base

    def _postfix(self) -> Node:
        node = self._primary()
        applied = 0
        while self._accept("!"):
            self._descend()
            applied += 1
            node = Factorial(node)
        self.depth -= applied
        return node

    def _primary(self) -> Node:
        self._descend()
        node = self._atom()
        self.depth -= 1
        return node

    def _atom(self) -> Node:
        token = self._peek()
        if token is None:
            raise InvalidInputError("Unexpected end of expression")

        if token.kind == "number":
            self.index += 1
            return Number(float(token.text))

        if token.kind == "name":
            self.index += 1
            name = token.text.lower() if token.text != "π" else token.text
            if name in FUNCTIONS:
                self._expect("(")
                argument = self._expression()
                self._expect(")")
                return Call(name, argument)
            if name in CONSTANTS:
                return Number(CONSTANTS[name])
            raise InvalidInputError(f"Unknown name {token.text!r}")

        if self._accept("√"):
            return Call("sqrt", self._postfix())

        if self._accept("("):
            node = self._expression()
            self._expect(")")
            return node

        raise InvalidInputError(f"Unexpected {token.text!r} at position {token.position}")


def parse(text: str) -> Node:
    """Parse expression text into a tree."""
    return Parser(tokenize(text)).parse()


def _factorial(value: float) -> float:
    if value < 0 or value != int(value):
        raise InvalidInputError("Factorial requires a non-negative integer")
    if value > MAX_FACTORIAL:
        raise InvalidInputError("Factorial argument is too large")
    return float(math.factorial(int(value)))


def _log10(value: float) -> float:
    if value <= 0:
        raise InvalidInputError("Logarithm requires a positive argument")
    return math.log10(value)


def _ln(value: float) -> float:
    if value <= 0:
        raise InvalidInputError("Logarithm requires a positive argument")
    return math.log(value)


def _sqrt(value: float) -> float:
    if value < 0:
        raise InvalidInputError("Square root requires a non-negative argument")
    return math.sqrt(value)


FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "sqrt": _sqrt,
    "log": _log10,
    "ln": _ln,
    "abs": abs,
}

TRIG_FUNCTIONS = {"sin", "cos", "tan"}
INVERSE_TRIG_FUNCTIONS = {"asin", "acos", "atan"}


def _apply_binary(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        if right == 0:
            raise InvalidInputError("Division by zero")
        return left / right
    return math.pow(left, right)


def evaluate_tree(node: Node, angle_mode: AngleMode = AngleMode.radians) -> float:
    """Evaluate a parsed expression tree."""
    if isinstance(node, Number):
        return node.value

    if isinstance(node, UnaryOp):
        value = evaluate_tree(node.operand, angle_mode)
        return -value if node.op == "-" else value

    if isinstance(node, BinaryOp):
        left = evaluate_tree(node.left, angle_mode)
        right = evaluate_tree(node.right, angle_mode)
        return _apply_binary(node.op, left, right)

    if isinstance(node, Factorial):
        return _factorial(evaluate_tree(node.operand, angle_mode))

    argument = evaluate_tree(node.argument, angle_mode)
    degrees = angle_mode == AngleMode.degrees

    if degrees and node.function in TRIG_FUNCTIONS:
        argument = math.radians(argument)
    result = FUNCTIONS[node.function](argument)
    if degrees and node.function in INVERSE_TRIG_FUNCTIONS:
        result = math.degrees(result)
    return result


def evaluate(text: str, angle_mode: AngleMode = AngleMode.radians) -> float:
    """
    Parse and evaluate a calculator expression.

    Args:
        text: Expression such as "2 * (3 + 4)^2" or "sin(30)"
        angle_mode: Unit for trigonometric arguments and inverse results

    Returns:
        The finite numeric result

    Raises:
        InvalidInputError: On syntax errors, unknown names, division by zero,
            domain errors, or results that are not finite
    """
    tree = parse(text)
    try:
        result = evaluate_tree(tree, AngleMode(angle_mode))
    except (ValueError, OverflowError) as e:
        if isinstance(e, InvalidInputError):
            raise
        raise InvalidInputError(f"Math error: {e}") from e

    if not math.isfinite(result):
        raise InvalidInputError("Result is not a finite number")
    return result
