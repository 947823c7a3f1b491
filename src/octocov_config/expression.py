# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""A small sandboxed expression language for ``datastore.if`` conditions.

The grammar follows the ``expr`` language used in octocov configurations::

    github.event_name == 'push' && env.GITHUB_REF == 'refs/heads/main'
    weekday in [1, 2, 3, 4, 5] and hour < 12
    not (github.event.pull_request.draft ?? false)

Expressions are tokenized, parsed into a tree of ``Node`` objects and then
evaluated against a plain mapping of variables. Nothing is ever passed to
Python's ``eval``; the only callable is the ``len`` builtin.

Runtime values are the JSON value types: ``None`` (``nil``), ``bool``,
``int``, ``float``, ``str``, ``list`` and ``dict``.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import logging
import math
import operator
import re
from typing import Any

from .exceptions import ExpressionEvaluationError, ExpressionSyntaxError

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<number>\d+\.\d+(?:[eE][+-]?\d+)?|\d+[eE][+-]?\d+|\d+)
  | (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
  | (?P<name>[A-Za-z_$][A-Za-z0-9_$]*)
  | (?P<op>\?\?|==|!=|<=|>=|&&|\|\||\*\*|[-+*/%<>!?:.,()\[\]])
    """,
    re.VERBOSE,
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"'}

_WORD_OPERATORS = {"and", "or", "not", "in", "matches", "contains", "startsWith", "endsWith"}

# Binary operator precedence; higher binds tighter
_PRECEDENCE = {
    "or": 10,
    "||": 10,
    "and": 15,
    "&&": 15,
    "==": 20,
    "!=": 20,
    "<": 20,
    ">": 20,
    "<=": 20,
    ">=": 20,
    "in": 20,
    "not in": 20,
    "matches": 20,
    "contains": 20,
    "startsWith": 20,
    "endsWith": 20,
    "+": 30,
    "-": 30,
    "*": 60,
    "/": 60,
    "%": 60,
    "**": 70,
    "??": 500,
}
_RIGHT_ASSOCIATIVE = {"**"}
_UNARY_PRECEDENCE = 50


@dataclass(frozen=True)
class Token:
    kind: str  # number, string, name, op, eof
    value: str
    position: int


def tokenize(source: str) -> list[Token]:
    """Split an expression into tokens.

    Raises:
        ExpressionSyntaxError: On a character that starts no token
    """
    tokens: list[Token] = []
    position = 0
    while position < len(source):
        match = _TOKEN_RE.match(source, position)
        if match is None:
            raise ExpressionSyntaxError(
                f"unexpected character {source[position]!r} at position {position}",
                position,
            )
        kind = match.lastgroup or ""
        if kind != "space":
            value = match.group()
            if kind == "name" and value in _WORD_OPERATORS:
                kind = "op"
            tokens.append(Token(kind, value, position))
        position = match.end()
    tokens.append(Token("eof", "", len(source)))
    return tokens


def _unquote(literal: str) -> str:
    body = literal[1:-1]
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), "\\" + m.group(1)), body)


# Syntax tree


class Node:
    """Base class of syntax tree nodes."""

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Node):
    value: Any

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        return self.value


@dataclass(frozen=True)
class ArrayNode(Node):
    items: tuple[Node, ...]

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        return [item.evaluate(variables) for item in self.items]


@dataclass(frozen=True)
class Identifier(Node):
    name: str

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        # Undefined names read as nil, like missing map keys
        return variables.get(self.name)


@dataclass(frozen=True)
class Member(Node):
    target: Node
    key: Node

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        return fetch(self.target.evaluate(variables), self.key.evaluate(variables))


@dataclass(frozen=True)
class Unary(Node):
    op: str
    operand: Node

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        value = self.operand.evaluate(variables)
        if self.op in ("not", "!"):
            return not _require_bool(self.op, value)
        if not _is_number(value):
            raise ExpressionEvaluationError(
                f"invalid operation: {self.op} {type_name(value)}",
            )
        return -value if self.op == "-" else value


@dataclass(frozen=True)
class Binary(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        if self.op in ("and", "&&"):
            if not _require_bool(self.op, self.left.evaluate(variables)):
                return False
            return _require_bool(self.op, self.right.evaluate(variables))
        if self.op in ("or", "||"):
            if _require_bool(self.op, self.left.evaluate(variables)):
                return True
            return _require_bool(self.op, self.right.evaluate(variables))
        if self.op == "??":
            left = self.left.evaluate(variables)
            return self.right.evaluate(variables) if left is None else left
        return _BINARY_OPERATIONS[self.op](
            self.left.evaluate(variables),
            self.right.evaluate(variables),
        )


@dataclass(frozen=True)
class Conditional(Node):
    condition: Node
    then: Node
    otherwise: Node

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        if _require_bool("?:", self.condition.evaluate(variables)):
            return self.then.evaluate(variables)
        return self.otherwise.evaluate(variables)


@dataclass(frozen=True)
class Call(Node):
    name: str
    arguments: tuple[Node, ...]

    def evaluate(self, variables: Mapping[str, Any]) -> Any:
        if self.name not in _FUNCTIONS:
            raise ExpressionEvaluationError(f"unknown function {self.name}")
        function, arity = _FUNCTIONS[self.name]
        if len(self.arguments) != arity:
            raise ExpressionEvaluationError(
                f"invalid number of arguments for {self.name} "
                f"(expected {arity}, got {len(self.arguments)})",
            )
        return function(*(argument.evaluate(variables) for argument in self.arguments))


# Runtime semantics


def type_name(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "map"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_bool(op: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ExpressionEvaluationError(f"invalid operation: {op} on {type_name(value)}")
    return value


def fetch(target: Any, key: Any) -> Any:
    """Member or index access. Missing map keys read as nil."""
    if isinstance(target, Mapping):
        try:
            return target.get(key)
        except TypeError as e:
            raise ExpressionEvaluationError(
                f"cannot use {type_name(key)} as a key of map",
            ) from e
    if isinstance(target, (list, tuple)) and isinstance(key, int) and not isinstance(key, bool):
        if -len(target) <= key < len(target):
            return target[key]
        raise ExpressionEvaluationError(f"index out of range: {key} (array of length {len(target)})")
    raise ExpressionEvaluationError(f"cannot fetch {key!r} from {type_name(target)}")


def equal(left: Any, right: Any) -> bool:
    """Equality without cross-type coercion, except between int and float."""
    if _is_number(left) and _is_number(right):
        return bool(left == right)
    if type_name(left) != type_name(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(equal(a, b) for a, b in zip(left, right))
    return bool(left == right)


def _ordering(op: str, compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def _compare(left: Any, right: Any) -> bool:
        if (_is_number(left) and _is_number(right)) or (
            isinstance(left, str) and isinstance(right, str)
        ):
            return compare(left, right)
        raise ExpressionEvaluationError(
            f"invalid operation: {type_name(left)} {op} {type_name(right)}",
        )

    return _compare


def _arithmetic(op: str, compute: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    def _compute(left: Any, right: Any) -> Any:
        if op == "+" and isinstance(left, str) and isinstance(right, str):
            return left + right
        if not (_is_number(left) and _is_number(right)):
            raise ExpressionEvaluationError(
                f"invalid operation: {type_name(left)} {op} {type_name(right)}",
            )
        try:
            return compute(left, right)
        except ZeroDivisionError as e:
            raise ExpressionEvaluationError(f"division by zero: {left} {op} {right}") from e
        except (OverflowError, ValueError) as e:
            # math.pow overflow, negative base with fractional exponent
            raise ExpressionEvaluationError(f"invalid result: {left} {op} {right}: {e}") from e

    return _compute


def _modulo(left: Any, right: Any) -> Any:
    if type_name(left) != "int" or type_name(right) != "int":
        raise ExpressionEvaluationError(
            f"invalid operation: {type_name(left)} % {type_name(right)}",
        )
    if right == 0:
        raise ExpressionEvaluationError(f"integer divide by zero: {left} % {right}")
    return operator.mod(left, right)


def _contained(element: Any, container: Any) -> bool:
    if isinstance(container, Mapping):
        return element in container if isinstance(element, str) else False
    if isinstance(container, (list, tuple)):
        return any(equal(element, item) for item in container)
    raise ExpressionEvaluationError(
        f"invalid operation: {type_name(element)} in {type_name(container)}",
    )


def _strings(op: str, check: Callable[[str, str], bool]) -> Callable[[Any, Any], bool]:
    def _check(left: Any, right: Any) -> bool:
        if not (isinstance(left, str) and isinstance(right, str)):
            raise ExpressionEvaluationError(
                f"invalid operation: {type_name(left)} {op} {type_name(right)}",
            )
        return check(left, right)

    return _check


def _matches(text: str, pattern: str) -> bool:
    try:
        return re.search(pattern, text) is not None
    except re.error as e:
        raise ExpressionEvaluationError(f"invalid pattern {pattern!r}: {e}") from e


def _length(value: Any) -> int:
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value)
    raise ExpressionEvaluationError(f"invalid argument for len (type {type_name(value)})")


_BINARY_OPERATIONS: dict[str, Callable[[Any, Any], Any]] = {
    "==": equal,
    "!=": lambda left, right: not equal(left, right),
    "<": _ordering("<", operator.lt),
    ">": _ordering(">", operator.gt),
    "<=": _ordering("<=", operator.le),
    ">=": _ordering(">=", operator.ge),
    "in": _contained,
    "not in": lambda element, container: not _contained(element, container),
    "matches": _strings("matches", _matches),
    "contains": _strings("contains", lambda text, part: part in text),
    "startsWith": _strings("startsWith", str.startswith),
    "endsWith": _strings("endsWith", str.endswith),
    "+": _arithmetic("+", operator.add),
    "-": _arithmetic("-", operator.sub),
    "*": _arithmetic("*", operator.mul),
    "/": _arithmetic("/", operator.truediv),
    "%": _modulo,
    "**": _arithmetic("**", math.pow),
}

# Builtin functions and their number of arguments
_FUNCTIONS: dict[str, tuple[Callable[..., Any], int]] = {
    "len": (_length, 1),
}


# Parser


class Parser:
    """Recursive descent parser with precedence climbing for binary operators."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens = tokenize(source)
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != "eof":
            self.index += 1
        return token

    def _error(self, message: str, token: Token | None = None) -> ExpressionSyntaxError:
        token = token or self.current
        found = token.value or "end of expression"
        return ExpressionSyntaxError(
            f"{message}, found {found!r} at position {token.position}",
            token.position,
        )

    def _expect(self, value: str) -> Token:
        if self.current.kind != "op" or self.current.value != value:
            raise self._error(f"expected {value!r}")
        return self._advance()

    def _binary_operator(self) -> str | None:
        token = self.current
        if token.kind != "op":
            return None
        if token.value == "not":
            following = self.tokens[self.index + 1]
            if following.kind == "op" and following.value == "in":
                return "not in"
            return None
        return token.value if token.value in _PRECEDENCE else None

    def parse(self) -> Node:
        node = self._expression()
        if self.current.kind != "eof":
            raise self._error("unexpected token")
        return node

    def _expression(self) -> Node:
        node = self._binary(0)
        if self.current.kind == "op" and self.current.value == "?":
            self._advance()
            then = self._expression()
            self._expect(":")
            otherwise = self._expression()
            return Conditional(node, then, otherwise)
        return node

    def _binary(self, min_precedence: int) -> Node:
        left = self._unary()
        while True:
            op = self._binary_operator()
            if op is None or _PRECEDENCE[op] < min_precedence:
                return left
            self._advance()
            if op == "not in":
                self._advance()
            precedence = _PRECEDENCE[op]
            next_min = precedence if op in _RIGHT_ASSOCIATIVE else precedence + 1
            left = Binary(op, left, self._binary(next_min))

    def _unary(self) -> Node:
        token = self.current
        if token.kind == "op" and token.value in ("not", "!", "-", "+"):
            self._advance()
            return Unary(token.value, self._binary(_UNARY_PRECEDENCE))
        return self._postfix(self._primary())

    def _postfix(self, node: Node) -> Node:
        while self.current.kind == "op" and self.current.value in (".", "["):
            if self._advance().value == ".":
                name = self._advance()
                if name.kind != "name" and not (
                    name.kind == "op" and name.value in _WORD_OPERATORS
                ):
                    raise self._error("expected field name", name)
                node = Member(node, Literal(name.value))
            else:
                key = self._expression()
                self._expect("]")
                node = Member(node, key)
        return node

    def _primary(self) -> Node:
        token = self._advance()
        if token.kind == "number":
            if not re.fullmatch(r"\d+", token.value):
                return Literal(float(token.value))
            try:
                return Literal(int(token.value))
            except ValueError as e:
                # Longer than the interpreter's integer string limit
                raise self._error("integer literal out of range", token) from e
        if token.kind == "string":
            return Literal(_unquote(token.value))
        if token.kind == "name":
            if token.value == "true":
                return Literal(True)
            if token.value == "false":
                return Literal(False)
            if token.value in ("nil", "null"):
                return Literal(None)
            if self.current.kind == "op" and self.current.value == "(":
                return Call(token.value, self._arguments())
            return Identifier(token.value)
        if token.kind == "op" and token.value == "(":
            node = self._expression()
            self._expect(")")
            return node
        if token.kind == "op" and token.value == "[":
            return ArrayNode(self._items("]"))
        raise self._error("unexpected token", token)

    def _arguments(self) -> tuple[Node, ...]:
        self._expect("(")
        return self._items(")")

    def _items(self, closing: str) -> tuple[Node, ...]:
        items: list[Node] = []
        while not (self.current.kind == "op" and self.current.value == closing):
            items.append(self._expression())
            if self.current.kind == "op" and self.current.value == ",":
                self._advance()
                continue
            break
        self._expect(closing)
        return tuple(items)


def compile_expression(source: str) -> Node:
    """Parse ``source`` into a syntax tree.

    Raises:
        ExpressionSyntaxError: If the expression is malformed or nested
            too deeply
    """
    try:
        return Parser(source).parse()
    except RecursionError as e:
        raise ExpressionSyntaxError("expression is nested too deeply") from e


def evaluate(source: str, variables: Mapping[str, Any]) -> Any:
    """Compile and evaluate an expression against ``variables``.

    Raises:
        ExpressionSyntaxError: If the expression is malformed
        ExpressionEvaluationError: If evaluation fails (type mismatch,
            member access on a non-map, unknown function, numeric overflow)
    """
    node = compile_expression(source)
    logger.debug("Evaluating %s", source)
    try:
        return node.evaluate(variables)
    except RecursionError as e:
        raise ExpressionEvaluationError("expression is nested too deeply") from e
