"""
HarborBot - Math Expression Evaluator
=====================================

Recursive-descent evaluator for /math. Never calls eval().

Grammar (lowest precedence first):
    expression := term (('+' | '-') term)*
    term       := power (('*' | '/' | '%') power)*
    power      := unary ('^' power)?          right-associative
    unary      := '-' unary | factor
    factor     := NUMBER | '(' expression ')'
"""

import math
import re
from typing import List, Tuple, Union

Number = Union[int, float]
Token = Tuple[str, Union[str, float]]

ALLOWED_CHARACTERS = re.compile(r"^[\d+\-*/^%().\s]*$")

MAX_NESTING = 100
"""Deepest chain of parentheses, unary minus or exponents accepted."""


class MathError(ValueError):
    """Raised for any expression that cannot be evaluated."""

    pass


def tokenize(expression: str) -> List[Token]:
    """
    Split an expression into ("number", value), ("op", char) and
    ("paren", char) tokens.

    Raises:
        MathError: On characters outside digits, operators and parentheses.
    """
    if not ALLOWED_CHARACTERS.match(expression):
        raise MathError("Expression contains invalid characters")

    tokens: List[Token] = []
    i = 0
    while i < len(expression):
        char = expression[i]

        if char.isspace():
            i += 1
            continue

        if char.isdigit() or char == ".":
            start = i
            while i < len(expression) and (expression[i].isdigit() or expression[i] == "."):
                i += 1
            literal = expression[start:i]
            try:
                tokens.append(("number", float(literal)))
            except ValueError:
                raise MathError(f"Invalid number: {literal}")
            continue

        if char in "+-*/^%":
            tokens.append(("op", char))
        else:
            tokens.append(("paren", char))
        i += 1

    return tokens


class _Parser:
    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def peek(self) -> Union[Token, None]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> Token:
        token = self.peek()
        if token is None:
            raise MathError("Unexpected end of expression")
        self.pos += 1
        return token

    def descend(self) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise MathError("Expression is too deeply nested")

    def expression(self) -> float:
        value = self.term()
        while self.peek() in (("op", "+"), ("op", "-")):
            _, op = self.take()
            right = self.term()
            value = value + right if op == "+" else value - right
        return value

    def term(self) -> float:
        value = self.power()
        while self.peek() in (("op", "*"), ("op", "/"), ("op", "%")):
            _, op = self.take()
            right = self.power()
            if op == "*":
                value = value * right
            elif op == "/":
                if right == 0:
                    raise MathError("Division by zero")
                value = value / right
            else:
                if right == 0:
                    raise MathError("Modulo by zero")
                value = math.fmod(value, right)
        return value

    def power(self) -> float:
        base = self.unary()
        if self.peek() == ("op", "^"):
            self.take()
            self.descend()
            exponent = self.power()
            self.depth -= 1
            try:
                result = base ** exponent
            except (OverflowError, ZeroDivisionError) as e:
                raise MathError(str(e))
            if isinstance(result, complex):
                raise MathError("Result is not a real number")
            return result
        return base

    def unary(self) -> float:
        if self.peek() == ("op", "-"):
            self.take()
            self.descend()
            value = -self.unary()
            self.depth -= 1
            return value
        return self.factor()

    def factor(self) -> float:
        kind, value = self.take()
        if kind == "number":
            return value
        if (kind, value) == ("paren", "("):
            self.descend()
            result = self.expression()
            self.depth -= 1
            if self.peek() != ("paren", ")"):
                raise MathError("Missing closing parenthesis")
            self.take()
            return result
        raise MathError("Unexpected token")


def evaluate(expression: str) -> Number:
    """
    Evaluate an arithmetic expression.

    Integral results come back as int, so "2+2" gives 4 rather than 4.0.

    Raises:
        MathError: With a user-facing reason.
    """
    if not expression or not expression.strip():
        raise MathError("Unexpected end of expression")

    parser = _Parser(tokenize(expression))
    result = parser.expression()
    if parser.peek() is not None:
        raise MathError("Unexpected token")

    if math.isinf(result) or math.isnan(result):
        raise MathError("Result is too large")
    if float(result).is_integer():
        return int(result)
    return result


def format_result(value: Number) -> str:
    if isinstance(value, int):
        return str(value)
    return f"{value:.10g}"


__all__ = ["MathError", "MAX_NESTING", "tokenize", "evaluate", "format_result"]
