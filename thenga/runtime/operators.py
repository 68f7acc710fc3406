"""Semantics of the binary and unary operators. && and || are not here: they short-circuit, so the evaluator handles
them before evaluating the right operand.
"""

import math

from thenga.lang.error import EvalError
from thenga.runtime.values import format_value, is_truthy, loose_equals, strict_equals, to_number


def add(left, right):
    """Text on either side concatenates canonical text, otherwise numbers are added."""
    if isinstance(left, str) or isinstance(right, str):
        return format_value(left) + format_value(right)
    return to_number(left) + to_number(right)


def subtract(left, right):
    return to_number(left) - to_number(right)


def multiply(left, right):
    return to_number(left) * to_number(right)


def divide(left, right):
    divisor = to_number(right)
    if divisor == 0:
        raise EvalError("Division by zero")
    return to_number(left) / divisor


def modulo(left, right):
    """Remainder with the sign of the dividend. A zero divisor gives NaN."""
    dividend, divisor = to_number(left), to_number(right)
    if divisor == 0 or math.isinf(dividend):
        return math.nan
    return math.fmod(dividend, divisor)


def _relation(compare):
    """Text against text compares lexicographically, anything else numerically. A side with no numeric reading
    makes the comparison false.
    """
    def relation(left, right):
        if isinstance(left, str) and isinstance(right, str):
            return compare(left, right)
        try:
            return compare(to_number(left), to_number(right))
        except EvalError:
            return False
    return relation


BINARY = {
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": divide,
    "%": modulo,
    ">": _relation(lambda a, b: a > b),
    "<": _relation(lambda a, b: a < b),
    ">=": _relation(lambda a, b: a >= b),
    "<=": _relation(lambda a, b: a <= b),
    "==": loose_equals,
    "===": strict_equals,
    "!=": lambda left, right: not loose_equals(left, right),
}

UNARY = {
    "!": lambda operand: not is_truthy(operand),
    "-": lambda operand: -to_number(operand),
}


def apply_binary(operator, left, right):
    try:
        rule = BINARY[operator]
    except KeyError:
        raise EvalError(f"Unknown operator: {operator}", internal=True)
    return rule(left, right)


def apply_unary(operator, operand):
    try:
        rule = UNARY[operator]
    except KeyError:
        raise EvalError(f"Unknown unary operator: {operator}", internal=True)
    return rule(operand)
