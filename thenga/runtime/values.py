"""Runtime values of Thenga Lang and the rules every part of the evaluator agrees on: truthiness, canonical
formatting, typeof names, the two equalities, numeric coercion and deep copy.

Values are plain Python objects:

```
onnum_illa         -> None
sheriya/sheriyalla -> bool
numbers            -> float
text               -> str
sequences          -> list      (shared by reference; copy_adi makes an independent copy)
records            -> dict      (shared by reference, insertion ordered)
functions          -> Closure / Builtin
sleep, input       -> Delay / Pending placeholders, resolved by the host
```
"""

import math
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from thenga.lang.error import EvalError
from thenga.syntax.tokens import SPELLINGS, TokenType

NULL = SPELLINGS[TokenType.ONNUM_ILLA]
TRUE = SPELLINGS[TokenType.SHERIYA]
FALSE = SPELLINGS[TokenType.SHERIYALLA]

NUMERIC_TEXT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass(eq=False)
class Closure:
    """User-defined function: parameters, body and the environment it was declared in."""
    name: str
    params: Tuple[str, ...]
    body: object
    env: object = field(repr=False)
    is_async: bool = False


@dataclass(frozen=True, eq=False)
class Builtin:
    """Host-provided function. max_args of None accepts any number of trailing arguments."""
    name: str
    impl: Callable
    min_args: int = 0
    max_args: Optional[int] = 0

    def check_arity(self, count):
        if count < self.min_args or (self.max_args is not None and count > self.max_args):
            if self.max_args is None:
                expected = f"at least {self.min_args}"
            elif self.min_args == self.max_args:
                expected = str(self.min_args)
            else:
                expected = f"{self.min_args} to {self.max_args}"
            raise EvalError(f"Built-in '{self.name}' expects {expected} arguments, got {count}")


@dataclass(frozen=True, eq=False)
class Delay:
    """Sleep request, in milliseconds, left for the host to honor."""
    milliseconds: float


class Pending:
    """Input request that was not answered synchronously. resolve() reads the answer from standard input."""

    def __init__(self, prompt, reader=input):
        self.prompt = prompt
        self.reader = reader
        self.resolved = False
        self.value = None

    def resolve(self):
        if not self.resolved:
            self.value = self.reader(f"{self.prompt} ")
            self.resolved = True
        return self.value

    def __repr__(self):
        return f"Pending({self.prompt!r})"


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_callable(value):
    return isinstance(value, (Closure, Builtin))


def is_truthy(value):
    """None, False, 0, NaN and "" are false; everything else, empty sequences and records included, is true."""
    if value is None or value is False:
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def _shortest_digits(number):
    """Shortest round-trip digits of a positive finite number and the position of the decimal point in them."""
    mantissa, _, exponent = repr(float(number)).partition("e")
    whole, _, fraction = mantissa.partition(".")
    digits = whole + fraction
    point = len(whole) + int(exponent or 0)

    significant = digits.lstrip("0")
    point -= len(digits) - len(significant)
    return significant.rstrip("0"), point


def format_number(number):
    """Shortest round-trip decimal text: plain notation from 1e-7 up to 1e21, exponent notation (5e-7, 1.5e+21)
    outside that range.
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"

    sign = "-" if number < 0 else ""
    digits, point = _shortest_digits(abs(number))
    if len(digits) <= point <= 21:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits

    exponent = point - 1
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    return f"{sign}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def format_value(value):
    """Canonical text of a value, used by para/enthada_ith and by every value-to-text coercion."""
    if value is None:
        return NULL
    if isinstance(value, bool):
        return TRUE if value else FALSE
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        return "{" + ", ".join(f"{key}: {format_value(item)}" for key, item in value.items()) + "}"
    if is_callable(value):
        return "<function>"
    if isinstance(value, Delay):
        return f"<delay {format_number(value.milliseconds)}ms>"
    if isinstance(value, Pending):
        return "<pending>"
    return str(value)


def type_name(value):
    """Result of ithenthonn (typeof). Null, sequences and records are all "object"."""
    if value is None or isinstance(value, (list, dict)):
        return "object"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_callable(value):
        return "function"
    return "promise"


def to_number(value):
    """Numeric coercion used by arithmetic: booleans count as 1/0, null as 0, numeric text as its number."""
    if is_number(value):
        return float(value)
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if value is None:
        return 0.0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if NUMERIC_TEXT.fullmatch(text):
            return float(text)
        raise EvalError(f"Cannot convert '{value}' to a number")
    raise EvalError(f"Cannot convert {type_name(value)} to a number")


def strict_equals(left, right):
    """=== : same kind and same value; sequences, records and functions only equal themselves."""
    if is_number(left) and is_number(right):
        return left == right
    if left is None or right is None:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return left is right


def loose_equals(left, right):
    """== : like === after coercing booleans to numbers and numeric text compared against numbers."""
    if left is None or right is None:
        return left is right
    if isinstance(left, bool) and not isinstance(right, bool):
        return loose_equals(to_number(left), right)
    if isinstance(right, bool) and not isinstance(left, bool):
        return loose_equals(left, to_number(right))
    if is_number(left) and isinstance(right, str) or isinstance(left, str) and is_number(right):
        try:
            return to_number(left) == to_number(right)
        except EvalError:
            return False
    return strict_equals(left, right)


def deep_copy(value, memo=None):
    """Recursively clones sequences and records. Shared and cyclic sub-structure is reproduced within the copy."""
    if memo is None:
        memo = {}
    if not isinstance(value, (list, dict)):
        return value
    if id(value) in memo:
        return memo[id(value)]

    if isinstance(value, list):
        copy = []
        memo[id(value)] = copy
        copy.extend(deep_copy(item, memo) for item in value)
    else:
        copy = {}
        memo[id(value)] = copy
        for key, item in value.items():
            copy[key] = deep_copy(item, memo)
    return copy


def is_valid(value):
    """Result of aalu_sheri_aano: sequences and records must be non-empty, anything else must not be null."""
    if isinstance(value, (list, dict)):
        return len(value) > 0
    return value is not None
