"""Built-in functions seeded into every global environment. The keyword helpers (koottu, join_pannuda, push, ...)
are rewritten by the parser into plain calls of these names.
"""

import random

from thenga.lang.error import EvalError
from thenga.runtime import operators
from thenga.runtime.values import Builtin, format_value, type_name


def _join(items, separator=","):
    if not isinstance(items, list):
        raise EvalError("join requires an array")
    return format_value(separator).join(format_value(item) for item in items)


def _split(text, separator=","):
    if not isinstance(text, str):
        raise EvalError("split requires a string")
    separator = format_value(separator)
    if not separator:
        return list(text)
    return text.split(separator)


def _trim(text):
    if not isinstance(text, str):
        raise EvalError("trim requires a string")
    return text.strip()


def _concat(*args):
    return "".join(format_value(arg) for arg in args)


def _push(items, *new_items):
    if not isinstance(items, list):
        raise EvalError("push requires an array")
    items.extend(new_items)
    return float(len(items))


def _pop(items):
    if not isinstance(items, list):
        raise EvalError("pop requires an array")
    return items.pop() if items else None


def _length(value):
    if isinstance(value, (list, str, dict)):
        return float(len(value))
    raise EvalError(f"length requires an array, string, or object, got {type_name(value)}")


def _array(*items):
    return list(items)


def make_builtins(random_source=random.random):
    """Returns a fresh name -> Builtin table. random_source is called for every random() call."""
    table = [
        Builtin("add", operators.add, 2, 2),
        Builtin("subtract", operators.subtract, 2, 2),
        Builtin("multiply", operators.multiply, 2, 2),
        Builtin("divide", operators.divide, 2, 2),
        Builtin("random", lambda: float(random_source()), 0, 0),
        Builtin("join", _join, 1, 2),
        Builtin("split", _split, 1, 2),
        Builtin("trim", _trim, 1, 1),
        Builtin("concat", _concat, 0, None),
        Builtin("push", _push, 1, None),
        Builtin("pop", _pop, 1, 1),
        Builtin("length", _length, 1, 1),
        Builtin("array", _array, 0, None),
    ]
    return {builtin.name: builtin for builtin in table}
