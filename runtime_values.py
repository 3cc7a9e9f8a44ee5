"""Rules shared by everything that inspects Lox runtime values.

Runtime values are plain Python objects:

    Lox     Python
    number  float (ints from hand-built ASTs are accepted as numbers)
    string  str
    boolean bool
    nil     None

`stringify` is the single text form of a value: `print` output, string
concatenation and Graphviz labels all go through it.
"""

from decimal import Decimal
from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """`nil` and `false` are falsy; everything else, including 0 and "", is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if is_number(a) and is_number(b):
        return a == b
    # values of different runtime types are never equal
    if type(a) is not type(b):
        return False
    return a == b


def stringify(value: Any) -> str:
    """Render a runtime value the way `print` displays it.

    Numbers use plain decimal notation with a trailing ".0" removed, so
    `1e16` prints as `10000000000000000` and `1e-7` as `0.0000001`.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        text = repr(float(value))
        if "e" in text:
            text = format(Decimal(text), "f")
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)
