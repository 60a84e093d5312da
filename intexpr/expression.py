"""Abstract syntax tree for integer sums.

An ``IntegerExpression`` is either a :class:`Number` or a :class:`Plus`.
Values are Python ints, so sums never overflow.
"""
from dataclasses import dataclass
from typing import Union

# int() and str() refuse more digits than sys.get_int_max_str_digits()
# allows (4300 by default), so long literals are converted in slices.
DIGIT_CHUNK = 4000


def parse_digits(digits):
    """Convert a string of decimal digits of any length to an int."""
    n = 0
    for i in range(0, len(digits), DIGIT_CHUNK):
        chunk = digits[i:i + DIGIT_CHUNK]
        n = n * 10 ** len(chunk) + int(chunk)
    return n


def format_digits(n):
    """Inverse of :func:`parse_digits` for non-negative ``n``."""
    base = 10 ** DIGIT_CHUNK
    chunks = []
    while n >= base:
        n, low = divmod(n, base)
        chunks.append(str(low).zfill(DIGIT_CHUNK))
    chunks.append(str(n))
    return "".join(reversed(chunks))


@dataclass(frozen=True)
class Number:
    n: int

    def __post_init__(self):
        if self.n < 0:
            raise ValueError("Number must be non-negative")

    def value(self):
        return value(self)

    def __str__(self):
        return format_digits(self.n)


@dataclass(frozen=True)
class Plus:
    left: "IntegerExpression"
    right: "IntegerExpression"

    def value(self):
        return value(self)

    def __str__(self):
        return "(%s + %s)" % (self.left, self.right)


IntegerExpression = Union[Number, Plus]


def value(expression):
    """Evaluate ``expression``.

    Addition is associative, so the leaves are summed with an explicit
    stack instead of recursing once per ``Plus``.
    """
    total = 0
    pending = [expression]
    while pending:
        node = pending.pop()
        if isinstance(node, Plus):
            pending.append(node.right)
            pending.append(node.left)
        elif isinstance(node, Number):
            total += node.n
        else:
            raise TypeError("not an integer expression: %r" % (node,))
    return total
