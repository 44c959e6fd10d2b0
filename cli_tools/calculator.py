"""Command-line calculator: `calculator <num1> <num2> <operation>`.

Operations are add, sub, mul and div. Anything else prints the sentinel
"Invalid operation" and still exits 0.
"""

import math
import os
import re
import sys
from decimal import Decimal
from typing import Callable, Dict, Optional, Sequence, Union

from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="calculator")

INVALID_OPERATION = "Invalid operation"

# Longest numeric prefix, the way a permissive parseFloat reads input:
# "3.5kg" -> 3.5, ".5" -> 0.5, "1e3x" -> 1000, "-Infinity" -> -inf.
_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

Number = float
Result = Union[float, str]


def parse_float(text: Optional[str]) -> Number:
    """Parse the leading number in `text`; NaN when there is none."""
    if text is None:
        return math.nan
    match = _FLOAT_PREFIX.match(text.lstrip())
    if not match:
        return math.nan
    token = match.group(0)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def _divide(x: Number, y: Number) -> Number:
    """IEEE division: x/0 is +-inf, 0/0 and nan/0 are nan."""
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


OPERATIONS: Dict[str, Callable[[Number, Number], Number]] = {
    "add": lambda x, y: x + y,
    "sub": lambda x, y: x - y,
    "mul": lambda x, y: x * y,
    "div": _divide,
}


def calculate(x: Number, y: Number, operation: Optional[str]) -> Result:
    """Apply `operation` to x and y, or return INVALID_OPERATION."""
    func = OPERATIONS.get(operation) if operation is not None else None
    if func is None:
        return INVALID_OPERATION
    return func(x, y)


def format_result(value: Result) -> str:
    """
    Print numbers in the shortest round-trip form: 3 not 3.0, -0, 0.00001,
    1e-7, 1e+21, NaN, Infinity.

    Plain notation is used while the decimal exponent is in [-6, 21);
    outside that range it switches to d.ddde+/-n with no exponent padding.
    """
    if isinstance(value, str):
        return value
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(float(value)))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    # Position of the decimal point relative to the first digit.
    n = exponent + k

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    setup_logging(level=os.getenv("LOG_LEVEL", "WARNING"), job_name="calculator")

    # Missing positions behave as absent values rather than a usage error.
    num1, num2, operation = (args + [None, None, None])[:3]
    logger.debug(f"Calculating {num1!r} {operation!r} {num2!r}")

    result = calculate(parse_float(num1), parse_float(num2), operation)
    print(f"Result: {format_result(result)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
