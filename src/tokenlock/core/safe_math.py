"""
Checked unsigned 256-bit arithmetic.

Every helper rejects the call instead of wrapping or saturating, mirroring the
uint256 semantics token ledgers settle on. ``sub_clamped`` is the single
saturating exception and is only used where a floor at zero is the intended
outcome.
"""

from __future__ import annotations

from .vesting_exceptions import ArithmeticFaultError

UINT256_MAX = 2**256 - 1


def _require_uint(value: int, name: str, op: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArithmeticFaultError(
            f"{op}: {name} must be an integer, got {type(value).__name__}",
            details={"op": op, "operand": name},
        )
    if value < 0 or value > UINT256_MAX:
        raise ArithmeticFaultError(
            f"{op}: {name} out of uint256 range",
            details={"op": op, "operand": name, "value": value},
        )


def add(a: int, b: int) -> int:
    _require_uint(a, "a", "add")
    _require_uint(b, "b", "add")
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticFaultError("add: overflow", details={"a": a, "b": b})
    return result


def sub(a: int, b: int) -> int:
    _require_uint(a, "a", "sub")
    _require_uint(b, "b", "sub")
    if b > a:
        raise ArithmeticFaultError("sub: underflow", details={"a": a, "b": b})
    return a - b


def mul(a: int, b: int) -> int:
    _require_uint(a, "a", "mul")
    _require_uint(b, "b", "mul")
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticFaultError("mul: overflow", details={"a": a, "b": b})
    return result


def div(a: int, b: int) -> int:
    """Floor division; a zero divisor is a fault, not an infinity."""
    _require_uint(a, "a", "div")
    _require_uint(b, "b", "div")
    if b == 0:
        raise ArithmeticFaultError("div: division by zero", details={"a": a})
    return a // b


def sub_clamped(a: int, b: int) -> int:
    """Subtract, flooring the result at zero instead of underflowing."""
    _require_uint(a, "a", "sub_clamped")
    _require_uint(b, "b", "sub_clamped")
    return a - b if b <= a else 0
