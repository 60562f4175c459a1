from __future__ import annotations

import json
import math
import operator
import platform
import sys
import time
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict

import psutil

from ..shared.errors import DivisionByZero, ResourceUnavailable, UnknownOperation

JsonDict = Dict[str, Any]

DEFAULT_MANIFEST_PATH = Path(__file__).resolve().parents[1] / "manifest.json"

_OPERATIONS: dict[str, Callable[[float, float], float]] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}


def to_double(value: Any) -> float:
    """Coerce a JSON number to a double; integers past the double range become +/-inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def format_number(value: float) -> str:
    """
    Render a double with ECMAScript Number-to-string rules.

    Shortest round-trip digits, ``5`` not ``5.0``, plain decimals for
    exponents -7 < e < 21 (``0.00001``), exponent form otherwise (``1e-7``,
    ``1e+21``), and ``Infinity``/``NaN`` for non-finite values.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    mantissa, _, exp_text = text.partition("e")
    exponent = int(exp_text)
    if -7 < exponent < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"


def tool_echo(args: JsonDict) -> str:
    return f"Echo: {args['message']}"


def tool_calculate(args: JsonDict) -> str:
    op = args.get("operation")
    fn = _OPERATIONS.get(op)
    if fn is None:
        raise UnknownOperation(f"Unknown operation: {op}")

    a = to_double(args["a"])
    b = to_double(args["b"])
    if op == "divide" and b == 0:
        raise DivisionByZero("Division by zero is not allowed")

    result = fn(a, b)
    return f"{format_number(a)} {op} {format_number(b)} = {format_number(result)}"


def system_snapshot() -> JsonDict:
    memory = psutil.virtual_memory()
    return {
        "platform": sys.platform,
        "arch": platform.machine(),
        "pythonVersion": platform.python_version(),
        "uptime": round(time.time() - psutil.boot_time(), 2),
        "totalMemory": memory.total,
        "freeMemory": memory.available,
    }


def tool_get_system_info(_: JsonDict) -> str:
    return f"System Information:\n{json.dumps(system_snapshot(), indent=2)}"


def read_text_artifact(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        reason = getattr(exc, "strerror", None) or str(exc)
        raise ResourceUnavailable(f"Failed to read {path.name}: {reason}") from exc


def manifest_reader(path: Path | None = None) -> Callable[[], str]:
    target = Path(path) if path else DEFAULT_MANIFEST_PATH

    def _read() -> str:
        return read_text_artifact(target)

    return _read
