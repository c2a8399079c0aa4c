import json
import math
from enum import Enum


def safe_json(value):
    """Return a JSON-compatible copy of ``value``.

    Enums collapse to their values, tuples and sets become lists, and
    non-finite floats become None.
    """
    if isinstance(value, Enum):
        return safe_json(value.value)
    if isinstance(value, dict):
        return {str(safe_json(k)): safe_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [safe_json(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def safe_json_dumps(value, **kwargs):
    kwargs.setdefault("default", str)
    return json.dumps(safe_json(value), **kwargs)


def strict_json_bytes(value):
    """Compact UTF-8 JSON; raises TypeError/ValueError on anything unencodable."""
    return json.dumps(
        value,
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    ).encode("utf-8")
