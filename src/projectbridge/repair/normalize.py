# src/projectbridge/repair/normalize.py
"""
Generic per-field normalizer for parsed-but-untrusted LLM output.

A schema is a small tree of descriptors (`Obj`, `ArrayOf`, `Str`, `Num`,
`Int`, `Bool`, `Choice`); a plain dict is shorthand for `Obj`. One function,
`normalize(raw, schema, defaults)`, walks raw data against it:

* right type            -> copied
* safely coercible      -> coerced ("85" -> 85, 3 -> "3", "HIGH" -> "High")
* anything else/missing -> that field's default, siblings untouched
* array items           -> coerced one by one, bad items dropped
"""
from __future__ import annotations
import copy
import logging
import math
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()


class SchemaMismatch(ValueError):
    """A value cannot be coerced to its descriptor; the caller substitutes a default."""


class Str:
    def coerce(self, value: Any, default: Any = None) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise SchemaMismatch(f"expected string, got {type(value).__name__}")


class Num:
    """A number, clamped to [low, high] when bounds are given."""

    def __init__(self, low: Optional[float] = None, high: Optional[float] = None):
        self.low, self.high = low, high

    def _clamp(self, n):
        if self.low is not None:
            n = max(self.low, n)
        if self.high is not None:
            n = min(self.high, n)
        return n

    def coerce(self, value: Any, default: Any = None) -> float | int:
        return self._clamp(self._number(value))

    def _number(self, value: Any) -> float | int:
        if isinstance(value, bool):
            raise SchemaMismatch("expected number, got bool")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                raise SchemaMismatch(f"not finite: {value!r}")
            return value
        if isinstance(value, str):
            s = value.strip().rstrip("%").strip()
            try:
                number = float(s)
            except ValueError:
                raise SchemaMismatch(f"not numeric: {value!r}") from None
            if math.isnan(number) or math.isinf(number):
                raise SchemaMismatch(f"not finite: {value!r}")
            return int(number) if number.is_integer() else number
        raise SchemaMismatch(f"expected number, got {type(value).__name__}")


class Int(Num):
    """Whole number, rounded half-up and clamped to [low, high] when given."""

    def coerce(self, value: Any, default: Any = None) -> int:
        number = self._number(value)
        if isinstance(number, int):
            # arbitrarily large ints never go through float
            return self._clamp(number)
        return self._clamp(int(math.floor(number + 0.5)))


class Bool:
    def coerce(self, value: Any, default: Any = None) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise SchemaMismatch(f"expected bool, got {value!r}")


class Choice:
    """One of a closed set of strings, matched case-insensitively to the canonical spelling."""

    def __init__(self, values: Iterable[str], default: Optional[str] = None):
        self.values = tuple(values)
        self.default = default
        self._lookup = {v.lower(): v for v in self.values}

    def coerce(self, value: Any, default: Any = None) -> str:
        if isinstance(value, str):
            hit = self._lookup.get(value.strip().lower())
            if hit is not None:
                return hit
        if self.default is not None:
            return self.default
        raise SchemaMismatch(f"{value!r} not in {self.values}")


class Obj:
    def __init__(self, fields: Dict[str, Any], required: Tuple[str, ...] = ()):
        self.fields = {k: as_schema(v) for k, v in fields.items()}
        self.required = tuple(required)

    def coerce(self, value: Any, default: Any = None) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise SchemaMismatch(f"expected object, got {type(value).__name__}")
        for key in self.required:
            if value.get(key) in (None, "", [], {}):
                raise SchemaMismatch(f"missing required field {key!r}")
        return self.normalize(value, default)

    def normalize(self, raw: Any, defaults: Any) -> Dict[str, Any]:
        defaults = defaults if isinstance(defaults, dict) else {}
        if not isinstance(raw, dict):
            return copy.deepcopy(defaults)
        out: Dict[str, Any] = {}
        for key, desc in self.fields.items():
            default = defaults.get(key, _MISSING)
            value = raw.get(key)
            if value is not None:
                try:
                    out[key] = desc.coerce(value, None if default is _MISSING else default)
                    continue
                except SchemaMismatch as e:
                    logger.debug("[normalize] %s: %s, using default", key, e)
            if default is not _MISSING:
                out[key] = copy.deepcopy(default)
        for key, default in defaults.items():
            if key not in out:
                out[key] = copy.deepcopy(default)
        return out


class ArrayOf:
    """
    A list whose items are coerced one at a time; items that do not fit are
    dropped. For object items, a bare string becomes {"name": s} when the
    item schema has a `name` field.
    """

    def __init__(self, item: Any, item_default: Any = None):
        self.item = as_schema(item)
        self.item_default = item_default

    def coerce(self, value: Any, default: Any = None) -> list:
        if not isinstance(value, list):
            raise SchemaMismatch(f"expected array, got {type(value).__name__}")
        out = []
        for item in value:
            if isinstance(self.item, Obj) and isinstance(item, str) and "name" in self.item.fields:
                item = {"name": item}
            try:
                out.append(self.item.coerce(item, copy.deepcopy(self.item_default)))
            except SchemaMismatch as e:
                logger.debug("[normalize] dropped array item %r: %s", item, e)
        return out


STRING = Str()
NUMBER = Num()
INTEGER = Int()
BOOLEAN = Bool()


def as_schema(schema: Any):
    if isinstance(schema, dict):
        return Obj(schema)
    if isinstance(schema, (Str, Num, Bool, Choice, Obj, ArrayOf)):
        return schema
    raise TypeError(f"not a schema descriptor: {schema!r}")


def normalize(raw: Any, schema: Any, defaults: Any) -> Any:
    """
    Coerce `raw` to `schema`, substituting `defaults` field by field.
    `normalize(None, schema, defaults)` is a deep copy of `defaults`.
    """
    desc = as_schema(schema)
    if isinstance(desc, Obj):
        return desc.normalize(raw, defaults)
    if raw is None:
        return copy.deepcopy(defaults)
    try:
        return desc.coerce(raw, defaults)
    except SchemaMismatch as e:
        logger.debug("[normalize] %s, using default", e)
        return copy.deepcopy(defaults)
