"""Tagged JSON value tree, including MySQL's extended JSON scalar types."""

from __future__ import annotations

import datetime as _dt
import enum
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pyjson2sql._constants import MAX_TIME_HOURS


class ValueType(enum.IntEnum):
    NULL = 0
    NUMBER = 1
    STRING = 2
    OBJECT = 3
    ARRAY = 4
    BOOLEAN = 5
    DATE = 6
    DATETIME = 7
    TIME = 8
    BLOB = 9
    BIT = 10
    # Pre-escaped string content; renders exactly like STRING.
    RAW_STRING = 11


@dataclass(frozen=True)
class Value:
    """One node of a JSON value tree.

    ``data`` holds the variant's payload:

    - OBJECT: tuple of ``(key, Value)`` pairs in insertion order
    - ARRAY: tuple of Value
    - STRING / RAW_STRING: ``str``
    - NUMBER: ``str`` holding the decimal text exactly as parsed
    - DATE: ``datetime.date``
    - DATETIME: ``datetime.datetime``
    - TIME: signed ``datetime.timedelta`` since midnight
    - BLOB / BIT: ``bytes``
    - BOOLEAN: ``bool``
    - NULL: ``None``

    Build values through the ``new_*`` factories rather than directly.
    """

    type: ValueType
    data: Any = None
    depth: int = field(default=0, compare=False, repr=False)

    def _expect(self, *types: ValueType) -> None:
        if self.type not in types:
            raise TypeError(f"expected {types[0].name} value, got {self.type.name}")

    def items(self) -> Iterator[tuple[str, Value]]:
        self._expect(ValueType.OBJECT)
        return iter(self.data)

    def keys(self) -> list[str]:
        self._expect(ValueType.OBJECT)
        return [k for k, _ in self.data]

    def elements(self) -> Iterator[Value]:
        self._expect(ValueType.ARRAY)
        return iter(self.data)

    def text(self) -> str:
        self._expect(ValueType.STRING, ValueType.RAW_STRING, ValueType.NUMBER)
        return self.data

    def date(self) -> _dt.date:
        self._expect(ValueType.DATE)
        return self.data

    def datetime(self) -> _dt.datetime:
        self._expect(ValueType.DATETIME)
        return self.data

    def time(self, now: _dt.datetime) -> _dt.datetime:
        """Return the TIME payload as an instant on ``now``'s calendar day (UTC)."""
        self._expect(ValueType.TIME)
        return midnight(now) + self.data

    def binary(self) -> bytes:
        self._expect(ValueType.BLOB, ValueType.BIT)
        return self.data

    def boolean(self) -> bool:
        self._expect(ValueType.BOOLEAN)
        return self.data

    def __len__(self) -> int:
        self._expect(ValueType.OBJECT, ValueType.ARRAY)
        return len(self.data)

    def __bool__(self) -> bool:
        # Every node is truthy, including JSON null and empty containers.
        return True


def midnight(now: _dt.datetime) -> _dt.datetime:
    """Return 00:00 UTC of ``now``'s calendar date."""
    return _dt.datetime(now.year, now.month, now.day, tzinfo=_dt.timezone.utc)


_MAX_TIME = _dt.timedelta(hours=MAX_TIME_HOURS, minutes=59, seconds=59)

VALUE_NULL = Value(ValueType.NULL)
VALUE_TRUE = Value(ValueType.BOOLEAN, True)
VALUE_FALSE = Value(ValueType.BOOLEAN, False)


def _check(payload: Any, kind: type | tuple[type, ...], name: str) -> None:
    if not isinstance(payload, kind):
        raise TypeError(f"{name} payload must be {kind}, got {type(payload).__name__}")


def _check_text(s: Any, name: str) -> None:
    _check(s, str, name)
    try:
        s.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"{name} is not valid UTF-8 text: {e.reason}") from e


def new_object(pairs: Iterable[tuple[str, Value]] | Mapping[str, Value]) -> Value:
    if isinstance(pairs, Mapping):
        pairs = pairs.items()
    kvs = tuple((k, v) for k, v in pairs)
    for k, v in kvs:
        _check_text(k, "object key")
        _check(v, Value, "object member")
    return Value(ValueType.OBJECT, kvs, 1 + max((v.depth for _, v in kvs), default=0))


def new_array(items: Iterable[Value]) -> Value:
    elems = tuple(items)
    for v in elems:
        _check(v, Value, "array element")
    return Value(ValueType.ARRAY, elems, 1 + max((v.depth for v in elems), default=0))


def new_string(s: str) -> Value:
    _check_text(s, "string")
    return Value(ValueType.STRING, s)


def new_raw_string(s: str) -> Value:
    _check_text(s, "raw string")
    return Value(ValueType.RAW_STRING, s)


def new_number(text: str) -> Value:
    _check(text, str, "number")
    return Value(ValueType.NUMBER, text)


def new_bool(b: bool) -> Value:
    return VALUE_TRUE if b else VALUE_FALSE


def new_date(d: _dt.date) -> Value:
    # datetime is a date subclass; a DATE must not carry a time of day.
    if isinstance(d, _dt.datetime):
        d = d.date()
    _check(d, _dt.date, "date")
    return Value(ValueType.DATE, d)


def new_datetime(dt: _dt.datetime) -> Value:
    _check(dt, _dt.datetime, "datetime")
    return Value(ValueType.DATETIME, dt)


def new_time(td: _dt.timedelta) -> Value:
    _check(td, _dt.timedelta, "time")
    if abs(td) > _MAX_TIME:
        raise ValueError(f"time {td} is outside MySQL's TIME range of +/-{_MAX_TIME}")
    return Value(ValueType.TIME, td)


def new_blob(b: bytes | bytearray) -> Value:
    _check(b, (bytes, bytearray), "blob")
    return Value(ValueType.BLOB, bytes(b))


def new_bit(b: bytes | bytearray) -> Value:
    _check(b, (bytes, bytearray), "bit")
    return Value(ValueType.BIT, bytes(b))


def from_python(obj: Any) -> Value:
    """Build a Value tree from plain Python objects.

    BIT values have no natural Python counterpart; use :func:`new_bit`.

    Raises:
        TypeError: For unsupported types or non-string object keys.
        ValueError: For NaN or infinite floats, which JSON cannot represent,
            timedeltas outside the TIME range and text that is not valid UTF-8.
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return VALUE_NULL
    # bool before int: bool is an int subclass.
    if isinstance(obj, bool):
        return new_bool(obj)
    if isinstance(obj, int):
        return new_number(str(obj))
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueError(f"cannot represent {obj!r} as a JSON number")
        return new_number(repr(obj))
    if isinstance(obj, Decimal):
        if not obj.is_finite():
            raise ValueError(f"cannot represent {obj!r} as a JSON number")
        return new_number(str(obj))
    if isinstance(obj, str):
        return new_string(obj)
    if isinstance(obj, (bytes, bytearray)):
        return new_blob(obj)
    if isinstance(obj, _dt.datetime):
        return new_datetime(obj)
    if isinstance(obj, _dt.date):
        return new_date(obj)
    if isinstance(obj, _dt.timedelta):
        return new_time(obj)
    if isinstance(obj, Mapping):
        pairs = []
        for k, v in obj.items():
            if not isinstance(k, str):
                raise TypeError(f"object keys must be str, got {type(k).__name__}")
            pairs.append((k, from_python(v)))
        return new_object(pairs)
    if isinstance(obj, (list, tuple)):
        return new_array(from_python(v) for v in obj)
    raise TypeError(f"cannot convert {type(obj).__name__} to a JSON value")
