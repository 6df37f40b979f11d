"""Render Value trees as MySQL expressions that rebuild the same JSON value.

The output keeps every type MySQL's JSON can hold, so a DATE stays a DATE
rather than becoming a string that merely looks like one. Containers become
``JSON_OBJECT(...)``/``JSON_ARRAY(...)`` calls; scalars at the top level are
wrapped in ``CAST(... as JSON)`` since nothing else tells MySQL to treat a
bare literal as JSON.
"""

from __future__ import annotations

import datetime as _dt
import logging
from collections.abc import Callable

from pyjson2sql._constants import DEFAULT_MAX_DEPTH, TIME_HOUR_WRAP, UTF8MB4_INTRODUCER
from pyjson2sql._errors import ParseError, UnexpectedValueTypeError
from pyjson2sql._parser import parse_bytes
from pyjson2sql.sqltypes import NULL_BYTES, QueryType, SQLValue, encode_string_sql, make_trusted
from pyjson2sql.value import Value, ValueType, midnight

logger = logging.getLogger(__name__)

Clock = Callable[[], _dt.datetime]
"""Returns the current time; read when rendering TIME values."""

_US_PER_SECOND = 1_000_000
_US_PER_MINUTE = 60 * _US_PER_SECOND
_US_PER_HOUR = 60 * _US_PER_MINUTE


def utc_now() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


def _format_date(d: _dt.date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def _format_datetime(dt: _dt.datetime) -> str:
    return (
        f"{_format_date(dt)} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond:06d}"
    )


def _format_time(diff: _dt.timedelta) -> str:
    us = diff // _dt.timedelta(microseconds=1)
    sign = ""
    if us < 0:
        us = -us
        sign = "-"
    hours, us = divmod(us, _US_PER_HOUR)
    minutes, us = divmod(us, _US_PER_MINUTE)
    seconds, us = divmod(us, _US_PER_SECOND)
    # MySQL wraps the hour field around and loses data past 32 hours.
    return f"{sign}{hours % TIME_HOUR_WRAP:02d}:{minutes:02d}:{seconds:02d}.{us:06d}"


def _format_bits(b: bytes) -> str:
    return format(int.from_bytes(b, "big"), "b")


class _Marshaler:
    """Appends SQL renderings of Value nodes to a byte buffer."""

    def __init__(self, dst: bytearray, clock: Clock) -> None:
        self._dst = dst
        self._clock = clock
        self._now: _dt.datetime | None = None

    @property
    def now(self) -> _dt.datetime:
        # One clock read per render so every TIME node shares a day boundary.
        if self._now is None:
            self._now = self._clock()
        return self._now

    def write(self, v: Value, top: bool) -> None:
        w = self._dst
        # Pending work: literal bytes to append or (node, top) still to render.
        stack: list[bytes | tuple[Value, bool]] = [(v, top)]
        while stack:
            item = stack.pop()
            if isinstance(item, bytes):
                w += item
                continue
            v, top = item
            t = v.type

            if t == ValueType.OBJECT:
                parts: list[bytes | tuple[Value, bool]] = [b"JSON_OBJECT("]
                for i, (k, vv) in enumerate(v.data):
                    if i:
                        parts.append(b", ")
                    parts.append(UTF8MB4_INTRODUCER + encode_string_sql(k) + b", ")
                    parts.append((vv, False))
                parts.append(b")")
                stack.extend(reversed(parts))
                continue

            if t == ValueType.ARRAY:
                parts = [b"JSON_ARRAY("]
                for i, vv in enumerate(v.data):
                    if i:
                        parts.append(b", ")
                    parts.append((vv, False))
                parts.append(b")")
                stack.extend(reversed(parts))
                continue

            if t in (ValueType.STRING, ValueType.RAW_STRING):
                if top:
                    w += b"CAST(JSON_QUOTE("
                w += UTF8MB4_INTRODUCER
                w += encode_string_sql(v.data)
                if top:
                    w += b") as JSON)"
                continue

            literal = self._scalar(v)
            if top:
                w += b"CAST("
            w += literal.encode("utf-8")
            if top:
                w += b" as JSON)"

    def _scalar(self, v: Value) -> str:
        t = v.type
        if t == ValueType.DATE:
            return f"date '{_format_date(v.date())}'"
        if t == ValueType.DATETIME:
            return f"timestamp '{_format_datetime(v.datetime())}'"
        if t == ValueType.TIME:
            now = self.now
            diff = v.time(now) - midnight(now)
            return f"time '{_format_time(diff)}'"
        if t == ValueType.BLOB:
            return f"x'{v.binary().hex()}'"
        if t == ValueType.BIT:
            return f"b'{_format_bits(v.binary())}'"
        if t == ValueType.NUMBER:
            return v.data
        if t == ValueType.BOOLEAN:
            return "true" if v.data else "false"
        if t == ValueType.NULL:
            return "null"
        raise UnexpectedValueTypeError(f"BUG: unexpected Value type: {t!r}")


def marshal_sql_to(
    value: Value,
    dst: bytearray | None = None,
    *,
    clock: Clock | None = None,
) -> bytearray:
    """Append the top-level SQL rendering of ``value`` to ``dst``.

    Args:
        value: Root of the tree to render.
        dst: Buffer to append to. A new one is created when omitted.
        clock: Source of the current time for TIME values. Defaults to
            :func:`utc_now`.

    Returns:
        The extended buffer (``dst`` itself when given).

    Raises:
        UnexpectedValueTypeError: If the tree holds a node of unknown type.
    """
    if dst is None:
        dst = bytearray()
    _Marshaler(dst, clock or utc_now).write(value, True)
    return dst


def marshal_sql(value: Value, *, clock: Clock | None = None) -> str:
    """Return the top-level SQL rendering of ``value`` as text."""
    return marshal_sql_to(value, clock=clock).decode("utf-8")


def marshal_sql_value(
    buf: bytes | bytearray,
    *,
    clock: Clock | None = None,
    max_depth: int | None = None,
) -> SQLValue:
    """Convert a raw JSON column value into a trusted JSON SQL expression.

    An empty buffer is treated as SQL NULL.

    Args:
        buf: UTF-8 JSON text as read from the column.
        clock: Source of the current time for TIME values.
        max_depth: Maximum nesting depth accepted. Defaults to 300.

    Returns:
        A :class:`SQLValue` of type JSON holding the SQL expression.

    Raises:
        ParseError: If ``buf`` is not valid JSON.
    """
    if not buf:
        buf = NULL_BYTES
    if max_depth is None:
        max_depth = DEFAULT_MAX_DEPTH
    try:
        value = parse_bytes(buf, max_depth=max_depth)
    except ParseError as e:
        logger.debug("cannot marshal JSON column value: %s", e.internal())
        raise
    return make_trusted(QueryType.JSON, marshal_sql_to(value, clock=clock))
