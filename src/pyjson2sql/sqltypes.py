"""Wire-typed SQL values and MySQL literal escaping."""

from __future__ import annotations

import enum
from dataclasses import dataclass

NULL_BYTES = b"null"
"""Canonical JSON encoding of SQL NULL, accepted by the parser."""

# Bytes that MySQL requires to be backslash-escaped inside a string literal.
_SQL_ENCODE_MAP: dict[str, str] = {
    "\x00": "\\0",
    "'": "\\'",
    '"': '\\"',
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\x1a": "\\Z",
    "\\": "\\\\",
}

_SQL_ENCODE_TABLE = str.maketrans(_SQL_ENCODE_MAP)


class QueryType(enum.StrEnum):
    NULL_TYPE = "NULL_TYPE"
    JSON = "JSON"
    VARCHAR = "VARCHAR"
    VARBINARY = "VARBINARY"


@dataclass(frozen=True)
class SQLValue:
    """Raw bytes tagged with the wire type they were produced for."""

    type: QueryType
    raw: bytes = b""

    def is_null(self) -> bool:
        return self.type is QueryType.NULL_TYPE

    def to_bytes(self) -> bytes:
        return self.raw

    def to_str(self) -> str:
        return self.raw.decode("utf-8")


NULL = SQLValue(QueryType.NULL_TYPE)


def make_trusted(typ: QueryType, raw: bytes | bytearray) -> SQLValue:
    """Wrap bytes that are already valid for ``typ`` without re-validating them."""
    if typ is QueryType.NULL_TYPE:
        return NULL
    return SQLValue(typ, bytes(raw))


def encode_string_sql(text: str) -> bytes:
    """Return ``text`` as a single-quoted, escaped MySQL string literal."""
    return ("'" + text.translate(_SQL_ENCODE_TABLE) + "'").encode("utf-8")
