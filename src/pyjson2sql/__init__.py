"""pyjson2sql - Render MySQL JSON values as type-preserving SQL expressions."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyjson2sql")
except PackageNotFoundError:  # running from a source tree
    __version__ = "0.0.0.dev0"

from pyjson2sql._errors import (
    JSONToSQLError,
    MaxDepthExceededError,
    ParseError,
    UnexpectedValueTypeError,
)
from pyjson2sql._parser import parse, parse_bytes
from pyjson2sql.marshal import Clock, marshal_sql, marshal_sql_to, marshal_sql_value
from pyjson2sql.sqltypes import (
    NULL_BYTES,
    QueryType,
    SQLValue,
    encode_string_sql,
    make_trusted,
)
from pyjson2sql.value import (
    VALUE_FALSE,
    VALUE_NULL,
    VALUE_TRUE,
    Value,
    ValueType,
    from_python,
    new_array,
    new_bit,
    new_blob,
    new_bool,
    new_date,
    new_datetime,
    new_number,
    new_object,
    new_raw_string,
    new_string,
    new_time,
)

__all__ = [
    "marshal_sql",
    "marshal_sql_to",
    "marshal_sql_value",
    "parse",
    "parse_bytes",
    "from_python",
    "Clock",
    "Value",
    "ValueType",
    "VALUE_FALSE",
    "VALUE_NULL",
    "VALUE_TRUE",
    "new_array",
    "new_bit",
    "new_blob",
    "new_bool",
    "new_date",
    "new_datetime",
    "new_number",
    "new_object",
    "new_raw_string",
    "new_string",
    "new_time",
    "NULL_BYTES",
    "QueryType",
    "SQLValue",
    "encode_string_sql",
    "make_trusted",
    "JSONToSQLError",
    "MaxDepthExceededError",
    "ParseError",
    "UnexpectedValueTypeError",
]
