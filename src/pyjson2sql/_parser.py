"""JSON text parser producing Value trees, built on a Lark LALR grammar."""

from __future__ import annotations

import json

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from pyjson2sql._constants import DEFAULT_MAX_DEPTH
from pyjson2sql._errors import (
    ERR_MSG_DEPTH_EXCEEDED,
    ERR_MSG_INVALID_ENCODING,
    ERR_MSG_INVALID_JSON,
    MaxDepthExceededError,
    ParseError,
)
from pyjson2sql.value import (
    VALUE_FALSE,
    VALUE_NULL,
    VALUE_TRUE,
    Value,
    new_array,
    new_number,
    new_object,
    new_string,
)

_JSON_GRAMMAR = r"""
    ?start: value

    ?value: object
          | array
          | string
          | NUMBER -> number
          | "true" -> true
          | "false" -> false
          | "null" -> null

    array: "[" [value ("," value)*] "]"
    object: "{" [pair ("," pair)*] "}"
    pair: string ":" value
    string: STRING

    STRING: /"(?:[^"\\\x00-\x1f]|\\(?:["\\\/bfnrt]|u[0-9a-fA-F]{4}))*"/
    NUMBER: /-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?/
    WS: /[ \t\n\r]+/

    %ignore WS
"""


def _decode_string(token: Token) -> str:
    s = json.loads(token)
    # Lone surrogate escapes decode to unencodable code points; MySQL would
    # store U+FFFD for them.
    return s.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


class _ValueBuilder(Transformer):
    """Builds Value nodes bottom-up while the LALR parser reduces."""

    def string(self, children: list[Token]) -> Value:
        return new_string(_decode_string(children[0]))

    def number(self, children: list[Token]) -> Value:
        return new_number(str(children[0]))

    def true(self, _children: list) -> Value:
        return VALUE_TRUE

    def false(self, _children: list) -> Value:
        return VALUE_FALSE

    def null(self, _children: list) -> Value:
        return VALUE_NULL

    def pair(self, children: list[Value]) -> tuple[str, Value]:
        key, value = children
        return key.data, value

    def array(self, children: list[Value | None]) -> Value:
        # An empty array yields a single None placeholder.
        return new_array(c for c in children if c is not None)

    def object(self, children: list[tuple[str, Value] | None]) -> Value:
        return new_object(c for c in children if c is not None)


_parser = Lark(
    _JSON_GRAMMAR,
    parser="lalr",
    lexer="basic",
    transformer=_ValueBuilder(),
    maybe_placeholders=True,
)


def parse(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Parse a JSON document into a Value tree.

    Args:
        text: The JSON document.
        max_depth: Maximum container nesting depth.

    Returns:
        The root Value.

    Raises:
        ParseError: If ``text`` is not a single valid JSON value.
        MaxDepthExceededError: If containers nest deeper than ``max_depth``.
    """
    try:
        value = _parser.parse(text)
    except LarkError as e:
        raise ParseError(ERR_MSG_INVALID_JSON, str(e), wrapped=e) from e

    if value.depth > max_depth:
        raise MaxDepthExceededError(
            ERR_MSG_DEPTH_EXCEEDED,
            f"depth {value.depth} exceeds limit {max_depth}",
        )
    return value


def parse_bytes(buf: bytes | bytearray, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Parse a UTF-8 encoded JSON document into a Value tree.

    Raises:
        ParseError: If ``buf`` is not UTF-8 or not a valid JSON value.
        MaxDepthExceededError: If containers nest deeper than ``max_depth``.
    """
    try:
        text = bytes(buf).decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(ERR_MSG_INVALID_ENCODING, str(e), wrapped=e) from e
    return parse(text, max_depth=max_depth)
