"""Exception hierarchy for JSON-to-SQL marshaling."""


class JSONToSQLError(Exception):
    """Base exception for recoverable JSON-to-SQL errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging (CWE-209 prevention).
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class ParseError(JSONToSQLError):
    """Raised when a buffer is not valid JSON."""


class MaxDepthExceededError(ParseError):
    """Raised when a JSON document nests deeper than the configured limit."""


class UnexpectedValueTypeError(RuntimeError):
    """Raised when the marshaler meets a Value tag it does not know.

    Every Value is built by this package, so this signals a bug in the
    producer of the tree rather than bad input. It is not a JSONToSQLError
    and callers are not expected to recover from it.
    """


# Sanitized user-facing error message constants
ERR_MSG_INVALID_JSON = "invalid JSON document"
ERR_MSG_INVALID_ENCODING = "JSON document is not valid UTF-8"
ERR_MSG_DEPTH_EXCEEDED = "JSON nesting depth exceeded"
