"""Limits and fixed values for JSON-to-SQL marshaling."""

DEFAULT_MAX_DEPTH = 300
"""Maximum nesting depth accepted by the parser (CWE-674 prevention)."""

TIME_HOUR_WRAP = 32
"""MySQL wraps the hour field of a JSON TIME literal at this value."""

UTF8MB4_INTRODUCER = b"_utf8mb4"
"""Character set introducer placed before every string literal."""

MAX_TIME_HOURS = 838
"""MySQL TIME values range over +/-838:59:59.000000."""
