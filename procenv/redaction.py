"""Redaction helpers to keep secret configuration values out of logs.

Environment variables routinely carry credentials. Resolution debug logs show
which key matched and what it resolved to, so values stored under
secret-looking keys are masked and long values are truncated.

NOTE: This only looks at key names and a few token formats; it is not a
general DLP filter.
"""

from __future__ import annotations

import re
from typing import Any


_REPLACEMENT = "[REDACTED]"
_TRUNC_SUFFIX = "…(truncated)"


# Common secret-ish key names.
_SECRET_KEY_RE = re.compile(
    r"(^|_)(password|passwd|pwd|secret|token|api[_-]?key|access[_-]?key|private[_-]?key|authorization|credentials?)($|_)",
    flags=re.IGNORECASE,
)

# Values that look like credentials regardless of the key they sit under.
_SENSITIVE_VALUE_RES: list[re.Pattern[str]] = [
    re.compile(r"\b(?:sk-|pk-)[A-Za-z0-9]{20,}\b"),
    re.compile(r"\bAKIA[A-Z0-9]{16}\b"),
    re.compile(r"\bBearer\s+[A-Za-z0-9._\-]+\b", flags=re.IGNORECASE),
    # user:password@ in connection URLs
    re.compile(r"(?<=://)[^/\s:@]+:[^/\s@]+(?=@)"),
]


def looks_sensitive_key(key: str) -> bool:
    return bool(_SECRET_KEY_RE.search(str(key)))


def redact_text(text: str, *, max_chars: int = 200) -> str:
    """Redact credential-looking substrings in a value and truncate it."""
    out = text
    for rx in _SENSITIVE_VALUE_RES:
        out = rx.sub(_REPLACEMENT, out)

    if max_chars and len(out) > max_chars:
        out = out[:max_chars] + _TRUNC_SUFFIX

    return out


def redact_value(key: str, value: Any, *, max_chars: int = 200) -> Any:
    """Return a log-safe rendition of ``value`` stored under ``key``.

    - Values under secret-looking keys are replaced entirely.
    - Other strings are scanned for token formats and truncated.
    - Non-string values (defaults such as ints or bools) pass through.
    """

    if value is None:
        return None

    if looks_sensitive_key(key):
        return _REPLACEMENT

    if isinstance(value, str):
        return redact_text(value, max_chars=max_chars)

    return value
