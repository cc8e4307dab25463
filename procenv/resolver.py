"""Typed environment variable resolution with multi-key fallback.

A setting often goes by several names (``PORT`` or ``SERVER_PORT``) and may be
spelled in any case depending on the deployment. ``ConfigResolver`` tries each
candidate key in order, first by exact key and then case-insensitively, and
falls back to the caller's default when nothing matches.

Resolution never raises: configuration is read during early startup, and a
missing or malformed variable must degrade to the default (or to ``nan`` for
numbers) rather than crash the process.
"""

from __future__ import annotations

import logging
import math
import os
import re
from collections.abc import Mapping
from typing import Any

from procenv.enums import ResolutionPass, ValueKind
from procenv.redaction import redact_value

logger = logging.getLogger(__name__)

NOT_A_NUMBER = math.nan

# Leading base-10 integer: surrounding whitespace and trailing garbage are ignored.
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def _is_present(value: Any) -> bool:
    """Empty strings count as unset, the same as missing keys."""
    return value is not None and value != ""


def parse_leading_int(raw: str) -> int | float:
    """Parse the leading integer of ``raw``; ``nan`` when there is none.

    ``"42"`` -> 42, ``" -7 "`` -> -7, ``"42px"`` -> 42, ``"3.9"`` -> 3,
    ``"abc"`` -> nan. Digit runs too long for ``int()`` come back as ``inf``.
    """

    match = _LEADING_INT_RE.match(raw)
    if match is None:
        return NOT_A_NUMBER
    digits = match.group(1)
    try:
        return int(digits)
    except ValueError:
        # Past the int-from-string digit limit: only the magnitude survives.
        return float(digits)


def format_number(value: int | float) -> str:
    """Render a number without a trailing ``.0``; ``NaN``/``Infinity`` for specials."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


class ConfigResolver:
    """Resolve typed configuration values from an environment store.

    Args:
        store: Read-only key/value mapping, usually ``os.environ``. ``None``
            models an environment that is not available at all; every lookup
            then returns its default.
        case_insensitive_fallback: Whether to retry the candidate keys
            case-insensitively when no exact key matches.
        redact_secrets: Mask secret-looking values in resolution debug logs.
    """

    def __init__(
        self,
        store: Mapping[str, str] | None,
        *,
        case_insensitive_fallback: bool = True,
        redact_secrets: bool = True,
    ) -> None:
        self.store = store
        self.case_insensitive_fallback = case_insensitive_fallback
        self.redact_secrets = redact_secrets

    def _log_hit(self, key: str, value: Any, resolution: ResolutionPass) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        shown = redact_value(key, value) if self.redact_secrets else value
        logger.debug("Resolved %s (%s match): %r", key, resolution.value, shown)

    def _lookup(
        self, store: Mapping[str, Any], keys: tuple[str, ...]
    ) -> tuple[str, Any, ResolutionPass] | None:
        for key in keys:
            val = store.get(key)
            if _is_present(val):
                return key, val, ResolutionPass.EXACT

        if not self.case_insensitive_fallback:
            return None

        # Only paid once the exact lookups miss: this copies the whole store.
        lowered = {str(k).lower(): store[k] for k in store}
        for key in keys:
            val = lowered.get(key.lower())
            if _is_present(val):
                return key, val, ResolutionPass.CASE_INSENSITIVE

        return None

    def resolve_raw(self, default: Any, *keys: str) -> Any:
        """Return the first present value for ``keys``, else ``default``.

        Exact keys are tried in order first; only if none matches is a
        lowercase copy of the store searched with each lowercased key.
        """

        if self.store is None:
            return default

        candidates = tuple(str(k) for k in keys)
        try:
            hit = self._lookup(self.store, candidates)
        except Exception as e:
            logger.warning(
                "Environment store lookup failed for %s; using default: %s",
                ", ".join(candidates),
                e,
            )
            return default

        if hit is None:
            logger.debug("No value for %s; using default", ", ".join(candidates) or "<no keys>")
            return default

        key, val, resolution = hit
        self._log_hit(key, val, resolution)
        return val

    def resolve_as_boolean(self, default: bool, *keys: str) -> bool:
        """Resolve a flag. Only the exact string ``"true"`` enables it."""
        val = self.resolve_raw(default, *keys)
        if isinstance(val, str):
            return val == "true"
        return bool(val)

    def resolve_as_string(self, default: str | None, *keys: str) -> str | None:
        """Resolve a string; a ``None`` default passes through unconverted."""
        val = self.resolve_raw(default, *keys)
        if val is None:
            return None
        if isinstance(val, bool):
            return "true" if val else "false"
        if isinstance(val, (int, float)):
            return format_number(val)
        return str(val)

    def resolve_as_number(self, default: int | float, *keys: str) -> int | float:
        """Resolve an integer.

        Strings are parsed as a leading base-10 integer. A numeric default is
        returned unchanged. Anything else (``None``, booleans) yields ``nan``.
        """

        val = self.resolve_raw(default, *keys)
        if isinstance(val, str):
            return parse_leading_int(val)
        if isinstance(val, (int, float)) and not isinstance(val, bool):
            return val
        return NOT_A_NUMBER

    def resolve_as(self, kind: ValueKind, default: Any, *keys: str) -> Any:
        """Dispatch to the typed accessor for ``kind``."""
        if kind == ValueKind.BOOLEAN:
            return self.resolve_as_boolean(default, *keys)
        if kind == ValueKind.NUMBER:
            return self.resolve_as_number(default, *keys)
        return self.resolve_as_string(default, *keys)


# Bound to the live process environment, so changes to os.environ are seen
# by every call.
_process_resolver = ConfigResolver(os.environ)


def get_env_var(default: Any, *keys: str) -> Any:
    return _process_resolver.resolve_raw(default, *keys)


def get_env_var_as_boolean(default: bool, *keys: str) -> bool:
    return _process_resolver.resolve_as_boolean(default, *keys)


def get_env_var_as_string(default: str | None, *keys: str) -> str | None:
    return _process_resolver.resolve_as_string(default, *keys)


def get_env_var_as_number(default: int | float, *keys: str) -> int | float:
    return _process_resolver.resolve_as_number(default, *keys)
