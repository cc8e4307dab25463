"""StrEnum definitions for type-safe constants."""

from enum import StrEnum


class ValueKind(StrEnum):
    """Value types a configuration lookup can be coerced to."""

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"


class ResolutionPass(StrEnum):
    """Which lookup pass produced a resolved value."""

    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
