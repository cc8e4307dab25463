"""Typed, multi-key, case-insensitive environment variable resolution."""

from procenv.config import ResolverSettings, build_resolver, configure_logging
from procenv.enums import ValueKind
from procenv.resolver import (
    NOT_A_NUMBER,
    ConfigResolver,
    get_env_var,
    get_env_var_as_boolean,
    get_env_var_as_number,
    get_env_var_as_string,
)

__all__ = [
    "NOT_A_NUMBER",
    "ConfigResolver",
    "ResolverSettings",
    "ValueKind",
    "build_resolver",
    "configure_logging",
    "get_env_var",
    "get_env_var_as_boolean",
    "get_env_var_as_number",
    "get_env_var_as_string",
]
