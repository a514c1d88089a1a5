"""
Removes credentials from request log data.
"""
from .replacer import (
    AUTH_HEADER_PATTERN,
    AUTH_HEADER_REPLACEMENT,
    AuthReplacer,
    ConcealFilter,
    create_auth_replacer,
)


__all__ = [
    "AUTH_HEADER_PATTERN",
    "AUTH_HEADER_REPLACEMENT",
    "AuthReplacer",
    "ConcealFilter",
    "create_auth_replacer",
]

__version__ = "1.0.0"
