"""
shwords - POSIX shell word splitting and joining.

Pure lexical analysis: quotes and backslashes are honored, nothing is
expanded or executed.
"""

from __future__ import annotations

__version__ = "0.1.0"

from shwords.core.lexer import (
    Shlex,
    join_str,
    join_words,
    quote,
    split_str,
    split_words,
)

__all__ = [
    "Shlex",
    "join_str",
    "join_words",
    "quote",
    "split_str",
    "split_words",
    "__version__",
]
