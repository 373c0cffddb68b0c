"""
Token classification (pure, no side effects).

Every raw token is exactly one of:
- LONG:       '--key' or '--key=value' (split on the first '=')
- SHORT:      '-k' or '-kvalue' (key is the single character after '-')
- POSITIONAL: anything else, including '' and a bare '-'

Tokens shorter than two characters are always positional, so classification
never indexes past the end of the string.
"""
from enum import IntEnum
from typing import NamedTuple


class TokenKind(IntEnum):
    POSITIONAL = 0
    SHORT = 1
    LONG = 2


class Token(NamedTuple):
    """
    classified token.

    - kind: TokenKind
    - key: option key (None for positionals)
    - value: explicit value; None when absent (a short option without a tail
      carries the empty string)
    - raw: the original token
    """
    kind: TokenKind
    key: str | None
    value: str | None
    raw: str

    @property
    def explicit(self):
        """
        The explicit value when it is usable as a value source (non-empty).
        """
        return self.value or None


def is_long_option(token, /):
    return len(token) >= 2 and token[0] == "-" and token[1] == "-"


def is_short_option(token, /):
    return len(token) >= 2 and token[0] == "-" and token[1] != "-"


def is_not_option(token, /):
    """
    True when `token` exists, is non-empty and does not begin with '-'.
    """
    return bool(token) and token[0] != "-"


def classify(token, /):
    """
    classify one raw token.

    examples
    - classify("--port=80")  -> Token(LONG, "port", "80", ...)
    - classify("--a=b=c")    -> Token(LONG, "a", "b=c", ...)
    - classify("-vfoo")      -> Token(SHORT, "v", "foo", ...)
    - classify("-v")         -> Token(SHORT, "v", "", ...)
    - classify("-")          -> Token(POSITIONAL, None, None, ...)
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")
    if is_long_option(token):
        key, separator, value = token[2:].partition("=")
        return Token(TokenKind.LONG, key, value if separator else None, token)
    if is_short_option(token):
        return Token(TokenKind.SHORT, token[1], token[2:], token)
    return Token(TokenKind.POSITIONAL, None, None, token)


__all__ = (
    "TokenKind",
    "Token",
    "classify",
    "is_long_option",
    "is_short_option",
    "is_not_option",
)
