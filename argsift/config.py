"""
Configuration overlay shared by parse(), build_help() and Command.

A configuration is a plain mapping:
- auto: bool                   keep unregistered options in `options` (default True)
- options: Iterable            option declarations (OptionSpec or mappings)
- program: str | None          program name (first element of the argument vector)
- args: Iterable[str]          tokens to scan (the vector without the program)
- usage: str                   explicit usage line for help output

merge() overlays key/value pairs onto a base mapping and validates the result;
nothing else is inferred.
"""
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rich.text import Text

from .utils import *

DEFAULTS = MappingProxyType({
    "auto": True,
    "options": (),
})

_FIELDS = frozenset({"auto", "options", "program", "args", "usage"})


def _sanitize(config, /):
    """
    Internal: validate a merged configuration in place.

    Raises
    - TypeError: on unknown keys or values of the wrong type.
    """
    if unexpected := config.keys() - _FIELDS:
        raise TypeError("unexpected configuration key(s): %s" % ", ".join(map(repr, sorted(unexpected))))

    if not isinstance(config["auto"], bool):
        raise TypeError("configuration 'auto' must be a boolean")

    if not isinstance(options := config["options"], Iterable) or isinstance(options, str | Mapping):
        raise TypeError("configuration 'options' must be an iterable of option declarations")
    config["options"] = tuple(options)

    if not isinstance(config.get("program"), str | None):
        raise TypeError("configuration 'program' must be a string")

    if "args" in config:
        if not isinstance(args := config["args"], Iterable) or isinstance(args, str):
            raise TypeError("configuration 'args' must be an iterable of strings")
        args = tuple(args)
        if not all(isinstance(arg, str) for arg in args):
            raise TypeError("configuration 'args' must be an iterable of strings")
        config["args"] = args

    if not isinstance(config.get("usage", ""), str | Text):
        raise TypeError("configuration 'usage' must be a string")


def merge(base=Unset, overrides=Unset, /, **options):
    """
    Overlay `overrides` and keyword `options` onto `base` (defaults when Unset).

    The result is a new, validated dict; neither input is mutated.

    Example
    - merge(DEFAULTS, {"auto": False}, program="tool")
      -> {"auto": False, "options": (), "program": "tool"}
    """
    config = dict(coalesce(base, DEFAULTS))
    for layer in (coalesce(overrides, {}), options):
        if not isinstance(layer, Mapping):
            raise TypeError("configuration must be a mapping")
        config.update(layer)
    for key, value in DEFAULTS.items():
        config.setdefault(key, value)
    _sanitize(config)
    return config


__all__ = (
    "DEFAULTS",
    "merge",
)
