r"""
Argsift option declarations and the option registry.

Overview
- OptionType: closed set of value policies ("string", "number", "bool", "auto").
- OptionSpec: one declared option (canonical name, optional single alias,
  value policy and an optional help title).
- Registry: lookup from name/alias to the declaring OptionSpec, built fresh
  for every parse.
- declare(): normalize a declaration given either as an OptionSpec or as a
  plain mapping with the same keys.

Metadata (sanitized on construction)
- name: str, stored stripped of surrounding whitespace; must be non-empty.
- alias: Unset | str, stored stripped of surrounding whitespace; must be non-empty.
- type: OptionType | "string" | "number" | "bool" | "auto" (default "auto").
- title: Unset | str | Text, strings stored stripped; must be non-empty.

Quick example:
    >>> from argsift.options import OptionSpec, Registry
    >>> port = OptionSpec("port", alias="p", type="number", title="listening port")
    >>> registry = Registry([port])
    >>> registry["p"] is registry["port"]
    True
"""
import functools
import operator
from collections.abc import Iterable, Iterator, Mapping
from enum import StrEnum

from rich.text import Text

from .utils import *


class OptionType(StrEnum):
    """
    value policy applied to an option token.

    - STRING: explicit value, else the next token, else None.
    - NUMBER: like STRING, then validated as a numeric literal (stored as float).
    - BOOL:   explicit "true"/"false" only.
    - AUTO:   type inferred from the literal form (also used for unregistered keys).
    """
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    AUTO = "auto"


def _sanitize_label(field, value, /, *, rich=False):
    """
    Internal: validate an optional label (alias/title) and trim it.

    Returns Unset unchanged; raises TypeError on non-strings (explicit None
    included) and ValueError on strings that are empty after trimming.
    """
    if value is Unset:
        return value
    if not isinstance(value, str | Text if rich else str):
        raise TypeError(f"option {field!r} must be a string")
    if isinstance(value, str) and not (value := value.strip()):
        raise ValueError(f"option {field!r} cannot be empty")
    return value


class OptionSpec:
    """
    Declared option: canonical name, optional alias, value policy and title.

    Instances are immutable through their public properties; the parser never
    writes to them. `alias` and `title` read as None when they were omitted.
    """

    __introspectable__ = (
        "name",
        "alias",
        "type",
        "title",
    )

    name = mirror("name")
    alias = mirror("alias")
    type = mirror("type")
    title = mirror("title")

    def __init__(self, name, /, alias=Unset, type=OptionType.AUTO, title=Unset):
        """
        Construct an option declaration.

        Parameters
        - name: str
          Canonical key of the option, as used in the parse result.
        - alias: Unset | str
          Single additional lookup key (e.g. "p" for "port").
        - type: OptionType | str
          Value policy; strings are resolved through OptionType(...).
        - title: Unset | str | Text
          Short description for help output.

        Raises
        - TypeError: on non-string names/labels or an unknown type object.
        - ValueError: on empty names/labels or an unknown type string.
        """
        if not isinstance(name, str):
            raise TypeError("option 'name' must be a string")
        if not (name := name.strip()):
            raise ValueError("option 'name' cannot be empty")

        if not isinstance(type, str):
            raise TypeError("option 'type' must be one of %s" % ", ".join(map(repr, OptionType)))
        try:
            type = OptionType(type)
        except ValueError:
            raise ValueError("option 'type' must be one of %s" % ", ".join(map(repr, OptionType))) from None

        self._name = name
        self._alias = coalesce(_sanitize_label("alias", alias))
        self._type = type
        self._title = coalesce(_sanitize_label("title", title, rich=True))

    @property
    def keys(self):
        """
        Lookup keys of this declaration: (name,) or (name, alias).
        """
        return (self.name,) if self.alias is None else (self.name, self.alias)

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "option-spec(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


def declare(declaration, /):
    """
    Normalize one declaration into an OptionSpec.

    Accepted shapes
    - OptionSpec: returned unchanged.
    - Mapping: keys 'name', 'alias', 'type', 'title'; None values are treated
      as omitted so configuration tables with null placeholders load as-is.

    Raises
    - TypeError: for any other shape, or unexpected mapping keys.
    """
    if isinstance(declaration, OptionSpec):
        return declaration
    if isinstance(declaration, Mapping):
        fields = {key: value for key, value in declaration.items() if value is not None}
        if unexpected := fields.keys() - {"name", "alias", "type", "title"}:
            raise TypeError("unexpected option field(s): %s" % ", ".join(map(repr, sorted(unexpected))))
        try:
            name = fields.pop("name")
        except KeyError:
            raise TypeError("option declaration must specify a 'name'") from None
        return OptionSpec(name, **fields)
    raise TypeError("option declaration must be an OptionSpec or a mapping")


class Registry(Mapping):
    """
    Lookup from option name/alias to its OptionSpec.

    Contract
    - keyed by every declaration's name and, when present, its alias.
    - duplicate keys are not an error: a later declaration overwrites the
      earlier one for that key (iteration order of the input).
    - empty input gives an empty registry; every option token then resolves
      as unregistered.
    - read-only once built.
    """

    def __init__(self, declarations=(), /):
        if not isinstance(declarations, Iterable) or isinstance(declarations, str | Mapping):
            raise TypeError("Registry() argument must be an iterable of option declarations")
        self._entries = {}
        self._declarations = []
        for declaration in map(declare, declarations):
            self._declarations.append(declaration)
            for key in declaration.keys:
                self._entries[key] = declaration

    declarations = mirror("declarations")

    def __getitem__(self, key, /):
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def resolve(self, key, /):
        """
        Return the OptionSpec registered for `key`, or Unset when unregistered.
        """
        return self._entries.get(key, Unset)

    def __rich_repr__(self):
        yield from self._entries.items()

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


__all__ = (
    "OptionType",
    "OptionSpec",
    "Registry",
    "declare",
)
