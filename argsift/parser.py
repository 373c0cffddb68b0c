"""
Argsift parser: classify an argument vector against declared options.

What this module provides
- Parser: scans tokens left to right with one-token lookahead and sorts them
  into commands, options, unknowns and invalids (see ParseResult).
- parse(args, config): convenience entry point; the first element of `args`
  is the program name.
- process(config): lower-level entry point over a merged configuration that
  already carries 'program' and 'args'.
- report(result, options): surface the anomalies of a result as faults.

Value policy per option type
- string: explicit value, else the next token (consumed), else None.
- number: same sources; non-numeric candidates go to `invalids`, numeric ones
  are stored as float.
- bool:   explicit "true"/"false" only; anything else goes to `invalids`.
- auto:   explicit value, else the next token when it is not option-shaped
  (consumed), else True; values are inferred from their literal form.
  Unregistered keys use this policy and land in `unknowns` when auto=False.

Parsing never raises on user input: anomalies are data.

Quick example:
    >>> from argsift import parse
    >>> result = parse("tool build -v --port=8080", options=[{"name": "port", "type": "number"}])
    >>> result.commands, dict(result.options)
    (('build',), {'v': True, 'port': 8080.0})
"""
import difflib
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from .coercions import autovalue, isnumeric
from .config import DEFAULTS, merge
from .faults import *
from .options import OptionType, Registry, declare
from .tokens import TokenKind, classify, is_not_option
from .utils import *


class ParseResult(NamedTuple):
    """
    outcome of one parse; never mutated after construction.

    - program:  first element of the argument vector (None for an empty vector)
    - options:  read-only mapping name -> bool | int | float | str | None
    - commands: positional tokens in input order
    - unknowns: unregistered options under auto=False, same value shapes as options
    - invalids: registered options whose value failed validation -> raw candidate

    a given option name appears in at most one of options/unknowns/invalids.
    """
    program: str | None
    options: Mapping
    commands: tuple
    unknowns: Mapping
    invalids: Mapping


class _Resolution(NamedTuple):
    value: object
    consumed: int
    valid: bool


def _resolve(type, token, lookahead, /):
    """
    apply the value policy of `type` to a classified option token.

    `lookahead` is the next raw token or None; it only counts as a value
    source when non-empty. `consumed` is 1 when the lookahead became the value.
    """
    match type:
        case OptionType.STRING:
            if token.explicit is not None:
                return _Resolution(token.explicit, 0, True)
            if lookahead:
                return _Resolution(lookahead, 1, True)
            return _Resolution(None, 0, True)
        case OptionType.NUMBER:
            if token.explicit is not None:
                candidate, consumed = token.explicit, 0
            elif lookahead:
                candidate, consumed = lookahead, 1
            else:
                candidate, consumed = None, 0
            if not isnumeric(candidate):
                return _Resolution(candidate, consumed, False)
            return _Resolution(float(candidate), consumed, True)
        case OptionType.BOOL:
            match token.value:
                case "true":
                    return _Resolution(True, 0, True)
                case "false":
                    return _Resolution(False, 0, True)
                case _:
                    return _Resolution(token.value, 0, False)
        case OptionType.AUTO:
            if token.explicit is not None:
                return _Resolution(autovalue(token.explicit), 0, True)
            if is_not_option(lookahead):
                return _Resolution(autovalue(lookahead), 1, True)
            return _Resolution(True, 0, True)
        case _:
            raise RuntimeError("unexpected option type %r" % (type,))


def split(args, /):
    """
    normalize an argument vector into a list of tokens.

    - str: split on literal spaces (no quoting or escaping; "a  b" keeps an
      empty token between the spaces).
    - Iterable[str]: copied as-is.

    Raises
    - TypeError: for any other input or non-string items.
    """
    if isinstance(args, str):
        return args.split(" ")
    if isinstance(args, Iterable) and not isinstance(args, Mapping):
        tokens = list(args)
        if all(isinstance(token, str) for token in tokens):
            return tokens
    raise TypeError("argument vector must be a string or an iterable of strings")


class Parser:
    """
    Single-pass argument classifier.

    A Parser holds only its declarations and the auto flag; every scan builds
    its own Registry and result, so one instance can be shared freely.

    Parameters
    - options: Iterable of OptionSpec or mapping declarations
    - auto: bool (keyword-only, default True)
      when False, unregistered options are reported in `unknowns`.
    """

    options = mirror("options")
    auto = mirror("auto")

    def __init__(self, options=(), /, *, auto=True):
        if not isinstance(auto, bool):
            raise TypeError("Parser() 'auto' must be a boolean")
        if not isinstance(options, Iterable) or isinstance(options, str | Mapping):
            raise TypeError("Parser() argument must be an iterable of option declarations")
        self._options = tuple(map(declare, options))
        self._auto = auto

    def parse(self, args, /):
        """
        parse a full argument vector; its first element is the program name.
        """
        program, *tokens = split(args) or [None]
        return self.scan(program, tokens)

    def scan(self, program, tokens, /):
        """
        scan `tokens` (without the program name) into a ParseResult.

        state machine
        - index i walks the tokens; the scan ends when i reaches their length.
        - positional → append to commands, i += 1.
        - option     → resolve spec and value, i += 2 when the lookahead was
          consumed as the value, else i += 1. no backtracking.
        """
        registry = Registry(self._options)
        tokens = split(tokens)

        commands = []
        options = {}
        unknowns = {}
        invalids = {}

        index = 0
        while index < len(tokens):
            token = classify(tokens[index])
            lookahead = tokens[index + 1] if index + 1 < len(tokens) else None
            index += 1

            if token.kind is TokenKind.POSITIONAL:
                commands.append(token.raw)
                continue

            spec = registry.resolve(token.key)
            if spec is Unset:
                name, type = token.key, OptionType.AUTO
            else:
                name, type = spec.name, spec.type

            resolution = _resolve(type, token, lookahead)
            index += resolution.consumed

            # a later occurrence replaces whatever an earlier one recorded
            for bucket in (options, unknowns, invalids):
                bucket.pop(name, None)

            if not resolution.valid:
                invalids[name] = resolution.value
            elif spec is Unset and not self._auto:
                unknowns[name] = resolution.value
            else:
                options[name] = resolution.value

        return ParseResult(
            program,
            MappingProxyType(options),
            tuple(commands),
            MappingProxyType(unknowns),
            MappingProxyType(invalids),
        )

    def __rich_repr__(self):
        yield "options", self.options
        yield "auto", self.auto

    def __repr__(self):
        return "parser(options=%r, auto=%r)" % (self.options, self.auto)


def parse(args, config=Unset, /, **overrides):
    """
    Parse an argument vector against a configuration.

    Parameters
    - args: str | Iterable[str]
      full vector; the first element becomes `program` and is not scanned.
    - config: Unset | Mapping
      overlay onto DEFAULTS ('auto', 'options', ...).
    - **overrides: further key/value overlay (e.g. auto=False).

    Returns
    - ParseResult
    """
    config = merge(DEFAULTS, config, **overrides)
    return Parser(config["options"], auto=config["auto"]).parse(args)


def process(config, /):
    """
    Parse a merged configuration that already carries 'program' and 'args'.

    Raises
    - TypeError: when config is not a mapping or holds invalid values.
    - MissingConfigurationError: when 'program' or 'args' is missing; call
      Command.set_command() (or pass both keys) before processing.
    """
    if not isinstance(config, Mapping):
        raise TypeError("process() argument must be a mapping")
    if missing := [key for key in ("program", "args") if key not in config]:
        raise MissingConfigurationError(
            "configuration is missing %s" % " and ".join(map(repr, missing)),
            title="missing configuration",
            code=FaultCode.MISSING_CONFIGURATION,
            missing=tuple(missing),
            hint="set the command line first (for example: Command().set_command(sys.argv))",
            docs=getdoc(FaultCode.MISSING_CONFIGURATION),
        )
    config = merge(DEFAULTS, config)
    return Parser(config["options"], auto=config["auto"]).scan(config["program"], config["args"])


def _spelling(name, /):
    return ("-" if len(name) == 1 else "--") + name


def report(result, options=(), /, *, shell=False, fancy=False, colorful=True, deferred=False):
    """
    surface the anomalies of a ParseResult as faults.

    faults
    - EmptyOptionValueWarning for each option whose value resolved to None.
    - UnknownOptionError for each entry of `unknowns` (with close-match suggestions
      drawn from the declared names and aliases).
    - InvalidValueError for each entry of `invalids`.

    behavior
    - warnings are triggered one by one first.
    - errors are bundled into a single CommandExit and triggered last: raised
      outside shell mode, printed (then sys.exit(1) unless deferred) in shell mode.

    returns
    - tuple of the faults that were surfaced (warnings first), when nothing raised.
    """
    if not isinstance(result, ParseResult):
        raise TypeError("report() argument must be a parse result")
    registry = Registry(options)
    settings = {
        "program": result.program,
        "shell": shell,
        "fancy": fancy,
        "colorful": colorful,
        "deferred": deferred,
    }

    faults = []

    for name, value in result.options.items():
        if value is not None:
            continue
        faults.append(EmptyOptionValueWarning(
            "option %r received no value" % _spelling(name),
            title="empty option value",
            code=FaultCode.EMPTY_OPTION_VALUE,
            key=name,
            hint="pass a value inline (for example: %s=<value>) or after a space" % _spelling(name),
            docs=getdoc(FaultCode.EMPTY_OPTION_VALUE),
            **settings
        ))

    for name, value in result.unknowns.items():
        suggestions = difflib.get_close_matches(name, registry.keys(), 5)
        try:
            hint = "did you mean %r?" % _spelling(suggestions[0])
        except IndexError:
            hint = "remove it or declare it among the recognized options"
        faults.append(UnknownOptionError(
            "unknown option %r" % _spelling(name),
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            key=name,
            value=value,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
            **settings
        ))

    for name, value in result.invalids.items():
        spec = registry.resolve(name)
        match spec.type if spec is not Unset else None:
            case OptionType.NUMBER:
                hint = "pass a number (for example: %s=42)" % _spelling(name)
            case OptionType.BOOL:
                hint = "pass 'true' or 'false' inline (for example: %s=true)" % _spelling(name)
            case _:
                hint = "check the value expected by %s" % _spelling(name)
        message = "option %r received no value" % _spelling(name) if value is None else \
            "invalid value %r for option %r" % (value, _spelling(name))
        faults.append(InvalidValueError(
            message,
            title="invalid value",
            code=FaultCode.INVALID_VALUE,
            key=name,
            value=value,
            hint=hint,
            docs=getdoc(FaultCode.INVALID_VALUE),
            **settings
        ))

    warnings = [fault for fault in faults if isinstance(fault, CommandWarning)]
    exceptions = [fault for fault in faults if isinstance(fault, CommandException)]

    for warning in warnings:
        trigger(warning)

    if exceptions:
        trigger(CommandExit(exceptions), **settings)

    return tuple(warnings + exceptions)


__all__ = (
    "ParseResult",
    "Parser",
    "split",
    "parse",
    "process",
    "report",
)
