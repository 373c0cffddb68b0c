"""
Argsift command layer: a stateful front-end over the parser.

What this module provides
- Command: holds a configuration overlay (auto, options, program, args,
  usage), collects option declarations, remembers the command line and the
  last ParseResult, and renders help for it.

Commands are ordinary objects: build one per program (or per test) and pass
it around. Nothing is shared between instances.

Quick start
    from argsift import Command

    tool = Command(auto=False)
    tool.add_option("port", alias="p", type="number", title="listening port")
    tool.add_option("verbose", type="bool")

    result = tool.parse_command("tool serve -p 8080 --verbose=true").result
    # result.commands == ("serve",)
    # dict(result.options) == {"port": 8080.0, "verbose": True}

    tool.output_help({"serve": "start the server"})
"""
from types import MappingProxyType

from .config import DEFAULTS, merge
from .options import OptionSpec
from .parser import process, report, split
from .usage import build_help, output_help
from .utils import *


class Command:
    """
    Configuration holder and parse driver.

    Lifecycle
    - configure()/add_option() shape the configuration (plain key/value overlay).
    - set_command() stores 'program' and 'args' from a full argument vector.
    - parse_command() runs process() over the configuration and keeps the result.

    Properties
    - config: read-only view of the current configuration.
    - result: last ParseResult (Unset before the first parse_command()).
    """

    def __init__(self, config=Unset, /, **overrides):
        self._config = merge(DEFAULTS, config, **overrides)
        self._result = Unset

    @property
    def config(self):
        return MappingProxyType(self._config)

    @property
    def result(self):
        return self._result

    def configure(self, config=Unset, /, **overrides):
        """
        Overlay key/value pairs onto the current configuration; returns self.
        """
        self._config = merge(self._config, config, **overrides)
        return self

    def add_option(self, name, /, **option):
        """
        Declare one more option; returns self.

        Parameters
        - name: str
        - **option: alias, type, title (see OptionSpec)
        """
        return self.configure(options=self._config["options"] + (OptionSpec(name, **option),))

    def set_command(self, args, /):
        """
        Store a full argument vector: its first element becomes 'program',
        the remainder becomes 'args'. Returns self.
        """
        program, *tokens = split(args) or [None]
        return self.configure(program=program, args=tokens)

    def parse_command(self, args=Unset, /):
        """
        Parse the stored command line (or `args`, stored first); returns self.

        Raises
        - MissingConfigurationError: when no command line was ever set.
        """
        if args is not Unset:
            self.set_command(args)
        self._result = process(self._config)
        return self

    def report(self, **settings):
        """
        Surface the anomalies of the last result (see argsift.parser.report).
        """
        if self._result is Unset:
            raise TypeError("report() requires a parsed command; call parse_command() first")
        return report(self._result, self._config["options"], **settings)

    def help(self, commands=Unset, /):
        """
        Plain-text help for this configuration.
        """
        return build_help(commands, self._config)

    def output_help(self, commands=Unset, /, **options):
        """
        Print help for this configuration through rich (see argsift.usage.output_help).
        """
        output_help(commands, self._config, **options)

    def __rich_repr__(self):
        yield "config", self.config
        yield "result", self._result

    def __repr__(self):
        return "command(config=%r, result=%r)" % (dict(self._config), self._result)


__all__ = (
    "Command",
)
