"""
Help text construction.

Layout (labels are bold unless colorful=False):

    <blank>
    USAGE
      <usage | "<program> <option> [command]">
    <blank>
    COMMANDS                      (only when commands are given)
      <name padded to 20><description>
    <blank>
    OPTIONS                       (only when options are declared)
      --<name[|-alias] padded to 18><title | type>
    <blank>

Palette keys (override through a __styles__ mapping in __main__)
- section-label, usage, command-name, command-description, option-name, option-title

This module only formats declarations; it never parses or touches results.
"""
import os.path
import sys
from collections import defaultdict
from collections.abc import Mapping

from rich.console import Console
from rich.text import Text

from .config import DEFAULTS, merge
from .options import declare
from .utils import *


def _program(config, /):
    if program := config.get("program"):
        return program
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "program")


def render_help(commands=Unset, config=Unset, /, *, colorful=True, **overrides):
    """
    Build the help block as a rich Text.

    Parameters
    - commands: Unset | Mapping[str, str | Text]
      command name → one-line description.
    - config: Unset | Mapping
      same configuration shape as parse() ('options', 'program', 'usage', ...).
    - colorful: bool (keyword-only)
      when False, no styles are applied.
    - **overrides: further configuration overlay.
    """
    commands = coalesce(commands, {})
    if not isinstance(commands, Mapping):
        raise TypeError("help commands must be a mapping of name to description")
    config = merge(DEFAULTS, config, **overrides)

    styles = defaultdict(str, {
        "section-label": "bold",
        "usage": "bold #36C5F0",  # sky-blue usage line
        "command-name": "bold #36C5F0",  # sky-blue commands
        "command-description": "#9CA3AF",  # muted gray
        "option-name": "bold #00E6FF",  # cyan options
        "option-title": "#9CA3AF",  # muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    text = Text("\n")
    text.append("USAGE", styler("section-label")).append("\n")
    text.append("  ").append(str(config.get("usage") or "%s <option> [command]" % _program(config)), styler("usage"))
    text.append("\n")

    if commands:
        text.append("\n").append("COMMANDS", styler("section-label")).append("\n")
        for name, description in commands.items():
            text.append("  ").append(str(name).ljust(20), styler("command-name"))
            text.append(str(description or ""), styler("command-description")).append("\n")

    if declarations := [declare(option) for option in config["options"]]:
        text.append("\n").append("OPTIONS", styler("section-label")).append("\n")
        for option in declarations:
            names = option.name + ("|-" + option.alias if option.alias else "")
            text.append("  --").append(names.ljust(18), styler("option-name"))
            title = option.title if option.title is not None else option.type.value
            if isinstance(title, Text) and colorful:
                text.append(title)
            else:
                text.append(str(title), styler("option-title"))
            text.append("\n")

    return text.append("\n")


def build_help(commands=Unset, config=Unset, /, **overrides):
    """
    Build the help block as plain text (no styles, no control codes).
    """
    return render_help(commands, config, colorful=False, **overrides).plain


def output_help(commands=Unset, config=Unset, /, *, console=Unset, colorful=True, **overrides):
    """
    Print the help block through a rich Console (stdout by default).
    """
    console = coalesce(console, Console())
    console.print(render_help(commands, config, colorful=colorful, **overrides), end="")


__all__ = (
    "render_help",
    "build_help",
    "output_help",
)
