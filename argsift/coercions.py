"""
Value coercion helpers for raw option values.

- isnumeric(): numeric-literal check (ASCII decimal, optional sign, fraction and
  exponent, surrounding whitespace tolerated; no inf/nan, hex or underscores).
- number(): numeric literal -> int when integral in form, float otherwise
  (integers too long for int() fall back to float).
- autovalue(): literal-form inference used by the "auto" policy.
"""
import re

_NUMERIC = re.compile(r"[ \t\n\r\v\f]*(?P<sign>[+-]?)(?P<digits>\d+(?P<fraction>\.\d*)?|\.\d+)(?P<exponent>[eE][+-]?\d+)?[ \t\n\r\v\f]*", re.ASCII)


def isnumeric(value, /):
    """
    Return True when `value` is a string holding a numeric literal.

    Examples
    - "8080", "-1.5", ".5", "1e3", " 42 " -> True
    - "abc", "", "0x1A", "1_000", "inf"   -> False
    """
    return isinstance(value, str) and _NUMERIC.fullmatch(value) is not None


def number(value, /):
    """
    Convert a numeric literal, keeping integer-looking inputs as int.

    Raises
    - ValueError: when `value` is not a numeric literal.
    """
    if not (match := _NUMERIC.fullmatch(value) if isinstance(value, str) else None):
        raise ValueError("%r is not a numeric literal" % (value,))
    literal = value.strip()
    if match["fraction"] is None and match["exponent"] is None and not literal.lstrip("+-").startswith("."):
        try:
            return int(literal)
        except ValueError:
            # beyond the interpreter int-string digit limit
            pass
    return float(literal)


def autovalue(value, /):
    """
    Infer a typed value from its literal form.

    - "true" / "1"  -> True
    - "false" / "0" -> False
    - numeric       -> int or float (see number())
    - otherwise     -> the raw string
    """
    match value:
        case "true" | "1":
            return True
        case "false" | "0":
            return False
        case _ if isnumeric(value):
            return number(value)
        case _:
            return value


__all__ = (
    "isnumeric",
    "number",
    "autovalue",
)
