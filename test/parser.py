"""
Parser behavioral tests (scan loop, value policies, result shape).

Scope
- Validate classification into commands/options/unknowns/invalids.
- Validate per-type value policies (string, number, bool, auto) and lookahead consumption.
- Validate the unregistered-option policy (auto flag) and bucket exclusivity.
- Validate the entry points: parse(), Parser, process().

Conventions
- Test method names follow CamelCase per project convention.
- Argument vectors always start with the program name.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argsift import (
    MissingConfigurationError,
    OptionSpec,
    Parser,
    ParseResult,
    parse,
    process,
)
from argsift.parser import split

PORT = OptionSpec("port", alias="p", type="number", title="listening port")
NAME = OptionSpec("name", alias="n", type="string")
VERBOSE = OptionSpec("verbose", alias="v", type="bool")


class TestEntryPoints(TestCase):
    """Program handling and argument vector shapes."""

    def testFirstElementIsProgram(self):
        result = parse(["tool", "build"])
        self.assertEqual(result.program, "tool")
        self.assertEqual(result.commands, ("build",))

    def testStringVectorIsSplitOnSpaces(self):
        result = parse("tool build -v")
        self.assertEqual(result.program, "tool")
        self.assertEqual(result.commands, ("build",))
        self.assertEqual(dict(result.options), {"v": True})

    def testRepeatedSpacesKeepEmptyTokens(self):
        self.assertEqual(parse("tool  run").commands, ("", "run"))

    def testEmptyVector(self):
        self.assertEqual(parse([]), ParseResult(None, {}, (), {}, {}))

    def testProgramOnly(self):
        result = parse(["tool"])
        self.assertEqual(result.program, "tool")
        self.assertEqual((result.commands, dict(result.options)), ((), {}))

    def testInvalidVectorRejected(self):
        with self.assertRaises(TypeError):
            parse(42)
        with self.assertRaises(TypeError):
            parse(["tool", 1])

    def testConfigMappingAndOverrides(self):
        result = parse(["tool", "-x"], {"auto": True}, auto=False)
        self.assertEqual(dict(result.unknowns), {"x": True})

    def testUnknownConfigKeyRejected(self):
        with self.assertRaises(TypeError):
            parse(["tool"], {"strict": True})

    def testSplit(self):
        self.assertEqual(split("a b"), ["a", "b"])
        self.assertEqual(split(("a", "b")), ["a", "b"])
        with self.assertRaises(TypeError):
            split({"a": "b"})


class TestAutoDetection(TestCase):
    """Unregistered and auto-typed options."""

    def testFlagPresence(self):
        self.assertEqual(dict(parse(["p", "-a"]).options), {"a": True})

    def testLookaheadConsumed(self):
        result = parse(["p", "-a", "b"])
        self.assertEqual(dict(result.options), {"a": "b"})
        self.assertEqual(result.commands, ())

    def testInlineShortValue(self):
        self.assertEqual(dict(parse(["p", "-ab"]).options), {"a": "b"})

    def testBooleanLiterals(self):
        result = parse(["p", "-atrue", "-b", "false", "--c=1", "--d=0"])
        self.assertEqual(dict(result.options), {"a": True, "b": False, "c": True, "d": False})

    def testNumbersKeepTheirForm(self):
        result = parse(["p", "--workers=42", "--ratio", "0.5", "--limit=1e3"])
        self.assertIs(type(result.options["workers"]), int)
        self.assertEqual(result.options["workers"], 42)
        self.assertEqual(result.options["ratio"], 0.5)
        self.assertEqual(result.options["limit"], 1000.0)

    def testOverlongIntegersDoNotRaise(self):
        result = parse(["p", "--n=" + "1" * 5000, "-m", "9" * 4301])
        self.assertEqual(dict(result.options), {"n": float("inf"), "m": float("inf")})
        self.assertEqual(result.commands, ())

    def testNonAsciiDigitsStayStrings(self):
        self.assertEqual(parse(["p", "--a=\u0663"]).options["a"], "\u0663")

    def testOptionShapedLookaheadNotConsumed(self):
        self.assertEqual(dict(parse(["p", "-a", "-b"]).options), {"a": True, "b": True})

    def testEmptyLookaheadNotConsumed(self):
        result = parse(["p", "-a", ""])
        self.assertEqual(dict(result.options), {"a": True})
        self.assertEqual(result.commands, ("",))

    def testBareDashIsPositional(self):
        result = parse(["p", "-", "-a", "-"])
        self.assertEqual(result.commands, ("-", "-"))
        self.assertEqual(dict(result.options), {"a": True})

    def testLongValueKeepsLaterEquals(self):
        self.assertEqual(dict(parse(["p", "--define=key=value"]).options), {"define": "key=value"})

    def testEmptyInlineValueFallsBackToLookahead(self):
        self.assertEqual(dict(parse(["p", "--name=", "value"]).options), {"name": "value"})

    def testRegisteredAutoOptionUsesCanonicalName(self):
        result = parse(["p", "-o", "out.txt"], options=[OptionSpec("output", alias="o")], auto=False)
        self.assertEqual(dict(result.options), {"output": "out.txt"})
        self.assertEqual(dict(result.unknowns), {})


class TestUnknowns(TestCase):
    """Unregistered options under auto=False."""

    def testStrictModeMovesUnregisteredOptions(self):
        result = parse(["p", "build", "-x"], options=[], auto=False)
        self.assertEqual(result.commands, ("build",))
        self.assertEqual(dict(result.unknowns), {"x": True})
        self.assertEqual(dict(result.options), {})

    def testUnknownKeepsConsumedValue(self):
        result = parse(["p", "--color", "red", "paint"], auto=False)
        self.assertEqual(dict(result.unknowns), {"color": "red"})
        self.assertEqual(result.commands, ("paint",))

    def testRegisteredOptionsStayInOptions(self):
        result = parse(["p", "--port=80", "--bogus"], options=[PORT], auto=False)
        self.assertEqual(dict(result.options), {"port": 80.0})
        self.assertEqual(dict(result.unknowns), {"bogus": True})


class TestStringOptions(TestCase):

    def testExplicitValue(self):
        self.assertEqual(dict(parse(["p", "--name=alice"], options=[NAME]).options), {"name": "alice"})

    def testLookaheadConsumedEvenWhenOptionShaped(self):
        result = parse(["p", "--name", "-x"], options=[NAME])
        self.assertEqual(dict(result.options), {"name": "-x"})

    def testAliasWithInlineValue(self):
        self.assertEqual(dict(parse(["p", "-nbob"], options=[NAME]).options), {"name": "bob"})

    def testNumericLookingValueStaysString(self):
        self.assertEqual(parse(["p", "-n", "42"], options=[NAME]).options["name"], "42")

    def testNoSourceGivesNone(self):
        self.assertEqual(dict(parse(["p", "--name"], options=[NAME]).options), {"name": None})


class TestNumberOptions(TestCase):

    def testInlineValueIsFloat(self):
        result = parse(["p", "--port=8080"], options=[{"name": "port", "type": "number"}])
        self.assertEqual(dict(result.options), {"port": 8080.0})
        self.assertIs(type(result.options["port"]), float)

    def testInvalidInlineValue(self):
        result = parse(["p", "--port=abc"], options=[{"name": "port", "type": "number"}])
        self.assertEqual(dict(result.invalids), {"port": "abc"})
        self.assertNotIn("port", result.options)

    def testAliasWithLookahead(self):
        result = parse(["p", "-p", "80", "serve"], options=[PORT])
        self.assertEqual(dict(result.options), {"port": 80.0})
        self.assertEqual(result.commands, ("serve",))

    def testInvalidLookaheadIsStillConsumed(self):
        result = parse(["p", "--port", "abc", "serve"], options=[PORT])
        self.assertEqual(dict(result.invalids), {"port": "abc"})
        self.assertEqual(result.commands, ("serve",))

    def testMissingValue(self):
        self.assertEqual(dict(parse(["p", "--port"], options=[PORT]).invalids), {"port": None})

    def testNonAsciiDigitsAreInvalid(self):
        result = parse(["p", "--port=\u0663"], options=[PORT])
        self.assertEqual(dict(result.invalids), {"port": "\u0663"})
        self.assertNotIn("port", result.options)

    def testOverlongNumberIsInfinite(self):
        self.assertEqual(parse(["p", "--port", "9" * 4301], options=[PORT]).options["port"], float("inf"))


class TestBoolOptions(TestCase):

    def testLiterals(self):
        result = parse(["p", "--verbose=true"], options=[VERBOSE])
        self.assertEqual(dict(result.options), {"verbose": True})
        result = parse(["p", "-vfalse"], options=[VERBOSE])
        self.assertEqual(dict(result.options), {"verbose": False})

    def testOtherValuesAreInvalid(self):
        result = parse(["p", "--verbose=maybe"], options=[{"name": "verbose", "type": "bool"}])
        self.assertEqual(dict(result.invalids), {"verbose": "maybe"})

    def testLookaheadNeverConsulted(self):
        result = parse(["p", "--verbose", "true"], options=[VERBOSE])
        self.assertEqual(dict(result.invalids), {"verbose": None})
        self.assertEqual(result.commands, ("true",))

    def testShortFormWithoutValueIsInvalid(self):
        self.assertEqual(dict(parse(["p", "-v"], options=[VERBOSE]).invalids), {"verbose": ""})


class TestResultInvariants(TestCase):

    VECTORS = (
        ["p"],
        ["p", "build", "-x", "--port", "80", "deploy"],
        ["p", "-a", "b", "-c", "--d=", "e", "f", "-"],
        ["p", "--port=abc", "--port=1", "-v", "--verbose=true", "-n"],
        ["p", "", "-", "--", "x", "-x", "-y"],
    )

    def testLaterOccurrenceReplacesEarlierBucket(self):
        result = parse(["p", "--port=abc", "--port=5"], options=[PORT])
        self.assertEqual((dict(result.options), dict(result.invalids)), ({"port": 5.0}, {}))
        result = parse(["p", "--port=5", "--port=abc"], options=[PORT])
        self.assertEqual((dict(result.options), dict(result.invalids)), ({}, {"port": "abc"}))

    def testNameInAtMostOneBucket(self):
        for auto in (True, False):
            for vector in self.VECTORS:
                with self.subTest(vector=vector, auto=auto):
                    result = parse(vector, options=[PORT, NAME, VERBOSE], auto=auto)
                    buckets = (result.options.keys(), result.unknowns.keys(), result.invalids.keys())
                    self.assertEqual(sum(map(len, buckets)), len(set().union(*buckets)))

    def testBucketsNeverExceedTokens(self):
        for auto in (True, False):
            for vector in self.VECTORS:
                with self.subTest(vector=vector, auto=auto):
                    result = parse(vector, options=[PORT, NAME, VERBOSE], auto=auto)
                    total = len(result.commands) + len(result.options) + len(result.unknowns) + len(result.invalids)
                    self.assertLessEqual(total, len(vector) - 1)

    def testReparsingCommandsIsIdempotent(self):
        for vector in self.VECTORS:
            with self.subTest(vector=vector):
                first = parse(vector, options=[PORT, NAME, VERBOSE])
                second = parse([first.program, *first.commands])
                self.assertEqual(second.commands, first.commands)
                self.assertEqual((dict(second.options), dict(second.unknowns), dict(second.invalids)), ({}, {}, {}))

    def testResultIsReadOnly(self):
        result = parse(["p", "-a"])
        with self.assertRaises(TypeError):
            result.options["b"] = True
        with self.assertRaises(AttributeError):
            result.commands.append("x")


class TestParser(TestCase):

    def testParserIsReusable(self):
        parser = Parser([PORT], auto=False)
        first = parser.parse(["p", "-p", "1", "-x"])
        second = parser.parse(["p", "serve"])
        self.assertEqual(dict(first.options), {"port": 1.0})
        self.assertEqual(dict(first.unknowns), {"x": True})
        self.assertEqual(second.commands, ("serve",))
        self.assertEqual(dict(second.options), {})

    def testScanTakesTokensWithoutProgram(self):
        result = Parser().scan("tool", ["-a", "b", "c"])
        self.assertEqual(result.program, "tool")
        self.assertEqual(dict(result.options), {"a": "b"})
        self.assertEqual(result.commands, ("c",))

    def testDeclarationsAreNormalized(self):
        parser = Parser([{"name": "port", "type": "number"}])
        self.assertIsInstance(parser.options[0], OptionSpec)
        self.assertTrue(parser.auto)

    def testInvalidArgumentsRejected(self):
        with self.assertRaises(TypeError):
            Parser(auto="yes")
        with self.assertRaises(TypeError):
            Parser("port")


class TestProcess(TestCase):

    def testProcessMergedConfiguration(self):
        result = process({"program": "tool", "args": ["-p", "80"], "options": [PORT]})
        self.assertEqual(result.program, "tool")
        self.assertEqual(dict(result.options), {"port": 80.0})

    def testMissingArgsFailsFast(self):
        with self.assertRaises(MissingConfigurationError) as context:
            process({"program": "tool"})
        self.assertIn("'args'", str(context.exception))
        self.assertEqual(context.exception.options["missing"], ("args",))

    def testMissingEverything(self):
        with self.assertRaises(MissingConfigurationError) as context:
            process({})
        self.assertEqual(context.exception.options["missing"], ("program", "args"))

    def testNonMappingRejected(self):
        with self.assertRaises(TypeError):
            process(["tool"])


if __name__ == "__main__":
    unittest.main()
