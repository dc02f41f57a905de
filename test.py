#! /usr/bin/env python
import doctest
import unittest
from dataclasses import dataclass
from typing import List, Optional, Union

import flagrecord
from flagrecord import (
    Arguments,
    ErrorKind,
    ExceptionError,
    InvalidArgumentError,
    Options,
    OptionsType,
    Result,
    Usage,
    curry,
    evaluate,
    field,
    option,
    record,
)
from flagrecord import arguments, errors, evaluator, modes, options
from flagrecord import result as result_module


def load_tests(_, tests, __):
    record.TESTING = True
    for mod in [
        arguments,
        errors,
        evaluator,
        modes,
        options,
        record,
        result_module,
        flagrecord,
    ]:
        tests.addTests(doctest.DocTestSuite(mod))
    return tests


def increment(x):
    return Result(x + 1) if isinstance(x, int) else Result(InvalidArgumentError(f"--n\n\t{x}"))


def double(x):
    return Result(x * 2)


class TestResult(unittest.TestCase):
    values = [1, -3, "a"]
    results = [Result(1), Result("a"), Result(InvalidArgumentError("--x\n\tx"))]

    def test_left_identity(self):
        for a in self.values:
            self.assertEqual(Result.return_(a) >= increment, increment(a))

    def test_right_identity(self):
        for r in self.results:
            self.assertEqual(r >= Result.return_, r)

    def test_associativity(self):
        for r in self.results:
            self.assertEqual(
                r >= (lambda a: increment(a) >= double), (r >= increment) >= double
            )


@dataclass
class LogOptions(OptionsType):
    verbosity: int
    output_filename: Optional[str]
    log_name: str

    @classmethod
    def evaluate(cls, m):
        return (
            curry(cls)
            & m << option("verbose", 0, "The verbosity level with which to read the logs")
            & m << option("outputFilename", "A file to print output to, instead of stdout")
            & m << option("logName", "all", "The log to read")
        )


@dataclass
class ArchiveOptions(Options):
    output: Optional[str] = field(default=None, usage="The path of the archive")
    depth: int = field(default=1, usage="How deep to recurse")

    def __post_init__(self):
        if self.depth < 0:
            raise ValueError("depth must not be negative")


class TestEvaluate(unittest.TestCase):
    def setUp(self):
        self.x = option("x", 5, "A number")

    def assertFailure(self, result, description):
        self.assertIsInstance(result.get, InvalidArgumentError)
        self.assertEqual(result.get.kind, ErrorKind.INVALID_ARGUMENT)
        self.assertEqual(result.get.description, description)

    def test_no_tokens_uses_default(self):
        self.assertEqual(evaluate(self.x, Arguments([])), Result(5))
        self.assertEqual(evaluate(option("s", "abc", "A string"), Arguments([])), Result("abc"))

    def test_value_follows_key(self):
        self.assertEqual(evaluate(self.x, Arguments(["--x", "7"])), Result(7))

    def test_negative_integer(self):
        self.assertEqual(evaluate(self.x, Arguments(["--x", "-3"])), Result(-3))

    def test_missing_argument(self):
        self.assertFailure(evaluate(self.x, Arguments(["--x"])), "Missing argument for --x")

    def test_invalid_value(self):
        self.assertFailure(
            evaluate(self.x, Arguments(["--x", "notanint"])),
            "Invalid value for --x: notanint",
        )

    def test_integer_grammar_is_strict(self):
        for token in [" 7", "7 ", "1_000", "", "0x10", "1.0"]:
            self.assertFailure(
                evaluate(self.x, Arguments(["--x", token])),
                f"Invalid value for --x: {token}",
            )

    def test_first_match_wins(self):
        self.assertEqual(evaluate(self.x, Arguments(["--x", "1", "--x", "2"])), Result(1))

    def test_first_match_wins_even_when_invalid(self):
        self.assertFailure(
            evaluate(self.x, Arguments(["--x", "one", "--x", "2"])),
            "Invalid value for --x: one",
        )

    def test_key_matches_exactly(self):
        self.assertEqual(evaluate(self.x, Arguments(["-x", "1", "--xx", "2"])), Result(5))

    def test_value_may_look_like_a_flag(self):
        s = option("name", "default", "A name")
        self.assertEqual(evaluate(s, Arguments(["--name", "--x"])), Result("--x"))

    def test_usage(self):
        self.assertFailure(evaluate(self.x, Usage()), "--x\n\tA number")

    def test_lshift_is_evaluate(self):
        mode = Arguments(["--x", "9"])
        self.assertEqual(mode << self.x, evaluate(self.x, mode))
        self.assertEqual(Usage() << self.x, evaluate(self.x, Usage()))

    def test_nullable(self):
        n = option("n", "A nullable number", type=int)
        self.assertEqual(evaluate(n, Arguments([])), Result(None))
        self.assertEqual(evaluate(n, Arguments(["--n", "4"])), Result(4))
        self.assertFailure(evaluate(n, Arguments(["--n", "four"])), "Invalid value for --n: four")
        self.assertFailure(evaluate(n, Arguments(["--n"])), "Missing argument for --n")

    def test_custom_type(self):
        @dataclass
        class Level:
            value: int

            @classmethod
            def from_string(cls, string):
                return cls(int(string)) if string.isdigit() else None

        level = option("level", Level(1), "The level")
        self.assertEqual(level.type, Level)
        self.assertEqual(evaluate(level, Arguments(["--level", "3"])), Result(Level(3)))
        self.assertFailure(
            evaluate(level, Arguments(["--level", "high"])), "Invalid value for --level: high"
        )

    def test_converter_raising_value_error_is_invalid_value(self):
        ratio = option("ratio", 0.5, "A ratio", type=lambda s: float.fromhex(s))
        self.assertFailure(
            evaluate(ratio, Arguments(["--ratio", "half"])), "Invalid value for --ratio: half"
        )

    def test_unknown_type(self):
        with self.assertRaises(TypeError):
            option("c", 1j, "A complex number")

    def test_none_default_needs_type(self):
        with self.assertRaises(TypeError):
            option("n", None, "No type")

    def test_optional_type_converts_inner_type(self):
        n = option("n", "A number", type=Optional[int])
        self.assertEqual(evaluate(n, Arguments([])), Result(None))
        self.assertEqual(evaluate(n, Arguments(["--n", "3"])), Result(3))
        self.assertFailure(evaluate(n, Arguments(["--n", "three"])), "Invalid value for --n: three")

    def test_generic_alias_has_no_conversion(self):
        with self.assertRaises(TypeError):
            option("tags", "Some tags", type=List[str])
        with self.assertRaises(TypeError):
            option("either", "A number or a word", type=Union[int, str])


class TestCombine(unittest.TestCase):
    def test_both_usage_errors_merge_left_then_right(self):
        left = Result(InvalidArgumentError("left"))
        right = Result(InvalidArgumentError("right"))
        combined = left & right
        self.assertIsInstance(combined.get, InvalidArgumentError)
        self.assertEqual(combined.get.description, "left\nright")

    def test_left_failure_survives_right_success(self):
        left = Result(InvalidArgumentError("left"))
        self.assertIs((left & Result(1)).get, left.get)

    def test_right_failure_survives_left_success(self):
        right = Result(InvalidArgumentError("right"))
        self.assertIs((Result(lambda x: x) & right).get, right.get)

    def test_non_usage_error_wins(self):
        usage = Result(InvalidArgumentError("usage"))
        other = Result(ExceptionError("other", exception=RuntimeError("other")))
        self.assertIs((usage & other).get, other.get)
        self.assertIs((other & usage).get, other.get)

    def test_left_non_usage_error_wins_over_right(self):
        left = Result(ExceptionError("left", exception=RuntimeError("left")))
        right = Result(ExceptionError("right", exception=RuntimeError("right")))
        self.assertIs((left & right).get, left.get)

    def test_unary_lift(self):
        self.assertEqual(str & Result(1), Result("1"))
        failure = Result(InvalidArgumentError("nope"))
        self.assertIs((str & failure).get, failure.get)

    def test_lift_rejects_non_callable(self):
        with self.assertRaises(TypeError):
            1 & Result(1)

    def test_raising_function_becomes_exception_error(self):
        result = Result(lambda x: 1 / x) & Result(0)
        self.assertIsInstance(result.get, ExceptionError)
        self.assertFalse(result.get.is_usage_error)
        self.assertIsInstance(result.get.exception, ZeroDivisionError)

    def test_unwrap(self):
        self.assertEqual(Result(1).unwrap(), 1)
        with self.assertRaises(InvalidArgumentError):
            Result(InvalidArgumentError("nope")).unwrap()

    def test_curry_requires_arguments(self):
        with self.assertRaises(ValueError):
            curry(lambda: 1)


class TestOptionsType(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(
            LogOptions.evaluate(Arguments([])).get,
            LogOptions(verbosity=0, output_filename=None, log_name="all"),
        )

    def test_arguments(self):
        result = LogOptions.evaluate(
            Arguments(["--outputFilename", "out.txt", "--verbose", "3"])
        )
        self.assertEqual(result.get, LogOptions(3, "out.txt", "all"))

    def test_failures_are_collected(self):
        result = LogOptions.evaluate(Arguments(["--verbose", "loud", "--logName"]))
        self.assertEqual(
            result.get.description,
            "Invalid value for --verbose: loud\nMissing argument for --logName",
        )

    def test_usage(self):
        result = LogOptions.evaluate(Usage())
        self.assertEqual(
            result.get.description,
            "--verbose\n\tThe verbosity level with which to read the logs\n"
            "--outputFilename\n\tA file to print output to, instead of stdout\n"
            "--logName\n\tThe log to read",
        )

    def test_two_option_usage(self):
        @dataclass
        class Pair(OptionsType):
            a: int
            b: str

            @classmethod
            def evaluate(cls, m):
                return curry(cls) & m << option("a", 1, "first") & m << option("b", "x", "second")

        description = Pair.evaluate(Usage()).get.description
        self.assertIn("--a\n\tfirst", description)
        self.assertIn("--b\n\tsecond", description)
        self.assertLess(description.index("--a"), description.index("--b"))


class TestOptions(unittest.TestCase):
    def setUp(self):
        record.PRINTING = False

    def tearDown(self):
        record.PRINTING = True

    def test_options(self):
        declared = ArchiveOptions.options()
        self.assertEqual(list(declared), ["output", "depth"])
        self.assertEqual(declared["output"], option("output", "The path of the archive"))
        self.assertEqual(declared["depth"], option("depth", 1, "How deep to recurse"))

    def test_evaluate(self):
        result = ArchiveOptions.evaluate(Arguments(["--depth", "3", "--output", "a.zip"]))
        self.assertEqual(result.get, ArchiveOptions(output="a.zip", depth=3))

    def test_underscores_become_dashes(self):
        @dataclass
        class Opts(Options):
            log_name: str = field(default="all", usage="The log")
            cache_dir: str = field(default="/tmp", key="cache", usage="The cache")

        self.assertEqual(
            Opts.parse_args("--log-name", "system", "--cache", "/var"),
            Opts(log_name="system", cache_dir="/var"),
        )

    def test_field_type_override(self):
        @dataclass
        class Opts(Options):
            scale: float = field(default=1, type=float, usage="A scale")

        self.assertEqual(Opts.parse_args("--scale", "2.5"), Opts(scale=2.5))

    def test_constructor_exception_is_reported(self):
        result = ArchiveOptions.evaluate(Arguments(["--depth", "-1"]))
        self.assertIsInstance(result.get, ExceptionError)
        self.assertEqual(result.get.kind, ErrorKind.EXCEPTION)
        self.assertIsNone(ArchiveOptions.parse_args("--depth", "-1"))

    def test_parse_args_failure_returns_none(self):
        self.assertIsNone(ArchiveOptions.parse_args("--depth"))

    def test_help(self):
        self.assertIsNone(ArchiveOptions.parse_args("-h"))
        self.assertIsNone(ArchiveOptions.parse_args("--help"))

    def test_usage(self):
        self.assertEqual(
            ArchiveOptions.usage(),
            "--output\n\tThe path of the archive\n--depth\n\tHow deep to recurse",
        )

    def test_field_without_default(self):
        @dataclass
        class Opts(Options):
            name: str = field(usage="No default")

        with self.assertRaises(TypeError):
            Opts.options()

    def test_optional_field_without_default(self):
        @dataclass
        class Opts(Options):
            output: Optional[str] = field(usage="A file")
            retries: Optional[int] = field(usage="How many retries")

        self.assertEqual(Opts.options()["output"], option("output", "A file"))
        self.assertEqual(Opts.evaluate(Arguments([])), Result(Opts(output=None, retries=None)))
        self.assertEqual(
            Opts.parse_args("--output", "x", "--retries", "2"), Opts(output="x", retries=2)
        )
        self.assertIsNone(Opts.parse_args("--retries", "two"))

    def test_list_field_has_no_conversion(self):
        @dataclass
        class Opts(Options):
            tags: List[str] = field(default_factory=list, usage="Some tags")

        with self.assertRaises(TypeError):
            Opts.options()

    def test_no_fields(self):
        @dataclass
        class Empty(Options):
            pass

        self.assertEqual(Empty.evaluate(Arguments(["--anything", "1"])), Result(Empty()))
        self.assertEqual(Empty.usage(), "")


if __name__ == "__main__":
    unittest.main()
