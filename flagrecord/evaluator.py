"""
Evaluates a single :py:class:`Option <flagrecord.options.Option>` in a
:py:data:`Mode <flagrecord.modes.Mode>`.
"""
from __future__ import annotations

from typing import Callable, Optional, TypeVar

from flagrecord.arguments import parse_with
from flagrecord.errors import InvalidValueError, MissingArgumentError, UsageError
from flagrecord.modes import Arguments, Mode, Usage
from flagrecord.options import Option
from flagrecord.result import Result

A = TypeVar("A")


def informative_usage_error(option: Option) -> UsageError:
    """
    Constructs an error that describes how to use ``option``.

    >>> from flagrecord.options import option
    >>> informative_usage_error(option("verbose", 0, "The verbosity level")).description
    '--verbose\\n\\tThe verbosity level'
    """
    return UsageError(f"{option}\n\t{option.usage}", option=option)


def invalid_usage_error(
    option: Option, value: Optional[str]
) -> "InvalidValueError | MissingArgumentError":
    """
    Constructs an error that describes how ``option`` was used incorrectly.
    ``value`` is the invalid value given by the user, if there was one.

    >>> from flagrecord.options import option
    >>> count = option("count", 1, "How many")
    >>> print(invalid_usage_error(count, "many"))
    Invalid value for --count: many
    >>> print(invalid_usage_error(count, None))
    Missing argument for --count
    """
    if value is None:
        return MissingArgumentError(f"Missing argument for {option}", option=option)
    return InvalidValueError(
        f"Invalid value for {option}: {value}", option=option, value=value
    )


def evaluate_option(
    option: Option,
    default: A,
    mode: Mode,
    parse: Callable[[str], Optional[A]],
) -> Result[A]:
    """
    Evaluates ``option`` in ``mode``, falling back to ``default`` when the
    option does not appear in the arguments and converting the token that
    follows it with ``parse``.

    Only the first occurrence of the option is honored:

    >>> from flagrecord.options import option
    >>> x = option("x", 5, "...")
    >>> evaluate_option(x, 5, Arguments(["--x", "1", "--x", "2"]), int)
    Result(1)
    """
    if isinstance(mode, Usage):
        return Result.failure(informative_usage_error(option))
    if not isinstance(mode, Arguments):
        raise TypeError(f"Expected Arguments or Usage, got {mode!r}")

    arguments = mode.tokens
    try:
        key_index = arguments.index(option.flag)
    except ValueError:
        return Result.return_(default)

    if key_index + 1 < len(arguments):
        string_value = arguments[key_index + 1]
        value = parse_with(parse, string_value)
        if value is None:
            return Result.failure(invalid_usage_error(option, string_value))
        return Result.return_(value)

    return Result.failure(invalid_usage_error(option, None))


def evaluate(option: "Option[A]", mode: Mode) -> Result[A]:
    """
    Evaluates ``option`` in ``mode`` using the option's own default value and
    type. ``mode << option`` is sugar for this function.

    >>> from flagrecord.modes import Arguments, Usage
    >>> from flagrecord.options import option
    >>> x = option("x", 5, "A number")
    >>> evaluate(x, Arguments([]))
    Result(5)
    >>> evaluate(x, Arguments(["--x", "7"]))
    Result(7)
    >>> print(evaluate(x, Arguments(["--x"])).get)
    Missing argument for --x
    >>> print(evaluate(x, Arguments(["--x", "notanint"])).get)
    Invalid value for --x: notanint
    >>> evaluate(x, Usage()).get.description
    '--x\\n\\tA number'

    Nullable options default to ``None`` but still report invalid values:

    >>> n = option("n", "A nullable number", type=int)
    >>> print(evaluate(n, Arguments([])))
    Result(None)
    >>> evaluate(n, Arguments(["--n", "3"]))
    Result(3)
    >>> print(evaluate(n, Arguments(["--n", "three"])).get)
    Invalid value for --n: three
    """
    return evaluate_option(option, option.default, mode, option.converter)
