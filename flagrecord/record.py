"""
Defines the :py:class:`OptionsType` contract, the :py:func:`evaluate_fields`
builder and the :py:class:`Options` dataclass which derives its evaluation
from its fields.
"""
from __future__ import annotations

import abc
import dataclasses
import os
import sys
import typing
from dataclasses import MISSING, Field, dataclass, fields
from functools import reduce
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from flagrecord.arguments import optional_argument
from flagrecord.errors import ArgumentError
from flagrecord.modes import Arguments, Mode, Usage
from flagrecord.options import Option
from flagrecord.result import Result

TESTING = os.environ.get("FLAGRECORD_TESTING", False)
PRINTING = os.environ.get("FLAGRECORD_PRINTING", True)

A = TypeVar("A")
R = TypeVar("R", bound="OptionsType")


class OptionsType(abc.ABC):
    """
    Represents a record of options for a command, which can be parsed from a
    list of command-line arguments.

    This is most helpful when used in conjunction with
    :py:func:`option <flagrecord.options.option>`, ``<<`` and ``&``:

    >>> from dataclasses import dataclass
    >>> from typing import Optional
    >>> from flagrecord import Arguments, curry, option
    >>> @dataclass
    ... class LogOptions(OptionsType):
    ...     verbosity: int
    ...     output_filename: Optional[str]
    ...     log_name: str
    ...
    ...     @classmethod
    ...     def evaluate(cls, m):
    ...         return (
    ...             curry(cls)
    ...             & m << option("verbose", 0, "The verbosity level with which to read the logs")
    ...             & m << option("outputFilename", "A file to print output to, instead of stdout")
    ...             & m << option("logName", "all", "The log to read")
    ...         )
    >>> LogOptions.evaluate(Arguments(["--logName", "system", "--verbose", "2"]))
    Result(LogOptions(verbosity=2, output_filename=None, log_name='system'))
    """

    @classmethod
    @abc.abstractmethod
    def evaluate(cls: Type[R], mode: Mode) -> "Result[R]":
        """
        Evaluates this set of options in the given mode.

        Returns the parsed options, or an
        :py:class:`InvalidArgumentError <flagrecord.errors.InvalidArgumentError>`
        containing usage information.
        """
        raise NotImplementedError


def _bind_key(key: str) -> Callable[[Dict[str, Any]], Callable[[Any], Dict[str, Any]]]:
    def f(kwargs: Dict[str, Any]) -> Callable[[Any], Dict[str, Any]]:
        return lambda value: {**kwargs, key: value}

    return f


def evaluate_fields(
    mode: Mode,
    constructor: Callable[..., A],
    options: Mapping[str, Option],
) -> Result[A]:
    """
    Evaluates each of ``options`` in ``mode``, in order, and passes the values
    to ``constructor`` as keyword arguments. If any option fails, the errors of
    all failing options are combined into one.

    >>> from flagrecord.modes import Arguments, Usage
    >>> from flagrecord.options import option
    >>> options = {
    ...     "x": option("x", 0, "The first number"),
    ...     "y": option("y", 0, "The second number"),
    ... }
    >>> evaluate_fields(Arguments(["--y", "2"]), dict, options)
    Result({'x': 0, 'y': 2})
    >>> print(evaluate_fields(Arguments(["--x", "a", "--y"]), dict, options).get)
    Invalid value for --x: a
    Missing argument for --y
    """

    def step(
        acc: Result[Dict[str, Any]], item: Tuple[str, Option]
    ) -> Result[Dict[str, Any]]:
        name, option = item
        return acc.map(_bind_key(name)) & (mode << option)

    kwargs = reduce(step, options.items(), Result.return_({}))
    return kwargs.map(lambda kw: constructor(**kw))


def field(
    usage: str = "",
    key: Optional[str] = None,
    metadata: Optional[dict] = None,
    type: Optional[Callable[[str], Any]] = None,
    **kwargs,
) -> Field:
    """
    This is a thin wrapper around :external:py:func:`dataclasses.field`.

    Parameters
    ----------

    usage : str
        Help text for the option.

    key : Optional[str]
        The key for the option. Defaults to the field name with underscores
        replaced by dashes.

    metadata : Optional[dict]
        Identical to the ``metadata`` argument for :external:py:func:`dataclasses.field`.

    type : Optional[type]
        The type that tokens are converted to. Defaults to the field's annotation.

    Returns
    -------

    A :external:py:class:`dataclasses.Field` object that can be used in place of a
    default argument.
    """
    if metadata is None:
        metadata = {}
    metadata.update(usage=usage)
    if key is not None:
        metadata.update(key=key)
    if type is not None:
        metadata.update(type=type)
    return dataclasses.field(metadata=metadata, **kwargs)


def _field_option(field: Field, annotation: Any) -> Option:
    nullable = optional_argument(annotation)
    if field.default is not MISSING:
        default = field.default
    elif field.default_factory is not MISSING:  # type: ignore[misc]
        default = field.default_factory()  # type: ignore[misc]
    elif nullable is not None:
        default = None
    else:
        raise TypeError(
            f"Field '{field.name}' has no default. Every option needs a default "
            "unless it is annotated Optional[...]."
        )

    _type = field.metadata.get("type")
    if _type is None:
        _type = annotation if nullable is None else nullable
    return Option(
        key=field.metadata.get("key", field.name.replace("_", "-")),
        default=default,
        usage=field.metadata.get("usage", ""),
        type=_type,
    )


def _print(*args, **kwargs):
    if PRINTING:
        print(*args, **kwargs)


def print_usage(usage: str) -> None:
    _print("usage:", end="\n" if "\n" in usage else " ")
    if "\n" in usage:
        usage = "\n".join(["    " + u for u in usage.split("\n")])
    _print(usage)


def report(error: ArgumentError, usage: Optional[str] = None) -> None:
    """
    Prints ``error`` for the user, preceded by ``usage`` if given.

    >>> from flagrecord.errors import InvalidArgumentError
    >>> report(InvalidArgumentError("Missing argument for --x"), usage="--x X")
    usage: --x X
    Missing argument for --x
    """
    if usage:
        print_usage(usage)
    _print(error.description)


@dataclass
class Options(OptionsType):
    """
    :py:class:`Options` removes the boilerplate of writing
    :py:meth:`OptionsType.evaluate` by hand. Each dataclass field becomes an
    option whose type is the field's annotation and whose default is the
    field's default.

    >>> from dataclasses import dataclass
    >>> from typing import Optional
    >>> from flagrecord import Arguments, Options, field
    >>> @dataclass
    ... class LogOptions(Options):
    ...     verbose: int = field(default=0, usage="The verbosity level")
    ...     output_filename: Optional[str] = field(default=None, usage="A file to print output to")
    ...     log_name: str = field(default="all", usage="The log to read")
    >>> LogOptions.evaluate(Arguments(["--verbose", "1"]))
    Result(LogOptions(verbose=1, output_filename=None, log_name='all'))
    >>> LogOptions.parse_args("--output-filename", "out.log")
    LogOptions(verbose=0, output_filename='out.log', log_name='all')
    >>> LogOptions.parse_args("--verbose", "loud")  # doctest: +NORMALIZE_WHITESPACE
    usage:
        --verbose
                The verbosity level
        --output-filename
                A file to print output to
        --log-name
                The log to read
    Invalid value for --verbose: loud
    """

    @classmethod
    def evaluate(cls: Type[R], mode: Mode) -> "Result[R]":
        return evaluate_fields(mode, cls, cls.options())  # type: ignore[attr-defined]

    @classmethod
    def options(cls) -> Dict[str, Option]:
        """
        Returns the option declared by each field, in declaration order.
        """
        types = typing.get_type_hints(cls)  # see https://peps.python.org/pep-0563/
        return {
            f.name: _field_option(f, types.get(f.name, str))
            for f in fields(cls)
            if f.init
        }

    @classmethod
    def parse_args(
        cls: Type[R],
        *args: str,
        check_help: bool = True,
    ) -> Optional[R]:
        """
        Parses ``args`` (``sys.argv[1:]`` if empty) into an instance of this
        class. If the first argument is ``-h`` or ``--help``, prints the usage
        of every option instead. On failure, prints the usage followed by the
        error and returns ``None``.
        """
        _args = args if args or TESTING else tuple(sys.argv[1:])
        if check_help and _args and _args[0] in ("-h", "--help"):
            print_usage(cls.usage())  # type: ignore[attr-defined]
            return None
        result = cls.evaluate(Arguments(_args))
        if isinstance(result.get, ArgumentError):
            error = result.get
            usage = cls.usage() if error.is_usage_error else None  # type: ignore[attr-defined]
            report(error, usage=usage)
            return None
        return result.get

    @classmethod
    def usage(cls) -> str:
        """
        Returns the usage of every option, one block per option.
        """
        result = cls.evaluate(Usage())
        if isinstance(result.get, ArgumentError):
            return result.get.description
        return ""
