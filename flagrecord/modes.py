"""
Defines the two modes in which options can be evaluated.
"""
from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Tuple, Union


class _Mode:
    def __lshift__(self, option):
        """
        Evaluates ``option`` in this mode.

        >>> from flagrecord.options import option
        >>> Arguments(["--count", "3"]) << option("count", 1, "How many")
        Result(3)
        """
        from flagrecord.evaluator import evaluate

        return evaluate(option, self)


@dataclass(frozen=True)
class Arguments(_Mode):
    """
    Options should be parsed from the given command-line arguments.

    >>> Arguments(["--verbose", "1"])
    Arguments(tokens=('--verbose', '1'))
    """

    tokens: Tuple[str, ...]

    def __init__(self, tokens: typing.Iterable[str] = ()):
        object.__setattr__(self, "tokens", tuple(tokens))


@dataclass(frozen=True)
class Usage(_Mode):
    """
    Each option should record its usage information in an error, for
    presentation to the user.
    """


Mode = Union[Arguments, Usage]
