"""
Defines errors which can be produced while evaluating options.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class ErrorKind(Enum):
    INVALID_ARGUMENT = "InvalidArgument"
    EXCEPTION = "Exception"


@dataclass
class ArgumentError(Exception):
    description: str
    kind: ClassVar[ErrorKind] = ErrorKind.EXCEPTION

    def __str__(self) -> str:
        return self.description

    @property
    def is_usage_error(self) -> bool:
        return self.kind is ErrorKind.INVALID_ARGUMENT


@dataclass
class ExceptionError(ArgumentError):
    exception: Exception


@dataclass
class InvalidArgumentError(ArgumentError):
    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_ARGUMENT


@dataclass
class UsageError(InvalidArgumentError):
    option: Any


@dataclass
class MissingArgumentError(InvalidArgumentError):
    option: Any


@dataclass
class InvalidValueError(InvalidArgumentError):
    option: Any
    value: str


def combine_usage_errors(left: ArgumentError, right: ArgumentError) -> ArgumentError:
    """
    Combines the text of the two errors if they are both usage errors.
    Otherwise returns whichever one is not, biased toward the left.

    >>> a = InvalidArgumentError("Missing argument for --x")
    >>> b = InvalidArgumentError("Invalid value for --y: z")
    >>> print(combine_usage_errors(a, b))
    Missing argument for --x
    Invalid value for --y: z
    >>> c = ExceptionError("boom", exception=RuntimeError("boom"))
    >>> combine_usage_errors(a, c) is c
    True
    >>> combine_usage_errors(c, a) is c
    True
    """
    if left.is_usage_error:
        if right.is_usage_error:
            return InvalidArgumentError(f"{left.description}\n{right.description}")
        return right
    return left
