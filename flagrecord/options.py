"""
Defines the :py:class:`Option` descriptor and the :py:func:`option` constructor.
"""
from __future__ import annotations

import builtins
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, Type, TypeVar, overload

from flagrecord.arguments import Converter, converter_for

A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)


@dataclass(frozen=True)
class Option(Generic[A_co]):
    """
    Describes an option that can be provided on the command line.

    Parameters
    ----------

    key : str
        The key that controls this option. A key of ``verbose`` is given on the
        command line as ``--verbose``.

    default : A_co
        The value used if the option is never specified on the command line.

    usage : str
        A human-readable string describing the purpose of this option, shown in
        help messages.

    type : type
        The type each token is converted to.

    >>> verbose = option("verbose", 0, "The verbosity level")
    >>> str(verbose)
    '--verbose'
    >>> verbose.default, verbose.type
    (0, <class 'int'>)
    """

    key: str
    default: A_co
    usage: str
    type: Type[Any] = str
    converter: Converter = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "converter", converter_for(self.type))

    def __str__(self) -> str:
        return self.flag

    @property
    def flag(self) -> str:
        return f"--{self.key}"


@overload
def option(
    key: str, default: A, usage: str, *, type: Optional[Type[A]] = None
) -> Option[A]:
    ...


@overload
def option(key: str, usage: str, *, type: Type[A] = ...) -> Option[Optional[A]]:
    ...


def option(key: str, *args: Any, type: Optional[Type[Any]] = None) -> Option[Any]:
    """
    Constructs an option.

    With three arguments, ``option(key, default, usage)``, the option falls back
    to ``default`` and converts tokens to ``type(default)`` unless ``type`` is given:

    >>> option("count", 1, "How many times")
    Option(key='count', default=1, usage='How many times', type=<class 'int'>)

    With two arguments, ``option(key, usage)``, the option is nullable: its default
    is ``None`` and tokens are converted to ``type`` (``str`` if not given):

    >>> option("output", "A file to print output to")
    Option(key='output', default=None, usage='A file to print output to', type=<class 'str'>)
    >>> option("limit", "At most this many", type=int).type
    <class 'int'>
    """
    if len(args) == 2:
        default, usage = args
        if type is not None:
            _type = type
        elif default is None:
            raise TypeError(
                f"Cannot infer the type of --{key} from a default of None. "
                "Use option(key, usage, type=...)."
            )
        else:
            _type = builtins.type(default)
    elif len(args) == 1:
        (usage,) = args
        default = None
        _type = str if type is None else type
    else:
        raise TypeError(
            "option() takes a key followed by either (default, usage) or (usage), "
            f"got {len(args)} arguments"
        )
    return Option(key=key, default=default, usage=usage, type=_type)

