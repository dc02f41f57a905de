"""
Defines the conversions from a single command-line token to a typed value.
"""
from __future__ import annotations

import re
from inspect import isclass
from types import UnionType
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

A = TypeVar("A")
A_co = TypeVar("A_co", covariant=True)

Converter = Callable[[str], Optional[A]]

_INT = re.compile(r"-?[0-9]+")
_FLOAT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class ArgumentType(Protocol[A_co]):
    """
    Any type that can be parsed from a command-line token.

    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Level:
    ...     value: int
    ...
    ...     @classmethod
    ...     def from_string(cls, string):
    ...         return cls(int(string)) if string in ("1", "2", "3") else None
    >>> convert(Level, "2")
    Level(value=2)
    >>> print(convert(Level, "4"))
    None
    """

    @classmethod
    def from_string(cls, string: str) -> Optional[A_co]:
        ...


def _int(string: str) -> Optional[int]:
    """
    >>> _int("-12")
    -12
    >>> print(_int(" 12"), _int("+1"), _int("1_000"), _int(""))
    None None None None
    """
    return int(string) if _INT.fullmatch(string) else None


def _str(string: str) -> str:
    return string


def _float(string: str) -> Optional[float]:
    """
    >>> _float("1.5e3")
    1500.0
    >>> print(_float(" 1.5"), _float("inf"))
    None None
    """
    return float(string) if _FLOAT.fullmatch(string) else None


def _bool(string: str) -> Optional[bool]:
    return {"true": True, "false": False}.get(string)


_CONVERTERS: Dict[type, Converter] = {
    int: _int,
    str: _str,
    float: _float,
    bool: _bool,
}


def register(type: Type[A], converter: Converter[A]) -> None:
    """
    Makes ``type`` usable as the type of an option.

    >>> from pathlib import PurePosixPath
    >>> register(PurePosixPath, PurePosixPath)
    >>> convert(PurePosixPath, "/tmp")
    PurePosixPath('/tmp')
    """
    _CONVERTERS[type] = converter


def optional_argument(annotation: Any) -> Optional[Any]:
    """
    Returns ``X`` if ``annotation`` is ``Optional[X]`` and ``None`` otherwise.

    >>> optional_argument(Optional[int])
    <class 'int'>
    >>> print(optional_argument(int), optional_argument(Union[int, str]))
    None None
    """
    args = get_args(annotation)
    if get_origin(annotation) in (Union, UnionType) and len(args) == 2:
        x, y = args
        if y is type(None):
            return x
        if x is type(None):
            return y
    return None


def converter_for(type: Type[A]) -> Converter[A]:
    """
    Looks up the conversion for ``type``. Registered conversions take precedence
    over a ``from_string`` classmethod. ``Optional[X]`` uses the conversion for
    ``X``; other typing constructs have none.

    >>> converter_for(Optional[int])("3")
    3
    >>> converter_for(complex)
    Traceback (most recent call last):
    ...
    TypeError: No conversion from a command-line argument to complex. Define a from_string classmethod or call register().
    >>> converter_for(List[str])
    Traceback (most recent call last):
    ...
    TypeError: No conversion from a command-line argument to typing.List[str]. Define a from_string classmethod or call register().
    """
    try:
        return _CONVERTERS[type]
    except KeyError:
        pass
    if get_origin(type) is not None:
        inner = optional_argument(type)
        if inner is None:
            raise TypeError(
                f"No conversion from a command-line argument to {type}. "
                "Define a from_string classmethod or call register()."
            )
        return converter_for(inner)
    from_string = getattr(type, "from_string", None)
    if callable(from_string):
        return from_string
    if not isclass(type) and callable(type):
        # like the ``type`` argument of argparse
        return type
    raise TypeError(
        f"No conversion from a command-line argument to {getattr(type, '__name__', type)}. "
        "Define a from_string classmethod or call register()."
    )


def convert(type: Type[A], string: str) -> Optional[A]:
    """
    Converts ``string`` to ``type``, returning ``None`` if ``string`` is not a
    valid literal of ``type``. A conversion that raises
    :external:py:class:`ValueError` or :external:py:class:`TypeError` is
    treated the same way.

    >>> convert(int, "7")
    7
    >>> print(convert(int, "notanint"))
    None
    >>> convert(str, "anything")
    'anything'
    >>> convert(bool, "true")
    True
    """
    return parse_with(converter_for(type), string)


def parse_with(converter: Converter[A], string: str) -> Optional[A]:
    try:
        return converter(string)
    except (ValueError, TypeError):
        return None
