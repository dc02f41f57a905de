"""
Defines the `Result` dataclass, representing success or failure, output by
option evaluation, along with the applicative combinators that thread results
through a record constructor.
"""
from __future__ import annotations

from dataclasses import dataclass
from inspect import Parameter, signature
from typing import Any, Callable, Optional, Type, TypeVar

from pytypeclass import Monad

from flagrecord.errors import ArgumentError, ExceptionError, combine_usage_errors

A_co = TypeVar("A_co", covariant=True)
A = TypeVar("A")
B = TypeVar("B")


def _call(f: Callable[[A], B], a: A) -> "Result[B]":
    try:
        return Result(f(a))
    except Exception as e:
        return Result(
            ExceptionError(f"An argument {a}: raised exception {e}", exception=e)
        )


@dataclass
class Result(Monad[A_co]):
    """
    >>> Result.return_(1) >= (lambda x: Result(x + 1))
    Result(2)
    >>> from flagrecord.errors import InvalidArgumentError
    >>> Result(InvalidArgumentError("Oh no!")) >= (lambda x: Result(x + 1))
    Result(InvalidArgumentError(description='Oh no!'))
    >>> def results():
    ...     x = yield Result(1)
    ...     y = yield Result(2)
    ...     yield Result(x + y)
    ...
    >>> Result.do(results)
    Result(3)

    Results combine applicatively with ``&``. A plain function on the left lifts
    into the first result and each following result supplies one more argument:

    >>> add = curry(lambda x, y: x + y)
    >>> add & Result(1) & Result(2)
    Result(3)

    When several results fail, usage errors are merged in left-to-right order:

    >>> r = add & Result(InvalidArgumentError("first")) & Result(InvalidArgumentError("second"))
    >>> print(r.get)
    first
    second
    """

    get: "A_co | ArgumentError"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({repr(self.get)})"

    def __and__(self: "Result[Callable[[A], B]]", other: "Result[A]") -> "Result[B]":
        if not isinstance(other, Result):
            return NotImplemented
        return self.apply(other)

    def __rand__(self: "Result[A]", f: Callable[[A], B]) -> "Result[B]":
        if not callable(f):
            return NotImplemented
        return self.map(f)

    def __ge__(self, f: Callable[[A_co], Monad[B]]) -> "Result[B]":  # type: ignore[override]
        """Sugar for :py:meth:`Result.bind`."""
        return self.bind(f)

    def apply(self: "Result[Callable[[A], B]]", value: "Result[A]") -> "Result[B]":
        """
        Applies the function held by ``self`` to the value held by ``value``.

        If both fail, the two errors are combined with
        :py:func:`combine_usage_errors <flagrecord.errors.combine_usage_errors>`.
        If only one fails, its error is kept, so a problem detected in an
        earlier field is never lost because a later field parsed fine.

        >>> from flagrecord.errors import ExceptionError, InvalidArgumentError
        >>> Result(lambda x: -x).apply(Result(1))
        Result(-1)
        >>> Result(lambda x: -x).apply(Result(InvalidArgumentError("right")))
        Result(InvalidArgumentError(description='right'))
        >>> Result(InvalidArgumentError("left")).apply(Result(1))
        Result(InvalidArgumentError(description='left'))
        """
        f, a = self.get, value.get
        if isinstance(f, ArgumentError):
            if isinstance(a, ArgumentError):
                return Result(combine_usage_errors(f, a))
            return Result(f)
        if isinstance(a, ArgumentError):
            return Result(a)
        return _call(f, a)

    def bind(self, f: Callable[[A_co], Monad[B]]) -> "Result[B]":  # type: ignore[override]
        x = self.get
        if isinstance(x, ArgumentError):
            return Result(x)
        y = f(x)
        assert isinstance(y, Result), y
        return y

    @classmethod
    def failure(cls: "Type[Result[A]]", error: ArgumentError) -> "Result[A]":
        return Result(error)

    @property
    def is_success(self) -> bool:
        return not isinstance(self.get, ArgumentError)

    def map(self, f: Callable[[A_co], B]) -> "Result[B]":
        """
        Applies ``f`` to the value in this result. A failure passes through
        unchanged. If ``f`` raises, the exception is converted into an
        :py:class:`ExceptionError <flagrecord.errors.ExceptionError>`.

        >>> Result(2).map(str)
        Result('2')
        >>> Result("x").map(int).get.kind
        <ErrorKind.EXCEPTION: 'Exception'>
        """
        x = self.get
        if isinstance(x, ArgumentError):
            return Result(x)
        return _call(f, x)

    @classmethod
    def return_(cls: "Type[Result[A]]", a: A) -> "Result[A]":  # type: ignore[override]
        return Result(a)

    def unwrap(self) -> A_co:
        """
        Returns the value in this result or raises the error it holds.

        >>> from flagrecord.errors import InvalidArgumentError
        >>> Result(InvalidArgumentError("Missing argument for --x")).unwrap()
        Traceback (most recent call last):
        ...
        flagrecord.errors.InvalidArgumentError: Missing argument for --x
        """
        x = self.get
        if isinstance(x, ArgumentError):
            raise x
        return x


def curry(f: Callable[..., B], arity: Optional[int] = None) -> Callable[[Any], Any]:
    """
    Converts ``f`` into a chain of one-argument functions, so that it can be
    lifted over a series of results with ``&``. ``arity`` defaults to the number
    of positional parameters of ``f``.

    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class LogOptions:
    ...     verbosity: int
    ...     log_name: str
    >>> curry(LogOptions)(1)("all")
    LogOptions(verbosity=1, log_name='all')
    >>> curry(max, arity=2)(1)(2)
    2
    """
    if arity is None:
        arity = len(
            [
                p
                for p in signature(f).parameters.values()
                if p.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
            ]
        )
    if arity < 1:
        raise ValueError(f"Cannot curry {f}, which takes no positional arguments.")

    def g(args: tuple) -> Any:
        if len(args) == arity:
            return f(*args)
        return lambda a: g((*args, a))

    return g(())
