"""
Declarative command-line options: describe each flag once and evaluate the
same declaration either to parse arguments or to describe its usage.

>>> from dataclasses import dataclass
>>> from flagrecord import Arguments, Options, field
>>> @dataclass
... class BuildOptions(Options):
...     configuration: str = field(default="Release", usage="The build configuration")
...     jobs: int = field(default=1, usage="How many jobs to run at once")
>>> BuildOptions.evaluate(Arguments(["--jobs", "4"]))
Result(BuildOptions(configuration='Release', jobs=4))
>>> print(BuildOptions.evaluate(Arguments(["--jobs", "many", "--configuration"])).get)
Missing argument for --configuration
Invalid value for --jobs: many
"""
from flagrecord.arguments import ArgumentType, convert, register
from flagrecord.errors import (
    ArgumentError,
    ErrorKind,
    ExceptionError,
    InvalidArgumentError,
    InvalidValueError,
    MissingArgumentError,
    UsageError,
    combine_usage_errors,
)
from flagrecord.evaluator import evaluate, evaluate_option
from flagrecord.modes import Arguments, Mode, Usage
from flagrecord.options import Option, option
from flagrecord.record import Options, OptionsType, evaluate_fields, field, report
from flagrecord.result import Result, curry

__all__ = [
    "ArgumentType",
    "convert",
    "register",
    "ArgumentError",
    "ErrorKind",
    "ExceptionError",
    "InvalidArgumentError",
    "InvalidValueError",
    "MissingArgumentError",
    "UsageError",
    "combine_usage_errors",
    "evaluate",
    "evaluate_option",
    "Arguments",
    "Mode",
    "Usage",
    "Option",
    "option",
    "Options",
    "OptionsType",
    "evaluate_fields",
    "field",
    "report",
    "Result",
    "curry",
]
