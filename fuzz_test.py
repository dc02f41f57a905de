import re
import sys
from functools import reduce
from random import Random
from typing import Any, List, NamedTuple

from hypothesis import given, register_random, settings
from hypothesis import strategies as st

from flagrecord import (
    Arguments,
    InvalidArgumentError,
    Option,
    Result,
    Usage,
    curry,
    evaluate,
    evaluate_fields,
    option,
)

MAX_TOKENS = 6
MAX_OPTIONS = 4


class StOutput(NamedTuple):
    option: Option
    token: str
    value: Any
    repr: str


st_key = st.text(
    alphabet=st.characters(categories=("Ll", "Lu", "Nd"), include_characters="-_"),
    min_size=1,
)
st_usage = st.text()
st_int_token = st.text().filter(lambda s: not re.fullmatch(r"-?[0-9]+", s))


@st.composite
def st_int_option(draw) -> StOutput:
    key = draw(st_key)
    default = draw(st.integers())
    usage = draw(st_usage)
    value = draw(st.integers())
    return StOutput(
        option=option(key, default, usage),
        token=str(value),
        value=value,
        repr=f"option({repr(key)}, {default}, {repr(usage)})",
    )


@st.composite
def st_str_option(draw) -> StOutput:
    key = draw(st_key)
    default = draw(st.text())
    usage = draw(st_usage)
    value = draw(st.text())
    return StOutput(
        option=option(key, default, usage),
        token=value,
        value=value,
        repr=f"option({repr(key)}, {repr(default)}, {repr(usage)})",
    )


@st.composite
def st_nullable_option(draw) -> StOutput:
    key = draw(st_key)
    usage = draw(st_usage)
    value = draw(st.integers())
    return StOutput(
        option=option(key, usage, type=int),
        token=str(value),
        value=value,
        repr=f"option({repr(key)}, {repr(usage)}, type=int)",
    )


st_option = st_int_option() | st_str_option() | st_nullable_option()


@st.composite
def st_distinct_options(draw) -> List[Option]:
    outputs = draw(
        st.lists(
            st_option,
            min_size=1,
            max_size=MAX_OPTIONS,
            unique_by=lambda o: o.option.key,
        )
    )
    return [o.option for o in outputs]


@settings(deadline=2000)
@given(st_option, st.lists(st.text(), max_size=MAX_TOKENS))
def test_default_without_flag(option_with_input, tokens):
    o = option_with_input.option
    tokens = [t for t in tokens if t != o.flag]
    assert evaluate(o, Arguments(tokens)) == Result(o.default)


@settings(deadline=2000)
@given(st_option, st.lists(st.text(), max_size=MAX_TOKENS))
def test_flag_then_value(option_with_input, prefix):
    o, token, value, _ = option_with_input
    prefix = [t for t in prefix if t != o.flag]
    assert evaluate(o, Arguments([*prefix, o.flag, token])) == Result(value)


@settings(deadline=2000)
@given(st_int_option(), st.integers())
def test_first_match_wins(option_with_input, later):
    o, token, value, _ = option_with_input
    tokens = [o.flag, token, o.flag, str(later)]
    assert evaluate(o, Arguments(tokens)) == Result(value)


@settings(deadline=2000)
@given(st_int_option() | st_nullable_option(), st_int_token)
def test_invalid_integer(option_with_input, token):
    o = option_with_input.option
    result = evaluate(o, Arguments([o.flag, token]))
    assert isinstance(result.get, InvalidArgumentError)
    assert result.get.description == f"Invalid value for {o.flag}: {token}"


@settings(deadline=2000)
@given(st_option)
def test_missing_argument(option_with_input):
    o = option_with_input.option
    result = evaluate(o, Arguments([o.flag]))
    assert isinstance(result.get, InvalidArgumentError)
    assert result.get.description == f"Missing argument for {o.flag}"


@settings(deadline=2000)
@given(st.lists(st.text(), min_size=1, max_size=MAX_OPTIONS))
def test_combine_is_left_then_right(descriptions):
    results = [Result(InvalidArgumentError(d)) for d in descriptions]
    ignore = curry(lambda *_: None, len(results))
    combined = reduce(Result.apply, results[1:], ignore & results[0])
    assert combined.get.description == "\n".join(descriptions)


@settings(deadline=2000)
@given(st_distinct_options())
def test_usage_lists_every_option(options):
    result = evaluate_fields(Usage(), dict, {o.key: o for o in options})
    assert isinstance(result.get, InvalidArgumentError)
    assert result.get.description == "\n".join(f"{o.flag}\n\t{o.usage}" for o in options)


@settings(deadline=300)
@given(st_distinct_options(), st.lists(st.text(), max_size=MAX_TOKENS))
def test_random_tokens(options, tokens):
    result = evaluate_fields(Arguments(tokens), dict, {o.key: o for o in options})
    assert isinstance(result, Result)
    if result.is_success:
        assert list(result.get) == [o.key for o in options]


if __name__ == "__main__":
    register_random(Random(0))

    tests = {
        name: test
        for name, test in list(globals().items())
        if name.startswith("test_") and callable(test)
    }
    for name in sys.argv[1:] or tests:
        print(name)
        tests[name]()
