"""Property-based tests for ConfigResolver.

Tests the resolution invariants using Hypothesis:
- A store that lacks every candidate key always yields the default.
- An exact key always beats a case-insensitive one.
- Typed accessors always return their declared type.
- Resolution is repeatable and never raises.
"""

import math

from hypothesis import given, settings, strategies as st

from procenv.resolver import ConfigResolver


# Env-style keys; uppercase letters only so that case variants are easy to build.
key_strategy = st.text(
    alphabet=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZ_"),
    min_size=1,
    max_size=12,
)

value_strategy = st.text(min_size=0, max_size=20)

store_strategy = st.dictionaries(key_strategy, value_strategy, max_size=10)

default_strategy = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.text(max_size=10),
)


@given(store=store_strategy, keys=st.lists(key_strategy, max_size=5), default=default_strategy)
@settings(max_examples=200)
def test_missing_keys_yield_default(store, keys, default):
    wanted = {c.lower() for c in keys}
    store = {k: v for k, v in store.items() if k.lower() not in wanted}
    assert ConfigResolver(store).resolve_raw(default, *keys) == default


@given(key=key_strategy, exact=st.text(min_size=1), other=st.text(min_size=1))
def test_exact_beats_case_insensitive(key, exact, other):
    store = {key.lower(): other, key: exact}
    assert ConfigResolver(store).resolve_raw(None, key) == exact


@given(key=key_strategy, value=st.text(min_size=1, max_size=20))
def test_case_insensitive_match_found(key, value):
    store = {key.lower(): value}
    assert ConfigResolver(store).resolve_raw(None, key) == value


@given(keys=st.lists(key_strategy, min_size=2, max_size=5, unique=True), data=st.data())
def test_first_listed_candidate_wins(keys, data):
    values = data.draw(st.lists(st.text(min_size=1), min_size=len(keys), max_size=len(keys)))
    store = dict(zip(reversed(keys), reversed(values)))
    assert ConfigResolver(store).resolve_raw(None, *keys) == values[0]


@given(store=store_strategy, keys=st.lists(key_strategy, max_size=4), default=st.booleans())
def test_boolean_accessor_returns_bool(store, keys, default):
    assert isinstance(ConfigResolver(store).resolve_as_boolean(default, *keys), bool)


@given(store=store_strategy, keys=st.lists(key_strategy, max_size=4), default=st.text())
def test_string_accessor_returns_str(store, keys, default):
    assert isinstance(ConfigResolver(store).resolve_as_string(default, *keys), str)


@given(
    store=store_strategy,
    keys=st.lists(key_strategy, max_size=4),
    default=st.one_of(st.none(), st.integers(), st.floats(allow_nan=True)),
)
def test_number_accessor_returns_number(store, keys, default):
    result = ConfigResolver(store).resolve_as_number(default, *keys)
    assert isinstance(result, (int, float)) and not isinstance(result, bool)


@given(key=key_strategy, n=st.integers(min_value=-(10**12), max_value=10**12))
def test_number_accessor_parses_integers(key, n):
    assert ConfigResolver({key: str(n)}).resolve_as_number(0, key) == n


@given(store=store_strategy, keys=st.lists(key_strategy, max_size=4), default=default_strategy)
def test_resolution_is_repeatable(store, keys, default):
    resolver = ConfigResolver(store)
    first = resolver.resolve_as_number(default, *keys)
    second = resolver.resolve_as_number(default, *keys)
    if isinstance(first, float) and math.isnan(first):
        assert math.isnan(second)
    else:
        assert first == second
    assert resolver.resolve_raw(default, *keys) == resolver.resolve_raw(default, *keys)
