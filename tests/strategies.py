"""Hypothesis strategies for property-based testing of klaw-optional containers."""

from hypothesis import strategies as st
from klaw_optional import Failure, Left, Nothing, Right, Some, Success

# -----------------------------------------------------------------------------
# Basic value strategies
# -----------------------------------------------------------------------------

integers = st.integers()
texts = st.text(min_size=0, max_size=100)
booleans = st.booleans()

# Payloads, including None (a legal present value)
values = st.one_of(st.none(), integers, texts, booleans)

# Exception strategies
exceptions = st.sampled_from([
    ValueError('test'),
    TypeError('test'),
    RuntimeError('test'),
])

# -----------------------------------------------------------------------------
# Container strategies
# -----------------------------------------------------------------------------

somes = values.map(Some)
maybes = st.one_of(somes, st.just(Nothing))

lefts = values.map(Left)
rights = values.map(Right)
eithers = st.one_of(lefts, rights)

successes = values.map(Success)
failures = exceptions.map(Failure)
tries = st.one_of(successes, failures)

# Mixed sequences for values_of
containers = st.lists(st.one_of(maybes, eithers, tries), max_size=20)

# Lists of possibly-None integers for the not_null queries
nullable_ints = st.lists(st.one_of(st.none(), integers), max_size=30)
