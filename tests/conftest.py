"""Shared fixtures for canfuzz tests."""

import itertools
import random

import pytest


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def ticking_clock():
    """Clock that advances one microsecond per call."""
    ticks = itertools.count(1_700_000_000_000_000_000, 1_000)
    return lambda: next(ticks)
