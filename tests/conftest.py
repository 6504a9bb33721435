"""Pytest configuration for path tracer tests.

Provides random generators for the code under test: a seeded
``random.Random`` for statistical checks and a scripted generator that
replays fixed draws so individual scatter decisions can be forced.
"""

import random

import pytest


class ScriptedRandom:
    """Stand-in generator replaying a fixed sequence of draws.

    ``random()`` and ``uniform()`` both return the next scripted value as-is,
    so tests can pick exact sample points and branch decisions.
    """

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def _next(self):
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value

    def random(self):
        return self._next()

    def uniform(self, low, high):
        return self._next()


@pytest.fixture
def rng():
    """Seeded generator so statistical tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def scripted():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom
