"""Shared pytest fixtures and markers for all tests."""

import pytest

from dilemma.models.moves import COOPERATE, DEFECT
from dilemma.strategies.base import strategy


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# =============================================================================
# Misbehaving strategies
# =============================================================================


@pytest.fixture
def broken_factory():
    """Provide a factory that cannot even build its strategy."""

    @strategy("Broken")
    def broken():
        raise RuntimeError("out of coffee")

    return broken


@pytest.fixture
def illegal_at():
    """Provide a builder: cooperate k rounds, then yield `value` forever."""

    def build(k: int, value=None):
        @strategy(f"Illegal at {k}")
        def factory():
            for _ in range(k):
                yield COOPERATE
            while True:
                yield value

        return factory

    return build


@pytest.fixture
def quits_after():
    """Provide a builder: cooperate k rounds, then return without a move."""

    def build(k: int):
        @strategy(f"Quits after {k}")
        def factory():
            for _ in range(k):
                yield COOPERATE

        return factory

    return build


@pytest.fixture
def recorder():
    """Provide a builder for a defector that logs every move it is resumed with."""

    def build(log: list):
        @strategy("Recorder")
        def factory():
            while True:
                log.append((yield DEFECT))

        return factory

    return build
