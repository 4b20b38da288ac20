"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)


@pytest.fixture
def calculator():
    """Provide a fresh Calculator instance."""
    from decicalc import Calculator

    return Calculator()


@pytest.fixture
def empty_state():
    """Provide the initial calculator state."""
    from decicalc import CalculatorState

    return CalculatorState()


@pytest.fixture
def press():
    """Press a sequence of buttons on a fresh calculator and return the final state."""
    from decicalc import Calculator

    def _press(*buttons: str):
        return Calculator().press_all(buttons)

    return _press


@pytest.fixture
def sample_numbers():
    """Provide a set of interesting decimal strings."""
    return [
        "0",
        "-0",
        "1",
        "-1",
        "0.5",
        "-0.5",
        "100",
        "-100",
        "1e21",
        "-1e21",
        "1e-7",
        "-1e-7",
        "0.1",
        "0.2",
        "123456789.987654321",
    ]
