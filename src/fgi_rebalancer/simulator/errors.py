"""Errors raised when simulation input is rejected."""

from __future__ import annotations


class SimulationInputError(ValueError):
    pass


class InvalidInputError(SimulationInputError):
    """Raised for a missing or empty sample sequence."""


class NonPositivePriceError(SimulationInputError):
    """Raised when a sample carries a price that is not strictly positive."""
