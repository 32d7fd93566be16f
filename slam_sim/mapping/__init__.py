"""Belief mapping from range returns."""

from .belief_grid import BeliefGrid

__all__ = ["BeliefGrid"]
