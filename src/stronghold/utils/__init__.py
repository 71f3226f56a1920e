"""Utility functions for the Stronghold simulation."""

from stronghold.utils.rng import KingdomRandom, generate_seed

__all__ = [
    "KingdomRandom",
    "generate_seed",
]
