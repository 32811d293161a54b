"""
Random number generation utilities.

Simulation code receives an explicit AleaPRNG. This module only provides
the fallback stream used when a caller does not pass one, so that ad-hoc
calls from the shell or the API still behave reproducibly per seed.
"""

from typing import Optional

from ..core.alea_prng import AleaPRNG

# Global fallback PRNG instance
_prng = None


def set_random_seed(seed: str) -> None:
    """
    Reset the fallback Alea stream.

    Args:
        seed: Seed string to use
    """
    global _prng
    _prng = AleaPRNG(seed)


def get_prng() -> AleaPRNG:
    """
    Get the current fallback Alea PRNG instance.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        _prng = AleaPRNG("default")
    return _prng


def resolve_prng(prng: Optional[AleaPRNG]) -> AleaPRNG:
    """Return ``prng`` when given, else the fallback stream."""
    return prng if prng is not None else get_prng()
