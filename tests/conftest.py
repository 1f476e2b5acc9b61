"""
Pytest configuration and fixtures for BenfordProof tests.
"""

import pytest
import random
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture
def seeded_rng():
    """Deterministic random generator."""
    return random.Random(1234)


@pytest.fixture
def uniform_digits():
    """One value per leading digit, 1 through 9."""
    return [1, 2, 3, 4, 5, 6, 7, 8, 9]


@pytest.fixture
def decimal_values():
    """Decimal values whose integer part carries the leading digit."""
    return [1.5, 2.7, 3.9, 4.1, 5.2]


@pytest.fixture
def sub_one_values():
    """Values below 1 whose first nonzero digit is after the point."""
    return [0.5, 0.7, 0.9]


@pytest.fixture
def large_values():
    """Six-digit integer values."""
    return [123456, 234567, 345678]


@pytest.fixture
def benford_sample(seeded_rng):
    """Large log-uniform sample that conforms to Benford's Law."""
    from benfordproof.sim import generate_benford_numbers
    return generate_benford_numbers(50000, seeded_rng)
