"""
Shared fixtures and test doubles
"""

from typing import Iterable, List

import pytest


class SequenceRandom:
    """Deterministic RandomSource cycling through fractions in [0, 1]"""

    def __init__(self, fractions: Iterable[float]) -> None:
        self.fractions: List[float] = list(fractions)
        self.calls = 0

    def uniform(self, low: float, high: float) -> float:
        fraction = self.fractions[self.calls % len(self.fractions)]
        self.calls += 1
        return low + (high - low) * fraction


@pytest.fixture
def sequence_random() -> SequenceRandom:
    """Random source whose first draw maps to +1 and second to 0"""
    return SequenceRandom([1.0, 0.5])
