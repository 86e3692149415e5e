"""
Probabilistic hardware failure.

After each brew the machine draws one sample from a Gaussian source. A sample
whose magnitude exceeds the threshold puts the machine out of order. The
source is injected so tests can substitute a deterministic stub.
"""
from __future__ import annotations

import random
from typing import Optional, Protocol

# Policy choice: a sample of 0.6 must not fault, a sample of 1.0 must.
DEFAULT_FAILURE_THRESHOLD = 0.7


class GaussianSource(Protocol):
    """Anything able to draw a normally distributed value, e.g. ``random.Random``."""

    def gauss(self, mu: float, sigma: float) -> float: ...


class FailureModel:
    """Decides whether a Gaussian sample signals a hardware fault."""

    def __init__(self, threshold: float = DEFAULT_FAILURE_THRESHOLD) -> None:
        if threshold <= 0:
            raise ValueError(f"threshold must be positive, got {threshold}")
        self.threshold = threshold

    def sample(self, source: GaussianSource) -> float:
        return float(source.gauss(0.0, 1.0))

    def is_failure(self, value: float) -> bool:
        return abs(value) > self.threshold

    def roll(self, source: GaussianSource) -> tuple[bool, float]:
        """Draw one sample and return ``(failed, sample)``."""
        value = self.sample(source)
        return self.is_failure(value), value


def default_random_generator(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)
