"""
Genome RNG Module

This module implements the GenomeRng class, the single source of randomness
used when creating, mutating and crossing genomes.

Classes:
    GenomeRng: Seeded uniform, integer and Gaussian sampler
"""

import math
from typing import Sequence, TypeVar

import numpy as np

T = TypeVar('T')

def _check_standard_deviation(standard_deviation: float) -> None:
    # NaN would keep the weight perturbation from ever settling inside the cap
    if not math.isfinite(standard_deviation) or standard_deviation < 0:
        raise ValueError(f"standard deviation must be finite and non-negative, got {standard_deviation}")

class GenomeRng:
    """
    Random number source for genome operations.

    Wraps a seeded numpy Generator so that a run is reproducible from its seed.
    Besides plain uniform and integer sampling it knows the Gaussian distribution
    used for connection weights and the symmetric interval [-weight_cap, weight_cap]
    every weight must stay in.

    Public Attributes:
        weight_std_dev: Standard deviation of the weight perturbation distribution
        weight_cap:     Weights are constrained to [-weight_cap, weight_cap]

    Public Methods:
        f64():                 Uniform float in [0, 1)
        gamble(chance):        True with probability 'chance'
        integer(n):            Uniform integer in [0, n)
        choice(items):         Uniform pick from a sequence (None if empty)
        shuffle(items):        Shuffle a list in place
        gaussian(std_dev):     Zero-centered Gaussian sample
        weight_perturbation(): Perturb a weight and keep it within the cap
    """

    def __init__(self, seed: int | None = 42, weight_std_dev: float = 0.1, weight_cap: float = 1.0):
        """
        Parameters:
            seed:           Seed of the underlying generator (None draws fresh entropy)
            weight_std_dev: Standard deviation of weight perturbations
            weight_cap:     Symmetric bound of connection weights
        """
        _check_standard_deviation(weight_std_dev)
        if not math.isfinite(weight_cap) or weight_cap <= 0:
            raise ValueError(f"weight_cap must be finite and positive, got {weight_cap}")

        self.seed          : int | None          = seed
        self.weight_std_dev: float               = weight_std_dev
        self.weight_cap    : float               = weight_cap
        self._generator    : np.random.Generator = np.random.default_rng(seed)

    def f64(self) -> float:
        return float(self._generator.random())

    def gamble(self, chance: float) -> bool:
        return self.f64() < chance

    def integer(self, n: int) -> int:
        return int(self._generator.integers(n))

    def choice(self, items: Sequence[T]) -> T | None:
        if not items:
            return None
        return items[self.integer(len(items))]

    def shuffle(self, items: list) -> None:
        # Fisher-Yates, so that arbitrary objects are shuffled without numpy conversion
        for i in range(len(items) - 1, 0, -1):
            j = self.integer(i + 1)
            items[i], items[j] = items[j], items[i]

    def gaussian(self, std_dev: float) -> float:
        return float(self._generator.normal(0.0, std_dev))

    def weight_perturbation(self, weight: float = 0.0, standard_deviation: float | None = None) -> float:
        """
        Add a Gaussian delta to 'weight' and keep the result within [-weight_cap, weight_cap].

        Whenever the perturbed weight would leave the interval, the delta is negated
        and halved, repeatedly, until the result falls back inside. The reflected delta
        shrinks geometrically so the loop always terminates.

        Parameters:
            weight:             The weight to perturb (0.0 samples a fresh weight)
            standard_deviation: Overrides 'weight_std_dev' when given

        Returns:
            the perturbed weight

        Raises:
            ValueError: if the standard deviation is negative or not finite
        """
        if standard_deviation is None:
            standard_deviation = self.weight_std_dev
        _check_standard_deviation(standard_deviation)

        cap    = self.weight_cap
        weight = min(cap, max(-cap, weight))
        delta  = self.gaussian(standard_deviation)

        while not -cap <= weight + delta <= cap:
            delta = -delta / 2.0

        return weight + delta

    def __repr__(self):
        return (f"GenomeRng(seed={self.seed}, weight_std_dev={self.weight_std_dev}, "
                f"weight_cap={self.weight_cap})")
