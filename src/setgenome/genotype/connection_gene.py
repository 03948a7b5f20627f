"""
Connection Gene Module

This module implements the connection genes.

Classes:
    ConnectionGene:           Gene encoding a weighted connection between nodes
    ResolutionConnectionGene: Connection whose weight is encoded in a bit vector of limited resolution
"""

from dataclasses import dataclass, field, replace
from typing      import TYPE_CHECKING

import numpy as np

from setgenome.genotype.gene import Gene
if TYPE_CHECKING:
    from setgenome.rng import GenomeRng

@dataclass(frozen=True, eq=False)
class ConnectionGene(Gene):
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the network graph,
    from the node with ID 'input' to the node with ID 'output'. The identity
    of a connection is the (input, output) pair: the weight is NOT part of it,
    so changing the weight of a connection held in a GeneSet requires
    'GeneSet.replace()' with the updated gene.

    Public Attributes:
        input:  ID of the source node
        output: ID of the destination node
        weight: Weight of the connection

    Public Properties:
        start: Alias of 'input'
        end:   Alias of 'output'
    """
    input : int
    output: int
    weight: float = 0.0

    def key(self) -> tuple[int, int]:
        return (self.input, self.output)

    @property
    def start(self) -> int:
        return self.input

    @property
    def end(self) -> int:
        return self.output

    def with_weight(self, weight: float) -> 'ConnectionGene':
        return replace(self, weight=weight)

    def with_endpoints(self, input: int, output: int) -> 'ConnectionGene':
        return replace(self, input=input, output=output)

    def __repr__(self):
        return f"ConnectionGene(input={self.input}, output={self.output}, weight={self.weight:+.6f})"

    def __str__(self):
        return f"[{self.input:02d}=>{self.output:02d},{self.weight:+.02f}]"

@dataclass(frozen=True, eq=False, repr=False)
class ResolutionConnectionGene(ConnectionGene):
    """
    A connection gene whose weight has a limited, evolvable resolution.

    The weight is encoded in a vector of n bits and decoded as
        weight = (number of set bits - n/2) / (n/2)
    so it always lies in [-1, 1] and can only take n+1 distinct values.
    Mutation flips individual bits (changing the weight) or grows/shrinks
    the vector (changing the resolution).

    Construct instances with 'from_weight()'; the 'weight' field is kept
    consistent with the bits.

    Public Attributes:
        bits: The boolean weight encoding (read-only numpy array)
    """
    bits: np.ndarray = field(default_factory=lambda: np.zeros(1, dtype=bool))

    def __post_init__(self):
        bits = np.array(self.bits, dtype=bool)
        if bits.ndim != 1 or bits.size == 0:
            raise ValueError("the weight of a connection needs at least one bit")
        bits.setflags(write=False)
        object.__setattr__(self, 'bits', bits)
        object.__setattr__(self, 'weight', self._decode(bits))

    @staticmethod
    def _decode(bits: np.ndarray) -> float:
        bits_mean = bits.size / 2.0
        return float((np.count_nonzero(bits) - bits_mean) / bits_mean)

    @classmethod
    def from_weight(cls,
                    input     : int,
                    output    : int,
                    weight    : float,
                    rng       : 'GenomeRng',
                    resolution: int = 1) -> 'ResolutionConnectionGene':
        """
        Encode 'weight' (clipped to [-1, 1]) with 'resolution' bits, setting a
        randomly chosen subset of bits of the appropriate size.
        """
        if resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {resolution}")

        positions = list(range(resolution))
        rng.shuffle(positions)
        return cls(input, output, bits=cls._encode(weight, positions))

    @staticmethod
    def _encode(weight: float, positions: list[int]) -> np.ndarray:
        # set as many of the given bit positions (in order) as 'weight' requires
        weight    = min(1.0, max(-1.0, weight))
        bits_mean = len(positions) / 2.0
        num_ones  = int(round(weight * bits_mean + bits_mean))

        bits = np.zeros(len(positions), dtype=bool)
        bits[positions[:num_ones]] = True
        return bits

    @property
    def resolution(self) -> int:
        return int(self.bits.size)

    def with_weight(self, weight: float) -> 'ResolutionConnectionGene':
        """
        Re-encode 'weight' at the current resolution (rounded to the nearest representable value).
        Bits already set are kept set preferentially, so small changes flip few bits.
        """
        set_first = sorted(range(self.resolution), key=lambda i: not self.bits[i])
        return ResolutionConnectionGene(self.input, self.output, bits=self._encode(weight, set_first))

    def with_endpoints(self, input: int, output: int) -> 'ResolutionConnectionGene':
        return ResolutionConnectionGene(input, output, bits=self.bits)

    def mutate_weight(self, mutation_rate: float, rng: 'GenomeRng') -> 'ResolutionConnectionGene':
        """Flip every bit independently with probability 'mutation_rate'."""
        flips = np.array([rng.gamble(mutation_rate) for _ in range(self.resolution)], dtype=bool)
        return ResolutionConnectionGene(self.input, self.output, bits=self.bits ^ flips)

    def mutate_resolution(self, duplication_rate: float, rng: 'GenomeRng') -> 'ResolutionConnectionGene':
        """
        With probability 'duplication_rate' duplicate the last bit, then, again with
        probability 'duplication_rate', drop the last bit (never going below one bit).
        """
        bits = self.bits
        if rng.gamble(duplication_rate):
            bits = np.append(bits, bits[-1])
        if rng.gamble(duplication_rate) and bits.size > 1:
            bits = bits[:-1]
        return ResolutionConnectionGene(self.input, self.output, bits=bits)

    def __repr__(self):
        return (f"ResolutionConnectionGene(input={self.input}, output={self.output}, "
                f"weight={self.weight:+.6f}, resolution={self.resolution})")
