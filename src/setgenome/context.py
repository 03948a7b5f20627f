"""
Genome Context Module

Classes:
    GenomeContext: The shared state of a run (parameters, identities, randomness)
"""

import logging

from setgenome.genotype.genome       import Genome
from setgenome.genotype.id_generator import IdGenerator
from setgenome.mutations             import MutationError
from setgenome.parameters            import Parameters
from setgenome.rng                   import GenomeRng

logger = logging.getLogger(__name__)

class GenomeContext:
    """
    Bundles the state every genome operation of a run must share: the
    Parameters, one IdGenerator and one GenomeRng.

    On creation a minimal genome is built (and an initialized version of it),
    and every genome handed out is a copy of these, so that all genomes of the
    run share the same input and output node identities.

    Public Attributes:
        parameters: The run's Parameters
        id_gen:     The run's IdGenerator
        rng:        The run's GenomeRng

    Public Methods:
        uninitialized_genome():       Copy of the minimal genome (no connections)
        initialized_genome():         Copy of the initialized genome
        mutate(genome):               Apply the configured mutation list
        cross_in(fitter, other):      Crossover rooted at the fitter genome
        compatibility_distance(a, b): Distance between two genomes
    """

    def __init__(self, parameters: Parameters | None = None):
        self.parameters = parameters if parameters is not None else Parameters()

        structure   = self.parameters.structure
        self.id_gen = IdGenerator()
        self.rng    = GenomeRng(structure.seed, structure.weight_std_dev, structure.weight_cap)

        self._uninitialized_genome = Genome(structure, self.id_gen)
        self._initialized_genome   = self._uninitialized_genome.copy()
        self._initialized_genome.init(structure, self.rng)

        logger.debug("Created genome context: %r", self.parameters.structure)

    @classmethod
    def basic(cls, number_of_inputs: int, number_of_outputs: int) -> 'GenomeContext':
        return cls(Parameters.basic(number_of_inputs, number_of_outputs))

    def uninitialized_genome(self) -> Genome:
        return self._uninitialized_genome.copy()

    def initialized_genome(self) -> Genome:
        return self._initialized_genome.copy()

    def mutate(self, genome: Genome) -> list[MutationError]:
        return genome.mutate_with(self.parameters.mutations, self.rng, self.id_gen)

    def cross_in(self, fitter: Genome, other: Genome) -> Genome:
        return fitter.cross_in(other, self.rng)

    def compatibility_distance(self,
                               genome_0          : Genome,
                               genome_1          : Genome,
                               factor_connections: float = 1.0,
                               factor_weights    : float = 1.0,
                               factor_activations: float = 1.0) -> tuple[float, float, float, float]:
        return Genome.compatibility_distance(genome_0, genome_1,
                                             factor_connections,
                                             factor_weights,
                                             factor_activations,
                                             self.parameters.structure.weight_cap)
