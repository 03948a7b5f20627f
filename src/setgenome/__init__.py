"""
SET Genome - A Python implementation of the Set Encoded Topology genome.

This package provides a genetic encoding for neural network topologies, to be
used as the representation and reproduction layer of a neuroevolution
algorithm. A genome is made up of sets of node and connection genes; it can be
created, mutated, recombined and compared. Evaluating networks, fitness and
selection are left to the caller.

Main components:
- genotype:    Genetic encoding (genes, gene sets, genomes, identity generation)
- mutations:   Structural and parametric mutation operators
- phenotype:   Transformations for network evaluators (unrolling)
- activations: Activation functions of the nodes
- parameters:  Configuration of a run
- context:     Shared state of a run

Example:
    >>> from setgenome import GenomeContext
    >>> context = GenomeContext.basic(3, 1)
    >>> genome  = context.initialized_genome()
    >>> errors  = context.mutate(genome)
"""

from setgenome.activations import Activation
from setgenome.context     import GenomeContext
from setgenome.genotype    import (CompatibilityDistance,
                                   ConnectionGene,
                                   Gene,
                                   GeneSet,
                                   Genome,
                                   GenomeInvariantError,
                                   IdGenerator,
                                   NodeGene,
                                   ResolutionConnectionGene)
from setgenome.mutations   import Mutation, MutationError
from setgenome.parameters  import Parameters, Structure
from setgenome.phenotype   import unroll
from setgenome.rng         import GenomeRng

__version__ = "0.1.0"

__all__ = ['Activation',
           'CompatibilityDistance',
           'ConnectionGene',
           'Gene',
           'GeneSet',
           'Genome',
           'GenomeContext',
           'GenomeInvariantError',
           'GenomeRng',
           'IdGenerator',
           'Mutation',
           'MutationError',
           'NodeGene',
           'Parameters',
           'ResolutionConnectionGene',
           'Structure',
           'unroll']
