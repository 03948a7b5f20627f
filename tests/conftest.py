"""Pytest configuration and shared fixtures."""

import pytest

from setgenome.activations import Activation
from setgenome.genotype    import ConnectionGene, Genome, IdGenerator, NodeGene
from setgenome.parameters  import Structure
from setgenome.rng         import GenomeRng


@pytest.fixture
def rng():
    """Seeded random number source with the default weight distribution."""
    return GenomeRng(seed=42)


@pytest.fixture
def id_gen():
    """Fresh identity generator."""
    return IdGenerator()


@pytest.fixture
def structure():
    """Two inputs, one tanh output, all inputs connected."""
    return Structure(number_of_inputs=2, number_of_outputs=1)


@pytest.fixture
def initialized_genome(structure, id_gen, rng):
    """Genome with inputs 0 and 1 both connected to output 2."""
    genome = Genome(structure, id_gen)
    genome.init(structure, rng)
    return genome


@pytest.fixture
def bit_genome(id_gen, rng):
    """Like 'initialized_genome', with weights encoded in 8 bits."""
    structure = Structure(number_of_inputs=2, number_of_outputs=1, weight_resolution=8)
    genome    = Genome(structure, id_gen)
    genome.init(structure, rng)
    return genome


@pytest.fixture
def hidden_genome():
    """
    Genome with one hidden node between input 0 and output 1:

        0 -> 2 -> 1  and  0 -> 1
    """
    return Genome.from_genes(
        inputs       = [NodeGene(0)],
        outputs      = [NodeGene(1, Activation.LINEAR)],
        hidden       = [NodeGene(2, Activation.LINEAR)],
        feed_forward = [ConnectionGene(0, 1, 0.0),
                        ConnectionGene(0, 2, 1.0),
                        ConnectionGene(2, 1, 0.5)])
