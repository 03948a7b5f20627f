"""
Integration tests: genomes evolved over many generations with the full
mutation set, crossover and compatibility distance, the way a
neuroevolution driver uses them.
"""

import pytest

from setgenome             import GenomeContext, Genome, Parameters, ResolutionConnectionGene, unroll
from setgenome.activations import Activation
from setgenome.mutations   import (AddConnection,
                                   AddNode,
                                   AddRecurrentConnection,
                                   ChangeActivation,
                                   ChangeWeightBits,
                                   ChangeWeights,
                                   DuplicateNode,
                                   RemoveConnection,
                                   RemoveNode,
                                   RemoveRecurrentConnection)


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def context():
    """Context with every mutation enabled at high rates."""
    parameters = Parameters.basic(3, 2)
    parameters.mutations = [ChangeWeights(chance=1.0, percent_perturbed=0.5),
                            ChangeActivation(chance=0.2, activation_pool=Activation.all()),
                            AddNode(chance=0.3, activation_pool=Activation.all()),
                            AddConnection(chance=0.5),
                            AddRecurrentConnection(chance=0.2),
                            DuplicateNode(chance=0.1),
                            RemoveNode(chance=0.1),
                            RemoveConnection(chance=0.2),
                            RemoveRecurrentConnection(chance=0.1)]
    return GenomeContext(parameters)

def check_invariants(genome: Genome, num_inputs: int, num_outputs: int, weight_cap: float):
    assert len(genome.inputs) == num_inputs
    assert len(genome.outputs) == num_outputs
    assert not genome.has_cycle()

    node_ids = [node.id for node in genome.nodes()]
    assert len(node_ids) == len(set(node_ids))

    for conn in genome.connections():
        assert genome.contains(conn.input)
        assert genome.contains(conn.output)
        assert -weight_cap <= conn.weight <= weight_cap
    for conn in genome.feed_forward:
        assert conn.output not in genome.inputs
        assert conn.input not in genome.outputs


# ============================================================================
# Test Evolution
# ============================================================================

class TestEvolutionRun:

    def test_population_keeps_invariants(self, context):
        population = [context.initialized_genome() for _ in range(10)]

        for _ in range(30):
            for genome in population:
                context.mutate(genome)

            offspring = [context.cross_in(population[i], population[(i + 1) % len(population)])
                         for i in range(len(population))]
            population = offspring

            for genome in population:
                check_invariants(genome, 3, 2, context.rng.weight_cap)

    def test_structure_grows(self, context):
        genome = context.initialized_genome()
        for _ in range(50):
            context.mutate(genome)
        assert len(genome.hidden) > 0
        assert len(genome) > 6

    def test_same_split_converges_across_genomes(self, context):
        genome_0 = context.initialized_genome()
        genome_1 = context.initialized_genome()
        AddNode(chance=1.0).mutate(genome_0, context.rng, context.id_gen)

        # force genome_1 to split the same connection
        split = next(conn for conn in genome_0.feed_forward if conn.weight == 0.0)
        genome_1.feed_forward.retain(lambda conn: conn.key() == split.key())
        AddNode(chance=1.0).mutate(genome_1, context.rng, context.id_gen)

        assert genome_0.hidden.keys() == genome_1.hidden.keys()
        total, _, _, activation_term = context.compatibility_distance(genome_0, genome_1, 0.0, 0.0, 1.0)
        assert total == activation_term

    def test_distance_grows_with_divergence(self, context):
        ancestor = context.initialized_genome()
        relative = ancestor.copy()
        stranger = ancestor.copy()
        context.mutate(relative)
        for _ in range(40):
            context.mutate(stranger)

        close = context.compatibility_distance(ancestor, relative, 1.0, 0.0, 0.0)[1]
        far   = context.compatibility_distance(ancestor, stranger, 1.0, 0.0, 0.0)[1]
        assert 0.0 <= close < far <= 1.0

    def test_evolved_genome_serializes_and_unrolls(self, context):
        genome = context.initialized_genome()
        for _ in range(40):
            context.mutate(genome)
        AddRecurrentConnection(chance=1.0).mutate(genome, context.rng, context.id_gen)

        assert Genome.from_dict(genome.to_dict()) == genome

        unrolled, synthetic = unroll(genome)
        sources = {conn.input for conn in genome.recurrent}
        assert set(synthetic) == sources
        assert len(unrolled.recurrent) == 0
        assert len(unrolled.feed_forward) == len(genome.feed_forward) + len(sources) + len(genome.recurrent)
        assert not unrolled.has_cycle()

    def test_bit_encoded_population_keeps_invariants(self):
        parameters = Parameters.basic(3, 2)
        parameters.structure.weight_resolution = 8
        parameters.mutations = [ChangeWeightBits(chance=1.0, mutation_rate=0.1, duplication_rate=0.1),
                                ChangeWeights(chance=0.5),
                                AddNode(chance=0.3),
                                AddConnection(chance=0.5),
                                AddRecurrentConnection(chance=0.2),
                                DuplicateNode(chance=0.1)]
        context    = GenomeContext(parameters)
        population = [context.initialized_genome() for _ in range(5)]

        for _ in range(20):
            for genome in population:
                context.mutate(genome)
            population = [context.cross_in(population[i], population[(i + 1) % len(population)])
                          for i in range(len(population))]

        for genome in population:
            check_invariants(genome, 3, 2, 1.0)
            assert all(isinstance(conn, ResolutionConnectionGene) for conn in genome.connections())
            assert Genome.from_dict(genome.to_dict()) == genome
