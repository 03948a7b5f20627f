"""
Unit tests for the Gene base class and the GeneSet container.

Tests cover identity semantics, insertion and replacement, randomized
traversal, the matching/unique algebra and crossover.
"""

import copy

import pytest

from setgenome.activations     import Activation
from setgenome.genotype        import ConnectionGene, GeneSet, GenomeInvariantError, NodeGene
from setgenome.rng             import GenomeRng


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def node_set():
    return GeneSet(NodeGene(i) for i in range(5))

@pytest.fixture
def conn_set_0():
    return GeneSet([ConnectionGene(0, 1, 0.1),
                    ConnectionGene(0, 2, 0.2),
                    ConnectionGene(1, 2, 0.3)])

@pytest.fixture
def conn_set_1():
    return GeneSet([ConnectionGene(0, 1, -0.1),
                    ConnectionGene(1, 2, -0.3),
                    ConnectionGene(2, 3, -0.4)])


# ============================================================================
# Test Gene Identity
# ============================================================================

class TestGeneIdentity:

    def test_connection_identity_ignores_weight(self):
        assert ConnectionGene(0, 1, 0.5) == ConnectionGene(0, 1, -0.5)
        assert hash(ConnectionGene(0, 1, 0.5)) == hash(ConnectionGene(0, 1, -0.5))

    def test_connection_identity_is_directed(self):
        assert ConnectionGene(0, 1) != ConnectionGene(1, 0)

    def test_node_identity_ignores_activation(self):
        assert NodeGene(3, Activation.TANH) == NodeGene(3, Activation.RELU)

    def test_ordering_by_key(self):
        assert NodeGene(1) < NodeGene(2)
        assert sorted([ConnectionGene(1, 0), ConnectionGene(0, 2), ConnectionGene(0, 1)]) == \
               [ConnectionGene(0, 1), ConnectionGene(0, 2), ConnectionGene(1, 0)]


# ============================================================================
# Test Insertion and Removal
# ============================================================================

class TestGeneSetModification:

    def test_insert_rejects_equal_gene(self, node_set):
        assert not node_set.insert(NodeGene(0, Activation.RELU))
        assert node_set.get(0).activation is Activation.LINEAR
        assert len(node_set) == 5

    def test_insert_new_gene(self, node_set):
        assert node_set.insert(NodeGene(9))
        assert 9 in node_set

    def test_add_new_duplicate_raises(self, node_set):
        with pytest.raises(GenomeInvariantError):
            node_set.add_new(NodeGene(0))

    def test_constructor_rejects_duplicates(self):
        with pytest.raises(GenomeInvariantError):
            GeneSet([NodeGene(1), NodeGene(1)])

    def test_replace_updates_non_identity_attributes(self, conn_set_0):
        previous = conn_set_0.replace(ConnectionGene(0, 1, 0.9))
        assert previous.weight == 0.1
        assert conn_set_0.get((0, 1)).weight == 0.9
        assert len(conn_set_0) == 3

    def test_replace_missing_gene_inserts(self, conn_set_0):
        assert conn_set_0.replace(ConnectionGene(5, 6)) is None
        assert (5, 6) in conn_set_0

    def test_remove_by_gene_or_key(self, conn_set_0):
        removed = conn_set_0.remove(ConnectionGene(0, 1))
        assert removed.weight == 0.1
        conn_set_0.remove((0, 2))
        assert conn_set_0.keys() == [(1, 2)]

    def test_remove_missing_raises(self, conn_set_0):
        with pytest.raises(KeyError):
            conn_set_0.remove((7, 8))

    def test_discard_missing_is_silent(self, conn_set_0):
        conn_set_0.discard((7, 8))
        assert len(conn_set_0) == 3

    def test_retain(self, node_set):
        node_set.retain(lambda node: node.id % 2 == 0)
        assert sorted(node_set.keys()) == [0, 2, 4]

    def test_membership_by_gene_and_key(self, conn_set_0):
        assert ConnectionGene(0, 1, 123.0) in conn_set_0
        assert (0, 1) in conn_set_0
        assert (1, 0) not in conn_set_0

    def test_iteration_tolerates_modification(self, node_set):
        for node in node_set:
            node_set.remove(node)
        assert not node_set

    def test_copy_is_independent(self, node_set):
        duplicate = copy.deepcopy(node_set)
        duplicate.remove(0)
        assert 0 in node_set
        assert len(duplicate) == 4


# ============================================================================
# Test Randomized Traversal
# ============================================================================

class TestGeneSetRandomTraversal:

    def test_random_of_empty_is_none(self, rng):
        assert GeneSet().random(rng) is None

    def test_random_returns_member(self, node_set, rng):
        assert node_set.random(rng) in node_set

    def test_iterate_with_random_offset_emits_each_once(self, node_set, rng):
        genes = list(node_set.iterate_with_random_offset(rng))
        assert sorted(genes) == node_set.as_sorted_list()

    def test_iterate_with_random_offset_is_rotation(self, node_set):
        order = [gene.id for gene in node_set]
        genes = [gene.id for gene in node_set.iterate_with_random_offset(GenomeRng(seed=1))]
        offset = order.index(genes[0])
        assert genes == order[offset:] + order[:offset]

    def test_iterate_with_random_offset_of_empty(self, rng):
        assert list(GeneSet().iterate_with_random_offset(rng)) == []

    def test_iterate_with_random_offset_covers_all_starts(self, node_set):
        rng = GenomeRng(seed=5)
        starts = {next(node_set.iterate_with_random_offset(rng)).id for _ in range(200)}
        assert starts == {0, 1, 2, 3, 4}

    def test_drain_into_random_empties_set(self, node_set, rng):
        genes = node_set.drain_into_random(rng)
        assert len(genes) == 5
        assert sorted(gene.id for gene in genes) == [0, 1, 2, 3, 4]
        assert len(node_set) == 0


# ============================================================================
# Test Set Algebra
# ============================================================================

class TestGeneSetAlgebra:

    def test_matching_pairs_self_copy_first(self, conn_set_0, conn_set_1):
        pairs = sorted(conn_set_0.matching(conn_set_1))
        assert [(a.key(), a.weight, b.weight) for a, b in pairs] == [((0, 1), 0.1, -0.1),
                                                                     ((1, 2), 0.3, -0.3)]

    def test_unique_is_symmetric_difference(self, conn_set_0, conn_set_1):
        unique = sorted(gene.key() for gene in conn_set_0.unique(conn_set_1))
        assert unique == [(0, 2), (2, 3)]

    def test_unique_with_itself_is_empty(self, conn_set_0):
        assert list(conn_set_0.unique(conn_set_0)) == []

    def test_cross_in_keeps_own_uniques_only(self, conn_set_0, conn_set_1, rng):
        offspring = conn_set_0.cross_in(conn_set_1, rng)
        assert sorted(offspring.keys()) == [(0, 1), (0, 2), (1, 2)]
        assert offspring.get((0, 2)).weight == 0.2

    def test_cross_in_matching_genes_come_from_either_parent(self, conn_set_0, conn_set_1):
        rng = GenomeRng(seed=11)
        weights = set()
        for _ in range(50):
            weights.add(conn_set_0.cross_in(conn_set_1, rng).get((0, 1)).weight)
        assert weights == {0.1, -0.1}

    def test_cross_in_with_itself_is_identical(self, conn_set_0, rng):
        offspring = conn_set_0.cross_in(conn_set_0, rng)
        assert offspring == conn_set_0
        assert [g.weight for g in offspring.as_sorted_list()] == [g.weight for g in conn_set_0.as_sorted_list()]

    def test_equality_by_keys(self, conn_set_0):
        other = GeneSet([ConnectionGene(1, 2), ConnectionGene(0, 2), ConnectionGene(0, 1)])
        assert other == conn_set_0
