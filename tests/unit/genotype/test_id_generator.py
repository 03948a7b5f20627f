"""
Unit tests for IdGenerator class.
"""

from itertools import islice

from setgenome.genotype import IdGenerator


class TestNextId:

    def test_starts_at_zero_and_increases(self, id_gen):
        assert [id_gen.next_id() for _ in range(3)] == [0, 1, 2]

    def test_instances_are_independent(self):
        id_gen_0 = IdGenerator()
        id_gen_1 = IdGenerator()
        id_gen_0.next_id()
        assert id_gen_1.next_id() == 0


class TestCachedIds:

    def test_same_context_yields_same_ids(self, id_gen):
        first  = list(islice(id_gen.cached_ids((0, 1)), 3))
        second = list(islice(id_gen.cached_ids((0, 1)), 3))
        assert first == second

    def test_iterating_further_extends_the_cache(self, id_gen):
        first  = list(islice(id_gen.cached_ids((0, 1)), 2))
        longer = list(islice(id_gen.cached_ids((0, 1)), 4))
        assert longer[:2] == first
        assert len(set(longer)) == 4

    def test_different_contexts_yield_different_ids(self, id_gen):
        id_0 = next(id_gen.cached_ids((0, 1)))
        id_1 = next(id_gen.cached_ids((1, 0)))
        assert id_0 != id_1

    def test_cached_ids_are_drawn_from_the_counter(self, id_gen):
        id_gen.next_id()
        id_gen.next_id()
        assert next(id_gen.cached_ids((0, 1))) == 2
        assert id_gen.next_id() == 3

    def test_len_counts_contexts(self, id_gen):
        assert len(id_gen) == 0
        id_gen.cached_ids((0, 1))
        next(id_gen.cached_ids((0, 2)))
        next(id_gen.cached_ids((0, 2)))
        assert len(id_gen) == 2

    def test_repeated_requests_do_not_mint_new_ids(self, id_gen):
        for _ in range(5):
            next(id_gen.cached_ids((3, 4)))
        assert id_gen.next_id() == 1
