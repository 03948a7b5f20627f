"""
Identity Generator Module

This module implements the IdGenerator class, which issues node identities
and caches them per structural context.

Classes:
    IdGenerator: Generator and cache for node identities
"""

from itertools import count
from typing    import Iterator

class IdGenerator:
    """
    Acts as a generator and cache for node identities.

    Identities are drawn from an unbounded, monotonically increasing counter.
    In addition, identities can be requested for a structural context, i.e. an
    ordered pair of identities (typically the endpoints of the connection being
    split). The n-th identity requested for a context is always the same, so two
    genomes which independently perform the same structural mutation end up with
    the same new node identity. This plays the role of NEAT's historical markings
    without needing a global innovation ledger.

    For any evolution run exactly one IdGenerator must be used and passed around
    wherever one is required. The cache only ever grows.
    """

    def __init__(self):
        self._id_gen  : Iterator[int]                    = count(0)
        self._id_cache: dict[tuple[int, int], list[int]] = {}

    def next_id(self) -> int:
        """
        Returns:
            a new, never before issued identity
        """
        return next(self._id_gen)

    def cached_ids(self, context: tuple[int, int]) -> Iterator[int]:
        """
        Iterate over the identities cached for 'context'.

        Iterating beyond the identities cached so far mints new ones from the
        counter and appends them to the cache, so the sequence is effectively
        infinite. Every call starts over at the first cached identity.

        Parameters:
            context: ordered pair of identities describing the structural context

        Returns:
            lazy iterator over the identities for this context
        """
        cache_entry = self._id_cache.setdefault(tuple(context), [])
        return self._iterate_cache_entry(cache_entry)

    def _iterate_cache_entry(self, cache_entry: list[int]) -> Iterator[int]:
        position = 0
        while True:
            if position == len(cache_entry):
                cache_entry.append(self.next_id())
            yield cache_entry[position]
            position += 1

    def __len__(self) -> int:
        """Number of structural contexts cached so far."""
        return len(self._id_cache)

    def __repr__(self):
        return f"IdGenerator(contexts={len(self._id_cache)})"
