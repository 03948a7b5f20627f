"""
Gene Set Module

This module implements the Gene base class and the GeneSet container, which
together describe the common operations on collections (sets) of genes.
The genome holds several GeneSets of different gene types.

Classes:
    Gene:                 Base class for identity-comparable genes
    GeneSet:              Identity-deduplicated, unordered collection of genes
    GenomeInvariantError: Raised when an internal genome invariant is violated
"""

from functools import total_ordering
from typing    import Callable, Generic, Hashable, Iterable, Iterator, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from setgenome.rng import GenomeRng

class GenomeInvariantError(RuntimeError):
    """
    An internal invariant of a genome has been violated
    (e.g. a gene was inserted twice, or a cycle appeared in the feed-forward graph).
    This always indicates a programming error and is never handled by the library.
    """

@total_ordering
class Gene:
    """
    Base class for genes.

    A gene's identity is given solely by its key, which is used consistently
    for hashing, equality and ordering. Other attributes (weights, activation
    functions) do not take part in identity: two genes with equal keys are the
    "same" gene, possibly expressed differently.

    Subclasses must implement 'key()'.
    """

    __slots__ = ()

    def key(self) -> Hashable:
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, Gene):
            return NotImplemented
        return self.key() == other.key()

    def __lt__(self, other):
        if not isinstance(other, Gene):
            return NotImplemented
        return self.key() < other.key()

    def __hash__(self):
        return hash(self.key())

G = TypeVar('G', bound=Gene)

class GeneSet(Generic[G]):
    """
    An unordered collection of genes, deduplicated by gene identity.

    Internally genes are stored by key, so membership can be tested either
    with a gene or directly with a key (a node ID, an (input, output) pair).
    Genes are immutable values, which makes copying a GeneSet cheap.

    Public Methods:
        insert(gene):                    Add a gene unless an equal one is present
        add_new(gene):                   Add a gene which must not be present yet
        replace(gene):                   Insert or overwrite the gene with the same key
        remove(gene) / discard(gene):    Remove a gene
        retain(predicate):               Keep only the genes satisfying 'predicate'
        get(key):                        The stored gene for a key (or None)
        random(rng):                     Uniformly chosen gene (or None)
        iterate_with_random_offset(rng): All genes, rotated by a random offset
        drain_into_random(rng):          Empty the set, returning its genes shuffled
        matching(other):                 Pairs of genes present in both sets
        unique(other):                   Genes present in exactly one of the sets
        cross_in(other, rng):            Recombine with another set
        as_sorted_list():                Genes sorted by key
    """

    __slots__ = ('_genes',)

    def __init__(self, genes: Iterable[G] = ()):
        self._genes: dict[Hashable, G] = {}
        for gene in genes:
            self.add_new(gene)

    @staticmethod
    def _key_of(item) -> Hashable:
        return item.key() if isinstance(item, Gene) else item

    def insert(self, gene: G) -> bool:
        """
        Add 'gene' unless an equal gene is already present.

        Returns:
            whether the gene was added
        """
        key = gene.key()
        if key in self._genes:
            return False
        self._genes[key] = gene
        return True

    def add_new(self, gene: G) -> None:
        """
        Add a gene that is known not to be present.

        Raises:
            GenomeInvariantError: if an equal gene is already present
        """
        if not self.insert(gene):
            raise GenomeInvariantError(f"duplicate gene {gene!r}")

    def replace(self, gene: G) -> G | None:
        """
        Store 'gene', overwriting the gene with the same identity.
        This is how a non-identity attribute (e.g. a weight) gets updated.

        Returns:
            the replaced gene, or None if no equal gene was present
        """
        key      = gene.key()
        previous = self._genes.get(key)
        self._genes[key] = gene
        return previous

    def remove(self, item) -> G:
        """
        Remove a gene (given as gene or key) and return the stored copy.

        Raises:
            KeyError: if the gene is not present
        """
        return self._genes.pop(self._key_of(item))

    def discard(self, item) -> None:
        self._genes.pop(self._key_of(item), None)

    def retain(self, predicate: Callable[[G], bool]) -> None:
        self._genes = {key: gene for key, gene in self._genes.items() if predicate(gene)}

    def get(self, item) -> G | None:
        return self._genes.get(self._key_of(item))

    def random(self, rng: 'GenomeRng') -> G | None:
        """Uniformly chosen gene, None iff the set is empty."""
        return rng.choice(list(self._genes.values()))

    def iterate_with_random_offset(self, rng: 'GenomeRng') -> Iterator[G]:
        """
        Yield every gene exactly once, starting at a uniformly random position
        and wrapping around (a random rotation of the set's iteration order).
        """
        genes  = list(self._genes.values())
        offset = int(rng.f64() * len(genes))
        yield from genes[offset:]
        yield from genes[:offset]

    def iterate_shuffled(self, rng: 'GenomeRng') -> list[G]:
        """All genes, in uniformly random order (the set is left unchanged)."""
        genes = list(self._genes.values())
        rng.shuffle(genes)
        return genes

    def drain_into_random(self, rng: 'GenomeRng') -> list[G]:
        """Remove all genes from the set and return them in random order."""
        genes = self.iterate_shuffled(rng)
        self._genes.clear()
        return genes

    def matching(self, other: 'GeneSet[G]') -> Iterator[tuple[G, G]]:
        """
        Yield (gene in self, gene in other) for every identity present in both sets.
        The two copies may differ in their non-identity attributes.
        """
        for key, gene in self._genes.items():
            other_gene = other._genes.get(key)
            if other_gene is not None:
                yield gene, other_gene

    def unique(self, other: 'GeneSet[G]') -> Iterator[G]:
        """Yield the genes present in exactly one of the two sets (symmetric difference)."""
        for key, gene in self._genes.items():
            if key not in other._genes:
                yield gene
        for key, gene in other._genes.items():
            if key not in self._genes:
                yield gene

    def cross_in(self, other: 'GeneSet[G]', rng: 'GenomeRng') -> 'GeneSet[G]':
        """
        Recombine this set with 'other'.

        Every matching gene is taken from either set with equal probability.
        Genes unique to this set are all kept, genes unique to 'other' are all dropped:
        crossover is rooted at 'self', which should be the fitter parent.

        Returns:
            the offspring gene set
        """
        offspring = GeneSet()
        for gene_self, gene_other in self.matching(other):
            offspring.add_new(gene_self if rng.f64() < 0.5 else gene_other)
        for key, gene in self._genes.items():
            if key not in other._genes:
                offspring.add_new(gene)
        return offspring

    def as_sorted_list(self) -> list[G]:
        return sorted(self._genes.values())

    def keys(self) -> list[Hashable]:
        return list(self._genes.keys())

    def copy(self) -> 'GeneSet[G]':
        duplicate = GeneSet()
        duplicate._genes = dict(self._genes)
        return duplicate

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        # genes are immutable
        return self.copy()

    def __contains__(self, item) -> bool:
        return self._key_of(item) in self._genes

    def __iter__(self) -> Iterator[G]:
        return iter(list(self._genes.values()))

    def __len__(self) -> int:
        return len(self._genes)

    def __bool__(self) -> bool:
        return bool(self._genes)

    def __eq__(self, other):
        if not isinstance(other, GeneSet):
            return NotImplemented
        return self._genes.keys() == other._genes.keys()

    __hash__ = None

    def __repr__(self):
        return f"GeneSet({self.as_sorted_list()!r})"
