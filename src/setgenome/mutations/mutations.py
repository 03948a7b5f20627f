"""
Mutations Module

This module defines the mutations a genome can undergo, as plain immutable
records: one variant per operator, carrying the chance of the mutation and
the operator's parameters. Keeping mutations as data makes a mutation list
easy to configure, compare and serialize.

Classes:
    Mutation:                  Base class of all variants
    ChangeWeights:             See 'operators.change_weights()'
    ChangeWeightBits:          See 'operators.change_weight_bits()'
    ChangeActivation:          See 'operators.change_activation()'
    AddNode:                   See 'operators.add_node()'
    AddConnection:             See 'operators.add_connection()'
    AddRecurrentConnection:    See 'operators.add_recurrent_connection()'
    RemoveNode:                See 'operators.remove_node()'
    RemoveConnection:          See 'operators.remove_connection()'
    RemoveRecurrentConnection: See 'operators.remove_recurrent_connection()'
    DuplicateNode:             See 'operators.duplicate_node()'

Functions:
    mutate(mutation, genome, rng, id_gen): Apply a mutation (subject to its chance)
"""

import math
from dataclasses import dataclass, fields
from typing      import ClassVar, TYPE_CHECKING

from setgenome.activations        import Activation
from setgenome.mutations          import operators
if TYPE_CHECKING:
    from setgenome.genotype.genome       import Genome
    from setgenome.genotype.id_generator import IdGenerator
    from setgenome.rng                   import GenomeRng

@dataclass(frozen=True)
class Mutation:
    """
    Base class of the mutation variants.

    Public Attributes:
        chance: Probability that the mutation is applied when invoked

    Public Methods:
        mutate(genome, rng, id_gen): Apply the mutation with probability 'chance'
        to_dict():                   Convert the mutation to a dictionary

    Class Methods:
        from_dict(mutation_dict):    Create a mutation from a dictionary
    """
    chance: float

    # Tag identifying the variant in serialized form
    type_name: ClassVar[str] = ''

    def __post_init__(self):
        if not 0.0 <= self.chance <= 1.0:
            raise ValueError(f"chance of {type(self).__name__} must be in [0, 1], got {self.chance}")

    def mutate(self, genome: 'Genome', rng: 'GenomeRng', id_gen: 'IdGenerator') -> bool:
        """
        Returns:
            whether the mutation was applied (False if the chance did not hit)

        Raises:
            MutationError: if the mutation was attempted but is impossible for 'genome'
        """
        return mutate(self, genome, rng, id_gen)

    def to_dict(self) -> dict:
        """
        Convert the mutation to a dictionary, e.g.
            {"type": "add_node", "chance": 0.1, "activation_pool": ["tanh", "relu"]}
        """
        mutation_dict = {"type": self.type_name}
        for field in fields(self):
            value = getattr(self, field.name)
            if field.name == "activation_pool":
                value = [activation.value for activation in value]
            mutation_dict[field.name] = value
        return mutation_dict

    @classmethod
    def from_dict(cls, mutation_dict: dict) -> 'Mutation':
        """
        Create a mutation from a dictionary (see to_dict() for the format).

        Raises:
            ValueError: if the type tag is unknown
        """
        arguments = dict(mutation_dict)
        type_name = arguments.pop("type")
        for variant in _VARIANTS:
            if variant.type_name == type_name:
                return variant(**arguments)
        raise ValueError(f"Unknown mutation type '{type_name}'")

@dataclass(frozen=True)
class _WithActivationPool(Mutation):
    activation_pool: tuple[Activation, ...] = tuple(Activation.all())

    def __post_init__(self):
        super().__post_init__()
        pool = tuple(Activation.parse(activation) for activation in self.activation_pool)
        if not pool:
            raise ValueError(f"activation pool of {type(self).__name__} cannot be empty")
        object.__setattr__(self, 'activation_pool', pool)

@dataclass(frozen=True)
class ChangeWeights(Mutation):
    percent_perturbed : float        = 0.5
    standard_deviation: float | None = None
    type_name: ClassVar[str] = 'change_weights'

    def __post_init__(self):
        super().__post_init__()
        if not 0.0 <= self.percent_perturbed <= 1.0:
            raise ValueError(f"percent_perturbed must be in [0, 1], got {self.percent_perturbed}")
        if self.standard_deviation is not None and \
           (not math.isfinite(self.standard_deviation) or self.standard_deviation < 0):
            raise ValueError(f"standard_deviation must be finite and non-negative, got {self.standard_deviation}")

@dataclass(frozen=True)
class ChangeWeightBits(Mutation):
    mutation_rate   : float = 0.1
    duplication_rate: float = 0.05
    type_name: ClassVar[str] = 'change_weight_bits'

    def __post_init__(self):
        super().__post_init__()
        for name in ('mutation_rate', 'duplication_rate'):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {getattr(self, name)}")

@dataclass(frozen=True)
class ChangeActivation(_WithActivationPool):
    type_name: ClassVar[str] = 'change_activation'

@dataclass(frozen=True)
class AddNode(_WithActivationPool):
    type_name: ClassVar[str] = 'add_node'

@dataclass(frozen=True)
class AddConnection(Mutation):
    type_name: ClassVar[str] = 'add_connection'

@dataclass(frozen=True)
class AddRecurrentConnection(Mutation):
    type_name: ClassVar[str] = 'add_recurrent_connection'

@dataclass(frozen=True)
class RemoveNode(Mutation):
    type_name: ClassVar[str] = 'remove_node'

@dataclass(frozen=True)
class RemoveConnection(Mutation):
    type_name: ClassVar[str] = 'remove_connection'

@dataclass(frozen=True)
class RemoveRecurrentConnection(Mutation):
    type_name: ClassVar[str] = 'remove_recurrent_connection'

@dataclass(frozen=True)
class DuplicateNode(Mutation):
    type_name: ClassVar[str] = 'duplicate_node'

_VARIANTS = (ChangeWeights,
             ChangeWeightBits,
             ChangeActivation,
             AddNode,
             AddConnection,
             AddRecurrentConnection,
             RemoveNode,
             RemoveConnection,
             RemoveRecurrentConnection,
             DuplicateNode)

def mutate(mutation: Mutation, genome: 'Genome', rng: 'GenomeRng', id_gen: 'IdGenerator') -> bool:
    """
    Apply 'mutation' to 'genome' with probability 'mutation.chance'.
    A uniform number is drawn for every call, whatever the chance.

    Returns:
        whether the operator was run

    Raises:
        MutationError: if the operator was run but could not be applied
    """
    if not rng.gamble(mutation.chance):
        return False

    match mutation:
        case ChangeWeights(percent_perturbed=percent, standard_deviation=std_dev):
            operators.change_weights(genome, rng, percent, std_dev)
        case ChangeWeightBits(mutation_rate=mutation_rate, duplication_rate=duplication_rate):
            operators.change_weight_bits(genome, rng, mutation_rate, duplication_rate)
        case ChangeActivation(activation_pool=pool):
            operators.change_activation(genome, rng, pool)
        case AddNode(activation_pool=pool):
            operators.add_node(genome, rng, id_gen, pool)
        case AddConnection():
            operators.add_connection(genome, rng)
        case AddRecurrentConnection():
            operators.add_recurrent_connection(genome, rng)
        case RemoveNode():
            operators.remove_node(genome, rng)
        case RemoveConnection():
            operators.remove_connection(genome, rng)
        case RemoveRecurrentConnection():
            operators.remove_recurrent_connection(genome, rng)
        case DuplicateNode():
            operators.duplicate_node(genome, rng, id_gen)
        case _:
            raise TypeError(f"Unknown mutation {mutation!r}")

    return True
