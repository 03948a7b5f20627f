"""
Mutations Package

This package implements the mutation operators of a SET genome and the
mutation records used to configure them.

Modules:
    error:     MutationError hierarchy (recoverable mutation failures)
    operators: The operator functions
    mutations: Mutation variants and their dispatch
"""

from setgenome.mutations.error import (
    MutationError,
    CouldNotAddFeedForwardConnectionError,
    CouldNotAddRecurrentConnectionError,
    CouldNotAddNodeError,
    CouldNotRemoveNodeError,
    CouldNotRemoveFeedForwardConnectionError,
    CouldNotRemoveRecurrentConnectionError,
    CouldNotDuplicateNodeError
)
from setgenome.mutations import operators
from setgenome.mutations.mutations import (
    Mutation,
    ChangeWeights,
    ChangeWeightBits,
    ChangeActivation,
    AddNode,
    AddConnection,
    AddRecurrentConnection,
    RemoveNode,
    RemoveConnection,
    RemoveRecurrentConnection,
    DuplicateNode,
    mutate
)

__all__ = [
    'MutationError',
    'CouldNotAddFeedForwardConnectionError',
    'CouldNotAddRecurrentConnectionError',
    'CouldNotAddNodeError',
    'CouldNotRemoveNodeError',
    'CouldNotRemoveFeedForwardConnectionError',
    'CouldNotRemoveRecurrentConnectionError',
    'CouldNotDuplicateNodeError',
    'operators',
    'Mutation',
    'ChangeWeights',
    'ChangeWeightBits',
    'ChangeActivation',
    'AddNode',
    'AddConnection',
    'AddRecurrentConnection',
    'RemoveNode',
    'RemoveConnection',
    'RemoveRecurrentConnection',
    'DuplicateNode',
    'mutate'
]
