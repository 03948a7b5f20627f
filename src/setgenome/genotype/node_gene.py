"""
Node Gene Module

This module implements the NodeGene class.

Classes:
    NodeGene: Gene encoding a single network node
"""

from dataclasses import dataclass, replace
from typing      import Callable

from setgenome.activations         import Activation
from setgenome.genotype.gene       import Gene

@dataclass(frozen=True, eq=False)
class NodeGene(Gene):
    """
    A gene describing a node in a Neural Network.

    A node is made up of an identity and an activation function. Equality,
    hashing and ordering are defined by the identity alone.

    Nodes come in three roles (input, hidden, output); the role is not stored
    on the gene but given by the gene set of the genome the node belongs to.
    Input nodes always use the linear activation.

    Public Attributes:
        id:         Unique identifier of this node
        activation: The node's activation function (an Activation member)

    Public Properties:
        activation_function: The callable implementing the activation
    """
    id        : int
    activation: Activation = Activation.LINEAR

    def key(self) -> int:
        return self.id

    @property
    def activation_function(self) -> Callable:
        return self.activation.function

    def with_activation(self, activation: Activation) -> 'NodeGene':
        return replace(self, activation=activation)

    def __repr__(self):
        return f"NodeGene(id={self.id}, activation=Activation.{self.activation.name})"

    def __str__(self):
        return f"[{self.id},{self.activation.code}]"
