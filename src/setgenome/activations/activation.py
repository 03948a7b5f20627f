"""
Activation Enumeration Module

The fixed pool of activation functions a node gene can carry.
The pool is the same as the one used for Weight Agnostic Neural Networks.

Classes:
    Activation: Enumeration of the 11 supported activation functions
"""

from enum   import Enum
from typing import Callable

from setgenome.activations.basic_activations import activations, activation_codes

class Activation(Enum):
    """
    Activation functions available to nodes.

    The value of each member is the name under which its function is registered
    in the 'activations' dictionary, which is also the name used in configuration
    files and in serialized genomes.
    """
    LINEAR   = "linear"
    SIGMOID  = "sigmoid"
    TANH     = "tanh"
    GAUSSIAN = "gaussian"
    STEP     = "step"
    SINE     = "sine"
    COSINE   = "cosine"
    INVERSE  = "inverse"
    ABSOLUTE = "absolute"
    RELU     = "relu"
    SQUARED  = "squared"

    @classmethod
    def all(cls) -> list['Activation']:
        """All activations, in declaration order."""
        return list(cls)

    @classmethod
    def parse(cls, name: 'str | Activation') -> 'Activation':
        """
        Look up an activation by (case insensitive) name.

        Raises:
            ValueError: if 'name' does not name an activation function
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid activation function '{name}'") from None

    @property
    def function(self) -> Callable:
        return activations[self.value]

    @property
    def code(self) -> str:
        return activation_codes[self.value]
