"""
Activations Package

This package provides the activation functions for the nodes of a genome.

Exported:
    Activation:       Enumeration of the available activation functions
    activations:      Dictionary mapping activation function names to functions
    activation_codes: Dictionary mapping activation function names to 3-letter codes
    Individual activation functions: linear_activation, sigmoid_activation, tanh_activation,
                                     gaussian_activation, step_activation, sine_activation,
                                     cosine_activation, inverse_activation, absolute_activation,
                                     relu_activation, squared_activation
"""

from setgenome.activations.basic_activations import (
    activations,
    activation_codes,
    linear_activation,
    sigmoid_activation,
    tanh_activation,
    gaussian_activation,
    step_activation,
    sine_activation,
    cosine_activation,
    inverse_activation,
    absolute_activation,
    relu_activation,
    squared_activation
)
from setgenome.activations.activation import Activation

__all__ = [
    'Activation',
    'activations',
    'activation_codes',
    'linear_activation',
    'sigmoid_activation',
    'tanh_activation',
    'gaussian_activation',
    'step_activation',
    'sine_activation',
    'cosine_activation',
    'inverse_activation',
    'absolute_activation',
    'relu_activation',
    'squared_activation'
]
