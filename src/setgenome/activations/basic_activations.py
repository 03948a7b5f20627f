import numpy as np

def linear_activation(z):
    return z

def sigmoid_activation(z):
    # Steepened sigmoid from the original NEAT paper
    Z = np.clip(-4.9 * z, -100, 100)   # to prevent overflow when calculating exp
    return 1.0 / (1.0 + np.exp(Z))

def tanh_activation(z):
    # A rescaled steepened sigmoid
    return 2.0 * sigmoid_activation(2.0 * z) - 1.0

def gaussian_activation(z):
    return np.exp(-(z * z) / 2.0)

def step_activation(z):
    return np.where(z > 0.0, 1.0, 0.0)

def sine_activation(z):
    return np.sin(np.pi * z)

def cosine_activation(z):
    return np.cos(np.pi * z)

def inverse_activation(z):
    return -z

def absolute_activation(z):
    return np.abs(z)

def relu_activation(z):
    return np.maximum(0.0, z)

def squared_activation(z):
    # Clip input to avoid overflow (±1e154 squared stays within float64 range)
    z_clipped = np.clip(z, -1e154, 1e154)
    return z_clipped ** 2

activations = {
    "linear"  : linear_activation,
    "sigmoid" : sigmoid_activation,
    "tanh"    : tanh_activation,
    "gaussian": gaussian_activation,
    "step"    : step_activation,
    "sine"    : sine_activation,
    "cosine"  : cosine_activation,
    "inverse" : inverse_activation,
    "absolute": absolute_activation,
    "relu"    : relu_activation,
    "squared" : squared_activation
    }

# 3-letter identifiers for each activation function
activation_codes = {
    "linear"  : "LIN",
    "sigmoid" : "SIG",
    "tanh"    : "TNH",
    "gaussian": "GAU",
    "step"    : "STP",
    "sine"    : "SIN",
    "cosine"  : "COS",
    "inverse" : "INV",
    "absolute": "ABS",
    "relu"    : "RLU",
    "squared" : "SQR"
    }
