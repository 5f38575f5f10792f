import numpy as np

def softsign_activation(z):
    # z / (1 + |z|): bounded to (-1, 1), odd, and needs no exp()
    return z / (1.0 + np.abs(z))

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.maximum(-1.0, np.minimum(1.0, z))

def relu_activation(z):
    return np.maximum(0.0, z)

def sigmoid_activation(z):
    z_clamped = np.clip(5.0 * z, -60.0, 60.0)
    return 1.0 / (1.0 + np.exp(-z_clamped))

def tanh_activation(z):
    return np.tanh(z)

activations = {
    "softsign": softsign_activation,
    "identity": identity_activation,
    "clamped" : clamped_activation,
    "relu"    : relu_activation,
    "sigmoid" : sigmoid_activation,
    "tanh"    : tanh_activation
    }

def resolve_activation(activation):
    """
    Turn an activation argument into a callable.

    Parameters:
        activation: None (softsign), a name registered in 'activations',
                    or a callable that works element-wise on numpy arrays

    Returns:
        The activation function
    """
    if activation is None:
        return softsign_activation
    if callable(activation):
        return activation
    try:
        return activations[activation]
    except KeyError:
        raise ValueError(f"Unknown activation function '{activation}'") from None
