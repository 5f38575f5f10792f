"""
Activations Package

This package provides the element-wise activation functions applied to the
outputs of every network layer. Softsign is the default: it is smooth,
bounded to (-1, 1) and cheap to evaluate inside a per-tick control loop.

Exported:
    activations:        Dictionary mapping activation function names to functions
    resolve_activation: Turn None, a name, or a callable into an activation function
    Individual activation functions: softsign_activation, identity_activation,
                                     clamped_activation, relu_activation,
                                     sigmoid_activation, tanh_activation
"""

from evodrive.activations.basic_activations import (
    activations,
    resolve_activation,
    softsign_activation,
    identity_activation,
    clamped_activation,
    relu_activation,
    sigmoid_activation,
    tanh_activation
)

__all__ = [
    'activations',
    'resolve_activation',
    'softsign_activation',
    'identity_activation',
    'clamped_activation',
    'relu_activation',
    'sigmoid_activation',
    'tanh_activation'
]
