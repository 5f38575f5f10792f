"""
Layer Module

This module implements one fully connected layer of a feedforward network.

Classes:
    Layer: Weight matrix with a bias row, plus the forward computation
"""

import numpy as np

from evodrive.activations import resolve_activation
from evodrive.exceptions  import NodeCountError

class Layer:
    """
    A fully connected layer with 'node_count' inputs and 'output_count' outputs.

    The weight matrix has shape (node_count + 1, output_count): row i holds the
    outgoing weights of input node i, and the extra last row holds the bias
    weights (the bias is a virtual input fixed at 1). Weights start at zero;
    they are filled in from a genome by the Agent.

    Public Attributes:
        node_count:   Number of inputs
        output_count: Number of outputs
        weights:      numpy array of shape (node_count + 1, output_count)

    Public Methods:
        forward(inputs, activation): Compute the layer's outputs
    """

    def __init__(self, node_count: int, output_count: int):
        self.node_count   = node_count
        self.output_count = output_count
        self.weights      = np.zeros((node_count + 1, output_count), dtype=np.float64)

    @property
    def weight_count(self) -> int:
        return self.weights.size

    def forward(self, inputs, activation=None) -> np.ndarray:
        """
        Compute this layer's outputs.

        output[o] = activation(sum_i biased_inputs[i] * weights[i, o]),
        where 'biased_inputs' is 'inputs' with a trailing 1.

        Parameters:
            inputs:     Sequence of 'node_count' values (not modified)
            activation: None (softsign), an activation name, or an element-wise callable

        Returns:
            numpy array of 'output_count' values
        """
        inputs = np.asarray(inputs, dtype=np.float64)
        if inputs.shape != (self.node_count,):
            raise NodeCountError(f"layer expects {self.node_count} inputs, got {inputs.size}")

        biased_inputs = np.append(inputs, 1.0)
        return resolve_activation(activation)(biased_inputs @ self.weights)

    def __repr__(self):
        return f"Layer(node_count={self.node_count}, output_count={self.output_count})"
