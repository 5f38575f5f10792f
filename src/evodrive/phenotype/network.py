"""
Network Module

This module implements the fully connected feedforward network whose weights
are evolved by the genetic algorithm.

Classes:
    Network: Chain of Layers built from a topology
"""

import numpy as np
from typing import Sequence

from evodrive.exceptions         import TopologyError
from evodrive.phenotype.layer    import Layer

class Network:
    """
    A fully connected feedforward neural network.

    The topology lists the number of nodes of each layer, input first; its last
    element is the number of outputs. A topology of length n yields n - 1 layers,
    each with a bias. The network never changes its own weights: they are loaded
    once (see Agent) and then only read by 'evaluate'.

    Public Attributes:
        topology:           Tuple of layer sizes
        activation:         Default activation of 'evaluate' (None means softsign)
        layers:             List of Layer objects, input to output
        total_weight_count: Number of weights, biases included

    Public Methods:
        evaluate(inputs, activation): Forward pass through all layers
        flat_weights():               All weights, layer-major then row-major
    """

    def __init__(self, topology: Sequence[int], activation=None):
        """
        Build the layers described by a topology.

        Parameters:
            topology:   Layer sizes; at least two positive integers
            activation: Default activation: None (softsign), a name, or a callable
        """
        topology = tuple(topology)
        if len(topology) < 2:
            raise TopologyError(f"a topology needs at least 2 layers, got {len(topology)}")
        for size in topology:
            if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 1:
                raise TopologyError(f"layer sizes must be positive integers, got {topology}")

        self.topology   = tuple(int(size) for size in topology)
        self.activation = activation
        self.layers     = [Layer(n_in, n_out) for n_in, n_out in zip(self.topology[:-1], self.topology[1:])]

        # +1 for the bias node of each layer
        self.total_weight_count = sum((n_in + 1) * n_out for n_in, n_out in zip(self.topology[:-1], self.topology[1:]))

    @property
    def num_inputs(self) -> int:
        return self.topology[0]

    @property
    def num_outputs(self) -> int:
        return self.topology[-1]

    def evaluate(self, inputs, activation=None) -> np.ndarray:
        """
        Run a forward pass.

        The inputs are copied first, so the caller's buffer is never modified.

        Parameters:
            inputs:     Sequence of 'num_inputs' values
            activation: Overrides the network's activation for this pass;
                        applied at every layer

        Returns:
            numpy array of 'num_outputs' values
        """
        if activation is None:
            activation = self.activation

        outputs = np.array(inputs, dtype=np.float64)
        for layer in self.layers:
            outputs = layer.forward(outputs, activation)
        return outputs

    def flat_weights(self) -> np.ndarray:
        return np.concatenate([layer.weights.ravel() for layer in self.layers])

    def __repr__(self):
        return f"Network(topology={list(self.topology)})"
