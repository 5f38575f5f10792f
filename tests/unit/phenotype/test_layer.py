"""
Unit tests for the Layer class.
"""

import pytest
import numpy as np

from evodrive.exceptions import NodeCountError
from evodrive.phenotype.layer import Layer


class TestLayerInit:
    """Test Layer construction."""

    def test_weight_shape_includes_bias_row(self):
        """Test that the weight matrix has one extra row for the bias."""
        layer = Layer(3, 2)
        assert layer.weights.shape == (4, 2)
        assert layer.weight_count == 8

    def test_weights_start_at_zero(self):
        """Test that weights are zero-initialized."""
        layer = Layer(3, 2)
        assert np.all(layer.weights == 0.0)


class TestLayerForward:
    """Test Layer.forward."""

    def test_zero_weights_give_zero_outputs(self):
        """Test that an all-zero layer outputs zeros for any finite input."""
        layer = Layer(4, 3)
        outputs = layer.forward([1.5, -20.0, 3.0, 1e6])
        assert np.array_equal(outputs, np.zeros(3))

    def test_weighted_sum_with_bias(self):
        """Test the weighted sum, bias included, with the identity activation."""
        layer = Layer(2, 1)
        layer.weights[:, 0] = [2.0, -1.0, 0.5]   # w1, w2, bias
        outputs = layer.forward([3.0, 4.0], activation='identity')
        assert outputs[0] == pytest.approx(2.0 * 3.0 - 1.0 * 4.0 + 0.5)

    def test_default_activation_is_softsign(self):
        """Test that softsign is applied when no activation is given."""
        layer = Layer(1, 1)
        layer.weights[:, 0] = [1.0, 0.0]
        outputs = layer.forward([3.0])
        assert outputs[0] == pytest.approx(3.0 / 4.0)

    def test_custom_callable_activation(self):
        """Test that a caller-supplied function is applied to every output."""
        layer = Layer(1, 2)
        layer.weights[:] = [[1.0, 2.0], [0.0, 0.0]]
        outputs = layer.forward([2.0], activation=lambda z: z * 10.0)
        assert outputs == pytest.approx([20.0, 40.0])

    def test_bias_only(self):
        """Test that the bias row acts as an input fixed at 1."""
        layer = Layer(2, 1)
        layer.weights[2, 0] = 0.75
        outputs = layer.forward([0.0, 0.0], activation='identity')
        assert outputs[0] == pytest.approx(0.75)

    def test_inputs_not_modified(self):
        """Test that the caller's input buffer is left alone."""
        layer = Layer(2, 1)
        layer.weights[:, 0] = [1.0, 1.0, 1.0]
        inputs = np.array([1.0, 2.0])
        layer.forward(inputs)
        assert np.array_equal(inputs, [1.0, 2.0])

    @pytest.mark.parametrize("inputs", [[1.0], [1.0, 2.0, 3.0], []])
    def test_wrong_input_size_fails(self, inputs):
        """Test that a wrongly sized input raises NodeCountError."""
        layer = Layer(2, 1)
        with pytest.raises(NodeCountError, match="Node count mismatch"):
            layer.forward(inputs)

    def test_unknown_activation_name_fails(self):
        """Test that an unregistered activation name raises ValueError."""
        layer = Layer(1, 1)
        with pytest.raises(ValueError):
            layer.forward([1.0], activation='nope')
