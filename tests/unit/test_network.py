import numpy as np
import pytest

from denseprop.core.activations import ActivationKind, sigmoid
from denseprop.core.errors import DimensionMismatch, NotInitialized
from denseprop.core.matrix import Matrix
from denseprop.core.types import LayerConfig
from denseprop.core.vector import Vector
from denseprop.models import LayeredNetwork


def _network(inputs=3, widths=(4, 2)) -> LayeredNetwork:
    layers = [LayerConfig(n, ActivationKind.SIGMOID, 1.0) for n in widths]
    return LayeredNetwork(inputs, layers)


def test_weight_matrices_include_bias_column():
    net = _network(3, (4, 2))
    assert net.layer_count == 2
    assert len(net) == 2
    assert net.weight_shapes == ((4, 4), (2, 5))
    assert net.parameter_count() == 4 * 4 + 2 * 5
    assert net.input_width == 3
    assert net.output_width == 2


def test_invalid_configuration_is_rejected():
    with pytest.raises(ValueError):
        LayeredNetwork(0, [LayerConfig(1)])
    with pytest.raises(ValueError):
        LayeredNetwork(2, [])
    with pytest.raises(ValueError):
        LayerConfig(0)
    with pytest.raises(KeyError):
        LayeredNetwork(2, [LayerConfig(1, "softplus")])


def test_forward_requires_initialisation():
    net = _network()
    assert not net.initialized
    with pytest.raises(NotInitialized):
        net.forward(Vector([0.0, 0.0, 0.0]))


def test_forward_rejects_wrong_input_width():
    net = _network()
    net.training_handle().initialize(-0.5, 0.5, np.random.default_rng(0))
    with pytest.raises(DimensionMismatch):
        net.forward(Vector([0.0, 1.0]))


@pytest.mark.parametrize("widths", [(1,), (4, 2), (5, 3, 7)])
def test_forward_output_length_matches_last_layer(widths):
    net = _network(3, widths)
    net.training_handle().initialize(-0.5, 0.5, np.random.default_rng(1))
    output = net.forward(Vector([0.1, -0.2, 0.3]))
    assert len(output) == widths[-1]
    assert all(0.0 < y < 1.0 for y in output)


def test_forward_appends_bias_before_weight_product():
    net = LayeredNetwork(2, [LayerConfig(1, "sigmoid", bias=2.0)])
    handle = net.training_handle()
    handle.initialize(0.0, 0.0, np.random.default_rng(0))
    handle.weight_matrix(0)[0] = Vector([0.5, -1.0, 0.25])
    output = net.forward(Vector([1.0, 1.0]))
    assert output[0] == pytest.approx(sigmoid(0.5 - 1.0 + 0.25 * 2.0))


def test_forward_is_read_only():
    net = _network()
    net.training_handle().initialize(-0.5, 0.5, np.random.default_rng(2))
    before = net.weights()
    first = net.forward(Vector([1.0, 0.0, 1.0]))
    second = net.forward(Vector([1.0, 0.0, 1.0]))
    assert first == second
    assert all(a == b for a, b in zip(before, net.weights()))


def test_weights_snapshot_is_detached():
    net = _network()
    net.training_handle().initialize(-0.5, 0.5, np.random.default_rng(3))
    snapshot = net.weights()
    snapshot[0][0, 0] = 100.0
    assert net.weights()[0][0, 0] != 100.0
    assert isinstance(snapshot[0], Matrix)


def test_training_handle_updates_rows_in_place():
    net = _network(2, (2,))
    handle = net.training_handle()
    handle.initialize(1.0, 1.0, np.random.default_rng(0))
    handle.subtract_from_row(0, 1, Vector([0.5, 0.5, 0.5]))
    assert net.weights()[0][1] == Vector([0.5, 0.5, 0.5])
    assert net.weights()[0][0] == Vector([1.0, 1.0, 1.0])
    assert handle.augment(0, Vector([3.0, 4.0])) == Vector([3.0, 4.0, 1.0])
