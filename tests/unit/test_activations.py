import numpy as np
import pytest

from denseprop.core.activations import (
    REGISTRY,
    ActivationKind,
    ActivationRegistry,
    get_activation,
)


def test_sigmoid_and_output_parameterised_derivative():
    sigmoid = get_activation(ActivationKind.SIGMOID)
    x = np.array([-2.0, 0.0, 3.0])
    y = sigmoid.fn(x)
    assert y[1] == pytest.approx(0.5)
    assert np.allclose(sigmoid.derivative(y), y * (1.0 - y))


@pytest.mark.parametrize("name", ["sigmoid", "tanh", "identity"])
def test_derivative_matches_finite_difference(name):
    activation = REGISTRY.get(name)
    x = np.linspace(-2.0, 2.0, 9)
    h = 1e-6
    numeric = (activation.fn(x + h) - activation.fn(x - h)) / (2 * h)
    assert np.allclose(activation.derivative(activation.fn(x)), numeric, atol=1e-6)


def test_unknown_activation_lists_available_names():
    with pytest.raises(KeyError, match="sigmoid"):
        REGISTRY.get("softplus")


def test_custom_registry_accepts_new_kinds():
    registry = ActivationRegistry()
    registry.register("double", lambda x: 2.0 * x, lambda y: np.full_like(y, 2.0))
    assert "double" in registry
    assert list(registry.names()) == ["double"]
    assert registry.get("double")(np.array([1.5]))[0] == 3.0
