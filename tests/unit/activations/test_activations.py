"""
Unit tests for the activation functions and the Activation enumeration.
"""

import pytest
import numpy as np
from setgenome.activations import (
    Activation,
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
    squared_activation,
)


# Fixtures
@pytest.fixture
def sample_1d_array():
    """Standard 1D array for testing."""
    return np.array([-2.0, -1.0, 0.0, 1.0, 2.0])


class TestActivationsDictionary:
    """Test that all activations are accessible via the activations dictionary."""

    def test_dictionary_has_exactly_eleven_entries(self):
        assert len(activations) == 11

    def test_every_activation_has_a_code(self):
        assert set(activation_codes) == set(activations)
        assert all(len(code) == 3 for code in activation_codes.values())

    def test_dictionary_functions_callable(self):
        for name, func in activations.items():
            assert callable(func), f"{name} is not callable"


class TestActivationFunctions:
    """Test the values of the individual functions."""

    def test_linear(self, sample_1d_array):
        np.testing.assert_array_equal(linear_activation(sample_1d_array), sample_1d_array)

    def test_sigmoid_center_and_steepness(self):
        assert sigmoid_activation(0.0) == pytest.approx(0.5)
        assert sigmoid_activation(1.0) == pytest.approx(1.0 / (1.0 + np.exp(-4.9)))

    def test_sigmoid_does_not_overflow(self):
        assert sigmoid_activation(-1000.0) == pytest.approx(0.0)
        assert sigmoid_activation(1000.0) == pytest.approx(1.0)

    def test_tanh_is_odd_and_bounded(self, sample_1d_array):
        result = tanh_activation(sample_1d_array)
        np.testing.assert_allclose(result, -result[::-1])
        assert np.all(np.abs(result) < 1.0)
        assert tanh_activation(0.0) == pytest.approx(0.0)

    def test_gaussian(self):
        assert gaussian_activation(0.0) == pytest.approx(1.0)
        assert gaussian_activation(1.0) == pytest.approx(np.exp(-0.5))

    def test_step(self, sample_1d_array):
        np.testing.assert_array_equal(step_activation(sample_1d_array), [0.0, 0.0, 0.0, 1.0, 1.0])

    def test_sine_and_cosine_use_pi(self):
        assert sine_activation(0.5) == pytest.approx(1.0)
        assert cosine_activation(1.0) == pytest.approx(-1.0)

    def test_inverse(self, sample_1d_array):
        np.testing.assert_array_equal(inverse_activation(sample_1d_array), -sample_1d_array)

    def test_absolute(self, sample_1d_array):
        np.testing.assert_array_equal(absolute_activation(sample_1d_array), [2.0, 1.0, 0.0, 1.0, 2.0])

    def test_relu(self, sample_1d_array):
        np.testing.assert_array_equal(relu_activation(sample_1d_array), [0.0, 0.0, 0.0, 1.0, 2.0])

    def test_squared(self, sample_1d_array):
        np.testing.assert_array_equal(squared_activation(sample_1d_array), [4.0, 1.0, 0.0, 1.0, 4.0])


class TestActivationEnum:
    """Test the Activation enumeration."""

    def test_all_returns_eleven_in_declaration_order(self):
        pool = Activation.all()
        assert len(pool) == 11
        assert pool[0] is Activation.LINEAR
        assert pool[-1] is Activation.SQUARED

    def test_parse_is_case_insensitive(self):
        assert Activation.parse("Tanh") is Activation.TANH
        assert Activation.parse(" relu ") is Activation.RELU

    def test_parse_accepts_members(self):
        assert Activation.parse(Activation.SINE) is Activation.SINE

    def test_parse_invalid_name_raises(self):
        with pytest.raises(ValueError, match="Invalid activation function"):
            Activation.parse("softmax")

    def test_function_and_code(self):
        assert Activation.RELU.function is relu_activation
        assert Activation.GAUSSIAN.code == "GAU"
