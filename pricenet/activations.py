"""Scalar activation functions and their derivatives."""

import math


def relu(x: float) -> float:
    """Rectified linear unit: ``x`` when positive, otherwise ``0.0``."""
    return x if x > 0.0 else 0.0


def relu_derivative(x: float) -> float:
    """Derivative of :func:`relu`; taken as ``0.0`` at ``x == 0``."""
    return float(x > 0.0)


def sigmoid(x: float) -> float:
    """Logistic function ``1 / (1 + exp(-x))``, stable for large ``|x|``."""
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    exp_x = math.exp(x)
    return exp_x / (1.0 + exp_x)


def sigmoid_derivative(activated_output: float) -> float:
    """Derivative of the sigmoid, given its already activated output."""
    return activated_output * (1.0 - activated_output)


def linear(x: float) -> float:
    """Identity activation, returned as a float."""
    return float(x)


def linear_derivative(x: float) -> float:
    """Derivative of :func:`linear`; ``1.0`` for any numeric ``x``."""
    # Reject non-numeric input the same way the other activations would.
    float(x)
    return 1.0