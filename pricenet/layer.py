"""Fully connected layer with activation and optional dropout."""

import math
import random
from collections.abc import Callable, Sequence
from enum import Enum

from pricenet import activations
from pricenet.utils import random_double

_rng = random.Random()


class Activation(Enum):
    """Activation functions a layer supports."""

    RELU = "relu"
    SIGMOID = "sigmoid"
    LINEAR = "linear"

    @classmethod
    def parse(cls, value: "Activation | str") -> "Activation":
        """Turn a name such as ``"relu"`` into a member; raise ``ValueError`` otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unsupported activation type: {value}. "
                "Supported types are 'relu', 'sigmoid', 'linear'."
            ) from None


_FUNCTIONS: dict[Activation, Callable[[float], float]] = {
    Activation.RELU: activations.relu,
    Activation.SIGMOID: activations.sigmoid,
    Activation.LINEAR: activations.linear,
}


class Layer:
    """A dense layer computing ``activation(W x + b)``.

    Caches what the backward pass needs: the input, the pre-activation
    values, the activations and the dropout mask of the last forward pass.
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        activation: Activation | str,
        dropout_rate: float = 0.0,
    ) -> None:
        if input_size <= 0:
            raise ValueError("Layer input size must be positive.")
        if output_size <= 0:
            raise ValueError("Layer output size must be positive.")
        if not 0.0 <= dropout_rate < 1.0:
            raise ValueError("Dropout rate must be in [0.0, 1.0).")

        self.input_size = input_size
        self.output_size = output_size
        self.activation = Activation.parse(activation)
        self.dropout_rate = dropout_rate

        if self.activation is Activation.RELU:
            scale = math.sqrt(2.0 / input_size)
        else:
            scale = math.sqrt(1.0 / input_size)
        self.weights = [
            [random_double(-1.0, 1.0) * scale for _ in range(input_size)]
            for _ in range(output_size)
        ]
        self.biases = [0.0] * output_size

        self.input_cache = [0.0] * input_size
        self.z_cache = [0.0] * output_size
        self.activation_cache = [0.0] * output_size
        self.delta = [0.0] * output_size
        self.dropout_mask = [1.0] * output_size

    def _generate_dropout_mask(self, training: bool) -> None:
        if not training or self.dropout_rate == 0.0:
            self.dropout_mask = [1.0] * self.output_size
            return
        keep_scale = 1.0 / (1.0 - self.dropout_rate)
        self.dropout_mask = [
            0.0 if _rng.random() < self.dropout_rate else keep_scale
            for _ in range(self.output_size)
        ]

    def forward(self, input_data: Sequence[float], training: bool = False) -> list[float]:
        """Compute the layer's output for one sample."""
        if len(input_data) != self.input_size:
            raise ValueError(
                f"Input data size ({len(input_data)}) does not match "
                f"layer input size ({self.input_size})."
            )
        self.input_cache = list(input_data)
        self.z_cache = [
            bias + sum((w * x for w, x in zip(row, self.input_cache)), 0.0)
            for row, bias in zip(self.weights, self.biases)
        ]
        function = _FUNCTIONS[self.activation]
        self.activation_cache = [function(z) for z in self.z_cache]

        if self.dropout_rate > 0.0:
            self._generate_dropout_mask(training)
            if training:
                self.activation_cache = [
                    a * m for a, m in zip(self.activation_cache, self.dropout_mask)
                ]

        return list(self.activation_cache)

    def backward(self, error_from_next_layer: Sequence[float]) -> list[float]:
        """Store ``dE/dZ`` in :attr:`delta` and return the error for the previous layer."""
        if len(error_from_next_layer) != self.output_size:
            raise ValueError(
                f"error_from_next_layer size ({len(error_from_next_layer)}) does not "
                f"match layer output size ({self.output_size})."
            )

        if self.activation is Activation.RELU:
            derivatives = [activations.relu_derivative(z) for z in self.z_cache]
        elif self.activation is Activation.SIGMOID:
            derivatives = [activations.sigmoid_derivative(a) for a in self.activation_cache]
        else:
            derivatives = [activations.linear_derivative(z) for z in self.z_cache]

        delta = [e * d for e, d in zip(error_from_next_layer, derivatives)]
        if self.dropout_rate > 0.0:
            delta = [d * m for d, m in zip(delta, self.dropout_mask)]
        self.delta = delta

        return [
            sum((row[j] * d for row, d in zip(self.weights, delta)), 0.0)
            for j in range(self.input_size)
        ]