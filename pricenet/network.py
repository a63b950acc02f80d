"""Feed-forward regression network trained with mini-batch gradient descent."""

import logging
import math
from collections.abc import Sequence

from pricenet.batch_loader import BatchDataLoader
from pricenet.batch_norm import BatchNormLayer
from pricenet.layer import Activation, Layer
from pricenet.loss import mean_squared_error_derivative

_log = logging.getLogger(__name__)

Matrix = list[list[float]]


class NeuralNetwork:
    """A stack of dense layers with optional normalization after hidden layers.

    Training uses mini-batches: gradients of every sample in a batch are
    accumulated, averaged and then applied, with optional momentum and L2
    weight decay. Dropout and normalization apply only to hidden layers.
    """

    def __init__(
        self,
        layer_sizes: Sequence[int],
        activations: Sequence[Activation | str],
        learning_rate: float,
        dropout_rate: float = 0.0,
        momentum: float = 0.0,
        weight_decay: float = 0.0,
        batch_norm: bool = False,
    ) -> None:
        if len(layer_sizes) < 2:
            raise ValueError("At least 2 layer sizes are required.")
        if len(layer_sizes) - 1 != len(activations):
            raise ValueError("layer_sizes and activations do not match.")
        if learning_rate <= 0.0:
            raise ValueError("Learning rate must be > 0.")
        if not 0.0 <= dropout_rate < 1.0:
            raise ValueError("Dropout rate must be in [0, 1).")
        if not 0.0 <= momentum < 1.0:
            raise ValueError("Momentum must be in [0, 1).")
        if weight_decay < 0.0:
            raise ValueError("Weight decay must be >= 0.")

        self.learning_rate = learning_rate
        self.momentum = momentum
        self.weight_decay = weight_decay

        self.layers: list[Layer] = []
        self.bn_layers: list[BatchNormLayer] = []
        self.use_bn: list[bool] = []

        num_dense = len(activations)
        for index, (input_dim, output_dim, activation) in enumerate(
            zip(layer_sizes, layer_sizes[1:], activations)
        ):
            hidden = index < num_dense - 1
            try:
                layer = Layer(input_dim, output_dim, activation, dropout_rate if hidden else 0.0)
                bn_layer = BatchNormLayer(output_dim)
            except ValueError as exc:
                raise ValueError(f"Layer {index} creation failed: {exc}") from exc
            self.layers.append(layer)
            self.bn_layers.append(bn_layer)
            self.use_bn.append(batch_norm and hidden)

        self.velocity_weights: list[Matrix] = []
        self.velocity_biases: list[list[float]] = []
        if self.momentum > 0.0:
            self.velocity_weights = [self._zero_matrix(layer) for layer in self.layers]
            self.velocity_biases = [[0.0] * layer.output_size for layer in self.layers]

        self.accumulated_weight_gradients: list[Matrix] = []
        self.accumulated_bias_gradients: list[list[float]] = []
        self._reset_accumulated_gradients()

    @staticmethod
    def _zero_matrix(layer: Layer) -> Matrix:
        return [[0.0] * layer.input_size for _ in range(layer.output_size)]

    def _reset_accumulated_gradients(self) -> None:
        self.accumulated_weight_gradients = [self._zero_matrix(layer) for layer in self.layers]
        self.accumulated_bias_gradients = [[0.0] * layer.output_size for layer in self.layers]

    @property
    def input_size(self) -> int:
        """Number of features the network expects per sample."""
        return self.layers[0].input_size

    def num_layers(self) -> int:
        """Number of dense layers."""
        return len(self.layers)

    def predict(self, input_data: Sequence[float], training: bool = False) -> list[float]:
        """Run one sample through the network and return its outputs."""
        if len(input_data) != self.input_size:
            raise ValueError(
                f"Input size mismatch: expected {self.input_size}, got {len(input_data)}."
            )
        output = list(input_data)
        for layer, bn_layer, use_bn in zip(self.layers, self.bn_layers, self.use_bn):
            output = layer.forward(output, training)
            if use_bn:
                output = bn_layer.forward(output, training)
        return output

    def process_sample(self, x_input: Sequence[float], y_true: float) -> None:
        """Do a forward and backward pass for one sample and accumulate its gradients.

        Normalization parameters are updated immediately; dense-layer
        parameters only when :meth:`apply_accumulated_gradients` is called.
        """
        prediction = self.predict(x_input, training=True)
        if len(prediction) != 1:
            raise RuntimeError("Expected a single network output.")
        error = [mean_squared_error_derivative(y_true, prediction[0])]

        for layer, bn_layer, use_bn in reversed(
            list(zip(self.layers, self.bn_layers, self.use_bn))
        ):
            if use_bn:
                error = bn_layer.backward(error, self.learning_rate)
            error = layer.backward(error)

        for index, layer in enumerate(self.layers):
            self.accumulated_bias_gradients[index] = [
                acc + d for acc, d in zip(self.accumulated_bias_gradients[index], layer.delta)
            ]
            self.accumulated_weight_gradients[index] = [
                [acc + d * x for acc, x in zip(row, layer.input_cache)]
                for row, d in zip(self.accumulated_weight_gradients[index], layer.delta)
            ]

    def apply_accumulated_gradients(self, batch_size: int) -> None:
        """Update weights and biases with the gradients averaged over ``batch_size``."""
        if batch_size <= 0:
            raise ValueError("Batch size cannot be zero when applying gradients.")
        factor = 1.0 / batch_size
        lr = self.learning_rate
        use_momentum = self.momentum > 0.0

        for index, layer in enumerate(self.layers):
            grad_b = [g * factor for g in self.accumulated_bias_gradients[index]]
            grad_w = []
            for grad_row, weight_row in zip(self.accumulated_weight_gradients[index], layer.weights):
                row = [g * factor for g in grad_row]
                if self.weight_decay > 0.0:
                    row = [g + self.weight_decay * w for g, w in zip(row, weight_row)]
                grad_w.append(row)

            if use_momentum:
                vel_b = [
                    self.momentum * v - lr * g
                    for v, g in zip(self.velocity_biases[index], grad_b)
                ]
                vel_w = [
                    [self.momentum * v - lr * g for v, g in zip(v_row, g_row)]
                    for v_row, g_row in zip(self.velocity_weights[index], grad_w)
                ]
                self.velocity_biases[index] = vel_b
                self.velocity_weights[index] = vel_w
                layer.biases = [b + v for b, v in zip(layer.biases, vel_b)]
                layer.weights = [
                    [w + v for w, v in zip(w_row, v_row)]
                    for w_row, v_row in zip(layer.weights, vel_w)
                ]
            else:
                layer.biases = [b - lr * g for b, g in zip(layer.biases, grad_b)]
                layer.weights = [
                    [w - lr * g for w, g in zip(w_row, g_row)]
                    for w_row, g_row in zip(layer.weights, grad_w)
                ]

        self._reset_accumulated_gradients()

    def train(
        self,
        x_train: Sequence[Sequence[float]],
        y_train: Sequence[float],
        epochs: int,
        batch_size: int,
        print_every: int = 10,
        x_val: Sequence[Sequence[float]] | None = None,
        y_val: Sequence[float] | None = None,
    ) -> None:
        """Train on ``(x_train, y_train)`` for ``epochs`` passes of mini-batches.

        Every ``print_every`` epochs (and on the first and last) the training
        and, if given, validation MSE are printed.
        """
        if len(x_train) != len(y_train):
            raise ValueError("Training features and targets differ in length.")
        if not x_train:
            print("Warning: NN::train - empty training data.")
            return
        if epochs <= 0:
            print("Warning: NN::train - non-positive epochs.")
            return
        if batch_size <= 0:
            raise ValueError("batch_size must be positive.")

        x_val = x_val or []
        y_val = y_val or []
        has_validation = bool(x_val) and bool(y_val)
        if has_validation and len(x_val) != len(y_val):
            raise ValueError("Validation features and targets differ in length.")

        print("Starting Neural Network training with mini-batches...")
        print(f" - Training samples: {len(x_train)}")
        if has_validation:
            print(f" - Validation samples: {len(x_val)}")
        print(f" - Epochs: {epochs}")
        print(f" - Batch Size: {batch_size}")
        print(f" - Learning rate: {self.learning_rate:g}")
        if self.momentum > 0.0:
            print(f" - Momentum: {self.momentum:g}")
        if self.weight_decay > 0.0:
            print(f" - Weight Decay (L2): {self.weight_decay:g}")
        if any(self.use_bn):
            print(" - Batch Normalization: Enabled for hidden layers")

        loader = BatchDataLoader(x_train, y_train, batch_size)
        for epoch in range(epochs):
            for batch_x, batch_y in loader:
                self._reset_accumulated_gradients()
                for sample, target in zip(batch_x, batch_y):
                    if not sample or len(sample) != self.input_size:
                        _log.warning(
                            "Skipping sample in batch due to incorrect feature size. Epoch %d",
                            epoch + 1,
                        )
                        continue
                    self.process_sample(sample, target)
                self.apply_accumulated_gradients(len(batch_x))

            if print_every > 0 and (
                (epoch + 1) % print_every == 0 or epoch == 0 or epoch == epochs - 1
            ):
                train_mse = self.evaluate_regression(x_train, y_train)
                line = f"Epoch {epoch + 1:4d}/{epochs} | Train MSE (Norm): {train_mse:.8f}"
                if has_validation:
                    val_mse = self.evaluate_regression(x_val, y_val)
                    line += f" | Val MSE (Norm): {val_mse:.8f}"
                print(line)
        print("Neural Network training complete.")

    def evaluate_regression(
        self, x_data: Sequence[Sequence[float]], y_true: Sequence[float]
    ) -> float:
        """Mean squared error over the samples of the right size.

        Returns ``0.0`` for no data and NaN when no sample could be used.
        """
        if len(x_data) != len(y_true):
            raise ValueError("Features and targets differ in length.")
        if not x_data:
            return 0.0
        errors = []
        for sample, target in zip(x_data, y_true):
            if not sample or len(sample) != self.input_size:
                continue
            prediction = self.predict(sample, training=False)
            if len(prediction) != 1:
                continue
            errors.append((prediction[0] - target) ** 2)
        if not errors:
            return math.nan
        return sum(errors) / len(errors)