"""Per-sample feature normalization with learnable scale and shift."""

import math
from collections.abc import Sequence


class BatchNormLayer:
    """Normalizes one sample across its features, then scales and shifts it.

    In training mode the mean and variance are taken over the features of
    the single sample passed in, and the running statistics used at
    inference time are updated as exponential moving averages.
    """

    def __init__(self, num_features: int, epsilon: float = 1e-5, momentum: float = 0.9) -> None:
        if num_features <= 0:
            raise ValueError("num_features must be positive.")
        self.num_features = num_features
        self.epsilon = epsilon
        self.momentum = momentum

        self.gamma = [1.0] * num_features
        self.beta = [0.0] * num_features

        self.running_mean = [0.0] * num_features
        self.running_var = [1.0] * num_features

        self.x_input_cache = [0.0] * num_features
        self.x_normalized_cache = [0.0] * num_features
        self.mean_cache = 0.0
        self.variance_cache = 0.0

        self.initialized_running_stats = False

    def _check_size(self, values: Sequence[float], what: str) -> None:
        if len(values) != self.num_features:
            raise ValueError(
                f"{what} size ({len(values)}) does not match num_features ({self.num_features})."
            )

    def forward(self, x_input: Sequence[float], training: bool) -> list[float]:
        """Normalize ``x_input`` and return ``gamma * x_hat + beta``."""
        self._check_size(x_input, "Input sample")
        x = list(x_input)
        self.x_input_cache = x
        n = self.num_features

        if training:
            mean = sum(x) / n
            variance = sum((value - mean) ** 2 for value in x) / n
            self.mean_cache = mean
            self.variance_cache = variance

            inv_stddev = 1.0 / math.sqrt(variance + self.epsilon)
            x_hat = [(value - mean) * inv_stddev for value in x]
            self.x_normalized_cache = x_hat

            if not self.initialized_running_stats:
                self.running_mean = [mean] * n
                self.running_var = [variance] * n
                self.initialized_running_stats = True
            else:
                keep = self.momentum
                self.running_mean = [keep * m + (1.0 - keep) * mean for m in self.running_mean]
                self.running_var = [keep * v + (1.0 - keep) * variance for v in self.running_var]
        else:
            x_hat = [
                (value - mean) / math.sqrt(var + self.epsilon)
                for value, mean, var in zip(x, self.running_mean, self.running_var)
            ]

        return [g * h + b for g, h, b in zip(self.gamma, x_hat, self.beta)]

    def backward(self, dout: Sequence[float], learning_rate: float) -> list[float]:
        """Return the gradient with respect to the input and update gamma and beta."""
        self._check_size(dout, "dout")
        n = self.num_features
        x = self.x_input_cache
        mean = self.mean_cache
        var_eps = self.variance_cache + self.epsilon

        dbeta = list(dout)
        dgamma = [d * h for d, h in zip(dout, self.x_normalized_cache)]
        dx_hat = [d * g for d, g in zip(dout, self.gamma)]

        inv_stddev = 1.0 / math.sqrt(var_eps)
        dvar = sum(dh * (xi - mean) for dh, xi in zip(dx_hat, x)) * (-0.5) * var_eps ** -1.5
        dmean = -inv_stddev * sum(dx_hat)

        dx = [
            dh * inv_stddev + dmean / n + dvar * (2.0 * (xi - mean)) / n
            for dh, xi in zip(dx_hat, x)
        ]

        self.gamma = [g - learning_rate * d for g, d in zip(self.gamma, dgamma)]
        self.beta = [b - learning_rate * d for b, d in zip(self.beta, dbeta)]
        return dx