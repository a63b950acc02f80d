"""Per-sample squared-error loss."""


def mean_squared_error(y_true: float, y_pred: float) -> float:
    """Return ``0.5 * (y_pred - y_true) ** 2``."""
    error = y_pred - y_true
    return 0.5 * error * error


def mean_squared_error_derivative(y_true: float, y_pred: float) -> float:
    """Derivative of :func:`mean_squared_error` with respect to ``y_pred``."""
    return y_pred - y_true