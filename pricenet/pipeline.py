"""End-to-end training pipeline: load, normalize, split, train and report."""

import argparse
import math
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from pricenet.csv_reader import CSVReadError, read_regression_data
from pricenet.network import NeuralNetwork

DEFAULT_DATA_FILE = "XAUUSD.csv"
TARGET_COLUMN_INDEX = 3


@dataclass
class MinMax:
    """Minimum and maximum of a value range, used for min-max scaling."""

    min_val: float = field(default=sys.float_info.max)
    max_val: float = field(default=-sys.float_info.max)

    @property
    def span(self) -> float:
        return self.max_val - self.min_val


def _scale(values: Sequence[float], params: MinMax) -> list[float]:
    span = params.span
    if abs(span) < 1e-9:
        return [0.0] * len(values)
    return [(value - params.min_val) / span for value in values]


def normalize_features(
    features: Sequence[Sequence[float]],
) -> tuple[list[list[float]], list[MinMax]]:
    """Scale every feature column to ``[0, 1]``.

    Returns the scaled rows and the per-column ranges. Constant columns
    become all zeros. Empty input is returned unchanged with no ranges.
    """
    if not features or not features[0]:
        return [list(row) for row in features], []
    columns = list(zip(*features))
    params = [MinMax(min(column), max(column)) for column in columns]
    scaled_columns = [_scale(column, p) for column, p in zip(columns, params)]
    return [list(row) for row in zip(*scaled_columns)], params


def normalize_targets(targets: Sequence[float]) -> tuple[list[float], MinMax]:
    """Scale the targets to ``[0, 1]`` and return them with their range."""
    if not targets:
        return [], MinMax()
    params = MinMax(min(targets), max(targets))
    return _scale(targets, params), params


def denormalize_target(value: float, params: MinMax) -> float:
    """Map a scaled value back into the original range of ``params``."""
    span = params.span
    if abs(span) < 1e-9:
        return params.min_val
    return value * span + params.min_val


def time_series_split(
    features: Sequence[Sequence[float]],
    targets: Sequence[float],
    validation_ratio: float = 0.2,
) -> tuple[list[list[float]], list[float], list[list[float]], list[float]]:
    """Split data in order into training and validation parts.

    The last ``validation_ratio`` share of the samples becomes the
    validation set. Returns ``(train_x, train_y, val_x, val_y)``.
    """
    if len(features) != len(targets):
        raise ValueError("Features and targets differ in length.")
    if not 0.0 < validation_ratio < 1.0:
        raise ValueError("Validation ratio must lie strictly between 0 and 1.")
    if not features:
        return [], [], [], []

    total = len(features)
    validation_count = int(total * validation_ratio)
    training_count = total - validation_count
    if training_count == 0 or (validation_count > 0 and validation_count == total):
        if total > 10:
            validation_count = max(1, int(total * 0.1))
            training_count = total - validation_count
            if training_count == 0:
                training_count, validation_count = total, 0
        else:
            training_count, validation_count = total, 0

    train_x = [list(row) for row in features[:training_count]]
    train_y = list(targets[:training_count])
    if validation_count > 0 and training_count > 0:
        val_x = [list(row) for row in features[training_count:]]
        val_y = list(targets[training_count:])
    else:
        val_x, val_y = [], []

    print(
        f"Time-series split: Total={total}, Train={len(train_x)}, Validation={len(val_x)}"
    )
    return train_x, train_y, val_x, val_y


def format_vector(name: str, values: Sequence[float], limit: int | None = None) -> str:
    """Render ``values`` as ``name: [ a, b, ... ]`` with five decimals."""
    shown = values if limit is None else values[:limit]
    last = len(values) - 1
    body = "".join(
        f"{value:.5f}" + ("" if index == last else ", ")
        for index, value in enumerate(shown)
    )
    if limit is not None and len(values) > limit:
        body += "..."
    return f"{name}: [ {body} ]"


def format_features_summary(
    name: str,
    features: Sequence[Sequence[float]],
    rows: int = 3,
    cols: int = 5,
) -> str:
    """Describe a feature matrix and show its first rows and columns."""
    lines = [f"{name} (Summary - first {rows} rows, first {cols} cols if available):"]
    if not features:
        lines.append("  <No features loaded>")
        return "\n".join(lines)
    lines.append(f"  Total samples: {len(features)}")
    lines.append(f"  Features per sample: {len(features[0])}")
    for index, row in enumerate(features[:rows]):
        body = ", ".join(f"{value:.5f}" for value in row[:cols])
        if len(row) > cols:
            body += "..."
        lines.append(f"  Sample {index:3d}: [ {body} ]")
    return "\n".join(lines)


def run_training_pipeline(
    path: str | os.PathLike = DEFAULT_DATA_FILE,
) -> NeuralNetwork | None:
    """Train a price model on the data in ``path`` and print its results.

    Returns the trained network, or ``None`` if the data could not be used.
    """
    print("\n--- Neural Network Training Pipeline ---")

    try:
        features_orig, targets_orig = read_regression_data(path, TARGET_COLUMN_INDEX)
    except (CSVReadError, ValueError) as exc:
        print(f"Error loading CSV data: {exc}", file=sys.stderr)
        return None
    print(f"Successfully loaded {len(features_orig)} original samples from {path}.")

    print("\nNormalizing features and target variable...")
    features_norm, _feature_scaling = normalize_features(features_orig)
    targets_norm, target_scaling = normalize_targets(targets_orig)
    print("Normalization complete.")

    validation_ratio = 0.2
    x_train, y_train, x_val, y_val = time_series_split(
        features_norm, targets_norm, validation_ratio
    )
    _, y_train_orig, _, y_val_orig = time_series_split(
        features_orig, targets_orig, validation_ratio
    )

    if not x_train:
        print("Normalized training set is empty after split. Exiting.", file=sys.stderr)
        return None

    layer_sizes = [len(x_train[0]), 64, 32, 1]
    activation_names = ["relu", "relu", "linear"]
    learning_rate = 0.001
    dropout_rate = 0.1
    momentum = 0.9
    weight_decay = 1e-4
    use_batch_norm = True
    batch_size = 32

    print("\nInitializing Neural Network with:")
    print(f"  Learning Rate: {learning_rate:g}")
    print(f"  Batch Size: {batch_size}")
    print(f"  Dropout Rate (for hidden layers): {dropout_rate:g}")
    print(f"  Momentum Coefficient: {momentum:g}")
    print(f"  Weight Decay (L2) Coefficient: {weight_decay:g}")
    print(
        "  Batch Normalization (for hidden layers): "
        + ("Enabled" if use_batch_norm else "Disabled")
    )

    network = NeuralNetwork(
        layer_sizes,
        activation_names,
        learning_rate,
        dropout_rate,
        momentum,
        weight_decay,
        use_batch_norm,
    )

    epochs = 200
    print_every = 20
    network.train(x_train, y_train, epochs, batch_size, print_every, x_val, y_val)

    print("\n--- Final Evaluation Metrics (on Normalized Data) ---")
    train_mse = network.evaluate_regression(x_train, y_train)
    print(f"Final Training MSE (Normalized): {train_mse:.8f}")
    if x_val:
        val_mse = network.evaluate_regression(x_val, y_val)
        print(f"Final Validation MSE (Normalized): {val_mse:.8f}")

    print("\nPredictions on first few validation samples (denormalized):")
    print(f"{'True (Original)':>18}{'Predicted (DeNorm)':>20}{'Abs Difference':>18}")
    print("-" * 84)
    eval_features, eval_targets = x_val, y_val_orig
    if not x_val:
        print("(No validation set, showing predictions on first few training samples)")
        eval_features, eval_targets = x_train, y_train_orig

    for sample, true_value in zip(eval_features[:5], eval_targets):
        if not sample:
            continue
        prediction = network.predict(sample, training=False)
        if not prediction:
            continue
        predicted = denormalize_target(prediction[0], target_scaling)
        difference = math.fabs(predicted - true_value)
        print(f"{true_value:18.5f}{predicted:20.5f}{difference:18.5f}")

    return network


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point: train on the given data file."""
    parser = argparse.ArgumentParser(description="Train a close-price regression network.")
    parser.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_DATA_FILE,
        help="headed CSV file with the close price in column 3",
    )
    args = parser.parse_args(argv)

    print("Initializing main...")
    print("\nRunning Main Training Pipeline")
    run_training_pipeline(args.path)
    print("\nMain Training Pipeline Completed\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())