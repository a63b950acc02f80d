# pricenet

`pricenet` is a small neural network for regression on tabular price data, for
example predicting a day's closing price from its other columns. It is written
in plain Python and has no dependencies outside the standard library.

## Modules

- `pricenet.activations`: `relu`, `sigmoid` and `linear`, together with their
  derivatives `relu_derivative`, `sigmoid_derivative` and `linear_derivative`.
- `pricenet.loss`: `mean_squared_error` (`0.5 * (y_pred - y_true) ** 2`) and
  `mean_squared_error_derivative`.
- `pricenet.utils`: `random_double(low, high)` and the matrix-vector product
  `dot(matrix, vector)`.
- `pricenet.layer`: the `Activation` enum and `Layer`, a fully connected layer
  with optional inverted dropout.
- `pricenet.batch_norm`: `BatchNormLayer`. It normalises one sample across its
  features, applies a learnable scale and shift, and keeps running statistics
  for inference.
- `pricenet.network`: `NeuralNetwork`, a stack of layers trained by mini-batch
  gradient descent. It supports momentum, L2 weight decay, dropout and
  normalisation after the hidden layers.
- `pricenet.batch_loader`: `BatchDataLoader`, which gives out consecutive
  mini-batches in order. The `shuffle` flags are accepted but the order never
  changes.
- `pricenet.csv_reader`: `read_regression_data(path, target_column_index, delimiter)`.
  It reads a numeric file with a header row and returns `(features, targets)`.
  Any problem raises `CSVReadError`.
- `pricenet.pipeline`: contains the following:
  - the `MinMax` range class;
  - `normalize_features`, `normalize_targets` and `denormalize_target` for
    min-max scaling;
  - `time_series_split`, a train/validation split that keeps the time order;
  - `format_vector` and `format_features_summary` for text output;
  - `run_training_pipeline` for a complete training run;
  - the command-line entry point `main`.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Command line

```
pricenet [PATH]
```

`PATH` defaults to `XAUUSD.csv` in the current directory. The file must have a
header row, and every data row must contain numbers only. Column index 3 is the
target, the closing price, and all other columns are features.

The command carries out these steps:

1. It scales every feature column and the target to the range [0, 1].
2. It keeps the last 20% of the rows, in their original order, for validation.
3. It trains a network with layers of 64, 32 and 1 units. The hidden layers use
   ReLU, dropout 0.1 and normalisation; training uses momentum 0.9 and weight
   decay 1e-4, for 200 epochs in batches of 32. The training error, and the
   validation error when there is a validation set, is printed every 20 epochs.
4. It prints the final mean squared errors on the scaled data.
5. It prints up to five validation predictions, converted back to prices, next
   to the true values.

If the file cannot be read, the command prints the error and stops.

## Library use

```python
from pricenet.csv_reader import read_regression_data
from pricenet.network import NeuralNetwork
from pricenet.pipeline import normalize_features, normalize_targets, time_series_split

features, targets = read_regression_data("prices.csv", 3, ",")
scaled_features, _ = normalize_features(features)
scaled_targets, target_params = normalize_targets(targets)
x_train, y_train, x_val, y_val = time_series_split(scaled_features, scaled_targets, 0.2)

net = NeuralNetwork(
    [len(x_train[0]), 16, 1],
    ["relu", "linear"],
    learning_rate=0.01,
    dropout_rate=0.0,
    momentum=0.9,
    weight_decay=0.0,
    batch_norm=False,
)
net.train(x_train, y_train, 50, 16, 10, x_val, y_val)
print(net.evaluate_regression(x_val, y_val))
```

## What it does not do

- It does not save or load trained networks. A network exists only for the run
  that trains it.
- The command has no mode for predicting from new data without training first.
- Batches are never shuffled.
- The network produces a single output value.

## Running the tests

```
pip install .[test]
pytest
```