"""A small dense neural network for regression on tabular price data."""

__version__ = "0.1.0"