"""Sequential mini-batch iteration over a feature/target dataset."""

from collections.abc import Iterator, Sequence

Batch = tuple[list[Sequence[float]], list[float]]


class BatchDataLoader:
    """Hands out consecutive mini-batches of ``(features, targets)``.

    Batches are always taken in order, which suits time-series data; the
    ``shuffle`` flags are accepted but do not change the order.
    """

    def __init__(
        self,
        features: Sequence[Sequence[float]],
        targets: Sequence[float],
        batch_size: int,
        shuffle: bool = False,
    ) -> None:
        if len(features) != len(targets):
            raise ValueError("Features and targets must have the same number of samples.")
        if batch_size <= 0:
            raise ValueError("Batch size must be positive.")
        self._features = features
        self._targets = targets
        self._batch_size = batch_size
        self.shuffle = shuffle
        self._position = 0

    def __iter__(self) -> Iterator[Batch]:
        """Start over from the first sample and yield every batch."""
        self.reset()
        while (batch := self.next_batch()) is not None:
            yield batch

    def __len__(self) -> int:
        return self.total_batches

    def next_batch(self) -> Batch | None:
        """Return the next batch, or ``None`` once every sample was served."""
        if self._position >= len(self._features):
            return None
        end = min(self._position + self._batch_size, len(self._features))
        batch = (
            list(self._features[self._position:end]),
            list(self._targets[self._position:end]),
        )
        self._position = end
        return batch

    def reset(self, reshuffle: bool = False) -> None:
        """Rewind to the first sample, typically at the start of an epoch."""
        del reshuffle
        self._position = 0

    @property
    def total_batches(self) -> int:
        """Number of batches in one pass over the data."""
        return -(-len(self._features) // self._batch_size)

    @property
    def num_samples(self) -> int:
        """Number of samples in the dataset."""
        return len(self._features)

    def batch_size_at(self, batch_start: int) -> int:
        """Size of the batch that starts at sample ``batch_start``."""
        if batch_start >= len(self._features):
            return 0
        return min(self._batch_size, len(self._features) - batch_start)