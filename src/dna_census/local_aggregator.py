"""
DNA Census: Local Aggregator (in-mapper combiner)

Each worker folds its (identifier, count) contributions into one dict
before anything leaves the worker, so only one pair per distinct
identifier is shipped to the merge step.

The aggregator has two states. While open it accepts add(); finalize()
hands off the partial aggregate and closes it for good. Any contribution
after that is a scheduling bug and raises instead of being dropped.
"""

from collections import defaultdict


class AggregatorFinalizedError(RuntimeError):
    """A contribution reached an aggregator that was already finalized."""


class LocalAggregator:
    """Per-worker running totals of occurrence counts by identifier."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = defaultdict(int)
        self._finalized = False

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def __len__(self) -> int:
        return len(self._counts)

    def add(self, identifier: str, delta: int = 1) -> None:
        """
        Add delta occurrences for identifier.

        A delta of 0 leaves the aggregate untouched, so identifiers
        without matches never appear in it.

        Raises:
            AggregatorFinalizedError: If the aggregator was finalized
            ValueError: If delta is negative
        """
        if self._finalized:
            raise AggregatorFinalizedError(
                f"Contribution for {identifier!r} after the aggregator was finalized"
            )
        if delta < 0:
            raise ValueError(f"Counts only grow, got delta={delta} for {identifier!r}")
        if delta:
            self._counts[identifier] += delta

    def finalize(self) -> dict[str, int]:
        """
        Close the aggregator and return its partial aggregate.

        Returns:
            A plain dict {identifier: count}; the aggregator keeps no
            reference the caller could mutate through

        Raises:
            AggregatorFinalizedError: If called a second time
        """
        if self._finalized:
            raise AggregatorFinalizedError("Aggregator was already finalized")
        self._finalized = True
        return dict(self._counts)
