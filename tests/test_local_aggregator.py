"""
Tests for src/dna_census/local_aggregator.py.
"""

import pytest

from src.dna_census.local_aggregator import AggregatorFinalizedError, LocalAggregator


class TestLocalAggregator:
    """In-mapper combining of per-identifier counts."""

    def test_repeated_contributions_are_summed(self) -> None:
        aggregator = LocalAggregator()
        aggregator.add("x")
        aggregator.add("x")
        aggregator.add("y", 5)
        aggregator.add("x", 3)

        assert aggregator.finalize() == {"x": 5, "y": 5}

    def test_zero_delta_does_not_materialize_identifier(self) -> None:
        aggregator = LocalAggregator()
        aggregator.add("empty", 0)

        assert len(aggregator) == 0
        assert aggregator.finalize() == {}

    def test_negative_delta_rejected(self) -> None:
        aggregator = LocalAggregator()

        with pytest.raises(ValueError):
            aggregator.add("x", -1)

    def test_add_after_finalize_fails(self) -> None:
        """A late contribution raises instead of being dropped."""
        aggregator = LocalAggregator()
        aggregator.add("x")
        partial = aggregator.finalize()

        with pytest.raises(AggregatorFinalizedError):
            aggregator.add("x")

        assert partial == {"x": 1}
        assert aggregator.is_finalized

    def test_finalize_twice_fails(self) -> None:
        aggregator = LocalAggregator()
        aggregator.finalize()

        with pytest.raises(AggregatorFinalizedError):
            aggregator.finalize()

    def test_finalized_partial_is_a_plain_copy(self) -> None:
        """Mutating the handed-off dict does not reach back into the aggregator."""
        aggregator = LocalAggregator()
        aggregator.add("x", 2)
        partial = aggregator.finalize()
        partial["x"] = 100

        assert type(partial) is dict
        assert len(aggregator) == 1

    def test_misuse_error_is_runtime_error(self) -> None:
        assert issubclass(AggregatorFinalizedError, RuntimeError)
