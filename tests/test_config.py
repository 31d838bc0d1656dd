"""
Tests for src/dna_census/config.py.
"""

import re

import pytest

from src.dna_census.config import (
    USAGE,
    CensusConfig,
    CensusError,
    PatternError,
    UsageError,
    compile_query,
    parse_args,
)


class TestParseArgs:
    """Command-line parameters."""

    def test_query_directory_and_nodes(self) -> None:
        config = parse_args(["AA", "/data/dna", "node1", "node2"])

        assert config == CensusConfig("AA", "/data/dna", ("node1", "node2"), 1)

    def test_threads_option(self) -> None:
        assert parse_args(["--threads", "4", "AA", "/d", "n1"]).threads_per_node == 4
        assert parse_args(["AA", "/d", "n1", "--threads=2"]).threads_per_node == 2

    @pytest.mark.parametrize("argv", [[], ["AA"]])
    def test_too_few_arguments(self, argv: list[str]) -> None:
        with pytest.raises(UsageError, match="Invalid number of arguments"):
            parse_args(argv)

    def test_missing_nodes(self) -> None:
        with pytest.raises(UsageError, match="Missing node names"):
            parse_args(["AA", "/data/dna"])

    @pytest.mark.parametrize(
        "argv",
        [
            ["--threads", "zero", "AA", "/d", "n1"],
            ["--threads", "0", "AA", "/d", "n1"],
            ["AA", "/d", "n1", "--threads"],
        ],
    )
    def test_bad_threads(self, argv: list[str]) -> None:
        with pytest.raises(UsageError):
            parse_args(argv)

    def test_usage_describes_every_argument(self) -> None:
        for name in ("<query>", "<directory>", "<node>", "--threads"):
            assert name in USAGE


class TestCompileQuery:
    """Query pattern compilation."""

    def test_valid_pattern(self) -> None:
        pattern = compile_query("A[CG]T")

        assert isinstance(pattern, re.Pattern)
        assert pattern.pattern == "A[CG]T"

    def test_invalid_pattern(self) -> None:
        with pytest.raises(PatternError, match=r"A\[CG"):
            compile_query("A[CG")

    def test_errors_share_a_base_class(self) -> None:
        assert issubclass(UsageError, CensusError)
        assert issubclass(PatternError, CensusError)
