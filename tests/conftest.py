"""
Pytest configuration and shared fixtures for the census tests.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from pyspark.sql import SparkSession


@pytest.fixture(scope="session")
def spark() -> SparkSession:
    """
    Create a SparkSession for testing.

    Uses session scope to reuse the same Spark context across all tests,
    which significantly speeds up test execution. local[2] gives two
    worker threads, enough to run workers concurrently.
    """
    spark = (
        SparkSession.builder
        .appName("pytest-dna-census")
        .master("local[2]")
        .config("spark.ui.enabled", "false")  # Disable Spark UI for tests
        .config("spark.driver.memory", "1g")
        .getOrCreate()
    )

    # Set log level to reduce noise during tests
    spark.sparkContext.setLogLevel("WARN")

    yield spark

    spark.stop()


@pytest.fixture(scope="session")
def sc(spark: SparkSession):
    """
    Get SparkContext from the SparkSession fixture.

    Useful for RDD-level tests.
    """
    return spark.sparkContext


@pytest.fixture
def write_fasta(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a sequence file into a temporary source directory."""
    source_dir = tmp_path / "sequences"
    source_dir.mkdir()

    def _write(name: str, content: str) -> Path:
        path = source_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
