"""
DNA Census: Census Job (orchestrator)

Counts the occurrences of a query sequence in every named DNA sequence of
a directory of FASTA-style files and prints one line per sequence id,
ranked by occurrence count (descending), ties broken by id (ascending).

Algorithm:
    1. Assign the source files round-robin to workers, one worker per
       mapper thread of each target node
    2. mapPartitions: each worker streams its files through
       parse -> count -> LocalAggregator and emits ONE partial aggregate
    3. collect: the driver waits for every worker (the join barrier)
    4. Merge all partials and rank them into the report

Workers share nothing but the read-only compiled pattern. If any worker
fails, the whole job fails and no report is printed: a partial census
would under-count without saying so.

Usage:
    python -m src.dna_census.census_job <query> <directory> <node> [<node> ...]
"""

import re
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import NamedTuple

from py4j.protocol import Py4JJavaError
from pyspark.errors import PySparkException
from pyspark.sql import SparkSession

from src.common.data_loader import iter_lines, list_source_files
from src.common.spark_session import create_spark_session, get_logger
from src.dna_census.config import (
    USAGE,
    CensusConfig,
    CensusError,
    PatternError,
    UsageError,
    compile_query,
    parse_args,
)
from src.dna_census.global_merger import CountEntry, merge_partials, order_entries, write_report
from src.dna_census.local_aggregator import LocalAggregator
from src.dna_census.pattern_counter import count_occurrences
from src.dna_census.sequence_parser import parse_records

LOGGER_NAME = "DnaCensus.CensusJob"


class WorkerFailure(CensusError):
    """A worker could not read one of its assigned files."""

    def __init__(self, worker_id: str, path: str, cause: BaseException) -> None:
        super().__init__(f"worker {worker_id} failed reading {path}: {cause}")
        self.worker_id = worker_id
        self.path = path
        self.cause = cause


class CensusJobError(CensusError):
    """The job did not produce a complete set of partial aggregates."""


class WorkerAssignment(NamedTuple):
    worker_id: str
    node: str
    files: tuple[str, ...]


# ---------------------------------------------------------------------------
# Work assignment
# ---------------------------------------------------------------------------


def assign_files(
    files: Iterable[str | Path],
    nodes: Iterable[str],
    threads_per_node: int = 1,
) -> list[WorkerAssignment]:
    """
    Distribute files over workers, round-robin.

    Every node gets threads_per_node workers named "<node>/<slot>". Each
    file goes to exactly one worker and keeps its relative order within
    that worker. Paths are made absolute because Spark's Python workers
    run in their own working directory. Workers left without files are
    still returned; they contribute an empty partial aggregate.
    """
    workers = [
        (f"{node}/{slot}", node) for node in nodes for slot in range(threads_per_node)
    ]
    if not workers:
        raise UsageError("At least one node is required.")

    buckets: list[list[str]] = [[] for _ in workers]
    for index, path in enumerate(files):
        buckets[index % len(workers)].append(str(Path(path).absolute()))

    return [
        WorkerAssignment(worker_id, node, tuple(bucket))
        for (worker_id, node), bucket in zip(workers, buckets)
    ]


# ---------------------------------------------------------------------------
# Worker side
# ---------------------------------------------------------------------------


def run_worker(assignment: WorkerAssignment, pattern: re.Pattern[str]) -> dict[str, int]:
    """
    Run parse -> count -> aggregate over one worker's files.

    Files are processed in assignment order, records in file order.

    Returns:
        The worker's finalized partial aggregate

    Raises:
        WorkerFailure: If a file cannot be opened, read or decoded
    """
    aggregator = LocalAggregator()

    for path in assignment.files:
        try:
            for record in parse_records(iter_lines(path)):
                aggregator.add(record.identifier, count_occurrences(record.text, pattern))
        except (OSError, UnicodeDecodeError) as exc:
            raise WorkerFailure(assignment.worker_id, path, exc) from exc

    return aggregator.finalize()


def count_partition(pattern: re.Pattern[str]):
    """Return a mapPartitions function that runs every assignment it receives."""

    def _count(partition: Iterable[WorkerAssignment]) -> Iterator[tuple[str, dict[str, int]]]:
        for assignment in partition:
            yield (assignment.worker_id, run_worker(assignment, pattern))

    return _count


# ---------------------------------------------------------------------------
# Driver side
# ---------------------------------------------------------------------------


def _describe_failure(exc: Exception) -> str:
    """
    Pick the most useful line out of a (possibly huge) Spark error.

    The embedded Python traceback also quotes the `raise WorkerFailure(...)`
    source line, so only the exception line itself ("...WorkerFailure: msg")
    is taken.
    """
    text = str(exc)
    for line in text.splitlines():
        if f"{WorkerFailure.__name__}: " in line:
            return line.strip()
    return text.splitlines()[0] if text else repr(exc)


def run_census(
    spark: SparkSession,
    files: Iterable[str | Path],
    config: CensusConfig,
    pattern: re.Pattern[str],
) -> list[CountEntry]:
    """
    Run the census over files and return the ranked entries.

    Args:
        spark: Active SparkSession (its task pool runs the workers)
        files: Source files; each is read by exactly one worker
        config: Job parameters (nodes, threads per node)
        pattern: Compiled query

    Returns:
        Ranked list of CountEntry

    Raises:
        CensusJobError: If any worker failed or did not report
    """
    sc = spark.sparkContext
    log = get_logger(spark, LOGGER_NAME)

    assignments = assign_files(files, config.nodes, config.threads_per_node)
    for assignment in assignments:
        log.info(
            f"{assignment.worker_id} on {assignment.node}: {len(assignment.files)} file(s)"
        )

    assignments_rdd = sc.parallelize(assignments, numSlices=len(assignments))

    try:
        partials = assignments_rdd.mapPartitions(count_partition(pattern)).collect()
    except (Py4JJavaError, PySparkException) as exc:
        raise CensusJobError(f"Census job failed: {_describe_failure(exc)}") from exc

    expected = {assignment.worker_id for assignment in assignments}
    reported = {worker_id for worker_id, _ in partials}
    if reported != expected or len(partials) != len(assignments):
        missing = ", ".join(sorted(expected - reported)) or "none"
        raise CensusJobError(
            f"Census job failed: expected {len(assignments)} partial aggregates, "
            f"got {len(partials)} (missing: {missing})"
        )

    global_aggregate = merge_partials(partial for _, partial in partials)
    log.info(f"Merged {len(partials)} partial(s) into {len(global_aggregate)} sequence id(s)")

    return order_entries(global_aggregate)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the DNA census. Returns the process exit code."""
    args = sys.argv[1:] if argv is None else argv

    try:
        config = parse_args(args)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    try:
        pattern = compile_query(config.query)
        files = list_source_files(config.directory)
    except PatternError as exc:
        print(exc, file=sys.stderr)
        return 2
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 2

    spark = create_spark_session(__file__)
    try:
        entries = run_census(spark, files, config, pattern)
    except CensusJobError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        spark.stop()

    write_report(entries)
    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
