"""
DNA Census: job parameters, usage text and query compilation.

All checks in this module run before any Spark work starts, so a bad
command line or an invalid query never launches a worker.
"""

import re
from typing import NamedTuple

USAGE = """\
Usage: python -m src.dna_census.census_job [--threads <n>] <query> <directory> <node> [<node> ...]
<query> is the query sequence, a regular expression.
<directory> is the name of the directory on each node's local hard disk
    containing the data files to be analyzed.
<node> is the name of a cluster node on which to run the analysis. One or
    more node names must be specified.
--threads <n> is the number of mapper threads per node (default: 1)."""


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CensusError(Exception):
    """Base class for census job failures."""


class UsageError(CensusError):
    """The command line is missing parameters or holds invalid ones."""


class PatternError(CensusError):
    """The query is not a valid regular expression."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class CensusConfig(NamedTuple):
    query: str
    directory: str
    nodes: tuple[str, ...]
    threads_per_node: int = 1


def _parse_threads(value: str) -> int:
    try:
        threads = int(value)
    except ValueError:
        raise UsageError(f"Invalid thread count: {value!r}.") from None
    if threads < 1:
        raise UsageError(f"Thread count must be at least 1, got {threads}.")
    return threads


def parse_args(argv: list[str]) -> CensusConfig:
    """
    Build a CensusConfig from command-line arguments.

    Args:
        argv: Arguments without the program name

    Returns:
        The parsed configuration

    Raises:
        UsageError: If the query, the directory or every node is missing,
            or if --threads is malformed
    """
    threads = 1
    positional: list[str] = []

    args = iter(argv)
    for arg in args:
        if arg == "--threads":
            value = next(args, None)
            if value is None:
                raise UsageError("Missing value for --threads.")
            threads = _parse_threads(value)
        elif arg.startswith("--threads="):
            threads = _parse_threads(arg.split("=", 1)[1])
        else:
            positional.append(arg)

    if len(positional) < 2:
        raise UsageError("Invalid number of arguments.")
    if len(positional) == 2:
        raise UsageError("Missing node names.")

    query, directory, *nodes = positional
    return CensusConfig(query, directory, tuple(nodes), threads)


def compile_query(query: str) -> re.Pattern[str]:
    """
    Compile the query sequence into a regular expression.

    Raises:
        PatternError: If the query is not a valid regular expression
    """
    try:
        return re.compile(query)
    except re.error as exc:
        raise PatternError(f"Invalid query pattern {query!r}: {exc}") from exc
