"""
DNA Census: Global Merger (reducer)

Merges the partial aggregates of all workers and ranks the result.

Merge:
    GlobalAggregate[id] = sum over workers of partial.get(id, 0)

    Addition per key is commutative and associative, so partials can be
    merged all at once or pairwise as workers finish, in any order, and
    give the same result.

Ranking (total order):
    1. count, descending
    2. identifier, ascending (code point order, case-sensitive)

    Identifiers are unique keys, so no two entries tie on both.
"""

import sys
from collections import Counter
from collections.abc import Iterable, Mapping
from typing import NamedTuple, TextIO


class CountEntry(NamedTuple):
    identifier: str
    count: int


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------


def merge_pair(left: Mapping[str, int], right: Mapping[str, int]) -> dict[str, int]:
    """Pointwise sum of two aggregates. Neither input is modified."""
    merged = dict(left)
    for identifier, count in right.items():
        merged[identifier] = merged.get(identifier, 0) + count
    return merged


def merge_partials(partials: Iterable[Mapping[str, int]]) -> dict[str, int]:
    """
    Merge any number of partial aggregates into the global aggregate.

    Args:
        partials: One {identifier: count} mapping per worker; empty
            mappings are allowed and contribute nothing

    Returns:
        The global {identifier: count} mapping
    """
    total: Counter[str] = Counter()
    for partial in partials:
        total.update(partial)
    return dict(total)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def ranking_key(entry: tuple[str, int]) -> tuple[int, str]:
    """Sort key for (identifier, count): count descending, then identifier."""
    identifier, count = entry
    return (-count, identifier)


def comes_before(a: tuple[str, int], b: tuple[str, int]) -> bool:
    """Return True if entry a is ranked ahead of entry b."""
    return ranking_key(a) < ranking_key(b)


def order_entries(global_aggregate: Mapping[str, int]) -> list[CountEntry]:
    """Rank a global aggregate into the report order."""
    return [
        CountEntry(identifier, count)
        for identifier, count in sorted(global_aggregate.items(), key=ranking_key)
    ]


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


def format_entry(entry: CountEntry) -> str:
    """Render one report line: identifier, a tab, the count, a newline."""
    return "%s\t%d\n" % (entry.identifier, entry.count)


def write_report(entries: Iterable[CountEntry], stream: TextIO | None = None) -> None:
    """Write the ranked report, flushing after every line."""
    out = stream if stream is not None else sys.stdout
    for entry in entries:
        out.write(format_entry(entry))
        out.flush()
