"""
DNA Census: Sequence Parser

Rebuilds named sequences from the line-oriented (FASTA-style) input:

    >seq1 description
    AAAA
    CC
    >seq2
    GG

A header line starts with '>' and names the record; the identifier runs up
to the first whitespace. Every other line is data and is appended, with no
separator, to the record opened by the latest header. Data lines seen
before the first header have no record to join and are dropped.

Line terminators are stripped here as well, so raw lines from any source
can be fed in directly, not only the already-stripped ones from
src.common.data_loader.iter_lines.

Records are emitted as soon as they close (next header or end of input),
so memory is bounded by the largest single record.
"""

from collections.abc import Iterable, Iterator
from typing import NamedTuple

HEADER_MARKER = ">"


class SequenceRecord(NamedTuple):
    identifier: str
    text: str


def is_header(line: str) -> bool:
    """Return True if the line opens a new record."""
    return line.startswith(HEADER_MARKER)


def parse_header(line: str) -> str:
    """
    Extract the sequence identifier from a header line.

    Input:  '>seq1 Homo sapiens chromosome 1'
    Output: 'seq1'
    """
    remainder = line[len(HEADER_MARKER):]
    if not remainder or remainder[0].isspace():
        return ""
    return remainder.split(maxsplit=1)[0]


def parse_records(lines: Iterable[str]) -> Iterator[SequenceRecord]:
    """
    Turn a stream of lines into a lazy stream of SequenceRecord.

    Args:
        lines: Lines of one file, in file order, without line terminators

    Yields:
        One SequenceRecord per header, in file order
    """
    identifier: str | None = None
    chunks: list[str] = []

    for line in lines:
        line = line.rstrip("\r\n")
        if is_header(line):
            if identifier is not None:
                yield SequenceRecord(identifier, "".join(chunks))
            identifier = parse_header(line)
            chunks = []
        elif identifier is not None:
            chunks.append(line)

    if identifier is not None:
        yield SequenceRecord(identifier, "".join(chunks))
