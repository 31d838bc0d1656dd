"""
DNA Census: Pattern Counter

Counts OVERLAPPING occurrences of a regular expression in one sequence.
After a match starting at position p the search restarts at p + 1, not at
the end of the match:

    count_occurrences("AAAA", re.compile("AA")) -> 3   (offsets 0, 1, 2)
    count_occurrences("ABAB", re.compile("AB")) -> 2

Matches must start inside the text (positions 0 .. len(text) - 1). An
empty text therefore yields 0, and a pattern that can match the empty
string is counted once per start position instead of looping forever.
"""

import re


def count_occurrences(text: str, pattern: re.Pattern[str]) -> int:
    """
    Count overlapping matches of pattern in text.

    Args:
        text: The full sequence text
        pattern: Compiled query pattern (shared read-only by all workers)

    Returns:
        Number of positions at which a match starts
    """
    total = 0
    position = 0
    end = len(text)

    while position < end:
        match = pattern.search(text, position)
        if match is None or match.start() >= end:
            break
        total += 1
        position = match.start() + 1

    return total
