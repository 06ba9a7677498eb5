"""Lookbehind assertion stripper.

Removing an assertion drops the constraint it expressed. The result matches
more than the original did, which is accepted in exchange for running on
engines that reject lookbehind outright.
"""

import logging
import re
from typing import Match, Optional

from ..utils.escapes import BACKSLASH, is_escaped, run_escapes_next

logger = logging.getLogger(__name__)

LOOKBEHIND_RE = re.compile(r"\(\?<[=!]")
NEUTRAL_GROUP = "(?:"


def find_lookbehind(pattern: str, escape_depth: int = 1) -> Optional[Match[str]]:
    """Return the leftmost unescaped lookbehind opening, if any."""
    for match in LOOKBEHIND_RE.finditer(pattern):
        if not is_escaped(pattern, match.start(), escape_depth):
            return match
    return None


def find_assertion_end(pattern: str, start: int, escape_depth: int = 1) -> Optional[int]:
    """Find the end of a group whose opening token ends at ``start``.

    Scans forward with a nesting depth of 1. Escaped characters are consumed
    together with their backslashes and never change the depth.

    Returns:
        The index just past the matching close paren, or None when the text
        runs out first.
    """
    depth = 1
    i = start
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == BACKSLASH:
            run = 0
            while i + run < length and pattern[i + run] == BACKSLASH:
                run += 1
            i += run
            if run_escapes_next(run, escape_depth):
                i += 1
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def strip_lookbehinds(pattern: str, escape_depth: int = 1) -> str:
    """Delete every ``(?<=...)`` and ``(?<!...)`` assertion from ``pattern``.

    Lookaheads are left alone. If an assertion has no matching close paren,
    its opening token becomes ``(?:`` and processing stops there.
    """
    result = pattern
    while True:
        opening = find_lookbehind(result, escape_depth)
        if opening is None:
            return result

        end = find_assertion_end(result, opening.end(), escape_depth)
        if end is None:
            logger.debug("Unbalanced lookbehind at %d, neutralising its opening", opening.start())
            return result[:opening.start()] + NEUTRAL_GROUP + result[opening.end():]

        result = result[:opening.start()] + result[end:]
