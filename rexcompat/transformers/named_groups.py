"""Named capture group renamer.

Rewrites ``(?<name>...)`` openings into plain ``(`` openings and ``\\k<name>``
backreferences into positional ``\\N`` references, numbering names in the
order they first appear.
"""

import logging
import re
from typing import List, Match

from ..utils.escapes import is_escaped, run_escapes_next

logger = logging.getLogger(__name__)

GROUP_NAME = r"[a-zA-Z_][a-zA-Z0-9_]*"

NAMED_GROUP_RE = re.compile(r"\(\?<(" + GROUP_NAME + r")>")
NAMED_BACKREF_RE = re.compile(r"(\\+)k<(" + GROUP_NAME + r")>")


def collect_group_names(pattern: str, escape_depth: int = 1) -> List[str]:
    """Return the distinct group names of ``pattern`` in first-seen order.

    Name ``names[i]`` belongs to capture group ``i + 1`` once the openings are
    rewritten in place.
    """
    names: List[str] = []
    for match in NAMED_GROUP_RE.finditer(pattern):
        if is_escaped(pattern, match.start(), escape_depth):
            continue
        if match.group(1) not in names:
            names.append(match.group(1))
    return names


def rename_named_groups(pattern: str, escape_depth: int = 1) -> str:
    """Replace named groups and named backreferences with positional ones.

    Args:
        pattern: The regex body to rewrite.
        escape_depth: 1 for a bare body, 2 for a body still embedded in a
            quoted source string.

    Returns:
        The rewritten body, or ``pattern`` itself when it declares no named
        groups.
    """
    names = collect_group_names(pattern, escape_depth)
    if not names:
        return pattern

    def open_plain_group(match: Match[str]) -> str:
        if is_escaped(pattern, match.start(), escape_depth):
            return match.group(0)
        return "("

    renamed = NAMED_GROUP_RE.sub(open_plain_group, pattern)

    def positional_backref(match: Match[str]) -> str:
        slashes, name = match.group(1), match.group(2)
        if not run_escapes_next(len(slashes), escape_depth):
            return match.group(0)
        if name not in names:
            logger.debug("Backreference to undeclared group %r left as is", name)
            return match.group(0)

        # A run of 3 at depth 2 still means a single regex backslash.
        kept = slashes[:len(slashes) - len(slashes) % escape_depth]
        reference = f"{kept}{names.index(name) + 1}"
        if renamed[match.end():match.end() + 1].isdigit():
            reference += "(?:)"
        return reference

    return NAMED_BACKREF_RE.sub(positional_backref, renamed)
