"""Rewrite patterns passed as string literals to the ``RegExp`` constructor."""

import re
from typing import Match

from .lookbehind import LOOKBEHIND_RE, strip_lookbehinds
from .named_groups import NAMED_GROUP_RE, rename_named_groups

REGEXP_CALL_RE = re.compile(
    r"(?P<prefix>\b(?:new\s+)?RegExp\s*\(\s*)"
    r"(?P<quote>[`\"'])"
    r"(?P<pattern>(?:\\.|(?!(?P=quote))[^\\])*)"
    r"(?P=quote)",
    re.DOTALL,
)


def transform_regexp_constructors(code: str, escape_depth: int = 2) -> str:
    """Rewrite the quoted first argument of every ``RegExp`` call in ``code``.

    Args:
        code: Source text to scan.
        escape_depth: How many characters spell one regex backslash inside
            the quoted argument. Source files use 2; pass 1 when the quotes
            wrap an already unescaped body.

    Returns:
        ``code`` with lookbehinds stripped and named groups renamed inside each
        matching call. The call prefix and quote character are kept as found.
    """

    def rewrite_call(match: Match[str]) -> str:
        pattern = match.group("pattern")
        new_pattern = pattern
        if LOOKBEHIND_RE.search(new_pattern):
            new_pattern = strip_lookbehinds(new_pattern, escape_depth)
        if NAMED_GROUP_RE.search(new_pattern):
            new_pattern = rename_named_groups(new_pattern, escape_depth)

        if new_pattern == pattern:
            return match.group(0)
        quote = match.group("quote")
        return f"{match.group('prefix')}{quote}{new_pattern}{quote}"

    return REGEXP_CALL_RE.sub(rewrite_call, code)
