"""Single-pattern rewrite pipeline."""

from .lookbehind import strip_lookbehinds
from .named_groups import rename_named_groups


def transform_pattern(pattern: str, escape_depth: int = 1) -> str:
    """Rename named groups, then strip lookbehinds, from one regex body."""
    renamed = rename_named_groups(pattern, escape_depth)
    return strip_lookbehinds(renamed, escape_depth)
