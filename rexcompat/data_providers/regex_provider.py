from dataclasses import dataclass
from typing import Iterable, List, Match, Optional, Tuple

import regex

from ..transformers.pipeline import transform_pattern
from .detection import count_unsupported


@dataclass
class GroupMatch:
    """Represents a matched group in the regex."""
    span: Tuple[int, int]
    value: str
    name: Optional[str] = None
    group_index: int = 0


class RegexProvider:
    """Rewrites patterns for the target engine and matches them against sample text."""

    def __init__(self, content: str):
        self.content = content

    def rewrite(self, pattern: str) -> str:
        """Return the pattern as it would be shipped to the target engine."""
        return transform_pattern(pattern)

    def validate_pattern(self, pattern: str) -> Optional[str]:
        """Check that a rewritten pattern uses no construct the target rejects.

        Returns:
            Error message string if invalid, None if valid.
        """
        counts = count_unsupported(pattern)
        if counts.lookbehinds:
            return "Error: Lookbehind '(?<=' / '(?<!' is not supported by the target engine."
        if counts.named_groups:
            return "Error: Named groups '(?<name>' are not supported by the target engine."
        if counts.named_backrefs:
            return "Error: Named backreferences '\\k<name>' are not supported by the target engine."
        return None

    def get_matches(self, pattern: str, mode: str = "finditer") -> Tuple[List[List[GroupMatch]], Optional[str]]:
        """
        Get matches for the given, already rewritten, pattern.

        Args:
            pattern: The regex pattern string.
            mode: 'match' or 'finditer' (default).

        Returns:
            A tuple containing:
            - A list of lists of GroupMatch objects (one list of groups per match).
            - An error message string if an error occurred, or None.
        """
        if not pattern:
            return [], None

        validation_error = self.validate_pattern(pattern)
        if validation_error:
            return [], validation_error

        try:
            compiled_pattern = regex.compile(pattern, flags=regex.MULTILINE)
        except regex.error as e:
            return [], f"Regex Error: {str(e)}"

        matches: Iterable[Match[str]] = []
        if mode == "match":
            match = compiled_pattern.match(self.content)
            if match:
                matches = [match]
        else:  # finditer
            matches = compiled_pattern.finditer(self.content)

        return [self._extract_groups(match) for match in matches], None

    def _extract_groups(self, match: Match[str]) -> List[GroupMatch]:
        """Extract groups from a match object."""
        groups = [GroupMatch(span=match.span(0), value=match.group(0), name=None, group_index=0)]

        names_by_index = {index: name for name, index in match.re.groupindex.items()}
        for i, value in enumerate(match.groups(), start=1):
            if value is None:
                continue
            groups.append(GroupMatch(
                span=match.span(i),
                value=value,
                name=names_by_index.get(i),
                group_index=i
            ))

        return groups
