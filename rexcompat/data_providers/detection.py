"""Cheap existence checks for constructs the target engine rejects."""

import re
from dataclasses import dataclass

from ..transformers.lookbehind import LOOKBEHIND_RE
from ..transformers.named_groups import GROUP_NAME, NAMED_GROUP_RE

NAMED_BACKREF_TOKEN_RE = re.compile(r"\\k<" + GROUP_NAME + r">")


@dataclass
class UnsupportedCounts:
    """Number of unsupported constructs found in a piece of text."""
    named_groups: int = 0
    lookbehinds: int = 0
    named_backrefs: int = 0

    @property
    def total(self) -> int:
        return self.named_groups + self.lookbehinds + self.named_backrefs


def has_named_groups(text: str) -> bool:
    return NAMED_GROUP_RE.search(text) is not None


def has_lookbehind(text: str) -> bool:
    return LOOKBEHIND_RE.search(text) is not None


def count_unsupported(text: str) -> UnsupportedCounts:
    """Count named groups, lookbehinds and named backreferences in ``text``."""
    return UnsupportedCounts(
        named_groups=len(NAMED_GROUP_RE.findall(text)),
        lookbehinds=len(LOOKBEHIND_RE.findall(text)),
        named_backrefs=len(NAMED_BACKREF_TOKEN_RE.findall(text)),
    )
