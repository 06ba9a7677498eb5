"""Rewrite ``/pattern/flags`` regex literals found in JavaScript source."""

from typing import Match

import regex

from .named_groups import NAMED_GROUP_RE
from .pipeline import transform_pattern

# Keywords after which a slash starts an expression rather than a division.
EXPRESSION_KEYWORDS = (
    "return", "typeof", "instanceof", "in", "of", "new", "delete", "void",
    "throw", "case", "do", "else", "yield", "await",
)

_STARTS_EXPRESSION = r"(?<=\b(?:" + "|".join(EXPRESSION_KEYWORDS) + r")[ \t]*)"
_AFTER_VALUE = r"(?<![)\]\w$][ \t]*)"

REGEX_LITERAL_RE = regex.compile(
    r"(?:" + _STARTS_EXPRESSION + r"|" + _AFTER_VALUE + r")"
    r"/(?![*/])"
    r"(?P<body>(?:[^\\/\r\n\[]|\\.|\[(?:[^\]\\\r\n]|\\.)*\])+)"
    r"/(?P<flags>[dgimsuvy]*)"
)

# An empty body would turn the literal into a line comment.
EMPTY_BODY = "(?:)"


def _rewrite_literal(match: Match[str]) -> str:
    body = match.group("body")
    if not NAMED_GROUP_RE.search(body):
        return match.group(0)

    new_body = transform_pattern(body) or EMPTY_BODY
    return f"/{new_body}/{match.group('flags')}"


def transform_regex_literals(code: str) -> str:
    """Rewrite every regex literal in ``code`` that declares named groups.

    Literals without a named group opening are passed through unchanged, as
    is everything between literals.
    """
    return REGEX_LITERAL_RE.sub(_rewrite_literal, code)
