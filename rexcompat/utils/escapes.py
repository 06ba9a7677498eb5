"""Backslash bookkeeping shared by the pattern transformers.

A pattern body can reach the transformers in two spellings. At escape depth 1
it is a bare regex body, so ``\\(`` is a literal parenthesis. At escape depth 2
it is still wrapped in a quoted source string, so every regex-level backslash
is written twice and the same literal parenthesis reads ``\\\\(``.
"""

BACKSLASH = "\\"


def backslash_run(text: str, end: int) -> int:
    """Count the consecutive backslashes that end right before ``end``."""
    count = 0
    while end - count > 0 and text[end - count - 1] == BACKSLASH:
        count += 1
    return count


def run_escapes_next(run_length: int, escape_depth: int = 1) -> bool:
    """Whether a run of ``run_length`` backslashes escapes the next character."""
    return (run_length // escape_depth) % 2 == 1


def is_escaped(text: str, pos: int, escape_depth: int = 1) -> bool:
    """Whether the character at ``pos`` is escaped at the regex level."""
    return run_escapes_next(backslash_run(text, pos), escape_depth)
