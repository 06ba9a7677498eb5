"""Run the rewrite passes over whole source units (files or bundle chunks)."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..transformers.constructors import transform_regexp_constructors
from ..transformers.literals import transform_regex_literals
from .detection import UnsupportedCounts, count_unsupported, has_lookbehind, has_named_groups

logger = logging.getLogger(__name__)


@dataclass
class ChunkResult:
    """Outcome of processing one source unit."""
    unit_name: str
    code: str
    changed: bool = False
    before: UnsupportedCounts = field(default_factory=UnsupportedCounts)
    after: UnsupportedCounts = field(default_factory=UnsupportedCounts)


def read_source(path: Path) -> str:
    """Read a source file without translating its line endings."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: Path, code: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(code)


def process_chunk(code: str, unit_name: str, escape_depth: int = 2) -> ChunkResult:
    """Rewrite unsupported regex syntax in one unit of source text.

    Args:
        code: The unit's source text.
        unit_name: File name or chunk id, used to key diagnostics.
        escape_depth: Escape depth of quoted ``RegExp`` arguments.

    Returns:
        A ChunkResult holding the rewritten text and the construct counts
        before and after. Leftover constructs are logged, never raised.
    """
    named_groups = has_named_groups(code)
    if not named_groups and not has_lookbehind(code):
        return ChunkResult(unit_name=unit_name, code=code)

    logger.info("Processing chunk: %s", unit_name)
    before = count_unsupported(code)

    result = code
    if named_groups:
        result = transform_regex_literals(result)
    result = transform_regexp_constructors(result, escape_depth)

    after = count_unsupported(result)
    if after.named_groups:
        logger.warning("%d named groups remaining in %s", after.named_groups, unit_name)
    if after.lookbehinds:
        logger.warning("%d lookbehinds remaining in %s", after.lookbehinds, unit_name)
    if after.named_backrefs:
        logger.warning("%d named backreferences remaining in %s", after.named_backrefs, unit_name)

    return ChunkResult(
        unit_name=unit_name,
        code=result,
        changed=result != code,
        before=before,
        after=after,
    )


def process_build_dir(build_dir: Path, pattern: str = "**/*.js", escape_depth: int = 2) -> List[ChunkResult]:
    """Process every file under ``build_dir`` matching ``pattern`` in place.

    Each file is one unit, named by its path relative to ``build_dir``.
    """
    results = []
    for path in sorted(build_dir.glob(pattern)):
        if not path.is_file():
            continue
        code = read_source(path)
        result = process_chunk(code, path.relative_to(build_dir).as_posix(), escape_depth)
        if result.changed:
            write_source(path, result.code)
        results.append(result)
    return results
