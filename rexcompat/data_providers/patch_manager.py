"""Exact-string patches for known third-party files."""

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .chunk_processor import process_chunk, read_source, write_source
from .detection import count_unsupported

logger = logging.getLogger(__name__)


class PatchConfigError(ValueError):
    """Raised when a patch table cannot be loaded."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class PatchStatus(str, Enum):
    PATCHED = "patched"
    ALREADY_COMPATIBLE = "already-compatible"
    SUSPECT = "pattern-not-found-but-suspect"
    NOT_FOUND = "file-not-found"
    SKIPPED = "skipped"


@dataclass
class Replacement:
    old: str
    new: str


@dataclass
class Companion:
    """Regex substitution applied only once an exact replacement has hit."""
    pattern: str
    replacement: str


@dataclass
class PatchTarget:
    id: str
    name: str
    files: List[str]
    replacements: List[Replacement]
    companions: List[Companion] = field(default_factory=list)
    fallback_transform: bool = False
    enabled: bool = True
    reason: str = ""


@dataclass
class PatchOutcome:
    target_id: str
    file: str
    status: PatchStatus
    detail: str = ""


@dataclass
class PatchReport:
    outcomes: List[PatchOutcome] = field(default_factory=list)

    @property
    def patched_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == PatchStatus.PATCHED)

    def by_status(self, status: PatchStatus) -> List[PatchOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == status]


class PatchManager:
    """Loads the patch table and applies it to files under a project root."""

    def __init__(self, config_path: Optional[Path] = None):
        self.targets: Dict[str, PatchTarget] = {}
        self.config_path = config_path or self.default_config_path()
        self.load_targets(self.config_path)

    @staticmethod
    def default_config_path() -> Path:
        return Path(__file__).parent.parent / "default_configs" / "patches.json"

    def load_targets(self, config_path: Path) -> None:
        """Load patch targets from a JSON table."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise PatchConfigError(config_path, "patch table not found") from None
        except json.JSONDecodeError as e:
            raise PatchConfigError(config_path, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise PatchConfigError(config_path, "top level must be an object")

        for target_id, target_data in data.items():
            try:
                self.targets[target_id] = PatchTarget(
                    id=target_id,
                    name=target_data.get("name", target_id),
                    files=list(target_data["files"]),
                    replacements=[Replacement(r["old"], r["new"]) for r in target_data.get("replacements", [])],
                    companions=[
                        Companion(c["pattern"], c["replacement"]) for c in target_data.get("companions", [])
                    ],
                    fallback_transform=target_data.get("fallback_transform", False),
                    enabled=target_data.get("enabled", True),
                    reason=target_data.get("reason", ""),
                )
            except (KeyError, TypeError, AttributeError) as e:
                raise PatchConfigError(config_path, f"malformed target {target_id!r}: {e}") from e

    def get_target(self, target_id: str) -> Optional[PatchTarget]:
        return self.targets.get(target_id)

    def list_targets(self) -> List[PatchTarget]:
        return list(self.targets.values())

    def apply(self, root: Path) -> PatchReport:
        """Apply every target to the files under ``root``."""
        report = PatchReport()
        for target in self.list_targets():
            report.outcomes.extend(self.apply_target(target, root))
        return report

    def apply_target(self, target: PatchTarget, root: Path) -> List[PatchOutcome]:
        if not target.enabled:
            logger.info("%s: patch skipped (%s)", target.name, target.reason or "disabled")
            return [PatchOutcome(target.id, file, PatchStatus.SKIPPED, target.reason) for file in target.files]
        return [self.apply_file(target, root, file) for file in target.files]

    def apply_file(self, target: PatchTarget, root: Path, file: str) -> PatchOutcome:
        path = root / file
        if not path.is_file():
            logger.info("%s: %s not found, skipping", target.name, file)
            return PatchOutcome(target.id, file, PatchStatus.NOT_FOUND)

        try:
            content = read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("%s: cannot read %s: %s", target.name, file, e)
            return PatchOutcome(target.id, file, PatchStatus.NOT_FOUND, str(e))

        patched, hits = self.patch_text(target, content)
        detail = f"{hits} exact replacement(s)"
        if not hits and target.fallback_transform:
            result = process_chunk(content, file)
            patched = result.code
            detail = "general transform"

        if patched != content:
            write_source(path, patched)
            logger.info("%s: %s patched (%s)", target.name, file, detail)
            return PatchOutcome(target.id, file, PatchStatus.PATCHED, detail)

        remaining = count_unsupported(content)
        if remaining.lookbehinds:
            logger.warning("%s: %s has lookbehind but no known pattern matched", target.name, file)
            return PatchOutcome(target.id, file, PatchStatus.SUSPECT, f"{remaining.lookbehinds} lookbehind(s)")
        return PatchOutcome(target.id, file, PatchStatus.ALREADY_COMPATIBLE)

    @staticmethod
    def patch_text(target: PatchTarget, content: str) -> Tuple[str, int]:
        """Apply the exact replacements of ``target``, then its companions.

        Returns:
            The new text and the number of replacements that hit.
        """
        hits = 0
        for replacement in target.replacements:
            if replacement.old in content:
                content = content.replace(replacement.old, replacement.new)
                hits += 1
        if hits:
            for companion in target.companions:
                content = re.sub(companion.pattern, lambda _: companion.replacement, content)
        return content, hits
