"""Rich renderables for rewrite previews and run reports."""

from typing import Iterable

from rich import box
from rich.table import Table
from rich.text import Text

from ..data_providers.chunk_processor import ChunkResult
from ..data_providers.patch_manager import PatchReport, PatchStatus
from ..data_providers.regex_provider import GroupMatch


class CompatFormatter:
    """Formats match previews, patch reports and coverage summaries."""

    # Colors for capture groups (cycling)
    GROUP_STYLES = [
        "bold white on dark_cyan",
        "bold white on dark_green",
        "bold black on yellow",
        "bold white on dark_magenta",
        "bold white on dark_blue",
    ]

    STATUS_STYLES = {
        PatchStatus.PATCHED: "green",
        PatchStatus.ALREADY_COMPATIBLE: "green",
        PatchStatus.SUSPECT: "yellow",
        PatchStatus.NOT_FOUND: "dim",
        PatchStatus.SKIPPED: "dim",
    }

    def __init__(self, input_content: str = ""):
        """Initialize the formatter with the sample text used for previews."""
        self.input_content = input_content

    def create_highlighted_output(self, matches: list[list[GroupMatch]], current_match_index: int = -1) -> Text:
        """Create highlighted sample text, emphasizing the current match.

        Args:
            matches: List of matches, where each match is a list of GroupMatch objects
            current_match_index: Index of the match to emphasize (-1 for none)
        """
        text = Text(self.input_content)

        for match_idx, match_groups in enumerate(matches):
            for group in match_groups:
                if group.group_index == 0:
                    style = "bold reverse white" if match_idx == current_match_index else "bold white on #444444"
                else:
                    style = self.GROUP_STYLES[(group.group_index - 1) % len(self.GROUP_STYLES)]
                    if match_idx == current_match_index:
                        style = f"reverse {style}"
                text.stylize(style, group.span[0], group.span[1])

        return text

    def get_match_positions(self, matches: list[list[GroupMatch]]) -> list[int]:
        """Get the start positions of all matches."""
        return [groups[0].span[0] for groups in matches if groups and groups[0].group_index == 0]

    @staticmethod
    def create_groups_output(matches: list[list[GroupMatch]]) -> Table:
        """Create a table of the capture groups of every match."""
        table = Table(box=box.ROUNDED, expand=True, show_header=True, padding=(0, 1))
        table.add_column("Match", style="cyan", no_wrap=True, width=6)
        table.add_column("Group", style="magenta", no_wrap=True, width=6)
        table.add_column("Value", style="white")
        table.add_column("Span", style="yellow", justify="right", width=12)

        for i, match_groups in enumerate(matches, 1):
            for group in match_groups:
                if group.group_index == 0:
                    continue
                table.add_row(str(i), str(group.group_index), group.value, f"{group.span[0]}-{group.span[1]}")

        return table

    @classmethod
    def create_patch_table(cls, report: PatchReport) -> Table:
        """Create one row per patched (or skipped) file."""
        table = Table(box=box.ROUNDED, show_header=True, title="Compatibility patches")
        table.add_column("Target", style="cyan")
        table.add_column("File")
        table.add_column("Status")
        table.add_column("Detail", style="dim")

        for outcome in report.outcomes:
            status = Text(outcome.status.value, style=cls.STATUS_STYLES[outcome.status])
            table.add_row(outcome.target_id, outcome.file, status, outcome.detail)

        return table

    @staticmethod
    def create_coverage_table(results: Iterable[ChunkResult]) -> Table:
        """Create one row per processed unit with construct counts before/after."""
        table = Table(box=box.ROUNDED, show_header=True, title="Regex compatibility")
        table.add_column("Unit", style="cyan")
        table.add_column("Changed", justify="center")
        table.add_column("Named groups", justify="right")
        table.add_column("Lookbehinds", justify="right")
        table.add_column("Named backrefs", justify="right")

        for result in results:
            cells = [
                f"{getattr(result.before, attr)} -> {getattr(result.after, attr)}"
                for attr in ("named_groups", "lookbehinds", "named_backrefs")
            ]
            style = "yellow" if result.after.total else None
            table.add_row(result.unit_name, "yes" if result.changed else "no", *cells, style=style)

        return table
