"""Interactive preview of pattern rewrites."""

import asyncio
from typing import Optional

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult, ReturnType
from textual.containers import Horizontal, ScrollableContainer
from textual.widgets import Footer, Header, Input, Static

from ...data_providers.detection import count_unsupported
from ...data_providers.regex_provider import RegexProvider
from ...presentation.formatter import CompatFormatter
from ..widgets.help_modal import HelpModal

try:
    import pyperclip
except ImportError:
    pyperclip = None


class CompatApp(App[ReturnType]):
    """TUI showing how a pattern is rewritten and what the rewrite matches."""

    CSS = """
    #pattern_input {
        margin: 0 1;
    }

    #rewritten, #diagnostics {
        margin: 0 2;
        height: auto;
    }

    #result {
        height: 1fr;
    }

    #output-container {
        width: 2fr;
        border: round $primary;
    }

    #groups-container {
        width: 1fr;
        border: round $secondary;
    }
    """

    BINDINGS = [
        ("f1", "show_help", "Help"),
        ("c", "copy_pattern", "Copy Rewrite"),
        ("n", "next_match", "Next Match"),
        ("N", "prev_match", "Prev Match"),
        ("i", "focus_input", "Input"),
        ("enter", "focus_results", "Results"),
        ("escape", "quit", "Quit"),
    ]

    def __init__(
        self,
        input_content: str = "",
        initial_pattern: Optional[str] = None,
    ):
        """Initialize the preview application.

        Args:
            input_content: Sample text the rewritten pattern is matched against
            initial_pattern: Pattern to preview on startup
        """
        super().__init__()
        self.input_content: str = input_content
        self.pattern: str = initial_pattern or ""
        self.rewritten: str = ""

        self.regex_provider = RegexProvider(input_content)
        self.formatter = CompatFormatter(input_content)

        self.match_positions: list[int] = []
        self.current_match_index: int = -1
        self._last_matches: list = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(value=self.pattern, placeholder="Enter a pattern using modern syntax", id="pattern_input")
        yield Static(id="rewritten")
        yield Static(id="diagnostics")
        with Horizontal(id="result"):
            with ScrollableContainer(id="output-container", can_focus=True):
                yield Static(Text(self.input_content), id="output")
            with ScrollableContainer(id="groups-container", can_focus=True):
                yield Static(id="groups")
        yield Footer()

    def on_mount(self) -> None:
        if self.pattern:
            self.run_worker(self.update_preview(self.pattern), exclusive=True)

    def action_show_help(self) -> None:
        self.push_screen(HelpModal())

    def action_copy_pattern(self) -> None:
        """Copy the rewritten pattern to the clipboard."""
        if not self.rewritten:
            self.notify("Nothing to copy", severity="warning")
            return
        if pyperclip is None:
            self.notify("pyperclip not installed. Cannot copy.", severity="error")
            return
        try:
            pyperclip.copy(self.rewritten)
        except pyperclip.PyperclipException as e:
            self.notify(f"Failed to copy: {e}", severity="error")
            return
        self.notify("Rewritten pattern copied to clipboard!", severity="information")

    def action_focus_input(self) -> None:
        self.query_one("#pattern_input", Input).focus()

    def action_focus_results(self) -> None:
        self.query_one("#output-container", ScrollableContainer).focus()

    def action_next_match(self) -> None:
        """Navigate to the next match."""
        if not self.match_positions:
            return
        self.current_match_index = (self.current_match_index + 1) % len(self.match_positions)
        self._refresh_highlighting()

    def action_prev_match(self) -> None:
        """Navigate to the previous match."""
        if not self.match_positions:
            return
        self.current_match_index = (self.current_match_index - 1) % len(self.match_positions)
        self._refresh_highlighting()

    def action_quit(self) -> None:
        self.exit()

    def _refresh_highlighting(self) -> None:
        output = self.formatter.create_highlighted_output(self._last_matches, self.current_match_index)
        self.query_one("#output", Static).update(output)

    def describe_rewrite(self, pattern: str) -> Text:
        """Summarize what the rewrite removed and what is left over."""
        before = count_unsupported(pattern)
        after = count_unsupported(self.rewritten)
        if not before.total:
            return Text("Pattern already compatible", style="green")

        summary = Text(
            f"Rewrote {before.named_groups} named group(s), "
            f"{before.named_backrefs} named backreference(s), "
            f"{before.lookbehinds} lookbehind(s)",
            style="green",
        )
        if after.total:
            summary.append(f"\n{after.total} construct(s) could not be rewritten", style="bold yellow")
        elif before.lookbehinds:
            summary.append("\nLookbehind constraints were dropped; the rewrite matches more", style="yellow")
        return summary

    @on(Input.Changed)
    async def on_input_changed(self, message: Input.Changed) -> None:
        self.pattern = message.value
        self.run_worker(self.update_preview(message.value), exclusive=True)

    @on(Input.Submitted)
    async def on_input_submitted(self, message: Input.Submitted) -> None:
        self.action_focus_results()

    async def update_preview(self, pattern: str) -> None:
        """Rewrite ``pattern`` and refresh every panel."""
        rewritten_widget = self.query_one("#rewritten", Static)
        diagnostics_widget = self.query_one("#diagnostics", Static)
        groups_widget = self.query_one("#groups", Static)

        self.rewritten = self.regex_provider.rewrite(pattern) if pattern else ""
        self.match_positions = []
        self.current_match_index = -1
        self._last_matches = []

        if not pattern:
            rewritten_widget.update("")
            diagnostics_widget.update("")
            groups_widget.update(Text("Enter a pattern to see its rewrite", style="dim"))
            self._refresh_highlighting()
            return

        rewritten_widget.update(Text.assemble(("Rewritten: ", "bold"), (self.rewritten, "cyan")))
        diagnostics_widget.update(self.describe_rewrite(pattern))

        matches, error = await asyncio.to_thread(self.regex_provider.get_matches, self.rewritten)
        if error:
            groups_widget.update(Text(error, style="bold red"))
        elif not matches:
            groups_widget.update(Text("No matches found", style="dim"))
        else:
            self._last_matches = matches
            self.match_positions = self.formatter.get_match_positions(matches)
            self.current_match_index = 0
            groups_widget.update(self.formatter.create_groups_output(matches))
        self._refresh_highlighting()
