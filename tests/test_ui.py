import unittest
from unittest.mock import MagicMock, patch

from textual.widgets import Button, Input

from rexcompat.ui.views.compat_view import CompatApp
from rexcompat.ui.widgets.help_modal import HelpModal


class TestUI(unittest.TestCase):
    """Test the preview application without running it."""

    def test_app_initialization(self):
        app = CompatApp("xx yy", initial_pattern="(?<a>x)")
        self.assertEqual(app.input_content, "xx yy")
        self.assertEqual(app.pattern, "(?<a>x)")
        self.assertEqual(app.rewritten, "")

    def test_describe_rewrite(self):
        app = CompatApp()
        app.rewritten = "(x)\\1"
        summary = app.describe_rewrite("(?<=y)(?<a>x)\\k<a>")
        self.assertIn("1 named group(s)", summary.plain)
        self.assertIn("1 lookbehind(s)", summary.plain)
        self.assertIn("dropped", summary.plain)

    def test_describe_compatible_pattern(self):
        app = CompatApp()
        app.rewritten = "(x)\\1"
        self.assertEqual(app.describe_rewrite("(x)\\1").plain, "Pattern already compatible")


class TestCopyButton(unittest.TestCase):
    def setUp(self):
        self.app = CompatApp("test content")
        self.app.notify = MagicMock()

    @patch("rexcompat.ui.views.compat_view.pyperclip")
    def test_copy_pattern_success(self, mock_pyperclip):
        self.app.rewritten = "(x)\\1"
        self.app.action_copy_pattern()

        mock_pyperclip.copy.assert_called_with("(x)\\1")
        self.app.notify.assert_called_with("Rewritten pattern copied to clipboard!", severity="information")

    @patch("rexcompat.ui.views.compat_view.pyperclip")
    def test_copy_pattern_empty(self, mock_pyperclip):
        self.app.rewritten = ""
        self.app.action_copy_pattern()

        mock_pyperclip.copy.assert_not_called()
        self.app.notify.assert_called_with("Nothing to copy", severity="warning")

    @patch("rexcompat.ui.views.compat_view.pyperclip", None)
    def test_copy_pattern_no_pyperclip(self):
        self.app.rewritten = "(x)"
        self.app.action_copy_pattern()

        self.app.notify.assert_called_with("pyperclip not installed. Cannot copy.", severity="error")

    @patch("rexcompat.ui.views.compat_view.pyperclip")
    def test_copy_pattern_error(self, mock_pyperclip):
        mock_pyperclip.PyperclipException = RuntimeError
        mock_pyperclip.copy.side_effect = RuntimeError("Clipboard error")
        self.app.rewritten = "(x)"
        self.app.action_copy_pattern()

        self.app.notify.assert_called_with("Failed to copy: Clipboard error", severity="error")


class TestUIInteractions(unittest.IsolatedAsyncioTestCase):
    """Test the preview using Textual's pilot."""

    async def test_pattern_is_rewritten_and_matched(self):
        app = CompatApp("xx yy xx")

        async with app.run_test() as pilot:
            app.query_one("#pattern_input", Input).value = "(?<=^|\\s)(?<a>x)\\k<a>"
            await pilot.pause(0.5)

            self.assertEqual(app.rewritten, "(x)\\1")
            self.assertEqual(app.match_positions, [0, 6])
            self.assertEqual(app.current_match_index, 0)

            app.action_next_match()
            self.assertEqual(app.current_match_index, 1)
            app.action_next_match()
            self.assertEqual(app.current_match_index, 0)

    async def test_help_modal(self):
        app = CompatApp()

        async with app.run_test() as pilot:
            await pilot.press("f1")
            await pilot.pause(0.1)
            self.assertIsInstance(app.screen, HelpModal)

            app.screen.query_one("#exitHelp", Button).press()
            await pilot.pause(0.1)
            self.assertNotIsInstance(app.screen, HelpModal)


if __name__ == "__main__":
    unittest.main()
