"""Help modal widget."""

from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from ...utils.compat_help import COMPAT_HELP


class HelpModal(ModalScreen):
    """Modal screen listing the rewrite rules."""

    CSS = """
    HelpModal {
        align: center middle;
    }

    #dialog {
        padding: 0 1;
        width: 70;
        height: 20;
        border: thick $background 80%;
        background: $surface;
    }

    #help-content {
        height: 1fr;
    }

    .help-category {
        text-style: bold;
        color: $primary;
        margin-top: 1;
    }

    .help-item {
        margin-left: 2;
    }
    """

    def compose(self):
        with Container(id="dialog"):
            with VerticalScroll(id="help-content"):
                yield Label("Rewrite Rules", id="title")

                for category, items in COMPAT_HELP.items():
                    yield Label(category, classes="help-category")
                    for construct, description in items.items():
                        yield Label(f"{construct:<15} {description}", classes="help-item", markup=False)

            yield Button("Close", id="exitHelp", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "exitHelp":
            self.dismiss()
