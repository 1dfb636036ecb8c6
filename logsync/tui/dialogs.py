from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.validation import Function, Validator
from textual.widgets import Button, Input, Label, MarkdownViewer


class ModalInputDialog(ModalScreen[str]):
    """
    A modal dialog for getting a single input from the user. Input that fails the
    validator is reported in the dialog, and the dialog stays open.
    """

    DEFAULT_CSS = """
    ModalInputDialog {
        align: center middle;
    }

    ModalInputDialog > Vertical {
        background: $panel;
        height: auto;
        width: auto;
        border: thick $primary;
    }

    ModalInputDialog > Vertical > * {
        width: auto;
        height: auto;
    }

    ModalInputDialog Input {
        width: 48;
        margin: 1;
    }

    ModalInputDialog Label {
        margin-left: 2;
    }

    ModalInputDialog #error {
        color: $error;
    }

    ModalInputDialog #buttons {
        width: 100%;
        align-horizontal: right;
        padding-right: 1;
    }

    ModalInputDialog Button {
        margin-right: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "app.pop_screen", "", show=False),
    ]

    def __init__(
            self,
            prompt: str,
            initial: str | None = None,
            validator: Validator | None = None,
    ) -> None:
        super().__init__()
        self._prompt = prompt
        self._initial = initial
        self._validator = validator or Function(function=lambda s: True)

    def compose(self) -> ComposeResult:
        with Vertical():
            with Vertical(id="input"):
                yield Label(self._prompt)
                yield Input(self._initial or "")
                yield Label("", id="error")
            with Horizontal(id="buttons"):
                yield Button("OK", id="ok", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    @on(Button.Pressed, "#cancel")
    def cancel_input(self) -> None:
        self.dismiss()

    @on(Input.Submitted)
    @on(Button.Pressed, "#ok")
    def accept_input(self) -> None:
        value = self.query_one(Input).value.strip()
        if not value:
            self.dismiss()
            return

        result = self._validator.validate(value)
        if result.is_valid:
            self.dismiss(value)
        else:
            self.query_one("#error", Label).update("; ".join(result.failure_descriptions))


class ModalAboutDialog(ModalScreen[None]):
    """Modal dialog to show Markdown help text."""

    DEFAULT_CSS = """
    ModalAboutDialog {
        align: center middle;
    }

    ModalAboutDialog > Vertical {
        background: $panel;
        height: auto;
        width: auto;
        border: thick $primary;
    }

    ModalAboutDialog MarkdownViewer {
        height: 24;
        width: 80;
    }

    ModalAboutDialog #buttons {
        width: 100%;
        height: auto;
        align-horizontal: center;
    }
    """

    BINDINGS = [
        Binding("escape", "app.pop_screen", "", show=False),
        Binding("enter", "app.pop_screen", "", show=False),
    ]

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content

    def compose(self) -> ComposeResult:
        with Vertical():
            yield MarkdownViewer(self.content, show_table_of_contents=False)
            with Horizontal(id="buttons"):
                yield Button("OK", id="ok", variant="primary")

    def on_mount(self) -> None:
        self.query_one(MarkdownViewer).focus()

    @on(Button.Pressed, "#ok")
    def ok_clicked(self) -> None:
        self.dismiss()
