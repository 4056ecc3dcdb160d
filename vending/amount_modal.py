"""Numeric entry modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class AmountModal(ModalScreen[str | None]):
    """Prompt for a number: money, PIN or quantity. Dismisses with the raw digits."""

    # Dialog frame and help line come from the app stylesheet.
    CSS = """
    #amount-dialog {
        width: 56;
    }

    #amount-value {
        border: heavy $secondary;
        padding: 0 1;
    }

    #amount-error {
        color: $error;
    }
    """

    def __init__(
        self,
        title: str,
        prompt: str,
        allow_decimal: bool = False,
        masked: bool = False,
        max_length: int = 9,
    ) -> None:
        super().__init__()
        self.title_text = title
        self.prompt_text = prompt
        self.allow_decimal = allow_decimal
        self.masked = masked
        self.max_length = max_length
        self.value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="amount-dialog", classes="dialog"):
            yield Static(self.title_text, classes="pane-title")
            yield Static(self.prompt_text)
            yield Static(id="amount-value")
            yield Static(id="amount-error")
            yield Static("Enter confirm. Backspace delete. Esc/q/Ctrl+C cancel.", classes="dialog-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if not event.is_printable or not event.character:
            return

        char = event.character
        if char.isdigit() or (char == "." and self.allow_decimal and "." not in self.value):
            if len(self.value) < self.max_length:
                self.value += char
            self.error = ""
            self._refresh_content()
            event.stop()

    def _confirm(self) -> None:
        if not self.value or self.value == ".":
            self.error = "A value is required."
            self._refresh_content()
            return
        if self.allow_decimal and "." in self.value and len(self.value.split(".", 1)[1]) > 2:
            self.error = "At most two decimal places."
            self._refresh_content()
            return

        self.dismiss(self.value)

    def _refresh_content(self) -> None:
        value_widget = self.query_one("#amount-value", Static)
        error_widget = self.query_one("#amount-error", Static)
        shown = "•" * len(self.value) if self.masked else self.value
        value_widget.update(shown)
        error_widget.update(self.error or "")
