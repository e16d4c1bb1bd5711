"""Executable Textual app that shows the word count margin under a TextArea."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.message import Message
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use wordcount_margin.adapters.textual.app"
    ) from exc

from wordcount_margin.config import MarginSettings
from wordcount_margin.margin import WordCountMargin
from wordcount_margin.runtime import telemetry

from .controller import TextAreaHost


class WordCountApp(App[None]):
    """Plain editor with a live ``Chars / Words / Lines`` status line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#wordcount {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
		content-align: right middle;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    class LabelChanged(Message):
        """Carries a freshly computed label from the updater thread."""

        def __init__(self, text: str) -> None:
            self.text = text
            super().__init__()

    def __init__(
        self,
        *,
        text: str = "",
        settings: Optional[MarginSettings] = None,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._settings = settings
        self.host: TextAreaHost | None = None
        self.margin: WordCountMargin | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield TextArea(self._initial_text, id="editor")
        self._status_widget = Static("", id="wordcount")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.host = TextAreaHost(self.query_one("#editor", TextArea))
        self.margin = WordCountMargin(
            self.host, settings=self._settings, autostart=False
        )
        if not self.margin.enabled and self._status_widget:
            self._status_widget.display = False
        self.margin.add_label_listener(self._post_label)
        self.margin.start()

    def on_unmount(self) -> None:
        if self.margin:
            self.margin.dispose()
            self.margin = None

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.host:
            self.host.notify_text_changed(event)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self.host:
            self.host.notify_selection_changed(event.selection)

    def on_word_count_app_label_changed(self, message: LabelChanged) -> None:
        if self._status_widget:
            self._status_widget.update(message.text)

    def _post_label(self, text: str) -> None:
        # Runs on the updater thread; post_message is safe to call off-loop.
        self.post_message(self.LabelChanged(text))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit text with a live character/word/line count."
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Load this file into the editor",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default="production",
        help="telelog preset to use while the app owns the terminal",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    text = args.file.read_text(encoding="utf-8") if args.file else ""
    app = WordCountApp(text=text, settings=MarginSettings.from_env())
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
