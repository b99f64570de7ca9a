"""Textual host for the role browser.

The app owns a single ``AppReducer``. Key and resize events become core
messages; each returned request runs on a thread worker and its result is
handed back to the UI thread with ``call_from_thread``, so the reducer only
ever sees one message at a time.
"""

from __future__ import annotations

import logging
from typing import Iterable

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from ..core.app_state import AppReducer
from ..core.messages import KeyPress, Message, QuitRequest, Request, Resize
from ..runtime import RequestExecutor
from .render import render
from .theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


def key_name(event: events.Key) -> str:
    """Core key name for a textual key event.

    Letters and digits use the typed character so ``G`` and ``N`` stay distinct
    from ``g`` and ``n`` whatever modifier naming the terminal reports.
    """
    character = event.character
    if character and len(character) == 1 and character.isalnum() and event.is_printable:
        return character
    return event.key


class RoleBrowserApp(App):
    """Interactive IAM role browser."""

    CSS = """
    #view {
        height: 1fr;
        padding: 0 1;
    }
    """

    # Keys textual would otherwise consume for focus handling or its own quit.
    BINDINGS = [
        Binding("tab", "forward_key('tab')", show=False, priority=True),
        Binding("shift+tab", "forward_key('shift+tab')", show=False, priority=True),
        Binding("ctrl+c", "forward_key('ctrl+c')", show=False, priority=True),
    ]

    def __init__(self, reducer: AppReducer, executor: RequestExecutor, theme: Theme = DEFAULT_THEME):
        super().__init__()
        self.reducer = reducer
        self.executor = executor
        self.view_theme = theme

    def compose(self) -> ComposeResult:
        yield Static(id="view")

    def on_mount(self) -> None:
        self.reducer.update(Resize(self.size.width, self.size.height))
        self._dispatch(self.reducer.init())
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self._deliver(KeyPress(key_name(event), event.character))

    def on_resize(self, event: events.Resize) -> None:
        self._deliver(Resize(event.size.width, event.size.height))

    def action_forward_key(self, key: str) -> None:
        self._deliver(KeyPress(key))

    def _deliver(self, message: Message) -> None:
        self._dispatch(self.reducer.update(message))
        self._refresh_view()

    def _dispatch(self, requests: Iterable[Request]) -> None:
        for request in requests:
            if isinstance(request, QuitRequest):
                self.exit()
                return
            self.run_worker(
                lambda request=request: self._execute(request),
                thread=True,
                exclusive=False,
                group="data-source",
            )

    def _execute(self, request: Request) -> None:
        logger.debug(f"Executing {type(request).__name__}")
        result = self.executor.execute(request)
        if result is not None:
            self.call_from_thread(self._deliver, result)

    def _refresh_view(self) -> None:
        self.query_one("#view", Static).update(render(self.reducer, self.view_theme))
