"""Constants shared by the core state machines and the terminal host."""

from __future__ import annotations

# Longest query accepted by the role filter and the document search.
MAX_QUERY_LENGTH = 100

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

MIN_VISIBLE_HEIGHT = 5

TAB_OVERVIEW = 0
TAB_TRUST_POLICY = 1
TAB_POLICIES = 2
TAB_TAGS = 3
TABS = ("Overview", "Trust Policy", "Policies", "Tags")

# Key names as reported by textual.
KEY_QUIT = "q"
KEY_FORCE_QUIT = "ctrl+c"
KEY_ESCAPE = "escape"
KEY_ENTER = "enter"
KEY_SEARCH = "slash"
KEY_BACKSPACE = "backspace"
KEY_CLEAR_INPUT = "ctrl+u"
KEY_REFRESH = "r"
KEY_NEXT_MATCH = "n"
KEY_PREV_MATCH = "N"

KEYS_DOWN = ("j", "down")
KEYS_UP = ("k", "up")
KEYS_FIRST = ("g", "home")
KEYS_LAST = ("G", "end")
KEYS_NEXT_TAB = ("tab", "l")
KEYS_PREV_TAB = ("shift+tab", "h")
KEYS_DISMISS = (KEY_ESCAPE, KEY_QUIT)
