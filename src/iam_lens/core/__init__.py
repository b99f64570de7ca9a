"""Navigation and search state machines.

Nothing in this package performs I/O. Asynchronous work is described by
``Request`` objects that the host runtime executes, and results come back as
``Message`` objects processed one at a time by ``AppReducer.update``.
"""

from .app_state import AppReducer, ErrorState, ListState, Loading
from .detail_view import DetailView, NormalTab, PolicyDocument, PolicyLoading, resolve_policy
from .filtering import clamp_cursor, filter_roles
from .list_view import Browsing, DetailLoading, Filtering, ListView, ShowingDetail
from .scrolling import centered_offset, clamp_offset, cursor_window
from .search import LineSearch, SearchMatch, find_matches

__all__ = [
    "AppReducer",
    "Browsing",
    "centered_offset",
    "clamp_cursor",
    "clamp_offset",
    "cursor_window",
    "DetailLoading",
    "DetailView",
    "ErrorState",
    "filter_roles",
    "Filtering",
    "find_matches",
    "LineSearch",
    "ListState",
    "ListView",
    "Loading",
    "NormalTab",
    "PolicyDocument",
    "PolicyLoading",
    "resolve_policy",
    "SearchMatch",
    "ShowingDetail",
]
