"""Render reducer state to rich text.

``render`` is a pure function of the reducer state and a ``Theme``.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from rich.text import Text

from ..constants import TAB_POLICIES, TAB_TRUST_POLICY, TABS
from ..core.app_state import AppReducer, ErrorState, Loading
from ..core.detail_view import DetailView, PolicyDocument, policy_lines, tab_lines
from ..core.list_view import ListView
from ..core.scrolling import cursor_window
from ..core.search import LineSearch
from .theme import Theme

NAME_WIDTH = 40
DATE_WIDTH = 12
DATE_FORMAT = "%Y-%m-%d"

LIST_HELP = (("j/k", "navigate"), ("Enter", "details"), ("/", "search"), ("r", "refresh"), ("q", "quit"))
FILTER_HELP = (("Enter", "apply"), ("Esc", "clear"))
TAB_HELP = (("Tab/l", "next tab"), ("Shift+Tab/h", "prev tab"), ("j/k", "scroll"), ("Esc", "back"))
POLICIES_HELP = (("Tab/l", "next tab"), ("j/k", "navigate"), ("Enter", "view policy"), ("Esc", "back"))
SEARCHING_HELP = (("Enter/Esc", "exit search"),)


def truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    if limit <= 3:
        return value[:limit]
    return value[: limit - 3] + "..."


def render(state: AppReducer, theme: Theme) -> Text:
    if isinstance(state.mode, Loading):
        return Text("\n  Loading IAM roles...\n", style=theme.loading)
    if isinstance(state.mode, ErrorState):
        text = Text("\n  ")
        text.append(f"Error: {state.mode.error}", style=theme.error)
        text.append("\n\n  Press 'q' to quit.\n")
        return text

    list_view = state.list_view
    detail = list_view.detail
    if detail is not None:
        if isinstance(detail.mode, PolicyDocument):
            return render_policy_document(detail, detail.mode, theme)
        return render_detail(detail, theme)
    return render_list(list_view, theme)


def _help_line(text: Text, entries: Sequence[Tuple[str, str]], theme: Theme) -> None:
    for i, (key, desc) in enumerate(entries):
        if i:
            text.append(" | ", style=theme.help)
        text.append(key, style=theme.help_key)
        text.append(f" {desc}", style=theme.help)


def _status_bar(text: Text, profile: str, region: str, count: int, theme: Theme, note: str = "") -> None:
    text.append(f" Profile: {profile or 'default'}  Region: {region or '-'}  Roles: {count} ", style=theme.status_bar)
    if note:
        text.append(f"  {note}", style=theme.loading)
    text.append("\n")


def _header(text: Text, view, theme: Theme) -> None:
    rows: List[Tuple[str, str]] = []
    if view.identity is not None:
        rows.append(("Account:", view.identity.account))
        rows.append(("User:", view.identity.display_name))
        rows.append(("Region:", view.region))
        if view.profile and view.profile != "default":
            rows.append(("Profile:", view.profile))
    else:
        rows.append(("Profile:", view.profile or "default"))
        rows.append(("Region:", view.region))
    for key, value in rows:
        text.append("   ")
        text.append(key, style=theme.header_key)
        text.append(f" {value}\n", style=theme.header_value)
    text.append("\n")


def render_list(view: ListView, theme: Theme) -> Text:
    text = Text("\n")
    _header(text, view, theme)

    if view.filtering:
        text.append("Search: ", style=theme.search_prompt)
        text.append(view.filter_input.value + "█\n")

    width = max(80, view.width - 6)
    desc_width = max(20, width - NAME_WIDTH - 2 * DATE_WIDTH - 3)
    header = f"{'Role Name':<{NAME_WIDTH}} {'Created':<{DATE_WIDTH}} {'Last Used':<{DATE_WIDTH}} Description"
    text.append(truncate(header, width) + "\n", style=theme.list_header)

    start, end = view.window()
    for i in range(start, end):
        role = view.filtered[i]
        last_used = role.last_used.strftime(DATE_FORMAT) if role.last_used else "Never"
        line = (
            f"{truncate(role.name, NAME_WIDTH - 1):<{NAME_WIDTH}} "
            f"{role.created.strftime(DATE_FORMAT):<{DATE_WIDTH}} "
            f"{last_used:<{DATE_WIDTH}} "
            f"{truncate(role.description, desc_width)}"
        )
        style = theme.selected_item if i == view.cursor else theme.list_item
        text.append(" " + truncate(line, width), style=style)
        text.append("\n")
    text.append("\n" * (view.visible_height - (end - start)))

    note = "Loading role details..." if view.loading_detail else ""
    _status_bar(text, view.profile, view.region, len(view.filtered), theme, note)
    _help_line(text, FILTER_HELP if view.filtering else LIST_HELP, theme)
    return text


def render_detail(view: DetailView, theme: Theme) -> Text:
    text = Text()
    text.append(f"Role: {view.role.name}", style=theme.title)
    if view.identity is not None:
        text.append("   Account: ", style=theme.header_key)
        text.append(f"{view.identity.account} ({view.identity.display_name})", style=theme.header_value)
    text.append("\n")
    for i, name in enumerate(TABS):
        text.append(f" {name} ", style=theme.active_tab if i == view.active_tab else theme.inactive_tab)
    text.append("\n\n")

    height = view.visible_height
    if view.active_tab == TAB_POLICIES:
        rows = 0
        if view.is_loading_policy:
            text.append("Attached Policies\n\n", style=theme.detail_title)
            text.append("Loading policy document...\n", style=theme.loading)
            rows = 3
        else:
            lines = policy_lines(view.role)
            selected_line = next((n for n, (_, idx) in enumerate(lines) if idx == view.policy_index), 0)
            start, end = cursor_window(selected_line, len(lines), height)
            for line, idx in lines[start:end]:
                if idx is None:
                    style = theme.detail_title if line == "Attached Policies" else theme.detail_label
                elif idx == view.policy_index:
                    style = theme.selected_item
                else:
                    style = theme.list_item
                text.append(line + "\n", style=style)
            rows = end - start
    else:
        lines = tab_lines(view.role, view.active_tab)
        visible = lines[view.scroll : view.scroll + height]
        for n, line in enumerate(visible):
            if n + view.scroll == 0:
                text.append(line + "\n", style=theme.detail_title)
                continue
            label, sep, value = line.partition(": ")
            if sep and view.active_tab != TAB_TRUST_POLICY:
                text.append(label + ":", style=theme.detail_label)
                text.append(f" {value}\n", style=theme.detail_value)
            else:
                text.append(line + "\n", style=theme.code)
        rows = len(visible)
    text.append("\n" * max(0, height - rows))

    _status_bar(text, view.profile, view.region, 1, theme)
    has_policies = view.active_tab == TAB_POLICIES and view.role.policy_count > 0
    _help_line(text, POLICIES_HELP if has_policies else TAB_HELP, theme)
    return text


def _highlight(line: str, number: int, search: LineSearch, theme: Theme) -> Text:
    out = Text(style=theme.code)
    current = search.current_match
    last_end = 0
    for match in search.matches_on_line(number):
        out.append(line[last_end : match.start])
        is_current = current is not None and current.line == number and current.start == match.start
        out.append(line[match.start : match.end], style=theme.search_current_match if is_current else theme.search_match)
        last_end = match.end
    out.append(line[last_end:])
    return out


def render_policy_document(view: DetailView, doc: PolicyDocument, theme: Theme) -> Text:
    text = Text()
    text.append(f"Policy Document: {doc.name}\n\n", style=theme.title)

    height = view.document_height
    lines = doc.lines
    visible = range(view.scroll, min(len(lines), view.scroll + height))
    for number in visible:
        text.append_text(_highlight(lines[number], number, doc.search, theme))
        text.append("\n")
    text.append("\n" * max(0, height - len(visible)))

    if doc.searching:
        text.append("/", style=theme.search_prompt)
        text.append(doc.search_input.value + "█")
        text.append(f" {doc.search.status()}\n", style=theme.search_info)

    _status_bar(text, view.profile, view.region, 1, theme)
    if doc.searching:
        _help_line(text, SEARCHING_HELP, theme)
    else:
        entries = [("j/k", "scroll"), ("g/G", "top/bottom"), ("/", "search")]
        if doc.search.matches:
            entries.append(("n/N", "next/prev match"))
        entries.append(("Esc", "back to policies"))
        _help_line(text, entries, theme)
    return text
