"""Visual styles, passed explicitly into rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    title: str = "bold #FF9500"
    header_key: str = "bold #146EB4"
    header_value: str = "#FFFFFF"
    list_header: str = "bold #146EB4 underline"
    list_item: str = ""
    selected_item: str = "bold #000000 on #FFE082"
    status_bar: str = "#FFFFFF on #232F3E"
    help: str = "#666666"
    help_key: str = "bold #146EB4"
    active_tab: str = "bold #FFFFFF on #146EB4"
    inactive_tab: str = "#666666"
    detail_title: str = "bold #FF9500"
    detail_label: str = "bold #146EB4"
    detail_value: str = ""
    code: str = "#E0E0E0"
    search_prompt: str = "bold #FF9500"
    search_match: str = "#000000 on #FFE082"
    search_current_match: str = "bold #FFFFFF on #D32F2F"
    search_info: str = "#666666"
    loading: str = "italic #FFA000"
    error: str = "bold #D32F2F"


DEFAULT_THEME = Theme()
