"""Detail view state machine for a single role.

The view has three mutually exclusive modes:

- ``NormalTab``: browsing one of the four tabs.
- ``PolicyLoading``: a policy document request is outstanding. The tabs stay
  usable; a second activation is ignored.
- ``PolicyDocument``: a loaded document is shown, with its own search input.

Dismissing the whole view is the caller's job and is only allowed while
``at_outermost`` is True, so a single keypress never skips the document level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from ..constants import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_NEXT_MATCH,
    KEY_PREV_MATCH,
    KEY_SEARCH,
    KEYS_DOWN,
    KEYS_FIRST,
    KEYS_LAST,
    KEYS_NEXT_TAB,
    KEYS_PREV_TAB,
    KEYS_UP,
    TAB_OVERVIEW,
    TAB_POLICIES,
    TAB_TAGS,
    TAB_TRUST_POLICY,
    TABS,
)
from ..domain.identity import CallerIdentity
from ..domain.role import ManagedPolicy, Role
from .messages import (
    InlinePolicyDocumentRequest,
    KeyPress,
    ManagedPolicyDocumentRequest,
    Message,
    PolicyDocumentLoaded,
    Request,
    Resize,
)
from .scrolling import centered_offset, clamp_offset, detail_visible_height, max_offset
from .search import LineSearch
from .text_input import TextInput

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rows the search prompt takes from the document viewport while it is open.
SEARCH_BAR_ROWS = 2


@dataclass
class NormalTab:
    pass


@dataclass
class PolicyLoading:
    policy_name: str
    token: int


@dataclass
class PolicyDocument:
    name: str
    text: str
    search: LineSearch = field(default_factory=LineSearch)
    search_input: TextInput = field(default_factory=TextInput)
    searching: bool = False

    @property
    def lines(self) -> List[str]:
        return self.text.split("\n")


DetailMode = Union[NormalTab, PolicyLoading, PolicyDocument]


def resolve_policy(role: Role, index: int) -> Tuple[str, Union[ManagedPolicy, str]]:
    """Map a flattened policy index onto ``managed ++ inline``.

    Returns ``("managed", ManagedPolicy)`` or ``("inline", policy_name)``.

    Raises:
        IndexError: If ``index`` is outside ``[0, role.policy_count)``.
    """
    managed_count = len(role.managed_policies)
    if 0 <= index < managed_count:
        return "managed", role.managed_policies[index]
    inline_index = index - managed_count
    if 0 <= inline_index < len(role.inline_policies):
        return "inline", role.inline_policies[inline_index]
    raise IndexError(f"policy index {index} out of range for role {role.name}")


def tab_lines(role: Role, tab: int) -> List[str]:
    """Plain-text content of the Overview, Trust Policy and Tags tabs."""
    if tab == TAB_OVERVIEW:
        fields = [
            ("ARN", role.arn),
            ("Role ID", role.role_id),
            ("Path", role.path),
            ("Created", role.created.strftime(TIMESTAMP_FORMAT)),
            ("Description", role.description),
            ("Max Session", f"{role.max_session_duration} seconds"),
        ]
        if role.last_used is not None:
            fields.append(("Last Used", role.last_used.strftime(TIMESTAMP_FORMAT)))
        return ["Role Information", ""] + [f"{label}: {value}" for label, value in fields]

    if tab == TAB_TRUST_POLICY:
        return ["Trust Relationships"] + role.trust_policy.split("\n")

    if tab == TAB_TAGS:
        if not role.tags:
            return ["Tags", "", "No tags"]
        return ["Tags", ""] + [f"{tag.key}: {tag.value}" for tag in role.tags]

    return [line for line, _ in policy_lines(role)]


def policy_lines(role: Role) -> List[Tuple[str, Optional[int]]]:
    """Lines of the Policies tab paired with the flattened index they select, if any."""
    lines: List[Tuple[str, Optional[int]]] = [("Attached Policies", None), ("", None)]
    index = 0
    if role.managed_policies:
        lines.append(("Managed Policies:", None))
        for policy in role.managed_policies:
            lines.append((f"  • {policy.name}", index))
            index += 1
        lines.append(("", None))
    if role.inline_policies:
        lines.append(("Inline Policies:", None))
        for name in role.inline_policies:
            lines.append((f"  • {name}", index))
            index += 1
    if index == 0:
        lines.append(("No policies attached", None))
    else:
        lines.append(("", None))
        lines.append(("Press Enter to view the selected policy document", None))
    return lines


class DetailView:
    """State machine for browsing one role and its policy documents."""

    def __init__(
        self,
        role: Role,
        profile: str,
        region: str,
        identity: Optional[CallerIdentity] = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        self.role = role
        self.profile = profile
        self.region = region
        self.identity = identity
        self.width = width
        self.height = height
        self.active_tab = TAB_OVERVIEW
        self.scroll = 0
        self.policy_index = 0
        self.mode: DetailMode = NormalTab()

    @property
    def at_outermost(self) -> bool:
        return not isinstance(self.mode, PolicyDocument)

    @property
    def is_loading_policy(self) -> bool:
        return isinstance(self.mode, PolicyLoading)

    @property
    def visible_height(self) -> int:
        return detail_visible_height(self.height)

    @property
    def document_height(self) -> int:
        """Document rows actually on screen; the search prompt takes the bottom rows."""
        if isinstance(self.mode, PolicyDocument) and self.mode.searching:
            return self.visible_height - SEARCH_BAR_ROWS
        return self.visible_height

    def set_identity(self, identity: Optional[CallerIdentity]) -> None:
        self.identity = identity

    def update(self, msg: Message) -> List[Request]:
        if isinstance(msg, Resize):
            self.width = msg.width
            self.height = msg.height
            if isinstance(self.mode, PolicyDocument):
                self.scroll = clamp_offset(self.scroll, len(self.mode.lines), self.document_height)
            elif self.active_tab != TAB_POLICIES:
                self.scroll = clamp_offset(self.scroll, self._tab_line_count(), self.visible_height)
            return []

        if isinstance(msg, PolicyDocumentLoaded):
            self._apply_policy_document(msg)
            return []

        if isinstance(msg, KeyPress):
            if isinstance(self.mode, PolicyDocument):
                self._update_document(self.mode, msg)
                return []
            return self._update_tabs(msg.key)

        return []

    # Tabs

    def _update_tabs(self, key: str) -> List[Request]:
        on_policies = self.active_tab == TAB_POLICIES
        total = self.role.policy_count

        if key in KEYS_NEXT_TAB:
            self._switch_tab((self.active_tab + 1) % len(TABS))
        elif key in KEYS_PREV_TAB:
            self._switch_tab((self.active_tab - 1 + len(TABS)) % len(TABS))
        elif key in KEYS_DOWN:
            if on_policies:
                if total > 0:
                    self.policy_index = min(self.policy_index + 1, total - 1)
            else:
                self.scroll = clamp_offset(self.scroll + 1, self._tab_line_count(), self.visible_height)
        elif key in KEYS_UP:
            if on_policies:
                self.policy_index = max(0, self.policy_index - 1)
            else:
                self.scroll = max(0, self.scroll - 1)
        elif key in KEYS_FIRST:
            self.scroll = 0
            self.policy_index = 0
        elif key in KEYS_LAST:
            if on_policies:
                if total > 0:
                    self.policy_index = total - 1
            else:
                self.scroll = max_offset(self._tab_line_count(), self.visible_height)
        elif key == KEY_ENTER and on_policies:
            return self._activate_policy()
        return []

    def _switch_tab(self, tab: int) -> None:
        self.active_tab = tab
        self.scroll = 0
        self.policy_index = 0

    def _tab_line_count(self) -> int:
        return len(tab_lines(self.role, self.active_tab))

    def _activate_policy(self) -> List[Request]:
        if self.is_loading_policy or self.role.policy_count == 0:
            return []

        kind, policy = resolve_policy(self.role, self.policy_index)
        request: Request
        if kind == "managed":
            request = ManagedPolicyDocumentRequest(policy_name=policy.name, arn=policy.arn)
            name = policy.name
        else:
            request = InlinePolicyDocumentRequest(role_name=self.role.name, policy_name=policy)
            name = policy
        self.mode = PolicyLoading(policy_name=name, token=request.token)
        logger.debug(f"Requesting {kind} policy document {name} for role {self.role.name}")
        return [request]

    def _apply_policy_document(self, msg: PolicyDocumentLoaded) -> None:
        if not isinstance(self.mode, PolicyLoading) or self.mode.token != msg.token:
            logger.debug(f"Discarding stale policy document result for {msg.policy_name}")
            return

        if msg.error is not None:
            self.mode = PolicyDocument(name="Error", text=f"Error loading policy: {msg.error}")
        else:
            self.mode = PolicyDocument(name=msg.policy_name, text=msg.document)
        self.scroll = 0

    # Policy document

    def _update_document(self, doc: PolicyDocument, msg: KeyPress) -> None:
        key = msg.key
        if doc.searching:
            if key in (KEY_ESCAPE, KEY_ENTER):
                doc.searching = False
                doc.search_input.blur()
                self.scroll = clamp_offset(self.scroll, len(doc.lines), self.document_height)
            elif doc.search_input.handle_key(key, msg.character):
                if doc.search.update(doc.search_input.value, doc.text):
                    self._scroll_to_current_match(doc)
            return

        total = len(doc.lines)
        if key == KEY_ESCAPE:
            self.mode = NormalTab()
            self.scroll = 0
        elif key == KEY_SEARCH:
            doc.searching = True
            doc.search_input.set_value("")
            doc.search_input.focus()
            doc.search.clear()
        elif key == KEY_NEXT_MATCH:
            if doc.search.next():
                self._scroll_to_current_match(doc)
        elif key == KEY_PREV_MATCH:
            if doc.search.previous():
                self._scroll_to_current_match(doc)
        elif key in KEYS_DOWN:
            self.scroll = clamp_offset(self.scroll + 1, total, self.document_height)
        elif key in KEYS_UP:
            self.scroll = max(0, self.scroll - 1)
        elif key in KEYS_FIRST:
            self.scroll = 0
        elif key in KEYS_LAST:
            self.scroll = max_offset(total, self.document_height)

    def _scroll_to_current_match(self, doc: PolicyDocument) -> None:
        match = doc.search.current_match
        if match is not None:
            self.scroll = centered_offset(match.line, self.document_height, len(doc.lines))
