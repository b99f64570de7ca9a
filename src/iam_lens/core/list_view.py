"""Role list state machine.

Modes:

- ``Browsing``: cursor movement over the filtered roles.
- ``Filtering``: the filter input has focus; every edit re-filters.
- ``DetailLoading``: a role-detail request is outstanding. The list stays
  navigable and a second activation is ignored.
- ``ShowingDetail``: a ``DetailView`` owns all input except force-quit.

The role collection is never mutated in place; a refresh swaps in a new tuple.
A refresh that lands while a detail view is loading or open is held back and
applied when the list regains input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from ..constants import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_FORCE_QUIT,
    KEY_QUIT,
    KEY_REFRESH,
    KEY_SEARCH,
    KEYS_DISMISS,
    KEYS_DOWN,
    KEYS_FIRST,
    KEYS_LAST,
    KEYS_UP,
)
from ..domain.identity import CallerIdentity
from ..domain.role import Role
from .detail_view import DetailView
from .filtering import clamp_cursor, filter_roles
from .messages import (
    KeyPress,
    ListRolesRequest,
    Message,
    PolicyDocumentLoaded,
    QuitRequest,
    Request,
    Resize,
    RoleDetailFailed,
    RoleDetailLoaded,
    RoleDetailRequest,
)
from .scrolling import cursor_window, list_visible_height
from .text_input import TextInput

logger = logging.getLogger(__name__)


@dataclass
class Browsing:
    pass


@dataclass
class Filtering:
    pass


@dataclass
class DetailLoading:
    role_name: str
    token: int


@dataclass
class ShowingDetail:
    detail: DetailView


ListMode = Union[Browsing, Filtering, DetailLoading, ShowingDetail]


class ListView:
    """State machine over the role collection."""

    def __init__(
        self,
        roles: Sequence[Role],
        profile: str,
        region: str,
        identity: Optional[CallerIdentity] = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        self.roles: Tuple[Role, ...] = tuple(roles)
        self.pending_roles: Optional[Tuple[Role, ...]] = None
        self.filtered: List[Role] = list(self.roles)
        self.cursor = 0
        self.filter_input = TextInput()
        self.profile = profile
        self.region = region
        self.identity = identity
        self.width = width
        self.height = height
        self.mode: ListMode = Browsing()

    @property
    def filtering(self) -> bool:
        return isinstance(self.mode, Filtering)

    @property
    def loading_detail(self) -> bool:
        return isinstance(self.mode, DetailLoading)

    @property
    def detail(self) -> Optional[DetailView]:
        if isinstance(self.mode, ShowingDetail):
            return self.mode.detail
        return None

    @property
    def visible_height(self) -> int:
        return list_visible_height(self.height, self.filtering)

    @property
    def selected(self) -> Optional[Role]:
        if 0 <= self.cursor < len(self.filtered):
            return self.filtered[self.cursor]
        return None

    def window(self) -> Tuple[int, int]:
        return cursor_window(self.cursor, len(self.filtered), self.visible_height)

    def set_identity(self, identity: Optional[CallerIdentity]) -> None:
        self.identity = identity
        if self.detail is not None:
            self.detail.set_identity(identity)

    def replace_roles(self, roles: Sequence[Role]) -> bool:
        """Swap in a freshly loaded collection, keeping the current filter.

        Returns False when a detail view is loading or open; the collection is
        then kept as ``pending_roles`` until the detail is closed.
        """
        if self.detail is not None or self.loading_detail:
            logger.info("Deferring role refresh until the role detail is closed")
            self.pending_roles = tuple(roles)
            return False
        self.pending_roles = None
        self.roles = tuple(roles)
        self._refilter()
        return True

    def _return_to_browsing(self) -> None:
        self.mode = Browsing()
        if self.pending_roles is not None:
            self.replace_roles(self.pending_roles)

    def update(self, msg: Message) -> List[Request]:
        if isinstance(msg, KeyPress) and msg.key == KEY_FORCE_QUIT:
            return [QuitRequest()]

        detail = self.detail
        if detail is not None:
            return self._update_showing_detail(detail, msg)

        if isinstance(msg, Resize):
            self.width = msg.width
            self.height = msg.height
            return []
        if isinstance(msg, RoleDetailLoaded):
            return self._apply_role_detail(msg)
        if isinstance(msg, RoleDetailFailed):
            self._apply_role_detail_failure(msg)
            return []
        if isinstance(msg, PolicyDocumentLoaded):
            logger.debug(f"Dropping policy document {msg.policy_name}: no detail view is open")
            return []
        if isinstance(msg, KeyPress):
            if self.filtering:
                self._update_filtering(msg)
                return []
            return self._update_browsing(msg.key)
        return []

    def _update_showing_detail(self, detail: DetailView, msg: Message) -> List[Request]:
        if isinstance(msg, Resize):
            self.width = msg.width
            self.height = msg.height
            return detail.update(msg)
        if isinstance(msg, KeyPress) and msg.key in KEYS_DISMISS and detail.at_outermost:
            self._return_to_browsing()
            return []
        if isinstance(msg, (RoleDetailLoaded, RoleDetailFailed)):
            return []
        return detail.update(msg)

    def _update_filtering(self, msg: KeyPress) -> None:
        if msg.key == KEY_ESCAPE:
            self.filter_input.set_value("")
            self.filter_input.blur()
            self.filtered = list(self.roles)
            self.cursor = 0
            self.mode = Browsing()
        elif msg.key == KEY_ENTER:
            self.filter_input.blur()
            self._refilter()
            self.mode = Browsing()
        elif self.filter_input.handle_key(msg.key, msg.character):
            self._refilter()

    def _update_browsing(self, key: str) -> List[Request]:
        last = len(self.filtered) - 1
        if key == KEY_QUIT:
            return [QuitRequest()]
        if key in KEYS_DOWN:
            if self.cursor < last:
                self.cursor += 1
        elif key in KEYS_UP:
            if self.cursor > 0:
                self.cursor -= 1
        elif key in KEYS_FIRST:
            self.cursor = 0
        elif key in KEYS_LAST:
            if last >= 0:
                self.cursor = last
        elif key == KEY_SEARCH:
            if not self.loading_detail:
                self.filter_input.focus()
                self.mode = Filtering()
        elif key == KEY_ENTER:
            return self._activate()
        elif key == KEY_REFRESH:
            if not self.loading_detail:
                logger.info("Refreshing role list")
                return [ListRolesRequest()]
        return []

    def _activate(self) -> List[Request]:
        role = self.selected
        if role is None or self.loading_detail:
            return []
        request = RoleDetailRequest(role_name=role.name)
        self.mode = DetailLoading(role_name=role.name, token=request.token)
        return [request]

    def _apply_role_detail(self, msg: RoleDetailLoaded) -> List[Request]:
        if not isinstance(self.mode, DetailLoading) or self.mode.token != msg.token:
            logger.debug(f"Discarding stale role detail for {msg.role.name}")
            return []
        detail = DetailView(
            msg.role,
            self.profile,
            self.region,
            identity=self.identity,
            width=self.width,
            height=self.height,
        )
        self.mode = ShowingDetail(detail)
        return []

    def _apply_role_detail_failure(self, msg: RoleDetailFailed) -> None:
        if not isinstance(self.mode, DetailLoading) or self.mode.token != msg.token:
            return
        logger.warning(f"Failed to load role {msg.role_name}: {msg.error}")
        self._return_to_browsing()

    def _refilter(self) -> None:
        self.filtered = filter_roles(self.roles, self.filter_input.value)
        self.cursor = clamp_cursor(self.cursor, len(self.filtered))
