"""Top-level reducer: which screen is active and where messages go."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from ..constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, KEY_FORCE_QUIT, KEY_QUIT
from ..domain.identity import CallerIdentity
from .list_view import ListView
from .messages import (
    CallerIdentityRequest,
    IdentityLoaded,
    KeyPress,
    ListRolesRequest,
    Message,
    QuitRequest,
    Request,
    Resize,
    RolesFailed,
    RolesLoaded,
)

logger = logging.getLogger(__name__)


@dataclass
class Loading:
    pass


@dataclass
class ListState:
    list_view: ListView


@dataclass
class ErrorState:
    error: str


AppMode = Union[Loading, ListState, ErrorState]


class AppReducer:
    """Processes one message at a time and returns the follow-up requests."""

    def __init__(
        self,
        profile: str,
        region: str,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        self.profile = profile
        self.region = region
        self.width = width
        self.height = height
        self.identity: Optional[CallerIdentity] = None
        self.mode: AppMode = Loading()

    @property
    def list_view(self) -> Optional[ListView]:
        if isinstance(self.mode, ListState):
            return self.mode.list_view
        return None

    def init(self) -> List[Request]:
        return [ListRolesRequest(), CallerIdentityRequest()]

    def update(self, msg: Message) -> List[Request]:
        list_view = self.list_view

        if isinstance(msg, Resize):
            self.width = msg.width
            self.height = msg.height
            if list_view is not None:
                return list_view.update(msg)
            return []

        if isinstance(msg, RolesLoaded):
            if list_view is None:
                logger.info(f"Loaded {len(msg.roles)} roles")
                self.mode = ListState(
                    ListView(
                        msg.roles,
                        self.profile,
                        self.region,
                        identity=self.identity,
                        width=self.width,
                        height=self.height,
                    )
                )
            else:
                list_view.replace_roles(msg.roles)
            return []

        if isinstance(msg, RolesFailed):
            logger.error(f"Failed to load roles: {msg.error}")
            self.mode = ErrorState(msg.error)
            return []

        if isinstance(msg, IdentityLoaded):
            self.identity = msg.identity
            if list_view is not None:
                list_view.set_identity(msg.identity)
            return []

        if isinstance(msg, KeyPress):
            if isinstance(self.mode, ErrorState) and msg.key in (KEY_QUIT, KEY_FORCE_QUIT):
                return [QuitRequest()]
            if isinstance(self.mode, Loading) and msg.key == KEY_FORCE_QUIT:
                return [QuitRequest()]

        if list_view is not None:
            return list_view.update(msg)
        return []
