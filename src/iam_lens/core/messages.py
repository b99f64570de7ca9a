"""Messages consumed by the state machines and requests they emit.

The host runtime feeds ``Message`` objects into the reducer one at a time and
executes whatever ``Request`` objects come back. Requests that fetch on behalf
of a specific view carry a ``token`` which the result message echoes, so a
view can tell its own outstanding result apart from a stale one.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..domain.identity import CallerIdentity
from ..domain.role import Role

_tokens = itertools.count(1)


def next_token() -> int:
    return next(_tokens)


class Message:
    """Base class for everything the reducer can receive."""


class Request:
    """Base class for asynchronous work the host runtime must execute."""


# Input


@dataclass(frozen=True)
class KeyPress(Message):
    key: str
    character: Optional[str] = None


@dataclass(frozen=True)
class Resize(Message):
    width: int
    height: int


# Results


@dataclass(frozen=True)
class RolesLoaded(Message):
    roles: Tuple[Role, ...]


@dataclass(frozen=True)
class RolesFailed(Message):
    error: str


@dataclass(frozen=True)
class IdentityLoaded(Message):
    """Caller identity result. ``identity`` is None when the lookup failed."""

    identity: Optional[CallerIdentity]


@dataclass(frozen=True)
class RoleDetailLoaded(Message):
    role: Role
    token: int


@dataclass(frozen=True)
class RoleDetailFailed(Message):
    role_name: str
    error: str
    token: int


@dataclass(frozen=True)
class PolicyDocumentLoaded(Message):
    policy_name: str
    document: str
    token: int
    error: Optional[str] = None


# Requests


@dataclass(frozen=True)
class ListRolesRequest(Request):
    pass


@dataclass(frozen=True)
class CallerIdentityRequest(Request):
    pass


@dataclass(frozen=True)
class RoleDetailRequest(Request):
    role_name: str
    token: int = field(default_factory=next_token)


@dataclass(frozen=True)
class ManagedPolicyDocumentRequest(Request):
    policy_name: str
    arn: str
    token: int = field(default_factory=next_token)


@dataclass(frozen=True)
class InlinePolicyDocumentRequest(Request):
    role_name: str
    policy_name: str
    token: int = field(default_factory=next_token)


@dataclass(frozen=True)
class QuitRequest(Request):
    pass
