"""Role domain objects.

Roles are immutable once loaded. The list view owns the authoritative
collection and the detail view holds a read-only reference to one entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Tag:
    key: str
    value: str


@dataclass(frozen=True)
class ManagedPolicy:
    """Reference to a managed policy attached to a role."""

    name: str
    arn: str


@dataclass(frozen=True)
class Role:
    """IAM role as displayed by the dashboard.

    Attributes:
        name: Role name, unique within the account
        arn: Full role ARN
        created: Creation timestamp
        last_used: Last time the role was assumed, if ever
        description: Free-text description (empty string when unset)
        max_session_duration: Session duration limit in seconds
        path: IAM path, e.g. ``/service-role/``
        role_id: Opaque role identifier
        tags: Tags in the order IAM returns them
        trust_policy: Pretty-printed trust policy document
        managed_policies: Attached managed policies
        inline_policies: Names of inline policies
    """

    name: str
    arn: str
    created: datetime
    last_used: Optional[datetime] = None
    description: str = ""
    max_session_duration: int = 3600
    path: str = "/"
    role_id: str = ""
    tags: Tuple[Tag, ...] = field(default_factory=tuple)
    trust_policy: str = ""
    managed_policies: Tuple[ManagedPolicy, ...] = field(default_factory=tuple)
    inline_policies: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def policy_count(self) -> int:
        return len(self.managed_policies) + len(self.inline_policies)
