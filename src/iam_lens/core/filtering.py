"""Case-insensitive role filtering."""

from __future__ import annotations

from typing import List, Sequence

from ..domain.role import Role


def filter_roles(roles: Sequence[Role], query: str) -> List[Role]:
    """Return roles whose name or description contains ``query``, in source order.

    An empty query returns the whole collection.
    """
    needle = query.lower()
    if not needle:
        return list(roles)
    return [
        role
        for role in roles
        if needle in role.name.lower() or needle in role.description.lower()
    ]


def clamp_cursor(cursor: int, length: int) -> int:
    """Reset a cursor that fell outside ``[0, length)`` back to the first item.

    The cursor goes to 0 rather than the last item so a narrowing filter never
    lands on an unrelated role at the bottom of the list.
    """
    if cursor < 0 or cursor >= length:
        return 0
    return cursor
