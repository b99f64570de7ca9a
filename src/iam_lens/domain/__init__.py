"""Domain objects for roles and the caller identity."""

from .identity import CallerIdentity, display_name_from_arn
from .role import ManagedPolicy, Role, Tag

__all__ = ["CallerIdentity", "display_name_from_arn", "ManagedPolicy", "Role", "Tag"]
