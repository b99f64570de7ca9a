"""AWS data source for iam-lens.

This package provides the IAM and STS lookups the dashboard needs:
- Session creation from profile and region
- Role listing, role detail and policy document retrieval
- Caller identity discovery
"""

from .identity_service import IdentityService
from .role_service import RoleService, format_policy_document
from .session import create_session

__all__ = [
    "create_session",
    "format_policy_document",
    "IdentityService",
    "RoleService",
]
