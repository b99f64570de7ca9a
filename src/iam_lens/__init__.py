"""iam-lens - a terminal dashboard for browsing AWS IAM roles.

This package lists the roles in an account with live filtering, shows each
role's trust policy, tags and attached policies, and searches inside policy
documents.
"""

from __future__ import annotations

__version__ = "0.1.0"
