"""IAM role and policy lookups.

Every primary call raises ``DataSourceError`` on failure. Secondary listings
in ``get_role_detail`` (tags, attached and inline policies) degrade to empty
results so a single denied permission does not hide the whole role.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from cachetools import TTLCache

from ..domain.role import ManagedPolicy, Role, Tag
from ..exceptions import DataSourceError

logger = logging.getLogger(__name__)


def format_policy_document(document: Any) -> str:
    """Render a policy document as indented JSON.

    IAM returns documents URL-encoded; boto3 usually decodes them into a dict
    already. Text that is not valid JSON is returned as-is.
    """
    if document is None:
        return ""
    if isinstance(document, (dict, list)):
        return json.dumps(document, indent=2)

    text = unquote(str(document))
    try:
        return json.dumps(json.loads(text), indent=2)
    except ValueError:
        return text


def _role_from_response(data: Dict[str, Any]) -> Role:
    last_used: Optional[datetime] = (data.get("RoleLastUsed") or {}).get("LastUsedDate")
    return Role(
        name=data["RoleName"],
        arn=data["Arn"],
        created=data["CreateDate"],
        last_used=last_used,
        description=data.get("Description") or "",
        max_session_duration=int(data.get("MaxSessionDuration") or 0),
        path=data.get("Path", "/"),
        role_id=data.get("RoleId", ""),
        tags=tuple(Tag(t["Key"], t["Value"]) for t in data.get("Tags") or []),
        trust_policy=format_policy_document(data.get("AssumeRolePolicyDocument")),
    )


class RoleService:
    """Read-only access to IAM roles and their policies."""

    def __init__(self, session: boto3.Session, cache_ttl: int = 300):
        self.iam_client = session.client("iam")
        self.policy_cache: TTLCache = TTLCache(maxsize=256, ttl=cache_ttl)
        self._cache_lock = threading.Lock()

    def list_roles(self) -> List[Role]:
        roles: List[Role] = []
        try:
            paginator = self.iam_client.get_paginator("list_roles")
            for page in paginator.paginate():
                roles.extend(_role_from_response(r) for r in page.get("Roles", []))
        except (ClientError, BotoCoreError) as e:
            raise DataSourceError(f"failed to list roles: {e}", operation="list_roles") from e
        logger.debug(f"Listed {len(roles)} roles")
        return roles

    def get_role_detail(self, role_name: str) -> Role:
        try:
            response = self.iam_client.get_role(RoleName=role_name)
        except (ClientError, BotoCoreError) as e:
            raise DataSourceError(f"failed to get role: {e}", operation="get_role") from e

        role = _role_from_response(response["Role"])
        tags = self._list_tags(role_name)
        managed = self._list_attached_policies(role_name)
        inline = self._list_inline_policies(role_name)

        return Role(
            name=role.name,
            arn=role.arn,
            created=role.created,
            last_used=role.last_used,
            description=role.description,
            max_session_duration=role.max_session_duration,
            path=role.path,
            role_id=role.role_id,
            tags=tuple(tags) if tags is not None else role.tags,
            trust_policy=role.trust_policy,
            managed_policies=tuple(managed),
            inline_policies=tuple(inline),
        )

    def get_managed_policy_document(self, arn: str) -> str:
        with self._cache_lock:
            if arn in self.policy_cache:
                return self.policy_cache[arn]

        try:
            policy = self.iam_client.get_policy(PolicyArn=arn)["Policy"]
            version = self.iam_client.get_policy_version(
                PolicyArn=arn, VersionId=policy["DefaultVersionId"]
            )
        except (ClientError, BotoCoreError) as e:
            raise DataSourceError(
                f"failed to get managed policy: {e}", operation="get_policy_version"
            ) from e

        document = format_policy_document(version["PolicyVersion"].get("Document"))
        with self._cache_lock:
            self.policy_cache[arn] = document
        return document

    def get_inline_policy_document(self, role_name: str, policy_name: str) -> str:
        try:
            response = self.iam_client.get_role_policy(RoleName=role_name, PolicyName=policy_name)
        except (ClientError, BotoCoreError) as e:
            raise DataSourceError(
                f"failed to get inline policy: {e}", operation="get_role_policy"
            ) from e
        return format_policy_document(response.get("PolicyDocument"))

    def _list_tags(self, role_name: str) -> Optional[List[Tag]]:
        try:
            paginator = self.iam_client.get_paginator("list_role_tags")
            return [
                Tag(t["Key"], t["Value"])
                for page in paginator.paginate(RoleName=role_name)
                for t in page.get("Tags", [])
            ]
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Could not list tags for {role_name}: {e}")
            return None

    def _list_attached_policies(self, role_name: str) -> List[ManagedPolicy]:
        try:
            paginator = self.iam_client.get_paginator("list_attached_role_policies")
            return [
                ManagedPolicy(p["PolicyName"], p["PolicyArn"])
                for page in paginator.paginate(RoleName=role_name)
                for p in page.get("AttachedPolicies", [])
            ]
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Could not list attached policies for {role_name}: {e}")
            return []

    def _list_inline_policies(self, role_name: str) -> List[str]:
        try:
            paginator = self.iam_client.get_paginator("list_role_policies")
            return [
                name
                for page in paginator.paginate(RoleName=role_name)
                for name in page.get("PolicyNames", [])
            ]
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Could not list inline policies for {role_name}: {e}")
            return []
