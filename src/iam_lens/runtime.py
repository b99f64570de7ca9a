"""Execution of core requests against the AWS data source.

``RequestExecutor.execute`` runs on a worker thread and always returns a
result message; data-source failures are turned into failure messages rather
than propagated, so the reducer sees every outcome in arrival order.
"""

from __future__ import annotations

import logging
from typing import Optional

from .aws.identity_service import IdentityService
from .aws.role_service import RoleService
from .core.messages import (
    CallerIdentityRequest,
    IdentityLoaded,
    InlinePolicyDocumentRequest,
    ListRolesRequest,
    ManagedPolicyDocumentRequest,
    Message,
    PolicyDocumentLoaded,
    Request,
    RoleDetailFailed,
    RoleDetailLoaded,
    RoleDetailRequest,
    RolesFailed,
    RolesLoaded,
)
from .exceptions import DataSourceError

logger = logging.getLogger(__name__)


class RequestExecutor:
    def __init__(self, role_service: RoleService, identity_service: IdentityService) -> None:
        self.role_service = role_service
        self.identity_service = identity_service

    def execute(self, request: Request) -> Optional[Message]:
        if isinstance(request, ListRolesRequest):
            try:
                return RolesLoaded(tuple(self.role_service.list_roles()))
            except DataSourceError as e:
                return RolesFailed(str(e))

        if isinstance(request, CallerIdentityRequest):
            try:
                return IdentityLoaded(self.identity_service.get_caller_identity())
            except DataSourceError as e:
                logger.warning(f"Caller identity unavailable: {e}")
                return IdentityLoaded(None)

        if isinstance(request, RoleDetailRequest):
            try:
                role = self.role_service.get_role_detail(request.role_name)
            except DataSourceError as e:
                return RoleDetailFailed(request.role_name, str(e), request.token)
            return RoleDetailLoaded(role, request.token)

        if isinstance(request, ManagedPolicyDocumentRequest):
            try:
                document = self.role_service.get_managed_policy_document(request.arn)
            except DataSourceError as e:
                return PolicyDocumentLoaded(request.policy_name, "", request.token, error=str(e))
            return PolicyDocumentLoaded(request.policy_name, document, request.token)

        if isinstance(request, InlinePolicyDocumentRequest):
            try:
                document = self.role_service.get_inline_policy_document(
                    request.role_name, request.policy_name
                )
            except DataSourceError as e:
                return PolicyDocumentLoaded(request.policy_name, "", request.token, error=str(e))
            return PolicyDocumentLoaded(request.policy_name, document, request.token)

        logger.warning(f"No executor for request {type(request).__name__}")
        return None
