"""Caller identity lookup via STS."""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError
from cachetools import TTLCache

from ..domain.identity import CallerIdentity
from ..exceptions import DataSourceError

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self, session: boto3.Session, cache_ttl: int = 3600):
        # STS needs a region even though IAM is global
        self.sts_client = session.client("sts", region_name=session.region_name or "us-east-1")
        self.identity_cache: TTLCache = TTLCache(maxsize=1, ttl=cache_ttl)

    def get_caller_identity(self) -> CallerIdentity:
        """Return the principal behind the current session.

        Raises:
            DataSourceError: If STS rejects the call or no credentials are configured.
        """
        cache_key = "caller_identity"
        if cache_key in self.identity_cache:
            return self.identity_cache[cache_key]

        try:
            response = self.sts_client.get_caller_identity()
        except NoCredentialsError as e:
            raise DataSourceError("AWS credentials not found", operation="get_caller_identity") from e
        except (ClientError, BotoCoreError) as e:
            raise DataSourceError(
                f"failed to get caller identity: {e}", operation="get_caller_identity"
            ) from e

        identity = CallerIdentity.from_sts_response(response)
        logger.info(f"Authenticated as {identity.arn}")
        self.identity_cache[cache_key] = identity
        return identity
