"""boto3 session creation for the IAM and STS clients."""

from __future__ import annotations

import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from ..exceptions import SessionError

logger = logging.getLogger(__name__)


def create_session(profile: Optional[str] = None, region: Optional[str] = None) -> boto3.Session:
    """Return a boto3 session for ``profile``/``region``, falling back to the default chain.

    Raises:
        SessionError: If the profile does not exist or the configuration cannot be loaded.
    """
    kwargs = {}
    if profile:
        kwargs["profile_name"] = profile
    if region:
        kwargs["region_name"] = region

    try:
        session = boto3.Session(**kwargs)
    except ProfileNotFound as e:
        raise SessionError(f"AWS profile not found: {profile}") from e
    except BotoCoreError as e:
        raise SessionError(f"Unable to load AWS configuration: {e}") from e

    logger.info(f"Using AWS profile={profile or 'default'} region={session.region_name or 'unset'}")
    return session


def session_region(session: boto3.Session, fallback: str = "") -> str:
    return session.region_name or fallback
