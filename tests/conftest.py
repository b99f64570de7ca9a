"""Test configuration for pytest."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from iam_lens.domain.identity import CallerIdentity
from iam_lens.domain.role import ManagedPolicy, Role, Tag

CREATED = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def build_role(name: str, description: str = "", **kwargs) -> Role:
    """Role with sensible defaults; any Role field can be overridden."""
    return Role(
        name=name,
        arn=f"arn:aws:iam::123456789012:role/{name}",
        created=kwargs.pop("created", CREATED),
        description=description,
        **kwargs,
    )


@pytest.fixture
def make_role() -> Callable[..., Role]:
    return build_role


@pytest.fixture
def roles() -> list[Role]:
    return [
        build_role("prod-admin", "Administrator access for production"),
        build_role("dev-reader", "Read-only access for development"),
        build_role("prod-reader", "Read-only access for production"),
    ]


@pytest.fixture
def policy_role() -> Role:
    """Role with 2 managed and 3 inline policies."""
    return build_role(
        "app-runtime",
        "Application runtime role",
        role_id="AROAEXAMPLE",
        tags=(Tag("team", "platform"), Tag("env", "prod")),
        trust_policy='{\n  "Version": "2012-10-17"\n}',
        managed_policies=(
            ManagedPolicy("ReadOnlyAccess", "arn:aws:iam::aws:policy/ReadOnlyAccess"),
            ManagedPolicy("AmazonS3FullAccess", "arn:aws:iam::aws:policy/AmazonS3FullAccess"),
        ),
        inline_policies=("logs-write", "kms-decrypt", "sqs-consume"),
    )


@pytest.fixture
def identity() -> CallerIdentity:
    return CallerIdentity(
        account="123456789012",
        principal_id="AIDAEXAMPLE",
        arn="arn:aws:iam::123456789012:user/alice",
        display_name="alice",
    )
