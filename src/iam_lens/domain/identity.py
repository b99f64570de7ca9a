"""Caller identity domain object."""

from __future__ import annotations

from dataclasses import dataclass


def display_name_from_arn(arn: str, principal_id: str) -> str:
    """Derive a short display name from a caller ARN.

    Examples:
        arn:aws:iam::123456789012:user/alice -> alice
        arn:aws:sts::123456789012:assumed-role/Admin/alice -> Admin/alice
        arn:aws:iam::123456789012:root -> root
    """
    slash_parts = arn.split("/")
    if len(slash_parts) > 1:
        return "/".join(slash_parts[1:])

    colon_parts = arn.split(":")
    if len(colon_parts) > 5:
        return colon_parts[5]
    return principal_id


@dataclass(frozen=True)
class CallerIdentity:
    """The principal the running session is authenticated as."""

    account: str
    principal_id: str
    arn: str
    display_name: str

    @classmethod
    def from_sts_response(cls, response: dict) -> "CallerIdentity":
        account = response.get("Account", "")
        principal_id = response.get("UserId", "")
        arn = response.get("Arn", "")
        return cls(
            account=account,
            principal_id=principal_id,
            arn=arn,
            display_name=display_name_from_arn(arn, principal_id),
        )
