"""Configuration for iam-lens.

AWS profile and region follow the usual precedence: command-line flag, then
``AWS_PROFILE`` / ``AWS_REGION`` / ``AWS_DEFAULT_REGION``. Everything else is
read from ``IAM_LENS_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

DEFAULT_LOG_FILE = os.path.join("~", ".cache", "iam-lens", "iam-lens.log")


@dataclass(frozen=True)
class Settings:
    profile: str
    region: str

    @property
    def profile_label(self) -> str:
        return self.profile or "default"


def resolve_settings(
    profile: Optional[str] = None,
    region: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    env = os.environ if environ is None else environ
    resolved_profile = profile or env.get("AWS_PROFILE", "")
    resolved_region = region or env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION", "")
    return Settings(profile=resolved_profile, region=resolved_region)


class LoggingConfig:
    """Configuration for log output. Logs go to a file so they never draw over the UI."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ
        self.LOG_LEVEL: str = env.get("IAM_LENS_LOG_LEVEL", env.get("LOG_LEVEL", "INFO")).upper()
        self.LOG_FILE: str = os.path.expanduser(env.get("IAM_LENS_LOG_FILE", DEFAULT_LOG_FILE))


class CacheConfig:
    """Configuration for data-source caches."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ
        raw_ttl = env.get("IAM_LENS_POLICY_CACHE_TTL", "300")
        try:
            self.POLICY_CACHE_TTL: int = int(raw_ttl)
        except ValueError as e:
            raise ConfigurationError(f"IAM_LENS_POLICY_CACHE_TTL must be an integer, got {raw_ttl!r}") from e
        if self.POLICY_CACHE_TTL <= 0:
            raise ConfigurationError("IAM_LENS_POLICY_CACHE_TTL must be positive")
