#!/usr/bin/env python3
"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .aws.identity_service import IdentityService
from .aws.role_service import RoleService
from .aws.session import create_session, session_region
from .config import CacheConfig, LoggingConfig, resolve_settings
from .core.app_state import AppReducer
from .exceptions import ConfigurationError, SessionError
from .runtime import RequestExecutor

logger = logging.getLogger(__name__)

EPILOG = """\
Environment Variables:
  AWS_PROFILE                 Default AWS profile
  AWS_REGION                  Default AWS region
  AWS_DEFAULT_REGION          Alternative for AWS region
  IAM_LENS_LOG_LEVEL          Log level (default: INFO)
  IAM_LENS_LOG_FILE           Log file (default: ~/.cache/iam-lens/iam-lens.log)
  IAM_LENS_POLICY_CACHE_TTL   Seconds to cache managed policy documents (default: 300)

Keyboard Shortcuts:
  j/k or Up/Down     Navigate up/down
  g/G                First/last
  Enter              View role details / policy document
  /                  Filter roles, or search inside a policy document
  n/N                Next/previous search match
  Tab/Shift+Tab      Switch tabs in the detail view
  r                  Refresh the role list
  Esc                Go back
  q                  Quit (Ctrl+C from anywhere)
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iam-lens",
        description="iam-lens - browse AWS IAM roles from the terminal",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--profile", default=None, help="AWS profile to use (default: from environment)")
    parser.add_argument("--region", default=None, help="AWS region to use (default: from environment)")
    parser.add_argument("--log-level", default=None, help="Override IAM_LENS_LOG_LEVEL")
    return parser


def configure_logging(config: LoggingConfig, level_override: Optional[str] = None) -> None:
    level = (level_override or config.LOG_LEVEL).upper()
    log_dir = os.path.dirname(config.LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=config.LOG_FILE,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the role browser."""
    args = build_parser().parse_args(argv)

    # .env in the working directory only, for local development
    load_dotenv()

    logging_config = LoggingConfig()
    try:
        configure_logging(logging_config, args.log_level)
    except OSError as e:
        # Logging is not set up yet, so stderr is the only place to report this
        print(f"Error: cannot write log file {logging_config.LOG_FILE}: {e}", file=sys.stderr)
        sys.exit(1)
    settings = resolve_settings(args.profile, args.region)

    try:
        cache_config = CacheConfig()
        session = create_session(settings.profile, settings.region)
    except (ConfigurationError, SessionError) as e:
        logger.error(f"Startup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    executor = RequestExecutor(
        RoleService(session, cache_ttl=cache_config.POLICY_CACHE_TTL),
        IdentityService(session),
    )
    reducer = AppReducer(settings.profile, session_region(session, settings.region))

    # Imported late so --help works without initialising textual
    from .tui.app import RoleBrowserApp

    RoleBrowserApp(reducer, executor).run()


if __name__ == "__main__":
    main()
