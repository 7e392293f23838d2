"""
Command line entry point.

    slack-file-cleaner --token xoxp-... --days 30
"""

import argparse
import asyncio
import sys
from typing import Optional

from . import __version__
from .cleanup import run_cleanup
from .exceptions import CleanerError, MissingCredentialError
from .logger import LOG_LEVELS, log, setup_logs
from .settings import DEFAULT_DAYS, CleanerConfig, load_settings


def die(fmt, *args):
    """
    Exit the script with the specifed error message.
    """
    if not len(args):
        text = str(fmt)
    else:
        text = fmt % args

    print("error:", text, file=sys.stderr)
    sys.exit(1)


def non_negative_int(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of days: {value!r}")

    if days < 0:
        raise argparse.ArgumentTypeError(f"number of days must be >= 0, got {days}")

    return days


def log_level(value: str) -> str:
    level = value.upper()

    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid log level: {value!r} (choose from {', '.join(LOG_LEVELS)})"
        )

    return level


def generate_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="slack-file-cleaner",
        description=(
            "Delete every file older than a given number of days from the "
            "account the token belongs to. Deletion is irreversible."
        ),
    )
    ap.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    ap.add_argument(
        "-t",
        "--token",
        help="API access token. For Slack, see https://api.slack.com/authentication/token-types",
    )
    ap.add_argument(
        "-d",
        "--days",
        type=non_negative_int,
        default=DEFAULT_DAYS,
        help=f"Delete files older than this many days. Default is {DEFAULT_DAYS}.",
    )
    ap.add_argument(
        "--log-level",
        type=log_level,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to the configured level.",
    )

    return ap


def resolve_config(args: argparse.Namespace) -> CleanerConfig:
    """
    Turn parsed arguments into a CleanerConfig.

    Raises
    ------
    MissingCredentialError
        If no token (or a blank one) was given.
    """
    token = (args.token or "").strip()

    if not token:
        raise MissingCredentialError("An API token is required (--token)")

    return CleanerConfig(token=token, threshold_days=args.days)


def main(argv: Optional[list[str]] = None) -> int:
    args = generate_parser().parse_args(argv)
    settings = load_settings()

    setup_logs(args.log_level or settings.log_level)

    try:
        config = resolve_config(args)
    except MissingCredentialError as e:
        die(e)

    log.info("Deleting files older than {} days", config.threshold_days)

    try:
        asyncio.run(run_cleanup(config, settings))
    except CleanerError as e:
        die("%s", e)

    return 0
