"""
Campaign Folder Maintenance
===========================

Inspect and tidy a campaign folder from the command line.

Usage:
    campaign-storage list --account acme --campaign spring-sale
    campaign-storage urls --account acme --campaign spring-sale
    campaign-storage delete --account acme --campaign spring-sale banner.png
    campaign-storage clear --account acme --campaign spring-sale

Configuration comes from the environment / .env (STORAGE_BACKEND,
AWS_S3_BUCKET_NAME, AWS_REGION, ...).
"""

import argparse
import asyncio
import sys
import uuid
from typing import List, Optional

from campaign_storage.core.config import Settings, settings as default_settings
from campaign_storage.core.errors import StorageOperationError
from campaign_storage.core.logging_config import (
    clear_trace_id,
    get_logger,
    set_trace_id,
    setup_logging,
)
from campaign_storage.services import MessageStorageFacade, build_storage_facade
from campaign_storage.services.messages import CLEARED, DELETED


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="campaign-storage",
        description="Inspect and maintain campaign asset folders.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("list", "List object names in the campaign folder"),
        ("last-modified", "Show the most recent modification time"),
        ("urls", "Print presigned URLs for the folder's images"),
        ("console-url", "Print the AWS console link for the folder"),
        ("audience", "Print the audience definition, if any"),
        ("clear", "Delete everything except audience.json"),
        ("delete", "Delete one object"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--account", required=True, help="Account name (first key segment)")
        sub.add_argument("--campaign", required=True, help="Campaign name (second key segment)")
        if name == "delete":
            sub.add_argument("file_name", help="Object name inside the campaign folder")

    return parser


async def run(args: argparse.Namespace, facade: MessageStorageFacade) -> int:
    """Execute one command and return the process exit code."""
    account, campaign = args.account, args.campaign

    if args.command == "list":
        names = await facade.list_folder_contents(account, campaign)
        for name in names:
            print(name)
        print(f"📊 {len(names)} object(s) in {account}/{campaign}/")
        return 0

    if args.command == "last-modified":
        modified = await facade.get_last_modified(account, campaign)
        print(modified.isoformat() if modified else "(empty folder)")
        return 0

    if args.command == "urls":
        for url in await facade.get_signed_urls(account, campaign):
            print(url)
        return 0

    if args.command == "console-url":
        print(facade.get_folder_console_url(account, campaign))
        return 0

    if args.command == "audience":
        print(await facade.get_audience_json(account, campaign) or "(no audience.json)")
        return 0

    if args.command == "clear":
        message = await facade.clear_folder(account, campaign)
        print(f"✅ Cleared {account}/{campaign}/" if message == CLEARED else f"❌ {message}")
        return 0 if message == CLEARED else 1

    # delete
    message = await facade.delete_object(account, campaign, args.file_name)
    print(f"✅ Deleted {args.file_name}" if message == DELETED else f"❌ {message}")
    return 0 if message == DELETED else 1


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or default_settings
    args = build_parser().parse_args(argv)

    setup_logging(
        debug=settings.is_debug_mode,
        json_logs=settings.use_json_logs,
        log_level=settings.LOG_LEVEL,
    )

    facade = MessageStorageFacade(build_storage_facade(settings), settings.SUPPORT_EMAIL)

    # One trace ID per invocation ties the client and facade log lines together
    set_trace_id(str(uuid.uuid4()))
    try:
        return asyncio.run(run(args, facade))
    except StorageOperationError as exc:
        logger.error(
            "campaign_storage_command_failed",
            command=args.command,
            error_code=exc.code.value,
            error=exc.message,
        )
        print(f"❌ ERROR: {exc.message}", file=sys.stderr)
        return 1
    finally:
        clear_trace_id()


if __name__ == "__main__":
    sys.exit(main())
