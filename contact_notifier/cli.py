from __future__ import annotations

import argparse
import asyncio
import sys

from contact_notifier.contact_api import run_api_server
from contact_notifier.logging_utils import setup_logging
from contact_notifier.models import Submission
from contact_notifier.notifier import ContactNotifier
from contact_notifier.settings import load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contact-notifier")
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Deliver one contact-form submission")
    send.add_argument("--name", required=True)
    send.add_argument("--email", required=True)
    send.add_argument("--message", default=None, help="Message text (read from stdin when omitted)")

    subparsers.add_parser("api-run", help="Serve the contact-form HTTP endpoint")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level, settings.log_dir)
    notifier = ContactNotifier(settings)

    if args.command == "api-run":
        run_api_server(settings.api_host, settings.api_port, notifier)
        return 0

    message = args.message if args.message is not None else sys.stdin.read()
    submission = Submission(name=args.name, email=args.email, message=message)
    delivered = asyncio.run(notifier.notify(submission))
    return 0 if delivered else 1


if __name__ == "__main__":
    sys.exit(main())
