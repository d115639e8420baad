"""Send a single email through Postmark from the command line."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

import httpx
from loguru import logger

from sendout.domain.entities import Attachment, Body, EmailMessage
from sendout.domain.errors import ConfigurationError, SendoutError, ValidationError
from sendout.infrastructure.email.providers.postmark import PostmarkClient
from sendout.infrastructure.settings import ServiceConfig, load_service_config

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SEND_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send one email via Postmark")
    parser.add_argument("--to", action="append", required=True, help="Recipient (repeatable)")
    parser.add_argument("--cc", action="append", default=[], help="Cc recipient (repeatable)")
    parser.add_argument("--bcc", action="append", default=[], help="Bcc recipient (repeatable)")
    parser.add_argument("--reply-to", action="append", default=[], help="Reply-To address (repeatable)")
    parser.add_argument("--from", dest="from_", default=None, help="Sender (default: POSTMARK_FROM_EMAIL)")
    parser.add_argument("--subject", required=True)
    body = parser.add_mutually_exclusive_group(required=True)
    body.add_argument("--text", help="Plain text body")
    body.add_argument("--html", help="HTML body")
    parser.add_argument("--attach", action="append", default=[], metavar="PATH", help="File to attach (repeatable)")
    parser.add_argument("--header", action="append", default=[], metavar="NAME:VALUE", help="Custom header (repeatable)")
    parser.add_argument("--tag", default=None)
    parser.add_argument("--stream", default=None, help="Message stream ID")
    parser.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout in seconds")
    return parser


def _parse_headers(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep:
            raise argparse.ArgumentTypeError(f"header must be NAME:VALUE, got {raw!r}")
        name = name.strip()
        if name.lower() in (seen.lower() for seen in headers):
            raise argparse.ArgumentTypeError(f"header {name!r} given more than once")
        headers[name] = value.strip()
    return headers


def build_message(args: argparse.Namespace) -> EmailMessage:
    """Turn parsed arguments into an ``EmailMessage``."""
    body = Body.html(args.html) if args.html is not None else Body.text(args.text)
    return EmailMessage(
        from_=args.from_,
        to=args.to,
        cc=args.cc,
        bcc=args.bcc,
        reply_to=args.reply_to,
        subject=args.subject,
        body=body,
        attachments=[Attachment.from_path(path) for path in args.attach],
        headers=_parse_headers(args.header),
        tag=args.tag,
        message_stream=args.stream,
    )


async def send(config: ServiceConfig, message: EmailMessage, timeout: float) -> str:
    async with httpx.AsyncClient(timeout=timeout) as http:
        delivery = await PostmarkClient(config, http).send_email(message)
    return delivery.message_id


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=os.getenv("LOG_LEVEL", "INFO"),
    )
    logger.enable("sendout")

    try:
        config = load_service_config()
        message = build_message(args)
    except (ConfigurationError, argparse.ArgumentTypeError, OSError) as e:
        logger.error(str(e))
        return EXIT_INVALID

    try:
        message_id = asyncio.run(send(config, message, args.timeout))
    except ValidationError as e:
        for violation in e.violations:
            logger.error(str(violation))
        return EXIT_INVALID
    except SendoutError as e:
        logger.error(f"Send failed: {e}")
        return EXIT_SEND_FAILED

    print(message_id)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
