#!/usr/bin/env python3
"""
Check the outbound mail configuration by sending a test message.

Reads the same settings as the API (environment / .env), resolves the
configured provider and sends one plain notice.

Usage:
    python scripts/check_mail.py [--to someone@example.com]
"""

import argparse
import asyncio
import sys

from nurse_mail.config import settings
from nurse_mail.errors import ConfigurationMissing
from nurse_mail.providers import resolve_email_provider

TEST_SUBJECT = "Mail configuration test - Nurse Platform"
TEST_BODY = (
    "<p>This is a test message from the Nurse Platform mail service.</p>"
    "<p>If you received it, outbound email is configured correctly.</p>"
)


def _describe_settings() -> None:
    print(f"MAIL_PROVIDER: {settings.mail_provider}")
    print(f"MAIL_HOST:     {settings.mail_host or 'NOT SET'}")
    print(f"MAIL_PORT:     {settings.mail_port}")
    print(f"MAIL_USER:     {settings.mail_user or 'NOT SET'}")
    print(f"MAIL_PASSWORD: {'******' if settings.mail_password else 'NOT SET'}")
    print(f"FRONTEND_URL:  {settings.frontend_url or 'NOT SET'}")


async def _send(to: str) -> None:
    provider = resolve_email_provider(settings)
    print(f"\nSending test email via {provider.provider_type} to {to}...")
    await provider.send_email(to, TEST_SUBJECT, TEST_BODY, settings.mail_sender_name)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--to", help="Recipient address (defaults to MAIL_USER)")
    args = parser.parse_args(argv)

    _describe_settings()

    to = args.to or settings.mail_user
    if not to:
        print("ERROR: no recipient. Pass --to or set MAIL_USER.")
        return 2

    try:
        asyncio.run(_send(to))
    except (ConfigurationMissing, ValueError) as exc:
        print(f"ERROR: mail is not configured: {exc}")
        return 2
    except Exception as exc:
        print(f"ERROR: test email failed: {exc}")
        return 1

    print("Test email sent. Check the inbox.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
