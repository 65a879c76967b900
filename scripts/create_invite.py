#!/usr/bin/env python3
"""Create an invite for an email address, or show the existing one.

Usage:
    python scripts/create_invite.py user@example.com
    python scripts/create_invite.py --show user@example.com
"""

import argparse
import asyncio
import re
import sys

import logfire

from rediscover.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    GetInviteRequest,
    GetInviteUseCase,
)
from rediscover.config import Settings
from rediscover.domain.error import DomainError, NotFoundError
from rediscover.domain.value import MAX_EMAIL_LENGTH
from rediscover.util.di.container import create_container
from rediscover.util.logging import get_logger, setup_logging
from rediscover.util.observability import configure_logfire

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

logger = get_logger(__name__)


async def run(email: str, show: bool) -> int:
    """Create or show the invite using the production container."""
    container = create_container()
    try:
        async with container() as request_container:
            if show:
                use_case = await request_container.get(GetInviteUseCase)
                invite = await use_case.execute(GetInviteRequest(email=email))
            else:
                use_case = await request_container.get(CreateInviteUseCase)
                invite = await use_case.execute(CreateInviteRequest(email=email))
                print("Invite created successfully!")
    except NotFoundError:
        print(f"No invite found for {email}", file=sys.stderr)
        return 1
    except DomainError as e:
        logger.error("Invite command failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await container.close()

    print(f"Email: {invite.email}")
    print(f"Code: {invite.code}")
    print(f"Created: {invite.created_at.isoformat()}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage registration invites")
    parser.add_argument("email", help="Invitee email address")
    parser.add_argument(
        "--show", action="store_true", help="Show the invite instead of creating one"
    )
    args = parser.parse_args()

    if len(args.email) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(args.email):
        print("Error: Invalid email address format", file=sys.stderr)
        return 1

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("create_invite_script", email=args.email, show=args.show):
        return asyncio.run(run(args.email, args.show))


if __name__ == "__main__":
    sys.exit(main())
