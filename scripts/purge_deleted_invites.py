#!/usr/bin/env python3
"""Permanently delete invites that were soft-deleted long ago.

Meant to run from a scheduler (e.g. daily cron). The age threshold defaults
to INVITATIONS__PURGE_AFTER_DAYS.
"""

import argparse
import asyncio
import sys

import logfire

from anemi.application.usecase.invite import (
    PurgeDeletedInvitesRequest,
    PurgeDeletedInvitesUseCase,
)
from anemi.config import Settings
from anemi.util.di.container import create_container
from anemi.util.observability import configure_logfire


async def purge(older_than_days: int) -> int:
    """Run the purge use case inside a request-scoped container."""
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(PurgeDeletedInvitesUseCase)
            response = await use_case.execute(
                PurgeDeletedInvitesRequest(older_than_days=older_than_days)
            )
            return response.purged
    finally:
        await container.close()


def main() -> int:
    """Purge deleted invites and log the outcome to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--older-than-days",
        type=int,
        default=settings.invitations.purge_after_days,
        help="Purge invites deleted more than this many days ago",
    )
    args = parser.parse_args()

    try:
        purged = asyncio.run(purge(args.older_than_days))
        logfire.info(
            "Purge finished", purged=purged, older_than_days=args.older_than_days
        )
        return 0

    except Exception as e:
        logfire.error(
            "Purge failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
