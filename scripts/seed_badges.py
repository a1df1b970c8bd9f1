#!/usr/bin/env python3
"""Create or update the built-in badge catalogue."""

import asyncio
import sys

import logfire

from forum.config import Settings
from forum.domain.service import BADGE_DEFINITIONS
from forum.persistence.database import create_engine, create_session_factory
from forum.persistence.repository import PostgresBadgeRepository
from forum.util.observability import configure_logfire


async def seed(settings: Settings) -> int:
    """Upsert every badge definition in one transaction.

    Returns:
        Number of badges written
    """
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as session, session.begin():
            repository = PostgresBadgeRepository(session)
            for badge in BADGE_DEFINITIONS:
                await repository.upsert(badge)
    finally:
        await engine.dispose()
    return len(BADGE_DEFINITIONS)


def main() -> int:
    """Seed badges and log the outcome to Logfire."""
    settings = Settings()

    configure_logfire(settings)

    with logfire.span("seed_badges"):
        try:
            count = asyncio.run(seed(settings))
        except Exception as e:
            logfire.error(
                "Badge seeding failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Badges seeded", count=count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
