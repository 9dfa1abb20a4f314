"""Purge expired sessions; run periodically from cron or a scheduler."""

import asyncio

import structlog

from tabsession.app import App
from tabsession.config import Config
from tabsession.logging import setup_logging

logger = structlog.get_logger(__name__)


async def purge_expired_sessions(app: App) -> int:
    async with app.lifespan():
        return await app.purge_expired_sessions()


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    deleted = asyncio.run(purge_expired_sessions(App(config)))
    logger.info("purge_finished", deleted=deleted)


if __name__ == "__main__":
    main()
