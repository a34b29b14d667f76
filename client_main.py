# client_main.py
"""
Headless board watcher.

Runs one BoardSession against a storyboard server: polls on the configured
interval and logs a summary line every time the local board changes.

    STORYBOARD_API_URL=http://localhost:8000 python client_main.py
"""

import asyncio
import logging

from storyboard.api_client import BoardApiClient
from storyboard.board_state import BoardState
from storyboard.log_utils import color_print, configure_logging
from storyboard.preferences import DisplayNamePreference
from storyboard.session import BoardSession
from storyboard.settings import API_URL, POLL_INTERVAL
from storyboard.view_projection import board_stats

logger = logging.getLogger("storyboard_client")


def _log_board(state: BoardState) -> None:
    if state.loading:
        return
    stats = board_stats(state.notes)
    color_print(
        logger,
        f"{stats.total} {'story' if stats.total == 1 else 'stories'} | "
        f"{stats.industries} industries | "
        f"{stats.optimistic} optimistic | {stats.pessimistic} pessimistic",
        color="cyan",
    )


async def run() -> None:
    async with BoardApiClient(API_URL) as api:
        session = BoardSession(api, preferences=DisplayNamePreference())
        session.state.subscribe(_log_board)
        logger.info(f"Watching {API_URL} every {POLL_INTERVAL}s as '{session.display_name or 'Anonymous'}'")
        session.start()
        try:
            await asyncio.Event().wait()
        finally:
            await session.stop()


def main() -> None:
    configure_logging()
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Stopped.")


if __name__ == "__main__":
    main()
