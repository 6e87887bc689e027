"""
Diagnostic entry point for Protouch.
Opens the persisted store and logs a summary of what it holds.
"""

import asyncio
import sys
import argparse

from config.logging_config import setup_logging
from config import settings
from protouch.core.coordinator import AppCoordinator
from protouch.storage.kv_store import SQLiteKeyValueStore

# Setup logging first
logger = setup_logging("protouch")


def parse_arguments(argv=None):
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Protouch - inspect locally persisted reminders, saved tips and settings"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help=f"SQLite store to inspect (default: {settings.DB_PATH})"
    )

    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)

    if args.debug:
        logger.setLevel("DEBUG")
        logger.info("Debug logging enabled")

    store = SQLiteKeyValueStore(args.db_path or str(settings.DB_PATH))
    coordinator = AppCoordinator(store=store)

    app_settings = await coordinator.initialize()
    reminders = await coordinator.reminder_repo.list_all()
    saved = await coordinator.saved_tips_repo.list_saved()

    logger.info("=" * 60)
    logger.info(f"Store: {store.db_path}")
    logger.info(f"Keys: {', '.join(await store.keys()) or '(none)'}")
    logger.info(f"Settings: {app_settings.to_dict()}")
    logger.info(f"Reminders: {len(reminders)} ({sum(v.is_due for v in reminders)} due)")
    for view in reminders:
        logger.info(f"  {view.days_left:>3} days left - {view.reminder}")
    logger.info(f"Saved tips: {', '.join(t.title for t in saved) or '(none)'}")
    logger.info("=" * 60)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))

    except Exception as e:
        logger.error(f"Fatal error in main: {e}", exc_info=True)
        sys.exit(1)
