"""Reminder loop - periodically announces events about to start."""

import logging
from datetime import datetime
from typing import Callable

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .adapters import RepositoryError
from .config import Config, load_config
from .core.notifications import create_notification_message, get_upcoming_events
from .ports import EventRepository
from .workflows import get_repository

logger = logging.getLogger(__name__)


class Notifier:
    """Tracks which events were announced and announces the rest once."""

    def __init__(
        self,
        repo: EventRepository,
        send: Callable[[str], None],
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repo = repo
        self.send = send
        self.clock = clock
        self.notified_ids: set[str] = set()

    def check(self) -> list[str]:
        """Send reminders for events due now. Returns the messages sent."""
        try:
            events = self.repo.fetch_events()
        except RepositoryError as e:
            logger.error(f"Failed to load events for reminders: {e}")
            return []

        messages = []
        for event in get_upcoming_events(events, self.clock(), self.notified_ids):
            message = create_notification_message(event)
            self.send(message)
            self.notified_ids.add(event.id)
            messages.append(message)
        return messages


def setup_scheduler(notifier: Notifier, config: Config) -> BlockingScheduler:
    """Set up the periodic reminder check."""
    scheduler = BlockingScheduler()
    scheduler.add_job(
        notifier.check,
        IntervalTrigger(seconds=config.remind_interval_seconds),
        id="event_reminders",
        next_run_time=datetime.now(),
    )
    logger.info(f"Scheduled reminder check every {config.remind_interval_seconds}s")
    return scheduler


def run_notifier(send: Callable[[str], None], config: Config | None = None) -> None:
    """Run the reminder loop until interrupted."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )

    config = config or load_config()
    notifier = Notifier(get_repository(config), send)
    scheduler = setup_scheduler(notifier, config)

    logger.info("Starting Cadence reminder loop...")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Reminder loop stopped")
