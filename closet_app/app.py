"""Closet analytics app bootstrap."""

import logging

from closet_app.config import ClosetConfig
from closet_app.logging_config import configure_logging, get_logger, log_event
from tools.analytics_tools import AnalyticsTools
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore


LOGGER = get_logger(__name__)


class ClosetApp:
    """Wires together configuration, the document store and the analytics tools."""

    def __init__(self, config: ClosetConfig | None = None, store: WardrobeStore | None = None) -> None:
        self.config = config or ClosetConfig.from_env()
        configure_logging(self.config.log_level)

        self.store = store or SQLiteWardrobeStore(self.config.database_path)
        self.analytics = AnalyticsTools(store=self.store, config=self.config)
        log_event(
            LOGGER,
            logging.INFO,
            "closet_app_started",
            environment=self.config.environment or "local",
            database_path=self.config.database_path,
            timezone=self.config.timezone,
        )

    def summary(self, user_id: str) -> dict:
        """Headline numbers for one user, as shown on the analytics tab."""

        today = self.analytics.today()
        return {
            "overview": self.analytics.overview(user_id=user_id),
            "streak": self.analytics.streak(user_id=user_id, today=today),
            "most_worn_this_month": self.analytics.most_worn_this_month(
                user_id=user_id, year=today.year, month=today.month
            ),
        }


__all__ = ["ClosetApp"]
