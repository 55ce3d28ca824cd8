"""Application settings — persistence via JSON."""

import json
import logging
import os
from dataclasses import dataclass, field, asdict

from updatenotifier.core.backend import DEFAULT_QUERY_COMMAND, DEFAULT_REFRESH_COMMAND
from updatenotifier.core.host import DEFAULT_INSTALLER_COMMAND, detect_excluded_architecture
from updatenotifier.core.models import MAX_INTERVAL_HOURS

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join(
    os.environ.get('XDG_CONFIG_HOME') or os.path.join(os.path.expanduser('~'), '.config'),
    'updatenotifier',
)

DEFAULT_INTERVAL_HOURS = 24
AUTO = "auto"


@dataclass
class AppSettings:
    """Persistent application settings."""
    data_dir: str = ""

    # Scheduling
    interval_hours: int = DEFAULT_INTERVAL_HOURS   # 0 = periodic checks off
    startup_delay_seconds: int = 0
    offline_poll_seconds: int = 60

    # Host integration
    installer_command: list[str] = field(default_factory=lambda: list(DEFAULT_INSTALLER_COMMAND))
    wizard_process: str = "piwiz"
    exclude_architecture: str = AUTO               # 'auto', '' (none) or a token

    # Backend
    refresh_command: list[str] = field(default_factory=lambda: list(DEFAULT_REFRESH_COMMAND))
    query_command: list[str] = field(default_factory=lambda: list(DEFAULT_QUERY_COMMAND))

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = DEFAULT_DATA_DIR
        if (isinstance(self.interval_hours, bool) or not isinstance(self.interval_hours, int)
                or self.interval_hours < 0):
            logger.warning("Invalid interval %r, using %d hours",
                           self.interval_hours, DEFAULT_INTERVAL_HOURS)
            self.interval_hours = DEFAULT_INTERVAL_HOURS
        self.interval_hours = min(self.interval_hours, MAX_INTERVAL_HOURS)
        if not isinstance(self.offline_poll_seconds, int) or self.offline_poll_seconds <= 0:
            self.offline_poll_seconds = 60
        if not isinstance(self.startup_delay_seconds, int) or self.startup_delay_seconds < 0:
            self.startup_delay_seconds = 0

    @property
    def path(self) -> str:
        return os.path.join(self.data_dir, 'settings.json')

    def resolved_exclude_architecture(self) -> str | None:
        """Architecture token to hide, detecting the platform for 'auto'."""
        if self.exclude_architecture == AUTO:
            return detect_excluded_architecture()
        return self.exclude_architecture or None

    @staticmethod
    def load(path: str | None = None) -> 'AppSettings':
        """Load settings from JSON. Returns defaults if file doesn't exist."""
        if path is None:
            path = os.path.join(DEFAULT_DATA_DIR, 'settings.json')

        if not os.path.isfile(path):
            logger.info("No settings file, using defaults")
            return AppSettings()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            settings = AppSettings(**{k: v for k, v in data.items()
                                      if k in AppSettings.__dataclass_fields__})
            logger.info("Loaded settings from %s", path)
            return settings
        except Exception as e:
            logger.warning("Failed to load settings: %s", e)
            return AppSettings()

    def save(self, path: str | None = None):
        """Save settings to JSON."""
        if path is None:
            path = self.path

        os.makedirs(os.path.dirname(path), exist_ok=True)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self), f, indent=2)
            logger.info("Saved settings to %s", path)
        except Exception as e:
            logger.warning("Failed to save settings: %s", e)

    def ensure_dirs(self):
        """Create data directories if they don't exist."""
        os.makedirs(os.path.join(self.data_dir, 'logs'), exist_ok=True)
