"""Update check data models.

RawPackage is what a backend binding hands back; PackageUpdate is what the
filter keeps. UpdateCheckState is the snapshot consumers read.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

# Largest whole-hour period that still fits a Qt timer interval (int32 ms)
MAX_INTERVAL_HOURS = 596


class Phase(Enum):
    IDLE = "idle"
    CHECKING = "checking"
    COMPLETED = "completed"


class Classification(Enum):
    """Backend categorization of a package, mirrors PackageKit's info enum."""
    UNKNOWN = "unknown"
    INSTALLED = "installed"
    AVAILABLE = "available"
    LOW = "low"
    ENHANCEMENT = "enhancement"
    NORMAL = "normal"
    BUGFIX = "bugfix"
    IMPORTANT = "important"
    SECURITY = "security"
    BLOCKED = "blocked"


class CheckRequest(Enum):
    """Outcome of asking the orchestrator for a check."""
    STARTED = "started"
    ALREADY_CHECKING = "already_checking"
    OFFLINE = "offline"
    STOPPED = "stopped"


@dataclass(frozen=True)
class RawPackage:
    """One pending package exactly as the backend reported it."""
    name: str
    version: str
    architecture: str
    classification: str
    repository: str = ""


@dataclass(frozen=True)
class PackageUpdate:
    """A policy-relevant pending update."""
    name: str
    version: str
    architecture: str
    classification: Classification
    repository: str = ""


@dataclass(frozen=True)
class UpdateCheckState:
    """Published snapshot of the update check."""
    phase: Phase = Phase.IDLE
    available_updates: tuple[PackageUpdate, ...] = field(default_factory=tuple)
    last_error: str | None = None

    @property
    def has_updates(self) -> bool:
        return bool(self.available_updates)

    @property
    def update_count(self) -> int:
        return len(self.available_updates)


@dataclass
class ScheduleConfig:
    """Periodic check configuration. 0 hours disables periodic checks.

    Intervals are capped at MAX_INTERVAL_HOURS (596 h), the longest period a
    Qt timer can hold; the settings dialog enforces the same maximum.
    """
    interval_hours: int = 24

    def __post_init__(self):
        if isinstance(self.interval_hours, bool) or not isinstance(self.interval_hours, int):
            raise ValueError(f"interval_hours must be an integer, got {self.interval_hours!r}")
        if self.interval_hours < 0:
            raise ValueError(f"interval_hours must be non-negative, got {self.interval_hours}")
        if self.interval_hours > MAX_INTERVAL_HOURS:
            logger.warning("Interval of %d hours too long, clamping to %d",
                           self.interval_hours, MAX_INTERVAL_HOURS)
            self.interval_hours = MAX_INTERVAL_HOURS

    @property
    def enabled(self) -> bool:
        return self.interval_hours > 0

    @property
    def interval_seconds(self) -> int:
        return self.interval_hours * 3600
