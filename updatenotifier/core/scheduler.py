"""Check triggers — startup check, offline poll, periodic timer.

Timers come from an injectable factory: factory(callback, single_shot)
returns an object with start(msecs), stop() and isActive(), i.e. a QTimer
or anything shaped like one.
"""

import logging

from updatenotifier.core.models import ScheduleConfig

logger = logging.getLogger(__name__)

OFFLINE_POLL_SECONDS = 60


def qt_timer_factory(callback, single_shot: bool = False):
    """Build a QTimer wired to callback (lazy import keeps Qt out of tests)."""
    from PyQt6.QtCore import QTimer

    timer = QTimer()
    timer.setSingleShot(single_shot)
    timer.timeout.connect(callback)
    return timer


class Scheduler:
    """Owns the three check triggers and routes them into the orchestrator."""

    def __init__(self, orchestrator, probe, config: ScheduleConfig | None = None,
                 timer_factory=qt_timer_factory,
                 startup_delay_seconds: float = 0,
                 offline_poll_seconds: int = OFFLINE_POLL_SECONDS,
                 skip_startup=None,
                 on_startup=None):
        self._orchestrator = orchestrator
        self._probe = probe
        self.config = config or ScheduleConfig()
        self.startup_delay_seconds = startup_delay_seconds
        self.offline_poll_seconds = offline_poll_seconds
        self._skip_startup = skip_startup
        self._on_startup = on_startup
        self._stopped = False

        self._startup_timer = timer_factory(self._startup_fired, True)
        self._offline_timer = timer_factory(self._offline_tick, False)
        self._periodic_timer = timer_factory(self._periodic_fired, False)

        orchestrator.set_offline_handler(self.arm_offline_poll)
        orchestrator.set_online_handler(self.disarm_offline_poll)

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self):
        """Arm the startup trigger and the periodic timer."""
        if self._stopped:
            return
        self._startup_timer.start(int(self.startup_delay_seconds * 1000))
        self._arm_periodic()

    def stop(self):
        """Disarm every trigger; nothing fires afterwards."""
        self._stopped = True
        self._startup_timer.stop()
        self._offline_timer.stop()
        self._periodic_timer.stop()

    @property
    def offline_poll_active(self) -> bool:
        return self._offline_timer.isActive()

    @property
    def periodic_active(self) -> bool:
        return self._periodic_timer.isActive()

    # ── Periodic timer ───────────────────────────────────────────────

    def set_interval(self, hours: int):
        """Re-arm the periodic timer with a new interval (0 disables it)."""
        self.config = ScheduleConfig(interval_hours=hours)
        self._arm_periodic()

    def _arm_periodic(self):
        self._periodic_timer.stop()
        if self._stopped:
            logger.debug("Scheduler stopped - periodic timer not armed")
            return
        if not self.config.enabled:
            logger.info("Periodic update checks disabled")
            return
        self._periodic_timer.start(self.config.interval_seconds * 1000)
        logger.info("Periodic update check every %d hours", self.config.interval_hours)

    def _periodic_fired(self):
        if self._stopped:
            return
        self._orchestrator.request_check()

    # ── Startup trigger ──────────────────────────────────────────────

    def _startup_fired(self):
        if self._stopped:
            return
        if self._on_startup is not None:
            self._on_startup()
        if self._skip_startup is not None and self._skip_startup():
            logger.info("Setup wizard running - skipping startup check")
            return
        self._orchestrator.request_check()

    # ── Offline poll ─────────────────────────────────────────────────

    def arm_offline_poll(self):
        """Start polling for network; no-op if already polling."""
        if self._stopped or self._offline_timer.isActive():
            return
        logger.info("No network connection - polling...")
        self._offline_timer.start(self.offline_poll_seconds * 1000)

    def disarm_offline_poll(self):
        """Stop polling; a check elsewhere already found the network."""
        if self._offline_timer.isActive():
            logger.info("Network available - offline poll stopped")
            self._offline_timer.stop()

    def _offline_tick(self):
        if self._stopped:
            return
        if not self._probe.is_reachable():
            logger.debug("No network connection - polling...")
            return
        self._offline_timer.stop()
        logger.info("Network available")
        self._orchestrator.network_became_available()
