"""Control surface used by the tray shell.

Wires probe, backend, runner, orchestrator, scheduler and notifier
together and exposes the operations the shell needs.
"""

import logging

from updatenotifier.config.settings import AppSettings
from updatenotifier.core import host
from updatenotifier.core.backend import AptBackend
from updatenotifier.core.models import CheckRequest, ScheduleConfig, UpdateCheckState
from updatenotifier.core.notifier import UpdateNotifier
from updatenotifier.core.orchestrator import CheckOrchestrator
from updatenotifier.core.scheduler import Scheduler, qt_timer_factory
from updatenotifier.network.probe import NetworkProbe

logger = logging.getLogger(__name__)


class Updater:
    """One update notifier instance; torn down with its tray icon."""

    def __init__(self, settings: AppSettings, display=None, *,
                 backend=None, probe=None, runner=None,
                 timer_factory=qt_timer_factory, skip_startup=None,
                 launcher=host.launch_installer):
        self.settings = settings
        self._probe = probe or NetworkProbe()
        self._backend = backend or AptBackend(settings.refresh_command, settings.query_command)
        if runner is None:
            from updatenotifier.core.worker import get_task_runner_class
            runner = get_task_runner_class()()
        self._runner = runner
        self._launcher = launcher
        self._torn_down = False

        self.orchestrator = CheckOrchestrator(
            self._backend, self._probe, self._runner,
            exclude_architecture=settings.resolved_exclude_architecture(),
        )

        self._notifier = UpdateNotifier(display) if display is not None else None
        if self._notifier is not None:
            self.orchestrator.on_state_changed(self._notifier)

        if skip_startup is None:
            wizard = settings.wizard_process

            def skip_startup():
                return host.is_process_running(wizard)

        self.scheduler = Scheduler(
            self.orchestrator, self._probe,
            config=ScheduleConfig(interval_hours=settings.interval_hours),
            timer_factory=timer_factory,
            startup_delay_seconds=settings.startup_delay_seconds,
            offline_poll_seconds=settings.offline_poll_seconds,
            skip_startup=skip_startup,
            on_startup=self._hide_icon,
        )

    def start(self):
        self.scheduler.start()

    # ── Control surface ──────────────────────────────────────────────

    def request_check(self) -> CheckRequest:
        return self.orchestrator.request_check()

    def set_interval(self, hours: int):
        """Reconfigure the periodic check and remember it in settings."""
        self.scheduler.set_interval(hours)
        self.settings.interval_hours = self.scheduler.config.interval_hours

    def get_state(self) -> UpdateCheckState:
        return self.orchestrator.get_state()

    def on_state_changed(self, callback):
        return self.orchestrator.on_state_changed(callback)

    def launch_installer(self):
        self._launcher(self.settings.installer_command)

    def control_message(self, command: str) -> bool:
        """Handle a control message from the shell; True if recognised."""
        if command.strip().lower().startswith("check"):
            self._hide_icon()
            self.request_check()
            return True
        logger.debug("Ignoring unknown control message %r", command)
        return False

    def teardown(self):
        """Stop every trigger and cancel the in-flight check."""
        if self._torn_down:
            return
        self._torn_down = True
        self.scheduler.stop()
        self.orchestrator.shutdown()
        wait = getattr(self._runner, 'wait', None)
        if wait is not None:
            wait()
        logger.info("Updater stopped")

    def _hide_icon(self):
        if self._notifier is not None:
            self._notifier.hide(self.get_state())
