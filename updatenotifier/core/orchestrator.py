"""Update check state machine.

Sequences a check as: network gate -> cache refresh -> update query ->
filter -> publish. All transitions run on one thread; the backend calls
run on worker threads through the injected task runner and their results
come back on the owning thread.
"""

import logging
from dataclasses import replace

from updatenotifier.core import update_filter
from updatenotifier.core.backend import CancellationToken, PackageBackend
from updatenotifier.core.errors import CheckCancelled
from updatenotifier.core.models import CheckRequest, Phase, UpdateCheckState

logger = logging.getLogger(__name__)


class CheckOrchestrator:
    """Owns UpdateCheckState and is its only writer.

    `runner` must provide submit(fn, on_success, on_failure); on_success and
    on_failure are expected to be called on the orchestrator's thread.
    """

    def __init__(self, backend: PackageBackend, probe, runner,
                 exclude_architecture: str | None = None):
        self._backend = backend
        self._probe = probe
        self._runner = runner
        self.exclude_architecture = exclude_architecture

        self._state = UpdateCheckState()
        self._token: CancellationToken | None = None
        self._stopped = False
        self._subscribers = []
        self._offline_handler = None
        self._online_handler = None

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> UpdateCheckState:
        return self._state

    @property
    def is_checking(self) -> bool:
        return self._state.phase is Phase.CHECKING

    def on_state_changed(self, callback):
        """Subscribe to published snapshots. Returns an unsubscribe callable."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set_offline_handler(self, handler):
        """Called with no arguments when a check is deferred for lack of network."""
        self._offline_handler = handler

    def set_online_handler(self, handler):
        """Called with no arguments when a probed request found the network."""
        self._online_handler = handler

    # ── Triggers ─────────────────────────────────────────────────────

    def request_check(self) -> CheckRequest:
        """Start a check unless one is running or the network is down."""
        if self._stopped:
            return CheckRequest.STOPPED
        if self.is_checking:
            logger.debug("Check already in progress, ignoring request")
            return CheckRequest.ALREADY_CHECKING

        if not self._probe.is_reachable():
            logger.info("No network connection - update check deferred")
            if self._offline_handler is not None:
                self._offline_handler()
            return CheckRequest.OFFLINE

        if self._online_handler is not None:
            self._online_handler()
        self._begin()
        return CheckRequest.STARTED

    def network_became_available(self) -> CheckRequest:
        """Start a check without probing again; the caller just did."""
        if self._stopped:
            return CheckRequest.STOPPED
        if self.is_checking:
            return CheckRequest.ALREADY_CHECKING
        self._begin()
        return CheckRequest.STARTED

    def cancel(self):
        """Cancel the in-flight check; it resolves to IDLE without publishing."""
        if self._token is not None:
            self._token.cancel()

    def shutdown(self):
        """Cancel any check and refuse all further requests."""
        self._stopped = True
        self.cancel()
        self._subscribers.clear()

    # ── Check sequence ───────────────────────────────────────────────

    def _begin(self):
        logger.info("Checking for updates")
        token = CancellationToken()
        self._token = token
        self._state = replace(self._state, phase=Phase.CHECKING, last_error=None)
        self._runner.submit(
            lambda: self._backend.refresh_cache(token),
            lambda _result: self._on_refresh_done(token),
            lambda error: self._on_failed(token, "refresh", error),
        )

    def _on_refresh_done(self, token: CancellationToken):
        if self._abandoned(token):
            return
        logger.info("Cache updated - comparing versions")
        self._runner.submit(
            lambda: self._backend.query_available_updates(token),
            lambda raw: self._on_query_done(token, raw),
            lambda error: self._on_failed(token, "query", error),
        )

    def _on_query_done(self, token: CancellationToken, raw_packages):
        if self._abandoned(token):
            return
        updates = tuple(update_filter.apply(raw_packages, self.exclude_architecture))
        self._token = None
        # Single assignment: readers see the old snapshot or the new one
        self._state = UpdateCheckState(phase=Phase.COMPLETED, available_updates=updates)
        if updates:
            logger.info("Check complete - %d updates available", len(updates))
        else:
            logger.info("Check complete - no updates available")
        self._publish(self._state)

    def _on_failed(self, token: CancellationToken, step: str, error: BaseException):
        if isinstance(error, CheckCancelled) or token.is_cancelled:
            self._abandoned(token)
            return
        if token is not self._token:
            return
        logger.warning("Update check failed during %s: %s", step, error)
        self._token = None
        self._state = replace(self._state, phase=Phase.IDLE, last_error=str(error))

    def _abandoned(self, token: CancellationToken) -> bool:
        """Resolve a cancelled or stale step. True when the caller must stop."""
        if token is not self._token:
            return True
        if token.is_cancelled:
            logger.info("Update check cancelled")
            self._token = None
            self._state = replace(self._state, phase=Phase.IDLE)
            return True
        return False

    def _publish(self, state: UpdateCheckState):
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("State subscriber %r failed", callback)
