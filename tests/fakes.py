"""Test doubles for the backend, network probe, task runner and timers."""

from updatenotifier.core.errors import BackendError


class FakeProbe:
    def __init__(self, reachable=True):
        self.reachable = reachable
        self.calls = 0

    def is_reachable(self):
        self.calls += 1
        return self.reachable


class FakeBackend:
    """Records calls; returns queued results or raises queued errors."""

    def __init__(self, packages=None):
        self.packages = list(packages or [])
        self.refresh_error = None
        self.query_error = None
        self.calls = []

    def refresh_cache(self, token):
        self.calls.append("refresh")
        token.raise_if_cancelled()
        if self.refresh_error is not None:
            raise self.refresh_error

    def query_available_updates(self, token):
        self.calls.append("query")
        token.raise_if_cancelled()
        if self.query_error is not None:
            raise self.query_error
        return list(self.packages)

    @property
    def refresh_count(self):
        return self.calls.count("refresh")

    @staticmethod
    def error(step="refresh"):
        return BackendError(step, "transaction failed")


class ImmediateRunner:
    """Runs each task synchronously and completes it straight away."""

    def submit(self, fn, on_success, on_failure):
        try:
            result = fn()
        except Exception as e:
            on_failure(e)
            return
        on_success(result)


class DeferredRunner:
    """Holds tasks until the test completes them one by one."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, on_success, on_failure):
        self.pending.append((fn, on_success, on_failure))

    def run_next(self):
        fn, on_success, on_failure = self.pending.pop(0)
        try:
            result = fn()
        except Exception as e:
            on_failure(e)
            return
        on_success(result)

    def run_all(self):
        while self.pending:
            self.run_next()


class ManualClock:
    """Simulated time driving FakeTimer instances."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def timer_factory(self, callback, single_shot=False):
        timer = FakeTimer(self, callback, single_shot)
        self.timers.append(timer)
        return timer

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if t.isActive() and t.deadline <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.deadline)
            self.now = timer.deadline
            timer.fire()
        self.now = target


class FakeTimer:
    """QTimer look-alike: start(msecs), stop(), isActive()."""

    def __init__(self, clock, callback, single_shot):
        self._clock = clock
        self._callback = callback
        self.single_shot = single_shot
        self.interval = 0.0
        self.deadline = 0.0
        self.starts = 0
        self._active = False

    def start(self, msecs):
        self.interval = msecs / 1000
        self.deadline = self._clock.now + self.interval
        self.starts += 1
        self._active = True

    def stop(self):
        self._active = False

    def isActive(self):
        return self._active

    def fire(self):
        if self.single_shot:
            self._active = False
        else:
            self.deadline += self.interval
        self._callback()


class RecordingDisplay:
    """Stands in for the tray icon."""

    def __init__(self):
        self.visible = False
        self.visibility_changes = []
        self.messages = []

    def set_icon_visible(self, visible, state):
        self.visible = visible
        self.visibility_changes.append(visible)

    def notify(self, message):
        self.messages.append(message)
