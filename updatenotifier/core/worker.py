"""Background execution of blocking backend calls.

Architecture:
  BackendWorker — QThread running one blocking call
  QtTaskRunner  — QObject on the GUI thread; receives worker signals and
                  hands results to the orchestrator's callbacks

Signals emitted by the worker are delivered to the runner through Qt's
queued connections, so callbacks always run on the thread that owns the
runner.
"""

import logging

logger = logging.getLogger(__name__)


# Import PyQt6 only when the runner is actually used (lazy import
# to keep the orchestrator itself free of Qt dependency)

def _get_runner_class():
    """Lazy import to avoid PyQt6 at module level."""
    from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

    class BackendWorker(QThread):
        """Runs a single blocking backend call."""

        succeeded = pyqtSignal(object, object)   # worker, result
        failed = pyqtSignal(object, object)      # worker, exception

        def __init__(self, fn, on_success, on_failure, parent=None):
            super().__init__(parent)
            self._fn = fn
            self.on_success = on_success
            self.on_failure = on_failure

        def run(self):
            try:
                result = self._fn()
            except Exception as e:
                self.failed.emit(self, e)
                return
            self.succeeded.emit(self, result)

    class QtTaskRunner(QObject):
        """Submits blocking calls to worker threads."""

        def __init__(self, parent=None):
            super().__init__(parent)
            self._workers = set()

        def submit(self, fn, on_success, on_failure):
            worker = BackendWorker(fn, on_success, on_failure)
            worker.succeeded.connect(self._on_succeeded)
            worker.failed.connect(self._on_failed)
            self._workers.add(worker)
            worker.start()

        @pyqtSlot(object, object)
        def _on_succeeded(self, worker, result):
            self._release(worker)
            worker.on_success(result)

        @pyqtSlot(object, object)
        def _on_failed(self, worker, error):
            self._release(worker)
            worker.on_failure(error)

        def _release(self, worker):
            worker.wait()
            self._workers.discard(worker)
            worker.deleteLater()

        def wait(self, msecs: int = 5000):
            """Block until running workers finish (used on teardown)."""
            for worker in list(self._workers):
                if not worker.wait(msecs):
                    logger.warning("Backend worker still running after %d ms", msecs)

    return QtTaskRunner


# Module-level accessor
_QtTaskRunnerClass = None


def get_task_runner_class():
    """Get the QtTaskRunner class (lazy-imported to avoid PyQt6 at import time)."""
    global _QtTaskRunnerClass
    if _QtTaskRunnerClass is None:
        _QtTaskRunnerClass = _get_runner_class()
    return _QtTaskRunnerClass
