"""Exceptions raised by the update check core."""


class UpdateNotifierError(Exception):
    """Base class for all update notifier errors."""


class BackendError(UpdateNotifierError):
    """Package backend failed to refresh its cache or list updates.

    Recoverable: the next scheduled or manual check retries.
    """

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step
        self.message = message


class CheckCancelled(UpdateNotifierError):
    """The in-flight check was cancelled. Not a failure."""
