"""Drives the tray icon from published update check snapshots."""

import logging

from updatenotifier.branding import AppBranding
from updatenotifier.core.models import UpdateCheckState

logger = logging.getLogger(__name__)


class UpdateNotifier:
    """Shows the icon and notifies when updates exist, hides it otherwise.

    `display` provides set_icon_visible(visible, state) and notify(message).
    """

    def __init__(self, display, message: str = AppBranding.NOTIFY_MESSAGE):
        self._display = display
        self._message = message

    def __call__(self, state: UpdateCheckState):
        if state.has_updates:
            self._display.set_icon_visible(True, state)
            self._display.notify(self._message)
        else:
            self._display.set_icon_visible(False, state)

    def hide(self, state: UpdateCheckState):
        self._display.set_icon_visible(False, state)
