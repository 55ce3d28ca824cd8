"""Tray icon — visible only while updates are pending."""

import logging

from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from updatenotifier.branding import AppBranding
from updatenotifier.core.models import UpdateCheckState

logger = logging.getLogger(__name__)


class UpdateTray(QSystemTrayIcon):
    """System tray presence of the updater."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._updater = None
        self._state = UpdateCheckState()
        self._update_dlg = None
        self._menu = None

        icon = QIcon.fromTheme(AppBranding.ICON_NAME)
        if icon.isNull():
            icon = QIcon.fromTheme("software-update-available")
        self.setIcon(icon)
        self.setToolTip(AppBranding.TOOLTIP)
        self.activated.connect(self._on_activated)

    def bind(self, updater):
        """Attach the control surface once it has been built."""
        self._updater = updater
        self._build_menu()

    # ── Display interface for UpdateNotifier ─────────────────────────

    def set_icon_visible(self, visible: bool, state: UpdateCheckState):
        self._state = state
        self.setToolTip(AppBranding.tray_tooltip(state.update_count))
        self.setVisible(visible)

    def notify(self, message: str):
        self.showMessage(AppBranding.APP_NAME, message,
                         QSystemTrayIcon.MessageIcon.Information)

    # ── Menu ─────────────────────────────────────────────────────────

    def _build_menu(self):
        self._menu = QMenu()
        self._show_action = self._menu.addAction("Show Updates...", self._show_updates)
        self._install_action = self._menu.addAction("Install Updates", self._install_updates)
        self._menu.addSeparator()
        self._menu.addAction("Check Now", self._check_now)
        self._menu.addAction("Settings...", self._show_settings)
        self._menu.addSeparator()
        self._menu.addAction("Quit", QApplication.quit)
        self._menu.aboutToShow.connect(self._refresh_menu)
        self.setContextMenu(self._menu)

    def _refresh_menu(self):
        dialog_open = self._update_dlg is not None and self._update_dlg.isVisible()
        self._show_action.setEnabled(not dialog_open)
        self._install_action.setEnabled(not dialog_open)

    def _on_activated(self, reason):
        if reason == QSystemTrayIcon.ActivationReason.Trigger and self._menu is not None:
            self._refresh_menu()
            self._menu.popup(self.geometry().center())

    # ── Actions ──────────────────────────────────────────────────────

    def _show_updates(self):
        from updatenotifier.ui.updates_dialog import UpdatesDialog

        if self._update_dlg is not None:
            self._update_dlg.close()
        self._update_dlg = UpdatesDialog(self._updater.get_state())
        self._update_dlg.install_requested.connect(self._install_updates)
        self._update_dlg.finished.connect(self._on_dialog_closed)
        self._update_dlg.show()

    def _on_dialog_closed(self, _result):
        self._update_dlg = None

    def _install_updates(self):
        self._updater.launch_installer()

    def _check_now(self):
        self._updater.control_message("check")

    def _show_settings(self):
        from updatenotifier.ui.settings_dialog import SettingsDialog

        dialog = SettingsDialog(settings=self._updater.settings)
        if dialog.exec():
            settings = dialog.get_settings()
            self._updater.set_interval(settings.interval_hours)
            settings.save()
