"""Settings dialog."""

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QLineEdit, QSpinBox, QDialogButtonBox, QFormLayout,
)

from updatenotifier.branding import AppBranding
from updatenotifier.config.settings import AppSettings
from updatenotifier.core.models import MAX_INTERVAL_HOURS


class SettingsDialog(QDialog):
    """Update check settings."""

    def __init__(self, parent=None, settings: AppSettings = None):
        super().__init__(parent)
        self.setWindowTitle(AppBranding.window_title("Settings"))
        self.setMinimumWidth(380)
        self._settings = settings or AppSettings()

        layout = QVBoxLayout(self)
        form = QFormLayout()

        # Check interval (hours, 0 = never)
        self._interval_spin = QSpinBox()
        self._interval_spin.setRange(0, MAX_INTERVAL_HOURS)
        self._interval_spin.setSuffix(" h")
        self._interval_spin.setSpecialValueText("Never")
        self._interval_spin.setValue(self._settings.interval_hours)
        self._interval_spin.setToolTip(f"At most {MAX_INTERVAL_HOURS} hours; 0 turns checks off")
        form.addRow("Hours between checks for updates:", self._interval_spin)

        # Installer command
        self._installer_edit = QLineEdit(" ".join(self._settings.installer_command))
        form.addRow("Installer command:", self._installer_edit)

        layout.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def get_settings(self) -> AppSettings:
        """Return updated settings."""
        self._settings.interval_hours = self._interval_spin.value()
        command = self._installer_edit.text().split()
        if command:
            self._settings.installer_command = command
        return self._settings
