"""Dialog listing pending updates."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView,
)

from updatenotifier.branding import AppBranding
from updatenotifier.core.models import UpdateCheckState

COLUMN_HEADERS = ['Package', 'Version']


class UpdatesDialog(QDialog):
    """Package/version table with Install and Close buttons."""

    install_requested = pyqtSignal()

    def __init__(self, state: UpdateCheckState, parent=None):
        super().__init__(parent)
        self.setWindowTitle(AppBranding.window_title("Updates"))
        self.setMinimumSize(420, 320)

        layout = QVBoxLayout(self)
        count = state.update_count
        layout.addWidget(QLabel(
            f"{count} update{'s' if count != 1 else ''} available"
        ))

        table = QTableWidget(count, len(COLUMN_HEADERS))
        table.setHorizontalHeaderLabels(COLUMN_HEADERS)
        table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        table.verticalHeader().setVisible(False)
        for row, update in enumerate(state.available_updates):
            table.setItem(row, 0, QTableWidgetItem(update.name))
            table.setItem(row, 1, QTableWidgetItem(update.version))
        header = table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        layout.addWidget(table)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        install_btn = QPushButton("Install")
        install_btn.clicked.connect(self._close_and_install)
        buttons.addWidget(install_btn)
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.reject)
        buttons.addWidget(close_btn)
        layout.addLayout(buttons)

    def _close_and_install(self):
        self.accept()
        self.install_requested.emit()
