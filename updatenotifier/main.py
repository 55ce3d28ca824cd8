"""UpdateNotifier — entry point."""

import sys
import os
import logging

from updatenotifier.branding import AppBranding
from updatenotifier.config.settings import AppSettings


def setup_logging(data_dir: str):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'updatenotifier.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def main():
    # Load settings early (before any GUI init)
    settings = AppSettings.load()
    settings.ensure_dirs()

    setup_logging(settings.data_dir)
    logger = logging.getLogger(__name__)
    logger.info("%s %s starting", AppBranding.APP_NAME, AppBranding.VERSION)

    from PyQt6.QtWidgets import QApplication, QSystemTrayIcon
    from updatenotifier.core.updater import Updater
    from updatenotifier.ui.tray import UpdateTray

    app = QApplication(sys.argv)
    app.setApplicationName(AppBranding.APP_NAME)
    # The tray is hidden most of the time; closing a dialog must not quit
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.warning("No system tray available - notifications will not be shown")

    tray = UpdateTray()
    updater = Updater(settings, display=tray)
    tray.bind(updater)
    updater.start()

    # Run
    exit_code = app.exec()

    updater.teardown()
    tray.hide()
    logger.info("Goodbye")
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
