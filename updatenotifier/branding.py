"""Centralized branding constants — single source of truth for version."""


class AppBranding:
    """Application identity constants."""

    APP_NAME = "UpdateNotifier"
    ICON_NAME = "update-avail"
    VERSION = "1.0.0"

    NOTIFY_MESSAGE = "Updates are available\nClick the update icon to install"
    TOOLTIP = "Updates are available - click to install"

    @classmethod
    def window_title(cls, title: str) -> str:
        return f"{title} - {cls.APP_NAME}"

    @classmethod
    def tray_tooltip(cls, count: int) -> str:
        return f"{cls.TOOLTIP} ({count})" if count else cls.TOOLTIP
