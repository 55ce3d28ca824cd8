"""Host integration — process detection, platform checks, installer launch."""

import logging
import subprocess

import psutil

logger = logging.getLogger(__name__)

DEFAULT_INSTALLER_COMMAND = ("gui-updater",)


def is_process_running(name: str) -> bool:
    """True if a process with this name (or first argument) is running."""
    if not name:
        return False
    try:
        for proc in psutil.process_iter(['name', 'cmdline']):
            info = proc.info
            if info.get('name') == name:
                return True
            cmdline = info.get('cmdline') or []
            if cmdline and cmdline[0].rsplit('/', 1)[-1] == name:
                return True
    except Exception as e:
        logger.warning("Process scan failed: %s", e)
    return False


def detect_excluded_architecture() -> str | None:
    """Architecture token to hide on mixed-architecture images.

    x86 Raspberry Pi Desktop ships raspi-config but is not a Pi; there the
    amd64 variants are hidden. Without raspi-config nothing is hidden.
    """
    try:
        result = subprocess.run(
            ['raspi-config', 'nonint', 'is_pi'],
            capture_output=True, timeout=10,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("raspi-config unavailable: %s", e)
        return None
    if result.returncode != 0:
        return "amd64"
    return None


def launch_installer(command=DEFAULT_INSTALLER_COMMAND):
    """Spawn the installer detached; fire-and-forget."""
    command = list(command)
    try:
        subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
        logger.info("Launched installer: %s", " ".join(command))
    except OSError as e:
        logger.error("Failed to launch installer %s: %s", command[0], e)
