"""Package-management backend — cache refresh and pending update listing.

Architecture:
  PackageBackend    — interface the orchestrator consumes
  AptBackend        — PackageKit refresh + `apt list --upgradable`
  CancellationToken — shared by the refresh and query steps of one check

Backend methods are synchronous (blocking) and are run on a worker thread.
"""

import logging
import os
import re
import subprocess
import threading

from updatenotifier.core.errors import BackendError, CheckCancelled
from updatenotifier.core.models import Classification, RawPackage

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_COMMAND = ("pkcon", "--plain", "--noninteractive", "refresh", "force")
DEFAULT_QUERY_COMMAND = ("apt", "list", "--upgradable")

# How often a running backend command checks for cancellation
POLL_SECONDS = 0.25

# name/suite[,suite...] version arch [upgradable from: old_version]
_UPGRADABLE_RE = re.compile(
    r"^(?P<name>[^/\s]+)/(?P<suites>\S+)\s+(?P<version>\S+)\s+(?P<arch>\S+)"
    r"\s+\[upgradable from:\s*(?P<old>[^\]]+)\]"
)


class CancellationToken:
    """Thread-safe cancellation flag."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise CheckCancelled()


class PackageBackend:
    """Interface to a package-management service."""

    def refresh_cache(self, token: CancellationToken) -> None:
        """Refresh local package metadata. Raises BackendError or CheckCancelled."""
        raise NotImplementedError

    def query_available_updates(self, token: CancellationToken) -> list[RawPackage]:
        """List pending updates against the refreshed cache."""
        raise NotImplementedError


class AptBackend(PackageBackend):
    """Debian/Raspberry Pi OS backend driven through command-line tools."""

    def __init__(self, refresh_command=DEFAULT_REFRESH_COMMAND,
                 query_command=DEFAULT_QUERY_COMMAND):
        self.refresh_command = list(refresh_command)
        self.query_command = list(query_command)

    def refresh_cache(self, token: CancellationToken) -> None:
        self._run("refresh", self.refresh_command, token)
        logger.info("Package cache refreshed")

    def query_available_updates(self, token: CancellationToken) -> list[RawPackage]:
        output = self._run("query", self.query_command, token)
        packages = parse_upgradable(output)
        logger.info("Backend reported %d upgradable packages", len(packages))
        return packages

    @staticmethod
    def _run(step: str, command: list[str], token: CancellationToken) -> str:
        """Run a command, killing it if the token is cancelled."""
        token.raise_if_cancelled()
        env = dict(os.environ, LC_ALL="C")
        try:
            proc = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                env=env,
            )
        except OSError as e:
            raise BackendError(step, f"cannot run {command[0]}: {e}") from e

        while True:
            try:
                stdout, stderr = proc.communicate(timeout=POLL_SECONDS)
                break
            except subprocess.TimeoutExpired:
                if token.is_cancelled:
                    proc.kill()
                    proc.communicate()
                    logger.info("Backend %s cancelled", step)
                    raise CheckCancelled()

        if proc.returncode != 0:
            detail = (stderr or "").strip().splitlines()
            raise BackendError(
                step,
                f"{command[0]} exited with status {proc.returncode}"
                + (f" ({detail[-1]})" if detail else ""),
            )
        return stdout


def classify_suites(suites: str) -> str:
    """Security suites ('bookworm-security') map to security, the rest to normal."""
    for suite in suites.split(","):
        if suite.endswith("-security") or suite.endswith("/updates"):
            return Classification.SECURITY.value
    return Classification.NORMAL.value


def parse_upgradable(output: str) -> list[RawPackage]:
    """Parse `apt list --upgradable` output into RawPackage records."""
    packages = []
    for line in output.splitlines():
        match = _UPGRADABLE_RE.match(line.strip())
        if not match:
            continue
        suites = match.group("suites")
        packages.append(RawPackage(
            name=match.group("name"),
            version=match.group("version"),
            architecture=match.group("arch"),
            classification=classify_suites(suites),
            repository=suites,
        ))
    return packages
