"""Network reachability probe."""

import ipaddress
import logging
import socket

import psutil

logger = logging.getLogger(__name__)


class NetworkProbe:
    """Reports whether the host has a usable IPv4 address.

    Equivalent of `hostname -I` listing a dotted address: some interface
    that is up carries an IPv4 address that is neither loopback nor
    link-local.
    """

    def is_reachable(self) -> bool:
        try:
            stats = psutil.net_if_stats()
            addrs = psutil.net_if_addrs()
        except Exception as e:
            logger.warning("Network detection failed: %s", e)
            return False

        for iface_name, iface_addrs in addrs.items():
            iface_stats = stats.get(iface_name)
            if iface_stats is None or not iface_stats.isup:
                continue
            for addr in iface_addrs:
                if addr.family != socket.AF_INET:
                    continue
                if self._usable(addr.address):
                    logger.debug("Network reachable via %s (%s)", iface_name, addr.address)
                    return True
        return False

    @staticmethod
    def _usable(address: str) -> bool:
        try:
            ip = ipaddress.IPv4Address(address)
        except ValueError:
            return False
        return not (ip.is_loopback or ip.is_link_local or ip.is_unspecified)
