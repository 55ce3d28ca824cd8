import socket
from types import SimpleNamespace

import pytest

from updatenotifier.network import probe as probe_module
from updatenotifier.network.probe import NetworkProbe


def _addr(address, family=socket.AF_INET):
    return SimpleNamespace(family=family, address=address)


def _patch(monkeypatch, addrs, up=None):
    up = up if up is not None else {name: True for name in addrs}
    monkeypatch.setattr(probe_module.psutil, "net_if_addrs", lambda: addrs)
    monkeypatch.setattr(
        probe_module.psutil, "net_if_stats",
        lambda: {name: SimpleNamespace(isup=state) for name, state in up.items()},
    )


def test_reachable_with_lan_address(monkeypatch):
    _patch(monkeypatch, {
        "lo": [_addr("127.0.0.1")],
        "wlan0": [_addr("fe80::1", socket.AF_INET6), _addr("192.168.1.20")],
    })

    assert NetworkProbe().is_reachable() is True


@pytest.mark.parametrize("addrs", [
    {"lo": [_addr("127.0.0.1")]},
    {"eth0": [_addr("169.254.10.3")]},
    {"eth0": [_addr("2001:db8::2", socket.AF_INET6)]},
    {},
])
def test_unreachable_without_usable_ipv4(monkeypatch, addrs):
    _patch(monkeypatch, addrs)

    assert NetworkProbe().is_reachable() is False


def test_interface_down_is_ignored(monkeypatch):
    _patch(monkeypatch, {"eth0": [_addr("10.0.0.5")]}, up={"eth0": False})

    assert NetworkProbe().is_reachable() is False


def test_detection_error_means_unreachable(monkeypatch):
    def broken():
        raise OSError("no netlink")

    monkeypatch.setattr(probe_module.psutil, "net_if_stats", broken)

    assert NetworkProbe().is_reachable() is False
