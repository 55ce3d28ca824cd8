import pytest

from updatenotifier.core import update_filter
from updatenotifier.core.models import Classification, PackageUpdate, RawPackage


def _raw(name, classification, arch="armhf"):
    return RawPackage(name=name, version="1.0", architecture=arch,
                      classification=classification)


def test_keeps_pending_classifications_in_order():
    raw = [
        _raw("sec", "security"),
        _raw("low", "low"),
        _raw("unk", "unknown"),
        _raw("blk", "blocked"),
    ]

    updates = update_filter.apply(raw)

    assert [u.name for u in updates] == ["sec", "low", "blk"]
    assert [u.classification for u in updates] == [
        Classification.SECURITY, Classification.LOW, Classification.BLOCKED,
    ]


def test_excludes_architecture_token():
    raw = [_raw("pkg", "security", arch="amd64"), _raw("pkg", "security", arch="armhf")]

    updates = update_filter.apply(raw, exclude_architecture="amd64")

    assert len(updates) == 1
    assert updates[0].architecture == "armhf"


def test_exclusion_matches_substring():
    raw = [_raw("a", "normal", arch="x86_64-amd64"), _raw("b", "normal", arch="all")]

    assert [u.name for u in update_filter.apply(raw, "amd64")] == ["b"]


def test_no_dedup_of_backend_entries():
    raw = [_raw("dup", "bugfix"), _raw("dup", "bugfix")]

    assert len(update_filter.apply(raw)) == 2


def test_builds_immutable_package_updates():
    raw = [RawPackage("libc6", "2.36-9", "arm64", "important", "bookworm-updates")]

    [update] = update_filter.apply(raw)

    assert update == PackageUpdate("libc6", "2.36-9", "arm64",
                                   Classification.IMPORTANT, "bookworm-updates")
    with pytest.raises(AttributeError):
        update.name = "other"


@pytest.mark.parametrize("value, expected", [
    ("security", Classification.SECURITY),
    ("SECURITY", Classification.SECURITY),
    ("PK_INFO_ENUM_ENHANCEMENT", Classification.ENHANCEMENT),
    (Classification.NORMAL, Classification.NORMAL),
    ("installed", Classification.INSTALLED),
    ("garbage", Classification.UNKNOWN),
    ("", Classification.UNKNOWN),
    (None, Classification.UNKNOWN),
    (7, Classification.UNKNOWN),
])
def test_parse_classification(value, expected):
    assert update_filter.parse_classification(value) is expected


def test_informational_classifications_dropped():
    raw = [_raw("a", "installed"), _raw("b", "available"), _raw("c", "weird")]

    assert update_filter.apply(raw) == []
