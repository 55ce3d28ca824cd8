"""Reduce the backend's raw package list to the updates worth reporting."""

from collections.abc import Iterable

from updatenotifier.core.models import Classification, PackageUpdate, RawPackage

# Classifications that represent a real pending change
PENDING_CLASSIFICATIONS = frozenset({
    Classification.LOW,
    Classification.NORMAL,
    Classification.IMPORTANT,
    Classification.SECURITY,
    Classification.BUGFIX,
    Classification.ENHANCEMENT,
    Classification.BLOCKED,
})

_PK_PREFIX = "pk_info_enum_"


def parse_classification(value) -> Classification:
    """Map an enum member, name or value to a Classification.

    Accepts 'security', 'SECURITY' and 'PK_INFO_ENUM_SECURITY' alike.
    Anything unrecognised becomes UNKNOWN.
    """
    if isinstance(value, Classification):
        return value
    if not isinstance(value, str):
        return Classification.UNKNOWN
    key = value.strip().lower()
    if key.startswith(_PK_PREFIX):
        key = key[len(_PK_PREFIX):]
    try:
        return Classification(key)
    except ValueError:
        return Classification.UNKNOWN


def apply(raw_packages: Iterable[RawPackage],
          exclude_architecture: str | None = None) -> list[PackageUpdate]:
    """Keep pending updates in backend order.

    When exclude_architecture is set, packages whose architecture contains
    that token are dropped too.
    """
    updates = []
    for raw in raw_packages:
        classification = parse_classification(raw.classification)
        if classification not in PENDING_CLASSIFICATIONS:
            continue
        if exclude_architecture and exclude_architecture in (raw.architecture or ""):
            continue
        updates.append(PackageUpdate(
            name=raw.name,
            version=raw.version,
            architecture=raw.architecture,
            classification=classification,
            repository=raw.repository,
        ))
    return updates
