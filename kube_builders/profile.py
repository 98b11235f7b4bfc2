"""Hardware profiles describing where to place the root filesystem of a host.

The table is built once with `default_profiles()` and passed explicitly to
the code that needs it:
```
profiles = default_profiles()
hints = get_profile(profiles, "libvirt").root_device_hints
```
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .exceptions import ProfileNotFoundError

__all__ = [
    "DEFAULT_PROFILE_NAME",
    "EMPTY_PROFILE_NAME",
    "Profile",
    "RootDeviceHints",
    "default_profiles",
    "get_profile",
]

DEFAULT_PROFILE_NAME = "unknown"
"""The hardware profile to use when no other profile matches."""

EMPTY_PROFILE_NAME = "empty"
"""The hardware profile without configuration."""


@dataclass(frozen=True)
class RootDeviceHints:
    """Suggestions for selecting the root disk of a host."""

    device_name: str | None = None
    """A device name e.g. `/dev/vda`."""

    hctl: str | None = None
    """A SCSI bus address e.g. `0:0:0:0`."""


@dataclass(frozen=True)
class Profile:
    """The settings for a class of hardware."""

    name: str
    root_device_hints: RootDeviceHints = field(default_factory=RootDeviceHints)


def default_profiles() -> Mapping[str, Profile]:
    """Return the read only table of known hardware profiles keyed by name."""
    profiles = [
        Profile(DEFAULT_PROFILE_NAME, RootDeviceHints(device_name="/dev/sda")),
        Profile("libvirt", RootDeviceHints(device_name="/dev/vda")),
        Profile("dell", RootDeviceHints(hctl="0:0:0:0")),
        Profile("dell-raid", RootDeviceHints(hctl="0:2:0:0")),
        Profile("openstack", RootDeviceHints(device_name="/dev/vdb")),
        Profile(EMPTY_PROFILE_NAME),
    ]
    return MappingProxyType({profile.name: profile for profile in profiles})


def get_profile(profiles: Mapping[str, Profile], name: str) -> Profile:
    """Return the named profile.

    Raises:
        ProfileNotFoundError: If no profile has the name.
    """
    if (profile := profiles.get(name)) is None:
        raise ProfileNotFoundError(name)
    return profile
