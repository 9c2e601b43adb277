"""Shared data type definitions (AccessModes, ContainerItem)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccessModes:
    """
    Web Access Control modes granted to one agent.

    Flags left unspecified are not granted.
    """
    read: bool = False
    append: bool = False
    write: bool = False
    control: bool = False

    def any(self) -> bool:
        return self.read or self.append or self.write or self.control


FULL_ACCESS = AccessModes(read=True, append=True, write=True, control=True)
NO_ACCESS = AccessModes()


@dataclass(frozen=True)
class ContainerItem:
    """
    One member of a container listing.
    """
    url: str
    is_container: bool
