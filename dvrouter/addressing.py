"""IPv4 addresses and network prefixes as 32-bit integers."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

_ALL_ONES = 0xFFFFFFFF


def prefix_mask(prefix: int) -> int:
    """Return the netmask for a prefix length as a 32-bit integer."""
    if not 0 <= prefix <= 32:
        raise ValueError(f"prefix length out of range: {prefix}")
    return (_ALL_ONES << (32 - prefix)) & _ALL_ONES


def parse_ip(text: str) -> int:
    """Parse dotted-quad IPv4 text into a host-order integer."""
    try:
        return int(ipaddress.IPv4Address(text.strip()))
    except ipaddress.AddressValueError as exc:
        raise ValueError(f"invalid IPv4 address: {text!r}") from exc


def format_ip(ip: int) -> str:
    """Format a host-order integer as dotted-quad text."""
    return str(ipaddress.IPv4Address(ip))


def parse_cidr(text: str) -> tuple[int, int]:
    """Split ``a.b.c.d/n`` into the host address and the prefix length."""
    address, sep, prefix_text = text.strip().partition("/")
    if not sep:
        raise ValueError(f"missing prefix length in {text!r}")
    try:
        prefix = int(prefix_text)
    except ValueError as exc:
        raise ValueError(f"invalid prefix length in {text!r}") from exc
    if not 0 <= prefix <= 32:
        raise ValueError(f"prefix length out of range in {text!r}")
    return parse_ip(address), prefix


@dataclass(frozen=True, order=True)
class NetworkAddress:
    """A network identified by its base address and prefix length."""

    ip: int
    mask: int

    def __post_init__(self) -> None:
        if not 0 <= self.ip <= _ALL_ONES:
            raise ValueError(f"address out of range: {self.ip}")
        if not 0 <= self.mask <= 32:
            raise ValueError(f"prefix length out of range: {self.mask}")

    def contains(self, ip: int) -> bool:
        """Tell whether a host address belongs to this network."""
        return (ip & prefix_mask(self.mask)) == self.ip

    def broadcast_for(self, ip: int) -> int:
        """Return the broadcast address of this network for a host in it."""
        return (ip | (~prefix_mask(self.mask) & _ALL_ONES)) & _ALL_ONES

    def __str__(self) -> str:
        return f"{format_ip(self.ip)}/{self.mask}"