"""Router configuration: the list of directly attached interfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dvrouter.addressing import NetworkAddress, parse_cidr, prefix_mask


class ConfigError(ValueError):
    """Raised when a configuration cannot be read or parsed."""


@dataclass(frozen=True)
class Interface:
    """A directly connected interface: own address, network and link cost."""

    ip: int
    prefix: int
    distance: int
    network: NetworkAddress = field(init=False)
    broadcast: int = field(init=False)

    def __post_init__(self) -> None:
        network = NetworkAddress(self.ip & prefix_mask(self.prefix), self.prefix)
        object.__setattr__(self, "network", network)
        object.__setattr__(self, "broadcast", network.broadcast_for(self.ip))


def _to_int(token: str, what: str) -> int:
    try:
        value = int(token)
    except ValueError as exc:
        raise ConfigError(f"invalid {what}: {token!r}") from exc
    if value < 0:
        raise ConfigError(f"negative {what}: {token!r}")
    return value


def parse_config(text: str) -> list[Interface]:
    """Parse a configuration: a count, then ``a.b.c.d/n distance N`` per interface."""
    tokens = iter(text.split())

    def take(what: str) -> str:
        try:
            return next(tokens)
        except StopIteration:
            raise ConfigError(f"missing {what}") from None

    count = _to_int(take("interface count"), "interface count")
    interfaces = []
    for _ in range(count):
        cidr = take("interface address")
        take("distance keyword")
        distance = _to_int(take("distance"), "distance")
        try:
            ip, prefix = parse_cidr(cidr)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        interfaces.append(Interface(ip, prefix, distance))
    return interfaces


def load_config(path: str | Path) -> list[Interface]:
    """Read and parse a configuration file."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise ConfigError(f"Cannot open config file: {path}") from exc
    return parse_config(text)