from __future__ import annotations

import dataclasses
import ipaddress
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

import multiaddr

from errors import ConfigurationError, InvalidListenHostError, InvalidPortError

WILDCARD_HOST = "0.0.0.0"
MAX_PORT = 65535
# Ports below this are reserved; 0 still means "any".
MIN_UNRESERVED_PORT = 1024

MAX_HOSTNAME_LENGTH = 255
MAX_LABEL_LENGTH = 63

SUBSYSTEM_FIELDS = ("blockchain", "stake_pool", "mempool", "utxo_pool")

DEFAULT_STUN_SERVERS = (
    "stun.l.google.com:19302",
    "stun1.l.google.com:19302",
)

_UNSET: Any = object()


@dataclass(frozen=True)
class TURNConfig:
    address: str
    username: str = ""
    password: str = field(default="", repr=False)


@dataclass(frozen=True)
class NetworkConfig:
    """Listen parameters, NAT traversal options and bootstrap list for one node.

    Values are immutable once built; use ``with_overrides`` to derive a
    modified copy. The subsystem handles are owned by the caller and are only
    carried here so the networking layer can reach them.
    """

    listen_host: str = WILDCARD_HOST
    listen_port: int = 0
    bootstrap_nodes: Tuple[str, ...] = ()
    external_ip: str = ""
    dht_server_mode: bool = False
    nat_enabled: bool = False
    upnp_enabled: bool = False
    stun_servers: Tuple[str, ...] = ()
    turn_servers: Tuple[TURNConfig, ...] = ()
    blockchain: Optional[Any] = field(default=None, compare=False, repr=False)
    stake_pool: Optional[Any] = field(default=None, compare=False, repr=False)
    mempool: Optional[Any] = field(default=None, compare=False, repr=False)
    utxo_pool: Optional[Any] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        # Freeze caller-supplied lists so copies never share mutable state.
        object.__setattr__(self, "bootstrap_nodes", _address_tuple("bootstrap_nodes", self.bootstrap_nodes))
        object.__setattr__(self, "stun_servers", _address_tuple("stun_servers", self.stun_servers))
        object.__setattr__(self, "turn_servers", tuple(_turn_config(entry) for entry in self.turn_servers))

    def with_overrides(self, **changes: Any) -> "NetworkConfig":
        return dataclasses.replace(self, **changes)

    def with_subsystems(
        self,
        *,
        blockchain: Optional[Any] = _UNSET,
        stake_pool: Optional[Any] = _UNSET,
        mempool: Optional[Any] = _UNSET,
        utxo_pool: Optional[Any] = _UNSET,
    ) -> "NetworkConfig":
        """Attach handles; handles not named here keep their current value."""
        supplied = {
            "blockchain": blockchain,
            "stake_pool": stake_pool,
            "mempool": mempool,
            "utxo_pool": utxo_pool,
        }
        changes = {name: handle for name, handle in supplied.items() if handle is not _UNSET}
        return dataclasses.replace(self, **changes)

    def validate(self) -> None:
        """Gate run before the config is handed to the networking subsystem.

        Raises ``InvalidListenHostError`` or ``InvalidPortError``. Bootstrap,
        STUN and TURN entries are accepted as-is.
        """
        if self.listen_host != WILDCARD_HOST and _parse_ip(self.listen_host) is None:
            raise InvalidListenHostError(self.listen_host)
        if not is_valid_port(self.listen_port):
            raise InvalidPortError(self.listen_port)

    def get_multiaddr(self) -> str:
        return f"/ip4/{self.listen_host}/tcp/{self.listen_port}"

    def listen_multiaddr(self) -> multiaddr.Multiaddr:
        """Validated transport address, using ip6 for IPv6 listen hosts."""
        self.validate()
        address = _parse_ip(self.listen_host)
        if address is not None and address.version == 6:
            return multiaddr.Multiaddr(f"/ip6/{address}/tcp/{self.listen_port}")
        return multiaddr.Multiaddr(self.get_multiaddr())


def _address_tuple(name: str, entries: Any) -> Tuple[str, ...]:
    if isinstance(entries, (str, bytes)):
        raise ConfigurationError(f"{name} must be a sequence of 'host:port' strings, not a single string: {entries!r}")
    return tuple(entries)


def _turn_config(entry: Any) -> TURNConfig:
    if isinstance(entry, TURNConfig):
        return entry
    if not isinstance(entry, dict):
        raise ConfigurationError(f"TURN server entries must be TURNConfig or mappings (got {type(entry).__name__}).")
    try:
        return TURNConfig(**entry)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid TURN server entry keys {sorted(entry)}: {exc}") from exc


def _parse_ip(value: Any) -> Optional[Union[ipaddress.IPv4Address, ipaddress.IPv6Address]]:
    if not isinstance(value, str) or "%" in value:
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def is_valid_port(port: Any) -> bool:
    if isinstance(port, bool) or not isinstance(port, int):
        return False
    if port < 0 or port > MAX_PORT:
        return False
    return port == 0 or port >= MIN_UNRESERVED_PORT


def is_valid_hostname(hostname: str) -> bool:
    """Length-only sanity check; label characters are not inspected."""
    if len(hostname) > MAX_HOSTNAME_LENGTH:
        return False
    return all(len(label) <= MAX_LABEL_LENGTH for label in hostname.split("."))
