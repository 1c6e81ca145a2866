"""Canned starting points for node configuration.

Every function here returns a fresh value, so callers can derive their own
overrides without touching anyone else's copy.
"""
from __future__ import annotations

import logging
from typing import Optional

import config
from .config import DEFAULT_STUN_SERVERS, WILDCARD_HOST, NetworkConfig

logger = logging.getLogger(__name__)

DEFAULT_LISTEN_PORT = 9000
BOOTNODE_LISTEN_PORT = 50505


def new_default_config() -> NetworkConfig:
    """Standard peer: wildcard listener on 9000 with public STUN servers."""
    return NetworkConfig(
        listen_host=WILDCARD_HOST,
        listen_port=DEFAULT_LISTEN_PORT,
        bootstrap_nodes=(),
        dht_server_mode=True,
        nat_enabled=True,
        upnp_enabled=True,
        stun_servers=DEFAULT_STUN_SERVERS,
        turn_servers=(),
    )


def default_network_config() -> NetworkConfig:
    return new_default_config()


def default_bootnode_config(external_ip: Optional[str] = None) -> NetworkConfig:
    """Seed node profile on the fixed bootnode port.

    The seed's public address comes from ``external_ip`` or, failing that,
    from ``settings.bootnode.external_ip``. STUN is left empty because the
    seed's address is already known.
    """
    if external_ip is None:
        external_ip = config.settings.bootnode.external_ip
    if not external_ip:
        logger.warning("Bootnode profile has no external IP configured; peers must discover it")
    return NetworkConfig(
        listen_host=WILDCARD_HOST,
        listen_port=BOOTNODE_LISTEN_PORT,
        bootstrap_nodes=(),
        external_ip=external_ip,
        dht_server_mode=True,
        nat_enabled=True,
        upnp_enabled=True,
        stun_servers=(),
        turn_servers=(),
    )


__all__ = [
    "DEFAULT_LISTEN_PORT",
    "BOOTNODE_LISTEN_PORT",
    "DEFAULT_STUN_SERVERS",
    "new_default_config",
    "default_network_config",
    "default_bootnode_config",
]
