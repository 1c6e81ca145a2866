from .config import (
    DEFAULT_STUN_SERVERS,
    WILDCARD_HOST,
    NetworkConfig,
    TURNConfig,
    is_valid_hostname,
    is_valid_port,
)
from .ports import (
    DEFAULT_BOOTSTRAP_NODE_BASE_PORT,
    DEFAULT_P2P_BASE_PORT,
    DEFAULT_RPC_BASE_PORT,
    InstancePorts,
    NetworkPorts,
    default_network_ports,
)
from .profiles import (
    BOOTNODE_LISTEN_PORT,
    DEFAULT_LISTEN_PORT,
    default_bootnode_config,
    default_network_config,
    new_default_config,
)

__all__ = [
    "WILDCARD_HOST",
    "NetworkConfig",
    "TURNConfig",
    "is_valid_hostname",
    "is_valid_port",
    "DEFAULT_BOOTSTRAP_NODE_BASE_PORT",
    "DEFAULT_P2P_BASE_PORT",
    "DEFAULT_RPC_BASE_PORT",
    "InstancePorts",
    "NetworkPorts",
    "default_network_ports",
    "BOOTNODE_LISTEN_PORT",
    "DEFAULT_LISTEN_PORT",
    "DEFAULT_STUN_SERVERS",
    "default_bootnode_config",
    "default_network_config",
    "new_default_config",
]
