"""Deterministic port allocation for several node instances on one host."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BOOTSTRAP_NODE_BASE_PORT = 50500
DEFAULT_P2P_BASE_PORT = 51500
DEFAULT_RPC_BASE_PORT = 52500


@dataclass(frozen=True)
class InstancePorts:
    instance_id: int
    bootstrap_node_port: int
    p2p_port: int
    rpc_port: int


@dataclass(frozen=True)
class NetworkPorts:
    """Base ports per category; instance ``n`` gets ``base + n``.

    ``instance_id`` is not bounds checked. Callers must keep
    ``base + instance_id`` within 65535 and choose bases far enough apart
    that their instance ranges do not overlap.
    """

    bootstrap_node_base_port: int = DEFAULT_BOOTSTRAP_NODE_BASE_PORT
    p2p_base_port: int = DEFAULT_P2P_BASE_PORT
    rpc_base_port: int = DEFAULT_RPC_BASE_PORT

    def get_bootstrap_node_port(self, instance_id: int) -> int:
        return self.bootstrap_node_base_port + instance_id

    def get_p2p_port(self, instance_id: int) -> int:
        return self.p2p_base_port + instance_id

    def get_rpc_port(self, instance_id: int) -> int:
        return self.rpc_base_port + instance_id

    def allocate(self, instance_id: int) -> InstancePorts:
        return InstancePorts(
            instance_id=instance_id,
            bootstrap_node_port=self.get_bootstrap_node_port(instance_id),
            p2p_port=self.get_p2p_port(instance_id),
            rpc_port=self.get_rpc_port(instance_id),
        )


def default_network_ports() -> NetworkPorts:
    return NetworkPorts()
