"""Dependency wiring helpers for the Stakenet node."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import config
from errors import ConfigurationError, DependencyError
from network import (
    NetworkConfig,
    NetworkPorts,
    TURNConfig,
    default_bootnode_config,
    new_default_config,
)
from network.config import SUBSYSTEM_FIELDS


@dataclass
class ServiceContainer:
    """Collects settings and subsystem handles and turns them into network configs."""

    settings: config.Settings
    logger: logging.Logger
    subsystems: Dict[str, Any]
    overrides: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        *,
        settings: Optional[config.Settings] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ServiceContainer":
        resolved_settings = settings or config.settings
        override_map = overrides or {}

        logger: logging.Logger = override_map.get("logger") or logging.getLogger("app.container")
        subsystems = {name: override_map.get(name) for name in SUBSYSTEM_FIELDS}

        return cls(
            settings=resolved_settings,
            logger=logger,
            subsystems=subsystems,
            overrides=override_map,
        )

    @property
    def ports(self) -> NetworkPorts:
        port_settings = self.settings.ports
        return NetworkPorts(
            bootstrap_node_base_port=port_settings.bootstrap_node_base_port,
            p2p_base_port=port_settings.p2p_base_port,
            rpc_base_port=port_settings.rpc_base_port,
        )

    def get_subsystem(self, name: str) -> Any:
        if name not in self.subsystems:
            raise DependencyError(f"Unknown subsystem requested: {name}")
        return self.subsystems[name]

    def build_network_config(self, instance_id: Optional[int] = None) -> NetworkConfig:
        """Standard peer config from settings; ``instance_id`` selects a derived P2P port."""
        network = self.settings.network
        listen_port = network.listen_port
        if instance_id is not None:
            listen_port = self.ports.get_p2p_port(instance_id)

        cfg = new_default_config().with_overrides(
            listen_host=network.listen_host,
            listen_port=listen_port,
            bootstrap_nodes=tuple(network.bootstrap_nodes),
            external_ip=network.external_ip,
            dht_server_mode=network.dht_server_mode,
            nat_enabled=network.nat_enabled,
            upnp_enabled=network.upnp_enabled,
            stun_servers=tuple(network.stun_servers),
            turn_servers=tuple(TURNConfig(**entry) for entry in network.turn_servers),
        )
        return self._finalize(cfg, "peer", instance_id)

    def build_bootnode_config(self, instance_id: Optional[int] = None) -> NetworkConfig:
        """Seed node config; ``instance_id`` selects a derived bootstrap-node port."""
        bootnode = self.settings.bootnode
        listen_port = bootnode.listen_port
        if instance_id is not None:
            listen_port = self.ports.get_bootstrap_node_port(instance_id)

        cfg = default_bootnode_config(external_ip=bootnode.external_ip).with_overrides(
            listen_host=self.settings.network.listen_host,
            listen_port=listen_port,
        )
        return self._finalize(cfg, "bootnode", instance_id)

    def _finalize(self, cfg: NetworkConfig, role: str, instance_id: Optional[int]) -> NetworkConfig:
        cfg = cfg.with_subsystems(**self.subsystems)
        try:
            cfg.validate()
        except ConfigurationError as exc:
            self.logger.warning("Rejected %s network config (instance=%s): %s", role, instance_id, exc)
            raise
        self.logger.debug(
            "Built %s network config listening on %s (instance=%s)",
            role,
            cfg.get_multiaddr(),
            instance_id,
        )
        return cfg
