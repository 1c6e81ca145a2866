"""Environment-aware configuration for the Stakenet node."""
from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from errors import ConfigurationError
from network.config import DEFAULT_STUN_SERVERS


def _default_stun_servers() -> List[str]:
    return list(DEFAULT_STUN_SERVERS)


def _require_int(section: str, name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{section} {name} must be an integer (got {value!r}).")


def _require_bool(section: str, name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{section} {name} must be a boolean (got {value!r}).")


@dataclass
class NetworkSettings:
    listen_host: str = "0.0.0.0"
    listen_port: int = 9000
    bootstrap_nodes: List[str] = field(default_factory=list)
    external_ip: str = ""
    dht_server_mode: bool = True
    nat_enabled: bool = True
    upnp_enabled: bool = True
    stun_servers: List[str] = field(default_factory=_default_stun_servers)
    turn_servers: List[Dict[str, str]] = field(default_factory=list)

    def validate(self) -> None:
        if not isinstance(self.listen_host, str) or not self.listen_host:
            raise ConfigurationError("Network listen host must be provided.")
        _require_int("Network", "listen_port", self.listen_port)
        for flag in ("dht_server_mode", "nat_enabled", "upnp_enabled"):
            _require_bool("Network", flag, getattr(self, flag))
        if not isinstance(self.external_ip, str):
            raise ConfigurationError("Network external IP must be a string.")
        for name in ("bootstrap_nodes", "stun_servers"):
            entries = getattr(self, name)
            if not isinstance(entries, list):
                raise ConfigurationError(f"Network {name} must be a list.")
            for entry in entries:
                if not isinstance(entry, str) or not entry.strip():
                    raise ConfigurationError(f"Invalid {name} entry: {entry!r}")
        if not isinstance(self.turn_servers, list):
            raise ConfigurationError("Network turn_servers must be a list.")
        for server in self.turn_servers:
            if not isinstance(server, dict):
                raise ConfigurationError("TURN server entries must be dictionaries.")
            if "address" not in server:
                raise ConfigurationError(f"TURN server entry missing 'address' (keys: {sorted(server)})")
            unknown = set(server) - {"address", "username", "password"}
            if unknown:
                raise ConfigurationError(f"Unknown TURN server keys: {sorted(unknown)}")


@dataclass
class BootnodeSettings:
    listen_port: int = 50505
    # Public address of the seed node; deployment data, supplied per environment.
    external_ip: str = ""

    def validate(self) -> None:
        _require_int("Bootnode", "listen_port", self.listen_port)
        if not isinstance(self.external_ip, str):
            raise ConfigurationError("Bootnode external IP must be a string.")


@dataclass
class PortSettings:
    bootstrap_node_base_port: int = 50500
    p2p_base_port: int = 51500
    rpc_base_port: int = 52500

    def validate(self) -> None:
        for name, value in asdict(self).items():
            if isinstance(value, bool) or not isinstance(value, int) or not (1024 <= value <= 65535):
                raise ConfigurationError(f"Base port '{name}' must be within 1024-65535 (got {value}).")


@dataclass
class LoggingSettings:
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    def validate(self) -> None:
        if not self.level:
            raise ConfigurationError("Logging level must be provided.")
        if not isinstance(logging.getLevelName(str(self.level).strip().upper()), int):
            raise ConfigurationError(f"Unknown logging level: {self.level!r}")
        if not self.format:
            raise ConfigurationError("Logging format must be provided.")


@dataclass
class Settings:
    env: str
    network: NetworkSettings
    bootnode: BootnodeSettings
    ports: PortSettings
    logging: LoggingSettings

    def validate(self) -> None:
        self.network.validate()
        self.bootnode.validate()
        self.ports.validate()
        self.logging.validate()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "env": self.env,
            "network": asdict(self.network),
            "bootnode": asdict(self.bootnode),
            "ports": asdict(self.ports),
            "logging": asdict(self.logging),
        }


BASE_DEFAULTS: Dict[str, Any] = {
    "network": asdict(NetworkSettings()),
    "bootnode": asdict(BootnodeSettings()),
    "ports": asdict(PortSettings()),
    "logging": asdict(LoggingSettings()),
}

ENVIRONMENT_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "development": {},
    "test": {
        "logging": {"level": "DEBUG"},
        # No UPnP probing from CI boxes.
        "network": {"upnp_enabled": False},
    },
    "production": {
        "logging": {"level": "WARNING"},
    },
}


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


_ENV_VALUE_CASTERS: Dict[str, Any] = {
    "STAKENET_LISTEN_HOST": ("network", "listen_host", str),
    "STAKENET_LISTEN_PORT": ("network", "listen_port", int),
    "STAKENET_BOOTSTRAP_NODES": ("network", "bootstrap_nodes", _parse_list),
    "STAKENET_EXTERNAL_IP": ("network", "external_ip", str),
    "STAKENET_DHT_SERVER_MODE": ("network", "dht_server_mode", _parse_bool),
    "STAKENET_NAT_ENABLED": ("network", "nat_enabled", _parse_bool),
    "STAKENET_UPNP_ENABLED": ("network", "upnp_enabled", _parse_bool),
    "STAKENET_STUN_SERVERS": ("network", "stun_servers", _parse_list),
    "STAKENET_TURN_SERVERS": ("network", "turn_servers", lambda value: json.loads(value)),
    "STAKENET_BOOTNODE_PORT": ("bootnode", "listen_port", int),
    "STAKENET_BOOTNODE_EXTERNAL_IP": ("bootnode", "external_ip", str),
    "STAKENET_BOOTSTRAP_BASE_PORT": ("ports", "bootstrap_node_base_port", int),
    "STAKENET_P2P_BASE_PORT": ("ports", "p2p_base_port", int),
    "STAKENET_RPC_BASE_PORT": ("ports", "rpc_base_port", int),
    "STAKENET_LOG_LEVEL": ("logging", "level", str),
    "STAKENET_LOG_FORMAT": ("logging", "format", str),
    "STAKENET_LOG_DATEFMT": ("logging", "datefmt", str),
}


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _overrides_from_env() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_key, (section, key, caster) in _ENV_VALUE_CASTERS.items():
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            parsed = caster(raw)
        except Exception as exc:
            raise ConfigurationError(f"Failed to coerce environment variable {env_key}: {exc}") from exc
        overrides.setdefault(section, {})[key] = parsed
    return overrides


def _settings_from_dict(env: str, payload: Dict[str, Any]) -> Settings:
    try:
        return Settings(
            env=env,
            network=NetworkSettings(**payload["network"]),
            bootnode=BootnodeSettings(**payload["bootnode"]),
            ports=PortSettings(**payload["ports"]),
            logging=LoggingSettings(**payload["logging"]),
        )
    except TypeError as exc:
        raise ConfigurationError(f"Unknown configuration key: {exc}") from exc


def load_settings(env: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Settings:
    env_name = (env or os.environ.get("STAKENET_ENV", "development")).lower()
    base = copy.deepcopy(BASE_DEFAULTS)
    env_specific = ENVIRONMENT_OVERRIDES.get(env_name, {})
    base = _deep_merge(base, copy.deepcopy(env_specific))
    base = _deep_merge(base, _overrides_from_env())
    if overrides:
        base = _deep_merge(base, copy.deepcopy(overrides))
    settings_obj = _settings_from_dict(env_name, base)
    settings_obj.validate()
    return settings_obj


def reload_settings(env: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Settings:
    global settings
    settings = load_settings(env=env or settings.env, overrides=overrides)
    return settings


settings: Settings = load_settings()

__all__ = [
    "settings",
    "load_settings",
    "reload_settings",
    "Settings",
    "NetworkSettings",
    "BootnodeSettings",
    "PortSettings",
    "LoggingSettings",
]
