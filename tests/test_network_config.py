import multiaddr
import pytest

from errors import ConfigurationError, InvalidListenHostError, InvalidPortError
from network import NetworkConfig, TURNConfig, is_valid_hostname, is_valid_port, new_default_config


@pytest.mark.parametrize(
    "host",
    ["localhost", "example.com", "", "256.1.1.1", "1.2.3", "not-an-ip", "::g", "fe80::1%eth0", " 127.0.0.1"],
)
def test_validate_rejects_non_ip_hosts(host):
    cfg = NetworkConfig(listen_host=host, listen_port=9000)
    with pytest.raises(InvalidListenHostError) as excinfo:
        cfg.validate()
    assert excinfo.value.value == host
    assert str(excinfo.value) == f"invalid listen host: {host}"


@pytest.mark.parametrize("host", ["0.0.0.0", "127.0.0.1", "10.1.2.3", "::", "::1", "2001:db8::42"])
def test_validate_accepts_wildcard_and_ip_literals(host):
    NetworkConfig(listen_host=host, listen_port=9000).validate()


@pytest.mark.parametrize("port", [1, 22, 80, 443, 1023])
def test_validate_rejects_reserved_ports(port):
    with pytest.raises(InvalidPortError) as excinfo:
        NetworkConfig(listen_host="127.0.0.1", listen_port=port).validate()
    assert excinfo.value.value == port
    assert str(excinfo.value) == f"invalid port number: {port}"


@pytest.mark.parametrize("port", [0, 1024, 9000, 50505, 65535])
def test_validate_accepts_any_and_unreserved_ports(port):
    NetworkConfig(listen_host="127.0.0.1", listen_port=port).validate()


@pytest.mark.parametrize("port", [-1, -65535, 65536, 100000])
def test_validate_rejects_out_of_range_ports(port):
    with pytest.raises(InvalidPortError):
        NetworkConfig(listen_host="0.0.0.0", listen_port=port).validate()


def test_validation_errors_are_configuration_errors():
    with pytest.raises(ConfigurationError):
        NetworkConfig(listen_host="0.0.0.0", listen_port=80).validate()


def test_host_is_checked_before_port():
    with pytest.raises(InvalidListenHostError):
        NetworkConfig(listen_host="bogus", listen_port=80).validate()


@pytest.mark.parametrize("port", [True, "9000", 9000.0, None])
def test_is_valid_port_rejects_non_integers(port):
    assert not is_valid_port(port)


def test_validate_ignores_peer_lists_and_handles():
    cfg = NetworkConfig(
        listen_host="0.0.0.0",
        listen_port=9000,
        bootstrap_nodes=["not a host:port", "not a host:port"],
        stun_servers=["???"],
        turn_servers=[TURNConfig(address="", username="", password="")],
        blockchain=object(),
    )
    cfg.validate()
    assert cfg.bootstrap_nodes == ("not a host:port", "not a host:port")


def test_get_multiaddr_formats_ip4_tcp():
    cfg = NetworkConfig(listen_host="127.0.0.1", listen_port=9000)
    assert cfg.get_multiaddr() == "/ip4/127.0.0.1/tcp/9000"


def test_get_multiaddr_does_not_validate():
    cfg = NetworkConfig(listen_host="bogus", listen_port=1)
    assert cfg.get_multiaddr() == "/ip4/bogus/tcp/1"


def test_listen_multiaddr_for_ipv4_and_ipv6():
    assert NetworkConfig(listen_host="127.0.0.1", listen_port=9000).listen_multiaddr() == multiaddr.Multiaddr(
        "/ip4/127.0.0.1/tcp/9000"
    )
    assert NetworkConfig(listen_host="::1", listen_port=9001).listen_multiaddr() == multiaddr.Multiaddr(
        "/ip6/::1/tcp/9001"
    )


def test_listen_multiaddr_validates_first():
    with pytest.raises(InvalidPortError):
        NetworkConfig(listen_host="127.0.0.1", listen_port=443).listen_multiaddr()


def test_config_is_immutable():
    cfg = new_default_config()
    with pytest.raises(AttributeError):
        cfg.listen_port = 9001


def test_lists_are_frozen_on_construction():
    nodes = ["10.0.0.1:9000"]
    cfg = NetworkConfig(bootstrap_nodes=nodes)
    nodes.append("10.0.0.2:9000")
    assert cfg.bootstrap_nodes == ("10.0.0.1:9000",)


def test_turn_servers_accept_mappings():
    cfg = NetworkConfig(turn_servers=[{"address": "turn.example.org:3478", "username": "u", "password": "p"}])
    assert cfg.turn_servers == (TURNConfig(address="turn.example.org:3478", username="u", password="p"),)


def test_turn_password_not_in_repr():
    turn = TURNConfig(address="turn.example.org:3478", username="alice", password="s3cret")
    assert "s3cret" not in repr(turn)
    assert "s3cret" not in repr(NetworkConfig(turn_servers=[turn]))


def test_with_overrides_returns_new_value():
    base = new_default_config()
    changed = base.with_overrides(listen_port=9100, bootstrap_nodes=["10.0.0.1:9000"])
    assert changed.listen_port == 9100
    assert changed.bootstrap_nodes == ("10.0.0.1:9000",)
    assert base.listen_port == 9000
    assert base.bootstrap_nodes == ()


def test_subsystem_handles_are_carried_not_compared():
    chain, pool = object(), object()
    cfg = new_default_config().with_subsystems(blockchain=chain, utxo_pool=pool)
    assert cfg.blockchain is chain
    assert cfg.utxo_pool is pool
    assert cfg.stake_pool is None
    assert cfg.mempool is None
    assert cfg == new_default_config()


def test_hostname_length_limits():
    assert is_valid_hostname("node-1.example.org")
    assert is_valid_hostname("a" * 63 + ".example")
    assert not is_valid_hostname("a" * 64 + ".example")
    assert is_valid_hostname(".".join(["a" * 63] * 4))
    assert not is_valid_hostname("a" * 256)


def test_hostname_check_ignores_character_classes():
    assert is_valid_hostname("under_score!.example")


def test_validate_does_not_accept_hostnames():
    assert is_valid_hostname("node.example.org")
    with pytest.raises(InvalidListenHostError):
        NetworkConfig(listen_host="node.example.org", listen_port=9000).validate()


def test_with_subsystems_keeps_handles_not_named():
    chain, mem = object(), object()
    cfg = new_default_config().with_subsystems(blockchain=chain).with_subsystems(mempool=mem)
    assert cfg.blockchain is chain
    assert cfg.mempool is mem
    assert cfg.stake_pool is None


def test_with_subsystems_can_detach_a_handle():
    cfg = new_default_config().with_subsystems(blockchain=object(), mempool=object())
    detached = cfg.with_subsystems(blockchain=None)
    assert detached.blockchain is None
    assert detached.mempool is cfg.mempool


@pytest.mark.parametrize("field_name", ["bootstrap_nodes", "stun_servers"])
def test_single_string_address_list_is_rejected(field_name):
    with pytest.raises(ConfigurationError, match=field_name):
        new_default_config().with_overrides(**{field_name: "10.0.0.1:9000"})


@pytest.mark.parametrize(
    "entry",
    [
        "turn.example.org:3478",
        ("turn.example.org:3478", "u", "p"),
        {"address": "turn.example.org:3478", "secret": "x"},
        {"username": "u"},
    ],
)
def test_malformed_turn_entries_raise_configuration_error(entry):
    with pytest.raises(ConfigurationError):
        NetworkConfig(turn_servers=[entry])
