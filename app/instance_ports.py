"""Print the port plan for several node instances sharing one host."""
import argparse
import logging
import sys

import config
import node_logging
from app.container import ServiceContainer
from errors import ConfigurationError, InvalidPortError
from network import is_valid_port

logger = logging.getLogger(__name__)


def build_plan(container, count):
    rows = []
    for instance_id in range(count):
        ports = container.ports.allocate(instance_id)
        for port in (ports.bootstrap_node_port, ports.p2p_port, ports.rpc_port):
            if not is_valid_port(port):
                raise InvalidPortError(port)
        cfg = container.build_network_config(instance_id=instance_id)
        rows.append((ports, cfg.get_multiaddr()))
    return rows


def main(argv=None):
    parser = argparse.ArgumentParser(description="Stakenet multi-instance port plan")
    parser.add_argument("--count", type=int, default=3, help="Number of co-located instances")
    parser.add_argument("--env", default=None, help="Settings environment (development, test, production)")
    args = parser.parse_args(argv)

    if args.count < 1:
        parser.error("--count must be at least 1")

    try:
        settings = config.load_settings(env=args.env) if args.env else config.settings
        node_logging.configure(settings.logging)
        container = ServiceContainer.build(settings=settings)
        plan = build_plan(container, args.count)
    except ConfigurationError as exc:
        logger.critical("Configuration error: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for ports, addr in plan:
        print(
            f"instance={ports.instance_id} bootstrap={ports.bootstrap_node_port} "
            f"p2p={ports.p2p_port} rpc={ports.rpc_port} listen={addr}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
