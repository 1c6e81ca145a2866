"""Console logging for the Stakenet node and its port-planning tool."""
from __future__ import annotations

import logging
from typing import Optional

import config

# Modules that emit records; anything else keeps the root logger's level.
PROJECT_LOGGERS = ("network.profiles", "app.container", "app.instance_ports")
QUIET_LOGGERS = ("multiaddr",)

CONSOLE_HANDLER_NAME = "stakenet-console"


def configure(logging_settings: Optional[config.LoggingSettings] = None) -> logging.Handler:
    """Install the console handler and apply the configured level.

    Only the handler installed by a previous call is replaced, so handlers
    attached by the embedding process (test runners, service managers) stay.
    """
    settings = logging_settings or config.settings.logging
    level = logging.getLevelName(settings.level.strip().upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(logging.Formatter(settings.format, settings.datefmt))
    root_logger.addHandler(console_handler)

    for name in PROJECT_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, level))

    return console_handler
