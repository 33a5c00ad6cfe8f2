"""Command executor and session creation on top of Selenium's remote client."""

from typing import Any, Mapping

from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.common.proxy import Proxy
from selenium.webdriver.remote.remote_connection import RemoteConnection
from selenium.webdriver.remote.webdriver import WebDriver

from ..capabilities import Capability

import logging
logger = logging.getLogger(__name__)


def create_executor(url: str, keep_alive: bool = True) -> RemoteConnection:
    """Executor sending WebDriver commands to the server at ``url``."""
    return RemoteConnection(url, keep_alive=keep_alive)


def capabilities_to_options(capabilities: Mapping[str, Any]) -> ArgOptions:
    """
    Convert a capabilities map into the options object Selenium's WebDriver expects.

    Selenium Proxy objects are serialized to their capability dict.
    """
    options = ArgOptions()
    for key, value in capabilities.items():
        if value is None:
            continue
        if key == Capability.PROXY and isinstance(value, Proxy):
            value = value.to_capabilities()
        options.set_capability(key, value)
    return options


def create_session(executor: RemoteConnection, capabilities: Mapping[str, Any]) -> WebDriver:
    """
    Request a new session from the server behind ``executor``.

    Errors from the server (WebDriverException and friends) propagate unchanged.
    """
    logger.debug(f"Creating session with capabilities {dict(capabilities)!r}")
    return WebDriver(command_executor=executor, options=capabilities_to_options(capabilities))


__all__ = [
    "create_executor",
    "capabilities_to_options",
    "create_session",
]
