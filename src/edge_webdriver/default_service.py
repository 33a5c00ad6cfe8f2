"""
Process-wide default MicrosoftEdgeDriver service.

Every Driver created without an explicit service shares this one server. It is
built lazily from the default ServiceBuilder configuration the first time it
is requested and, unless EDGEDRIVER_KILL_ON_EXIT=0, killed when the
interpreter exits.

Thread Safety:
    get/set are serialized by a module lock, so the "is it running?" check and
    the replacement happen atomically with respect to each other.

Usage:
    from edge_webdriver.default_service import get_default_service

    service = get_default_service()
    url = service.start()
"""

import atexit
import threading
from typing import Optional

from .browser.builder import ServiceBuilder
from .browser.service import DriverService
from .config.environment import get_env_config, get_kill_on_exit

import logging
logger = logging.getLogger(__name__)


_default_service: Optional[DriverService] = None
_lock = threading.Lock()
_atexit_registered = False


def _register_exit_hook() -> None:
    global _atexit_registered
    if get_kill_on_exit() and not _atexit_registered:
        atexit.register(_kill_default_service)
        _atexit_registered = True


def _build_default_service() -> DriverService:
    config = get_env_config()
    builder = ServiceBuilder()
    if config["fixed_port"]:
        builder.using_port(config["fixed_port"])
    return builder.build()


def _kill_default_service() -> None:
    service = _default_service
    if service is not None and service.is_running():
        logger.info("Shutting down the default Edge driver service")
        service.kill()


def get_default_service() -> DriverService:
    """
    Return the default service, building one on first use.

    Returns:
        The shared DriverService instance

    Raises:
        FileNotFoundError: If no service is set and the driver executable cannot be located
    """
    global _default_service

    with _lock:
        if _default_service is None:
            _default_service = _build_default_service()
            _register_exit_hook()
            logger.debug(f"Created default Edge driver service: {_default_service!r}")
        return _default_service


def set_default_service(service: DriverService) -> None:
    """
    Set the service used by new Drivers that are not given one.

    The previous service is not stopped; that is the caller's job.

    Raises:
        RuntimeError: If the current default service is still running
    """
    global _default_service

    with _lock:
        if _default_service is not None and _default_service.is_running():
            raise RuntimeError(
                "The previously configured EdgeDriver service is still running. "
                "You must shut it down before you may adjust its configuration."
            )
        _default_service = service
        _register_exit_hook()


def reset_default_service() -> None:
    """
    Forget the default service without stopping it.

    ⚠️  WARNING: This is primarily for testing.
    """
    global _default_service

    with _lock:
        _default_service = None


__all__ = [
    "get_default_service",
    "set_default_service",
    "reset_default_service",
]
