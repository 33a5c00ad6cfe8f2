"""Diagnostics and debugging information utility functions."""

import sys
import platform
from typing import Optional

import selenium

from ..browser.process import _is_port_open
from ..browser.service import DriverService


def collect_diagnostics(
    service: Optional[DriverService] = None,
    exc: Optional[Exception] = None,
) -> str:
    """
    Collect diagnostic information about the driver service and environment.

    Args:
        service: The driver service (if None, the default service when one is set)
        exc: Exception that occurred (can be None)

    Returns:
        str: Formatted diagnostic information
    """
    if service is None:
        from .. import default_service
        service = default_service._default_service

    parts = [
        f"OS                : {platform.system()} {platform.release()}",
        f"Python            : {sys.version.split()[0]}",
        f"Selenium          : {getattr(selenium, '__version__', '?')}",
    ]

    if service is not None:
        address = service.address()
        host = address.split("//", 1)[-1].split(":", 1)[0]
        parts += [
            f"Driver executable : {service.executable}",
            f"Driver args       : {' '.join(service.command_line_args())}",
            f"Server address    : {address}",
            f"Server running    : {service.is_running()}",
            f"Server pid        : {service.pid or '<none>'}",
            f"Port open         : {_is_port_open(host, service.port)}",
        ]
    else:
        parts.append("Driver service    : <none>")

    if exc:
        parts += [
            "---- ERROR ----",
            f"Error type        : {type(exc).__name__}",
            f"Error message     : {exc}",
        ]

    return "\n".join(parts)


__all__ = ['collect_diagnostics']
