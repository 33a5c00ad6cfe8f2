"""
A WebDriver client for Microsoft's Edge web browser.

Before using this package, download the MicrosoftEdgeDriver server and make
sure MicrosoftWebDriver.exe is on your PATH (or point
EDGEDRIVER_EXECUTABLE_PATH at it).

There are three primary classes:

1. ServiceBuilder: configures the DriverService that manages the
   MicrosoftEdgeDriver child process.
2. Options: per-session configuration, such as the proxy or the page load
   strategy.
3. Driver: the WebDriver client; each instance controls one browser session.

## Customizing the MicrosoftEdgeDriver Server

By default every Edge session uses a single driver service, started the first
time a Driver is created and terminated when this process exits. It inherits
the environment of the current process. Get a handle to it with
get_default_service() and replace it with set_default_service() while it is
not running.

A Driver may also get its own service, for example to capture that server's
output for one session:

    from edge_webdriver import Driver, Options, ServiceBuilder

    service = ServiceBuilder().using_port(55555).set_stdio("inherit").build()
    driver = Driver(Options().set_page_load_strategy("eager"), service)
"""

from .capabilities import Capabilities, Capability, OptionKey
from .options import Options
from .browser.builder import ServiceBuilder
from .browser.service import DriverService
from .browser.driver import Driver
from .default_service import get_default_service, set_default_service

__all__ = [
    "Capabilities",
    "Capability",
    "OptionKey",
    "Options",
    "ServiceBuilder",
    "DriverService",
    "Driver",
    "get_default_service",
    "set_default_service",
]
