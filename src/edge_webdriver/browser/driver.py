"""WebDriver client for Microsoft Edge."""

import asyncio
from typing import Any, Mapping, Optional, Union

from selenium.webdriver.remote.remote_connection import RemoteConnection
from selenium.webdriver.remote.webdriver import WebDriver

from ..capabilities import Capabilities
from ..default_service import get_default_service
from ..options import Options
from .executor import create_executor, create_session
from .service import DriverService

import logging
logger = logging.getLogger(__name__)

DriverConfig = Union[Options, Mapping[str, Any], None]


def _resolve_capabilities(config: DriverConfig) -> Mapping[str, Any]:
    if isinstance(config, Options):
        return config.to_capabilities()
    if config is not None:
        return config
    return Capabilities.edge()


class Driver:
    """
    A WebDriver client for Microsoft Edge; each instance controls one browser session.

    The driver holds a Selenium session and the service it was started on.
    Attribute access the driver does not define itself (``get``,
    ``find_element``, ``title``, ...) is forwarded to the session.

    Args:
        config: Options, a capabilities map, or None for the Edge defaults
        service: The service to use; the default service if omitted

    Usage:
        with Driver(Options().set_page_load_strategy("eager")) as driver:
            driver.get("https://example.org")

    Note:
        quit() kills the service the driver was started with, including one
        passed in by the caller.
    """

    def __init__(self, config: DriverConfig = None, service: Optional[DriverService] = None) -> None:
        service = service or get_default_service()
        executor = create_executor(service.start())
        session = create_session(executor, _resolve_capabilities(config))
        self._bind(session, service, executor, loop=None)

    @classmethod
    async def create(
        cls,
        config: DriverConfig = None,
        service: Optional[DriverService] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "Driver":
        """
        Build a Driver without blocking the event loop.

        Starting the server and creating the session run in ``loop``'s default
        executor; a failure at any step propagates and later steps are skipped.
        """
        loop = loop or asyncio.get_running_loop()
        service = service or get_default_service()
        url = await service.start_async(loop=loop)
        executor = create_executor(url)
        capabilities = _resolve_capabilities(config)
        session = await loop.run_in_executor(None, create_session, executor, capabilities)

        driver = cls.__new__(cls)
        driver._bind(session, service, executor, loop=loop)
        return driver

    def _bind(
        self,
        session: WebDriver,
        service: DriverService,
        executor: RemoteConnection,
        loop: Optional[asyncio.AbstractEventLoop],
    ) -> None:
        self._session = session
        self._service = service
        self._executor = executor
        self._loop = loop
        logger.info(f"Edge session {getattr(session, 'session_id', None)} started on {service.address()}")

    @property
    def session(self) -> WebDriver:
        return self._session

    @property
    def service(self) -> DriverService:
        return self._service

    @property
    def executor(self) -> RemoteConnection:
        return self._executor

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        """Event loop this driver was created on, None if created synchronously."""
        return self._loop

    def get_session(self) -> WebDriver:
        return self._session

    def quit(self) -> None:
        """
        Close the browser session, then kill the driver service.

        The service is killed even if closing the session fails; in that case
        the session error is re-raised and a kill error is only logged.
        """
        try:
            self._session.quit()
        except Exception:
            try:
                self._service.kill()
            except Exception as kill_exc:
                logger.warning(f"Failed to kill driver service after session quit error: {kill_exc}")
            raise
        self._service.kill()

    def set_file_detector(self, detector: Any = None) -> None:
        """No-op; file detectors are not supported by this implementation."""

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not found on the Driver itself
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._session, name)

    def __enter__(self) -> "Driver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.quit()
            return
        # Let the error from the with-block propagate
        try:
            self.quit()
        except Exception as quit_exc:
            logger.warning(f"Failed to quit Edge session after {exc_type.__name__}: {quit_exc}")

    def __repr__(self) -> str:
        return f"Driver(session_id={getattr(self._session, 'session_id', None)!r}, service={self._service!r})"


__all__ = [
    "Driver",
    "DriverConfig",
]
