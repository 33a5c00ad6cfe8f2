"""Builds DriverService instances for the MicrosoftEdgeDriver server."""

import os
from typing import List, Optional

from ..config.environment import get_executable_path
from ..constants import EDGEDRIVER_DOWNLOAD_URL, EDGEDRIVER_EXE
from .process import StdioConfig, find_in_path, get_free_port
from .service import DriverService

import logging
logger = logging.getLogger(__name__)


class ServiceBuilder:
    """
    Creates :class:`DriverService` instances that manage a MicrosoftEdgeDriver
    server in a child process.

    Usage:
        service = ServiceBuilder().using_port(55555).build()
        driver = Driver(Options(), service)

    Args:
        executable: Path to the server executable. If omitted,
            EDGEDRIVER_EXECUTABLE_PATH is used, then the current directory and
            the PATH are searched for MicrosoftWebDriver.exe.

    Raises:
        FileNotFoundError: If the executable cannot be found or does not exist
    """

    def __init__(self, executable: Optional[str] = None) -> None:
        exe = (
            executable
            or get_executable_path()
            or find_in_path(EDGEDRIVER_EXE, check_cwd=True)
        )
        if not exe:
            raise FileNotFoundError(
                f"The {EDGEDRIVER_EXE} could not be found on the current PATH. "
                "Please download the latest version of the MicrosoftEdgeDriver from "
                f"{EDGEDRIVER_DOWNLOAD_URL} and ensure it can be found on your PATH."
            )
        if not os.path.exists(exe):
            raise FileNotFoundError(f"File does not exist: {exe}")

        self._exe: str = exe
        self._args: List[str] = []
        self._port: int = 0
        self._path: Optional[str] = None
        self._env: Optional[dict] = None
        self._stdio: StdioConfig = "ignore"

    @property
    def executable(self) -> str:
        return self._exe

    def set_stdio(self, config: StdioConfig) -> "ServiceBuilder":
        """Stdio for the server: "ignore" (default), "inherit", "pipe", a file, or a 3-tuple."""
        self._stdio = config
        return self

    def using_port(self, port: int) -> "ServiceBuilder":
        """
        Set the port to start the server on, or 0 for any free port.

        Raises:
            ValueError: If the port is negative
        """
        if port < 0:
            raise ValueError(f"port must be >= 0: {port}")
        self._port = port
        return self

    def with_environment(self, env: Optional[dict]) -> "ServiceBuilder":
        """
        Environment to start the server under. It is inherited by every browser
        session the server starts. None means the current process environment.
        """
        self._env = dict(env) if env is not None else None
        return self

    def add_arguments(self, *args: str) -> "ServiceBuilder":
        """Extra command-line arguments for the server."""
        self._args.extend(args)
        return self

    def set_path(self, path: Optional[str]) -> "ServiceBuilder":
        """URL base path the server is addressed under."""
        self._path = path
        return self

    def build(self) -> DriverService:
        """Create a new DriverService from the current configuration. Nothing is started."""
        port = self._port or get_free_port()
        args = list(self._args)
        logger.debug(f"Building Edge driver service for {self._exe} on port {port}")

        return DriverService(
            self._exe,
            loopback=True,
            path=self._path,
            port=port,
            args=lambda p: args + [f"--port={p}"],
            env=self._env,
            stdio=self._stdio,
        )


__all__ = [
    "ServiceBuilder",
]
