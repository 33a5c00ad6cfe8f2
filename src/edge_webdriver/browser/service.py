"""Driver server lifecycle: spawn, wait for readiness, kill."""

import asyncio
import threading
import time
import subprocess
from typing import Callable, List, Optional, Sequence, Union

from ..config.environment import get_start_timeout
from ..constants import SERVICE_POLL_INTERVAL_SECS
from .process import (
    StdioConfig,
    get_address,
    get_loopback_address,
    is_server_ready,
    spawn,
    terminate_process_tree,
)

import logging
logger = logging.getLogger(__name__)

ServiceArgs = Union[Sequence[str], Callable[[int], Sequence[str]]]


class DriverService:
    """
    Manages a WebDriver server running in a child process.

    The server is not started until :meth:`start` is called. ``args`` may be a
    list or a callable that receives the port and returns the list, so port
    dependent flags can be computed once the port is known.

    Thread Safety:
        start() and kill() hold an instance lock; concurrent callers of
        start() share a single server process.
    """

    def __init__(
        self,
        executable: str,
        *,
        port: int,
        args: ServiceArgs = (),
        loopback: bool = False,
        hostname: Optional[str] = None,
        path: Optional[str] = None,
        env: Optional[dict] = None,
        stdio: StdioConfig = "ignore",
    ) -> None:
        self.executable = executable
        self.port = port
        self.loopback = loopback
        self.hostname = hostname
        self.path = path
        self.env = env
        self.stdio = stdio
        self._args = args
        self._process: Optional[subprocess.Popen] = None
        self._url: Optional[str] = None
        # Reentrant: a failed start() kills the half-started process
        self._lock = threading.RLock()

    @property
    def process(self) -> Optional[subprocess.Popen]:
        return self._process

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    def command_line_args(self) -> List[str]:
        args = self._args(self.port) if callable(self._args) else self._args
        return [str(a) for a in args]

    def address(self) -> str:
        """URL the server is (or will be) reachable at."""
        if self.loopback:
            host = get_loopback_address()
        else:
            host = self.hostname or get_address()
        url = f"http://{host}:{self.port}"
        if self.path:
            url += "/" + self.path.strip("/")
        return url

    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self, timeout: Optional[float] = None) -> str:
        """
        Start the server if needed and wait until it answers /status.

        Args:
            timeout: Seconds to wait; EDGEDRIVER_START_TIMEOUT by default

        Returns:
            str: The server URL

        Raises:
            RuntimeError: If the server exits before it becomes ready
            TimeoutError: If the server does not become ready in time
        """
        with self._lock:
            if self.is_running() and self._url:
                return self._url
            self._reap()

            timeout = get_start_timeout() if timeout is None else timeout
            cmd = [self.executable, *self.command_line_args()]
            url = self.address()

            logger.info(f"Starting driver server: {' '.join(cmd)}")
            proc = self._process = spawn(cmd, self.env, self.stdio)
            try:
                self._wait_until_ready(proc, url, timeout)
            except Exception as exc:
                from ..utils.diagnostics import collect_diagnostics
                logger.error(f"Driver server failed to start:\n{collect_diagnostics(self, exc)}")
                self.kill()
                raise

            self._url = url
            logger.info(f"Driver server ready at {url} (pid {proc.pid})")
            return url

    def _reap(self) -> None:
        # Drop a stale handle, collecting its exit status so no zombie is left
        proc = self._process
        if proc is None:
            return
        self._process = None
        self._url = None
        if proc.poll() is None:
            self._terminate(proc)
            return
        code = proc.wait()
        logger.warning(f"Driver server pid {proc.pid} exited with status {code}; restarting")

    async def start_async(
        self,
        timeout: Optional[float] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> str:
        """Run :meth:`start` in the loop's default executor."""
        loop = loop or asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.start, timeout)

    def _wait_until_ready(self, proc: subprocess.Popen, url: str, timeout: float) -> None:
        deadline = time.monotonic() + timeout
        while True:
            code = proc.poll()
            if code is not None:
                raise RuntimeError(f"Server terminated early with status {code}")
            if is_server_ready(url):
                return
            if time.monotonic() >= deadline:
                raise TimeoutError(f"Timed out waiting for the WebDriver server at {url}")
            time.sleep(SERVICE_POLL_INTERVAL_SECS)

    def kill(self) -> None:
        """Stop the server and any process it spawned. No-op if not started."""
        with self._lock:
            proc = self._process
            if proc is None:
                return
            self._process = None
            self._url = None
            self._terminate(proc)

    def _terminate(self, proc: subprocess.Popen) -> None:
        logger.info(f"Stopping driver server (pid {proc.pid})")
        terminate_process_tree(proc.pid)
        try:
            proc.wait(timeout=1)
        except subprocess.TimeoutExpired:
            logger.warning(f"Driver server pid {proc.pid} did not exit after kill")

    stop = kill

    def __repr__(self) -> str:
        state = "running" if self.is_running() else "stopped"
        return f"DriverService({self.executable!r}, port={self.port}, {state})"


__all__ = [
    "DriverService",
    "ServiceArgs",
]
