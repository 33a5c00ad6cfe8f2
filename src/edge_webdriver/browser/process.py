"""Process, path and port management for driver servers."""

import os
import shutil
import socket
import subprocess
import urllib.request
from typing import IO, Any, Optional, Sequence, Tuple, Union

import psutil

from ..constants import LOOPBACK_HOST, SERVICE_KILL_TIMEOUT_SECS

import logging
logger = logging.getLogger(__name__)

StdioSpec = Union[str, int, IO[Any], None]
StdioConfig = Union[StdioSpec, Sequence[StdioSpec]]

# Readiness probes go straight to the driver, never through an HTTP proxy.
_DIRECT_OPENER = urllib.request.build_opener(urllib.request.ProxyHandler({}))

_STDIO_ALIASES = {
    "ignore": subprocess.DEVNULL,
    "inherit": None,
    "pipe": subprocess.PIPE,
}


def find_in_path(name: str, check_cwd: bool = False) -> Optional[str]:
    """
    Locate an executable by name.

    Args:
        name: File name of the executable
        check_cwd: Look in the current working directory before the PATH

    Returns:
        Optional[str]: Absolute path, or None if it cannot be found
    """
    if check_cwd:
        candidate = os.path.join(os.getcwd(), name)
        if os.path.isfile(candidate):
            return candidate
    return shutil.which(name)


def _is_port_open(host: str, port: int, timeout: float = 0.25) -> bool:
    """Check if a port is open."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def get_free_port(host: str = LOOPBACK_HOST) -> int:
    """Get a free port by binding to port 0."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


def get_loopback_address() -> str:
    return LOOPBACK_HOST


def get_address() -> str:
    """Best effort IPv4 address of this machine; the loopback address if none resolves."""
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError:
        return get_loopback_address()


def is_server_ready(url: str, timeout: float = 1.0) -> bool:
    """Check if a WebDriver server answers GET <url>/status."""
    try:
        with _DIRECT_OPENER.open(f"{url.rstrip('/')}/status", timeout=timeout) as resp:
            return resp.status == 200
    except Exception:
        return False


def _stdio_target(spec: StdioSpec):
    if isinstance(spec, str):
        try:
            return _STDIO_ALIASES[spec]
        except KeyError:
            raise ValueError(f"Unknown stdio setting {spec!r}; expected one of {sorted(_STDIO_ALIASES)}") from None
    return spec


def resolve_stdio(config: StdioConfig) -> Tuple[Any, Any, Any]:
    """
    Map a stdio configuration onto Popen's (stdin, stdout, stderr).

    ``config`` is "ignore", "inherit", "pipe", a file object / descriptor used
    for all three streams, or a sequence of three such values.
    """
    if isinstance(config, (list, tuple)):
        if len(config) != 3:
            raise ValueError(f"stdio sequence must have 3 entries (stdin, stdout, stderr), got {len(config)}")
        return tuple(_stdio_target(item) for item in config)

    target = _stdio_target(config)
    if target is subprocess.PIPE or target is subprocess.DEVNULL or target is None:
        return target, target, target
    # A writable file only makes sense for the output streams.
    return subprocess.DEVNULL, target, target


def spawn(cmd: Sequence[str], env: Optional[dict], stdio: StdioConfig) -> subprocess.Popen:
    """Launch a server process without a console window."""
    stdin, stdout, stderr = resolve_stdio(stdio)
    kwargs = {}
    if os.name == "nt":
        kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW
    return subprocess.Popen(
        list(cmd),
        env=env,
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
        **kwargs,
    )


def terminate_process_tree(pid: int, timeout: float = SERVICE_KILL_TIMEOUT_SECS) -> None:
    """
    Terminate a process and all of its children.

    Processes still alive after ``timeout`` seconds are killed.
    """
    try:
        parent = psutil.Process(pid)
    except psutil.NoSuchProcess:
        return

    try:
        procs = parent.children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        procs = []
    procs.append(parent)

    for p in procs:
        try:
            p.terminate()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue

    _, alive = psutil.wait_procs(procs, timeout=timeout)
    for p in alive:
        logger.debug(f"Process {p.pid} ignored SIGTERM; killing")
        try:
            p.kill()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    if alive:
        psutil.wait_procs(alive, timeout=timeout)


__all__ = [
    "find_in_path",
    "_is_port_open",
    "get_free_port",
    "get_loopback_address",
    "get_address",
    "is_server_ready",
    "resolve_stdio",
    "spawn",
    "terminate_process_tree",
    "StdioConfig",
]
