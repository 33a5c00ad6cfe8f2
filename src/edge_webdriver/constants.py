"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

# ============================================================================
# Driver Executable
# ============================================================================

EDGEDRIVER_EXE = "MicrosoftWebDriver.exe"
"""File name searched for on the PATH when no executable is supplied."""

EDGEDRIVER_DOWNLOAD_URL = "https://www.microsoft.com/en-us/download/details.aspx?id=48212"
"""Where to get the MicrosoftEdgeDriver server."""


# ============================================================================
# Service Startup Configuration
# ============================================================================

LOOPBACK_HOST = "127.0.0.1"
"""Host used for services bound to the loopback interface."""

SERVICE_START_TIMEOUT_SECS = 30.0
"""Default wait for a freshly spawned server to answer /status (EDGEDRIVER_START_TIMEOUT overrides)."""

SERVICE_POLL_INTERVAL_SECS = 0.05
"""Delay between readiness probes while a server is starting."""

SERVICE_KILL_TIMEOUT_SECS = 5.0
"""Grace period after SIGTERM before the driver process tree is force-killed."""


__all__ = [
    "EDGEDRIVER_EXE",
    "EDGEDRIVER_DOWNLOAD_URL",
    "LOOPBACK_HOST",
    "SERVICE_START_TIMEOUT_SECS",
    "SERVICE_POLL_INTERVAL_SECS",
    "SERVICE_KILL_TIMEOUT_SECS",
]
