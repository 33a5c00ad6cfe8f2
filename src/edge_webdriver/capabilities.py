"""Generic capabilities map and the capability keys this package reads or writes."""

from enum import Enum
from typing import Any, Mapping, Optional

from selenium.webdriver.common.desired_capabilities import DesiredCapabilities


class Capability:
    """Well-known capability names."""

    BROWSER_NAME = "browserName"
    PROXY = "proxy"
    PAGE_LOAD_STRATEGY = "pageLoadStrategy"


class OptionKey(Enum):
    """Edge options recognized by :class:`edge_webdriver.options.Options`."""

    PAGE_LOAD_STRATEGY = Capability.PAGE_LOAD_STRATEGY


class Capabilities(dict):
    """
    Key/value negotiation map sent when a new session is requested.

    A plain ``dict`` with the accessors the rest of the package uses. Setting a
    key to ``None`` removes it, so a map never carries null capabilities.
    """

    @classmethod
    def edge(cls) -> "Capabilities":
        """Default capabilities for Microsoft Edge."""
        return cls(DesiredCapabilities.EDGE.copy())

    def has(self, key: str) -> bool:
        return key in self

    def set(self, key: str, value: Any) -> "Capabilities":
        if value is None:
            self.pop(key, None)
        else:
            self[key] = value
        return self

    def merge(self, other: Optional[Mapping[str, Any]]) -> "Capabilities":
        """Copy every entry of ``other`` onto this map."""
        for key, value in (other or {}).items():
            self.set(key, value)
        return self


__all__ = [
    "Capability",
    "OptionKey",
    "Capabilities",
]
