"""MicrosoftEdgeDriver specific session options."""

from typing import Any, Dict, Mapping, MutableMapping, Optional, Union

from selenium.webdriver.common.proxy import Proxy

from .capabilities import Capabilities, Capability, OptionKey

import logging
logger = logging.getLogger(__name__)

ProxyConfig = Union[Proxy, Mapping[str, Any]]


def _set_capability(capabilities: MutableMapping[str, Any], key: str, value: Any) -> None:
    if value is None:
        capabilities.pop(key, None)
    else:
        capabilities[key] = value


class Options:
    """
    Options for each new MicrosoftEdgeDriver session.

    Usage:
        options = Options().set_page_load_strategy("eager")
        driver = Driver(options)
    """

    def __init__(self) -> None:
        self._options: Dict[OptionKey, Any] = {}
        self._proxy: Optional[ProxyConfig] = None

    @classmethod
    def from_capabilities(cls, capabilities: Mapping[str, Any]) -> "Options":
        """
        Extract the Edge options from a capabilities map.

        Only keys listed in OptionKey (and the proxy) are copied; anything else
        in the map is ignored.
        """
        options = cls()
        for key in OptionKey:
            if key.value in capabilities:
                options._options[key] = capabilities[key.value]

        if Capability.PROXY in capabilities:
            options.set_proxy(capabilities[Capability.PROXY])

        return options

    @property
    def page_load_strategy(self) -> Optional[str]:
        return self._options.get(OptionKey.PAGE_LOAD_STRATEGY)

    @property
    def proxy(self) -> Optional[ProxyConfig]:
        return self._proxy

    def set_proxy(self, proxy: Optional[ProxyConfig]) -> "Options":
        """Set the proxy for the new session; a selenium Proxy or its dict form."""
        self._proxy = proxy
        return self

    def set_page_load_strategy(self, strategy) -> "Options":
        """
        Set the page load strategy. Supported values are "normal", "eager" and
        "none"; input is case-insensitive and stored lower-cased. Passing None
        clears a previously set strategy.
        """
        if strategy is None:
            self._options.pop(OptionKey.PAGE_LOAD_STRATEGY, None)
            return self
        value = getattr(strategy, "value", strategy)
        self._options[OptionKey.PAGE_LOAD_STRATEGY] = str(value).lower()
        return self

    def to_capabilities(self, capabilities: Optional[MutableMapping[str, Any]] = None) -> MutableMapping[str, Any]:
        """
        Merge these options into ``capabilities`` (a fresh Edge map by default).

        Keys already present that these options do not touch are preserved.
        """
        if capabilities is None:
            capabilities = Capabilities.edge()

        if self._proxy:
            _set_capability(capabilities, Capability.PROXY, self._proxy)
        for key, value in self._options.items():
            _set_capability(capabilities, key.value, value)

        logger.debug(f"Edge capabilities: {sorted(capabilities)}")
        return capabilities

    def serialize(self) -> Dict[str, Any]:
        """
        Wire representation of the Edge options.

        The proxy is left out; it travels through the generic capabilities.
        """
        return {key.value: value for key, value in self._options.items() if value is not None}

    def __repr__(self) -> str:
        return f"Options({self.serialize()!r}, proxy={self._proxy!r})"


__all__ = [
    "Options",
    "ProxyConfig",
]
