"""
Network configuration for the DAppChain SDK.
"""
import importlib.resources
import json
import logging
import os
import urllib.parse
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def validate_url(name: str, url: str) -> str:
    """
    Check that an endpoint URL is usable.

    Plain http is only accepted for localhost / 127.0.0.1.

    Raises:
        ValueError: If the URL has no host, isn't http(s), or uses http for a
            remote host
    """
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"{name} must use http:// or https:// (got: {url!r})")
    if not parsed.netloc:
        raise ValueError(f"{name} must include a host (got: {url!r})")
    is_local = parsed.hostname in ("localhost", "127.0.0.1")
    if parsed.scheme != "https" and not is_local:
        raise ValueError(f"{name} must use https:// for security (got: {parsed.scheme}://)")
    return url


class NetworkConfig:
    """Lookup of DAppChain endpoints bundled with the SDK."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions from the bundled networks.json.

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is None:
            text = importlib.resources.files("dappchain_sdk").joinpath("networks.json").read_text(
                encoding="utf-8"
            )
            cls._networks_cache = json.loads(text)
            logger.debug(f"Loaded {len(cls._networks_cache)} network definitions")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration of a network.

        Raises:
            ValueError: If the network isn't defined
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @staticmethod
    def _env_name(network: str, suffix: str) -> str:
        return f"{network.upper().replace('-', '_')}_{suffix}"

    @classmethod
    def _get_url(cls, network: str, key: str, suffix: str, override: Optional[str]) -> str:
        if override:
            return override
        env_url = os.environ.get(cls._env_name(network, suffix))
        if env_url:
            return env_url
        return cls.get_network(network)[key]

    @classmethod
    def get_write_url(cls, network: str, override: Optional[str] = None) -> str:
        """Write (broadcast) endpoint: override, then <NETWORK>_WRITE_URL, then file"""
        return cls._get_url(network, "writeUrl", "WRITE_URL", override)

    @classmethod
    def get_read_url(cls, network: str, override: Optional[str] = None) -> str:
        """Read (query) endpoint: override, then <NETWORK>_READ_URL, then file"""
        return cls._get_url(network, "readUrl", "READ_URL", override)

    @classmethod
    def get_chain_id(cls, network: str) -> str:
        return cls.get_network(network)["chainId"]
