import logging
from typing import Any, Dict

import requests

from .config import MAINNET_CHAIN_ID
from .errors import FetchFailed

logger = logging.getLogger(__name__)


class EtherscanClient:
    """Thin wrapper around the Etherscan getsourcecode endpoint.

    One GET per call, no retries. Every transport problem surfaces as FetchFailed.
    """

    def __init__(self, base_url: str, chain_id: str = MAINNET_CHAIN_ID, timeout: int = 10) -> None:
        self.base_url = base_url.rstrip("/")
        self.chain_id = chain_id
        self.timeout = timeout
        self.session = requests.Session()

    def get_contract_source(self, address: str, api_key: str) -> Dict[str, Any]:
        params = {
            "module": "contract",
            "action": "getsourcecode",
            "address": address,
            "chainid": self.chain_id,
            "apikey": api_key,
        }
        return self._request(params)

    def _request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("GET %s address=%s", self.base_url, params.get("address"))
        try:
            response = self.session.get(
                self.base_url,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.Timeout as exc:
            raise FetchFailed(f"Request to Etherscan timed out after {self.timeout}s.") from exc
        except requests.RequestException as exc:
            raise FetchFailed(f"Request to Etherscan failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchFailed("Failed to parse response from Etherscan.") from exc

        if not isinstance(payload, dict):
            raise FetchFailed("Unexpected response from Etherscan.")
        return payload
