"""
Proxy-aware lookup of verified contract records.

Etherscan marks proxy contracts with ``Proxy == "1"`` and names the
implementation address. The resolver keeps querying until it reaches a record
that is not a proxy, or a proxy that points at itself.
"""

import logging
from typing import Any, Callable, Dict, List

from .config import DEFAULT_MAX_PROXY_HOPS
from .errors import FetchFailed, NotVerified, ProxyLoopLimitExceeded, UnexpectedResultShape
from .models import NOT_VERIFIED_ABI, ContractRecord

SUCCESS_MESSAGE = "OK"

logger = logging.getLogger(__name__)

FetchSource = Callable[[str, str], Dict[str, Any]]


class ContractResolver:
    def __init__(self, fetch: FetchSource, max_proxy_hops: int = DEFAULT_MAX_PROXY_HOPS) -> None:
        self.fetch = fetch
        self.max_proxy_hops = max_proxy_hops

    def resolve(self, address: str, api_key: str) -> ContractRecord:
        current = address
        visited: List[str] = []

        while True:
            visited.append(current.lower())
            record = self.fetch_record(current, api_key)
            if not record.points_elsewhere:
                return record

            redirects = len(visited)
            target = record.implementation
            if target.lower() in visited:
                raise ProxyLoopLimitExceeded(
                    f"Proxy cycle detected: {' -> '.join(visited + [target.lower()])}",
                    visited,
                )
            if redirects > self.max_proxy_hops:
                raise ProxyLoopLimitExceeded(
                    f"Proxy chain from {address} exceeds {self.max_proxy_hops} hops.",
                    visited,
                )

            logger.info("get proxy address (%s). refetching implementation address: %s", current, target)
            current = target

    def fetch_record(self, address: str, api_key: str) -> ContractRecord:
        """Fetch and validate a single getsourcecode response, no proxy handling."""
        payload = self.fetch(address, api_key)

        message = payload.get("message", "")
        if message != SUCCESS_MESSAGE:
            result = payload.get("result")
            detail = f" ({result})" if isinstance(result, str) and result else ""
            raise FetchFailed(f"failed to fetch {message}{detail}", upstream_message=message)

        result = payload.get("result")
        if not isinstance(result, list) or len(result) != 1:
            size = len(result) if isinstance(result, list) else type(result).__name__
            raise UnexpectedResultShape(f"unexpected result: expected exactly one entry, got {size}")

        entry = result[0]
        if not isinstance(entry, dict):
            raise UnexpectedResultShape("unexpected result: entry is not an object")

        if entry.get("ABI") == NOT_VERIFIED_ABI:
            raise NotVerified(address)

        return ContractRecord.from_result(address, entry)
