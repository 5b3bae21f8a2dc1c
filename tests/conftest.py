"""
Pytest fixtures for contract downloader tests. Etherscan is never contacted:
responses are canned dicts served by a fake fetch callable.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

PROXY = "0x1111111111111111111111111111111111111111"
IMPL = "0x2222222222222222222222222222222222222222"


def make_entry(
    name: str = "Token",
    source: str = "contract Token {}",
    proxy: str = "0",
    implementation: str = "",
    abi: str = "[]",
) -> Dict[str, Any]:
    return {
        "SourceCode": source,
        "ABI": abi,
        "ContractName": name,
        "CompilerVersion": "v0.8.19+commit.7dd6d404",
        "OptimizationUsed": "1",
        "Runs": "200",
        "ConstructorArguments": "",
        "EVMVersion": "Default",
        "Library": "",
        "LicenseType": "MIT",
        "Proxy": proxy,
        "Implementation": implementation,
        "SwarmSource": "",
    }


def ok_payload(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {"status": "1", "message": "OK", "result": [entry]}


class FakeFetch:
    """Serve payloads by lower-cased address and record every call."""

    def __init__(self, payloads: Dict[str, Dict[str, Any]]) -> None:
        self.payloads = {k.lower(): v for k, v in payloads.items()}
        self.calls: List[tuple] = []

    def __call__(self, address: str, api_key: str) -> Dict[str, Any]:
        self.calls.append((address, api_key))
        return self.payloads[address.lower()]


@pytest.fixture
def fake_fetch():
    def build(payloads: Optional[Dict[str, Dict[str, Any]]] = None) -> FakeFetch:
        return FakeFetch(payloads or {})

    return build


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "ETHERSCAN_API_KEY",
        "ETHERSCAN_APIKEY",
        "ETHERSCAN_BASE_URL",
        "OUTPUT_DIR",
        "REQUEST_TIMEOUT",
        "MAX_PROXY_HOPS",
        "LOG_LEVEL",
    ):
        # setenv first so values written later by load_dotenv are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
