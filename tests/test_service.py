"""
End-to-end tests for ContractService with a mocked Etherscan client.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from conftest import IMPL, PROXY, make_entry, ok_payload
from contract_downloader.archive import read_archive
from contract_downloader.config import Config
from contract_downloader.errors import InvalidAddress, NotVerified
from contract_downloader.models import SourceEncoding
from contract_downloader.service import ContractService, validate_address


def _service(tmp_path, fetch) -> ContractService:
    client = MagicMock()
    client.get_contract_source.side_effect = fetch
    config = Config(api_key="key", output_dir=str(tmp_path))
    return ContractService(config, client=client)


def test_validate_address():
    assert validate_address("  0xabc  ") == "0xabc"
    with pytest.raises(InvalidAddress):
        validate_address("")
    with pytest.raises(InvalidAddress):
        validate_address(None)
    with pytest.raises(InvalidAddress):
        validate_address("vitalik.eth")


def test_download_single_file(tmp_path, fake_fetch):
    fetch = fake_fetch({PROXY: ok_payload(make_entry(name="Foo", source="contract Foo {}"))})
    result = _service(tmp_path, fetch).download(PROXY)

    assert result.encoding == SourceEncoding.SINGLE_FILE
    assert result.archive_path == tmp_path / f"Foo_{PROXY}.zip"
    assert read_archive(result.archive_path) == {"Foo/Contract.sol": "contract Foo {}"}
    assert fetch.calls == [(PROXY, "key")]


def test_download_through_proxy_uses_implementation_source(tmp_path, fake_fetch):
    standard_json = '{{"language":"Solidity","sources":{"src/Impl.sol":{"content":"contract Impl {}"}},"settings":{}}}'
    fetch = fake_fetch(
        {
            PROXY: ok_payload(make_entry(name="Proxy", proxy="1", implementation=IMPL)),
            IMPL: ok_payload(make_entry(name="Impl", source=standard_json)),
        }
    )
    result = _service(tmp_path, fetch).download(PROXY)

    assert result.requested_address == PROXY
    assert result.record.address == IMPL
    assert result.encoding == SourceEncoding.STANDARD_JSON_INPUT
    assert result.archive_path.name == f"Impl_{PROXY}.zip"
    assert read_archive(result.archive_path) == {"src/Impl.sol": "contract Impl {}"}


def test_not_verified_writes_no_archive(tmp_path, fake_fetch):
    fetch = fake_fetch({PROXY: ok_payload(make_entry(abi="Contract source code not verified"))})
    with pytest.raises(NotVerified):
        _service(tmp_path, fetch).download(PROXY)
    assert list(tmp_path.iterdir()) == []


def test_fetch_sources_returns_tree(tmp_path, fake_fetch):
    fetch = fake_fetch({PROXY: ok_payload(make_entry(source='{"A.sol":{"content":"a"}}'))})
    record, tree = _service(tmp_path, fetch).fetch_sources(PROXY)

    assert record.contract_name == "Token"
    assert tree == {"A.sol": {"content": "a"}}
    assert list(tmp_path.iterdir()) == []


def test_invalid_address_never_fetches(tmp_path, fake_fetch):
    fetch = fake_fetch()
    with pytest.raises(InvalidAddress):
        _service(tmp_path, fetch).download("1111")
    assert fetch.calls == []
