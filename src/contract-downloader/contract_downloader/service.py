import logging
from typing import Optional, Tuple

from .archive import ZipArchiveWriter
from .config import Config
from .errors import InvalidAddress
from .etherscan_client import EtherscanClient
from .models import ContractRecord, ContractTree, DownloadResult
from .normalizer import classify_and_normalize
from .resolver import ContractResolver

ADDRESS_MARKER = "0x"

logger = logging.getLogger(__name__)


def validate_address(address: Optional[str]) -> str:
    candidate = (address or "").strip()
    if not candidate:
        raise InvalidAddress("Address is required.")
    if ADDRESS_MARKER not in candidate:
        raise InvalidAddress(f"invalid ethereum address: {candidate}")
    return candidate


class ContractService:
    """Combine configuration, client, resolver and archive writer."""

    def __init__(
        self,
        config: Config,
        client: Optional[EtherscanClient] = None,
        writer: Optional[ZipArchiveWriter] = None,
    ) -> None:
        self.config = config
        self.client = client or EtherscanClient(
            base_url=config.base_url,
            chain_id=config.chain_id,
            timeout=config.request_timeout,
        )
        self.resolver = ContractResolver(
            self.client.get_contract_source,
            max_proxy_hops=config.max_proxy_hops,
        )
        self.writer = writer or ZipArchiveWriter(config.output_dir)

    def fetch_sources(self, address: str) -> Tuple[ContractRecord, ContractTree]:
        record, _, tree = self._resolve_and_normalize(validate_address(address))
        return record, tree

    def download(self, address: str) -> DownloadResult:
        requested = validate_address(address)
        record, encoding, tree = self._resolve_and_normalize(requested)
        # Archive is named after the address the user asked for, even behind a proxy.
        archive_path = self.writer.write(record.contract_name, requested, tree)
        logger.info("Success to download contractname=%s address=%s", record.contract_name, requested)
        return DownloadResult(
            requested_address=requested,
            record=record,
            encoding=encoding,
            tree=tree,
            archive_path=archive_path,
        )

    def _resolve_and_normalize(self, address: str):
        logger.info("ContractAddress is %s", address)
        record = self.resolver.resolve(address, self.config.api_key)
        logger.info("contract name is: %s", record.contract_name)
        encoding, tree = classify_and_normalize(record.source_code, record.contract_name)
        logger.debug("source encoding %s, %d file(s)", encoding.value, len(tree))
        return record, encoding, tree
