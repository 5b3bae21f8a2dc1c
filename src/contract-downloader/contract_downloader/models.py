from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict

NOT_VERIFIED_ABI = "Contract source code not verified"
SOURCE_KEY = "content"

# file path -> field mapping, every field mapping holds SOURCE_KEY
ContractTree = Dict[str, Dict[str, Any]]


class SourceEncoding(Enum):
    MULTI_FILE = "multi_file"
    STANDARD_JSON_INPUT = "standard_json_input"
    SINGLE_FILE = "single_file"


@dataclass(frozen=True)
class ContractRecord:
    """One verified-source entry from Etherscan getsourcecode."""

    address: str
    contract_name: str
    source_code: str
    abi: str
    is_proxy: bool
    implementation: str
    compiler_version: str = ""
    optimization_used: str = ""
    runs: str = ""
    constructor_arguments: str = ""
    evm_version: str = ""
    library: str = ""
    license_type: str = ""
    swarm_source: str = ""

    @property
    def abi_available(self) -> bool:
        return self.abi != NOT_VERIFIED_ABI

    @property
    def points_elsewhere(self) -> bool:
        """True when this is a proxy whose implementation is another address."""
        if not self.is_proxy or not self.implementation:
            return False
        return self.implementation.lower() != self.address.lower()

    @classmethod
    def from_result(cls, address: str, entry: Dict[str, Any]) -> "ContractRecord":
        def text(key: str) -> str:
            value = entry.get(key)
            return "" if value is None else str(value)

        return cls(
            address=address,
            contract_name=text("ContractName"),
            source_code=text("SourceCode"),
            abi=text("ABI"),
            is_proxy=text("Proxy").strip() == "1",
            implementation=text("Implementation").strip(),
            compiler_version=text("CompilerVersion"),
            optimization_used=text("OptimizationUsed"),
            runs=text("Runs"),
            constructor_arguments=text("ConstructorArguments"),
            evm_version=text("EVMVersion"),
            library=text("Library"),
            license_type=text("LicenseType"),
            swarm_source=text("SwarmSource"),
        )


@dataclass(frozen=True)
class DownloadResult:
    requested_address: str
    record: ContractRecord
    encoding: SourceEncoding
    tree: ContractTree
    archive_path: Path
