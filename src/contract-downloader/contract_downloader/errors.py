from typing import List, Optional


class ContractDownloaderError(Exception):
    """Base class for failures while downloading contract sources."""


class InvalidAddress(ContractDownloaderError):
    pass


class FetchFailed(ContractDownloaderError):
    """Transport failure or a non-OK message reported by Etherscan."""

    def __init__(self, message: str, upstream_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.upstream_message = upstream_message


class UnexpectedResultShape(ContractDownloaderError):
    pass


class NotVerified(ContractDownloaderError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Contract source code not verified: {address}")
        self.address = address


class ProxyLoopLimitExceeded(ContractDownloaderError):
    def __init__(self, message: str, chain: List[str]) -> None:
        super().__init__(message)
        self.chain = list(chain)


class MalformedStandardJsonInput(ContractDownloaderError):
    """Source looked like standard JSON input but could not be decoded."""

    def __init__(self, reason: str, text: str) -> None:
        super().__init__(f"{reason} - {text}")
        self.reason = reason
        self.text = text


class ArchiveWriteFailed(ContractDownloaderError):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path
