"""
MCP server exposing contract source download via Etherscan.
"""

import argparse
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import configure_logging, load_config
from .normalizer import tree_contents
from .service import ContractService

server = FastMCP(
    name="contract-downloader",
    instructions="Download verified contract source code from Etherscan as a normalized file tree.",
)

_service: Optional[ContractService] = None


def _get_service() -> ContractService:
    global _service
    if _service is None:
        cfg = load_config()
        _service = ContractService(cfg)
    return _service


@server.tool(
    name="download_contract",
    title="Download Contract Source Archive",
    description="Resolve proxies, normalize the verified source and write it to a zip archive.",
)
def download_contract(address: str) -> dict:
    svc = _get_service()
    result = svc.download(address)
    return {
        "address": result.requested_address,
        "resolved_address": result.record.address,
        "contract_name": result.record.contract_name,
        "encoding": result.encoding.value,
        "archive_path": str(result.archive_path),
        "files": sorted(result.tree),
    }


@server.tool(
    name="get_contract_sources",
    title="Get Contract Source Files",
    description="Resolve proxies and return the verified source as a mapping of file path to content.",
)
def get_contract_sources(address: str) -> dict:
    svc = _get_service()
    record, tree = svc.fetch_sources(address)
    return {
        "address": address.strip(),
        "resolved_address": record.address,
        "contract_name": record.contract_name,
        "files": tree_contents(tree),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the contract downloader MCP server.")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol for MCP.",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for SSE/HTTP transports.",
    )
    args = parser.parse_args()
    configure_logging()

    # FastMCP uses host/port only for SSE/HTTP transports; stdio ignores them.
    server.settings.host = args.host
    server.settings.port = args.port
    server.run(transport=args.transport)


if __name__ == "__main__":
    main()
