import argparse
import logging
import sys
from typing import Optional

from .config import configure_logging, load_config
from .errors import ContractDownloaderError
from .service import ContractService, validate_address

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Download verified contract source from Etherscan into a zip archive.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--address",
        required=False,
        help="Contract address (0x-prefixed). Prompted for when omitted.",
    )
    parser.add_argument(
        "--output-dir",
        required=False,
        help="Directory for the archive. Defaults to OUTPUT_DIR env or ./output.",
    )
    parser.add_argument(
        "--log-level",
        required=False,
        help="Logging level. Defaults to LOG_LEVEL env or INFO.",
    )
    return parser


def _prompt_address() -> str:
    logger.info("↓ input smart contract address ↓")
    try:
        return input().strip()
    except EOFError:
        return ""


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or "INFO")

    logger.info("Running SmartContract Downloader. Only Ethereum Main-net.")

    try:
        address = validate_address(args.address or _prompt_address())

        config = load_config()
        if args.log_level is None:
            logging.getLogger().setLevel(config.log_level)
        if args.output_dir:
            config.output_dir = args.output_dir

        service = ContractService(config)
        result = service.download(address)
        print(result.archive_path)
    except ContractDownloaderError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        sys.exit(1)
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
